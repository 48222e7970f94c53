"""
Defines project-specific exception classes.
"""


class PwPushError(Exception):
    """Base class for all custom exceptions in pwpush-cli."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        return f"Error: {self.message}"


class ConfigurationError(PwPushError):
    """Raised when loading or validating configuration fails."""
    pass


class UsageError(PwPushError):
    """Raised when command input cannot be read or makes no sense."""
    pass
