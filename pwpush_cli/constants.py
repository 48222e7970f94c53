"""Shared constants for pwpush-cli."""

TOOL_NAME = "pwpush-cli"
TOOL_VERSION = "0.1.0"

# Instance defaults
DEFAULT_INSTANCE_URL = "pwpush.com"
DEFAULT_PROTOCOL = "https"
PROTOCOLS = ("http", "https")

# Endpoint paths. The API selects JSON responses by the ".json" suffix.
TEXT_PUSH_PATH = "/p.json"

# Authentication headers
EMAIL_HEADER = "X-User-Email"
TOKEN_HEADER = "X-User-Token"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

# Environment variables
ENV_CONFIG = "PWPUSH_CONFIG"
ENV_URL = "PWPUSH_URL"
ENV_PROTOCOL = "PWPUSH_PROTOCOL"
ENV_EMAIL = "PWPUSH_EMAIL"
ENV_TOKEN = "PWPUSH_TOKEN"

# Logging defaults
DEFAULT_LOG_LEVEL = "warn"

# Exit codes
EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2
EXIT_NOT_SUPPORTED = 3
