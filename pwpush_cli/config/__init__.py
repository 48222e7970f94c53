"""Configuration: instance settings, credentials and the optional YAML file."""
