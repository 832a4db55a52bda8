"""Generate Terraform configuration from an Ably account's resources."""

__version__ = "0.1.0"
