"""
Configuration Management for the Ably Terraform generator

This module provides centralized configuration with environment variable
defaults (a ``.env`` file in the working directory is loaded first) and
validation.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv

from .emitters.terraform.context import RULE_BLOCK_STYLES
from .exceptions import ConfigurationError
from .logging_config import configure_structlog

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_CONTROL_API_URL = "https://control.ably.net/v1"


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


@dataclass(frozen=True)
class ControlApiConfig:
    """Connection settings for the Ably Control API.

    Built once at startup and handed to the client; nothing else holds the
    token.
    """

    token: str = field(
        default_factory=lambda: os.getenv("ABLY_ACCOUNT_TOKEN", ""), repr=False
    )
    base_url: str = field(
        default_factory=lambda: os.getenv(
            "ABLY_CONTROL_API_URL", DEFAULT_CONTROL_API_URL
        )
    )
    timeout: float = field(
        default_factory=lambda: float(os.getenv("ABLY_CONTROL_API_TIMEOUT", "30"))
    )

    def __post_init__(self) -> None:
        if self.timeout <= 0:
            raise ValueError("Control API timeout must be positive")
        if not self.base_url.startswith(("https://", "http://")):
            raise ValueError("Control API URL must be an http(s) URL")

    def is_configured(self) -> bool:
        return bool(self.token)

    def validate(self) -> None:
        """Validate the credentials before any network call is made."""
        if not self.is_configured():
            raise ConfigurationError(
                "ABLY_ACCOUNT_TOKEN environment variable is not set",
                setting="ABLY_ACCOUNT_TOKEN",
                recovery_suggestion=(
                    "Create a Control API access token in the Ably dashboard "
                    "and export it as ABLY_ACCOUNT_TOKEN"
                ),
            )

    def get_safe_token(self) -> str:
        """Get token for logging (masked for security)."""
        if not self.token:
            return "Not configured"
        return f"{self.token[:4]}...{self.token[-4:]}" if len(self.token) > 12 else "****"


@dataclass
class OutputConfig:
    """Where and how generated files are written."""

    directory: str = field(
        default_factory=lambda: os.getenv("ABLY_TF_OUTPUT_DIR", "output")
    )
    extension: str = ".tf"
    dry_run: bool = False

    def __post_init__(self) -> None:
        if not self.directory:
            raise ValueError("Output directory is required")
        if not self.extension.startswith("."):
            self.extension = f".{self.extension}"


@dataclass
class GenerationConfig:
    """Configuration for Terraform generation behavior."""

    rule_block_style: str = field(
        default_factory=lambda: os.getenv("ABLY_TF_RULE_BLOCK_STYLE", "generic")
    )
    isolate_app_failures: bool = field(
        default_factory=lambda: _env_flag("ABLY_TF_ISOLATE_APP_FAILURES", "true")
    )
    strict_mode: bool = field(default_factory=lambda: _env_flag("ABLY_TF_STRICT", "false"))
    app_filter: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.rule_block_style = self.rule_block_style.lower()
        if self.rule_block_style not in RULE_BLOCK_STYLES:
            raise ValueError(f"Rule block style must be one of: {list(RULE_BLOCK_STYLES)}")


@dataclass
class LoggingConfig:
    """Configuration for logging behavior."""

    level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    format: str = field(
        default_factory=lambda: os.getenv(
            "LOG_FORMAT", "%(log_color)s%(levelname)s:%(name)s:%(message)s"
        )
    )
    file_output: Optional[str] = field(default_factory=lambda: os.getenv("LOG_FILE"))
    json_logs: bool = field(default_factory=lambda: _env_flag("ABLY_TF_JSON_LOGS", "false"))

    def __post_init__(self) -> None:
        """Validate logging configuration."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if self.level.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        self.level = self.level.upper()

    def get_log_level(self) -> int:
        """Convert string log level to logging constant."""
        return int(getattr(logging, self.level))


@dataclass
class AblyTerraformConfig:
    """Main configuration class that aggregates all configuration sections."""

    control_api: ControlApiConfig = field(default_factory=ControlApiConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    generation: GenerationConfig = field(default_factory=GenerationConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_environment(
        cls,
        output_dir: Optional[str] = None,
        dry_run: bool = False,
        rule_block_style: Optional[str] = None,
        isolate_app_failures: Optional[bool] = None,
        strict_mode: Optional[bool] = None,
        app_filter: Optional[List[str]] = None,
        log_level: Optional[str] = None,
    ) -> "AblyTerraformConfig":
        """
        Create configuration from environment variables.

        Explicit arguments (from the command line) override the environment.

        Returns:
            AblyTerraformConfig: Configured instance
        """
        config = cls()

        if output_dir is not None:
            config.output = OutputConfig(directory=output_dir, dry_run=dry_run)
        else:
            config.output.dry_run = dry_run
        if rule_block_style is not None:
            config.generation.rule_block_style = rule_block_style
        if isolate_app_failures is not None:
            config.generation.isolate_app_failures = isolate_app_failures
        if strict_mode is not None:
            config.generation.strict_mode = strict_mode
        if app_filter:
            config.generation.app_filter = list(app_filter)
        if log_level is not None:
            config.logging.level = log_level

        return config

    def validate_all(self) -> None:
        """Validate all configuration sections.

        Raises:
            ConfigurationError: If a section is missing or invalid
        """
        try:
            self.control_api.validate()
            self.control_api.__post_init__()
            self.output.__post_init__()
            self.generation.__post_init__()
            self.logging.__post_init__()
        except ValueError as e:
            raise ConfigurationError(str(e), cause=e) from e

        logger.debug("Configuration validation successful")

    def log_configuration_summary(self) -> None:
        """Log a summary of the current configuration (without sensitive data)."""
        logger.info("=" * 60)
        logger.info("ABLY TERRAFORM GENERATOR CONFIGURATION")
        logger.info("=" * 60)
        logger.info(f"Control API: {self.control_api.base_url}")
        logger.info(f"   Token: {self.control_api.get_safe_token()}")
        logger.info(f"   Timeout: {self.control_api.timeout}s")
        logger.info(f"Output Directory: {self.output.directory}")
        logger.info(f"   Dry Run: {self.output.dry_run}")
        logger.info(f"Rule Block Style: {self.generation.rule_block_style}")
        logger.info(f"   Isolate App Failures: {self.generation.isolate_app_failures}")
        logger.info(f"   Strict Mode: {self.generation.strict_mode}")
        if self.generation.app_filter:
            logger.info(f"   App Filter: {', '.join(self.generation.app_filter)}")
        logger.info(f"Logging Level: {self.logging.level}")
        logger.info("=" * 60)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary for serialization."""
        return {
            "control_api": {
                "base_url": self.control_api.base_url,
                "timeout": self.control_api.timeout,
                # Don't include the token in serialization
                "configured": self.control_api.is_configured(),
            },
            "output": {
                "directory": self.output.directory,
                "extension": self.output.extension,
                "dry_run": self.output.dry_run,
            },
            "generation": {
                "rule_block_style": self.generation.rule_block_style,
                "isolate_app_failures": self.generation.isolate_app_failures,
                "strict_mode": self.generation.strict_mode,
                "app_filter": list(self.generation.app_filter),
            },
            "logging": {
                "level": self.logging.level,
                "file_output": self.logging.file_output,
                "json_logs": self.logging.json_logs,
            },
        }


def setup_logging(config: LoggingConfig) -> None:
    """
    Setup logging configuration based on config.
    """
    import colorlog

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(config.get_log_level())

    console_handler = colorlog.StreamHandler()
    console_handler.setFormatter(colorlog.ColoredFormatter(config.format))
    root_logger.addHandler(console_handler)

    if config.file_output:
        file_handler = logging.FileHandler(config.file_output)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(levelname)s:%(name)s:%(message)s")
        )
        root_logger.addHandler(file_handler)

    # HTTP request logs only at DEBUG
    http_level = logging.DEBUG if config.level == "DEBUG" else logging.WARNING
    for name in ("httpx", "httpcore"):
        logging.getLogger(name).setLevel(http_level)

    configure_structlog(json_logs=config.json_logs)

    logger.debug(
        f"Logging configured: level={config.level}, file={config.file_output or 'console'}"
    )


def create_config_from_env(**overrides: Any) -> AblyTerraformConfig:
    """
    Factory function to create and validate configuration from environment.

    Raises:
        ConfigurationError: If configuration is invalid
    """
    try:
        config = AblyTerraformConfig.from_environment(**overrides)
    except ValueError as e:
        # Malformed environment values (e.g. ABLY_CONTROL_API_TIMEOUT=abc)
        raise ConfigurationError(str(e), cause=e) from e
    config.validate_all()
    return config
