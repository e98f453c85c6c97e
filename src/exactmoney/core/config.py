#!/usr/bin/env python3
"""
Configuration Management for exactmoney

Environment-based settings for the command-line tools: default locale,
default rounding mode, extra currency definitions and logging.

The value engine itself never reads configuration; Money, contexts and
registries are always passed explicitly.
"""

import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from .arithmetic import RoundingMode
from .currency import CurrencyRegistry

# Load environment variables from .env file
load_dotenv()


class Environment(Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TEST = "test"
    PRODUCTION = "production"


@dataclass
class Config:
    """
    Main configuration class.

    Loads settings from environment variables with defaults suitable for
    interactive use.
    """

    environment: Environment

    # Formatting and rounding defaults
    locale: str = "en_US"
    default_rounding: RoundingMode = RoundingMode.UNNECESSARY

    # Extra currencies merged over the ISO table
    currency_file: Path | None = None

    # Application settings
    debug: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_environment(cls) -> "Config":
        """Create configuration from environment variables."""
        env = Environment(os.getenv("EXACTMONEY_ENV", "development"))

        currency_file = os.getenv("EXACTMONEY_CURRENCY_FILE")

        return cls(
            environment=env,
            locale=os.getenv("EXACTMONEY_LOCALE", "en_US"),
            default_rounding=RoundingMode.from_name(os.getenv("EXACTMONEY_DEFAULT_ROUNDING", "UNNECESSARY")),
            currency_file=Path(currency_file).expanduser().resolve() if currency_file else None,
            debug=os.getenv("DEBUG", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def validate(self) -> list:
        """Validate configuration and return list of errors."""
        errors = []

        if self.currency_file is not None and not self.currency_file.is_file():
            errors.append(f"currency_file does not exist: {self.currency_file}")

        if not self.locale:
            errors.append("EXACTMONEY_LOCALE must not be empty")

        if self.log_level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            errors.append(f"Unknown LOG_LEVEL: {self.log_level}")

        return errors

    def build_registry(self) -> CurrencyRegistry:
        """ISO registry, extended with the currencies from `currency_file` if set."""
        registry = CurrencyRegistry.iso()
        if self.currency_file is not None:
            registry = registry.merged_with(CurrencyRegistry.from_yaml(self.currency_file))
        return registry

    def setup_logging(self) -> None:
        """Configure logging based on configuration."""
        level = getattr(logging, self.log_level, logging.INFO)

        # Configure format based on environment
        if self.environment == Environment.DEVELOPMENT:
            format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            format_str = "%(asctime)s - %(levelname)s - %(message)s"

        logging.basicConfig(level=level, format=format_str, datefmt="%Y-%m-%d %H:%M:%S")

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a plain dictionary."""
        result: dict[str, Any] = {}
        for field_name, field_value in self.__dict__.items():
            if isinstance(field_value, Path):
                result[field_name] = str(field_value)
            elif isinstance(field_value, Enum):
                result[field_name] = field_value.name if isinstance(field_value, RoundingMode) else field_value.value
            else:
                result[field_name] = field_value
        return result


# Global configuration instance
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        config = Config.from_environment()

        # Validate configuration
        errors = config.validate()
        if errors:
            raise ValueError(f"Configuration validation failed: {'; '.join(errors)}")

        # Setup logging
        config.setup_logging()
        _config = config

    return _config


def reload_config() -> Config:
    """Reload configuration from environment (useful for testing)."""
    global _config
    _config = None
    return get_config()
