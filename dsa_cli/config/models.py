"""
Pydantic-based configuration models for dsa-cli.

Settings are read from environment variables (and a local .env file) using
pydantic-settings. Every section has its own prefix so the variables stay
recognisable, e.g. DSA_LOGGING_LEVEL=DEBUG or DSA_DICE_SEED=42.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from ..structured_logging.logging_config import VALID_FORMATS, VALID_LEVELS

OUTPUT_FORMATS = ("humanreadable", "json")


class LoggingConfig(BaseSettings):
    """Logging configuration."""

    level: str = Field(default="WARNING", description="Log level")
    format: str = Field(default="human", description="Log format")
    disable_logging: bool = Field(default=False, description="Disable all logging")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate log level."""
        v_upper = v.upper()
        if v_upper not in VALID_LEVELS:
            raise ValueError(f"Log level must be one of {list(VALID_LEVELS)}, got '{v}'")
        return v_upper

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        """Validate log format."""
        v_lower = v.lower()
        if v_lower not in VALID_FORMATS:
            raise ValueError(f"Log format must be one of {list(VALID_FORMATS)}, got '{v}'")
        return v_lower

    model_config = {"env_prefix": "DSA_LOGGING_", "case_sensitive": False, "extra": "ignore"}


class DiceConfig(BaseSettings):
    """Dice configuration."""

    seed: int | None = Field(default=None, description="Seed for reproducible dice rolls")

    model_config = {"env_prefix": "DSA_DICE_", "case_sensitive": False, "extra": "ignore"}


class OutputConfig(BaseSettings):
    """Output configuration."""

    format: str = Field(default="humanreadable", description="Default output format")

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        """Validate output format, case-insensitively."""
        v_lower = v.lower()
        if v_lower not in OUTPUT_FORMATS:
            raise ValueError(f"Output format must be one of {list(OUTPUT_FORMATS)}, got '{v}'")
        return v_lower

    model_config = {"env_prefix": "DSA_OUTPUT_", "case_sensitive": False, "extra": "ignore"}


class AppConfig(BaseSettings):
    """
    Composite application configuration.

    Aggregates all other configs. Access via the get_config() function.
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    dice: DiceConfig = Field(default_factory=DiceConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "case_sensitive": False, "extra": "ignore"}
