"""
Exception hierarchy for dsa-cli.

Every error raised by the character model, the loader and the roll engine
derives from DSAError. Errors carry an ErrorContext and a details mapping so
callers can render them for humans or as structured output, and they log
themselves once on creation.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from .structured_logging.logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class ErrorContext:
    """
    Contextual information for error handling.

    Provides structured context for error reporting and debugging.
    """

    hero: str | None = None
    skill: str | None = None
    command: str | None = None
    source: str | None = None
    timestamp: datetime = field(default_factory=datetime.now)
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert context to dictionary for logging."""
        return {
            "hero": self.hero,
            "skill": self.skill,
            "command": self.command,
            "source": self.source,
            "timestamp": self.timestamp.isoformat(),
            "metadata": self.metadata,
        }


class DSAError(Exception):
    """
    Base exception for all dsa-cli errors.

    Provides structured error handling with context and metadata
    for proper error categorization and debugging.
    """

    log_level = "error"

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        details: dict[str, Any] | None = None,
        user_friendly: str | None = None,
    ):
        """
        Initialize a dsa-cli error.

        Args:
            message: Technical error message
            context: Error context information
            details: Additional error details
            user_friendly: User-friendly error message
        """
        super().__init__(message)
        self.message = message
        self.context = context or ErrorContext()
        self.details = details or {}
        self.user_friendly = user_friendly or message
        self.timestamp = datetime.now()

        self._log_error()

    def _log_error(self) -> None:
        """Log the error with structured context."""
        log_method = getattr(logger, self.log_level, logger.error)
        log_method(
            "dsa-cli error occurred",
            error_type=self.__class__.__name__,
            message=self.message,
            context=self.context.to_dict(),
            details=self.details,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for structured output."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "user_friendly": self.user_friendly,
            "context": self.context.to_dict(),
            "details": self.details,
            "timestamp": self.timestamp.isoformat(),
        }


class ValidationError(DSAError):
    """Data validation errors."""

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        field: str | None = None,  # pylint: disable=redefined-outer-name
        value: Any | None = None,
        **kwargs,
    ):
        self.field = field
        self.value = value
        details = kwargs.pop("details", None) or {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = str(value)
        super().__init__(message, context, details=details, **kwargs)


class UnknownAttributeError(ValidationError):
    """An attribute alias did not map onto any of the fixed attributes."""

    log_level = "debug"

    def __init__(self, token: str, context: ErrorContext | None = None, **kwargs):
        self.token = token
        kwargs.setdefault("user_friendly", f"unknown attribute '{token}'")
        super().__init__(f"Unknown attribute: {token!r}", context, field="attribute", value=token, **kwargs)


class MalformedSkillDefinitionError(ValidationError):
    """A skill did not reference exactly three resolvable attributes."""

    log_level = "debug"

    def __init__(self, skill: str, reason: str, context: ErrorContext | None = None, **kwargs):
        self.skill = skill
        self.reason = reason
        kwargs.setdefault("user_friendly", f"malformed skill '{skill}': {reason}")
        super().__init__(f"Malformed skill definition {skill!r}: {reason}", context, field="skill", value=skill, **kwargs)


class ModifierParseError(ValidationError):
    """A modifier token was not a valid integer."""

    log_level = "info"

    def __init__(self, token: str, context: ErrorContext | None = None, **kwargs):
        self.token = token
        kwargs.setdefault("user_friendly", f"invalid modifier '{token}', expected an integer")
        super().__init__(f"Invalid modifier: {token!r}", context, field="modifier", value=token, **kwargs)


class ResourceNotFoundError(DSAError):
    """Resource not found errors."""

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        resource_type: str | None = None,
        resource_id: str | None = None,
        **kwargs,
    ):
        self.resource_type = resource_type
        self.resource_id = resource_id
        details = kwargs.pop("details", None) or {}
        if resource_type:
            details["resource_type"] = resource_type
        if resource_id:
            details["resource_id"] = resource_id
        super().__init__(message, context, details=details, **kwargs)


class SkillNotFoundError(ResourceNotFoundError):
    """A roll was requested for a skill the hero does not have."""

    log_level = "info"

    def __init__(self, name: str, context: ErrorContext | None = None, **kwargs):
        self.name = name
        kwargs.setdefault("user_friendly", f"unknown skill '{name}'")
        super().__init__(f"Skill not found: {name!r}", context, resource_type="skill", resource_id=name, **kwargs)


class HeroParseError(DSAError):
    """The hero document could not be read or is not a Heldensoftware export."""

    log_level = "info"

    def __init__(self, message: str, context: ErrorContext | None = None, source: str | None = None, **kwargs):
        self.source = source
        details = kwargs.pop("details", None) or {}
        if source:
            details["source"] = source
        super().__init__(message, context, details=details, **kwargs)


class DiceExhaustedError(DSAError):
    """A fixed dice source has no values left."""

    log_level = "info"

    def __init__(self, message: str = "No dice values left", context: ErrorContext | None = None, **kwargs):
        super().__init__(message, context, **kwargs)


class ConfigurationError(DSAError):
    """Configuration and setup errors."""

    def __init__(self, message: str, context: ErrorContext | None = None, config_key: str | None = None, **kwargs):
        self.config_key = config_key
        details = kwargs.pop("details", None) or {}
        if config_key:
            details["config_key"] = config_key
        super().__init__(message, context, details=details, **kwargs)


def create_error_context(**kwargs) -> ErrorContext:
    """
    Create an error context with the given parameters.

    Args:
        **kwargs: Context parameters

    Returns:
        ErrorContext object
    """
    return ErrorContext(**kwargs)

