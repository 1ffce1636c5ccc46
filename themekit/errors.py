"""Error codes and error handling utilities for ThemeKit."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any


class ErrorCode(Enum):
    """Standardized error codes for ThemeKit operations."""

    # Registration errors
    ALREADY_COMPILED = auto()
    RESERVED_NAME = auto()

    # Resolution errors
    UNKNOWN_COMPONENT = auto()
    UNKNOWN_PROPERTY = auto()
    FACTORY_INVALID = auto()
    COMPILE_REENTRANT = auto()

    # Configuration errors
    OVERRIDES_INVALID = auto()
    THEME_NOT_FOUND = auto()


ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.ALREADY_COMPILED: "Theme is already compiled and frozen; registrations are closed.",
    ErrorCode.RESERVED_NAME: "This name is reserved by ThemeKit.",
    ErrorCode.UNKNOWN_COMPONENT: "Component has no registered default values.",
    ErrorCode.UNKNOWN_PROPERTY: "Property is not declared by the component's default values.",
    ErrorCode.FACTORY_INVALID: "Value factory did not return a mapping.",
    ErrorCode.COMPILE_REENTRANT: "Theme was compiled again while its first compile was running.",
    ErrorCode.OVERRIDES_INVALID: "Global value overrides are invalid.",
    ErrorCode.THEME_NOT_FOUND: "Theme object could not be imported.",
}

ERROR_SUGGESTIONS: dict[ErrorCode, str] = {
    ErrorCode.ALREADY_COMPILED: "Register components at import time, before the provider mounts.",
    ErrorCode.UNKNOWN_COMPONENT: "Call register() for the component before resolving it.",
    ErrorCode.UNKNOWN_PROPERTY: "Add the property to the component's default factory.",
    ErrorCode.FACTORY_INVALID: "Return a dict from every default and variant factory.",
    ErrorCode.COMPILE_REENTRANT: "Do not read compiled values from inside a value factory.",
    ErrorCode.OVERRIDES_INVALID: "Check the overrides file is a mapping of string keys.",
    ErrorCode.THEME_NOT_FOUND: "Use the form 'package.module:attribute'.",
}


@dataclass
class ThemeKitError(Exception):
    """Base exception for ThemeKit with error code and context."""

    code: ErrorCode
    message: str = ""
    component: str | None = None
    variant: str | None = None
    details: dict[str, Any] = field(default_factory=dict)
    suggestion: str = ""

    def __post_init__(self) -> None:
        if not self.message:
            self.message = ERROR_MESSAGES.get(self.code, "An unexpected error occurred.")
        if not self.suggestion:
            self.suggestion = ERROR_SUGGESTIONS.get(self.code, "")

    def __str__(self) -> str:
        parts = [self.message]
        if self.component is not None:
            parts.append(f"\nComponent: {self.component}")
        if self.variant is not None:
            parts.append(f"\nVariant: {self.variant}")
        if self.details:
            details_str = " | ".join(f"{k}={v}" for k, v in self.details.items())
            parts.append(f"\nDetails: {details_str}")
        return "".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging or CLI display."""
        return {
            "code": self.code.name,
            "message": self.message,
            "component": self.component,
            "variant": self.variant,
            "details": self.details,
            "suggestion": self.suggestion,
        }


class AlreadyCompiledError(ThemeKitError):
    """Raised when a registration targets a theme frozen in production mode."""

    def __init__(self, namespace: str, component: str, variant: str | None = None) -> None:
        super().__init__(
            ErrorCode.ALREADY_COMPILED,
            message=f"Theme {namespace!r} is compiled in production mode; cannot register {component!r}",
            component=component,
            variant=variant,
            details={"namespace": namespace},
        )


class UnknownComponentError(ThemeKitError):
    """Raised when a component (or one of its variants) has nothing to resolve."""

    def __init__(self, component: str, variant: str | None = None, *, reason: str = "") -> None:
        message = reason or f"Component {component!r} has no registered default values"
        super().__init__(
            ErrorCode.UNKNOWN_COMPONENT,
            message=message,
            component=component,
            variant=variant,
        )


class UnknownPropertyError(ThemeKitError):
    """Raised when a selector asks for a key the resolved mapping lacks."""

    def __init__(self, component: str, key: str, variant: str | None = None) -> None:
        super().__init__(
            ErrorCode.UNKNOWN_PROPERTY,
            message=f"Property {key!r} is not defined for component {component!r}",
            component=component,
            variant=variant,
            details={"key": key},
        )


class ThemeValidationError(ValueError):
    """Raised when a global overrides file fails validation."""


def format_error_for_user(error: ThemeKitError | Exception) -> str:
    """Format an error for display with an actionable suggestion."""
    if isinstance(error, ThemeKitError):
        parts = [str(error)]
        if error.suggestion and error.suggestion != error.message:
            parts.append(f"\nHint: {error.suggestion}")
        return "".join(parts)
    if isinstance(error, ThemeValidationError):
        return f"{error}\nHint: {ERROR_SUGGESTIONS[ErrorCode.OVERRIDES_INVALID]}"
    return f"{type(error).__name__}: {error}"
