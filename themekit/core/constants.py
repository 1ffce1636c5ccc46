"""Theme engine constants."""

from __future__ import annotations

import os
from enum import Enum

DEFAULT_VARIANT = "default"
MODE_ENV_VAR = "THEMEKIT_MODE"


class ThemeMode(str, Enum):
    """Compile lifecycle mode of a theme."""

    DEVELOPMENT = "development"
    PRODUCTION = "production"

    @classmethod
    def parse(cls, value: object) -> "ThemeMode":
        if isinstance(value, ThemeMode):
            return value
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered in {"dev", "development"}:
                return cls.DEVELOPMENT
            if lowered in {"prod", "production"}:
                return cls.PRODUCTION
        raise ValueError(f"Unknown theme mode: {value!r}")


class LifecycleState(str, Enum):
    OPEN = "open"
    COMPILING = "compiling"
    COMPILED = "compiled"


def default_mode() -> ThemeMode:
    """Mode for themes created without an explicit one."""
    raw = os.environ.get(MODE_ENV_VAR, "")
    if not raw.strip():
        return ThemeMode.PRODUCTION
    return ThemeMode.parse(raw)
