"""ThemeKit: component style values with variants, extension and compiled themes."""

from themekit.core import (
    DEFAULT_VARIANT,
    CompiledTheme,
    ComponentBuilder,
    ComponentSelector,
    LifecycleState,
    PropertySelector,
    Theme,
    ThemeMode,
    create_selector,
    value_selector,
)
from themekit.errors import (
    AlreadyCompiledError,
    ThemeKitError,
    ThemeValidationError,
    UnknownComponentError,
    UnknownPropertyError,
)

__version__ = "0.3.0"

__all__ = [
    "DEFAULT_VARIANT",
    "AlreadyCompiledError",
    "CompiledTheme",
    "ComponentBuilder",
    "ComponentSelector",
    "LifecycleState",
    "PropertySelector",
    "Theme",
    "ThemeKitError",
    "ThemeMode",
    "ThemeValidationError",
    "UnknownComponentError",
    "UnknownPropertyError",
    "create_selector",
    "value_selector",
]
