"""Theme engine: registry, merge, compile and selectors."""

from themekit.core.compiler import CompiledTheme
from themekit.core.constants import DEFAULT_VARIANT, LifecycleState, ThemeMode
from themekit.core.merge import deep_merge, resolve
from themekit.core.registry import ComponentBuilder, ComponentEntry, Registry
from themekit.core.selectors import ComponentSelector, PropertySelector, create_selector, value_selector
from themekit.core.theme import Theme

__all__ = [
    "DEFAULT_VARIANT",
    "CompiledTheme",
    "ComponentBuilder",
    "ComponentEntry",
    "ComponentSelector",
    "LifecycleState",
    "PropertySelector",
    "Registry",
    "Theme",
    "ThemeMode",
    "create_selector",
    "deep_merge",
    "resolve",
    "value_selector",
]
