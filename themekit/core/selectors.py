"""Lookup functions bound to a component and property key."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Mapping

from themekit.core.constants import DEFAULT_VARIANT
from themekit.core.values import lookup
from themekit.errors import UnknownComponentError, UnknownPropertyError

if TYPE_CHECKING:
    from themekit.core.compiler import CompiledTheme


class PropertySelector:
    """Reads one property of one component/variant from a compiled theme."""

    __slots__ = ("component", "key", "variant")

    def __init__(self, component: str, key: str, variant: str | None = None) -> None:
        self.component = component
        self.key = key
        self.variant = variant

    def __call__(self, compiled: CompiledTheme) -> Any:
        values = compiled.get(self.component, self.variant)
        try:
            return values[self.key]
        except KeyError:
            raise UnknownPropertyError(self.component, self.key, self.variant) from None

    def __repr__(self) -> str:
        variant = self.variant or DEFAULT_VARIANT
        return f"PropertySelector({self.component!r}, {self.key!r}, variant={variant!r})"


class ComponentSelector:
    """Factory of property selectors for a single component.

    Nothing is looked up when selectors are built, so they can be created at
    import time before any theme has been compiled.
    """

    __slots__ = ("component",)

    def __init__(self, component: str) -> None:
        self.component = component

    def __call__(self, key: str, variant: str | None = None) -> PropertySelector:
        return PropertySelector(self.component, key, variant)

    def values(self, variant: str | None = None) -> Callable[[CompiledTheme], Mapping[str, Any]]:
        component = self.component

        def select_values(compiled: CompiledTheme) -> Mapping[str, Any]:
            return compiled.get(component, variant)

        return select_values

    def __repr__(self) -> str:
        return f"ComponentSelector({self.component!r})"


def create_selector(component: str) -> ComponentSelector:
    if not isinstance(component, str) or not component:
        raise UnknownComponentError(str(component), reason="Component name must be a non-empty string")
    return ComponentSelector(component)


def value_selector(path: str) -> Callable[[CompiledTheme], Any]:
    """Selector for a dotted global value path such as ``"colors.primary"``."""

    def select_value(compiled: CompiledTheme) -> Any:
        try:
            return lookup(compiled.values, path)
        except KeyError:
            raise UnknownPropertyError(f"{compiled.namespace}.values", path) from None

    return select_value
