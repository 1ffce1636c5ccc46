"""Connect style-producing functions to the active compiled theme."""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, overload

from PySide6.QtWidgets import QWidget

from themekit.core.compiler import CompiledTheme
from themekit.core.constants import DEFAULT_VARIANT
from themekit.errors import UnknownComponentError
from themekit.ui.context import ThemeContext

logger = logging.getLogger("themekit.ui.connect")

StyleFunction = Callable[[Mapping[str, Any]], str]


class ConnectedStyle:
    """A style function bound to a component name and optional variant."""

    def __init__(self, component: str, style_fn: StyleFunction, variant: str | None = None) -> None:
        if not component:
            raise UnknownComponentError(str(component), reason="Component name must be a non-empty string")
        self._component = component
        self._style_fn = style_fn
        self._variant = variant

    @property
    def component(self) -> str:
        return self._component

    @property
    def variant(self) -> str | None:
        return self._variant

    def values(self, compiled: CompiledTheme) -> Mapping[str, Any]:
        return compiled.get(self._component, self._variant)

    def render(self, compiled: CompiledTheme) -> str:
        return self._style_fn(self.values(compiled))

    def with_variant(self, variant: str | None) -> ConnectedStyle:
        return ConnectedStyle(self._component, self._style_fn, variant)

    def bind(self, widget: QWidget, context: ThemeContext) -> StyleBinding:
        """Apply to ``widget`` now (if mounted) and on every theme change."""
        binding = StyleBinding(self, widget, context)
        binding.apply()
        return binding

    def __call__(self, compiled: CompiledTheme) -> str:
        return self.render(compiled)

    def __repr__(self) -> str:
        variant = self._variant or DEFAULT_VARIANT
        return f"ConnectedStyle({self._component!r}, variant={variant!r})"


class StyleBinding:
    """Keeps one widget's stylesheet in sync with a ThemeContext."""

    def __init__(self, style: ConnectedStyle, widget: QWidget, context: ThemeContext) -> None:
        self._style = style
        self._widget = widget
        self._context = context
        self._connected = True
        context.theme_changed.connect(self._on_theme_changed)

    @property
    def style(self) -> ConnectedStyle:
        return self._style

    @property
    def active(self) -> bool:
        return self._connected

    def apply(self) -> None:
        compiled = self._context.compiled
        if compiled is None:
            return
        self._widget.setStyleSheet(self._style.render(compiled))

    def release(self) -> None:
        if not self._connected:
            return
        self._connected = False
        try:
            self._context.theme_changed.disconnect(self._on_theme_changed)
        except (RuntimeError, TypeError):
            # context already destroyed or never connected
            logger.debug("style binding for %s was already disconnected", self._style.component)

    def _on_theme_changed(self, _compiled: object) -> None:
        if self._connected:
            self.apply()


@overload
def connect(component: str, style_fn: StyleFunction) -> ConnectedStyle: ...


@overload
def connect(component: str, style_fn: None = None) -> Callable[[StyleFunction], ConnectedStyle]: ...


def connect(component, style_fn=None):
    """Bind a style function to ``component``.

    Works as a call, ``connect("Button", render_button)``, or as a decorator,
    ``@connect("Button")``.
    """
    if style_fn is not None:
        return ConnectedStyle(component, style_fn)

    def decorator(fn: StyleFunction) -> ConnectedStyle:
        return ConnectedStyle(component, fn)

    return decorator


def variant(connected: ConnectedStyle, name: str) -> ConnectedStyle:
    """Return a copy of ``connected`` that resolves against variant ``name``."""
    if not isinstance(connected, ConnectedStyle):
        raise TypeError(f"variant() expects a ConnectedStyle, got {type(connected).__name__}")
    return connected.with_variant(name)
