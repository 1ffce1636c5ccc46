"""Theme: a namespaced value tree plus a component registry."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Mapping

from themekit.core.compiler import CompiledListener, CompiledTheme, Compiler
from themekit.core.constants import LifecycleState, ThemeMode, default_mode
from themekit.core.merge import ValueFactory, deep_merge, resolve
from themekit.core.registry import ComponentBuilder, Registry
from themekit.core.selectors import ComponentSelector, create_selector
from themekit.core.values import ValueTree, freeze
from themekit.errors import UnknownComponentError

logger = logging.getLogger("themekit.theme")


class Theme:
    """Owns the global values, registry and compile state for one namespace.

    Usage:
        theme = Theme("acme", {"colors": {"primary": "#0a84ff"}})
        button = theme.register("Button", lambda g: {"color": g["colors"]["primary"]})
        button.add_variant("danger", lambda g: {"color": "#d76868"})
        color = button.create_selector()("color", "danger")
        color(theme.compile())  # "#d76868"
    """

    def __init__(
        self,
        namespace: str,
        values: Mapping[str, Any] | None = None,
        *,
        mode: ThemeMode | str | None = None,
        _parent: Theme | None = None,
    ) -> None:
        if not isinstance(namespace, str) or not namespace.strip():
            raise ValueError("Theme namespace must be a non-empty string")
        self._namespace = namespace
        self._values: ValueTree = freeze(values or {})
        self._mode = ThemeMode.parse(mode) if mode is not None else default_mode()
        self._parent = _parent
        self._compiler = Compiler(namespace, self._values, self._mode)
        parent_registry = _parent.registry if _parent is not None else None
        self._registry = Registry(parent=parent_registry, guard=self._compiler.check_open)
        self._compiler.attach(self._registry)

    def __repr__(self) -> str:
        return f"Theme({self._namespace!r}, mode={self._mode.value!r}, state={self.state.value!r})"

    @property
    def namespace(self) -> str:
        return self._namespace

    @property
    def values(self) -> ValueTree:
        return self._values

    @property
    def mode(self) -> ThemeMode:
        return self._mode

    @property
    def parent(self) -> Theme | None:
        return self._parent

    @property
    def registry(self) -> Registry:
        return self._registry

    @property
    def state(self) -> LifecycleState:
        return self._compiler.state

    @property
    def compiled(self) -> CompiledTheme | None:
        return self._compiler.compiled

    # -- registration --

    def register(self, name: str, default_factory: ValueFactory) -> ComponentBuilder:
        return self._registry.register(name, default_factory)

    def register_variant(self, name: str, variant: str, factory: ValueFactory) -> ComponentBuilder:
        return self._registry.register_variant(name, variant, factory)

    def create_selector(self, name: str) -> ComponentSelector:
        return create_selector(name)

    # -- resolution --

    def resolve(self, name: str, variant: str | None = None) -> dict[str, Any]:
        """Resolve one component/variant against the current values, uncached.

        An unregistered variant resolves to the component defaults.
        """
        entry = self._registry.entry(name)
        if entry is None or not entry.has_default:
            raise UnknownComponentError(name, variant)
        variant_factory = entry.variants.get(variant) if variant else None
        return resolve(
            entry.default_factory,
            variant_factory,
            self._values,
            component=name,
            variant=variant,
        )

    def compile(self) -> CompiledTheme:
        return self._compiler.compile()

    def invalidate(self) -> None:
        self._compiler.invalidate()

    def on_compiled(self, listener: CompiledListener) -> Callable[[], None]:
        """Subscribe to new compiled themes; returns an unsubscribe callable."""
        return self._compiler.on_compiled(listener)

    def close(self) -> None:
        """Stop following the parent theme's registrations."""
        self._registry.detach()

    # -- extension --

    def extend(
        self,
        namespace: str,
        overrides: Mapping[str, Any] | None = None,
        *,
        mode: ThemeMode | str | None = None,
    ) -> Theme:
        """Derive a child theme with overridden global values.

        The child sees every component registered on this theme and may
        register more without touching this theme.
        """
        if namespace == self._namespace:
            raise ValueError(f"Extended theme needs its own namespace, got {namespace!r}")
        values = deep_merge(self._values, overrides or {})
        child = Theme(
            namespace,
            values,
            mode=mode if mode is not None else self._mode,
            _parent=self,
        )
        logger.debug("extended theme %s into %s", self._namespace, namespace)
        return child

    def extend_from_file(
        self,
        namespace: str,
        path: Path,
        *,
        mode: ThemeMode | str | None = None,
    ) -> Theme:
        from themekit.core.loader import load_value_overrides

        return self.extend(namespace, load_value_overrides(path), mode=mode)
