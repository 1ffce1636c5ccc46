"""Theme compilation and the open/compiling/compiled lifecycle."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Mapping

from themekit.core.constants import DEFAULT_VARIANT, LifecycleState, ThemeMode
from themekit.core.merge import resolve
from themekit.core.registry import ComponentEntry, Registry
from themekit.core.values import ValueTree, freeze, lookup, thaw
from themekit.errors import (
    AlreadyCompiledError,
    ErrorCode,
    ThemeKitError,
    UnknownComponentError,
    UnknownPropertyError,
)

logger = logging.getLogger("themekit.compiler")

CompiledListener = Callable[["CompiledTheme"], None]


@dataclass(frozen=True, slots=True)
class CompiledTheme:
    """Immutable (component x variant) -> property lookup table."""

    namespace: str
    values: ValueTree
    resolved: Mapping[str, Mapping[str, Mapping[str, Any]]]
    revision: int = field(default=1, compare=False)

    def get(self, component: str, variant: str | None = None) -> Mapping[str, Any]:
        variants = self.resolved.get(component)
        if variants is None:
            raise UnknownComponentError(
                component,
                variant,
                reason=f"Component {component!r} is not part of compiled theme {self.namespace!r}",
            )
        key = variant or DEFAULT_VARIANT
        values = variants.get(key)
        if values is None:
            raise UnknownComponentError(
                component,
                variant,
                reason=f"Component {component!r} has no variant {key!r}",
            )
        return values

    def value(self, path: str) -> Any:
        try:
            return lookup(self.values, path)
        except KeyError:
            raise UnknownPropertyError(f"{self.namespace}.values", path) from None

    def components(self) -> list[str]:
        return list(self.resolved)

    def variants(self, component: str) -> list[str]:
        return list(self.resolved.get(component, {}))

    def to_dict(self) -> dict[str, Any]:
        return {
            "namespace": self.namespace,
            "revision": self.revision,
            "values": thaw(self.values),
            "components": thaw(self.resolved),
        }


class Compiler:
    """Resolves a registry against a value tree and owns the lifecycle state.

    In production mode the first successful compile freezes the registry and
    every later call returns the cached result. In development mode each
    registration change after the first compile triggers one recompile and
    notifies ``on_compiled`` listeners; ``compile()`` itself hands back the
    last result until a registration change or :meth:`invalidate` marks it
    stale.
    """

    def __init__(
        self,
        namespace: str,
        values: ValueTree,
        mode: ThemeMode,
    ) -> None:
        self._namespace = namespace
        self._values = values
        self._mode = mode
        self._registry: Registry | None = None
        self._state = LifecycleState.OPEN
        self._compiled: CompiledTheme | None = None
        self._revision = 0
        self._pending_change = False
        self._dirty = True
        self._listeners: list[CompiledListener] = []

    @property
    def state(self) -> LifecycleState:
        return self._state

    @property
    def mode(self) -> ThemeMode:
        return self._mode

    @property
    def compiled(self) -> CompiledTheme | None:
        return self._compiled

    def attach(self, registry: Registry) -> None:
        self._registry = registry
        if self._mode is ThemeMode.DEVELOPMENT:
            registry.on_change(self._on_registry_change)

    def check_open(self, component: str, variant: str | None) -> None:
        """Registration guard installed on the registry."""
        if self._mode is ThemeMode.PRODUCTION and self._state is LifecycleState.COMPILED:
            raise AlreadyCompiledError(self._namespace, component, variant)

    def on_compiled(self, listener: CompiledListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def compile(self) -> CompiledTheme:
        if self._state is LifecycleState.COMPILING:
            if self._compiled is None:
                raise ThemeKitError(
                    ErrorCode.COMPILE_REENTRANT,
                    details={"namespace": self._namespace},
                )
            return self._compiled
        if self._state is LifecycleState.COMPILED and self._compiled is not None:
            if self._mode is ThemeMode.PRODUCTION or not self._dirty:
                return self._compiled
        return self._run()

    def invalidate(self) -> None:
        if self._mode is ThemeMode.PRODUCTION and self._state is LifecycleState.COMPILED:
            raise AlreadyCompiledError(self._namespace, "<invalidate>")
        self._compiled = None
        self._dirty = True
        self._state = LifecycleState.OPEN

    def _run(self) -> CompiledTheme:
        if self._registry is None:
            raise RuntimeError("Compiler has no registry attached")
        previous = self._state
        self._state = LifecycleState.COMPILING
        self._dirty = False
        try:
            entries = list(self._registry.entries())
            resolved = self._resolve_all(entries)
        except BaseException:
            self._state = previous
            self._dirty = True
            raise
        self._revision += 1
        compiled = CompiledTheme(
            namespace=self._namespace,
            values=self._values,
            resolved=MappingProxyType(resolved),
            revision=self._revision,
        )
        self._compiled = compiled
        self._state = LifecycleState.COMPILED
        if self._mode is ThemeMode.PRODUCTION:
            # An extended theme must not pick up later parent registrations.
            self._registry.freeze(entries)
        logger.debug(
            "compiled theme %s revision=%d components=%d",
            self._namespace,
            self._revision,
            len(resolved),
        )
        for listener in list(self._listeners):
            listener(compiled)
        if self._pending_change:
            self._pending_change = False
            return self._run()
        return compiled

    def _resolve_all(
        self, entries: list[ComponentEntry]
    ) -> dict[str, Mapping[str, Mapping[str, Any]]]:
        resolved: dict[str, Mapping[str, Mapping[str, Any]]] = {}
        for entry in entries:
            if not entry.has_default:
                logger.warning(
                    "theme %s: component %r has variants %s but no default; skipped",
                    self._namespace,
                    entry.name,
                    sorted(entry.variants),
                )
                continue
            by_variant: dict[str, Mapping[str, Any]] = {
                DEFAULT_VARIANT: freeze(
                    resolve(entry.default_factory, None, self._values, component=entry.name)
                )
            }
            for variant, factory in entry.variants.items():
                by_variant[variant] = freeze(
                    resolve(
                        entry.default_factory,
                        factory,
                        self._values,
                        component=entry.name,
                        variant=variant,
                    )
                )
            resolved[entry.name] = MappingProxyType(by_variant)
        return resolved

    def _on_registry_change(self, component: str, variant: str | None) -> None:
        self._dirty = True
        if self._state is LifecycleState.COMPILING:
            self._pending_change = True
            return
        if self._compiled is None:
            return
        logger.info(
            "hot reload: theme %s recompiling after change to %s/%s",
            self._namespace,
            component,
            variant or DEFAULT_VARIANT,
        )
        self._run()
