"""Component registry: default factories, variant factories and change listeners."""

from __future__ import annotations

import logging
import weakref
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Iterable, Iterator

from themekit.core.constants import DEFAULT_VARIANT
from themekit.core.merge import ValueFactory
from themekit.errors import ErrorCode, ThemeKitError

if TYPE_CHECKING:
    from themekit.core.selectors import ComponentSelector

logger = logging.getLogger("themekit.registry")

ChangeListener = Callable[[str, "str | None"], None]
RegistrationGuard = Callable[[str, "str | None"], None]


@dataclass(slots=True)
class ComponentEntry:
    """A component's default factory plus its named variant factories."""

    name: str
    default_factory: ValueFactory | None = None
    variants: dict[str, ValueFactory] = field(default_factory=dict)

    @property
    def has_default(self) -> bool:
        return self.default_factory is not None


class ComponentBuilder:
    """Chaining handle returned by :meth:`Registry.register`."""

    def __init__(self, registry: Registry, name: str) -> None:
        self._registry = registry
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def add_variant(self, variant: str, factory: ValueFactory) -> ComponentBuilder:
        self._registry.register_variant(self._name, variant, factory)
        return self

    def create_selector(self) -> ComponentSelector:
        from themekit.core.selectors import create_selector

        return create_selector(self._name)

    def __repr__(self) -> str:
        return f"ComponentBuilder({self._name!r})"


class Registry:
    """Accumulates component definitions for one theme.

    A registry created with a ``parent`` reads the parent's entries live and
    keeps its own registrations in a local overlay, so the parent is never
    written to. Parent change notifications are forwarded to local listeners
    through a weak reference: a child that is no longer used does not keep
    receiving them. :meth:`freeze` pins the current effective entries and
    stops reading the parent.
    """

    def __init__(
        self,
        *,
        parent: Registry | None = None,
        guard: RegistrationGuard | None = None,
    ) -> None:
        self._parent = parent
        self._guard = guard
        self._entries: dict[str, ComponentEntry] = {}
        self._listeners: list[ChangeListener] = []
        self._frozen: dict[str, ComponentEntry] | None = None
        self._detach_parent: Callable[[], None] | None = None
        if parent is not None:
            self._detach_parent = self._follow(parent)

    @property
    def parent(self) -> Registry | None:
        return self._parent

    @property
    def frozen(self) -> bool:
        return self._frozen is not None

    def detach(self) -> None:
        """Stop forwarding parent change notifications."""
        if self._detach_parent is not None:
            self._detach_parent()
            self._detach_parent = None

    def freeze(self, entries: Iterable[ComponentEntry] | None = None) -> None:
        """Pin the effective entries; later parent changes are not seen."""
        if entries is None:
            entries = list(self.entries())
        self._frozen = {entry.name: entry for entry in entries}
        self.detach()
        logger.debug("registry frozen with %d components", len(self._frozen))

    def register(self, name: str, default_factory: ValueFactory) -> ComponentBuilder:
        """Insert or replace the default factory for ``name``."""
        if not callable(default_factory):
            raise TypeError(f"Default factory for {name!r} must be callable")
        self._check_open(name, None)
        entry = self._local_entry(name)
        replaced = entry.default_factory is not None
        entry.default_factory = default_factory
        logger.debug("registered default for %s (replaced=%s)", name, replaced)
        self._notify(name, None)
        return ComponentBuilder(self, name)

    def register_variant(
        self,
        name: str,
        variant: str,
        factory: ValueFactory,
    ) -> ComponentBuilder:
        """Insert or replace a named variant factory for ``name``.

        The component does not need a default yet; the default is only
        required when the variant is resolved.
        """
        if variant == DEFAULT_VARIANT:
            raise ThemeKitError(
                ErrorCode.RESERVED_NAME,
                message=f"Variant name {DEFAULT_VARIANT!r} is reserved for component defaults",
                component=name,
                variant=variant,
            )
        if not callable(factory):
            raise TypeError(f"Variant factory for {name!r}/{variant!r} must be callable")
        self._check_open(name, variant)
        entry = self._local_entry(name)
        replaced = variant in entry.variants
        entry.variants[variant] = factory
        logger.debug("registered variant %s/%s (replaced=%s)", name, variant, replaced)
        self._notify(name, variant)
        return ComponentBuilder(self, name)

    def entry(self, name: str) -> ComponentEntry | None:
        """Return the effective entry for ``name`` across the parent chain."""
        if self._frozen is not None:
            return self._frozen.get(name)
        inherited = self._parent.entry(name) if self._parent is not None else None
        local = self._entries.get(name)
        if local is None:
            return inherited
        if inherited is None:
            return ComponentEntry(name, local.default_factory, dict(local.variants))
        return ComponentEntry(
            name,
            local.default_factory or inherited.default_factory,
            {**inherited.variants, **local.variants},
        )

    def names(self) -> list[str]:
        if self._frozen is not None:
            return list(self._frozen)
        names = self._parent.names() if self._parent is not None else []
        seen = set(names)
        for name in self._entries:
            if name not in seen:
                names.append(name)
                seen.add(name)
        return names

    def entries(self) -> Iterator[ComponentEntry]:
        for name in self.names():
            entry = self.entry(name)
            if entry is not None:
                yield entry

    def on_change(self, listener: ChangeListener) -> Callable[[], None]:
        """Subscribe to registration changes; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.entry(name) is not None

    def __len__(self) -> int:
        return len(self.names())

    def _local_entry(self, name: str) -> ComponentEntry:
        entry = self._entries.get(name)
        if entry is None:
            entry = ComponentEntry(name)
            self._entries[name] = entry
        return entry

    def _check_open(self, name: str, variant: str | None) -> None:
        if self._guard is not None:
            self._guard(name, variant)

    def _notify(self, name: str, variant: str | None) -> None:
        for listener in list(self._listeners):
            listener(name, variant)

    def _follow(self, parent: Registry) -> Callable[[], None]:
        notify_ref = weakref.WeakMethod(self._notify)

        def forward(name: str, variant: str | None) -> None:
            notify = notify_ref()
            if notify is None:
                unsubscribe()
                return
            notify(name, variant)

        unsubscribe = parent.on_change(forward)
        return unsubscribe
