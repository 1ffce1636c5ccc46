"""Global value trees shared by every component factory."""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping

ValueTree = Mapping[str, Any]

_MISSING = object()


def freeze(value: Any) -> Any:
    """Return a read-only deep copy of ``value``.

    Mappings become ``MappingProxyType`` and lists/tuples become tuples, so
    a list read back from a frozen tree compares equal to a tuple, not to the
    original list. Use :func:`thaw` to get plain containers again. Scalars
    are returned unchanged. Mapping keys must be strings.
    """
    if isinstance(value, Mapping):
        frozen = {}
        for key, item in value.items():
            if not isinstance(key, str):
                raise TypeError(f"Value tree keys must be strings, got {key!r}")
            frozen[key] = freeze(item)
        return MappingProxyType(frozen)
    if isinstance(value, (list, tuple)):
        return tuple(freeze(item) for item in value)
    return value


def thaw(value: Any) -> Any:
    """Inverse of :func:`freeze`, producing plain dicts and lists."""
    if isinstance(value, Mapping):
        return {key: thaw(item) for key, item in value.items()}
    if isinstance(value, tuple):
        return [thaw(item) for item in value]
    return value


def lookup(tree: ValueTree, path: str, default: Any = _MISSING) -> Any:
    """Read a dotted ``path`` such as ``"colors.primary"`` from ``tree``.

    Raises ``KeyError`` when a segment is missing and no default is given.
    """
    node: Any = tree
    for segment in path.split("."):
        if not isinstance(node, Mapping) or segment not in node:
            if default is _MISSING:
                raise KeyError(path)
            return default
        node = node[segment]
    return node
