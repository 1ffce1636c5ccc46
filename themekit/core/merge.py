"""Recursive merge of variant values onto component defaults."""

from __future__ import annotations

from typing import Any, Callable, Mapping

from themekit.core.values import ValueTree
from themekit.errors import ErrorCode, ThemeKitError, UnknownComponentError

ValueFactory = Callable[[ValueTree], Mapping[str, Any]]


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Merge ``override`` onto ``base`` and return a new dict.

    Nested mappings present on both sides merge recursively; any other value in
    ``override`` replaces the base value wholesale. Neither input is mutated.
    """
    merged = {key: _copy_node(value) for key, value in base.items()}
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = _copy_node(value)
    return merged


def resolve(
    default_factory: ValueFactory | None,
    variant_factory: ValueFactory | None,
    values: ValueTree,
    *,
    component: str = "<anonymous>",
    variant: str | None = None,
) -> dict[str, Any]:
    """Resolve one component/variant pair into a flat value mapping."""
    if default_factory is None:
        raise UnknownComponentError(component, variant)
    base = _call_factory(default_factory, values, component, None)
    if variant_factory is None:
        return deep_merge(base, {})
    override = _call_factory(variant_factory, values, component, variant)
    return deep_merge(base, override)


def _call_factory(
    factory: ValueFactory,
    values: ValueTree,
    component: str,
    variant: str | None,
) -> Mapping[str, Any]:
    result = factory(values)
    if not isinstance(result, Mapping):
        raise ThemeKitError(
            ErrorCode.FACTORY_INVALID,
            message=f"Factory for {component!r} returned {type(result).__name__}, expected a mapping",
            component=component,
            variant=variant,
        )
    bad_key = _first_non_string_key(result)
    if bad_key is not None:
        raise ThemeKitError(
            ErrorCode.FACTORY_INVALID,
            message=f"Factory for {component!r} returned non-string key {bad_key[0]!r}",
            component=component,
            variant=variant,
        )
    return result


def _first_non_string_key(node: Mapping[str, Any]) -> tuple[Any] | None:
    for key, item in node.items():
        if not isinstance(key, str):
            return (key,)
        if isinstance(item, Mapping):
            found = _first_non_string_key(item)
            if found is not None:
                return found
    return None


def _copy_node(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {key: _copy_node(item) for key, item in value.items()}
    return value
