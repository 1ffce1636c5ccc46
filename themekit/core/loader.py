"""Global value override files (YAML or JSON) used to extend a theme."""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any, Mapping

import yaml

from themekit.errors import ThemeValidationError

_KEY_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_-]*$")

_MAX_OVERRIDES_BYTES = 256 * 1024
_MAX_DEPTH = 8
_MAX_STRING_LEN = 512
_YAML_SUFFIXES = {".yaml", ".yml"}


def load_value_overrides(path: Path) -> dict[str, Any]:
    """Load and validate a global value overrides file."""
    path = Path(path)
    if not path.exists() or not path.is_file():
        raise ThemeValidationError(f"Overrides path is not a file: {path}")
    content = _read_text_limited(path, max_bytes=_MAX_OVERRIDES_BYTES)
    data = _parse(content, path)
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise ThemeValidationError(f"Expected a mapping at the top level of {path}")
    return _validate_tree(data, context=str(path), depth=0)


def _parse(content: str, path: Path) -> Any:
    if path.suffix.lower() in _YAML_SUFFIXES:
        try:
            return yaml.safe_load(content)
        except yaml.YAMLError as exc:
            raise ThemeValidationError(f"Invalid YAML in {path}: {exc}") from exc
    try:
        return json.loads(content)
    except json.JSONDecodeError as exc:
        raise ThemeValidationError(f"Invalid JSON in {path}: {exc}") from exc


def _validate_tree(data: Mapping[Any, Any], *, context: str, depth: int) -> dict[str, Any]:
    if depth >= _MAX_DEPTH:
        raise ThemeValidationError(f"{context}: nesting deeper than {_MAX_DEPTH} levels")
    tree: dict[str, Any] = {}
    for key, value in data.items():
        if not isinstance(key, str) or not _KEY_RE.match(key):
            raise ThemeValidationError(f"{context}: invalid key {key!r}")
        tree[key] = _validate_value(value, context=f"{context}:{key}", depth=depth)
    return tree


def _validate_value(value: Any, *, context: str, depth: int) -> Any:
    if isinstance(value, Mapping):
        return _validate_tree(value, context=context, depth=depth + 1)
    if isinstance(value, list):
        return [_validate_value(item, context=context, depth=depth + 1) for item in value]
    if isinstance(value, str):
        if len(value) > _MAX_STRING_LEN:
            raise ThemeValidationError(f"{context}: string value is too long")
        return value
    if value is None or isinstance(value, (bool, int, float)):
        return value
    raise ThemeValidationError(f"{context}: unsupported value type {type(value).__name__}")


def _read_text_limited(path: Path, *, max_bytes: int) -> str:
    try:
        size = path.stat().st_size
    except OSError as exc:
        raise ThemeValidationError(f"Unable to stat {path}: {exc}") from exc
    if size > max_bytes:
        raise ThemeValidationError(f"{path}: file exceeds max size ({max_bytes} bytes)")
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ThemeValidationError(f"Unable to read {path}: {exc}") from exc
