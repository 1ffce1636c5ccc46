"""Qt stylesheet (QSS) rendering of resolved component values."""

from __future__ import annotations

from typing import Any, Iterable, Mapping


def qss_property(key: str) -> str:
    """``background_color`` -> ``background-color``."""
    return key.replace("_", "-")


def qss_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return " ".join(qss_value(item) for item in value)
    return str(value)


def qss_block(selector: str, values: Mapping[str, Any]) -> str:
    """Render a flat value mapping as QSS rule blocks.

    Scalar entries become declarations on ``selector``. A nested mapping is
    rendered as a pseudo-state block, so ``{"hover": {"color": "#fff"}}``
    produces ``selector:hover { color: #fff; }``. Keys starting with ``_``
    are treated as private and skipped.
    """
    declarations: list[str] = []
    nested: list[str] = []
    for key, value in values.items():
        if key.startswith("_"):
            continue
        if isinstance(value, Mapping):
            nested.append(qss_block(f"{selector}:{key}", value))
            continue
        if value is None:
            continue
        declarations.append(f"    {qss_property(key)}: {qss_value(value)};")

    blocks: list[str] = []
    if declarations:
        body = "\n".join(declarations)
        blocks.append(f"{selector} {{\n{body}\n}}")
    blocks.extend(block for block in nested if block)
    return "\n\n".join(blocks)


def build_stylesheet(blocks: Iterable[str], *, extra_stylesheet: str = "") -> str:
    """Join rendered blocks and an optional raw stylesheet tail."""
    stylesheet = "\n\n".join(block.strip() for block in blocks if block and block.strip())
    extra = extra_stylesheet.strip()
    if extra:
        stylesheet = f"{stylesheet}\n\n{extra}\n" if stylesheet else f"{extra}\n"
    return stylesheet
