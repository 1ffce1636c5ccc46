"""Command line entry point: compile a theme and dump the result."""

from __future__ import annotations

import argparse
import importlib
import json
import logging
from logging.handlers import RotatingFileHandler
import os
from pathlib import Path
import sys
from typing import TYPE_CHECKING, Sequence

import yaml

from themekit import __version__
from themekit.core.constants import MODE_ENV_VAR, ThemeMode
from themekit.core.theme import Theme
from themekit.errors import ErrorCode, ThemeKitError, ThemeValidationError, format_error_for_user

if TYPE_CHECKING:
    from themekit.config.settings import ThemeKitSettings

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_USAGE = 2


def _configure_logger(settings: ThemeKitSettings, *, verbose: bool = False) -> logging.Logger:
    logger = logging.getLogger("themekit")
    if logger.handlers:
        return logger

    logger.setLevel(logging.DEBUG if verbose else settings.log_level)
    formatter = logging.Formatter("%(asctime)s %(levelname)s %(message)s")

    stream = logging.StreamHandler(sys.stderr)
    stream.setFormatter(formatter)
    logger.addHandler(stream)

    handler = RotatingFileHandler(
        settings.log_dir / "themekit.log",
        maxBytes=512_000,
        backupCount=3,
        encoding="utf-8",
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def import_theme(target: str) -> Theme:
    """Import ``package.module:attribute`` and return the Theme it names."""
    module_name, sep, attribute = target.partition(":")
    if not sep or not module_name or not attribute:
        raise ThemeKitError(ErrorCode.THEME_NOT_FOUND, details={"target": target})
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise ThemeKitError(
            ErrorCode.THEME_NOT_FOUND,
            message=f"Could not import module {module_name!r}: {exc}",
            details={"target": target},
        ) from exc
    theme = getattr(module, attribute, None)
    if not isinstance(theme, Theme):
        raise ThemeKitError(
            ErrorCode.THEME_NOT_FOUND,
            message=f"{target!r} is not a Theme (got {type(theme).__name__})",
            details={"target": target},
        )
    return theme


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="themekit", description="Compile and inspect ThemeKit themes.")
    parser.add_argument("--version", action="version", version=f"themekit {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="log at DEBUG level")
    parser.add_argument(
        "--mode",
        choices=[mode.value for mode in ThemeMode],
        help="compile mode for themes created while importing the target",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    compile_cmd = commands.add_parser("compile", help="compile a theme and dump every resolved value")
    compile_cmd.add_argument("target", help="theme to load, as package.module:attribute")
    compile_cmd.add_argument("--overrides", type=Path, help="YAML or JSON global value overrides")
    compile_cmd.add_argument("--extend", metavar="NAMESPACE", help="namespace for the extended theme")
    compile_cmd.add_argument("--format", choices=("yaml", "json"), default="yaml")
    compile_cmd.add_argument("--output", type=Path, help="write to a file instead of stdout")

    list_cmd = commands.add_parser("list", help="list registered components and variants")
    list_cmd.add_argument("target", help="theme to load, as package.module:attribute")
    return parser


def _dump(payload: dict, fmt: str) -> str:
    if fmt == "json":
        return json.dumps(payload, indent=2) + "\n"
    return yaml.safe_dump(payload, default_flow_style=False, sort_keys=False)


def _cmd_compile(args: argparse.Namespace, settings: ThemeKitSettings, logger: logging.Logger) -> int:
    theme = import_theme(args.target)
    overrides_path = args.overrides or settings.overrides_path
    if overrides_path is not None:
        namespace = args.extend or f"{theme.namespace}-local"
        theme = theme.extend_from_file(namespace, overrides_path)
        logger.info("extended %s with overrides from %s", namespace, overrides_path)
    elif args.extend:
        theme = theme.extend(args.extend)

    compiled = theme.compile()
    text = _dump(compiled.to_dict(), args.format)
    if args.output is not None:
        args.output.write_text(text, encoding="utf-8")
        logger.info("wrote compiled theme %s to %s", compiled.namespace, args.output)
    else:
        sys.stdout.write(text)
    return EXIT_OK


def _cmd_list(args: argparse.Namespace) -> int:
    theme = import_theme(args.target)
    for entry in theme.registry.entries():
        variants = ", ".join(sorted(entry.variants)) or "-"
        marker = "" if entry.has_default else "  (no default)"
        sys.stdout.write(f"{entry.name}: {variants}{marker}\n")
    return EXIT_OK


def run_cli(argv: Sequence[str] | None = None, *, settings: ThemeKitSettings | None = None) -> int:
    """Run the command line interface and return an exit code."""
    parser = _build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as exc:
        return EXIT_OK if exc.code in (0, None) else EXIT_USAGE

    if settings is None:
        from themekit.config.settings import ThemeKitSettings

        settings = ThemeKitSettings()
    logger = _configure_logger(settings, verbose=args.verbose)

    # Themes pick their mode up while the target module is imported; the
    # variable is restored once the command returns.
    previous_mode = os.environ.get(MODE_ENV_VAR)
    os.environ[MODE_ENV_VAR] = args.mode or settings.mode.value
    try:
        if args.command == "compile":
            return _cmd_compile(args, settings, logger)
        return _cmd_list(args)
    except (ThemeKitError, ThemeValidationError) as exc:
        logger.error("%s failed: %s", args.command, exc)
        sys.stderr.write(format_error_for_user(exc) + "\n")
        return EXIT_ERROR
    finally:
        if previous_mode is None:
            os.environ.pop(MODE_ENV_VAR, None)
        else:
            os.environ[MODE_ENV_VAR] = previous_mode
