"""ThemeKit settings via QSettings."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from PySide6.QtCore import QSettings

from themekit.core.constants import MODE_ENV_VAR, ThemeMode

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR"}


class ThemeKitSettings:
    """Wraps QSettings for persistent ThemeKit configuration."""

    def __init__(self, qsettings: QSettings | None = None) -> None:
        self._qs = qsettings if qsettings is not None else QSettings("ThemeKit", "ThemeKit")

    # -- compile mode --

    @property
    def mode(self) -> ThemeMode:
        env_value = os.environ.get(MODE_ENV_VAR, "").strip()
        if env_value:
            return ThemeMode.parse(env_value)
        raw = self._qs.value("theme/mode", ThemeMode.PRODUCTION.value, type=str)
        try:
            return ThemeMode.parse(raw or "")
        except ValueError:
            return ThemeMode.PRODUCTION

    @mode.setter
    def mode(self, value: ThemeMode | str) -> None:
        self._qs.setValue("theme/mode", ThemeMode.parse(value).value)

    # -- logging --

    @property
    def log_level(self) -> int:
        raw = self._qs.value("logging/level", "INFO", type=str)
        name = (raw or "").strip().upper()
        if name not in _LOG_LEVELS:
            name = "INFO"
        return getattr(logging, name)

    @log_level.setter
    def log_level(self, value: str) -> None:
        name = (value or "").strip().upper()
        if name not in _LOG_LEVELS:
            name = "INFO"
        self._qs.setValue("logging/level", name)

    # -- global value overrides --

    @property
    def overrides_path(self) -> Path | None:
        raw = self._qs.value("theme/overrides_path", "", type=str)
        value = (raw or "").strip()
        return Path(value) if value else None

    @overrides_path.setter
    def overrides_path(self, value: Path | str | None) -> None:
        self._qs.setValue("theme/overrides_path", str(value) if value else "")

    # -- helpers --

    @property
    def app_data_dir(self) -> Path:
        path = self._app_data_dir()
        path.mkdir(parents=True, exist_ok=True)
        return path

    @property
    def log_dir(self) -> Path:
        path = self.app_data_dir / "logs"
        path.mkdir(parents=True, exist_ok=True)
        return path

    @staticmethod
    def _app_data_dir() -> Path:
        base = Path(os.environ.get("APPDATA", Path.home() / ".config"))
        return base / "themekit"
