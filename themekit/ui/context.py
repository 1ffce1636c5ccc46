"""Qt object carrying the active compiled theme."""

from __future__ import annotations

from PySide6.QtCore import QObject, Signal

from themekit.core.compiler import CompiledTheme


class ThemeContext(QObject):
    """Holds the compiled theme that connected styles read from."""

    theme_changed = Signal(object)  # CompiledTheme

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._compiled: CompiledTheme | None = None

    @property
    def compiled(self) -> CompiledTheme | None:
        return self._compiled

    def set_compiled(self, compiled: CompiledTheme) -> None:
        if compiled is self._compiled:
            return
        self._compiled = compiled
        self.theme_changed.emit(compiled)
