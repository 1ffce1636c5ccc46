"""Provider boundary: feed a theme's compiled result to a ThemeContext."""

from __future__ import annotations

import logging
from typing import Callable, TypeVar

from themekit.core.compiler import CompiledTheme
from themekit.core.constants import ThemeMode
from themekit.core.theme import Theme
from themekit.ui.context import ThemeContext

logger = logging.getLogger("themekit.provider")

ContextT = TypeVar("ContextT", bound=type[ThemeContext])


def with_compiled_theme(theme: Theme) -> Callable[[ContextT], ContextT]:
    """Wrap a ThemeContext subclass so ``mount()`` supplies ``theme.compile()``.

    Usage:
        AppThemeProvider = with_compiled_theme(theme)(ThemeContext)
        provider = AppThemeProvider()
        provider.mount()
        connected.bind(widget, provider)

    In development mode the mounted provider also follows recompilations
    until ``unmount()`` is called. In production the compile is memoized by
    the theme, so repeated mounts share one compiled object.
    """

    def wrap(provider_cls: ContextT) -> ContextT:
        if not (isinstance(provider_cls, type) and issubclass(provider_cls, ThemeContext)):
            raise TypeError(f"{provider_cls!r} is not a ThemeContext subclass")

        class CompiledThemeProvider(provider_cls):  # type: ignore[valid-type, misc]
            def __init__(self, *args, **kwargs) -> None:
                super().__init__(*args, **kwargs)
                self._unsubscribe: Callable[[], None] | None = None

            @property
            def theme(self) -> Theme:
                return theme

            @property
            def is_mounted(self) -> bool:
                return self.compiled is not None

            def mount(self) -> CompiledTheme:
                compiled = theme.compile()
                self.set_compiled(compiled)
                if theme.mode is ThemeMode.DEVELOPMENT and self._unsubscribe is None:
                    self._unsubscribe = theme.on_compiled(self._on_recompiled)
                logger.debug(
                    "mounted %s on theme %s revision=%d",
                    type(self).__name__,
                    theme.namespace,
                    compiled.revision,
                )
                return compiled

            def unmount(self) -> None:
                if self._unsubscribe is not None:
                    self._unsubscribe()
                    self._unsubscribe = None

            def _on_recompiled(self, compiled: CompiledTheme) -> None:
                self.set_compiled(compiled)

        CompiledThemeProvider.__name__ = f"Compiled{provider_cls.__name__}"
        CompiledThemeProvider.__qualname__ = CompiledThemeProvider.__name__
        return CompiledThemeProvider  # type: ignore[return-value]

    return wrap
