"""Qt adapters: theme context, provider, connected styles and QSS sink."""

from themekit.ui.connect import ConnectedStyle, StyleBinding, connect, variant
from themekit.ui.context import ThemeContext
from themekit.ui.provider import with_compiled_theme
from themekit.ui.stylesheet import build_stylesheet, qss_block

__all__ = [
    "ConnectedStyle",
    "StyleBinding",
    "ThemeContext",
    "build_stylesheet",
    "connect",
    "qss_block",
    "variant",
    "with_compiled_theme",
]
