"""Tests for the Qt theme context, provider and connected styles."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from themekit.core.constants import ThemeMode
from themekit.core.theme import Theme
from themekit.errors import UnknownComponentError
from themekit.ui.connect import ConnectedStyle, connect, variant
from themekit.ui.context import ThemeContext
from themekit.ui.provider import with_compiled_theme
from themekit.ui.stylesheet import qss_block


def _theme(mode: ThemeMode) -> Theme:
    theme = Theme("acme", {"colors": {"accent": "#0a84ff", "danger": "#d76868"}}, mode=mode)
    theme.register("Button", lambda g: {"background_color": g["colors"]["accent"]}).add_variant(
        "danger", lambda g: {"background_color": g["colors"]["danger"]}
    )
    return theme


@connect("Button")
def button_style(values):
    return qss_block("QPushButton", values)


class TestThemeContext:
    def test_set_compiled_emits_once_per_object(self):
        context = ThemeContext()
        received = []
        context.theme_changed.connect(received.append)
        compiled = _theme(ThemeMode.PRODUCTION).compile()

        context.set_compiled(compiled)
        context.set_compiled(compiled)

        assert context.compiled is compiled
        assert received == [compiled]


class TestProvider:
    def test_wrap_requires_theme_context(self):
        with pytest.raises(TypeError):
            with_compiled_theme(_theme(ThemeMode.PRODUCTION))(object)

    def test_mount_supplies_compiled_theme(self):
        theme = _theme(ThemeMode.PRODUCTION)
        Provider = with_compiled_theme(theme)(ThemeContext)
        provider = Provider()

        assert Provider.__name__ == "CompiledThemeContext"
        assert provider.is_mounted is False
        compiled = provider.mount()

        assert provider.compiled is compiled
        assert provider.theme is theme
        assert provider.is_mounted is True

    def test_production_mounts_share_one_compile(self):
        theme = _theme(ThemeMode.PRODUCTION)
        Provider = with_compiled_theme(theme)(ThemeContext)

        first = Provider().mount()
        second = Provider().mount()

        assert first is second

    def test_development_provider_follows_hot_reload(self):
        theme = _theme(ThemeMode.DEVELOPMENT)
        provider = with_compiled_theme(theme)(ThemeContext)()
        provider.mount()
        received = []
        provider.theme_changed.connect(received.append)

        theme.register_variant("Button", "danger", lambda g: {"background_color": "#ff0000"})

        assert len(received) == 1
        assert provider.compiled.get("Button", "danger")["background_color"] == "#ff0000"

    def test_unmount_stops_following(self):
        theme = _theme(ThemeMode.DEVELOPMENT)
        provider = with_compiled_theme(theme)(ThemeContext)()
        mounted = provider.mount()
        provider.unmount()

        theme.register("Badge", lambda g: {"color": "#fff"})

        assert provider.compiled is mounted


class TestConnect:
    def test_decorator_returns_connected_style(self):
        assert isinstance(button_style, ConnectedStyle)
        assert button_style.component == "Button"
        assert button_style.variant is None

    def test_render_uses_default_values(self):
        compiled = _theme(ThemeMode.PRODUCTION).compile()
        assert button_style.render(compiled) == "QPushButton {\n    background-color: #0a84ff;\n}"

    def test_variant_binds_new_style(self):
        compiled = _theme(ThemeMode.PRODUCTION).compile()
        danger = variant(button_style, "danger")

        assert danger is not button_style
        assert danger.variant == "danger"
        assert button_style.variant is None
        assert "#d76868" in danger(compiled)

    def test_variant_requires_connected_style(self):
        with pytest.raises(TypeError):
            variant(lambda values: "", "danger")  # type: ignore[arg-type]

    def test_unknown_component_fails_at_render(self):
        compiled = _theme(ThemeMode.PRODUCTION).compile()
        tooltip = connect("Tooltip", lambda values: "")
        with pytest.raises(UnknownComponentError):
            tooltip.render(compiled)

    def test_bind_applies_and_follows_theme_changes(self):
        theme = _theme(ThemeMode.DEVELOPMENT)
        provider = with_compiled_theme(theme)(ThemeContext)()
        widget = MagicMock()

        binding = button_style.bind(widget, provider)
        widget.setStyleSheet.assert_not_called()

        provider.mount()
        widget.setStyleSheet.assert_called_with("QPushButton {\n    background-color: #0a84ff;\n}")

        theme.register("Button", lambda g: {"background_color": "#000000"})
        widget.setStyleSheet.assert_called_with("QPushButton {\n    background-color: #000000;\n}")

        binding.release()
        assert binding.active is False
        calls = widget.setStyleSheet.call_count
        theme.register("Button", lambda g: {"background_color": "#111111"})
        assert widget.setStyleSheet.call_count == calls

    def test_release_after_signal_was_cleared_is_quiet(self):
        theme = _theme(ThemeMode.DEVELOPMENT)
        provider = with_compiled_theme(theme)(ThemeContext)()
        widget = MagicMock()
        binding = button_style.bind(widget, provider)

        provider.theme_changed.disconnect()
        binding.release()
        binding.release()

        assert binding.active is False
