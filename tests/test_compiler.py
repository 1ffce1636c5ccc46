"""Tests for theme compilation and the development/production lifecycle."""

from __future__ import annotations

from types import MappingProxyType
from unittest.mock import MagicMock

import pytest

from themekit.core.constants import LifecycleState, ThemeMode
from themekit.core.theme import Theme
from themekit.errors import AlreadyCompiledError, ErrorCode, ThemeKitError, UnknownComponentError

GLOBALS = {"colors": {"primary": "#000", "danger": "#d76868"}, "space": {"unit": 4}}


def _button_default(g):
    return {
        "color": g["colors"]["primary"],
        "padding": {"x": g["space"]["unit"] * 2, "y": g["space"]["unit"]},
    }


def _button_danger(g):
    return {"color": g["colors"]["danger"]}


def _theme(mode: ThemeMode) -> Theme:
    theme = Theme("acme", GLOBALS, mode=mode)
    theme.register("Button", _button_default).add_variant("danger", _button_danger)
    theme.register("Card", lambda g: {"radius": 6})
    return theme


class TestCompile:
    def test_compile_resolves_every_component_and_variant(self):
        compiled = _theme(ThemeMode.PRODUCTION).compile()

        assert compiled.namespace == "acme"
        assert compiled.components() == ["Button", "Card"]
        assert compiled.variants("Button") == ["default", "danger"]
        assert compiled.to_dict()["components"]["Button"] == {
            "default": {"color": "#000", "padding": {"x": 8, "y": 4}},
            "danger": {"color": "#d76868", "padding": {"x": 8, "y": 4}},
        }

    def test_compiled_theme_is_read_only(self):
        compiled = _theme(ThemeMode.PRODUCTION).compile()
        values = compiled.get("Button")

        assert isinstance(values, MappingProxyType)
        with pytest.raises(TypeError):
            values["color"] = "#fff"  # type: ignore[index]
        with pytest.raises(TypeError):
            compiled.values["colors"]["primary"] = "#fff"  # type: ignore[index]

    def test_compile_is_pure(self):
        first = _theme(ThemeMode.PRODUCTION).compile()
        second = _theme(ThemeMode.PRODUCTION).compile()
        assert first.to_dict() == second.to_dict()

    def test_component_without_default_is_left_out(self):
        theme = _theme(ThemeMode.PRODUCTION)
        theme.register_variant("Ghost", "dark", lambda g: {"color": "#fff"})

        compiled = theme.compile()

        assert "Ghost" not in compiled.components()
        with pytest.raises(UnknownComponentError):
            compiled.get("Ghost", "dark")

    def test_unknown_variant_lookup_fails(self):
        compiled = _theme(ThemeMode.PRODUCTION).compile()
        with pytest.raises(UnknownComponentError):
            compiled.get("Button", "outline")

    def test_factory_error_leaves_theme_open(self):
        theme = Theme("broken", mode=ThemeMode.PRODUCTION)

        def explode(g):
            raise ZeroDivisionError("boom")

        theme.register("Button", explode)
        with pytest.raises(ZeroDivisionError):
            theme.compile()
        assert theme.state is LifecycleState.OPEN
        theme.register("Button", lambda g: {"color": "red"})
        assert theme.compile().get("Button")["color"] == "red"

    def test_reentrant_compile_without_result_raises(self):
        theme = Theme("loop", mode=ThemeMode.PRODUCTION)
        theme.register("Button", lambda g: {"color": theme.compile()})

        with pytest.raises(ThemeKitError) as excinfo:
            theme.compile()
        assert excinfo.value.code is ErrorCode.COMPILE_REENTRANT

    def test_equality_ignores_revision(self):
        theme = _theme(ThemeMode.DEVELOPMENT)
        first = theme.compile()
        theme.register("Card", lambda g: {"radius": 6})

        second = theme.compile()

        assert second.revision == first.revision + 1
        assert second == first
        assert _theme(ThemeMode.PRODUCTION).compile() == first

    def test_non_string_factory_key_is_rejected(self):
        theme = Theme("keys", mode=ThemeMode.PRODUCTION)
        theme.register("Button", lambda g: {"size": {1: "small"}})

        with pytest.raises(ThemeKitError) as excinfo:
            theme.compile()
        assert excinfo.value.code is ErrorCode.FACTORY_INVALID
        assert theme.state is LifecycleState.OPEN


class TestProductionMode:
    def test_state_moves_from_open_to_compiled(self):
        theme = _theme(ThemeMode.PRODUCTION)
        assert theme.state is LifecycleState.OPEN
        theme.compile()
        assert theme.state is LifecycleState.COMPILED

    def test_compile_is_memoized(self):
        default = MagicMock(return_value={"color": "red"})
        theme = Theme("memo", mode=ThemeMode.PRODUCTION)
        theme.register("Button", default)

        first = theme.compile()
        second = theme.compile()

        assert first is second
        assert default.call_count == 1

    def test_registration_after_compile_is_rejected(self):
        theme = _theme(ThemeMode.PRODUCTION)
        compiled = theme.compile()
        snapshot = compiled.to_dict()

        with pytest.raises(AlreadyCompiledError):
            theme.register("Badge", lambda g: {"color": "red"})
        with pytest.raises(AlreadyCompiledError):
            theme.register_variant("Button", "ghost", lambda g: {"color": "none"})

        assert theme.compile() is compiled
        assert compiled.to_dict() == snapshot
        assert "Badge" not in theme.registry

    def test_invalidate_is_rejected_once_compiled(self):
        theme = _theme(ThemeMode.PRODUCTION)
        theme.compile()
        with pytest.raises(AlreadyCompiledError):
            theme.invalidate()


class TestDevelopmentMode:
    def test_registration_after_compile_is_accepted(self):
        theme = _theme(ThemeMode.DEVELOPMENT)
        theme.compile()
        theme.register("Badge", lambda g: {"color": "red"})
        assert "Badge" in theme.compile().components()

    def test_hot_reload_updates_only_the_changed_variant(self):
        theme = _theme(ThemeMode.DEVELOPMENT)
        before = theme.compile()

        theme.register_variant("Button", "danger", lambda g: {"color": "#ff0000"})
        after = theme.compile()

        assert after is not before
        assert after.get("Button", "danger")["color"] == "#ff0000"
        old = before.to_dict()["components"]
        new = after.to_dict()["components"]
        assert new["Button"]["default"] == old["Button"]["default"]
        assert new["Card"] == old["Card"]

    def test_registration_change_recompiles_once_and_notifies(self):
        theme = _theme(ThemeMode.DEVELOPMENT)
        first = theme.compile()
        received = []
        theme.on_compiled(received.append)

        theme.register_variant("Card", "flat", lambda g: {"radius": 0})

        assert len(received) == 1
        assert received[0].revision == first.revision + 1
        assert received[0].get("Card", "flat")["radius"] == 0
        assert theme.compiled is received[0]

    def test_no_recompile_before_first_compile(self):
        theme = _theme(ThemeMode.DEVELOPMENT)
        received = []
        theme.on_compiled(received.append)
        theme.register("Badge", lambda g: {"color": "red"})
        assert received == []
        assert theme.compiled is None

    def test_last_default_registration_wins(self):
        theme = _theme(ThemeMode.DEVELOPMENT)
        theme.compile()
        theme.register("Card", lambda g: {"radius": 2})
        theme.register("Card", lambda g: {"radius": 10})
        assert theme.compile().get("Card")["radius"] == 10

    def test_invalidate_reopens_theme(self):
        theme = _theme(ThemeMode.DEVELOPMENT)
        theme.compile()
        theme.invalidate()
        assert theme.state is LifecycleState.OPEN
        assert theme.compiled is None

    def test_unchanged_compile_returns_same_result_without_notifying(self):
        default = MagicMock(return_value={"color": "red"})
        theme = Theme("memo", mode=ThemeMode.DEVELOPMENT)
        theme.register("Button", default)
        first = theme.compile()
        received = []
        theme.on_compiled(received.append)

        second = theme.compile()

        assert second is first
        assert second == first
        assert received == []
        assert default.call_count == 1

    def test_compile_after_invalidate_recomputes(self):
        theme = _theme(ThemeMode.DEVELOPMENT)
        first = theme.compile()
        theme.invalidate()

        second = theme.compile()

        assert second is not first
        assert second == first
        assert second.revision == first.revision + 1


def test_mode_defaults_from_environment(monkeypatch):
    monkeypatch.setenv("THEMEKIT_MODE", "dev")
    assert Theme("env").mode is ThemeMode.DEVELOPMENT
    monkeypatch.delenv("THEMEKIT_MODE")
    assert Theme("env").mode is ThemeMode.PRODUCTION
