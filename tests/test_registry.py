"""Effect registry: add, lookup, removal, isolation, default registry."""

from __future__ import annotations

import pytest

from glyphfx import registry as registry_mod
from glyphfx.errors import DuplicateEffectError, EffectError
from glyphfx.registry import EffectArgs, EffectDefinition, EffectRegistry, default_registry


def _noop(state, args, info) -> None:
    pass


def _other(state, args, info) -> None:
    state.rotation = 1.0


class TestAddEffect:
    def test_add_and_get(self) -> None:
        reg = EffectRegistry()
        definition = reg.add_effect("glow", _noop)
        assert definition == EffectDefinition("glow", _noop)
        assert reg.get_effect("glow") is definition

    def test_get_absent_returns_none(self) -> None:
        assert EffectRegistry().get_effect("glow") is None

    def test_duplicate_raises(self) -> None:
        reg = EffectRegistry()
        reg.add_effect("glow", _noop)
        with pytest.raises(DuplicateEffectError, match="'glow' already exists") as exc_info:
            reg.add_effect("glow", _other)
        assert exc_info.value.name == "glow"
        assert isinstance(exc_info.value, EffectError)

    def test_duplicate_keeps_first(self) -> None:
        reg = EffectRegistry()
        reg.add_effect("glow", _noop)
        with pytest.raises(DuplicateEffectError):
            reg.add_effect("glow", _other)
        assert reg.get_effect("glow").fn is _noop

    def test_decorator(self) -> None:
        reg = EffectRegistry()

        @reg.effect("spin")
        def spin(state, args, info) -> None:
            pass

        assert reg.get_effect("spin").fn is spin


class TestRemoveEffect:
    def test_remove_then_readd(self) -> None:
        reg = EffectRegistry()
        reg.add_effect("glow", _noop)
        reg.remove_effect("glow")
        assert reg.get_effect("glow") is None
        reg.add_effect("glow", _other)
        assert reg.get_effect("glow").fn is _other

    def test_remove_absent_is_noop(self) -> None:
        reg = EffectRegistry()
        reg.remove_effect("missing")
        assert len(reg) == 0


class TestIsolation:
    def test_registries_do_not_share_names(self) -> None:
        a = EffectRegistry()
        b = EffectRegistry()
        a.add_effect("glow", _noop)
        assert "glow" in a
        assert "glow" not in b
        b.add_effect("glow", _other)
        assert a.get_effect("glow").fn is _noop

    def test_names(self) -> None:
        reg = EffectRegistry()
        reg.add_effect("a", _noop)
        reg.add_effect("b", _noop)
        assert reg.names == frozenset({"a", "b"})

    def test_empty_registry_is_still_a_registry(self) -> None:
        assert len(EffectRegistry()) == 0


class TestDefaultRegistry:
    def test_created_once(self, default_effects: EffectRegistry) -> None:
        assert default_registry() is default_effects

    def test_module_level_helpers(self, default_effects: EffectRegistry) -> None:
        registry_mod.add_effect("glow", _noop)
        assert "glow" in default_effects
        with pytest.raises(DuplicateEffectError):
            registry_mod.add_effect("glow", _noop)
        registry_mod.remove_effect("glow")
        assert "glow" not in default_effects

    def test_separate_from_new_registries(self, default_effects: EffectRegistry) -> None:
        default_effects.add_effect("glow", _noop)
        assert EffectRegistry().get_effect("glow") is None


class TestEffectArgs:
    def test_mapping_behaviour(self) -> None:
        args = EffectArgs("wave", {"amp": 2, "freq": 0.5})
        assert args.name == "wave"
        assert dict(args) == {"amp": 2, "freq": 0.5}
        assert args.get("phase", 0.0) == 0.0
        assert len(args) == 2

    def test_primary_value(self) -> None:
        assert EffectArgs("wave", {"wave": 2.5}).value(4.0) == 2.5
        assert EffectArgs("wave").value(4.0) == 4.0

    def test_copy_is_independent(self) -> None:
        source = {"amp": 1}
        args = EffectArgs("wave", source)
        source["amp"] = 9
        assert args["amp"] == 1
