"""Effect registry — maps effect names to transform functions.

Registries are independent of each other. A process-wide default registry
exists for top-level wiring (``RichText`` without an explicit registry and
the module-level ``add_effect`` / ``remove_effect``); the engine itself only
ever sees the registry it is handed.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field

from glyphfx.errors import DuplicateEffectError
from glyphfx.glyph import CharInfo, GlyphState

logger = logging.getLogger(__name__)


class EffectArgs(Mapping[str, "int | float"]):
    """Numeric tag arguments, plus the name of the effect they belong to."""

    __slots__ = ("name", "_values")

    def __init__(self, name: str, values: Mapping[str, int | float] | None = None) -> None:
        self.name = name
        self._values = dict(values or {})

    def __getitem__(self, key: str) -> int | float:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def value(self, default: float) -> float:
        """The tag's primary value, written as ``{name=value}``."""
        return self._values.get(self.name, default)

    def __repr__(self) -> str:
        return f"EffectArgs({self.name!r}, {self._values!r})"


EffectFn = Callable[[GlyphState, EffectArgs, CharInfo], "GlyphState | None"]


@dataclass(frozen=True, slots=True)
class EffectDefinition:
    """A registered effect."""

    name: str
    fn: EffectFn


@dataclass
class EffectRegistry:
    """Named effects, at most one definition per name."""

    _effects: dict[str, EffectDefinition] = field(default_factory=dict, init=False)

    def add_effect(self, name: str, fn: EffectFn) -> EffectDefinition:
        """Register *fn* under *name*. Raises DuplicateEffectError if taken."""
        if name in self._effects:
            raise DuplicateEffectError(name)
        definition = EffectDefinition(name, fn)
        self._effects[name] = definition
        logger.debug("registered effect %r", name)
        return definition

    def get_effect(self, name: str) -> EffectDefinition | None:
        return self._effects.get(name)

    def remove_effect(self, name: str) -> None:
        """Remove *name*. Removing an absent name is a no-op."""
        if self._effects.pop(name, None) is not None:
            logger.debug("removed effect %r", name)

    def effect(self, name: str) -> Callable[[EffectFn], EffectFn]:
        """Decorator form of add_effect."""

        def decorator(fn: EffectFn) -> EffectFn:
            self.add_effect(name, fn)
            return fn

        return decorator

    @property
    def names(self) -> frozenset[str]:
        return frozenset(self._effects)

    def __contains__(self, name: object) -> bool:
        return name in self._effects

    def __len__(self) -> int:
        return len(self._effects)


_default: EffectRegistry | None = None


def default_registry() -> EffectRegistry:
    """Return the process-wide default registry, creating it on first use."""
    global _default
    if _default is None:
        _default = EffectRegistry()
    return _default


def add_effect(name: str, fn: EffectFn) -> EffectDefinition:
    """Register an effect in the default registry."""
    return default_registry().add_effect(name, fn)


def remove_effect(name: str) -> None:
    """Remove an effect from the default registry."""
    default_registry().remove_effect(name)
