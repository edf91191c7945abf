"""Loading user effect modules.

An effect module is a Python module with a ``register(registry)`` function
that adds its effects to the registry it is given. Modules are named
either by import path (``mypkg.fx``) or by file stem, in which case they are
searched for as ``effects/<name>.py`` next to the document and then in each
extra directory.
"""

from __future__ import annotations

import importlib
import importlib.util
import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import ModuleType

from glyphfx.errors import EffectLoadError
from glyphfx.registry import EffectRegistry

logger = logging.getLogger(__name__)


@dataclass
class EffectLoader:
    """Finds effect modules and registers them into a registry."""

    document_dir: Path
    extra_paths: list[Path] = field(default_factory=list)
    _cache: dict[str, Path | None] = field(default_factory=dict, init=False)

    def find_module_file(self, name: str) -> Path | None:
        """Look up ``<name>.py`` in the search directories. Results are cached."""
        if name in self._cache:
            return self._cache[name]
        result = self._discover(name)
        self._cache[name] = result
        return result

    def _discover(self, name: str) -> Path | None:
        # 1. effects/<name>.py next to document
        local = self.document_dir / "effects" / f"{name}.py"
        if local.is_file():
            return local

        # 2. Extra configured paths
        for d in self.extra_paths:
            candidate = d / f"{name}.py"
            if candidate.is_file():
                return candidate

        return None

    def load(self, name: str, registry: EffectRegistry) -> ModuleType:
        """Import *name* and call its ``register(registry)``."""
        path = self.find_module_file(name)
        module = _load_file(name, path) if path is not None else _import(name)

        register = getattr(module, "register", None)
        if not callable(register):
            raise EffectLoadError(f"effect module '{name}' does not define register(registry)")
        register(registry)
        logger.info("loaded effect module %r", name)
        return module

    def load_all(self, names: list[str], registry: EffectRegistry) -> None:
        for name in names:
            self.load(name, registry)


def _import(name: str) -> ModuleType:
    try:
        return importlib.import_module(name)
    except ModuleNotFoundError as exc:
        if exc.name is not None and (exc.name == name or name.startswith(exc.name + ".")):
            raise EffectLoadError(f"effect module '{name}' not found") from None
        raise


def _load_file(name: str, path: Path) -> ModuleType:
    spec = importlib.util.spec_from_file_location(f"glyphfx_effects.{name}", path)
    if spec is None or spec.loader is None:
        raise EffectLoadError(f"cannot load effect module '{name}' from {path}")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    logger.debug("executed effect module file %s", path)
    return module
