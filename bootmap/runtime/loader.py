"""Process-wide symbol loader used by generated ``autoload.py`` modules.

A generated bootstrap module registers its autoload map here with
:func:`set_paths`. Symbols are then resolved lazily with :func:`resolve`:
the mapped file is loaded once per process and the symbol is read from it.

Example
-------
>>> from bootmap.runtime import loader
>>> loader.set_paths({"class": {"Foo": "src/foo.py"}}, "/proj/")
>>> Foo = loader.resolve("class", "Foo")
"""

from __future__ import annotations

import hashlib
import importlib.util
import os
import sys
import threading
from abc import ABC, abstractmethod
from types import ModuleType
from typing import Any, Callable, Dict, List, Optional

# Map key holding the failure handler callable instead of a symbol kind
FAILURE_SLOT = "failure"

FallbackLoader = Callable[[str, str], Any]


class SymbolNotFoundError(LookupError):
    """Raised when a symbol is neither mapped nor resolved by any fallback."""

    def __init__(self, kind: str, name: str):
        self.kind = kind
        self.name = name
        super().__init__(f"Unable to resolve {kind} {name!r}")


class FailureHandler(ABC):
    """Last-chance resolver for symbols missing from the autoload map.

    Subclasses are referenced by fully-qualified name when the bootstrap
    module is generated. At initialization the generated code checks
    :meth:`is_enabled`, instantiates the handler, installs
    :meth:`handle_failure` in the map's failure slot, registers the map and
    finally calls :meth:`initialize`.
    """

    @classmethod
    def is_enabled(cls) -> bool:
        return True

    @abstractmethod
    def handle_failure(self, kind: str, name: str) -> Any:
        """Return the resolved symbol, or None if it cannot be found."""

    def initialize(self) -> None:
        """Hook called once, after the map has been registered."""


class _LoaderState:
    def __init__(self):
        self.lock = threading.RLock()
        self.autoload_map: Dict[str, Any] = {}
        self.root: Optional[str] = None
        self.fallbacks: List[FallbackLoader] = []


_state = _LoaderState()


def set_paths(autoload_map: Dict[str, Any], root: str) -> None:
    """Install an autoload map whose paths are relative to ``root``."""
    with _state.lock:
        _state.autoload_map = autoload_map
        _state.root = root


def get_map() -> Dict[str, Any]:
    return _state.autoload_map


def get_root() -> Optional[str]:
    return _state.root


def register_fallback(fallback: FallbackLoader) -> None:
    """Register a callable consulted after the map and failure handler."""
    with _state.lock:
        _state.fallbacks.append(fallback)


def disable_fallback_loaders() -> None:
    """Unregister every fallback loader so the installed map takes precedence."""
    with _state.lock:
        _state.fallbacks.clear()


def fallback_loaders() -> List[FallbackLoader]:
    return list(_state.fallbacks)


def module_name_for(path: str) -> str:
    """Return the ``sys.modules`` key used for a file loaded by path."""
    canonical = os.path.realpath(path)
    digest = hashlib.sha1(canonical.encode("utf-8")).hexdigest()[:16]
    stem = os.path.splitext(os.path.basename(canonical))[0]
    stem = "".join(ch if ch.isalnum() else "_" for ch in stem)
    return f"_bootmap_file_{stem}_{digest}"


def require_file(path: str) -> ModuleType:
    """Load a Python file at most once per process and return its module."""
    name = module_name_for(path)
    with _state.lock:
        module = sys.modules.get(name)
        if module is not None:
            return module

        spec = importlib.util.spec_from_file_location(name, os.path.realpath(path))
        if spec is None or spec.loader is None:
            raise ImportError(f"Cannot load file: {path}")
        module = importlib.util.module_from_spec(spec)
        sys.modules[name] = module
        try:
            spec.loader.exec_module(module)
        except BaseException:
            del sys.modules[name]
            raise
        return module


def resolve(kind: str, name: str) -> Any:
    """Resolve a symbol by kind and name.

    Parameters
    ----------
    kind : str
        Symbol kind (e.g. "class", "function", "constant")
    name : str
        Symbol name as it appears in the autoload map

    Returns
    -------
    Any
        The resolved object

    Raises
    ------
    SymbolNotFoundError
        If neither the map, the failure handler nor a fallback loader
        can resolve the symbol
    """
    autoload_map = _state.autoload_map
    # the failure slot holds a callable, never a name table
    names = autoload_map.get(kind) if kind != FAILURE_SLOT else None
    relative = names.get(name) if isinstance(names, dict) else None
    if relative is not None and _state.root is not None:
        module = require_file(os.path.join(_state.root, relative))
        try:
            return getattr(module, name)
        except AttributeError:
            raise SymbolNotFoundError(kind, name) from None

    handler = autoload_map.get(FAILURE_SLOT)
    if handler is not None:
        result = handler(kind, name)
        if result is not None:
            return result

    for fallback in fallback_loaders():
        result = fallback(kind, name)
        if result is not None:
            return result

    raise SymbolNotFoundError(kind, name)


def reset() -> None:
    """Forget the installed map, root and fallback loaders."""
    with _state.lock:
        _state.autoload_map = {}
        _state.root = None
        _state.fallbacks.clear()
