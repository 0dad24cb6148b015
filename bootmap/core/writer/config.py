"""Configuration for bootstrap emission."""

import copy
import os
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from bootmap.runtime.loader import FAILURE_SLOT

from .errors import (
    InvalidFailureHandlerError,
    MissingConfigurationError,
    ReservedKindError,
)

AutoloadMap = Dict[str, Dict[str, str]]


@dataclass(frozen=True)
class WriterConfig:
    """Validated, immutable input to a single emission.

    Attributes
    ----------
    root : Optional[str]
        Canonical project root directory
    files : Tuple[str, ...]
        Absolute paths loaded unconditionally, in order
    autoload_map : AutoloadMap
        kind -> symbol name -> absolute path
    is_dev : bool
        Informational flag embedded in the artifact
    relative_root : bool
        Express paths relative to the artifact's own location
    failure_handler : Optional[str]
        Fully-qualified name of a FailureHandler subclass
    """

    root: Optional[str]
    files: Tuple[str, ...]
    autoload_map: AutoloadMap
    is_dev: bool
    relative_root: bool = True
    failure_handler: Optional[str] = None

    def symbol_count(self) -> int:
        return sum(len(names) for names in self.autoload_map.values())


def canonicalize_root(path: str) -> str:
    """Return the canonical form of a root directory."""
    return os.path.realpath(os.fspath(path))


def validate_failure_handler(name: str) -> str:
    """Check that ``name`` looks like ``package.module.Type``."""
    parts = name.split(".")
    if len(parts) < 2 or not all(part.isidentifier() for part in parts):
        raise InvalidFailureHandlerError(name)
    return name


class WriterConfigBuilder:
    """Collects writer settings and validates them in :meth:`build`.

    Setters return the builder so calls can be chained. ``build`` copies
    every collection, so changing the builder afterwards never alters a
    config that was already built.

    Example
    -------
    >>> config = (
    ...     WriterConfigBuilder()
    ...     .root("/proj")
    ...     .dev(False)
    ...     .files([])
    ...     .autoload_map({})
    ...     .build()
    ... )
    """

    def __init__(self):
        self._root: Optional[str] = None
        self._files: Optional[List[str]] = None
        self._autoload_map: Optional[AutoloadMap] = None
        self._is_dev: Optional[bool] = None
        self._relative_root = True
        self._failure_handler: Optional[str] = None

    def root(self, path) -> "WriterConfigBuilder":
        self._root = canonicalize_root(path)
        return self

    def relative_root(self, enabled: bool) -> "WriterConfigBuilder":
        self._relative_root = bool(enabled)
        return self

    def dev(self, is_dev: bool) -> "WriterConfigBuilder":
        self._is_dev = bool(is_dev)
        return self

    def failure_handler(self, name: Optional[str]) -> "WriterConfigBuilder":
        self._failure_handler = name
        return self

    def files(self, paths: Iterable[str]) -> "WriterConfigBuilder":
        self._files = [os.fspath(p) for p in paths]
        return self

    def autoload_map(
        self, autoload_map: Mapping[str, Mapping[str, str]]
    ) -> "WriterConfigBuilder":
        self._autoload_map = {
            kind: {name: os.fspath(path) for name, path in names.items()}
            for kind, names in autoload_map.items()
        }
        return self

    def builder(self, source) -> "WriterConfigBuilder":
        """Take files and autoload map from a Builder."""
        self.files(source.get_files())
        self.autoload_map(source.get_autoload_map())
        return self

    def build(self) -> WriterConfig:
        """Validate the collected settings and return a WriterConfig.

        Raises
        ------
        MissingConfigurationError
            If files, autoload map or dev flag were never set
        InvalidFailureHandlerError
            If the failure handler name is malformed
        ReservedKindError
            If the map uses the failure slot as a symbol kind
        """
        if self._files is None:
            raise MissingConfigurationError("files")
        if self._autoload_map is None:
            raise MissingConfigurationError("autoload_map")
        if self._is_dev is None:
            raise MissingConfigurationError("is_dev")

        if FAILURE_SLOT in self._autoload_map:
            raise ReservedKindError(FAILURE_SLOT)
        if self._failure_handler is not None:
            validate_failure_handler(self._failure_handler)

        return WriterConfig(
            root=self._root,
            files=tuple(self._files),
            autoload_map=copy.deepcopy(self._autoload_map),
            is_dev=self._is_dev,
            relative_root=self._relative_root,
            failure_handler=self._failure_handler,
        )
