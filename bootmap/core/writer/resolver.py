"""Root-relative path resolution."""

import os
from dataclasses import dataclass
from typing import Dict, Optional

from .errors import FilesystemError, PathOutsideRootError, RootNotSetError


@dataclass
class ResolverStats:
    """Cache statistics for one resolver instance."""

    hits: int = 0
    misses: int = 0
    size: int = 0


class PathResolver:
    """Rewrite absolute paths relative to a canonical project root.

    One resolver is created per emission. Results are cached per input
    path, so a file that appears both in the file list and in the map is
    canonicalized once and resolved identically everywhere in the artifact.

    Parameters
    ----------
    root : Optional[str]
        Canonical root directory, or None if it was never configured
    """

    def __init__(self, root: Optional[str]):
        self.root = root
        self._cache: Dict[str, str] = {}
        self._hits = 0

    def resolve(self, path: str) -> str:
        """Return ``path`` relative to the root, with ``/`` separators.

        Raises
        ------
        RootNotSetError
            If no root was configured
        FilesystemError
            If the path cannot be canonicalized (e.g. it does not exist)
        PathOutsideRootError
            If the canonical path is not strictly inside the root
        """
        if self.root is None:
            raise RootNotSetError()

        path = os.fspath(path)
        cached = self._cache.get(path)
        if cached is not None:
            self._hits += 1
            return cached

        try:
            canonical = os.path.realpath(path, strict=True)
        except OSError as exc:
            raise FilesystemError(path, exc) from exc

        prefix = self.root.rstrip(os.sep) + os.sep
        if not canonical.startswith(prefix):
            raise PathOutsideRootError(path, self.root)

        relative = canonical[len(prefix):]
        if os.sep != "/":
            relative = relative.replace(os.sep, "/")
        self._cache[path] = relative
        return relative

    def cache_info(self) -> ResolverStats:
        return ResolverStats(
            hits=self._hits, misses=len(self._cache), size=len(self._cache)
        )
