"""Builder contract and a manifest-backed Builder.

Scanning source trees for symbol definitions is not part of bootmap. A
Builder only hands the writer an ordered file list and an autoload map;
:class:`ManifestBuilder` reads both from a YAML (or JSON) manifest:

.. code-block:: yaml

    files:
      - boot.py
    map:
      class:
        Foo: src/foo.py
      function:
        make_foo: src/foo.py
"""

import os
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Protocol, Sequence, runtime_checkable

import yaml


@runtime_checkable
class Builder(Protocol):
    """Anything that can supply files and an autoload map to the writer."""

    def get_files(self) -> List[str]:
        ...

    def get_autoload_map(self) -> Dict[str, Dict[str, str]]:
        ...


class ManifestError(ValueError):
    """Raised when a manifest does not have the expected shape."""

    pass


class ManifestBuilder:
    """Builder over an explicit file list and autoload map.

    Relative paths are joined onto ``root``; absolute paths are kept as is.

    Parameters
    ----------
    root : str or Path
        Project root directory
    files : Sequence[str], optional
        Files to load unconditionally, in order
    autoload_map : Mapping, optional
        kind -> symbol name -> path
    """

    def __init__(
        self,
        root,
        files: Optional[Sequence[str]] = None,
        autoload_map: Optional[Mapping[str, Mapping[str, str]]] = None,
    ):
        self.root = Path(root)
        self.files = list(files or [])
        self.autoload_map = {
            kind: dict(names) for kind, names in (autoload_map or {}).items()
        }

    def _absolute(self, path: str) -> str:
        return os.path.join(os.fspath(self.root), os.fspath(path))

    def get_files(self) -> List[str]:
        return [self._absolute(path) for path in self.files]

    def get_autoload_map(self) -> Dict[str, Dict[str, str]]:
        return {
            kind: {name: self._absolute(path) for name, path in names.items()}
            for kind, names in self.autoload_map.items()
        }

    @classmethod
    def from_file(cls, path, root=None) -> "ManifestBuilder":
        """Load a manifest file.

        Parameters
        ----------
        path : str or Path
            YAML or JSON manifest
        root : str or Path, optional
            Project root. Defaults to the manifest's directory.

        Returns
        -------
        ManifestBuilder

        Raises
        ------
        FileNotFoundError
            If the manifest doesn't exist
        ManifestError
            If the manifest is malformed
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Manifest not found: {path}")

        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ManifestError(f"Manifest {path} must be a mapping")

        files = data.get("files", []) or []
        autoload_map = data.get("map", {}) or {}
        if not isinstance(files, list) or not all(isinstance(f, str) for f in files):
            raise ManifestError(f"Manifest {path}: 'files' must be a list of paths")
        if not isinstance(autoload_map, dict):
            raise ManifestError(f"Manifest {path}: 'map' must be a mapping")
        for kind, names in autoload_map.items():
            if not isinstance(names, dict):
                raise ManifestError(
                    f"Manifest {path}: kind '{kind}' must map names to paths"
                )

        return cls(root if root is not None else path.parent, files, autoload_map)
