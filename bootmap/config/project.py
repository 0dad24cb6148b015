"""Project-level configuration loaded from ``bootmap.yaml``.

Example
-------
>>> from bootmap.config import ProjectConfig
>>> config = ProjectConfig.find("/proj")
>>> config.output_path("/proj")
PosixPath('/proj/vendor')
"""

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import List, Optional

import yaml

from bootmap.core.writer.errors import ConfigurationError
from bootmap.core.writer.shims import LEGACY_SHIM_NAMES

CONFIG_FILENAME = "bootmap.yaml"


def _check_types(path, data: dict) -> None:
    for key in ("relative_root", "dev"):
        if key in data and not isinstance(data[key], bool):
            raise ConfigurationError(f"{path}: {key} must be true or false")
    for key in ("output_dir", "manifest"):
        if key in data and not isinstance(data[key], str):
            raise ConfigurationError(f"{path}: {key} must be a string")
    handler = data.get("failure_handler")
    if handler is not None and not isinstance(handler, str):
        raise ConfigurationError(f"{path}: failure_handler must be a string")
    if "legacy_shims" in data:
        shims = data["legacy_shims"]
        if not isinstance(shims, list) or not all(isinstance(s, str) for s in shims):
            raise ConfigurationError(f"{path}: legacy_shims must be a list of file names")


@dataclass
class ProjectConfig:
    """Settings for writing a project's bootstrap module.

    Attributes
    ----------
    output_dir : str
        Directory (relative to the root) receiving autoload.py. It must sit
        one level below the root when ``relative_root`` is enabled.
    relative_root : bool
        Compute the root at load time from the artifact location
    dev : bool
        Dev flag embedded in the artifact
    failure_handler : Optional[str]
        Fully-qualified FailureHandler subclass name
    manifest : str
        Manifest path (relative to the root) listing files and map
    legacy_shims : List[str]
        File names of the compatibility shims
    """

    output_dir: str = "vendor"
    relative_root: bool = True
    dev: bool = True
    failure_handler: Optional[str] = None
    manifest: str = "autoload-manifest.yaml"
    legacy_shims: List[str] = field(default_factory=lambda: list(LEGACY_SHIM_NAMES))

    def output_path(self, root) -> Path:
        return Path(root) / self.output_dir

    def manifest_path(self, root) -> Path:
        return Path(root) / self.manifest

    @classmethod
    def from_yaml(cls, path: Path) -> "ProjectConfig":
        """Load configuration from a YAML file.

        Raises
        ------
        ConfigurationError
            If the file is not a mapping, contains unknown keys or a value
            of the wrong type
        """
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ConfigurationError(f"{path}: configuration must be a mapping")

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(
                f"{path}: unknown configuration keys: {', '.join(unknown)}"
            )
        _check_types(path, data)
        return cls(**data)

    @classmethod
    def find(cls, root) -> "ProjectConfig":
        """Load ``bootmap.yaml`` from root, or return defaults if absent."""
        path = Path(root) / CONFIG_FILENAME
        if path.exists():
            return cls.from_yaml(path)
        return cls()
