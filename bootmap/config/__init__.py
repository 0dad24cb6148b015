"""Project configuration for bootmap.

Example
-------
>>> from pathlib import Path
>>> from bootmap.config import ProjectConfig
>>> config = ProjectConfig.from_yaml(Path("bootmap.yaml"))
>>> config.output_dir
'vendor'
"""

from .project import CONFIG_FILENAME, ProjectConfig

__all__ = [
    "CONFIG_FILENAME",
    "ProjectConfig",
]
