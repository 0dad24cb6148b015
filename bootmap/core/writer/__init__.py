"""Bootstrap writer: compiles an autoload map into ``autoload.py``."""

from .codegen import Module, render_literal, render_module
from .config import WriterConfig, WriterConfigBuilder
from .emitter import BootstrapWriter, EmissionResult, generate_build_id, write_bootstrap
from .errors import (
    BootmapError,
    ConfigurationError,
    FilesystemError,
    InvalidFailureHandlerError,
    MissingConfigurationError,
    PathOutsideRootError,
    ReservedKindError,
    RootNotSetError,
)
from .resolver import PathResolver
from .serializer import relativize_map, serialize_map
from .shims import LEGACY_SHIM_NAMES, MAIN_MODULE_NAME, render_shim, write_shims

__all__ = [
    "WriterConfig",
    "WriterConfigBuilder",
    "BootstrapWriter",
    "EmissionResult",
    "write_bootstrap",
    "generate_build_id",
    "PathResolver",
    "relativize_map",
    "serialize_map",
    "Module",
    "render_literal",
    "render_module",
    "LEGACY_SHIM_NAMES",
    "MAIN_MODULE_NAME",
    "render_shim",
    "write_shims",
    "BootmapError",
    "ConfigurationError",
    "MissingConfigurationError",
    "RootNotSetError",
    "InvalidFailureHandlerError",
    "ReservedKindError",
    "PathOutsideRootError",
    "FilesystemError",
]
