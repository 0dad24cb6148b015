"""Runtime side of bootmap: the loader generated modules register with."""

from .loader import (
    FAILURE_SLOT,
    FailureHandler,
    SymbolNotFoundError,
    disable_fallback_loaders,
    register_fallback,
    require_file,
    reset,
    resolve,
    set_paths,
)

__all__ = [
    "FAILURE_SLOT",
    "FailureHandler",
    "SymbolNotFoundError",
    "disable_fallback_loaders",
    "register_fallback",
    "require_file",
    "reset",
    "resolve",
    "set_paths",
]
