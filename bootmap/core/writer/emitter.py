"""Bootstrap module emitter."""

import logging
import os
import secrets
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Sequence

from bootmap.io.files import atomic_write_text

from .codegen import (
    Assign,
    BinOp,
    Blank,
    Comment,
    Expr,
    ExprStmt,
    FunctionDef,
    Global,
    If,
    Import,
    ImportFrom,
    Literal,
    Module,
    Name,
    Return,
    Stmt,
    Subscript,
    With,
    call,
    dotted,
    render_module,
)
from .config import WriterConfig
from .errors import FilesystemError, RootNotSetError
from .resolver import PathResolver
from .serializer import relativize_map
from .shims import GENERATED_BANNER, LEGACY_SHIM_NAMES, MAIN_MODULE_NAME, write_shims


def generate_build_id() -> str:
    """Return a unique identifier: UTC timestamp plus 16 random bytes."""
    timestamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
    return f"{timestamp}-{secrets.token_hex(16)}"


@dataclass
class EmissionResult:
    """Summary of one written bootstrap artifact."""

    artifact: Path
    build_id: str
    symbol_count: int
    file_count: int
    shims: List[Path] = field(default_factory=list)

    @property
    def paths(self) -> List[Path]:
        return [self.artifact, *self.shims]

    def to_record(self) -> dict:
        return {
            "artifact": str(self.artifact),
            "build_id": self.build_id,
            "symbol_count": self.symbol_count,
            "file_count": self.file_count,
            "shims": [str(path) for path in self.shims],
        }


class BootstrapWriter:
    """Emits an ``autoload.py`` bootstrap module from a WriterConfig.

    Every call to :meth:`render` (and therefore to the write methods) uses
    a fresh PathResolver and a fresh build id, so a writer can be reused
    and each emission stands on its own.

    Parameters
    ----------
    config : WriterConfig
        Validated emission settings
    logger : logging.Logger, optional
        Logger instance. If None, uses the module logger.
    """

    def __init__(self, config: WriterConfig, logger: Optional[logging.Logger] = None):
        self.config = config
        self.logger = logger or logging.getLogger(__name__)

    # ------------------------------------------------------------------
    # Assembly
    # ------------------------------------------------------------------

    def _root_expr(self) -> Expr:
        if self.config.relative_root:
            artifact_dir = call(
                "os.path.dirname", call("os.path.abspath", Name("__file__"))
            )
            return BinOp(call("os.path.dirname", artifact_dir), "+", dotted("os.sep"))
        if self.config.root is None:
            raise RootNotSetError()
        return Literal(self.config.root.rstrip(os.sep) + os.sep)

    def _path_expr(self, relative: str) -> Expr:
        if self.config.relative_root:
            return call("os.path.join", Name("_ROOT"), Literal(relative))
        return Literal(self.config.root.rstrip(os.sep) + os.sep + relative)

    def _registration(self) -> List[Stmt]:
        register = ExprStmt(call("_loader.set_paths", Name("autoload_map"), Name("_ROOT")))
        if self.config.failure_handler is None:
            return [register]

        module, _, type_name = self.config.failure_handler.rpartition(".")
        return [
            ImportFrom(module, type_name, alias="_FailureHandler"),
            If(
                call("_FailureHandler.is_enabled"),
                body=[
                    Assign("handler", call("_FailureHandler")),
                    Assign(
                        Subscript(Name("autoload_map"), dotted("_loader.FAILURE_SLOT")),
                        dotted("handler.handle_failure"),
                    ),
                    register,
                    ExprStmt(call("handler.initialize")),
                ],
                orelse=[register],
            ),
        ]

    def _initialize(self) -> FunctionDef:
        guarded = [
            If(Name("_initialized"), body=[Return()]),
            Assign("_initialized", Literal(True)),
            ExprStmt(call("_loader.disable_fallback_loaders")),
            Assign("autoload_map", call("map")),
            *self._registration(),
        ]
        return FunctionDef(
            "initialize",
            docstring="Register the autoload map. Only the first call has any effect.",
            returns="None",
            body=[
                Global(["_initialized"]),
                With(Name("_init_lock"), body=guarded),
            ],
        )

    def build_module(self, build_id: Optional[str] = None) -> Module:
        """Assemble the artifact. Raises on any resolution error."""
        resolver = PathResolver(self.config.root)
        requires = [resolver.resolve(path) for path in self.config.files]
        resolved_map = relativize_map(self.config.autoload_map, resolver)

        stats = resolver.cache_info()
        self.logger.debug(
            "Resolved %d distinct paths (%d cache hits)", stats.size, stats.hits
        )

        body: List[Stmt] = [
            Blank(),
            Import("copy"),
            Import("os"),
            Import("threading"),
            Blank(),
            ImportFrom("bootmap.runtime", "loader", alias="_loader"),
            Blank(),
            Assign("_ROOT", self._root_expr()),
            Assign("_BUILD_ID", Literal(build_id or generate_build_id())),
            Assign("_IS_DEV", Literal(self.config.is_dev)),
            Assign("_MAP", Literal(resolved_map)),
            Blank(),
        ]
        if requires:
            body.append(Comment("Files loaded unconditionally, in order"))
            body.extend(
                ExprStmt(call("_loader.require_file", self._path_expr(relative)))
                for relative in requires
            )
            body.append(Blank())
        body.extend(
            [
                Assign("_init_lock", call("threading.RLock")),
                Assign("_initialized", Literal(False)),
                FunctionDef("build_id", [Return(Name("_BUILD_ID"))], returns="str"),
                FunctionDef("root", [Return(Name("_ROOT"))], returns="str"),
                FunctionDef("is_dev", [Return(Name("_IS_DEV"))], returns="bool"),
                FunctionDef(
                    "map",
                    [Return(call("copy.deepcopy", Name("_MAP")))],
                    docstring="Return a copy of the autoload map, paths relative to root().",
                    returns="dict",
                ),
                self._initialize(),
            ]
        )

        return Module(
            header=[GENERATED_BANNER, "To regenerate it, run: bootmap write"],
            docstring=(
                "Autoload bootstrap module.\n\n"
                "Call ``initialize()`` once at startup to register the autoload map\n"
                "with ``bootmap.runtime.loader``.\n"
            ),
            body=body,
        )

    def render(self, build_id: Optional[str] = None) -> str:
        return render_module(self.build_module(build_id))

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def write_to_file(self, destination, build_id: Optional[str] = None) -> EmissionResult:
        """Render and atomically write the artifact to ``destination``.

        Rendering completes before the destination is touched, so a
        configuration or path error never leaves a partial file behind.
        """
        build_id = build_id or generate_build_id()
        content = self.render(build_id)

        destination = Path(destination)
        try:
            atomic_write_text(destination, content)
        except OSError as exc:
            raise FilesystemError(str(destination), exc) from exc

        result = EmissionResult(
            artifact=destination,
            build_id=build_id,
            symbol_count=self.config.symbol_count(),
            file_count=len(self.config.files),
        )
        self.logger.info(
            "Wrote %s (build %s, %d symbols, %d files)",
            destination,
            build_id,
            result.symbol_count,
            result.file_count,
        )
        return result

    def write_to_directory(
        self,
        out_dir,
        shim_names: Sequence[str] = LEGACY_SHIM_NAMES,
        build_id: Optional[str] = None,
    ) -> EmissionResult:
        """Write ``autoload.py`` and the legacy shims into ``out_dir``."""
        out_dir = Path(out_dir)
        result = self.write_to_file(out_dir / MAIN_MODULE_NAME, build_id)
        result.shims = write_shims(out_dir, shim_names, MAIN_MODULE_NAME)
        if result.shims:
            self.logger.info(
                "Wrote legacy shims: %s", ", ".join(p.name for p in result.shims)
            )
        return result


def write_bootstrap(config: WriterConfig, out_dir, **kwargs) -> EmissionResult:
    """Convenience function to write a bootstrap module and its shims."""
    return BootstrapWriter(config).write_to_directory(out_dir, **kwargs)
