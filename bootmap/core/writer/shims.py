"""Legacy entry points that delegate to the generated autoload module."""

from pathlib import Path
from typing import List, Sequence

from bootmap.io.files import atomic_write_text

from .codegen import (
    Assign,
    Blank,
    ExprStmt,
    Import,
    ImportFrom,
    Literal,
    Module,
    Name,
    call,
    render_module,
)
from .errors import FilesystemError

MAIN_MODULE_NAME = "autoload.py"
LEGACY_SHIM_NAMES = ("hh_autoload.py", "autoload_legacy.py")
GENERATED_BANNER = "This file was generated by bootmap. Do not edit it manually."


def build_shim(main_name: str = MAIN_MODULE_NAME) -> Module:
    here = call(
        "os.path.dirname", call("os.path.abspath", Name("__file__"))
    )
    main_path = call("os.path.join", here, Literal(main_name))
    return Module(
        header=[GENERATED_BANNER],
        docstring=f"Compatibility entry point that delegates to {main_name}.",
        body=[
            Blank(),
            Import("os"),
            Blank(),
            ImportFrom("bootmap.runtime", "loader", alias="_loader"),
            Blank(),
            Assign("_autoload", call("_loader.require_file", main_path)),
            ExprStmt(call("_autoload.initialize")),
        ],
    )


def render_shim(main_name: str = MAIN_MODULE_NAME) -> str:
    return render_module(build_shim(main_name))


def write_shims(
    out_dir,
    names: Sequence[str] = LEGACY_SHIM_NAMES,
    main_name: str = MAIN_MODULE_NAME,
) -> List[Path]:
    """Write one shim per name into ``out_dir`` and return their paths."""
    content = render_shim(main_name)
    written = []
    for name in names:
        target = Path(out_dir) / name
        try:
            atomic_write_text(target, content)
        except OSError as exc:
            raise FilesystemError(str(target), exc) from exc
        written.append(target)
    return written
