"""Minimal Python code representation and pretty printer.

Generated modules are assembled from the nodes below and rendered by
:func:`render_module`. Literal quoting happens only in
:func:`render_literal`, which keeps escaping independent of how the
emitter orders its declarations.

Example
-------
>>> module = Module(
...     docstring="Example.",
...     body=[Assign("_ROOT", Literal("/proj/"))],
... )
>>> print(render_module(module))
"""

from dataclasses import dataclass, field
from functools import singledispatch
from typing import Any, List, Optional, Sequence, Union

INDENT = "    "


# ---------------------------------------------------------------------------
# Expressions
# ---------------------------------------------------------------------------


@dataclass
class Literal:
    value: Any


@dataclass
class Name:
    id: str


@dataclass
class Attribute:
    value: "Expr"
    attr: str


@dataclass
class Call:
    func: "Expr"
    args: List["Expr"] = field(default_factory=list)


@dataclass
class BinOp:
    left: "Expr"
    op: str
    right: "Expr"


@dataclass
class Subscript:
    value: "Expr"
    index: "Expr"


Expr = Union[Literal, Name, Attribute, Call, BinOp, Subscript]


def dotted(path: str) -> Expr:
    """Build a Name/Attribute chain from ``a.b.c``."""
    head, *rest = path.split(".")
    expr: Expr = Name(head)
    for attr in rest:
        expr = Attribute(expr, attr)
    return expr


def call(path: str, *args: Expr) -> Call:
    return Call(dotted(path), list(args))


# ---------------------------------------------------------------------------
# Statements
# ---------------------------------------------------------------------------


@dataclass
class Comment:
    text: str


@dataclass
class Blank:
    pass


@dataclass
class Import:
    module: str
    alias: Optional[str] = None


@dataclass
class ImportFrom:
    module: str
    name: str
    alias: Optional[str] = None


@dataclass
class Assign:
    target: Union[str, Expr]
    value: Expr


@dataclass
class ExprStmt:
    value: Expr


@dataclass
class Global:
    names: List[str]


@dataclass
class Return:
    value: Optional[Expr] = None


@dataclass
class If:
    test: Expr
    body: List["Stmt"]
    orelse: List["Stmt"] = field(default_factory=list)


@dataclass
class With:
    context: Expr
    body: List["Stmt"]


@dataclass
class FunctionDef:
    name: str
    body: List["Stmt"]
    docstring: Optional[str] = None
    returns: Optional[str] = None


Stmt = Union[
    Comment, Blank, Import, ImportFrom, Assign, ExprStmt, Global, Return, If, With, FunctionDef
]


@dataclass
class Module:
    """A generated module: header comments, docstring and top-level body."""

    body: List[Stmt]
    docstring: Optional[str] = None
    header: List[str] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


def render_literal(value: Any, indent: int = 0) -> str:
    """Render a Python literal.

    Dicts are rendered one entry per line with sorted keys; non-empty lists
    one item per line. Output round-trips through ``ast.literal_eval``.
    """
    pad = INDENT * indent
    if value is None or isinstance(value, (bool, int, float)):
        return repr(value)
    if isinstance(value, str):
        return repr(value)
    if isinstance(value, dict):
        if not value:
            return "{}"
        lines = ["{"]
        for key in sorted(value):
            rendered = render_literal(value[key], indent + 1)
            lines.append(f"{pad}{INDENT}{render_literal(key)}: {rendered},")
        lines.append(f"{pad}}}")
        return "\n".join(lines)
    if isinstance(value, list):
        if not value:
            return "[]"
        lines = ["["]
        for item in value:
            lines.append(f"{pad}{INDENT}{render_literal(item, indent + 1)},")
        lines.append(f"{pad}]")
        return "\n".join(lines)
    if isinstance(value, tuple):
        items = [render_literal(item, indent) for item in value]
        if len(items) == 1:
            return f"({items[0]},)"
        return "(" + ", ".join(items) + ")"
    raise TypeError(f"Cannot render {type(value).__name__} as a literal")


@singledispatch
def render_expr(expr, indent: int = 0) -> str:
    raise TypeError(f"Unknown expression node: {type(expr).__name__}")


@render_expr.register
def _(expr: Literal, indent: int = 0) -> str:
    return render_literal(expr.value, indent)


@render_expr.register
def _(expr: Name, indent: int = 0) -> str:
    return expr.id


@render_expr.register
def _(expr: Attribute, indent: int = 0) -> str:
    return f"{render_expr(expr.value, indent)}.{expr.attr}"


@render_expr.register
def _(expr: Call, indent: int = 0) -> str:
    args = ", ".join(render_expr(arg, indent) for arg in expr.args)
    return f"{render_expr(expr.func, indent)}({args})"


@render_expr.register
def _(expr: BinOp, indent: int = 0) -> str:
    return f"{render_expr(expr.left, indent)} {expr.op} {render_expr(expr.right, indent)}"


@render_expr.register
def _(expr: Subscript, indent: int = 0) -> str:
    return f"{render_expr(expr.value, indent)}[{render_expr(expr.index, indent)}]"


def _render_docstring(text: str, indent: int) -> List[str]:
    pad = INDENT * indent
    if '"""' in text or text.endswith("\\"):
        return [pad + repr(text)]
    lines = text.strip("\n").split("\n")
    if len(lines) == 1:
        return [f'{pad}"""{lines[0]}"""']
    rendered = [f'{pad}"""{lines[0]}']
    rendered.extend(f"{pad}{line}" if line else "" for line in lines[1:])
    rendered.append(f'{pad}"""')
    return rendered


def _render_block(body: Sequence[Stmt], indent: int) -> List[str]:
    if not body:
        return [INDENT * indent + "pass"]
    lines: List[str] = []
    for stmt in body:
        lines.extend(render_stmt(stmt, indent))
    return lines


@singledispatch
def render_stmt(stmt, indent: int = 0) -> List[str]:
    raise TypeError(f"Unknown statement node: {type(stmt).__name__}")


@render_stmt.register
def _(stmt: Comment, indent: int = 0) -> List[str]:
    pad = INDENT * indent
    return [f"{pad}# {line}".rstrip() for line in stmt.text.split("\n")]


@render_stmt.register
def _(stmt: Blank, indent: int = 0) -> List[str]:
    return [""]


@render_stmt.register
def _(stmt: Import, indent: int = 0) -> List[str]:
    alias = f" as {stmt.alias}" if stmt.alias else ""
    return [f"{INDENT * indent}import {stmt.module}{alias}"]


@render_stmt.register
def _(stmt: ImportFrom, indent: int = 0) -> List[str]:
    alias = f" as {stmt.alias}" if stmt.alias else ""
    return [f"{INDENT * indent}from {stmt.module} import {stmt.name}{alias}"]


@render_stmt.register
def _(stmt: Assign, indent: int = 0) -> List[str]:
    target = stmt.target if isinstance(stmt.target, str) else render_expr(stmt.target, indent)
    return [f"{INDENT * indent}{target} = {render_expr(stmt.value, indent)}"]


@render_stmt.register
def _(stmt: ExprStmt, indent: int = 0) -> List[str]:
    return [INDENT * indent + render_expr(stmt.value, indent)]


@render_stmt.register
def _(stmt: Global, indent: int = 0) -> List[str]:
    return [f"{INDENT * indent}global {', '.join(stmt.names)}"]


@render_stmt.register
def _(stmt: Return, indent: int = 0) -> List[str]:
    if stmt.value is None:
        return [INDENT * indent + "return"]
    return [f"{INDENT * indent}return {render_expr(stmt.value, indent)}"]


@render_stmt.register
def _(stmt: If, indent: int = 0) -> List[str]:
    lines = [f"{INDENT * indent}if {render_expr(stmt.test, indent)}:"]
    lines.extend(_render_block(stmt.body, indent + 1))
    if stmt.orelse:
        lines.append(f"{INDENT * indent}else:")
        lines.extend(_render_block(stmt.orelse, indent + 1))
    return lines


@render_stmt.register
def _(stmt: With, indent: int = 0) -> List[str]:
    lines = [f"{INDENT * indent}with {render_expr(stmt.context, indent)}:"]
    lines.extend(_render_block(stmt.body, indent + 1))
    return lines


@render_stmt.register
def _(stmt: FunctionDef, indent: int = 0) -> List[str]:
    returns = f" -> {stmt.returns}" if stmt.returns else ""
    lines = [f"{INDENT * indent}def {stmt.name}(){returns}:"]
    if stmt.docstring:
        lines.extend(_render_docstring(stmt.docstring, indent + 1))
    lines.extend(_render_block(stmt.body, indent + 1))
    return lines


def render_module(module: Module) -> str:
    """Render a module to source text ending in a single newline."""
    lines: List[str] = [f"# {line}".rstrip() for line in module.header]
    if module.docstring:
        lines.extend(_render_docstring(module.docstring, 0))

    previous: Optional[Stmt] = None
    for stmt in module.body:
        if isinstance(stmt, FunctionDef) or isinstance(previous, FunctionDef):
            while lines and lines[-1] == "":
                lines.pop()
            lines.extend(["", ""])
        lines.extend(render_stmt(stmt, 0))
        previous = stmt

    while lines and lines[-1] == "":
        lines.pop()
    return "\n".join(lines) + "\n"
