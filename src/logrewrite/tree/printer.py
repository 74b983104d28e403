"""Render tree nodes as Java-like source text."""

from __future__ import annotations

from logrewrite.tree.expressions import (
    BinaryOp,
    Concat,
    Constant,
    Expression,
    FieldAccess,
    Identifier,
    Lambda,
    MethodCall,
    NewArray,
    NewInstance,
    Opaque,
)
from logrewrite.tree.statements import (
    CompilationUnit,
    CompoundStatement,
    ExpressionStatement,
    IfStatement,
    MethodDeclaration,
    OpaqueStatement,
    Statement,
)


INDENT = "    "

_PRECEDENCE: dict[str, int] = {
    "*": 12,
    "/": 12,
    "%": 12,
    "+": 11,
    "-": 11,
    "<": 9,
    ">": 9,
    "<=": 9,
    ">=": 9,
    "==": 8,
    "!=": 8,
    "&": 7,
    "^": 6,
    "|": 5,
    "&&": 4,
    "||": 3,
}
_ATOM = 100

_ESCAPES: dict[str, str] = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\t": "\\t",
    "\r": "\\r",
    "\b": "\\b",
    "\f": "\\f",
}


def escape_java_string(text: str) -> str:
    """Escape runtime text so it can sit between double quotes in source."""
    return "".join(_escape_char(c) for c in text)


def _escape_char(c: str) -> str:
    if c in _ESCAPES:
        return _ESCAPES[c]
    if ord(c) < 0x20:
        return f"\\u{ord(c):04x}"
    return c


def _render_constant(node: Constant) -> str:
    match node.literal_kind:
        case "string":
            return f'"{escape_java_string(str(node.value))}"'
        case "char":
            text = str(node.value)
            return "'\\''" if text == "'" else f"'{escape_java_string(text)}'"
        case "long":
            return f"{node.value}L"
        case "float":
            return f"{node.value}f"
        case "boolean":
            return "true" if node.value else "false"
        case "null":
            return "null"
        case _:
            return str(node.value)


def _precedence(expr: Expression) -> int:
    match expr:
        case Concat():
            return _PRECEDENCE["+"]
        case BinaryOp(operator=op):
            return _PRECEDENCE.get(op, 0)
        case Lambda():
            return 0
        case _:
            return _ATOM


def _operand(expr: Expression, parent: int, *, right: bool, depth: int) -> str:
    text = render_expression(expr, depth)
    own = _precedence(expr)
    if own < parent or (right and own == parent):
        return f"({text})"
    return text


def _simple_name(fqn: str) -> str:
    return fqn.rsplit(".", 1)[-1]


def render_expression(expr: Expression, depth: int = 0) -> str:
    """Render an expression; ``depth`` is the indentation level for block lambdas."""
    match expr:
        case Constant():
            return _render_constant(expr)
        case Identifier(name=name):
            return name
        case FieldAccess(target=target, name=name):
            return f"{render_expression(target, depth)}.{name}"
        case MethodCall(target=target, name=name, args=args):
            rendered_args = ", ".join(render_expression(a, depth) for a in args)
            if target is None:
                return f"{name}({rendered_args})"
            receiver = render_expression(target, depth)
            if _precedence(target) < _ATOM:
                receiver = f"({receiver})"
            return f"{receiver}.{name}({rendered_args})"
        case Concat(left=left, right=right):
            prec = _PRECEDENCE["+"]
            return (
                f"{_operand(left, prec, right=False, depth=depth)} + "
                f"{_operand(right, prec, right=True, depth=depth)}"
            )
        case BinaryOp(operator=op, left=left, right=right):
            prec = _PRECEDENCE.get(op, 0)
            return (
                f"{_operand(left, prec, right=False, depth=depth)} {op} "
                f"{_operand(right, prec, right=True, depth=depth)}"
            )
        case NewInstance(type=type_, args=args):
            rendered_args = ", ".join(render_expression(a, depth) for a in args)
            return f"new {_simple_name(type_.fqn)}({rendered_args})"
        case NewArray(element_type=element_type, elements=elements):
            rendered = ", ".join(render_expression(e, depth) for e in elements)
            return f"new {_simple_name(element_type.fqn)}[]{{{rendered}}}"
        case Lambda(params=params, body=body):
            head = params[0] if len(params) == 1 else f"({', '.join(params)})"
            if isinstance(body, tuple):
                inner = render_statements(body, depth + 1)
                closing = INDENT * depth + "}"
                return f"{head} -> {{\n{inner}\n{closing}" if body else f"{head} -> {{}}"
            return f"{head} -> {render_expression(body, depth)}"
        case Opaque(source=source):
            return source


def render_statement(stmt: Statement, depth: int = 0) -> str:
    """Render one statement at the given indentation level."""
    pad = INDENT * depth
    match stmt:
        case ExpressionStatement(expression=expression):
            return f"{pad}{render_expression(expression, depth)};"
        case IfStatement(condition=condition, then_body=then_body, else_body=else_body):
            text = f"{pad}if ({render_expression(condition, depth)}) {_render_block(then_body, depth)}"
            if else_body is not None:
                text += f" else {_render_block(else_body, depth)}"
            return text
        case CompoundStatement(header=header, body=body):
            return f"{pad}{header} {_render_block(body, depth)}"
        case OpaqueStatement(source=source):
            return f"{pad}{source}"


def _render_block(body: tuple[Statement, ...], depth: int) -> str:
    if not body:
        return "{\n" + INDENT * depth + "}"
    return "{\n" + render_statements(body, depth + 1) + "\n" + INDENT * depth + "}"


def render_statements(statements: tuple[Statement, ...] | list[Statement], depth: int = 0) -> str:
    """Render a statement sequence, one statement per line group."""
    return "\n".join(render_statement(s, depth) for s in statements)


def render_method(method: MethodDeclaration, depth: int = 0) -> str:
    pad = INDENT * depth
    return f"{pad}void {method.name}() {_render_block(method.body, depth)}"


def render_unit(unit: CompilationUnit) -> str:
    return "\n\n".join(render_method(m) for m in unit.methods) + "\n"


__all__ = [
    "escape_java_string",
    "render_expression",
    "render_method",
    "render_statement",
    "render_statements",
    "render_unit",
]
