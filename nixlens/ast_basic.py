"""Syntax tree: the node base classes and simple expressions."""

from __future__ import annotations

import enum
from typing import Union

from nixlens.ranges import LexerCursor, LexerCursorRange, PositionRange


class NodeKind(enum.Enum):
    MISC = "Misc"
    IDENTIFIER = "Identifier"
    DOT = "Dot"
    ATTR_NAME = "AttrName"
    ATTR_PATH = "AttrPath"
    BINDING = "Binding"
    INHERIT = "Inherit"
    BINDS = "Binds"
    FORMAL = "Formal"
    FORMALS = "Formals"
    LAMBDA_ARG = "LambdaArg"
    INTERPOLATION = "Interpolation"
    INTERPOLATED_PARTS = "InterpolatedParts"
    OP = "Op"
    EXPR_INT = "ExprInt"
    EXPR_FLOAT = "ExprFloat"
    EXPR_STRING = "ExprString"
    EXPR_PATH = "ExprPath"
    EXPR_SPATH = "ExprSPath"
    EXPR_PAREN = "ExprParen"
    EXPR_VAR = "ExprVar"
    EXPR_ATTRS = "ExprAttrs"
    EXPR_SELECT = "ExprSelect"
    EXPR_CALL = "ExprCall"
    EXPR_LIST = "ExprList"
    EXPR_IF = "ExprIf"
    EXPR_ASSERT = "ExprAssert"
    EXPR_LET = "ExprLet"
    EXPR_WITH = "ExprWith"
    EXPR_LAMBDA = "ExprLambda"
    EXPR_BIN_OP = "ExprBinOp"
    EXPR_OP_HAS_ATTR = "ExprOpHasAttr"
    EXPR_UNARY_OP = "ExprUnaryOp"

    @property
    def is_expr(self) -> bool:
        return self.value.startswith("Expr")


_NOT_LAMBDA = frozenset(
    {
        NodeKind.EXPR_INT,
        NodeKind.EXPR_FLOAT,
        NodeKind.EXPR_ATTRS,
        NodeKind.EXPR_STRING,
        NodeKind.EXPR_PATH,
    }
)


class Node:
    """Base of every syntax node: a kind and a source range."""

    def __init__(self, kind: NodeKind, node_range: LexerCursorRange):
        self.kind = kind
        self.range = node_range

    def __repr__(self) -> str:
        return f"<{self.name} {self.range.lcur.offset}:{self.range.rcur.offset}>"

    @property
    def name(self) -> str:
        return self.kind.value

    @property
    def lcur(self) -> LexerCursor:
        return self.range.lcur

    @property
    def rcur(self) -> LexerCursor:
        return self.range.rcur

    @property
    def position_range(self) -> PositionRange:
        return self.range.position_range()

    def children(self) -> list[Node]:
        """Direct children, leaving out the missing ones."""
        return []

    def descend(self, position_range: PositionRange) -> Node | None:
        """The deepest node containing ``position_range``, or None."""
        if not self.position_range.contains(position_range):
            return None
        for child in self.children():
            if child.position_range.contains(position_range):
                return child.descend(position_range)
        return self

    def src(self, text: str) -> str:
        return text[self.lcur.offset : self.rcur.offset]


def _present(*nodes: Node | None) -> list[Node]:
    return [n for n in nodes if n is not None]


class Expr(Node):
    """Base of expression nodes."""

    def __init__(self, kind: NodeKind, node_range: LexerCursorRange):
        if not kind.is_expr:
            raise ValueError(f"{kind.value} is not an expression kind")
        super().__init__(kind, node_range)

    def maybe_lambda(self) -> bool:
        """Whether the expression might evaluate to a function."""
        return self.kind not in _NOT_LAMBDA


class Misc(Node):
    """A node whose location is all that matters: keywords, parentheses."""

    def __init__(self, node_range: LexerCursorRange):
        super().__init__(NodeKind.MISC, node_range)


class Identifier(Node):
    def __init__(self, node_range: LexerCursorRange, name: str):
        super().__init__(NodeKind.IDENTIFIER, node_range)
        self.id_name = name

    @property
    def name(self) -> str:  # type: ignore[override]
        return self.id_name


class Dot(Node):
    """A "." between two attribute names."""

    def __init__(self, node_range: LexerCursorRange, prev: Node, next_node: Node | None):
        if prev is None:
            raise ValueError("a dot needs a preceding node")
        super().__init__(NodeKind.DOT, node_range)
        self.prev = prev
        self.next = next_node


class ExprInt(Expr):
    def __init__(self, node_range: LexerCursorRange, value: int):
        super().__init__(NodeKind.EXPR_INT, node_range)
        self.value = value


class ExprFloat(Expr):
    def __init__(self, node_range: LexerCursorRange, value: float):
        super().__init__(NodeKind.EXPR_FLOAT, node_range)
        self.value = value


class Interpolation(Node):
    """A ``${expr}`` construct."""

    def __init__(self, node_range: LexerCursorRange, expr: Expr | None):
        super().__init__(NodeKind.INTERPOLATION, node_range)
        self.expr = expr

    def children(self) -> list[Node]:
        return _present(self.expr)


class InterpolablePart:
    """One fragment of a string or path: escaped text or an interpolation."""

    def __init__(self, value: Union[str, Interpolation]):
        if value is None:
            raise ValueError("interpolation must not be None")
        self._value = value

    @property
    def is_escaped(self) -> bool:
        return isinstance(self._value, str)

    @property
    def escaped(self) -> str:
        if not isinstance(self._value, str):
            raise ValueError("part is an interpolation")
        return self._value

    @property
    def interpolation(self) -> Interpolation:
        if isinstance(self._value, str):
            raise ValueError("part is escaped text")
        return self._value


class InterpolatedParts(Node):
    def __init__(self, node_range: LexerCursorRange, fragments: list[InterpolablePart]):
        super().__init__(NodeKind.INTERPOLATED_PARTS, node_range)
        self.fragments = list(fragments)

    def is_literal(self) -> bool:
        return len(self.fragments) == 1 and self.fragments[0].is_escaped

    def literal(self) -> str:
        if not self.is_literal():
            raise ValueError("parts are not a literal")
        return self.fragments[0].escaped

    def children(self) -> list[Node]:
        return [f.interpolation for f in self.fragments if not f.is_escaped]


class ExprString(Expr):
    def __init__(self, node_range: LexerCursorRange, parts: InterpolatedParts):
        if parts is None:
            raise ValueError("parts must not be None")
        super().__init__(NodeKind.EXPR_STRING, node_range)
        self.parts = parts

    def is_literal(self) -> bool:
        return self.parts.is_literal()

    def literal(self) -> str:
        return self.parts.literal()

    def children(self) -> list[Node]:
        return [self.parts]


class ExprPath(Expr):
    def __init__(self, node_range: LexerCursorRange, parts: InterpolatedParts):
        if parts is None:
            raise ValueError("parts must not be None")
        super().__init__(NodeKind.EXPR_PATH, node_range)
        self.parts = parts

    def children(self) -> list[Node]:
        return [self.parts]


class ExprSPath(Expr):
    """A search path such as ``<nixpkgs>``."""

    def __init__(self, node_range: LexerCursorRange, text: str):
        super().__init__(NodeKind.EXPR_SPATH, node_range)
        self.text = text


class ExprParen(Expr):
    def __init__(
        self,
        node_range: LexerCursorRange,
        expr: Expr | None,
        lparen: Misc | None,
        rparen: Misc | None,
    ):
        super().__init__(NodeKind.EXPR_PAREN, node_range)
        self.expr = expr
        self.lparen = lparen
        self.rparen = rparen

    def children(self) -> list[Node]:
        return _present(self.expr, self.lparen, self.rparen)


class ExprVar(Expr):
    def __init__(self, node_range: LexerCursorRange, identifier: Identifier):
        if identifier is None:
            raise ValueError("identifier must not be None")
        super().__init__(NodeKind.EXPR_VAR, node_range)
        self.id = identifier

    def children(self) -> list[Node]:
        return [self.id]