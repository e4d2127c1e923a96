"""Syntax tree: attribute sets, compound expressions, lambdas and operators."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Union

from nixlens.ast_basic import (
    Dot,
    Expr,
    ExprString,
    Identifier,
    Interpolation,
    Misc,
    Node,
    NodeKind,
)
from nixlens.ranges import LexerCursorRange


def _present(*nodes: Node | None) -> list[Node]:
    return [n for n in nodes if n is not None]


class AttrNameKind(enum.Enum):
    ID = "id"
    STRING = "string"
    INTERPOLATION = "interpolation"


class AttrName(Node):
    """An attribute name: an identifier, a string or an interpolation."""

    def __init__(
        self,
        value: Union[Identifier, ExprString, Interpolation],
        node_range: LexerCursorRange | None = None,
    ):
        if value is None:
            raise ValueError("attribute name value must not be None")
        if isinstance(value, Identifier):
            kind = AttrNameKind.ID
        elif isinstance(value, ExprString):
            kind = AttrNameKind.STRING
        elif isinstance(value, Interpolation):
            kind = AttrNameKind.INTERPOLATION
        else:
            raise TypeError(f"unsupported attribute name: {value!r}")
        super().__init__(
            NodeKind.ATTR_NAME, node_range if node_range is not None else value.range
        )
        self.name_kind = kind
        self._value = value

    def is_static(self) -> bool:
        """Whether the name is known without evaluation."""
        if self.name_kind is AttrNameKind.ID:
            return True
        if self.name_kind is AttrNameKind.INTERPOLATION:
            return False
        return self.string.is_literal()

    def static_name(self) -> str:
        if not self.is_static():
            raise ValueError("attribute name is not static")
        if self.name_kind is AttrNameKind.ID:
            return self.id.name
        return self.string.literal()

    @property
    def id(self) -> Identifier:
        if self.name_kind is not AttrNameKind.ID:
            raise ValueError("attribute name is not an identifier")
        return self._value  # type: ignore[return-value]

    @property
    def string(self) -> ExprString:
        if self.name_kind is not AttrNameKind.STRING:
            raise ValueError("attribute name is not a string")
        return self._value  # type: ignore[return-value]

    @property
    def interpolation(self) -> Interpolation:
        if self.name_kind is not AttrNameKind.INTERPOLATION:
            raise ValueError("attribute name is not an interpolation")
        return self._value  # type: ignore[return-value]

    def children(self) -> list[Node]:
        return [self._value]


class AttrPath(Node):
    """A dotted sequence of attribute names."""

    def __init__(
        self,
        node_range: LexerCursorRange,
        names: list[AttrName | None],
        dots: list[Dot | None] | None = None,
    ):
        super().__init__(NodeKind.ATTR_PATH, node_range)
        self.names = list(names)
        self.dots = list(dots or [])

    def children(self) -> list[Node]:
        return _present(*self.names, *self.dots)


class Binding(Node):
    """``path = value;``; the value may be missing."""

    def __init__(
        self, node_range: LexerCursorRange, path: AttrPath, value: Expr | None
    ):
        if path is None:
            raise ValueError("path must not be None")
        super().__init__(NodeKind.BINDING, node_range)
        self.path = path
        self.value = value

    def children(self) -> list[Node]:
        return _present(self.path, self.value)


class Inherit(Node):
    """``inherit a b;`` or ``inherit (expr) a b;``."""

    def __init__(
        self,
        node_range: LexerCursorRange,
        names: list[AttrName | None],
        expr: Expr | None = None,
    ):
        super().__init__(NodeKind.INHERIT, node_range)
        self.names = list(names)
        self.expr = expr

    @property
    def has_expr(self) -> bool:
        return self.expr is not None

    def children(self) -> list[Node]:
        return _present(*self.names, self.expr)


class Binds(Node):
    """The bindings and inherits of an attribute set or let."""

    def __init__(self, node_range: LexerCursorRange, bindings: list[Node | None]):
        super().__init__(NodeKind.BINDS, node_range)
        self.bindings = list(bindings)

    def children(self) -> list[Node]:
        return _present(*self.bindings)


class AttributeKind(enum.Enum):
    PLAIN = "plain"
    INHERIT = "inherit"
    INHERIT_FROM = "inherit_from"


@dataclass
class Attribute:
    """A desugared attribute: its key syntax, value and origin."""

    key: Node
    value: Expr | None
    kind: AttributeKind = AttributeKind.PLAIN

    def __post_init__(self) -> None:
        if self.key is None:
            raise ValueError("key must not be None")

    def from_inherit(self) -> bool:
        return self.kind in (AttributeKind.INHERIT, AttributeKind.INHERIT_FROM)


class SemaAttrs:
    """An attribute set after deduplication and desugaring."""

    def __init__(
        self,
        static: dict[str, Attribute] | None = None,
        dynamic: list[Attribute] | None = None,
        recursive: Misc | None = None,
    ):
        self.static: dict[str, Attribute] = dict(static or {})
        self.dynamic: list[Attribute] = list(dynamic or [])
        self.recursive = recursive

    @property
    def static_attrs(self) -> dict[str, Attribute]:
        """Attributes whose keys are known statically, ordered by key."""
        return {name: self.static[name] for name in sorted(self.static)}

    @property
    def dynamic_attrs(self) -> list[Attribute]:
        """Attributes whose keys need evaluation."""
        return self.dynamic

    def is_recursive(self) -> bool:
        return self.recursive is not None


class ExprAttrs(Expr):
    def __init__(
        self,
        node_range: LexerCursorRange,
        binds: Binds | None,
        rec: Misc | None,
        sema: SemaAttrs | None = None,
    ):
        super().__init__(NodeKind.EXPR_ATTRS, node_range)
        self.binds = binds
        self.rec = rec
        self.sema = sema if sema is not None else SemaAttrs(recursive=rec)

    def is_recursive(self) -> bool:
        return self.rec is not None

    def children(self) -> list[Node]:
        return _present(self.binds, self.rec)


class ExprSelect(Expr):
    """``expr.path`` or ``expr.path or default``."""

    def __init__(
        self,
        node_range: LexerCursorRange,
        expr: Expr,
        path: AttrPath | None,
        default: Expr | None = None,
    ):
        if expr is None:
            raise ValueError("expr must not be None")
        super().__init__(NodeKind.EXPR_SELECT, node_range)
        self.expr = expr
        self.path = path
        self.default = default

    def children(self) -> list[Node]:
        return _present(self.expr, self.path, self.default)


class ExprCall(Expr):
    """A function application."""

    def __init__(
        self, node_range: LexerCursorRange, fn: Expr, args: list[Expr | None]
    ):
        if fn is None:
            raise ValueError("fn must not be None")
        super().__init__(NodeKind.EXPR_CALL, node_range)
        self.fn = fn
        self.args = list(args)

    def children(self) -> list[Node]:
        return _present(self.fn, *self.args)


class ExprList(Expr):
    def __init__(self, node_range: LexerCursorRange, elements: list[Expr | None]):
        super().__init__(NodeKind.EXPR_LIST, node_range)
        self.elements = list(elements)

    def children(self) -> list[Node]:
        return _present(*self.elements)


class ExprIf(Expr):
    def __init__(
        self,
        node_range: LexerCursorRange,
        cond: Expr | None,
        then: Expr | None,
        else_expr: Expr | None,
    ):
        super().__init__(NodeKind.EXPR_IF, node_range)
        self.cond = cond
        self.then = then
        self.else_expr = else_expr

    def children(self) -> list[Node]:
        return _present(self.cond, self.then, self.else_expr)


class ExprAssert(Expr):
    def __init__(
        self, node_range: LexerCursorRange, cond: Expr | None, value: Expr | None
    ):
        super().__init__(NodeKind.EXPR_ASSERT, node_range)
        self.cond = cond
        self.value = value

    def children(self) -> list[Node]:
        return _present(self.cond, self.value)


class ExprLet(Expr):
    """``let binds in expr``."""

    def __init__(
        self,
        node_range: LexerCursorRange,
        kw_let: Misc,
        kw_in: Misc | None,
        expr: Expr | None,
        attrs: ExprAttrs | None,
    ):
        if kw_let is None:
            raise ValueError("kw_let must not be None")
        super().__init__(NodeKind.EXPR_LET, node_range)
        self.kw_let = kw_let
        self.kw_in = kw_in
        self.expr = expr
        self.attrs = attrs

    @property
    def binds(self) -> Binds | None:
        return self.attrs.binds if self.attrs is not None else None

    def children(self) -> list[Node]:
        return _present(self.kw_let, self.attrs, self.kw_in, self.expr)


class ExprWith(Expr):
    """``with with_expr; expr``."""

    def __init__(
        self,
        node_range: LexerCursorRange,
        kw_with: Misc,
        tok_semi: Misc | None,
        with_expr: Expr | None,
        expr: Expr | None,
    ):
        super().__init__(NodeKind.EXPR_WITH, node_range)
        self.kw_with = kw_with
        self.tok_semi = tok_semi
        self.with_expr = with_expr
        self.expr = expr

    def children(self) -> list[Node]:
        return _present(self.kw_with, self.tok_semi, self.with_expr, self.expr)


class Formal(Node):
    """One lambda formal: a name with an optional default, or ``...``."""

    def __init__(
        self,
        node_range: LexerCursorRange,
        comma: Misc | None = None,
        identifier: Identifier | None = None,
        default: Expr | None = None,
        ellipsis: Misc | None = None,
    ):
        if ellipsis is not None and (identifier is not None or default is not None):
            raise ValueError("an ellipsis formal has no name or default")
        super().__init__(NodeKind.FORMAL, node_range)
        self.comma = comma
        self.id = identifier
        self.default = default
        self._ellipsis = ellipsis

    @property
    def is_ellipsis(self) -> bool:
        return self._ellipsis is not None

    @property
    def ellipsis(self) -> Misc:
        if self._ellipsis is None:
            raise ValueError("formal is not an ellipsis")
        return self._ellipsis

    def children(self) -> list[Node]:
        if self._ellipsis is not None:
            return [self._ellipsis]
        return _present(self.id, self.default)


class Formals(Node):
    """The ``{ a, b ? 1, ... }`` part of a lambda."""

    def __init__(
        self,
        node_range: LexerCursorRange,
        members: list[Formal | None],
        dedup: dict[str, Formal] | None = None,
    ):
        super().__init__(NodeKind.FORMALS, node_range)
        self.members = list(members)
        self._dedup = dict(dedup or {})

    @property
    def dedup(self) -> dict[str, Formal]:
        """Deduplicated formals, ordered by name."""
        return {name: self._dedup[name] for name in sorted(self._dedup)}

    def children(self) -> list[Node]:
        return _present(*self.members)


class LambdaArg(Node):
    """A lambda argument: an identifier, formals, or both."""

    def __init__(
        self,
        node_range: LexerCursorRange,
        identifier: Identifier | None,
        formals: Formals | None,
    ):
        super().__init__(NodeKind.LAMBDA_ARG, node_range)
        self.id = identifier
        self.formals = formals

    def children(self) -> list[Node]:
        return _present(self.id, self.formals)


class ExprLambda(Expr):
    def __init__(
        self, node_range: LexerCursorRange, arg: LambdaArg | None, body: Expr | None
    ):
        super().__init__(NodeKind.EXPR_LAMBDA, node_range)
        self.arg = arg
        self.body = body

    def children(self) -> list[Node]:
        return _present(self.arg, self.body)


class Op(Node):
    """An operator token; ``op`` names the token kind."""

    def __init__(self, node_range: LexerCursorRange, op: str):
        super().__init__(NodeKind.OP, node_range)
        self.op = op


class ExprOp(Expr):
    """Base of unary and binary operator expressions."""

    def __init__(self, kind: NodeKind, node_range: LexerCursorRange, op: Op):
        if op is None:
            raise ValueError("op must not be None")
        super().__init__(kind, node_range)
        self.op = op

    def children(self) -> list[Node]:
        return [self.op]


class ExprBinOp(ExprOp):
    def __init__(
        self,
        node_range: LexerCursorRange,
        op: Op,
        lhs: Expr | None,
        rhs: Expr | None,
    ):
        super().__init__(NodeKind.EXPR_BIN_OP, node_range, op)
        self.lhs = lhs
        self.rhs = rhs

    def children(self) -> list[Node]:
        return _present(self.op, self.lhs, self.rhs)


class ExprOpHasAttr(ExprOp):
    """``expr ? path``."""

    def __init__(
        self,
        node_range: LexerCursorRange,
        op: Op,
        expr: Expr | None,
        path: AttrPath | None,
    ):
        super().__init__(NodeKind.EXPR_OP_HAS_ATTR, node_range, op)
        self.expr = expr
        self.attrpath = path

    def children(self) -> list[Node]:
        return _present(self.expr, self.attrpath)


class ExprUnaryOp(ExprOp):
    def __init__(self, node_range: LexerCursorRange, op: Op, expr: Expr | None):
        super().__init__(NodeKind.EXPR_UNARY_OP, node_range, op)
        self.expr = expr

    def children(self) -> list[Node]:
        return _present(self.op, self.expr)