"""Semantic tokens: classify names, strings and selections for highlighting."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from nixlens.ast_basic import ExprString, ExprVar, Node
from nixlens.ast_compound import (
    AttrNameKind,
    ExprAttrs,
    ExprLambda,
    ExprSelect,
    LambdaArg,
    SemaAttrs,
)
from nixlens.lookup import LookupResultKind, VariableLookupAnalysis
from nixlens.ranges import LexerCursor, LspPosition, to_lsp_position


class SemaType(enum.IntEnum):
    """Token types, in the order of the legend the server announces."""

    FUNCTION = 0
    STRING = 1
    NUMBER = 2
    SELECT = 3
    BUILTIN = 4
    DEFINED = 5
    FROM_WITH = 6
    UNDEFINED = 7
    NULL = 8
    BOOL = 9
    ATTR_NAME = 10
    LAMBDA_ARG = 11
    LAMBDA_FORMAL = 12


class SemaModifier(enum.IntFlag):
    """Token modifier bits, in the order of the announced legend."""

    BUILTIN = 1 << 0
    DEPRECATED = 1 << 1
    DYNAMIC = 1 << 2


@dataclass(frozen=True)
class SemanticToken:
    """A token, positioned relative to the token before it."""

    delta_line: int
    delta_start: int
    length: int
    token_type: int
    token_modifiers: int


@dataclass(frozen=True)
class _RawToken:
    position: LspPosition
    length: int
    token_type: int
    token_modifiers: int


class SemanticTokenBuilder:
    """Walks a syntax tree and gathers semantic tokens."""

    def __init__(self, lookup: VariableLookupAnalysis):
        self.lookup = lookup
        self._raw: list[_RawToken] = []

    def _add_at(
        self, cursor: LexerCursor, length: int, token_type: int, modifiers: int
    ) -> None:
        self._raw.append(
            _RawToken(to_lsp_position(cursor), length, int(token_type), int(modifiers))
        )

    @staticmethod
    def _skip(node: Node) -> bool:
        # Tokens spanning several lines are left out.
        return node.range.lcur.line != node.range.rcur.line

    @staticmethod
    def _length(node: Node) -> int:
        return node.range.rcur.offset - node.range.lcur.offset

    def add(self, node: Node, token_type: int, modifiers: int) -> None:
        """Record ``node`` as a token, unless it spans several lines."""
        if self._skip(node):
            return
        self._add_at(node.lcur, self._length(node), token_type, modifiers)

    def _string(self, string: ExprString) -> None:
        if string.is_literal():
            self.add(string, SemaType.STRING, 0)

    def _var(self, var: ExprVar) -> None:
        name = var.id.name
        if name in ("true", "false"):
            self.add(var, SemaType.BOOL, SemaModifier.BUILTIN)
            return
        if name == "null":
            self.add(var, SemaType.NULL, 0)
            return

        result = self.lookup.query(var)
        if result.definition is not None and result.definition.is_builtin():
            self.add(var, SemaType.BUILTIN, SemaModifier.BUILTIN)
        elif result.kind is LookupResultKind.DEFINED:
            self.add(var, SemaType.DEFINED, 0)
        elif result.kind is LookupResultKind.FROM_WITH:
            self.add(var, SemaType.FROM_WITH, SemaModifier.DYNAMIC)
        else:
            self.add(var, SemaType.DEFINED, SemaModifier.DEPRECATED)

    def _select(self, select: ExprSelect) -> None:
        self.dfs(select.expr)
        self.dfs(select.default)
        if select.path is None:
            return
        for name in select.path.names:
            if name is None:
                continue
            if name.is_static() and name.name_kind is AttrNameKind.ID:
                self.add(name, SemaType.SELECT, 0)

    def _attrs(self, sema: SemaAttrs) -> None:
        for attr in sema.static_attrs.values():
            if attr.value is None:
                continue
            # Inherited names also create variables; mark them only once.
            if attr.from_inherit():
                continue
            self.add(attr.key, SemaType.ATTR_NAME, 0)
            self.dfs(attr.value)
        for attr in sema.dynamic_attrs:
            self.dfs(attr.value)

    def _lambda_arg(self, arg: LambdaArg) -> None:
        if arg.id is not None:
            self.add(arg.id, SemaType.LAMBDA_ARG, 0)
        if arg.formals is not None:
            for formal in arg.formals.dedup.values():
                if formal.id is not None:
                    self.add(formal.id, SemaType.LAMBDA_FORMAL, 0)

    def _lambda(self, lam: ExprLambda) -> None:
        if lam.arg is not None:
            self._lambda_arg(lam.arg)
        self.dfs(lam.body)

    def dfs(self, node: Node | None) -> None:
        """Gather tokens from ``node`` and everything below it."""
        if node is None:
            return
        if isinstance(node, ExprLambda):
            self._lambda(node)
        elif isinstance(node, ExprString):
            self._string(node)
        elif isinstance(node, ExprVar):
            self._var(node)
        elif isinstance(node, ExprSelect):
            self._select(node)
        elif isinstance(node, ExprAttrs):
            self._attrs(node.sema)
        else:
            for child in node.children():
                self.dfs(child)

    def finish(self) -> list[SemanticToken]:
        """The gathered tokens in source order, each relative to the previous."""
        tokens: list[SemanticToken] = []
        prev = LspPosition(0, 0)
        for raw in sorted(self._raw, key=lambda t: t.position):
            pos = raw.position
            delta_line = pos.line - prev.line
            delta_start = pos.character if delta_line else pos.character - prev.character
            prev = pos
            tokens.append(
                SemanticToken(
                    delta_line, delta_start, raw.length, raw.token_type, raw.token_modifiers
                )
            )
        return tokens


def semantic_tokens(
    ast: Node | None, lookup: VariableLookupAnalysis
) -> list[SemanticToken]:
    """All semantic tokens of ``ast``."""
    builder = SemanticTokenBuilder(lookup)
    builder.dfs(ast)
    return builder.finish()