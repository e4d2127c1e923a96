"""Document symbols: an outline of a syntax tree."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from nixlens.ast_basic import (
    ExprFloat,
    ExprInt,
    ExprString,
    ExprVar,
    Node,
)
from nixlens.ast_compound import Attribute, AttrName, ExprAttrs, ExprLambda, ExprList
from nixlens.lookup import LookupResultKind, VariableLookupAnalysis
from nixlens.ranges import LspRange, to_lsp_position, to_lsp_range


class SymbolKind(enum.IntEnum):
    """Symbol kinds as numbered by the language server protocol."""

    FILE = 1
    MODULE = 2
    NAMESPACE = 3
    PACKAGE = 4
    CLASS = 5
    METHOD = 6
    PROPERTY = 7
    FIELD = 8
    CONSTRUCTOR = 9
    ENUM = 10
    INTERFACE = 11
    FUNCTION = 12
    VARIABLE = 13
    CONSTANT = 14
    STRING = 15
    NUMBER = 16
    BOOLEAN = 17
    ARRAY = 18
    OBJECT = 19
    KEY = 20
    NULL = 21
    ENUM_MEMBER = 22
    STRUCT = 23
    EVENT = 24
    OPERATOR = 25
    TYPE_PARAMETER = 26


@dataclass
class DocumentSymbol:
    name: str
    detail: str
    kind: SymbolKind
    range: LspRange
    selection_range: LspRange
    deprecated: bool = False
    children: list[DocumentSymbol] = field(default_factory=list)


def _leaf(node: Node, name: str, detail: str, kind: SymbolKind) -> DocumentSymbol:
    node_range = to_lsp_range(node.range)
    return DocumentSymbol(name, detail, kind, node_range, node_range)


def _lambda_name(lam: ExprLambda) -> str:
    if lam.arg is None or lam.arg.id is None:
        return "(anonymous lambda)"
    return lam.arg.id.name


def _lambda_selection_range(lam: ExprLambda) -> LspRange:
    if lam.arg is None:
        return to_lsp_range(lam.range)
    if lam.arg.id is None:
        if lam.arg.formals is None:
            raise ValueError("lambda argument has neither name nor formals")
        return to_lsp_range(lam.arg.formals.range)
    return to_lsp_range(lam.arg.id.range)


def _attr_range(attr: Attribute) -> LspRange:
    end = attr.value.rcur if attr.value is not None else attr.key.rcur
    return LspRange(to_lsp_position(attr.key.lcur), to_lsp_position(end))


def _var_symbol(var: ExprVar, lookup: VariableLookupAnalysis) -> DocumentSymbol:
    sym = _leaf(var, var.id.name, "identifier", SymbolKind.VARIABLE)
    name = var.id.name
    if name in ("true", "false"):
        sym.kind = SymbolKind.BOOLEAN
        sym.detail = "builtin boolean"
        return sym
    if name == "null":
        sym.kind = SymbolKind.NULL
        sym.detail = "null"
        return sym

    result = lookup.query(var)
    if result.kind is LookupResultKind.DEFINED:
        sym.kind = SymbolKind.CONSTANT
    elif result.kind is LookupResultKind.FROM_WITH:
        sym.kind = SymbolKind.VARIABLE
    else:
        sym.deprecated = True
        return sym
    if result.definition is not None and result.definition.is_builtin():
        sym.kind = SymbolKind.EVENT
    return sym


def _attr_symbol(
    name: str, attr: Attribute, lookup: VariableLookupAnalysis
) -> DocumentSymbol:
    return DocumentSymbol(
        name=name,
        detail="attribute",
        kind=SymbolKind.FIELD,
        range=_attr_range(attr),
        selection_range=to_lsp_range(attr.key.range),
        children=collect_symbols(attr.value, lookup),
    )


def _collect(
    node: Node | None, lookup: VariableLookupAnalysis
) -> list[DocumentSymbol]:
    if node is None:
        return []
    if isinstance(node, ExprString):
        name = node.literal() if node.is_literal() else "(dynamic string)"
        return [_leaf(node, name, "string", SymbolKind.STRING)]
    if isinstance(node, ExprInt):
        return [_leaf(node, str(node.value), "integer", SymbolKind.NUMBER)]
    if isinstance(node, ExprFloat):
        return [_leaf(node, f"{node.value:f}", "float", SymbolKind.NUMBER)]
    if isinstance(node, AttrName):
        name = node.static_name() if node.is_static() else "(dynamic attribute name)"
        return [_leaf(node, name, "attribute name", SymbolKind.PROPERTY)]
    if isinstance(node, ExprVar):
        return [_var_symbol(node, lookup)]
    if isinstance(node, ExprLambda):
        return [
            DocumentSymbol(
                name=_lambda_name(node),
                detail="lambda",
                kind=SymbolKind.FUNCTION,
                range=to_lsp_range(node.range),
                selection_range=_lambda_selection_range(node),
                children=collect_symbols(node.body, lookup),
            )
        ]
    if isinstance(node, ExprList):
        sym = _leaf(node, "{anonymous}", "list", SymbolKind.ARRAY)
        sym.children = [s for ch in node.children() for s in _collect(ch, lookup)]
        return [sym]
    if isinstance(node, ExprAttrs):
        sema = node.sema
        symbols = [
            _attr_symbol(name, attr, lookup)
            for name, attr in sema.static_attrs.items()
            if attr.value is not None
        ]
        symbols.extend(
            _attr_symbol("${dynamic attribute}", attr, lookup)
            for attr in sema.dynamic_attrs
        )
        return symbols
    # Other nodes contribute their children's symbols at the same level.
    return [s for ch in node.children() for s in _collect(ch, lookup)]


def collect_symbols(
    ast: Node | None, lookup: VariableLookupAnalysis
) -> list[DocumentSymbol]:
    """The outline of ``ast`` as a list of top-level symbols."""
    return _collect(ast, lookup)