import pytest

from nixlens.ast_basic import ExprVar, Identifier, Misc
from nixlens.ast_compound import ExprWith
from nixlens.lookup import (
    Definition,
    DefinitionSource,
    EnvNode,
    LookupResult,
    LookupResultKind,
    TranslationUnit,
    VariableLookupAnalysis,
)
from nixlens.ranges import LexerCursor, LexerCursorRange


def rng(start, end):
    return LexerCursorRange(LexerCursor(0, start, start), LexerCursor(0, end, end))


def var(name, start=0):
    r = rng(start, start + len(name))
    return ExprVar(r, Identifier(r, name))


def test_query_unknown_var_is_no_such_var():
    analysis = VariableLookupAnalysis()
    result = analysis.query(var("a"))
    assert result.kind is LookupResultKind.NO_SUCH_VAR
    assert result.definition is None


def test_record_and_query_result():
    analysis = VariableLookupAnalysis()
    v = var("a")
    definition = Definition(None, DefinitionSource.LET)
    analysis.record_result(v, LookupResult(LookupResultKind.DEFINED, definition))
    result = analysis.query(v)
    assert result.kind is LookupResultKind.DEFINED
    assert result.definition is definition


def test_results_keyed_by_identity():
    analysis = VariableLookupAnalysis()
    first, second = var("a"), var("a")
    analysis.record_result(first, LookupResult(LookupResultKind.FROM_WITH))
    assert analysis.query(first).kind is LookupResultKind.FROM_WITH
    assert analysis.query(second).kind is LookupResultKind.NO_SUCH_VAR


def test_to_def():
    analysis = VariableLookupAnalysis()
    ident = Identifier(rng(0, 1), "x")
    definition = Definition(ident, DefinitionSource.LAMBDA_ARG)
    analysis.record_definition(ident, definition)
    assert analysis.to_def(ident) is definition
    assert analysis.to_def(Identifier(rng(0, 1), "x")) is None


def test_env_lookup():
    analysis = VariableLookupAnalysis()
    node = var("a")
    env = EnvNode(None, {}, None)
    analysis.record_env(node, env)
    assert analysis.env(node) is env
    assert analysis.env(var("b")) is None


def test_definition_uses_and_builtin():
    definition = Definition(None, DefinitionSource.BUILTIN)
    v = var("builtins")
    definition.used_by(v)
    assert definition.uses == [v]
    assert definition.is_builtin()
    assert not Definition(None, DefinitionSource.REC).is_builtin()


def test_env_is_with():
    with_node = ExprWith(rng(0, 10), Misc(rng(0, 4)), None, None, None)
    parent = EnvNode(None)
    child = EnvNode(parent, {}, with_node)
    assert child.is_with()
    assert not parent.is_with()
    assert child.parent is parent


def test_diagnostics_list_shared():
    diags = []
    analysis = VariableLookupAnalysis(diags)
    assert analysis.diagnostics is diags


def test_translation_unit_requires_source():
    with pytest.raises(ValueError):
        TranslationUnit(None)


def test_translation_unit_fields():
    lookup = VariableLookupAnalysis()
    tu = TranslationUnit("a", var("a"), [], lookup)
    assert tu.src == "a"
    assert tu.lookup is lookup
    assert tu.ast_bytecode is None