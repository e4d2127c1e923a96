from nixlens.ast_basic import (
    ExprInt,
    ExprString,
    ExprVar,
    Identifier,
    InterpolablePart,
    InterpolatedParts,
    Interpolation,
)
from nixlens.ast_compound import (
    AttrName,
    AttrPath,
    Attribute,
    AttributeKind,
    ExprAttrs,
    ExprLambda,
    ExprList,
    ExprSelect,
    Formal,
    Formals,
    LambdaArg,
    SemaAttrs,
)
from nixlens.lookup import (
    Definition,
    DefinitionSource,
    LookupResult,
    LookupResultKind,
    VariableLookupAnalysis,
)
from nixlens.ranges import LexerCursor, LexerCursorRange
from nixlens.semantic_tokens import (
    SemaModifier,
    SemanticToken,
    SemanticTokenBuilder,
    SemaType,
    semantic_tokens,
)


def span(line, start, end):
    base = line * 100
    return LexerCursorRange(
        LexerCursor(line, start, base + start), LexerCursor(line, end, base + end)
    )


def var(name, line, start):
    rng = span(line, start, start + len(name))
    return ExprVar(rng, Identifier(rng, name))


def test_boolean_and_null():
    lookup = VariableLookupAnalysis()
    tokens = semantic_tokens(ExprList(span(0, 0, 20), [var("true", 0, 2), var("null", 0, 8)]), lookup)
    assert tokens == [
        SemanticToken(0, 2, 4, SemaType.BOOL, SemaModifier.BUILTIN),
        SemanticToken(0, 6, 4, SemaType.NULL, 0),
    ]


def test_lookup_kinds():
    lookup = VariableLookupAnalysis()
    defined = var("a", 0, 0)
    with_var = var("b", 0, 2)
    builtin = var("c", 0, 4)
    undefined = var("d", 0, 6)
    lookup.record_result(
        defined, LookupResult(LookupResultKind.DEFINED, Definition(None, DefinitionSource.LET))
    )
    lookup.record_result(with_var, LookupResult(LookupResultKind.FROM_WITH))
    lookup.record_result(
        builtin,
        LookupResult(LookupResultKind.DEFINED, Definition(None, DefinitionSource.BUILTIN)),
    )
    ast = ExprList(span(0, 0, 10), [defined, with_var, builtin, undefined])
    types = [(t.token_type, t.token_modifiers) for t in semantic_tokens(ast, lookup)]
    assert types == [
        (SemaType.DEFINED, 0),
        (SemaType.FROM_WITH, SemaModifier.DYNAMIC),
        (SemaType.BUILTIN, SemaModifier.BUILTIN),
        (SemaType.DEFINED, SemaModifier.DEPRECATED),
    ]


def test_tokens_sorted_and_relative():
    lookup = VariableLookupAnalysis()
    ast = ExprList(span(0, 0, 1), [var("true", 2, 5), var("false", 0, 3), var("null", 2, 12)])
    ast.range = LexerCursorRange(LexerCursor(0, 0, 0), LexerCursor(3, 0, 300))
    tokens = semantic_tokens(ast, lookup)
    assert [(t.delta_line, t.delta_start) for t in tokens] == [(0, 3), (2, 5), (0, 7)]
    assert [t.length for t in tokens] == [5, 4, 4]


def test_multiline_node_is_skipped():
    rng = LexerCursorRange(LexerCursor(0, 0, 0), LexerCursor(1, 2, 10))
    string = ExprString(rng, InterpolatedParts(rng, [InterpolablePart("x\ny")]))
    assert semantic_tokens(string, VariableLookupAnalysis()) == []


def test_literal_and_dynamic_strings():
    lit_rng = span(0, 0, 5)
    literal = ExprString(lit_rng, InterpolatedParts(lit_rng, [InterpolablePart("abc")]))
    dyn_rng = span(1, 0, 6)
    inner = var("true", 1, 2)
    dynamic = ExprString(
        dyn_rng,
        InterpolatedParts(dyn_rng, [InterpolablePart(Interpolation(span(1, 0, 6), inner))]),
    )
    builder = SemanticTokenBuilder(VariableLookupAnalysis())
    builder.dfs(literal)
    builder.dfs(dynamic)
    assert builder.finish() == [SemanticToken(0, 0, 5, SemaType.STRING, 0)]


def test_attrs_skip_inherit_and_missing_values():
    key_a = AttrName(Identifier(span(0, 2, 3), "a"))
    key_b = AttrName(Identifier(span(0, 10, 11), "b"))
    key_c = AttrName(Identifier(span(0, 14, 15), "c"))
    sema = SemaAttrs(
        static={
            "a": Attribute(key_a, ExprInt(span(0, 6, 7), 1)),
            "b": Attribute(key_b, var("b", 0, 10), AttributeKind.INHERIT),
            "c": Attribute(key_c, None),
        }
    )
    ast = ExprAttrs(span(0, 0, 20), None, None, sema)
    assert semantic_tokens(ast, VariableLookupAnalysis()) == [
        SemanticToken(0, 2, 1, SemaType.ATTR_NAME, 0)
    ]


def test_select_marks_identifier_names():
    base = var("x", 0, 0)
    name = AttrName(Identifier(span(0, 2, 3), "y"))
    dyn_rng = span(0, 4, 10)
    dyn = AttrName(Interpolation(dyn_rng, None))
    select = ExprSelect(span(0, 0, 10), base, AttrPath(span(0, 2, 10), [name, None, dyn]))
    tokens = semantic_tokens(select, VariableLookupAnalysis())
    assert [(t.token_type, t.token_modifiers) for t in tokens] == [
        (SemaType.DEFINED, SemaModifier.DEPRECATED),
        (SemaType.SELECT, 0),
    ]


def test_lambda_arg_and_formals():
    arg_id = Identifier(span(0, 10, 13), "arg")
    formal = Formal(span(0, 2, 5), identifier=Identifier(span(0, 2, 5), "foo"))
    formals = Formals(span(0, 0, 8), [formal], {"foo": formal})
    lam = ExprLambda(
        span(0, 0, 20), LambdaArg(span(0, 0, 13), arg_id, formals), var("true", 0, 15)
    )
    types = [t.token_type for t in semantic_tokens(lam, VariableLookupAnalysis())]
    assert types == [SemaType.LAMBDA_FORMAL, SemaType.LAMBDA_ARG, SemaType.BOOL]


def test_empty_tree():
    assert semantic_tokens(None, VariableLookupAnalysis()) == []