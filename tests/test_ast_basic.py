import pytest

from nixlens.ast_basic import (
    Dot,
    Expr,
    ExprFloat,
    ExprInt,
    ExprParen,
    ExprPath,
    ExprSPath,
    ExprString,
    ExprVar,
    Identifier,
    InterpolablePart,
    InterpolatedParts,
    Interpolation,
    Misc,
    NodeKind,
)
from nixlens.ranges import LexerCursor, LexerCursorRange, Position, PositionRange


def _r(a, b):
    return LexerCursorRange(LexerCursor(0, a, a), LexerCursor(0, b, b))


def _point(col):
    return PositionRange(Position(0, col))


def _var(a, b, name):
    return ExprVar(_r(a, b), Identifier(_r(a, b), name))


def _paren_source():
    # "( foo )"
    var = _var(2, 5, "foo")
    return ExprParen(_r(0, 7), var, Misc(_r(0, 1)), Misc(_r(6, 7))), var


def test_descend_finds_deepest():
    paren, var = _paren_source()
    assert paren.descend(_point(3)) is var.id
    assert paren.descend(_point(0)) is paren.lparen


def test_descend_outside_returns_none():
    paren, _ = _paren_source()
    assert paren.descend(_point(20)) is None


def test_descend_gap_returns_self():
    paren, _ = _paren_source()
    # Column 1 is between "(" and "foo"; only the paren itself covers it.
    assert paren.descend(PositionRange(Position(0, 1), Position(0, 2))) is paren


def test_src_slices_text():
    text = "( foo )"
    paren, var = _paren_source()
    assert var.src(text) == "foo"
    assert paren.src(text) == text


def test_paren_children_skip_missing():
    var = _var(1, 2, "x")
    paren = ExprParen(_r(0, 3), var, Misc(_r(0, 1)), None)
    assert paren.children() == [var, paren.lparen]


def test_node_name_is_kind_name():
    assert ExprInt(_r(0, 1), 1).name == "ExprInt"
    assert Identifier(_r(0, 3), "abc").name == "abc"


@pytest.mark.parametrize(
    "node, expected",
    [
        (ExprInt(_r(0, 1), 1), False),
        (ExprFloat(_r(0, 3), 1.5), False),
        (ExprSPath(_r(0, 9), "<nixpkgs>"), True),
        (_var(0, 1, "f"), True),
    ],
)
def test_maybe_lambda(node, expected):
    assert node.maybe_lambda() is expected


def test_expr_rejects_non_expr_kind():
    with pytest.raises(ValueError):
        Expr(NodeKind.MISC, _r(0, 1))


def test_literal_string():
    parts = InterpolatedParts(_r(1, 4), [InterpolablePart("abc")])
    s = ExprString(_r(0, 5), parts)
    assert s.is_literal()
    assert s.literal() == "abc"
    assert parts.children() == []
    assert s.children() == [parts]


def test_interpolated_string():
    inner = _var(4, 5, "x")
    interp = Interpolation(_r(2, 6), inner)
    parts = InterpolatedParts(_r(1, 6), [InterpolablePart("a"), InterpolablePart(interp)])
    s = ExprString(_r(0, 7), parts)
    assert not s.is_literal()
    with pytest.raises(ValueError):
        s.literal()
    assert parts.children() == [interp]
    assert s.descend(_point(4)) is inner.id


def test_interpolable_part_kinds():
    part = InterpolablePart("text")
    assert part.escaped == "text"
    with pytest.raises(ValueError):
        part.interpolation
    interp = Interpolation(_r(0, 4), None)
    other = InterpolablePart(interp)
    assert other.interpolation is interp
    with pytest.raises(ValueError):
        other.escaped


def test_path_children():
    parts = InterpolatedParts(_r(0, 5), [InterpolablePart("./a.n")])
    path = ExprPath(_r(0, 5), parts)
    assert path.children() == [parts]
    assert path.maybe_lambda() is False


def test_dot_requires_prev():
    with pytest.raises(ValueError):
        Dot(_r(1, 2), None, None)
    prev = Identifier(_r(0, 1), "a")
    dot = Dot(_r(1, 2), prev, None)
    assert dot.prev is prev
    assert dot.children() == []


def test_expr_var_identifier():
    var = _var(0, 3, "pkg")
    assert var.id.name == "pkg"
    assert var.kind is NodeKind.EXPR_VAR
    assert NodeKind.EXPR_VAR.is_expr and not NodeKind.IDENTIFIER.is_expr