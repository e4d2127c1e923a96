import pytest

from nixlens.ranges import (
    LexerCursor,
    LexerCursorRange,
    LspPosition,
    LspRange,
    Position,
    PositionRange,
    to_lsp_position,
    to_lsp_range,
)


@pytest.mark.parametrize(
    "lhs, rhs, expected",
    [
        (Position(1, 5), Position(2, 0), True),
        (Position(2, 1), Position(2, 3), True),
        (Position(2, 3), Position(2, 3), False),
        (Position(3, 0), Position(2, 9), False),
    ],
)
def test_position_ordering(lhs, rhs, expected):
    assert (lhs < rhs) is expected
    assert lhs <= lhs


def test_position_range_contains():
    outer = PositionRange(Position(0, 0), Position(5, 0))
    inner = PositionRange(Position(1, 2), Position(3, 4))
    assert outer.contains(inner)
    assert not inner.contains(outer)
    assert outer.contains(outer)


def test_position_range_single_position():
    point = PositionRange(Position(2, 3))
    assert point.begin == point.end
    assert PositionRange(Position(2, 0), Position(2, 5)).contains(point)


def test_lexer_cursor_is_at_and_position():
    cur = LexerCursor(3, 4, 20)
    assert cur.is_at(3, 4, 20)
    assert not cur.is_at(3, 4, 21)
    assert cur.position() == Position(3, 4)


def test_lexer_cursor_equality_includes_offset():
    assert LexerCursor(1, 1, 5) != LexerCursor(1, 1, 6)
    assert LexerCursor(1, 1, 5) == LexerCursor(1, 1, 5)


def test_lexer_cursor_range_contains():
    outer = LexerCursorRange(LexerCursor(0, 0, 0), LexerCursor(0, 10, 10))
    inner = LexerCursorRange(LexerCursor(0, 2, 2), LexerCursor(0, 4, 4))
    assert outer.contains(inner)
    assert not inner.contains(outer)
    assert outer.position_range() == PositionRange(Position(0, 0), Position(0, 10))


def test_lexer_cursor_range_single_cursor():
    cur = LexerCursor(1, 2, 3)
    r = LexerCursorRange(cur)
    assert r.lcur == r.rcur == cur


def test_to_lsp():
    r = LexerCursorRange(LexerCursor(1, 2, 7), LexerCursor(3, 4, 30))
    assert to_lsp_position(r.lcur) == LspPosition(1, 2)
    assert to_lsp_range(r) == LspRange(LspPosition(1, 2), LspPosition(3, 4))