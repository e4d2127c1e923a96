"""Source positions, cursors and ranges."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, order=True)
class Position:
    """A line/column pair, both starting from 0."""

    line: int = 0
    column: int = 0


@dataclass(frozen=True)
class PositionRange:
    """A range between two positions."""

    begin: Position = field(default_factory=Position)
    end: Position | None = None

    def __post_init__(self) -> None:
        if self.end is None:
            object.__setattr__(self, "end", self.begin)

    def contains(self, other: PositionRange) -> bool:
        """Whether ``other`` lies entirely inside this range."""
        return self.begin <= other.begin and other.end <= self.end


@dataclass(frozen=True)
class LexerCursor:
    """A point in the source: line, column and byte offset, all from 0."""

    line: int = 0
    column: int = 0
    offset: int = 0

    def is_at(self, line: int, column: int, offset: int) -> bool:
        return (self.line, self.column, self.offset) == (line, column, offset)

    def position(self) -> Position:
        return Position(self.line, self.column)


@dataclass(frozen=True)
class LexerCursorRange:
    """A range between two cursors; a single cursor makes an empty range."""

    lcur: LexerCursor = field(default_factory=LexerCursor)
    rcur: LexerCursor | None = None

    def __post_init__(self) -> None:
        if self.rcur is None:
            object.__setattr__(self, "rcur", self.lcur)

    def contains(self, other: LexerCursorRange) -> bool:
        return self.position_range().contains(other.position_range())

    def position_range(self) -> PositionRange:
        return PositionRange(self.lcur.position(), self.rcur.position())


@dataclass(frozen=True, order=True)
class LspPosition:
    """A position as the language server protocol spells it."""

    line: int = 0
    character: int = 0


@dataclass(frozen=True)
class LspRange:
    """A range as the language server protocol spells it."""

    start: LspPosition = field(default_factory=LspPosition)
    end: LspPosition = field(default_factory=LspPosition)


def to_lsp_position(cursor: LexerCursor) -> LspPosition:
    return LspPosition(cursor.line, cursor.column)


def to_lsp_range(cursor_range: LexerCursorRange) -> LspRange:
    return LspRange(
        to_lsp_position(cursor_range.lcur), to_lsp_position(cursor_range.rcur)
    )