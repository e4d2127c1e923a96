"""Diagnostics, notes, fixes and text edits."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from nixlens.ranges import LexerCursor, LexerCursorRange


@dataclass(frozen=True)
class TextEdit:
    """Replace the text at ``old_range`` with ``new_text``.

    An empty range is an insertion; empty text is a removal.
    """

    old_range: LexerCursorRange
    new_text: str

    def __post_init__(self) -> None:
        if self.old_range.lcur == self.old_range.rcur and not self.new_text:
            raise ValueError("an edit with an empty range must insert text")

    @classmethod
    def insertion(cls, point: LexerCursor, new_text: str) -> TextEdit:
        return cls(LexerCursorRange(point, point), new_text)

    @classmethod
    def removal(cls, old_range: LexerCursorRange) -> TextEdit:
        return cls(old_range, "")

    def is_replace(self) -> bool:
        return not self.is_removal() and not self.is_insertion()

    def is_removal(self) -> bool:
        return not self.new_text

    def is_insertion(self) -> bool:
        return self.old_range.lcur == self.old_range.rcur


@dataclass
class Fix:
    """A suggested fix: a message and the edits that carry it out."""

    edits: list[TextEdit] = field(default_factory=list)
    message: str = ""

    def edit(self, text_edit: TextEdit) -> Fix:
        self.edits.append(text_edit)
        return self


class DiagnosticTag(enum.Enum):
    FADED = "faded"
    STRIKED = "striked"


class Severity(enum.IntEnum):
    """How serious a diagnostic is, most serious first."""

    FATAL = 0
    ERROR = 1
    WARNING = 2
    INFO = 3
    HINT = 4


class PartialDiagnostic:
    """A message with arguments, tags and a source range."""

    def __init__(self, message: str, diag_range: LexerCursorRange | None = None):
        self.message = message
        self.range = diag_range if diag_range is not None else LexerCursorRange()
        self.args: list[str] = []
        self.tags: list[DiagnosticTag] = []

    def add_arg(self, value: str) -> PartialDiagnostic:
        self.args.append(str(value))
        return self

    def tag(self, tag: DiagnosticTag) -> None:
        self.tags.append(tag)


class Note(PartialDiagnostic):
    """Additional information attached to a diagnostic."""

    def __init__(self, kind: str, message: str, note_range: LexerCursorRange):
        super().__init__(message, note_range)
        self.kind = kind

    @property
    def sname(self) -> str:
        return self.kind


class Diagnostic(PartialDiagnostic):
    """A diagnostic with severity, notes and fixes."""

    def __init__(
        self,
        kind: str,
        message: str,
        diag_range: LexerCursorRange,
        severity: Severity = Severity.ERROR,
    ):
        super().__init__(message, diag_range)
        self.kind = kind
        self.severity = severity
        self.notes: list[Note] = []
        self.fixes: list[Fix] = []

    @property
    def sname(self) -> str:
        return self.kind

    def note(self, kind: str, message: str, note_range: LexerCursorRange) -> Note:
        new_note = Note(kind, message, note_range)
        self.notes.append(new_note)
        return new_note

    def fix(self, message: str) -> Fix:
        new_fix = Fix([], message)
        self.fixes.append(new_fix)
        return new_fix