"""Document formatting through an external formatter command."""

from __future__ import annotations

import subprocess
from collections.abc import Sequence

from nixlens.ranges import LspPosition, LspRange
from nixlens.references import LspTextEdit

INT_MAX = 2**31 - 1

WHOLE_DOCUMENT = LspRange(LspPosition(0, 0), LspPosition(INT_MAX, INT_MAX))


class FormattingError(Exception):
    """The external formatter could not format the document."""


def format_document(command: Sequence[str], code: str) -> list[LspTextEdit]:
    """Pipe ``code`` through ``command`` and return an edit replacing the document.

    The formatter reads the document on its standard input and writes the
    formatted text to its standard output.
    """
    argv = list(command)
    if not argv:
        raise FormattingError(
            "formating command is empty, please set external formatter"
        )

    try:
        completed = subprocess.run(
            argv,
            input=code.encode("utf-8"),
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            check=False,
        )
    except OSError as exc:
        raise FormattingError(
            f"formatting {argv[0]} command could not be started: {exc}"
        ) from exc

    if completed.returncode != 0:
        raise FormattingError(
            f"formatting {argv[0]} command exited with {completed.returncode}"
        )

    response = completed.stdout.decode("utf-8", errors="replace")
    return [LspTextEdit(WHOLE_DOCUMENT, response)]