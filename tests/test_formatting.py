import sys

import pytest

from nixlens.formatting import INT_MAX, FormattingError, format_document
from nixlens.ranges import LspPosition

UPPER = [sys.executable, "-c", "import sys; sys.stdout.write(sys.stdin.read().upper())"]


def test_formatter_output_replaces_document():
    edits = format_document(UPPER, "{ a = 1; }")
    assert len(edits) == 1
    assert edits[0].new_text == "{ A = 1; }"


def test_edit_covers_whole_document():
    edits = format_document(UPPER, "x")
    assert edits[0].range.start == LspPosition(0, 0)
    assert edits[0].range.end == LspPosition(INT_MAX, INT_MAX)


def test_identity_formatter_keeps_multiline_text():
    cat = [sys.executable, "-c", "import sys; sys.stdout.write(sys.stdin.read())"]
    code = "let\n  a = 1;\nin\n  a\n"
    assert format_document(cat, code)[0].new_text == code


def test_empty_command_is_an_error():
    with pytest.raises(FormattingError, match="empty"):
        format_document([], "x")


def test_nonzero_exit_is_an_error():
    failing = [sys.executable, "-c", "import sys; sys.exit(3)"]
    with pytest.raises(FormattingError, match="exited with 3"):
        format_document(failing, "x")


def test_missing_program_is_an_error(tmp_path):
    missing = str(tmp_path / "no-such-formatter")
    with pytest.raises(FormattingError, match="no-such-formatter"):
        format_document([missing], "x")