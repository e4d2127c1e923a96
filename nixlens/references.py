"""Find references and rename, driven by a variable's definition."""

from __future__ import annotations

from dataclasses import dataclass, field

from nixlens.ast_basic import Node
from nixlens.lookup import Definition, DefinitionSource
from nixlens.ranges import LspRange, to_lsp_range


@dataclass(frozen=True)
class Location:
    uri: str
    range: LspRange


@dataclass(frozen=True)
class LspTextEdit:
    range: LspRange
    new_text: str


@dataclass
class WorkspaceEdit:
    changes: dict[str, list[LspTextEdit]] = field(default_factory=dict)


class RenameError(Exception):
    """A variable cannot be renamed."""


class RenameWithError(RenameError):
    def __init__(self) -> None:
        super().__init__("cannot rename `with` defined variable")


class RenameBuiltinError(RenameError):
    def __init__(self) -> None:
        super().__init__("cannot rename builtin variable")


def find_references(definition: Definition, uri: str) -> list[Location]:
    """Every use of ``definition`` as a location in ``uri``."""
    return [Location(uri, to_lsp_range(use.range)) for use in definition.uses]


def rename(definition: Definition, new_text: str, uri: str) -> WorkspaceEdit:
    """Edits replacing every use and the definition itself with ``new_text``."""
    if definition.source is DefinitionSource.WITH:
        raise RenameWithError()
    if definition.is_builtin():
        raise RenameBuiltinError()
    if definition.syntax is None:
        raise RenameError("definition has no syntax to rename")

    edits = [LspTextEdit(to_lsp_range(use.range), new_text) for use in definition.uses]
    edits.append(LspTextEdit(to_lsp_range(definition.syntax.range), new_text))
    return WorkspaceEdit({uri: edits})


def prepare_rename(node: Node, definition: Definition, uri: str) -> LspRange:
    """The range of ``node`` if its definition can be renamed."""
    rename(definition, "", uri)
    return to_lsp_range(node.range)