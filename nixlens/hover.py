"""Hover information: package documentation, option documentation, node kinds."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from nixlens.ast_basic import Node
from nixlens.logger import elog
from nixlens.protocol import AttrPathInfoResponse, OptionDescription, PackageDescription
from nixlens.ranges import LspRange, to_lsp_range


@dataclass(frozen=True)
class MarkupContent:
    value: str
    kind: str = "markdown"


@dataclass(frozen=True)
class Hover:
    contents: MarkupContent
    range: LspRange | None = None


class _NixpkgsClient(Protocol):
    def attrpath_info(self, scope: list[str]) -> AttrPathInfoResponse: ...


class _OptionsClient(Protocol):
    def option_info(self, scope: list[str]) -> OptionDescription: ...


def package_markdown(package: PackageDescription) -> str:
    """Markdown documentation for a package."""
    out = []
    if package.name is not None:
        out.append(f"`{package.name}`\n")
    if package.homepage is not None:
        out.append(f"[homepage]({package.homepage})\n")
    if package.description is not None:
        out.append("## Description\n\n")
        out.append(package.description + "\n\n")
        if package.long_description is not None:
            out.append("\n\n" + package.long_description + "\n\n")
    return "".join(out)


def option_markdown(description: OptionDescription) -> str:
    """Markdown documentation for an option: its type, then its description."""
    if description.type is not None:
        type_name = description.type.name or ""
        type_desc = description.type.description or ""
        docs = f"{type_name} ({type_desc})"
    else:
        docs = "? (missing type)"
    if description.description is not None:
        docs += "\n\n" + description.description
    return docs


class NixpkgsHoverProvider:
    """Package documentation from a nixpkgs evaluator."""

    def __init__(self, client: _NixpkgsClient):
        self.client = client

    def resolve_package(self, scope: list[str], name: str) -> str | None:
        """Markdown for ``scope.name``, or None if the evaluator fails."""
        try:
            response = self.client.attrpath_info([*scope, name])
        except Exception as exc:
            elog("nixpkgs provider: {0}", exc)
            return None
        return package_markdown(response.package_desc)


class OptionsHoverProvider:
    """Option descriptions from an options evaluator."""

    def __init__(self, client: _OptionsClient):
        self.client = client

    def resolve_hover(self, scope: list[str]) -> OptionDescription | None:
        """The option at ``scope``, or None if the evaluator fails."""
        try:
            return self.client.option_info(list(scope))
        except Exception as exc:
            elog("options hover: {0}", exc)
            return None


def fallback_hover(node: Node) -> Hover:
    """A hover naming the kind of ``node``."""
    return Hover(MarkupContent(f"`{node.name}`"), to_lsp_range(node.range))