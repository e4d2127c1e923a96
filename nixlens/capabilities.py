"""Server capabilities and the default expressions evaluated at start-up."""

from __future__ import annotations

from typing import Any

SERVER_NAME = "nixlens"

TEXT_DOCUMENT_SYNC_INCREMENTAL = 2

DEFAULT_NIXPKGS_EXPR = "import <nixpkgs> { }"

DEFAULT_NIXOS_OPTIONS_EXPR = (
    "(let pkgs = import <nixpkgs> { }; in (pkgs.lib.evalModules { modules "
    "=  (import <nixpkgs/nixos/modules/module-list.nix>) ++ [ ({...}: { "
    "nixpkgs.hostPlatform = builtins.currentSystem;} ) ] ; })).options"
)

# Order matches the token types of the semantic-token builder.
TOKEN_TYPES = (
    "function",
    "string",
    "number",
    "type",
    "keyword",
    "variable",
    "interface",
    "variable",
    "regexp",
    "macro",
    "method",
    "regexp",
    "regexp",
)

TOKEN_MODIFIERS = ("static", "abstract", "async")


def server_capabilities(semantic_tokens: bool = True) -> dict[str, Any]:
    """The capabilities announced in reply to ``initialize``."""
    caps: dict[str, Any] = {
        "textDocumentSync": {
            "openClose": True,
            "change": TEXT_DOCUMENT_SYNC_INCREMENTAL,
            "save": True,
        },
        "codeActionProvider": {
            "codeActionKinds": ["quickfix"],
            "resolveProvider": False,
        },
        "definitionProvider": True,
        "documentLinkProvider": {},
        "documentSymbolProvider": True,
        "inlayHintProvider": True,
        "completionProvider": {
            "resolveProvider": True,
            "triggerCharacters": ["."],
        },
        "referencesProvider": True,
        "documentHighlightProvider": True,
        "hoverProvider": True,
        "documentFormattingProvider": True,
        "renameProvider": {"prepareProvider": True},
    }
    if semantic_tokens:
        caps["semanticTokensProvider"] = {
            "legend": {
                "tokenTypes": list(TOKEN_TYPES),
                "tokenModifiers": list(TOKEN_MODIFIERS),
            },
            "range": False,
            "full": True,
        }
    return caps


def initialize_result(version: str, semantic_tokens: bool = True) -> dict[str, Any]:
    """The whole ``initialize`` result: server information and capabilities."""
    return {
        "serverInfo": {"name": SERVER_NAME, "version": version},
        "capabilities": server_capabilities(semantic_tokens),
    }


def default_nixpkgs_expr(lit_test: bool = False, override: str | None = None) -> str:
    """The expression evaluated as nixpkgs; an empty set in tests unless overridden."""
    if override is not None:
        return override
    return "{ }" if lit_test else DEFAULT_NIXPKGS_EXPR


def default_nixos_options_expr(
    lit_test: bool = False, override: str | None = None
) -> str:
    """The expression evaluated as NixOS option declarations."""
    if override is not None:
        return override
    return "{ }" if lit_test else DEFAULT_NIXOS_OPTIONS_EXPR