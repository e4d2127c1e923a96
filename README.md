# nixlens

Building blocks for a language server for the Nix expression language.

nixlens models a Nix syntax tree with source positions, holds the results
of variable lookup over that tree, and works out editor features from them.
It has no dependencies outside the standard library.

## Modules

- `nixlens.ranges`: `Position`, `PositionRange`, `LexerCursor` (line,
  column and offset, all from 0) and `LexerCursorRange`; `to_lsp_position`
  and `to_lsp_range` turn them into `LspPosition` and `LspRange`.
- `nixlens.diagnostic`: `Diagnostic` with a `Severity`, `Note`s and `Fix`es;
  `TextEdit.insertion` and `TextEdit.removal` build edits.
- `nixlens.ast_basic`: the `Node` and `Expr` base classes and simple nodes
  (`Identifier`, `ExprInt`, `ExprFloat`, `ExprString`, `ExprPath`,
  `ExprVar`, ...). `Node.descend` finds the innermost node containing a
  `PositionRange`; `Node.src` slices a node's text out of the source.
- `nixlens.ast_compound`: attribute sets (`AttrName`, `AttrPath`,
  `Binding`, `Inherit`, `Binds`, `SemaAttrs`, `ExprAttrs`), `ExprSelect`,
  `ExprCall`, `ExprList`, `ExprIf`, `ExprAssert`, `ExprLet`, `ExprWith`,
  lambdas (`Formal`, `Formals`, `LambdaArg`, `ExprLambda`) and operators.
- `nixlens.lookup`: `Definition`, `EnvNode`, `LookupResult` and
  `VariableLookupAnalysis`, which stores lookup results
  (`record_result`, `record_definition`, `record_env`) and answers
  `query`, `to_def` and `env`. `TranslationUnit` bundles a document's
  source, tree, diagnostics and lookup results.
- `nixlens.references`: `find_references`, `rename` and `prepare_rename`
  from a `Definition`. Renaming a name that comes from `with` raises
  `RenameWithError`; renaming a builtin raises `RenameBuiltinError`.
- `nixlens.symbols`: `collect_symbols` builds the document outline as
  `DocumentSymbol`s.
- `nixlens.semantic_tokens`: `semantic_tokens` returns `SemanticToken`s in
  source order, each positioned relative to the one before; tokens spanning
  several lines are left out.
- `nixlens.hover`: `package_markdown`, `option_markdown`, `fallback_hover`,
  and `NixpkgsHoverProvider` / `OptionsHoverProvider`, which wrap any client
  object with an `attrpath_info(scope)` or `option_info(scope)` method and
  return `None` (logging the error) when the client raises.
- `nixlens.capabilities`: `server_capabilities` and `initialize_result`
  for the `initialize` reply, and the default nixpkgs and NixOS options
  expressions.
- `nixlens.protocol`: JSON forms (`to_json` / `from_json`) of the messages
  exchanged with attribute-set evaluators, `parse_json` (raising
  `JSONParseError`), `describe_package`, and the completion helpers
  `complete_attr_names` and `complete_option_fields`, which work on
  already evaluated values given as Python mappings.
- `nixlens.formatting`: `format_document` pipes a document through an
  external formatter command.
- `nixlens.launch`: finds the evaluator program (from the
  `NIXLENS_ATTRSET_EVAL` environment variable, else
  `/usr/libexec/nixlens-attrset-eval`) and starts it with
  `start_attrset_eval`.
- `nixlens.logger`: `log`, `vlog`, `elog` write to the logger installed by
  a `LoggingSession` (for example a `StreamLogger`), or to stderr.

## Installation

```
pip install .
```

Run the tests with:

```
pip install ".[test]"
pytest
```

## Example

Renaming `x` in `let x = 1; in x`:

```python
from nixlens.ast_basic import ExprVar, Identifier
from nixlens.lookup import Definition, DefinitionSource
from nixlens.ranges import LexerCursor, LexerCursorRange
from nixlens.references import rename


def span(start, end):
    return LexerCursorRange(LexerCursor(0, start, start), LexerCursor(0, end, end))


key = Identifier(span(4, 5), "x")
use = ExprVar(span(14, 15), Identifier(span(14, 15), "x"))
definition = Definition(key, DefinitionSource.LET, [use])

edit = rename(definition, "y", "file:///tmp/example.nix")
for text_edit in edit.changes["file:///tmp/example.nix"]:
    print(text_edit.range, text_edit.new_text)
```

Formatting through an external command:

```python
from nixlens.formatting import format_document

edits = format_document(["nixfmt"], "{a=1;}")
print(edits[0].new_text)
```

`format_document` raises `FormattingError` when the command is empty,
cannot be started, or exits with a non-zero status.

## What nixlens does not do

- It has no parser: syntax trees are built by constructing the node
  classes directly.
- It does not run variable lookup itself: `VariableLookupAnalysis` only
  holds results recorded into it.
- It is not a running server: there is no JSON-RPC transport, request
  loop or command-line program, and no document store. The modules supply
  the pieces such a server would answer requests with.
- It does not evaluate Nix; the evaluator is a separate program that
  `nixlens.launch` only locates and starts.