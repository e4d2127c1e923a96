"""Variable definitions, scopes and the results of variable lookup."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from nixlens.ast_basic import ExprVar, Node, NodeKind
from nixlens.diagnostic import Diagnostic


class DefinitionSource(enum.Enum):
    """Where a definition comes from."""

    WITH = "with"
    LET = "let"
    LAMBDA_ARG = "lambda_arg"
    LAMBDA_NO_ARG_FORMAL = "lambda_no_arg_formal"
    LAMBDA_WITH_ARG_ARG = "lambda_with_arg_arg"
    LAMBDA_WITH_ARG_FORMAL = "lambda_with_arg_formal"
    REC = "rec"
    BUILTIN = "builtin"


@dataclass(eq=False)
class Definition:
    """A definition: the syntax that introduces a name and the variables using it."""

    syntax: Node | None
    source: DefinitionSource
    uses: list[ExprVar] = field(default_factory=list)

    def used_by(self, var: ExprVar) -> None:
        self.uses.append(var)

    def is_builtin(self) -> bool:
        return self.source is DefinitionSource.BUILTIN


@dataclass(eq=False)
class EnvNode:
    """A set of definitions that may inherit from a parent environment."""

    parent: EnvNode | None
    defs: dict[str, Definition] = field(default_factory=dict)
    syntax: Node | None = None

    def is_with(self) -> bool:
        return self.syntax is not None and self.syntax.kind is NodeKind.EXPR_WITH


class LookupResultKind(enum.Enum):
    UNDEFINED = "undefined"
    FROM_WITH = "from_with"
    DEFINED = "defined"
    NO_SUCH_VAR = "no_such_var"


@dataclass(frozen=True)
class LookupResult:
    """What a variable resolved to."""

    kind: LookupResultKind
    definition: Definition | None = None


class VariableLookupAnalysis:
    """Def-use information for the variables of one syntax tree.

    Results are keyed by node identity.
    """

    def __init__(self, diagnostics: list[Diagnostic] | None = None):
        self.diagnostics: list[Diagnostic] = (
            diagnostics if diagnostics is not None else []
        )
        self._results: dict[ExprVar, LookupResult] = {}
        self._to_def: dict[Node, Definition] = {}
        self._envs: dict[Node, EnvNode] = {}

    def record_result(self, var: ExprVar, result: LookupResult) -> None:
        self._results[var] = result

    def record_definition(self, node: Node, definition: Definition) -> None:
        self._to_def[node] = definition

    def record_env(self, node: Node, env: EnvNode) -> None:
        self._envs[node] = env

    def query(self, var: ExprVar) -> LookupResult:
        """The binding of ``var``; NO_SUCH_VAR if it was never analysed."""
        return self._results.get(var, LookupResult(LookupResultKind.NO_SUCH_VAR))

    def to_def(self, node: Node) -> Definition | None:
        """The definition introduced by ``node``, if any."""
        return self._to_def.get(node)

    def env(self, node: Node) -> EnvNode | None:
        """The environment recorded for ``node``, if any."""
        return self._envs.get(node)


@dataclass
class TranslationUnit:
    """One parsed document: its source, tree, diagnostics and lookup results."""

    src: str
    ast: Node | None = None
    diagnostics: list[Diagnostic] = field(default_factory=list)
    lookup: VariableLookupAnalysis | None = None
    ast_bytecode: bytes | None = None

    def __post_init__(self) -> None:
        if self.src is None:
            raise ValueError("source code must not be None")