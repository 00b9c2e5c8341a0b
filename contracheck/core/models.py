"""
Data models for contracts, signatures and diagnostics
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class ValueConstraint(str, Enum):
    """Constraint on one parameter's value in one clause"""
    ANY = "_"
    NULL = "null"
    NOT_NULL = "!null"
    TRUE = "true"
    FALSE = "false"

    def negate(self) -> "ValueConstraint":
        """The single complementary atom of a non-ANY constraint"""
        if self is ValueConstraint.NULL:
            return ValueConstraint.NOT_NULL
        if self is ValueConstraint.NOT_NULL:
            return ValueConstraint.NULL
        if self is ValueConstraint.TRUE:
            return ValueConstraint.FALSE
        if self is ValueConstraint.FALSE:
            return ValueConstraint.TRUE
        raise ValueError("ANY constraint has no negation")

    def __str__(self) -> str:
        return self.value


class OutcomeKind(str, Enum):
    """What a function does when a clause matches"""
    ANY = "_"
    NULL = "null"
    NOT_NULL = "!null"
    TRUE = "true"
    FALSE = "false"
    FAIL = "fail"
    THIS = "this"
    NEW = "new"
    PARAMETER = "param"


@dataclass(frozen=True)
class ReturnOutcome:
    """Outcome of a clause; PARAMETER outcomes carry a 0-based slot index"""
    kind: OutcomeKind
    parameter_index: Optional[int] = None

    @property
    def is_fail(self) -> bool:
        return self.kind is OutcomeKind.FAIL

    @property
    def references_receiver(self) -> bool:
        return self.kind is OutcomeKind.THIS

    def __str__(self) -> str:
        if self.kind is OutcomeKind.PARAMETER:
            return f"param{self.parameter_index + 1}"
        return self.kind.value


# A region is a clause without its outcome
Region = Tuple[ValueConstraint, ...]


@dataclass(frozen=True)
class Clause:
    """One `constraints -> outcome` rule"""
    constraints: Tuple[ValueConstraint, ...]
    outcome: ReturnOutcome

    @property
    def parameter_count(self) -> int:
        return len(self.constraints)

    @property
    def region(self) -> Region:
        return self.constraints

    def __str__(self) -> str:
        return ", ".join(str(c) for c in self.constraints) + " -> " + str(self.outcome)


@dataclass(frozen=True)
class TypeInfo:
    """
    What the checker needs to know about a declared Python type.

    `base` is the annotation text with any Optional wrapper removed.
    """
    text: str
    base: str
    primitive: bool = False
    boolean: bool = False
    optional: bool = False
    void: bool = False
    unknown: bool = False

    @classmethod
    def unknown_type(cls, text: str = "Any") -> "TypeInfo":
        return cls(text=text, base=text, unknown=True)

    def __str__(self) -> str:
        return self.text


class Nullability(str, Enum):
    """Effective nullability fact for a parameter"""
    UNCONSTRAINED = "not-constrained"
    NOT_NULL_DECLARED = "not-null-declared"
    NOT_NULL_INFERRED = "not-null-inferred"


@dataclass(frozen=True)
class Parameter:
    name: str
    type: TypeInfo


@dataclass
class FunctionSignature:
    """Contract-relevant view of a function: slots, return type and receiver"""
    name: str
    parameters: List[Parameter]
    return_type: TypeInfo
    receiver: Optional[str] = None
    can_fail: bool = True

    @property
    def parameter_count(self) -> int:
        return len(self.parameters)


@dataclass(frozen=True)
class TextSpan:
    """Half-open character range within the contract text"""
    start: int
    end: int


class DiagnosticKind(str, Enum):
    SYNTAX_ERROR = "syntax-error"
    TYPE_MISMATCH = "type-mismatch"
    NULLABILITY_CONFLICT = "nullability-conflict"
    UNREACHABLE_CLAUSE = "unreachable-clause"
    UNSATISFIABLE_CLAUSE = "unsatisfiable-clause"
    MUTATION_PURITY_CONFLICT = "mutation-purity-conflict"


@dataclass
class Diagnostic:
    kind: DiagnosticKind
    message: str
    span: TextSpan
    clause_index: Optional[int] = None
    attribute: str = "value"
    severity: str = "error"
    line: Optional[int] = None
    column: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "message": self.message,
            "span": [self.span.start, self.span.end],
            "clause_index": self.clause_index,
            "attribute": self.attribute,
            "severity": self.severity,
            "line": self.line,
            "column": self.column
        }


@dataclass
class ContractCheckResult:
    """Everything one contract check produced"""
    function_name: str
    clauses: List[Clause] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)
    tracking_abandoned_at: Optional[int] = None

    @property
    def ok(self) -> bool:
        return not self.diagnostics
