"""
Checks contract clauses against the real parameter and return types.
"""

from dataclasses import dataclass
from typing import Optional

from ..core.config import SELF_TYPES
from ..core.models import (
    Clause, DiagnosticKind, FunctionSignature, Nullability, OutcomeKind,
    ReturnOutcome, ValueConstraint
)
from .nullability import NullabilityOracle


@dataclass
class Problem:
    """First incompatibility found in a clause; slot is None for the outcome"""
    kind: DiagnosticKind
    message: str
    slot: Optional[int] = None


def check_constraints(signature: FunctionSignature, clause: Clause,
                      oracle: NullabilityOracle) -> Optional[Problem]:
    """Return the first parameter constraint that does not fit its parameter"""
    for slot, (constraint, parameter) in enumerate(zip(clause.constraints, signature.parameters)):
        declared = parameter.type

        if constraint is ValueConstraint.ANY:
            continue

        if constraint in (ValueConstraint.NULL, ValueConstraint.NOT_NULL):
            if declared.primitive:
                return Problem(
                    DiagnosticKind.TYPE_MISMATCH,
                    f"Parameter '{parameter.name}' has primitive type '{declared}', "
                    f"it may not be '{constraint}'",
                    slot)

            nullability = oracle.effective_nullability(signature, parameter)
            if nullability is Nullability.NOT_NULL_INFERRED:
                # null -> fail is fine when not-null was only inferred
                if constraint is ValueConstraint.NULL and clause.outcome.is_fail:
                    continue
                return Problem(
                    DiagnosticKind.NULLABILITY_CONFLICT,
                    f"Parameter '{parameter.name}' of type '{declared}' is inferred to be not-null, "
                    f"so '{constraint}' is always satisfied or never satisfied",
                    slot)
            if nullability is Nullability.NOT_NULL_DECLARED:
                return Problem(
                    DiagnosticKind.NULLABILITY_CONFLICT,
                    f"Parameter '{parameter.name}' is declared as non-optional '{declared}', "
                    f"so '{constraint}' is always satisfied or never satisfied",
                    slot)
            continue

        if constraint in (ValueConstraint.TRUE, ValueConstraint.FALSE):
            if not declared.unknown and not declared.boolean:
                return Problem(
                    DiagnosticKind.TYPE_MISMATCH,
                    f"Parameter '{parameter.name}' has '{declared}' type (expected bool), "
                    f"so '{constraint}' does not apply",
                    slot)
            continue

        raise AssertionError(f"Unhandled constraint {constraint!r}")

    return None


def check_outcome(signature: FunctionSignature, outcome: ReturnOutcome,
                  clause_index: int) -> Optional[Problem]:
    message = outcome_problem(signature, outcome)
    if message is None:
        return None
    return Problem(DiagnosticKind.TYPE_MISMATCH, f"Clause #{clause_index + 1}: {message}")


def outcome_problem(signature: FunctionSignature, outcome: ReturnOutcome) -> Optional[str]:
    """Why `outcome` cannot describe this function, or None when it can"""
    returns = signature.return_type
    kind = outcome.kind

    if kind is OutcomeKind.ANY:
        return None

    if kind is OutcomeKind.FAIL:
        if not signature.can_fail:
            return f"function '{signature.name}' cannot signal failure, so 'fail' is not applicable"
        return None

    if returns.void:
        if kind is OutcomeKind.NULL:
            return None
        return f"function returns None but the contract specifies '{outcome}'"

    if kind in (OutcomeKind.TRUE, OutcomeKind.FALSE):
        if returns.unknown or returns.boolean:
            return None
        return f"contract return value '{outcome}' is not compatible with return type '{returns}'"

    if kind is OutcomeKind.NULL:
        if returns.primitive:
            return f"function returns primitive type '{returns}' but the contract specifies 'null'"
        if not returns.unknown and not returns.optional:
            return f"return type '{returns}' is not optional, so the function cannot return 'null'"
        return None

    if kind is OutcomeKind.NOT_NULL:
        return None

    if kind is OutcomeKind.THIS:
        if signature.receiver is None:
            return "'this' is only applicable to instance methods"
        if returns.unknown or returns.base == signature.receiver or returns.base in SELF_TYPES:
            return None
        return f"return type '{returns}' is not compatible with receiver type '{signature.receiver}'"

    if kind is OutcomeKind.NEW:
        if returns.primitive:
            return f"function returns primitive type '{returns}', so 'new' is not applicable"
        return None

    if kind is OutcomeKind.PARAMETER:
        index = outcome.parameter_index
        if index is None or not 0 <= index < signature.parameter_count:
            return f"return value '{outcome}' references a non-existing parameter"
        parameter = signature.parameters[index]
        if returns.unknown or parameter.type.unknown or parameter.type.base == returns.base:
            return None
        return (f"return type '{returns}' is not compatible with parameter "
                f"'{parameter.name}' of type '{parameter.type}'")

    raise AssertionError(f"Unhandled outcome {kind!r}")
