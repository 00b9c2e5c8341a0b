"""
Parser for contract text.

    contract   := clause (";" clause)*
    clause     := [constraint ("," constraint)*] "->" outcome
    constraint := "_" | "null" | "!null" | "true" | "false"
    outcome    := constraint | "any" | "fail" | "this" | "new" | "param" N
"""

import logging
import re
from typing import List

from ..core.config import (
    ARROW, CLAUSE_SEPARATOR, CONSTRAINT_SEPARATOR, CONSTRAINT_TOKENS,
    OUTCOME_TOKENS, PARAMETER_OUTCOME_PREFIX
)
from ..core.errors import ContractParseError
from ..core.models import Clause, OutcomeKind, ReturnOutcome, ValueConstraint

logger = logging.getLogger(__name__)

PARAMETER_OUTCOME = re.compile(re.escape(PARAMETER_OUTCOME_PREFIX) + r"([1-9][0-9]*)")

CONSTRAINT_HELP = "null, !null, true, false, _"
OUTCOME_HELP = "null, !null, true, false, this, new, paramN, fail, any, _"


def parse_contract(text: str) -> List[Clause]:
    """
    Parse contract text into clauses, in declaration order.

    Raises:
        ContractParseError: on the first malformed clause
    """
    if not text.strip():
        return []

    clauses: List[Clause] = []
    for index, clause_text in enumerate(text.split(CLAUSE_SEPARATOR)):
        clause = _parse_clause(text, clause_text, index)
        if clauses and clause.parameter_count != clauses[0].parameter_count:
            raise ContractParseError.for_clause(
                f"Contract clause '{clause}' has {clause.parameter_count} constraints "
                f"while the first clause has {clauses[0].parameter_count}",
                text, index)
        clauses.append(clause)

    logger.debug("Parsed %d contract clauses from %r", len(clauses), text)
    return clauses


def format_contract(clauses: List[Clause]) -> str:
    return "; ".join(str(c) for c in clauses)


def _parse_clause(text: str, clause_text: str, index: int) -> Clause:
    if not clause_text.strip():
        raise ContractParseError.for_clause("Empty contract clause", text, index)

    arrow = clause_text.find(ARROW)
    if arrow < 0:
        raise ContractParseError.for_clause(
            "A contract clause must be in form 'arg1, ..., argN -> return-value'", text, index)

    head = clause_text[:arrow]
    constraints = []
    if head.strip():
        for slot, token in enumerate(head.split(CONSTRAINT_SEPARATOR)):
            constraints.append(_parse_constraint(token.strip(), text, index, slot))

    outcome = _parse_outcome(clause_text[arrow + len(ARROW):].strip(), text, index)
    return Clause(tuple(constraints), outcome)


def _parse_constraint(token: str, text: str, index: int, slot: int) -> ValueConstraint:
    constraint = CONSTRAINT_TOKENS.get(token)
    if constraint is None:
        raise ContractParseError.for_constraint(
            f"Constraint should be one of: {CONSTRAINT_HELP}. Found: '{token}'", text, index, slot)
    return constraint


def _parse_outcome(token: str, text: str, index: int) -> ReturnOutcome:
    if not token:
        raise ContractParseError.for_return_value(
            f"Missing return value after '{ARROW}'", text, index)

    words = token.split()
    if len(words) > 1 and _known_outcome(words[0]):
        raise ContractParseError.for_return_value(
            f"Unexpected content after return value: '{token[len(words[0]):].strip()}'", text, index)

    kind = OUTCOME_TOKENS.get(token)
    if kind is not None:
        return ReturnOutcome(kind)

    match = PARAMETER_OUTCOME.fullmatch(token)
    if match:
        return ReturnOutcome(OutcomeKind.PARAMETER, int(match.group(1)) - 1)

    raise ContractParseError.for_return_value(
        f"Return value should be one of: {OUTCOME_HELP}. Found: '{token}'", text, index)


def _known_outcome(token: str) -> bool:
    return token in OUTCOME_TOKENS or PARAMETER_OUTCOME.fullmatch(token) is not None
