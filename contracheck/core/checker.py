"""
Main contract checking pipeline
"""

import logging
from typing import Optional

from .config import MAX_TRACKED_REGIONS
from .errors import ContractParseError
from .models import ContractCheckResult, Diagnostic, DiagnosticKind, FunctionSignature
from .spans import clause_span, constraint_span, return_value_span
from ..checks.compatibility import check_constraints, check_outcome
from ..checks.mutation import check_purity
from ..checks.nullability import NullabilityOracle
from ..checks.reachability import ReachabilityEngine
from ..dsl.parser import parse_contract

logger = logging.getLogger(__name__)


def check_contract(signature: FunctionSignature,
                   text: str,
                   mutates: str = "",
                   pure: bool = False,
                   oracle: Optional[NullabilityOracle] = None,
                   max_tracked_regions: Optional[int] = None) -> ContractCheckResult:
    """
    Check a contract against the function it is attached to.

    Args:
        signature: Slots, return type and receiver of the function
        text: Contract text, e.g. "null -> fail; _ -> !null"
        mutates: Mutation attribute text (only checked against `pure`)
        pure: Whether the function is declared pure
        oracle: Nullability facts; annotations only when omitted
        max_tracked_regions: Region budget of the reachability engine

    Returns:
        ContractCheckResult with the parsed clauses and every diagnostic found.
        Problems are reported, never raised.
    """
    oracle = oracle or NullabilityOracle()
    limit = MAX_TRACKED_REGIONS if max_tracked_regions is None else max_tracked_regions
    result = ContractCheckResult(function_name=signature.name)

    purity = check_purity(mutates, pure)
    if purity is not None:
        result.diagnostics.append(purity)

    try:
        clauses = parse_contract(text)
    except ContractParseError as e:
        logger.debug("%s: contract does not parse: %s", signature.name, e.message)
        result.diagnostics.append(Diagnostic(
            kind=DiagnosticKind.SYNTAX_ERROR,
            message=e.message,
            span=e.span,
            clause_index=e.clause_index
        ))
        return result

    result.clauses = clauses
    if not clauses:
        return result

    # All clauses share one arity, so a mismatch is reported once
    arity = clauses[0].parameter_count
    if arity != signature.parameter_count:
        result.diagnostics.append(Diagnostic(
            kind=DiagnosticKind.SYNTAX_ERROR,
            message=(f"Function takes {signature.parameter_count} parameters, "
                     f"while contract clause '{clauses[0]}' expects {arity}"),
            span=clause_span(text, 0),
            clause_index=0
        ))
        return result

    engine = ReachabilityEngine(arity, limit)
    for index, clause in enumerate(clauses):
        problem = check_constraints(signature, clause, oracle)
        if problem is not None:
            span = constraint_span(text, index, problem.slot)
        else:
            problem = check_outcome(signature, clause.outcome, index)
            if problem is not None:
                span = return_value_span(text, index)
            else:
                problem = engine.process(clause, index)
                span = clause_span(text, index)

        if problem is not None:
            result.diagnostics.append(Diagnostic(
                kind=problem.kind,
                message=problem.message,
                span=span,
                clause_index=index
            ))

    result.tracking_abandoned_at = engine.abandoned_at
    logger.debug("%s: %d clauses, %d diagnostics", signature.name, len(clauses), len(result.diagnostics))
    return result
