"""
Tests for the clause reachability engine
"""

from contracheck.checks.reachability import ReachabilityEngine
from contracheck.core.models import DiagnosticKind, ValueConstraint
from contracheck.domain.possibilities import UNKNOWN, Tracked, exclude_clause
from contracheck.dsl.parser import parse_contract


def run(text: str, arity: int, limit: int = 300):
    engine = ReachabilityEngine(arity, limit)
    problems = []
    for index, clause in enumerate(parse_contract(text)):
        problem = engine.process(clause, index)
        if problem is not None:
            problems.append((index, problem.kind))
    return engine, problems


def test_universe_is_tracked():
    engine = ReachabilityEngine(2)
    assert engine.tracking
    assert engine.possible.regions == [(ValueConstraint.ANY, ValueConstraint.ANY)]


def test_clauses_shrink_possibilities():
    engine, problems = run("null, _ -> fail; _, true -> true", 2)
    assert problems == []
    assert engine.possible.regions == [(ValueConstraint.NOT_NULL, ValueConstraint.FALSE)]


def test_never_satisfied_clause():
    """A clause whose inputs were all handled before is never satisfied"""
    _, problems = run("null -> fail; null -> true", 1)
    assert problems == [(1, DiagnosticKind.UNSATISFIABLE_CLAUSE)]


def test_unreachable_clause_after_exhaustion():
    """Once every input is covered the next clause is unreachable"""
    _, problems = run("true -> true; false -> false; true -> false", 1)
    assert problems == [(2, DiagnosticKind.UNREACHABLE_CLAUSE)]


def test_unreachable_is_reported_once():
    engine, problems = run("_ -> true; _ -> false; null -> fail", 1)
    assert problems == [(1, DiagnosticKind.UNREACHABLE_CLAUSE)]
    assert not engine.tracking


def test_never_satisfied_does_not_change_possibilities():
    engine, problems = run("null, _ -> fail; null, true -> true; !null, _ -> _", 2)
    assert problems == [(1, DiagnosticKind.UNSATISFIABLE_CLAUSE)]
    assert engine.possible.regions == []


def test_budget_abandons_tracking():
    """Reaching the budget switches to Unknown and silences later clauses"""
    engine, problems = run("true, true, true, true -> true; true, true, true, true -> false", 4, limit=3)
    assert engine.possible is UNKNOWN
    assert engine.abandoned_at == 0
    assert problems == []


def test_exclude_clause_limit():
    possible = Tracked.universe(3)
    region = (ValueConstraint.TRUE,) * 3
    assert exclude_clause(possible, region, limit=3) is UNKNOWN
    assert len(exclude_clause(possible, region, limit=4).regions) == 3
