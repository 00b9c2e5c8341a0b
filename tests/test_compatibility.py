"""
Tests for parameter and outcome compatibility checks
"""

from contracheck.checks.compatibility import check_constraints, check_outcome, outcome_problem
from contracheck.checks.nullability import NullabilityOracle
from contracheck.core.models import DiagnosticKind, Nullability
from contracheck.dsl.parser import parse_contract
from contracheck.parser import ContractFunctionParser


def signature(source: str, receiver=None):
    return ContractFunctionParser().parse_signature(source, receiver)


def constraint_problem(source: str, clause: str, oracle=None):
    return check_constraints(signature(source), parse_contract(clause)[0], oracle or NullabilityOracle())


def outcome(source: str, clause: str, receiver=None):
    return outcome_problem(signature(source, receiver), parse_contract(clause)[0].outcome)


def test_any_is_always_compatible():
    assert constraint_problem("def f(x: int, y: str): ...", "_, _ -> _") is None


def test_null_on_primitive_parameter():
    problem = constraint_problem("def f(count: int): ...", "null -> fail")
    assert problem.kind is DiagnosticKind.TYPE_MISMATCH
    assert problem.slot == 0
    assert "'count'" in problem.message and "'int'" in problem.message and "'null'" in problem.message


def test_null_on_optional_parameter():
    assert constraint_problem("def f(name: Optional[str]): ...", "null -> fail") is None
    assert constraint_problem("def f(name): ...", "!null -> true") is None


def test_declared_not_null_parameter():
    """A non-optional annotation declares the parameter not-null"""
    problem = constraint_problem("def f(a: Optional[str], name: str): ...", "_, null -> fail")
    assert problem.kind is DiagnosticKind.NULLABILITY_CONFLICT
    assert problem.slot == 1
    assert "'name'" in problem.message


def test_inferred_not_null_allows_null_fail_only():
    """null -> fail is allowed on an inferred not-null parameter, nothing else is"""
    oracle = NullabilityOracle({"f": ["x"]})
    source = "def f(x) -> int: ..."

    assert constraint_problem(source, "null -> fail", oracle) is None

    for clause in ["null -> _", "!null -> fail", "!null -> _"]:
        problem = constraint_problem(source, clause, oracle)
        assert problem.kind is DiagnosticKind.NULLABILITY_CONFLICT, clause
        assert "inferred" in problem.message


def test_declared_not_null_has_no_null_fail_allowance():
    problem = constraint_problem("def f(x: str): ...", "null -> fail")
    assert problem.kind is DiagnosticKind.NULLABILITY_CONFLICT


def test_declared_fact_wins_over_inferred():
    oracle = NullabilityOracle({"f": ["x"]})
    sig = signature("def f(x: str): ...")
    assert oracle.effective_nullability(sig, sig.parameters[0]) is Nullability.NOT_NULL_DECLARED


def test_boolean_constraint_on_non_boolean():
    problem = constraint_problem("def f(flag: bool, name: str): ...", "true, false -> _")
    assert problem.kind is DiagnosticKind.TYPE_MISMATCH
    assert problem.slot == 1
    assert "expected bool" in problem.message


def test_boolean_constraint_on_boolean_types():
    assert constraint_problem("def f(a: bool, b: Optional[bool], c): ...", "true, false, true -> _") is None


def test_first_problem_wins():
    problem = constraint_problem("def f(a: int, b: str): ...", "null, true -> _")
    assert problem.slot == 0


def test_fail_and_any_outcomes():
    assert outcome("def f(x) -> int: ...", "_ -> fail") is None
    assert outcome("def f(x) -> None: ...", "_ -> _") is None


def test_fail_needs_failure_capability():
    sig = signature("def f(x) -> int: ...")
    sig.can_fail = False
    assert "cannot signal failure" in outcome_problem(sig, parse_contract("_ -> fail")[0].outcome)


def test_void_function():
    assert outcome("def f(x) -> None: ...", "_ -> null") is None
    assert "returns None" in outcome("def f(x) -> None: ...", "_ -> !null")
    assert "returns None" in outcome("def f(x) -> None: ...", "_ -> true")


def test_boolean_outcome():
    assert outcome("def f(x) -> bool: ...", "_ -> true") is None
    assert outcome("def f(x) -> Optional[bool]: ...", "_ -> false") is None
    assert outcome("def f(x): ...", "_ -> false") is None
    assert "not compatible" in outcome("def f(x) -> int: ...", "_ -> true")


def test_null_outcome():
    assert outcome("def f(x) -> Optional[str]: ...", "_ -> null") is None
    assert "primitive" in outcome("def f(x) -> int: ...", "_ -> null")
    assert "not optional" in outcome("def f(x) -> str: ...", "_ -> null")


def test_this_outcome():
    assert outcome("def f(self, x) -> 'Builder': ...", "_ -> this", receiver="Builder") is None
    assert outcome("def f(self, x) -> Self: ...", "_ -> this", receiver="Builder") is None
    assert outcome("def f(self, x): ...", "_ -> this", receiver="Builder") is None
    assert "instance methods" in outcome("def f(x) -> str: ...", "_ -> this")
    assert "receiver type 'Builder'" in outcome("def f(self, x) -> str: ...", "_ -> this", receiver="Builder")


def test_new_outcome():
    assert outcome("def f(x) -> List[int]: ...", "_ -> new") is None
    assert "primitive" in outcome("def f(x) -> int: ...", "_ -> new")


def test_parameter_outcome():
    assert outcome("def f(a: int, b: str) -> str: ...", "_, _ -> param2") is None
    assert outcome("def f(a: int, b: Optional[str]) -> Optional[str]: ...", "_, _ -> param2") is None
    assert outcome("def f(a, b) -> str: ...", "_, _ -> param1") is None
    assert "non-existing parameter" in outcome("def f(a: int) -> int: ...", "_ -> param3")
    assert "parameter 'a'" in outcome("def f(a: int, b: str) -> str: ...", "_, _ -> param1")


def test_outcome_problem_names_clause():
    sig = signature("def f(x) -> int: ...")
    problem = check_outcome(sig, parse_contract("_ -> true")[0].outcome, 2)
    assert problem.kind is DiagnosticKind.TYPE_MISMATCH
    assert problem.message.startswith("Clause #3:")
