"""Clause checks: type compatibility, reachability and purity"""
from .compatibility import Problem, check_constraints, check_outcome, outcome_problem
from .mutation import check_purity
from .nullability import NullabilityOracle, declared_nullability
from .reachability import ReachabilityEngine

__all__ = [
    'Problem', 'check_constraints', 'check_outcome', 'outcome_problem', 'check_purity',
    'NullabilityOracle', 'declared_nullability', 'ReachabilityEngine'
]
