"""
contracheck: validation of declarative function contracts
"""

from .checks.nullability import NullabilityOracle
from .core.checker import check_contract
from .core.errors import ContractError, ContractParseError
from .core.models import (
    Clause, ContractCheckResult, Diagnostic, DiagnosticKind, FunctionSignature,
    Nullability, OutcomeKind, Parameter, ReturnOutcome, TypeInfo, ValueConstraint
)
from .decorators import contract
from .dsl.parser import parse_contract

__version__ = "0.1.0"
__all__ = [
    "contract",
    "check_contract",
    "parse_contract",
    "NullabilityOracle",
    "ContractError",
    "ContractParseError",
    "Clause",
    "ContractCheckResult",
    "Diagnostic",
    "DiagnosticKind",
    "FunctionSignature",
    "Nullability",
    "OutcomeKind",
    "Parameter",
    "ReturnOutcome",
    "TypeInfo",
    "ValueConstraint"
]
