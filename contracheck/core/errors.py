"""
Exceptions raised while reading contracts
"""

from typing import Optional

from .models import TextSpan
from .spans import clause_span, constraint_span, return_value_span


class ContractError(Exception):
    """Base class for contracheck errors"""


class ContractParseError(ContractError):
    """
    Malformed contract text.

    Carries the span of the offending text, the clause it belongs to and,
    when the problem is a single token, the constraint slot or the return
    value position.
    """

    def __init__(self, message: str, span: TextSpan, clause_index: Optional[int] = None,
                 slot: Optional[int] = None, return_value: bool = False):
        super().__init__(message)
        self.message = message
        self.span = span
        self.clause_index = clause_index
        self.slot = slot
        self.return_value = return_value

    @classmethod
    def for_clause(cls, message: str, text: str, clause_index: int) -> "ContractParseError":
        return cls(message, clause_span(text, clause_index), clause_index)

    @classmethod
    def for_constraint(cls, message: str, text: str, clause_index: int, slot: int) -> "ContractParseError":
        return cls(message, constraint_span(text, clause_index, slot), clause_index, slot=slot)

    @classmethod
    def for_return_value(cls, message: str, text: str, clause_index: int) -> "ContractParseError":
        return cls(message, return_value_span(text, clause_index), clause_index, return_value=True)


class NullabilityFactsError(ContractError):
    """Unreadable or malformed nullability facts file"""
