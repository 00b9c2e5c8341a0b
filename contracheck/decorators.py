"""
Decorator for attaching contracts to functions.

Usage:
    @contract("null -> fail; _ -> !null")
    def normalize(name: Optional[str]) -> str:
        ...

Methods may return their receiver and declare what they mutate:
    @contract("_ -> this", mutates="this")
    def reset(self) -> "Counter":
        ...

The decorator does nothing at runtime apart from recording the contract;
`contracheck check` reads it from the source.
"""

from dataclasses import dataclass
from typing import Callable


@dataclass(frozen=True)
class ContractSpec:
    """Contract attributes as written on the decorator"""
    value: str
    mutates: str = ""
    pure: bool = False


def contract(value: str = "", *, mutates: str = "", pure: bool = False) -> Callable:
    """
    Specify the contract of a function.

    Args:
        value: Contract clauses, e.g. "null -> fail; _ -> !null"
        mutates: Mutation effects, e.g. "this, param1"
        pure: The function has no side effects
    """
    def decorator(func: Callable) -> Callable:
        func.__contract__ = ContractSpec(value, mutates, pure)
        return func
    return decorator
