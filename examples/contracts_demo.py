"""
Example functions with contracts.

Run `contracheck check examples/contracts_demo.py` to see the problems
reported for the functions in the second half of the file.
"""

from typing import List, Optional

from contracheck import contract


# ============================================================================
# Well-formed contracts
# ============================================================================

@contract("null -> fail; _ -> !null")
def normalize(name: Optional[str]) -> str:
    return name.strip().lower()


@contract("null -> false; _ -> true")
def is_present(value: Optional[object]) -> bool:
    return value is not None


@contract("true, _ -> param2; false, _ -> null")
def pick(enabled: bool, item: Optional[str]) -> Optional[str]:
    return item if enabled else None


@contract("_ -> new", pure=True)
def copy_items(items: List[int]) -> List[int]:
    return list(items)


class Counter:

    def __init__(self):
        self.count = 0

    @contract("_ -> this", mutates="this")
    def increment(self, step: int) -> "Counter":
        self.count += step
        return self


# ============================================================================
# Contracts with problems
# ============================================================================

@contract("null -> fail; null -> true")
def redundant_clause(value: Optional[str]) -> bool:
    # second clause can never match
    return value is not None


@contract("true -> true; false -> false; true -> false")
def unreachable_clause(flag: bool) -> bool:
    return flag


@contract("null -> fail")
def primitive_null(count: int) -> int:
    return count


@contract("_, _ -> _")
def wrong_arity(value: Optional[str]) -> str:
    return value or ""


@contract("_ -> this")
def no_receiver(value: str) -> str:
    return value


@contract("_ -> _", mutates="param1", pure=True)
def pure_but_mutates(items: List[int]) -> None:
    items.clear()
