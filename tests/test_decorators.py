"""
Tests for the @contract decorator
"""

from contracheck import contract
from contracheck.decorators import ContractSpec


@contract("null -> fail; _ -> !null")
def normalize(name):
    return name.strip()


@contract("_ -> new", mutates="", pure=True)
def copy_items(items):
    return list(items)


def test_decorator_records_contract():
    """The contract is recorded on the function"""
    assert normalize.__contract__ == ContractSpec("null -> fail; _ -> !null")
    assert copy_items.__contract__.pure is True


def test_decorated_functions_run_normally():
    """Functions work normally at runtime"""
    assert normalize("  x ") == "x"
    assert copy_items((1, 2)) == [1, 2]
    assert normalize.__name__ == "normalize"
