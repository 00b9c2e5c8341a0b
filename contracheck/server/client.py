"""
contracheck API - Unified interface for contract checking
"""
import logging
from typing import Dict, Iterable, List, Optional

from contracheck.checks.nullability import NullabilityOracle
from contracheck.core.checker import check_contract
from contracheck.core.config import Settings
from contracheck.core.models import Clause, ContractCheckResult
from contracheck.dsl.parser import parse_contract
from contracheck.parser import ContractFunctionParser
from contracheck.verify import CheckSummary, check_file as _check_file_impl, check_source as _check_source_impl

logger = logging.getLogger(__name__)


class ContractClient:
    """
    Unified API for contract checking.

    Example usage:
        client = ContractClient()

        # Check a contract against a function signature
        result = client.check_function_source(
            "def f(x: Optional[str]) -> bool: ...", "null -> fail; _ -> true")

        # Check every @contract function in a file
        summary = client.check_file("mymodule.py")
    """

    def __init__(self, settings: Optional[Settings] = None,
                 inferred_not_null: Optional[Dict[str, List[str]]] = None):
        """
        Initialize the client.

        Args:
            settings: Runtime settings (read from the environment if not provided)
            inferred_not_null: Inferred not-null facts, {function: [parameter, ...]}
        """
        self.settings = settings or Settings.from_env()
        self.oracle = NullabilityOracle(inferred_not_null)
        self.parser = ContractFunctionParser()

    def parse_contract(self, contract: str) -> List[Clause]:
        """
        Parse contract text.

        Raises:
            ContractParseError: if the text is malformed
        """
        return parse_contract(contract)

    def check_function_source(self, function_source: str, contract: str, mutates: str = "",
                              pure: bool = False, receiver: Optional[str] = None,
                              inferred_not_null: Optional[Iterable[str]] = None) -> ContractCheckResult:
        """
        Check a contract against the first function defined in `function_source`.

        Args:
            function_source: Python source of the function (the body is ignored)
            contract: Contract text
            mutates: Mutation attribute text
            pure: Whether the function is declared pure
            receiver: Class name when the function is a method
            inferred_not_null: Parameters an inference tool found to be not-null

        Raises:
            SyntaxError: if the source is not valid Python
            ValueError: if the source defines no function
        """
        signature = self.parser.parse_signature(function_source, receiver)
        oracle = self.oracle
        if inferred_not_null:
            facts = {name: set(params) for name, params in self.oracle.inferred.items()}
            facts.setdefault(signature.name, set()).update(inferred_not_null)
            oracle = NullabilityOracle(facts)

        return check_contract(
            signature,
            contract,
            mutates=mutates,
            pure=pure,
            oracle=oracle,
            max_tracked_regions=self.settings.max_tracked_regions
        )

    def check_source(self, source: str, filename: str = "<string>") -> CheckSummary:
        return _check_source_impl(source, filename, self.oracle, self.settings.max_tracked_regions)

    def check_file(self, file_path: str, json_output: Optional[str] = None) -> CheckSummary:
        """
        Check all @contract functions in a file.

        Args:
            file_path: Path to Python file
            json_output: Optional path to save a JSON report

        Returns:
            CheckSummary with per-function results
        """
        logger.debug("Checking %s", file_path)
        return _check_file_impl(
            file_path,
            oracle=self.oracle,
            max_tracked_regions=self.settings.max_tracked_regions,
            json_output=json_output
        )
