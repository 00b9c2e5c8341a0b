"""
contracheck checking library.
Main API for checking @contract decorated functions.
"""

import logging
import time
from typing import List, Optional

from .checks.nullability import NullabilityOracle
from .core.checker import check_contract
from .core.models import Diagnostic
from .output import ContractReportJSONFormatter
from .parser import ContractedFunction, ContractFunctionParser

logger = logging.getLogger(__name__)


class CheckResult:
    """Result of checking a single function's contract"""

    def __init__(self, name: str, lineno: int):
        self.name = name
        self.lineno = lineno
        self.contract = ""
        self.mutates = ""
        self.source = ""
        self.diagnostics: List[Diagnostic] = []
        self.clause_count = 0
        self.tracking_abandoned_at: Optional[int] = None
        self.duration = 0.0

    @property
    def ok(self) -> bool:
        return not self.diagnostics

    def __repr__(self):
        status = "✅ OK" if self.ok else f"❌ {len(self.diagnostics)} problem(s)"
        return f"{status} {self.name}:{self.lineno} - \"{self.contract}\""


class CheckSummary:
    """Summary of contract check results for a file"""

    def __init__(self, filename: str):
        self.filename = filename
        self.results: List[CheckResult] = []
        self.load_error: Optional[str] = None

    def add_result(self, result: CheckResult):
        self.results.append(result)

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def clean(self) -> int:
        return sum(1 for r in self.results if r.ok)

    @property
    def with_errors(self) -> int:
        return sum(1 for r in self.results if not r.ok)

    @property
    def diagnostic_count(self) -> int:
        return sum(len(r.diagnostics) for r in self.results)

    @property
    def ok(self) -> bool:
        return self.load_error is None and self.with_errors == 0

    def print_summary(self):
        """Print formatted summary"""
        print("\n" + "=" * 80)
        print(f"CONTRACT CHECK SUMMARY: {self.filename}")
        print("=" * 80)

        if self.load_error:
            print(f"❌ Could not load file: {self.load_error}")
            return

        if not self.results:
            print("⚠️  No @contract decorated functions found")
            return

        print(f"\nFunctions checked: {self.total}")
        print(f"✅ Clean: {self.clean}")
        print(f"❌ With problems: {self.with_errors}")

        print("\n" + "-" * 80)
        print("DETAILED RESULTS")
        print("-" * 80)

        for result in self.results:
            print(f"\n{result}")
            for diagnostic in result.diagnostics:
                where = f"{diagnostic.line}:{diagnostic.column}" if diagnostic.line else "-"
                print(f"   [{where}] {diagnostic.kind.value}: {diagnostic.message}")
            if result.tracking_abandoned_at is not None:
                print(f"   ℹ️  Reachability not tracked past clause #{result.tracking_abandoned_at + 1}")

        print("\n" + "=" * 80)


def check_function(info: ContractedFunction, oracle: Optional[NullabilityOracle] = None,
                   max_tracked_regions: Optional[int] = None) -> CheckResult:
    """
    Check the contract of a single function.

    Args:
        info: Function record from ContractFunctionParser
        oracle: Nullability facts
        max_tracked_regions: Region budget of the reachability engine

    Returns:
        CheckResult
    """
    result = CheckResult(info.name, info.lineno)
    result.contract = info.contract
    result.mutates = info.mutates
    result.source = info.source

    start_time = time.time()
    checked = check_contract(
        info.signature,
        info.contract,
        mutates=info.mutates,
        pure=info.pure,
        oracle=oracle,
        max_tracked_regions=max_tracked_regions
    )
    result.duration = time.time() - start_time

    for diagnostic in checked.diagnostics:
        position = info.mutates_position if diagnostic.attribute == "mutates" else info.contract_position
        if position is not None:
            diagnostic.line = position[0]
            diagnostic.column = position[1] + diagnostic.span.start
        else:
            diagnostic.line = info.lineno

    result.diagnostics = checked.diagnostics
    result.clause_count = len(checked.clauses)
    result.tracking_abandoned_at = checked.tracking_abandoned_at
    return result


def check_source(source: str, filename: str = "<string>", oracle: Optional[NullabilityOracle] = None,
                 max_tracked_regions: Optional[int] = None) -> CheckSummary:
    """Check every @contract decorated function in a piece of source code"""
    summary = CheckSummary(filename)
    parser = ContractFunctionParser()

    try:
        functions = parser.parse_source(source, filename)
    except SyntaxError as e:
        logger.error("%s: not valid Python: %s", filename, e)
        summary.load_error = f"SyntaxError: {e}"
        return summary

    for info in functions:
        summary.add_result(check_function(info, oracle, max_tracked_regions))
    return summary


def check_file(file_path: str, oracle: Optional[NullabilityOracle] = None,
               max_tracked_regions: Optional[int] = None,
               json_output: Optional[str] = None) -> CheckSummary:
    """
    Check all @contract decorated functions in a file.

    Args:
        file_path: Path to Python file
        oracle: Nullability facts
        max_tracked_regions: Region budget of the reachability engine
        json_output: Optional path to save a JSON report

    Returns:
        CheckSummary
    """
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            source = f.read()
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Cannot read %s: %s", file_path, e)
        summary = CheckSummary(file_path)
        summary.load_error = str(e)
        return summary

    summary = check_source(source, file_path, oracle, max_tracked_regions)
    logger.info("%s: %d contracted functions, %d diagnostics",
                file_path, summary.total, summary.diagnostic_count)

    if json_output:
        formatter = ContractReportJSONFormatter(file_path, max_tracked_regions)
        formatter.add_summary(summary)
        formatter.save_to_file(json_output)
        logger.info("JSON report saved to %s", json_output)

    return summary
