"""
JSON output formatter for contract check results.
Generates structured JSON with source and contract hashes.
"""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..utils.hashing import ArtifactHasher


class ContractReportJSONFormatter:
    """
    Formats contract check results as structured JSON.
    """

    SCHEMA_VERSION = "1.0.0"

    def __init__(self, source_file: str, max_tracked_regions: Optional[int] = None):
        """
        Initialize formatter.

        Args:
            source_file: Path to the Python source file being checked
            max_tracked_regions: Region budget used for the check, if not the default
        """
        self.source_file = source_file
        self.max_tracked_regions = max_tracked_regions
        self.load_error: Optional[str] = None
        self.results: List[Dict[str, Any]] = []

    def add_result(self,
                   function_name: str,
                   line_number: int,
                   source: str,
                   contract: str,
                   diagnostics: List[Dict[str, Any]],
                   clause_count: int,
                   duration: float,
                   mutates: str = "",
                   tracking_abandoned_at: Optional[int] = None) -> None:
        """
        Add the check result of one function.

        Args:
            function_name: Qualified name of the function
            line_number: Line number where the function is defined
            source: Python source of the function
            contract: Contract text
            diagnostics: Diagnostics as dicts (Diagnostic.to_dict())
            clause_count: Number of parsed clauses
            duration: Check duration in seconds
            mutates: Mutation attribute text
            tracking_abandoned_at: Clause index where reachability tracking stopped
        """
        source_hash = ArtifactHasher.hash_string(source)
        contract_hash = ArtifactHasher.hash_string(contract)

        self.results.append({
            "function": {
                "name": function_name,
                "line": line_number,
                "source_hash": source_hash,
                "contract_hash": contract_hash,
                "combined_hash": ArtifactHasher.compute_combined_hash(source_hash, contract_hash)
            },
            "contract": {
                "value": contract,
                "mutates": mutates,
                "clauses": clause_count
            },
            "check": {
                "ok": not diagnostics,
                "diagnostics": diagnostics,
                "tracking_abandoned_at": tracking_abandoned_at,
                "duration_seconds": round(duration, 4)
            }
        })

    def add_summary(self, summary) -> None:
        """Add every result of a CheckSummary"""
        self.load_error = summary.load_error
        for result in summary.results:
            self.add_result(
                function_name=result.name,
                line_number=result.lineno,
                source=result.source,
                contract=result.contract,
                diagnostics=[d.to_dict() for d in result.diagnostics],
                clause_count=result.clause_count,
                duration=result.duration,
                mutates=result.mutates,
                tracking_abandoned_at=result.tracking_abandoned_at
            )

    def generate(self) -> Dict[str, Any]:
        """
        Generate the complete JSON output structure.

        Returns:
            Dictionary representing the JSON structure
        """
        from .. import __version__

        total = len(self.results)
        clean = sum(1 for r in self.results if r["check"]["ok"])

        return {
            "schema_version": self.SCHEMA_VERSION,
            "metadata": {
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "source_file": self.source_file,
                "checker_version": f"contracheck-{__version__}",
                "max_tracked_regions": self.max_tracked_regions,
                "load_error": self.load_error
            },
            "summary": {
                "total_functions": total,
                "clean": clean,
                "with_errors": total - clean,
                "diagnostics": sum(len(r["check"]["diagnostics"]) for r in self.results)
            },
            "results": self.results
        }

    def to_json_string(self, indent: int = 2) -> str:
        return json.dumps(self.generate(), indent=indent)

    def save_to_file(self, output_path: str, indent: int = 2) -> None:
        """
        Save JSON to file.

        Args:
            output_path: Path to output JSON file
            indent: Number of spaces for indentation
        """
        Path(output_path).parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, 'w', encoding='utf-8') as f:
            json.dump(self.generate(), f, indent=indent)
