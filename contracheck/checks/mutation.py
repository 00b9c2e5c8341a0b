"""
Consistency of the mutation attribute with the pure flag
"""

from typing import Optional

from ..core.models import Diagnostic, DiagnosticKind, TextSpan


def check_purity(mutates: str, pure: bool) -> Optional[Diagnostic]:
    """Pure functions cannot declare mutation effects"""
    if not pure or not mutates.strip():
        return None
    return Diagnostic(
        kind=DiagnosticKind.MUTATION_PURITY_CONFLICT,
        message="Pure functions cannot declare mutation effects",
        span=TextSpan(0, len(mutates)),
        attribute="mutates"
    )
