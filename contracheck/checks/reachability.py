"""
Reachability of contract clauses.

Clauses match first-wins, so a clause only sees the inputs that no earlier
clause covered. The engine tracks those inputs as disjoint regions and
reports clauses that can never be reached. Precise tracking is abandoned
once the region count reaches the budget; after that no reachability
problem is reported for the contract.
"""

import logging
from typing import Optional

from ..core.config import MAX_TRACKED_REGIONS
from ..core.models import Clause, DiagnosticKind
from ..domain.possibilities import PossibilitySet, Tracked, Unknown, exclude_clause
from .compatibility import Problem

logger = logging.getLogger(__name__)


class ReachabilityEngine:
    """Processes the clauses of one contract, in declaration order"""

    def __init__(self, arity: int, max_tracked_regions: int = MAX_TRACKED_REGIONS):
        self.possible: PossibilitySet = Tracked.universe(arity)
        self.max_tracked_regions = max_tracked_regions
        self.exhausted = False
        self.abandoned_at: Optional[int] = None

    @property
    def tracking(self) -> bool:
        return isinstance(self.possible, Tracked) and not self.exhausted

    def process(self, clause: Clause, clause_index: int) -> Optional[Problem]:
        possible = self.possible
        if isinstance(possible, Unknown) or self.exhausted:
            return None

        if possible.empty:
            self.exhausted = True
            return Problem(
                DiagnosticKind.UNREACHABLE_CLAUSE,
                f"Contract clause '{clause}' is unreachable: "
                f"previous clauses cover all possible inputs")

        if not possible.intersects(clause.region):
            return Problem(
                DiagnosticKind.UNSATISFIABLE_CLAUSE,
                f"Contract clause '{clause}' is never satisfied "
                f"as its conditions are covered by previous clauses")

        self.possible = exclude_clause(possible, clause.region, self.max_tracked_regions)
        if isinstance(self.possible, Unknown):
            self.abandoned_at = clause_index
            logger.info("Clause #%d: more than %d uncovered regions, reachability tracking abandoned",
                        clause_index + 1, self.max_tracked_regions - 1)
        else:
            logger.debug("Clause #%d leaves %d uncovered regions",
                         clause_index + 1, len(self.possible.regions))
        return None
