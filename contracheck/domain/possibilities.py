"""
The set of input regions not yet covered by any processed clause.
"""

from dataclasses import dataclass
from itertools import islice
from typing import Iterator, List, Union

from ..core.models import Region
from .constraints import exclude_region, regions_intersect, universal_region


@dataclass
class Tracked:
    """Exact tracking: the regions are pairwise disjoint"""
    regions: List[Region]

    @classmethod
    def universe(cls, arity: int) -> "Tracked":
        return cls([universal_region(arity)])

    @property
    def empty(self) -> bool:
        return not self.regions

    def intersects(self, region: Region) -> bool:
        return any(regions_intersect(r, region) for r in self.regions)

    def remainders(self, removed: Region) -> Iterator[Region]:
        for r in self.regions:
            yield from exclude_region(r, removed)


class Unknown:
    """Tracking was abandoned after the region budget ran out"""

    def __repr__(self) -> str:
        return "Unknown"


UNKNOWN = Unknown()

PossibilitySet = Union[Tracked, Unknown]


def exclude_clause(possible: Tracked, removed: Region, limit: int) -> PossibilitySet:
    """
    Remove one clause's region from every tracked region.

    Reaching `limit` regions gives up exact tracking and returns UNKNOWN.
    """
    regions = list(islice(possible.remainders(removed), limit))
    if len(regions) >= limit:
        return UNKNOWN
    return Tracked(regions)
