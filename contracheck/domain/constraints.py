"""
Algebra over value constraints and constraint regions.

A region is a tuple of per-slot constraints and stands for the Cartesian
product of the values each slot admits. Each non-ANY constraint lives in a
two-valued domain (null/not-null or true/false), so removing an atom from
ANY leaves exactly its negation.
"""

from typing import List, Optional, Set

from ..core.models import Region, ValueConstraint

ANY = ValueConstraint.ANY


def intersect(first: ValueConstraint, second: ValueConstraint) -> Optional[ValueConstraint]:
    """Values admitted by both constraints, or None when they are disjoint"""
    if first is second or second is ANY:
        return first
    if first is ANY:
        return second
    return None


def exclude(constraint: ValueConstraint, removed: ValueConstraint) -> Set[ValueConstraint]:
    """Constraints covering the values of `constraint` not admitted by `removed`"""
    if removed is ANY or constraint is removed:
        return set()
    if constraint is ANY:
        return {removed.negate()}
    # Disjoint atoms: nothing is removed
    return {constraint}


def regions_intersect(region: Region, other: Region) -> bool:
    """Regions overlap iff every slot pair overlaps"""
    assert len(region) == len(other), "regions of different arity"
    return all(intersect(a, b) is not None for a, b in zip(region, other))


def intersect_regions(region: Region, other: Region) -> Optional[Region]:
    assert len(region) == len(other), "regions of different arity"
    result = []
    for a, b in zip(region, other):
        common = intersect(a, b)
        if common is None:
            return None
        result.append(common)
    return tuple(result)


def exclude_region(region: Region, removed: Region) -> List[Region]:
    """
    Split `region` minus `removed` into pairwise disjoint sub-regions.

    Slot i of the i-th family takes the excluded part of `region[i]`; every
    earlier slot is narrowed to its intersection with `removed` so families
    do not overlap. Families with an empty slot are dropped.
    """
    assert len(region) == len(removed), "regions of different arity"
    pieces: List[Region] = []
    prefix: List[ValueConstraint] = []
    for i, (own, other) in enumerate(zip(region, removed)):
        for rest in sorted(exclude(own, other), key=lambda c: c.value):
            pieces.append(tuple(prefix) + (rest,) + tuple(region[i + 1:]))
        common = intersect(own, other)
        if common is None:
            # Later families would all carry an empty slot
            break
        prefix.append(common)
    return pieces


def universal_region(arity: int) -> Region:
    return (ANY,) * arity
