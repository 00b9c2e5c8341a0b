"""Constraint algebra and possibility tracking"""
from .constraints import exclude, exclude_region, intersect, intersect_regions, regions_intersect
from .possibilities import UNKNOWN, PossibilitySet, Tracked, Unknown, exclude_clause

__all__ = [
    'intersect', 'exclude', 'regions_intersect', 'intersect_regions', 'exclude_region',
    'Tracked', 'Unknown', 'UNKNOWN', 'PossibilitySet', 'exclude_clause'
]
