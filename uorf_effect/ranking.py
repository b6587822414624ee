"""
Ordering of uORFs by how strongly they are expected to affect the main coding sequence.
"""
from functools import cmp_to_key
from typing import Iterable, List, Optional

from uorf_effect.models import Uorf, UorfType

# Lower tier is more damaging
TYPE_SEVERITY = {
    UorfType.FRAMESHIFT: 0,
    UorfType.EXTENDING: 1,
    UorfType.NON_OVERLAPPING: 2,
}


def compare_uorfs(a: Uorf, b: Uorf) -> int:
    """
    Compare two ORFs by consequence.

    Returns:
        -1 if ``a`` is more damaging than ``b``, 1 if it is less damaging, 0 otherwise
    """
    if TYPE_SEVERITY[a.type] != TYPE_SEVERITY[b.type]:
        return -1 if TYPE_SEVERITY[a.type] < TYPE_SEVERITY[b.type] else 1
    if a.strength != b.strength:
        return -1 if a.strength > b.strength else 1
    if a.distance != b.distance:
        return -1 if a.distance < b.distance else 1
    return 0


def rank_uorfs(uorfs: Iterable[Uorf]) -> List[Uorf]:
    """Sort ORFs with the most damaging first."""
    return sorted(uorfs, key=cmp_to_key(compare_uorfs))


def most_severe(ranked: List[Uorf]) -> Optional[Uorf]:
    return ranked[0] if ranked else None
