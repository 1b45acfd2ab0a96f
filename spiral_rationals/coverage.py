"""
Coverage checks for the Cantor spiral.

The spiral reaches every rational; these helpers measure how quickly.  For a
bound K, the target set is every a/b in lowest terms with |a| <= K and
1 <= b <= K.  All of those lattice points lie inside the square of
half-width K, which the spiral has fully swept after about (2K+1)^2 steps.
"""

from fractions import Fraction
from typing import Any, Dict, List, Optional, Set, Union

import numpy as np

from .rationals import Constructor, as_pair, canonical_pair
from .spiral import CantorSpiral, SpiralIterator
from .sequences import SeekableSequence


def reduced_rationals(bound: int) -> List[Fraction]:
    """All reduced a/b with |a| <= bound, 1 <= b <= bound, sorted by value."""
    if bound < 1:
        raise ValueError(f"bound must be >= 1, got {bound}")

    seen: Set[Fraction] = set()
    for b in range(1, bound + 1):
        for a in range(-bound, bound + 1):
            seen.add(Fraction(*canonical_pair(a, b)))
    return sorted(seen)


def count_reduced_rationals(bound: int) -> int:
    """Size of reduced_rationals(bound), from a gcd table.

    Positive a/b in lowest terms are the coprime cells of the K x K table;
    negatives mirror them, plus zero.
    """
    if bound < 1:
        raise ValueError(f"bound must be >= 1, got {bound}")
    k = np.arange(1, bound + 1, dtype=np.int64)
    coprime = int(np.count_nonzero(np.gcd.outer(k, k) == 1))
    return 2 * coprime + 1


def index_of(value, sequence: SeekableSequence,
             limit: int = 100_000) -> Optional[int]:
    """Position of `value` in `sequence`, or None if not met within `limit`."""
    for i, item in enumerate(iter(sequence)):
        if i >= limit:
            break
        if item == value:
            return i
    return None


def coverage_summary(
    bound: int,
    constructor: Union[str, Constructor] = "fraction",
) -> Dict[str, Any]:
    """Walk the spiral until every rational of reduced_rationals(bound) is seen.

    Values are compared as Fractions, so any finite-valued constructor
    works.

    Returns:
        dict with 'bound', 'n_rationals', 'steps_to_cover' (values produced)
        and 'lattice_steps' (raw lattice points walked).
    """
    targets = set(reduced_rationals(bound))
    n_targets = len(targets)

    it: SpiralIterator = iter(CantorSpiral(constructor))
    # Every target lies inside the square of half-width `bound`
    cap = (2 * bound + 2) ** 2
    while targets and it.emitted < cap:
        n, d = as_pair(next(it))
        targets.discard(Fraction(n, d))

    if targets:
        raise RuntimeError(
            f"Spiral missed {len(targets)} rationals within {cap} values "
            f"(bound={bound})"
        )

    return {
        "bound": bound,
        "n_rationals": n_targets,
        "steps_to_cover": it.emitted,
        "lattice_steps": it.steps,
    }
