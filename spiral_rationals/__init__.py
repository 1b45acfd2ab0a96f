"""
spiral-rationals: every rational number exactly once, via the Cantor spiral.

The integer lattice is walked along an expanding square spiral; each point
(p, q) with q != 0 is built into a canonical rational by a pluggable
constructor and emitted the first time its value appears:

  0, 1, -1, -1/2, 1/2, 2, -2, -2/3, -1/3, 1/3, 2/3, 3/2, 3, -3, ...

Sequences are lazy and restartable; SeekableSequence adds seq[n] lookup by
replaying from the start.
"""

__version__ = "0.1.0"

from .sequences import SeekableSequence, ReplayableSequence, element_at
from .spiral import (
    Direction, WalkState, START, advance, walk_lattice, lattice_points,
    SpiralIterator, CantorSpiral, cantor_spiral,
)
from .rationals import (
    canonical_pair, fraction_rational, sympy_rational, extended_rational,
    CONSTRUCTORS, get_constructor, as_pair, to_mpf,
)
from .coverage import (
    reduced_rationals, count_reduced_rationals, index_of, coverage_summary,
)
from .runner import SpiralConfig, config_from_dict, load_config, run_spiral
from .logging import SpiralLogger, RunManifest, create_manifest

__all__ = [
    "SeekableSequence", "ReplayableSequence", "element_at",
    "Direction", "WalkState", "START", "advance", "walk_lattice",
    "lattice_points", "SpiralIterator", "CantorSpiral", "cantor_spiral",
    "canonical_pair", "fraction_rational", "sympy_rational",
    "extended_rational", "CONSTRUCTORS", "get_constructor", "as_pair",
    "to_mpf",
    "reduced_rationals", "count_reduced_rationals", "index_of",
    "coverage_summary",
    "SpiralConfig", "config_from_dict", "load_config", "run_spiral",
    "SpiralLogger", "RunManifest", "create_manifest",
]
