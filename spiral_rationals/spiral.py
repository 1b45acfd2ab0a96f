"""
Cantor spiral: every rational number exactly once.

The walk visits the integer lattice (p, q) along an expanding square spiral
centred at the origin, starting at (0, 0) heading north:

  N: q += 1, turn east  when q == |p| + 1
  E: p += 1, turn south when p == q
  S: q -= 1, turn west  when |q| == p
  W: p -= 1, turn north when p == q

Each full N-E-S-W cycle grows the square by one unit, so every integer pair
is eventually reached.  A lattice point is read as numerator/denominator:

  1. Skip points with q == 0 (for every constructor, including ones that
     can represent infinities and NaN)
  2. Build the canonical rational with the plugged constructor
  3. Skip values already produced (2/4 after 1/2, ...)

The first values are 0, 1, -1, -1/2, 1/2, 2, -2, -2/3, -1/3, 1/3, ...

See https://youtu.be/3xyYs_eQTUc
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Set, Tuple, Union

import numpy as np

from .rationals import Constructor, get_constructor
from .sequences import SeekableSequence


class Direction(Enum):
    N = "N"
    E = "E"
    S = "S"
    W = "W"


@dataclass(frozen=True)
class WalkState:
    """Position and heading of the spiral walk."""
    p: int
    q: int
    direction: Direction

    @property
    def point(self) -> Tuple[int, int]:
        return (self.p, self.q)


START = WalkState(0, 0, Direction.N)


def advance(state: WalkState) -> Tuple[WalkState, Tuple[int, int]]:
    """Take one spiral step.  Returns the new state and its lattice point."""
    p, q, d = state.p, state.q, state.direction

    if d is Direction.N:
        q += 1
        if q == abs(p) + 1:
            d = Direction.E
    elif d is Direction.E:
        p += 1
        if p == q:
            d = Direction.S
    elif d is Direction.S:
        q -= 1
        if abs(q) == p:
            d = Direction.W
    else:
        p -= 1
        if p == q:
            d = Direction.N

    return WalkState(p, q, d), (p, q)


def walk_lattice(state: WalkState = START) -> Iterator[Tuple[int, int]]:
    """Endless lattice points of the spiral, after `state`."""
    while True:
        state, point = advance(state)
        yield point


def lattice_points(count: int) -> np.ndarray:
    """First `count` raw lattice points (zero denominators included).

    Returns:
        int64 array of shape (count, 2), columns (p, q).
    """
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")
    pts = np.empty((count, 2), dtype=np.int64)
    walk = walk_lattice()
    for i in range(count):
        pts[i] = next(walk)
    return pts


class SpiralIterator:
    """One pass over the Cantor spiral.

    Owns its walk state and seen-set; not safe to advance from more than
    one consumer.  The seen-set keeps every value produced so far and is
    never trimmed.
    """

    def __init__(self, construct: Union[str, Constructor] = "fraction"):
        self._construct = get_constructor(construct)
        self._state = START
        self._seen: Set = set()

        self.steps = 0
        self.skipped_zero = 0
        self.skipped_duplicate = 0
        self.emitted = 0

    @property
    def state(self) -> WalkState:
        return self._state

    @property
    def seen_count(self) -> int:
        return len(self._seen)

    def __iter__(self) -> "SpiralIterator":
        return self

    def __next__(self):
        # The spiral has no stopping point: it runs until the caller stops
        while True:
            self._state, (p, q) = advance(self._state)
            self.steps += 1

            # Explicit check so strict constructors never see a zero
            # denominator
            if q == 0:
                self.skipped_zero += 1
                continue

            value = self._construct(p, q)
            if value in self._seen:
                self.skipped_duplicate += 1
                continue

            self._seen.add(value)
            self.emitted += 1
            return value


class CantorSpiral(SeekableSequence):
    """The rationals in Cantor spiral order, as a seekable sequence.

    Usage:
        spiral = CantorSpiral("fraction")
        spiral[4]          # Fraction(1, 2)
        spiral.take(5)     # [0, 1, -1, -1/2, 1/2]
    """

    def __init__(self, construct: Union[str, Constructor] = "fraction"):
        self.construct = get_constructor(construct)

    def __iter__(self) -> SpiralIterator:
        return SpiralIterator(self.construct)

    def __repr__(self) -> str:
        name = getattr(self.construct, "__name__", repr(self.construct))
        return f"CantorSpiral({name})"


def cantor_spiral(constructor: Union[str, Constructor] = "fraction",
                  ) -> CantorSpiral:
    """Generate the Cantor spiral for walking the rationals."""
    return CantorSpiral(constructor)
