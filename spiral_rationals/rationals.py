"""
Rational construction functions for the spiral enumerator.

A construction function maps a lattice point (numerator, denominator) to a
canonical rational value.  It owns all normalization:

  1. Move the sign of the denominator onto the numerator
  2. Reduce by gcd of absolute values
  3. Map special shapes (0/0, n/0) to sentinel values, or reject them

The enumerator only needs equality/hash on the results: two pairs that
reduce to the same number must produce equal values.

Available constructors:
  fraction  - fractions.Fraction; zero denominators raise ZeroDivisionError
  sympy     - sympy.Rational; n/0 becomes zoo, 0/0 becomes nan
  extended  - sympy.Rational with signed infinities: n/0 -> oo or -oo,
              0/0 -> nan
"""

from fractions import Fraction
from math import gcd
from typing import Callable, Dict, Tuple, Union

import mpmath as mp
import sympy as sp

Constructor = Callable[[int, int], object]


def canonical_pair(numerator: int, denominator: int) -> Tuple[int, int]:
    """Reduce (numerator, denominator) to lowest terms.

    Rules:
      - Zero numerator gives (0, 1)
      - Negative denominator: negate both
      - Divide by gcd of absolute values

    Raises:
        ValueError if the denominator is 0.
    """
    if denominator == 0:
        raise ValueError(f"{numerator}/0: Zero denominator")
    if numerator == 0:
        return (0, 1)

    if denominator < 0:
        numerator, denominator = -numerator, -denominator

    g = gcd(abs(numerator), denominator)
    return (numerator // g, denominator // g)


def fraction_rational(numerator: int, denominator: int) -> Fraction:
    """Strict rational; no representation for a zero denominator."""
    return Fraction(numerator, denominator)


def sympy_rational(numerator: int, denominator: int) -> sp.Rational:
    return sp.Rational(numerator, denominator)


def extended_rational(numerator: int, denominator: int) -> sp.Expr:
    """Rational with NaN and signed infinities for zero denominators."""
    if denominator == 0:
        if numerator == 0:
            return sp.nan
        return sp.oo if numerator > 0 else -sp.oo
    return sp.Rational(numerator, denominator)


CONSTRUCTORS: Dict[str, Constructor] = {
    "fraction": fraction_rational,
    "sympy": sympy_rational,
    "extended": extended_rational,
}


def get_constructor(constructor: Union[str, Constructor]) -> Constructor:
    """Look up a constructor by registry name; callables pass through."""
    if callable(constructor):
        return constructor
    fn = CONSTRUCTORS.get(constructor)
    if fn is None:
        raise ValueError(
            f"Unknown rational constructor {constructor!r}. "
            f"Available: {sorted(CONSTRUCTORS)}"
        )
    return fn


def as_pair(value) -> Tuple[int, int]:
    """(numerator, denominator) of a finite constructed value."""
    if isinstance(value, Fraction):
        return (value.numerator, value.denominator)
    if isinstance(value, sp.Rational):
        return (int(value.p), int(value.q))
    if isinstance(value, int) and not isinstance(value, bool):
        return (value, 1)
    raise ValueError(f"{value!r} has no finite numerator/denominator")


def to_mpf(value, dps: int = 50) -> mp.mpf:
    """High-precision float of a constructed value, sentinels included.

    zoo (unsigned infinity) has no real value and maps to nan.
    """
    if value is sp.nan or value is sp.zoo:
        return mp.nan
    if value is sp.oo:
        return mp.inf
    if value is sp.S.NegativeInfinity:
        return mp.ninf
    n, d = as_pair(value)
    with mp.workdps(dps):
        return mp.mpf(n) / mp.mpf(d)
