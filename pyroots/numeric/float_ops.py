"""
Floating Point Operations (:mod:`pyroots.numeric.float_ops`)
============================================================

.. currentmodule:: pyroots.numeric.float_ops

Arithmetic predicates that work at the granularity of adjacent
representable floating point values.  These give the strictest
achievable meaning of "found a root up to rounding" for a continuous
function: either `f(x)` is exactly zero, or `f` changes sign between `x`
and one of its immediate neighbours.

Values without a fixed-width binary representation (e.g.
``mpmath.mpf``) have no neighbours.  For these :func:`has_adjacent`
returns `False` and callers fall back to a tolerance based on
:func:`machine_eps`.
"""
from __future__ import annotations

from collections.abc import Callable
from fractions import Fraction
from numbers import Integral

import mpmath
import numpy as np

# ======================================================================

# Signed integer types sharing the bit layout of each float type.
_INT_VIEW = {np.dtype(np.float16): np.int16,
             np.dtype(np.float32): np.int32,
             np.dtype(np.float64): np.int64}


# ======================================================================

def has_adjacent(x) -> bool:
    """
    Returns `True` if `x` is a fixed-width binary float (i.e. it has a
    well-defined successor and predecessor).
    """
    return (isinstance(x, float) or
            (isinstance(x, np.floating) and np.dtype(type(x)) in _INT_VIEW))


def machine_eps(x):
    """
    Returns the machine epsilon applicable to the type of `x`, or `None`
    if the type has no known epsilon.

    Examples
    --------
    >>> machine_eps(1.0)
    2.220446049250313e-16
    >>> machine_eps(np.float32(1.0))
    np.float32(1.1920929e-07)
    """
    if isinstance(x, mpmath.mpf):
        return mpmath.mp.eps
    if isinstance(x, np.floating):
        return np.finfo(type(x)).eps
    if isinstance(x, float):
        return float(np.finfo(float).eps)
    return None


def promote(*xs) -> tuple:
    """
    Convert solver inputs to a common working type:

    - If any value is an ``mpmath.mpf``, all become ``mpf``.
    - Otherwise if any value is a NumPy float, all become that type.
    - Otherwise plain numbers (`int`, `Fraction`, `float`) become
      `float`.
    - Anything else is returned unchanged.
    """
    if any(isinstance(x, mpmath.mpf) for x in xs):
        return tuple(mpmath.mpf(x) for x in xs)

    for x in xs:
        if isinstance(x, np.floating):
            ftype = type(x)
            return tuple(ftype(x_i) for x_i in xs)

    if all(isinstance(x, (Integral, Fraction, float)) for x in xs):
        return tuple(float(x) for x in xs)

    return xs


# ----------------------------------------------------------------------

def sign(x) -> int:
    """
    Returns -1, 0 or +1.  Works for any ordered numeric type (including
    ``mpf``).  `NaN` gives 0, so callers check `NaN` separately.
    """
    return int(x > 0) - int(x < 0)


def same_sign(fa, fb) -> bool:
    """
    Returns `True` if `fa` and `fb` are both strictly positive or both
    strictly negative.  Signs are compared rather than forming the
    product ``fa * fb``, which may underflow to zero.
    """
    return sign(fa) * sign(fb) > 0


def is_finite(x) -> bool:
    """Returns `True` if `x` is neither infinite nor `NaN`."""
    if isinstance(x, Fraction):
        return True
    if isinstance(x, mpmath.mpf):
        return bool(mpmath.isfinite(x))
    return bool(np.isfinite(x))


def is_nan(x) -> bool:
    """Returns `True` if `x` is `NaN` (for any supported type)."""
    if isinstance(x, Fraction):
        return False
    if isinstance(x, mpmath.mpf):
        return bool(mpmath.isnan(x))
    return bool(np.isnan(x))


# ======================================================================

def _like(value, x):
    # Return `value` as the same float type as `x`.
    return float(value) if isinstance(x, float) else type(x)(value)


def successor(x):
    """
    Returns the next representable value above `x`, using the binary
    representation (not ``x + eps``).

    Examples
    --------
    >>> successor(1.0)
    1.0000000000000002
    >>> successor(0.0)
    5e-324
    """
    if not has_adjacent(x):
        raise TypeError(f"No adjacent values defined for {type(x)}.")
    return _like(np.nextafter(x, _like(np.inf, x)), x)


def predecessor(x):
    """
    Returns the next representable value below `x`, using the binary
    representation (not ``x - eps``).

    Examples
    --------
    >>> predecessor(1.0)
    0.9999999999999999
    """
    if not has_adjacent(x):
        raise TypeError(f"No adjacent values defined for {type(x)}.")
    return _like(np.nextafter(x, _like(-np.inf, x)), x)


def adjacent(a, b) -> bool:
    """
    Returns `True` if no representable value lies strictly between `a`
    and `b` (including ``a == b``).
    """
    if a == b:
        return True
    lo, hi = (a, b) if a < b else (b, a)
    return successor(lo) == hi


# ----------------------------------------------------------------------

def float_midpoint(a, b):
    """
    Midpoint of `a` and `b` taken in the binary representation:

    - If `a` and `b` have strictly opposite signs the result is zero.
    - Otherwise the integer bit patterns of `|a|` and `|b|` are averaged
      and the common sign is restored.

    Each halving of the bit-pattern distance removes one bit of
    uncertainty, so bisection of any float64 bracket terminates in at
    most 64 steps regardless of the magnitudes involved.  Infinite
    endpoints are averaged through their bit patterns in the same way;
    `NaN` propagates.

    Examples
    --------
    >>> float_midpoint(-1.0, 2.0)
    0.0
    >>> float_midpoint(1.0, 4.0)
    2.0
    >>> float_midpoint(1.0, 2.0)
    1.5
    """
    if is_nan(a) or is_nan(b):
        return a + b

    if (a < 0 < b) or (b < 0 < a):
        return _like(0, a)

    negate = a < 0 or b < 0
    a_abs = np.asarray(abs(a), dtype=np.result_type(a))
    b_abs = np.asarray(abs(b), dtype=a_abs.dtype)
    int_type = _INT_VIEW[a_abs.dtype]

    # Bit patterns of non-negative floats are ordered like the values.
    m_bits = (int(a_abs.view(int_type)) + int(b_abs.view(int_type))) // 2
    mid = np.asarray(m_bits, dtype=int_type).view(a_abs.dtype)[()]
    return _like(-mid if negate else mid, a)


# ----------------------------------------------------------------------

def sign_change_at_unit(f: Callable, c, fc=None) -> tuple[bool, object,
                                                          object, int]:
    """
    Check whether `f` changes sign between `c` and one of its immediate
    floating point neighbours, i.e. whether
    ``f(predecessor(c)) * f(c) <= 0`` or ``f(c) * f(successor(c)) <= 0``
    (evaluated by comparing signs).

    Parameters
    ----------
    f : Callable[[float], float]
        Scalar function.
    c : float
        Point to check.  Must be a binary float (see `has_adjacent`).
    fc : float, optional
        ``f(c)`` if already known.

    Returns
    -------
    found, x, fx, fevals : (bool, float, float, int)
        `found` is `True` if the sign change exists.  `x`, `fx` is
        normally `c`, `f(c)`, except that if a neighbour evaluates to
        exactly zero it is returned instead.  `fevals` is the number of
        function evaluations made.  `found` is always `False` if `fc` is
        `NaN`.
    """
    fevals = 0
    if fc is None:
        fc = f(c)
        fevals += 1

    if is_nan(fc):
        return False, c, fc, fevals

    for neighbour in (predecessor(c), successor(c)):
        fn = f(neighbour)
        fevals += 1
        if fn == 0:
            return True, neighbour, fn, fevals
        if is_nan(fn):
            continue
        if not same_sign(fn, fc):
            return True, c, fc, fevals

    return False, c, fc, fevals
