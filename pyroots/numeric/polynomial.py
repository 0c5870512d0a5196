"""
Polynomials (:mod:`pyroots.numeric.polynomial`)
===============================================

.. currentmodule:: pyroots.numeric.polynomial

Polynomial operations not otherwise covered by `NumPy` / `SciPy`.

Polynomials are represented by coefficient sequences in *ascending*
power order, i.e. ``[c0, c1, ..., cn]`` is :math:`c_0 + c_1 x + ... +
c_n x^n`, matching ``numpy.polynomial.polynomial``.  A
``numpy.polynomial.Polynomial`` object may be used anywhere a
coefficient sequence is accepted.

Three coefficient domains are recognised (see `coefficient_domain`):
integer and rational coefficients are handled exactly using
``fractions.Fraction``, real (floating point) coefficients using NumPy /
SciPy linear algebra.
"""
from __future__ import annotations

import math
from collections.abc import Sequence
from fractions import Fraction
from numbers import Integral, Rational

import numpy as np
import numpy.typing as npt
import scipy.linalg


# ======================================================================

def divided_difference(x: Sequence, y: Sequence):
    r"""
    Divided difference :math:`f[x_0, ..., x_n]` of the points `(x, y)`,
    computed recursively from

    .. math:: f[x_0, ..., x_n] = \frac{f[x_1, ..., x_n] - f[x_0, ...,
              x_{n-1}]}{x_n - x_0}

    with :math:`f[x_i] = y_i`.  The result does not depend on the order
    of the points.  Used to form secant and interpolation slopes, so any
    numeric type supporting subtraction and division is accepted (e.g.
    `float`, `Fraction` or ``mpmath.mpf``).

    Parameters
    ----------
    x, y : sequence, shape (n,)
        Abscissas (distinct) and ordinates, ``n >= 1``.

    Returns
    -------
    scalar

    Examples
    --------
    The slope and curvature terms of :math:`x^2 + 1` through three
    points:

    >>> divided_difference([0.0, 2.0], [1.0, 5.0])
    2.0
    >>> divided_difference([0.0, 2.0, 3.0], [1.0, 5.0, 10.0])
    1.0
    """
    n = len(x)
    if n < 1 or n != len(y):
        raise ValueError("'x' and 'y' must have equal length >= 1.")

    if n == 1:
        return y[0]

    if n == 2:
        return (y[1] - y[0]) / (x[1] - x[0])

    return (divided_difference(x[1:], y[1:]) -
            divided_difference(x[:-1], y[:-1])) / (x[-1] - x[0])


# ----------------------------------------------------------------------

def newton_poly_coeff(x: Sequence, y: Sequence) -> list:
    """
    Generate the list of increasing divided differences for multiple
    points `(x, y)`.  These are the coefficients of the interpolating
    polynomial in Newton form::

        [[y0], [y0, y1], [y0, y1, y2], ...]

    Parameters
    ----------
    x, y : sequence, shape (n,)
        Sequences of `x` and `y` values, with all `x` distinct.

    Returns
    -------
    list, shape (n,)
        Divided differences `[f[x0], f[x1, x0], f[x2, x1, x0], ...]`.
    """
    if len(x) != len(y):
        raise ValueError("'x' and 'y' must have the same length.")

    a = list(y)
    n = len(x)
    for i in range(1, n):
        for j in range(i, n):
            a[j] = (a[j] - a[i - 1]) / (x[j] - x[i - 1])

    return a


def newton_poly_deriv(x_pts: Sequence, a: Sequence, x):
    """
    Evaluate the derivative at `x` of the polynomial in Newton form
    with nodes `x_pts` and coefficients `a` (from `newton_poly_coeff`):

    .. math:: P(x) = a_0 + a_1(x - x_0) + ... + a_{n}(x - x_0)...(x - x_{n-1})

    Examples
    --------
    For :math:`f(x) = x^2` the quadratic through any three points is
    exact, so the derivative at `x = 3` is 6:
    >>> pts = [0.0, 1.0, 2.0]
    >>> newton_poly_deriv(pts, newton_poly_coeff(pts, [0.0, 1.0, 4.0]), 3.0)
    6.0
    """
    n = len(a) - 1
    p, dp = a[n], 0 * a[n]
    for k in range(n - 1, -1, -1):
        dp = dp * (x - x_pts[k]) + p
        p = p * (x - x_pts[k]) + a[k]

    return dp


# ======================================================================

def as_coeffs(p) -> list:
    """
    Return the coefficients of `p` as a trimmed list in ascending power
    order.  `p` may be a coefficient sequence or a
    ``numpy.polynomial.Polynomial``.  Trailing (highest power) zeros
    are removed so that the leading coefficient is nonzero.

    Raises
    ------
    ValueError
        If `p` has no coefficients or all coefficients are zero.
    """
    if isinstance(p, np.polynomial.Polynomial):
        p = p.coef

    coeffs = [c.item() if isinstance(c, np.generic) else c for c in p]
    while coeffs and coeffs[-1] == 0:
        coeffs.pop()

    if not coeffs:
        raise ValueError("Polynomial must have a nonzero coefficient.")

    return coeffs


def coefficient_domain(coeffs: Sequence) -> str:
    """
    Classify coefficients as ``'integer'``, ``'rational'`` or ``'real'``.
    Integer types (including NumPy integers and `bool`) are
    ``'integer'``; `Fraction` or other exact rationals give
    ``'rational'``; anything else (including `float` values that happen
    to be integral) is ``'real'``.

    Examples
    --------
    >>> coefficient_domain([1, -3, 2])
    'integer'
    >>> coefficient_domain([Fraction(1, 2), 1])
    'rational'
    >>> coefficient_domain([1.0, 2])
    'real'
    """
    if all(isinstance(c, Integral) for c in coeffs):
        return 'integer'
    if all(isinstance(c, Rational) for c in coeffs):
        return 'rational'
    return 'real'


# ----------------------------------------------------------------------
# Exact arithmetic over Fraction.  All results are trimmed.

def _trim(c: list) -> list:
    c = list(c)
    while len(c) > 1 and c[-1] == 0:
        c.pop()
    return c


def exact_deriv(c: Sequence[Fraction]) -> list[Fraction]:
    """Derivative of an exact polynomial."""
    if len(c) <= 1:
        return [Fraction(0)]
    return _trim([k * c[k] for k in range(1, len(c))])


def exact_divmod(a: Sequence[Fraction], b: Sequence[Fraction]
                 ) -> tuple[list[Fraction], list[Fraction]]:
    """
    Polynomial long division ``a = q * b + r`` over the rationals.
    Returns `(q, r)` with ``deg(r) < deg(b)``.
    """
    a, b = _trim([Fraction(c) for c in a]), _trim([Fraction(c) for c in b])
    if b[-1] == 0:
        raise ZeroDivisionError("Polynomial division by zero.")

    r = list(a)
    n_b = len(b) - 1
    q = [Fraction(0)] * max(len(a) - n_b, 1)
    for k in range(len(a) - 1 - n_b, -1, -1):
        q[k] = r[k + n_b] / b[-1]
        for j in range(n_b + 1):
            r[k + j] -= q[k] * b[j]

    return _trim(q), _trim(r[:n_b] or [Fraction(0)])


def exact_gcd(a: Sequence[Fraction], b: Sequence[Fraction]
              ) -> list[Fraction]:
    """
    Monic greatest common divisor of two exact polynomials by the
    Euclidean algorithm.  ``gcd(a, 0)`` is `a` made monic.
    """
    a, b = _trim([Fraction(c) for c in a]), _trim([Fraction(c) for c in b])
    while not (len(b) == 1 and b[0] == 0):
        a, b = b, exact_divmod(a, b)[1]

    return [c / a[-1] for c in a]


def exact_eval(c: Sequence[Fraction], x) -> Fraction:
    """Value of an exact polynomial at `x` (converted exactly)."""
    x, result = Fraction(x), Fraction(0)
    for c_k in reversed(c):
        result = result * x + c_k
    return result


def sturm_chain(c: Sequence[Fraction]) -> list[list[Fraction]]:
    """
    Sturm sequence :math:`s_0 = p,\\ s_1 = p',\\ s_{k+1} =
    -\\operatorname{rem}(s_{k-1}, s_k)` of an exact polynomial, ending
    at the last nonzero remainder.
    """
    chain = [_trim([Fraction(c_k) for c_k in c])]
    chain.append(exact_deriv(chain[0]))
    while len(chain[-1]) > 1:
        r = exact_divmod(chain[-2], chain[-1])[1]
        if r == [0]:
            break
        chain.append([-r_k for r_k in r])

    return chain


def isolate_real_roots(c: Sequence[Fraction]
                       ) -> list[tuple[Fraction, Fraction]]:
    """
    Isolating intervals for the real roots of an exact square free
    polynomial, in ascending order.  Each interval ``(lo, hi)`` holds
    exactly one root and the polynomial has opposite (nonzero) signs at
    its ends.

    Intervals are found by repeated subdivision of a bound on the roots,
    counting distinct roots in each part with `sturm_chain`.

    Examples
    --------
    >>> [(float(lo), float(hi)) for lo, hi in isolate_real_roots([-2, 0, 1])]
    [(-4.0, 0.0), (0.0, 4.0)]
    """
    c = _trim([Fraction(c_k) for c_k in c])
    if len(c) < 2:
        return []

    chain = sturm_chain(c)

    def variations(x):
        signs = [v > 0 for v in (exact_eval(s, x) for s in chain) if v != 0]
        return sum(s_0 != s_1 for s_0, s_1 in zip(signs, signs[1:]))

    bound = _root_bound(c)
    stack = [(-bound, variations(-bound), bound, variations(bound))]
    intervals = []
    while stack:
        lo, v_lo, hi, v_hi = stack.pop()
        n_roots = v_lo - v_hi
        if n_roots == 1:
            intervals.append((lo, hi))

        elif n_roots > 1:
            # Split, avoiding a root at the split point.
            k = 2
            mid = lo + (hi - lo) / k
            while exact_eval(c, mid) == 0:
                k += 1
                mid = lo + (hi - lo) / k

            v_mid = variations(mid)
            stack += [(lo, v_lo, mid, v_mid), (mid, v_mid, hi, v_hi)]

    return sorted(intervals)


def _root_bound(c: list[Fraction]) -> Fraction:
    # Integer strictly above |z| for every root z (Fujiwara bound with a
    # margin for rounding).
    n = len(c) - 1
    terms = [abs(float(c[n - k] / c[n])) ** (1 / k) for k in range(1, n)]
    terms.append(abs(float(c[0] / (2 * c[n]))) ** (1 / n))
    return Fraction(math.ceil(2 * max(terms) * 1.01) + 1)


# ----------------------------------------------------------------------
# Floating arithmetic.

def conv_matrix(c: npt.ArrayLike, m: int) -> np.ndarray:
    """
    Return the convolution (Cauchy) matrix `C` of shape
    ``(len(c) + m - 1, m)`` so that ``C @ u`` gives the coefficients of
    the product of polynomial `c` with a polynomial `u` having `m`
    coefficients.

    Examples
    --------
    >>> conv_matrix([1, 2], 2)
    array([[1., 0.],
           [2., 1.],
           [0., 2.]])
    """
    c = np.asarray(c)
    n = len(c)
    result = np.zeros((n + m - 1, m), dtype=np.result_type(c, float))
    for j in range(m):
        result[j:j + n, j] = c

    return result


def lstsq_divide(a: npt.ArrayLike, b: npt.ArrayLike) -> np.ndarray:
    """
    Least squares quotient `q` minimising ``||b * q - a||``, for use
    when `b` is known to (approximately) divide `a`.  Unlike long
    division this does not accumulate error from the leading terms.
    """
    a, b = np.asarray(a), np.asarray(b)
    m = len(a) - len(b) + 1
    if m < 1:
        raise ValueError("Degree of divisor exceeds degree of dividend.")

    q, *_ = scipy.linalg.lstsq(conv_matrix(b, m), a)
    return q
