"""
Unified entry points selecting a solver from the form of the arguments.
"""

from collections.abc import Callable, Sequence

import numpy as np

from pyroots.numeric.float_ops import is_nan, same_sign
from pyroots.numeric.solve.bisect_root import bisect_root
from pyroots.numeric.solve.derivative_free import derivative_free
from pyroots.numeric.solve.multroot import multroot
from pyroots.numeric.solve.result import RootResults


# ======================================================================

def find_root(func: Callable, x0, x1=None, *, order: int = None, tol=None,
              bracket=None, max_iter: int = None,
              verbose: bool = False) -> RootResults:
    """
    Find a root of `func` from either a bracketing interval or a single
    starting point.

    - ``find_root(f, a, b)`` or ``find_root(f, (a, b))``: Bracketing
      search using `bisect_root`.  ``f(a)`` and ``f(b)`` must have
      opposite signs.
    - ``find_root(f, x0, order=k)``: Derivative-free search from `x0`
      using `derivative_free`.  The default ``order=0`` is the hybrid
      method.

    Parameters
    ----------
    func : Callable[[scalar], scalar]
        Function to find a root of.
    x0 : scalar or (scalar, scalar)
        Starting point, or a bracketing interval.
    x1 : scalar, optional
        Other end of the bracketing interval.
    order : int, optional
        Method order for a single starting point, one of ``{0, 1, 2, 5,
        8, 16}``.  Not allowed for a bracketing interval.
    tol : scalar, optional
        For a single starting point, the tolerance passed to
        `derivative_free`.  For a bracketing interval this is the `xtol`
        used for values without adjacent floats.
    bracket : (scalar, scalar), optional
        For a single starting point, an interval confining the search.
    max_iter : int, optional
        Maximum number of iterations (solver default if not given).
    verbose : bool, default = False
        If True, print progress statements.

    Returns
    -------
    RootResults

    Raises
    ------
    InvalidBracketError
        If a bracketing interval does not give a sign change.
    InvalidOrderError
        If `order` is not supported.
    ValueError
        If `order` or `bracket` is given with a bracketing interval.
    ConvergenceFailure
        If the solver does not converge.

    Examples
    --------
    >>> import math
    >>> r = find_root(lambda x: math.cos(x) - x, 0, 1)
    >>> r.certificate.name
    'EXACT_ZERO'
    """
    if x1 is None and isinstance(x0, Sequence):
        x0, x1 = x0

    if x1 is not None:
        if order is not None or bracket is not None:
            raise ValueError("'order' and 'bracket' cannot be used with a "
                             "bracketing interval.")
        return bisect_root(func, x0, x1, xtol=tol, max_iter=max_iter,
                           verbose=verbose)

    return derivative_free(func, x0, order=0 if order is None else order,
                           tol=tol, bracket=bracket, max_iter=max_iter,
                           verbose=verbose)


# ----------------------------------------------------------------------

def find_real_roots(f, a=None, b=None, *, n: int = 100,
                    gcd_tol: float = 1e-10,
                    verbose: bool = False) -> list[float]:
    """
    Find the distinct real roots of a polynomial or function.

    - Polynomial `f` (coefficient sequence in ascending power order or
      ``numpy.polynomial.Polynomial``, even though the latter is
      callable): The real roots from `multroot`, restricted to ``[a, b]``
      where these are given.  For integer or rational coefficients each
      root is within one floating point unit of the exact root.
    - Callable `f`: A sieve over ``[a, b]`` (default ``[-10, 10]``)
      split into `n` equal subintervals.  Grid points where `f` is
      exactly zero are roots, and each subinterval with a sign change is
      solved with `bisect_root`.

    .. note:: The sieve is a heuristic and not exhaustive.  A zero of
       even multiplicity, or an even number of zeros, within one
       subinterval gives no sign change and is missed.

    Parameters
    ----------
    f : Callable[[float], float] or polynomial
        Function or polynomial to search.
    a, b : float, optional
        Limits of the search.
    n : int, default = 100
        Number of subintervals used by the sieve.
    gcd_tol : float, default = 1e-10
        Passed to `multroot` for polynomials.
    verbose : bool, default = False
        Passed to `bisect_root`.

    Returns
    -------
    list[float]
        Roots in ascending order.

    Examples
    --------
    >>> find_real_roots(lambda x: x**3 - x)
    [-1.0, 0.0, 1.0]
    """
    if isinstance(f, np.polynomial.Polynomial) or not callable(f):
        roots = multroot(f, gcd_tol=gcd_tol).real_roots()
        return [r for r in roots if (a is None or r >= a) and
                (b is None or r <= b)]

    a = -10.0 if a is None else float(a)
    b = 10.0 if b is None else float(b)
    if not a < b or n < 1:
        raise ValueError("Require a < b and n >= 1.")

    xs = [float(x) for x in np.linspace(a, b, n + 1)]
    fs = [f(x) for x in xs]

    roots = {x for x, fx in zip(xs, fs) if fx == 0}
    for x_l, x_r, f_l, f_r in zip(xs, xs[1:], fs, fs[1:]):
        if (f_l == 0 or f_r == 0 or is_nan(f_l) or is_nan(f_r) or
                same_sign(f_l, f_r)):
            continue
        roots.add(bisect_root(f, x_l, x_r, f_a=f_l, f_b=f_r,
                              verbose=verbose).root)

    return sorted(roots)
