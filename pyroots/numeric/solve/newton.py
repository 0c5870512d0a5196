"""
Classical root finding iterations using derivatives (Newton-Raphson,
Halley) or a derivative approximation (secant), with the following
additional features:

    - Convergence is only reported with a certificate: an exact zero or
      a sign change between adjacent floats.
    - All trial points can be kept within a given bracket.  A step that
      would leave the bracket is replaced by bisecting towards the
      violated bound.  This may help in the situation where the given
      function is not well defined outside the bracket.
    - If no derivative is given, one is computed numerically (see
      `pyroots.numeric.derivative`).
"""

from collections.abc import Callable

import numpy as np

from pyroots.numeric.derivative import derivative
from pyroots.numeric.float_ops import is_finite, machine_eps, sign
from pyroots.numeric.solve._search import Search
from pyroots.numeric.solve.exception import ZeroDerivativeError
from pyroots.numeric.solve.result import RootResults


# ======================================================================

def newton(func: Callable, x0, fprime: Callable = None, *, bracket=None,
           tol=None, max_iter: int = 50,
           verbose: bool = False) -> RootResults:
    r"""
    Find a zero of `func` using the Newton-Raphson method
    :math:`x_{n+1} = x_n - f(x_n) / f'(x_n)`.

    Parameters
    ----------
    func : Callable[[scalar], scalar]
        Function to find a root of.
    x0 : scalar
        Starting point.
    fprime : Callable[[scalar], scalar], optional
        Derivative of `func`.  Default is a numerical derivative.
    bracket : (scalar, scalar), optional
        If given, all trial points are kept inside this interval.
    tol : scalar, optional
        Only used for values without adjacent floats (e.g.
        ``mpmath.mpf``): stop when :math:`|f(x)| <` `tol`.
    max_iter : int, default = 50
        Maximum number of iterations.
    verbose : bool, default = False
        If True, print progress statements.

    Returns
    -------
    RootResults

    Raises
    ------
    ZeroDerivativeError
        If :math:`f'(x_n)` is exactly zero.
    ConvergenceFailure
        If `max_iter` is reached, the iteration stalls without a
        certificate, or a non-finite value occurs.

    Examples
    --------
    >>> r = newton(lambda x: x**2 - 2, 1.0, lambda x: 2 * x)
    >>> round(r.root, 12)
    1.414213562373
    """
    if fprime is None:
        fprime = derivative(func)

    s = Search(func, x0, 'newton', bracket=bracket, tol=tol,
               verbose=verbose)

    def newton_step(x, fx):
        fder = fprime(x)
        if fder == 0:
            raise ZeroDerivativeError(
                "newton() failed: derivative was zero.", x=x, fx=fx,
                iterations=s.it, fevals=s.fevals)
        return x - fx / fder

    if verbose:
        print(f"Newton-Raphson Root:")
    return _iterate(s, newton_step, max_iter)


# ----------------------------------------------------------------------

def halley(func: Callable, x0, fprime: Callable = None,
           fprime2: Callable = None, *, bracket=None, tol=None,
           max_iter: int = 50, verbose: bool = False) -> RootResults:
    r"""
    Find a zero of `func` using Halley's method:

    .. math:: x_{n+1} = x_n - \frac{2 f f'}{2 f'^2 - f f''}

    This has cubic convergence near a simple root.  Parameters, results
    and exceptions are the same as `newton`, with the addition of:

    Parameters
    ----------
    fprime2 : Callable[[scalar], scalar], optional
        Second derivative of `func`.  Default is a numerical derivative
        of `fprime`.

    Raises
    ------
    ZeroDerivativeError
        If the denominator :math:`2 f'^2 - f f''` is exactly zero.
    """
    if fprime is None:
        fprime = derivative(func)
    if fprime2 is None:
        fprime2 = derivative(fprime)

    s = Search(func, x0, 'halley', bracket=bracket, tol=tol,
               verbose=verbose)

    def halley_step(x, fx):
        fder = fprime(x)
        fder2 = fprime2(x)
        denom = 2 * fder * fder - fx * fder2
        if denom == 0:
            raise ZeroDerivativeError(
                "halley() failed: denominator was zero.", x=x, fx=fx,
                iterations=s.it, fevals=s.fevals)
        return x - 2 * fx * fder / denom

    if verbose:
        print(f"Halley Root:")
    return _iterate(s, halley_step, max_iter)


# ----------------------------------------------------------------------

def secant(func: Callable, x0, x1=None, *, bracket=None, tol=None,
           max_iter: int = 50, verbose: bool = False) -> RootResults:
    """
    Find a zero of `func` using the secant method, which approximates
    the derivative from the two most recent points.

    Parameters
    ----------
    x1 : scalar, optional
        Second starting point, different from `x0`.  If not given it is
        placed a small distance from `x0`, towards the middle of the
        `bracket` if one was given, otherwise away from zero.

    Other parameters, results and exceptions are the same as `newton`.
    A flat secant (``func(x0) == func(x1)``) raises
    `ConvergenceFailure`.

    Examples
    --------
    >>> r = secant(lambda x: x**2 - 2, 1.0, 2.0)
    >>> round(r.root, 12)
    1.414213562373
    """
    s = Search(func, x0, 'secant', bracket=bracket, tol=tol,
               verbose=verbose)
    p0 = s.x0
    p1 = _secant_start(p0, s.window) if x1 is None else type(p0)(x1)
    if p1 == p0:
        raise ValueError("x1 and x0 must be different.")
    p1 = s.confine(p0, p1)

    if verbose:
        print(f"Secant Root:")

    q0 = s(p0)
    if (res := s.certify(p0, q0)) is not None:
        return res

    q1 = s(p1)
    if q1 == 0:
        return s.check_step(p0, q0, p1, q1)

    # Keep the better point as the most recent one.
    if abs(q1) > abs(q0):
        p0, p1, q0, q1 = p1, p0, q1, q0

    for it in range(1, max_iter + 1):
        s.it = it
        if q1 == q0:
            s.fail(2, "Flat secant: f(x0) == f(x1).")

        p = s.confine(p1, p1 - q1 * (p1 - p0) / (q1 - q0))
        q = s(p)
        if (res := s.check_step(p1, q1, p, q)) is not None:
            return res

        p0, q0, p1, q1 = p1, q1, p, q

    s.fail(1, "Reached max_iter.")


# ======================================================================

def _iterate(s: Search, update: Callable, max_iter: int) -> RootResults:
    # Fixed point iteration x <- update(x, f(x)) with certificate checks.
    x = s.x0
    fx = s(x)
    if (res := s.certify(x, fx)) is not None:
        return res

    for it in range(1, max_iter + 1):
        s.it = it
        x_new = s.confine(x, update(x, fx))
        if not is_finite(x_new):
            s.fail(4, "Non-finite iterate.")

        fx_new = s(x_new)
        if (res := s.check_step(x, fx, x_new, fx_new)) is not None:
            return res

        x, fx = x_new, fx_new

    s.fail(1, "Reached max_iter.")


def _secant_start(p0, window):
    # Generate a second secant point as a small offset from p0.
    offset = 1.0e-3  # Multiplier for characteristic scale.
    eps = 2 * (machine_eps(p0) or np.finfo(float).eps)

    if window is not None and all(is_finite(b) for b in window):
        # Both boundaries defined, offset p0 towards the midpoint.
        p_mid = (window[0] + window[1]) / 2
        p_scl = window[1] - window[0]
        dirn = sign(p_mid - p0) or 1

    elif window is not None and any(is_finite(b) for b in window):
        # One finite bound, offset p0 towards the known boundary.
        finite_bound = window[0] if is_finite(window[0]) else window[1]
        dirn = sign(finite_bound - p0) or -sign(p0) or 1
        p_scl = abs(finite_bound - p0)
        if p_scl < eps:
            p_scl = abs(p0) if abs(p0) >= eps else 1

    else:
        # No bounds, offset away from zero using |p0| as the scale.
        dirn = sign(p0) or 1
        p_scl = abs(p0) if abs(p0) >= eps else 1

    return p0 + dirn * p_scl * offset
