"""
Root of a scalar function on a bracketing interval.
"""

from collections.abc import Callable

from pyroots.numeric.float_ops import (float_midpoint, has_adjacent,
                                       is_nan, machine_eps, promote,
                                       same_sign)
from pyroots.numeric.solve.exception import (ConvergenceFailure,
                                             InvalidBracketError)
from pyroots.numeric.solve.result import Certificate, RootResults


# ======================================================================

def bisect_root(func: Callable, x_a, x_b, *, f_a=None, f_b=None,
                xtol=None, max_iter: int = None,
                verbose: bool = False) -> RootResults:
    r"""
    Solve :math:`f(x) = 0` on interval :math:`x \in [x_a, x_b]` by
    bisection.  For bisection to work :math:`f(x)` must change sign
    across the interval, i.e. ``func(x_a)`` and ``func(x_b)`` must
    return values of opposite sign.

    For binary floats the interval is halved in the *binary
    representation* (see `float_midpoint`) until either the midpoint is
    an exact zero or `x_a` and `x_b` are adjacent floats.  This reaches
    machine precision in at most 64 evaluations for `float64` and makes
    no smoothness assumptions about `f`.

    For values without adjacent representable neighbours (e.g.
    ``mpmath.mpf``) function evaluations are relatively more expensive,
    so the superlinear Illinois variant of regula falsi is used instead
    and the search stops when the bracket is narrower than `xtol`.

    Examples
    --------
    >>> import math
    >>> r = bisect_root(math.sin, 3, 4)
    >>> r.root, r.certificate
    (3.141592653589793, <Certificate.SIGN_CHANGE_AT_UNIT: 'sign change at unit'>)
    >>> f = lambda x: (2*x - 1)*(x - 3)
    >>> bisect_root(f, 0, 1).root  # Exact zero.
    0.5

    Parameters
    ----------
    func : Callable[[scalar], scalar]
        Function which we are searching for root.
    x_a, x_b : scalar
        Each end of the search interval, in any order.
    f_a, f_b : scalar, optional
        ``func(x_a)`` and ``func(x_b)`` if already known.  These are not
        re-evaluated or counted in `fevals`.
    xtol : scalar, optional
        Bracket width at which to stop, only used for types without
        adjacent values.  Default is :math:`4\epsilon\max(1, |x|)` using
        the working precision.  Required for types where no epsilon is
        known.
    max_iter : int, optional
        Maximum number of iterations.  Default is 100 for binary floats
        and 1000 otherwise.
    verbose : bool, default = False
        If True, print progress statements.

    Returns
    -------
    RootResults
        The root lies inside ``[x_a, x_b]``.  The certificate is
        `EXACT_ZERO` or `SIGN_CHANGE_AT_UNIT` for binary floats and
        `EXACT_ZERO` or `TOLERANCE_MET` otherwise.

    Raises
    ------
    InvalidBracketError
        If ``func(x_a)`` and ``func(x_b)`` do not have opposite signs.
    ValueError
        If ``x_a == x_b`` or `xtol` is required but not given.
    ConvergenceFailure
        If `max_iter` is reached or `func` returns `NaN`.
    """
    x_a, x_b = promote(x_a, x_b)
    if x_a == x_b:
        raise ValueError("x_a and x_b must have different values.")
    if x_b < x_a:
        x_a, x_b, f_a, f_b = x_b, x_a, f_b, f_a

    fevals = 0
    if f_a is None:
        f_a, fevals = func(x_a), fevals + 1
    if f_b is None:
        f_b, fevals = func(x_b), fevals + 1

    if f_a == 0:
        return RootResults(x_a, Certificate.EXACT_ZERO, 0, fevals,
                           'bisect')
    if f_b == 0:
        return RootResults(x_b, Certificate.EXACT_ZERO, 0, fevals,
                           'bisect')

    if is_nan(f_a) or is_nan(f_b) or same_sign(f_a, f_b):
        raise InvalidBracketError(
            f"f(x_a) and f(x_b) must have opposite sign, got f({x_a}) = "
            f"{f_a} and f({x_b}) = {f_b}.")

    if verbose:
        print(f"Bisecting Root:")

    if has_adjacent(x_a):
        return _bisect_float(func, x_a, x_b, f_a, f_b, fevals,
                             max_iter=100 if max_iter is None else max_iter,
                             verbose=verbose)

    return _bracket_illinois(func, x_a, x_b, f_a, f_b, fevals, xtol=xtol,
                             max_iter=1000 if max_iter is None else max_iter,
                             verbose=verbose)


# ----------------------------------------------------------------------

def _bisect_float(func, x_a, x_b, f_a, f_b, fevals, *, max_iter, verbose):
    it = 0
    while True:
        x_m = float_midpoint(x_a, x_b)

        # Stopping criterion: x_a, x_b adjacent floats.
        if x_m == x_a or x_m == x_b:
            x, _ = min((x_a, f_a), (x_b, f_b), key=lambda p: abs(p[1]))
            return RootResults(x, Certificate.SIGN_CHANGE_AT_UNIT, it,
                               fevals, 'bisect')

        if it >= max_iter:
            x, f_x = min((x_a, f_a), (x_b, f_b), key=lambda p: abs(p[1]))
            raise ConvergenceFailure(
                "bisect_root() failed to converge:", flag=1,
                details="Reached max_iter.", x=x, fx=f_x, x_a=x_a,
                x_b=x_b, iterations=it, fevals=fevals)

        f_m = func(x_m)
        it += 1
        fevals += 1

        if verbose:
            print(f"... Iteration {it}: x = [{x_a}, {x_m}, {x_b}], "
                  f"f = [{f_a}, {f_m}, {f_b}]")

        if f_m == 0:
            return RootResults(x_m, Certificate.EXACT_ZERO, it, fevals,
                               'bisect')

        if is_nan(f_m):
            raise ConvergenceFailure(
                "bisect_root() failed to converge:", flag=4,
                details="Function returned NaN.", x=x_m, fx=f_m, x_a=x_a,
                x_b=x_b, iterations=it, fevals=fevals)

        # Narrow the interval, keeping the sign change inside.
        if same_sign(f_m, f_a):
            x_a, f_a = x_m, f_m
        else:
            x_b, f_b = x_m, f_m


# ----------------------------------------------------------------------

def _bracket_illinois(func, x_a, x_b, f_a, f_b, fevals, *, xtol, max_iter,
                      verbose):
    eps = machine_eps(x_a)
    if xtol is None and eps is None:
        raise ValueError(f"xtol is required for values of type "
                         f"{type(x_a).__name__}.")

    # Weighted end values used for the false position point, and the
    # true end values.
    g_a, g_b = f_a, f_b
    side = 0
    for it in range(1, max_iter + 1):
        # False position point; if this is not strictly inside the
        # bracket use the plain midpoint.
        x_c = x_a - g_a * (x_b - x_a) / (g_b - g_a)
        if not (x_a < x_c < x_b):
            x_c = (x_a + x_b) / 2

        f_c = func(x_c)
        fevals += 1

        if verbose:
            print(f"... Iteration {it}: x = [{x_a}, {x_c}, {x_b}], "
                  f"f = [{f_a}, {f_c}, {f_b}]")

        if f_c == 0:
            return RootResults(x_c, Certificate.EXACT_ZERO, it, fevals,
                               'illinois')

        if is_nan(f_c):
            raise ConvergenceFailure(
                "bisect_root() failed to converge:", flag=4,
                details="Function returned NaN.", x=x_c, fx=f_c, x_a=x_a,
                x_b=x_b, iterations=it, fevals=fevals)

        # Illinois modification: halve the retained function value when
        # the same end is replaced twice in a row.
        if same_sign(f_c, f_b):
            x_b, f_b, g_b = x_c, f_c, f_c
            if side == +1:
                g_a /= 2
            side = +1
        else:
            x_a, f_a, g_a = x_c, f_c, f_c
            if side == -1:
                g_b /= 2
            side = -1

        tol = xtol if xtol is not None else 4 * eps * max(1, abs(x_c))
        if x_b - x_a <= tol:
            x = x_a if abs(f_a) <= abs(f_b) else x_b
            return RootResults(x, Certificate.TOLERANCE_MET, it, fevals,
                               'illinois')

    raise ConvergenceFailure("bisect_root() failed to converge:", flag=1,
                             details="Reached max_iter.", x=x_c, fx=f_c,
                             x_a=x_a, x_b=x_b, iterations=max_iter,
                             fevals=fevals)
