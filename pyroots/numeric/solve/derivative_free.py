"""
Derivative-free root finding from a single starting point.

A family of iterations of fixed order is provided, each built from
forward difference (Steffensen) approximations to Newton's method so
that no derivative evaluations are needed:

    - Order 1: Secant method (see `secant`).
    - Order 2: Steffensen's method.
    - Order 5: Steffensen predictor with two corrector stages [1]_.
    - Order 8, 16: Steffensen predictor followed by two or three
      Newton-like stages, each using the derivative of the Newton
      interpolating polynomial through all points evaluated so far
      during the step [2]_.

The default (order 0) is a hybrid method that is much more forgiving of
poor starting points and awkward functions, see `derivative_free`.

References
----------
.. [1] Kumar, M., Singh, A. K. and Srivastava, A., "A New Fifth Order
   Derivative Free Newton-Type Method for Solving Nonlinear Equations",
   Applied Mathematics & Information Sciences 9, No. 3, pp. 1507-1513,
   2015.
.. [2] Kung, H. T. and Traub, J. F., "Optimal Order of One-Point and
   Multipoint Iteration", Journal of the ACM 21, No. 4, pp. 643-651,
   1974.
"""

from collections.abc import Callable

from pyroots.numeric.float_ops import is_finite, is_nan, same_sign
from pyroots.numeric.polynomial import (divided_difference,
                                        newton_poly_coeff,
                                        newton_poly_deriv)
from pyroots.numeric.solve._search import Search
from pyroots.numeric.solve.bisect_root import bisect_root
from pyroots.numeric.solve.exception import InvalidOrderError
from pyroots.numeric.solve.newton import secant
from pyroots.numeric.solve.result import RootResults

ORDERS = (0, 1, 2, 5, 8, 16)

# Maximum number of step halvings in one hybrid iteration.
_MAX_HALVINGS = 8

# Maximum number of doubling steps when probing for a usable point.
_MAX_PROBES = 8


# ======================================================================

def derivative_free(func: Callable, x0, *, order: int = 0, tol=None,
                    bracket=None, max_iter: int = None,
                    verbose: bool = False) -> RootResults:
    r"""
    Find a zero of `func` near `x0` without derivatives.

    The default ``order=0`` hybrid method combines:

        - A damped Steffensen / secant step.  The slope comes from a
          quadratic fit through the last three iterates when available,
          otherwise the secant through the last two, otherwise a
          forward difference with step :math:`h = f(x)` limited to
          :math:`\max(1, |x|)` in size.  If the step does not reduce
          :math:`|f|` it is halved (up to 8 times).
        - As soon as any two evaluated points give a sign change, the
          search switches to `bisect_root` on that bracket so that it
          finishes with a guaranteed certificate.

    This is slower than the fixed order methods for well behaved
    functions but tolerates poor starting points, near-singular
    derivatives and oscillatory functions.  Fixed order methods are
    faster near a simple root but diverge or cycle when :math:`f'` is
    small or :math:`f''` is large relative to the step.

    Parameters
    ----------
    func : Callable[[scalar], scalar]
        Function to find a root of.
    x0 : scalar
        Starting point.
    order : {0, 1, 2, 5, 8, 16}, default = 0
        Method to use, see module documentation.
    tol : scalar, optional
        For ``order > 0``, stop with a `TOLERANCE_MET` certificate when
        :math:`|f(x)| <` `tol` (after trying for a stronger one).
        Default is ``10 * machine_eps``.  Not used by the hybrid method
        for binary floats.
    bracket : (scalar, scalar), optional
        If given, all trial points are confined to this interval.  A
        step that would leave it is replaced by bisecting towards the
        violated bound.  `x0` must lie inside.
    max_iter : int, optional
        Maximum number of iterations (default is 100 for the hybrid
        method and 50 otherwise).
    verbose : bool, default = False
        If True, print progress statements.

    Returns
    -------
    RootResults

    Raises
    ------
    InvalidOrderError
        If `order` is not one of the supported values.
    ValueError
        If `x0` is outside `bracket`.
    ConvergenceFailure
        If no certificate is obtained within `max_iter` iterations, or
        the iteration breaks down.  The best point found is attached.

    Examples
    --------
    >>> import math
    >>> r = derivative_free(lambda x: math.cos(x) - x, 1.0)
    >>> round(r.root, 12), r.method
    (0.739085133215, 'hybrid+bisect')
    >>> r = derivative_free(lambda x: x**3 - 2 * x - 5, 2.0, order=8)
    >>> round(r.root, 12)
    2.094551481542
    """
    if order not in ORDERS:
        raise InvalidOrderError(f"Order must be one of {ORDERS}, got "
                                f"{order!r}.")

    if order == 1:
        return secant(func, x0, bracket=bracket, tol=tol,
                      max_iter=50 if max_iter is None else max_iter,
                      verbose=verbose)

    if order == 0:
        s = Search(func, x0, 'hybrid', bracket=bracket, tol=tol,
                   verbose=verbose)
        if verbose:
            print(f"Hybrid Derivative-Free Root:")
        return _hybrid(s, 100 if max_iter is None else max_iter)

    s = Search(func, x0, f'order{order}', bracket=bracket, tol=tol,
               allow_tol=True, verbose=verbose)
    if verbose:
        print(f"Derivative-Free Root (Order {order}):")
    return _fixed_order(s, _STEPS[order],
                        50 if max_iter is None else max_iter)


# ----------------------------------------------------------------------

class _Degenerate(Exception):
    # Raised internally when a slope cannot be formed.
    pass


def _slope_ok(slope) -> bool:
    return slope != 0 and is_finite(slope)


def _dd(*pts):
    # Divided difference f[x0, x1, ...] of (x, f(x)) points.
    xs = [p[0] for p in pts]
    if len(set(xs)) < len(xs):
        raise _Degenerate
    return divided_difference(xs, [p[1] for p in pts])


def _stage(s: Search, x, fx, slope):
    # One Newton-like stage x - f(x) / slope, confined to the bracket.
    if not _slope_ok(slope):
        raise _Degenerate
    x_new = s.confine(x, x - fx / slope)
    if not is_finite(x_new):
        raise _Degenerate
    return x_new, s(x_new)


def _interp_stage(s: Search, pts: list):
    # Newton-like stage from the last point using the slope of the
    # Newton interpolating polynomial through all points.
    xs, fs = [p[0] for p in pts], [p[1] for p in pts]
    if len(set(xs)) < len(xs):
        raise _Degenerate
    slope = newton_poly_deriv(xs, newton_poly_coeff(xs, fs), xs[-1])
    return _stage(s, xs[-1], fs[-1], slope)


# ----------------------------------------------------------------------
# Fixed order steps.  Each takes the current point and returns the next
# (point, value) pair, stopping early on an exact zero.  Once the first
# stage has succeeded a degenerate later stage ends the step at the
# latest point.

def _steffensen_point(s: Search, x, fx):
    w = s.confine(x, x + fx)
    return w, s(w)


def _order2_step(s, x, fx):
    w, fw = _steffensen_point(s, x, fx)
    if fw == 0:
        return w, fw
    return _stage(s, x, fx, _dd((x, fx), (w, fw)))


def _order5_step(s, x, fx):
    w, fw = _steffensen_point(s, x, fx)
    if fw == 0:
        return w, fw

    f_xw = _dd((x, fx), (w, fw))
    y, fy = _stage(s, x, fx, f_xw)
    if fy == 0:
        return y, fy

    try:
        z, fz = _stage(s, y, fy, f_xw)  # Frozen slope.
        if fz == 0:
            return z, fz
    except _Degenerate:
        return y, fy

    try:
        f_xy, f_wy = _dd((y, fy), (x, fx)), _dd((y, fy), (w, fw))
        return _stage(s, z, fz, f_xy * f_wy / f_xw)
    except _Degenerate:
        return z, fz


def _interp_steps(n_stages: int):
    def step(s, x, fx):
        w, fw = _steffensen_point(s, x, fx)
        if fw == 0:
            return w, fw

        pts = [(x, fx), (w, fw)]
        pts.append(_stage(s, x, fx, _dd(*pts)))
        for _ in range(n_stages):
            if pts[-1][1] == 0:
                break
            try:
                pts.append(_interp_stage(s, pts))
            except _Degenerate:
                break

        return pts[-1]

    return step


_STEPS = {2: _order2_step,
          5: _order5_step,
          8: _interp_steps(2),
          16: _interp_steps(3)}


# ----------------------------------------------------------------------

def _fixed_order(s: Search, step: Callable, max_iter: int) -> RootResults:
    x = s.x0
    fx = s(x)
    if (res := s.certify(x, fx)) is not None:
        return res

    for it in range(1, max_iter + 1):
        s.it = it
        try:
            x_new, fx_new = step(s, x, fx)
        except _Degenerate:
            if (res := s.certify(x, fx)) is not None:
                return res
            s.fail(2, "Degenerate slope.")

        if (res := s.check_step(x, fx, x_new, fx_new)) is not None:
            return res

        x, fx = x_new, fx_new

    s.fail(1, "Reached max_iter.")


# ======================================================================
# Hybrid method.

def _straddles(fa, fb) -> bool:
    # True if fa, fb are nonzero with opposite signs.
    return not (is_nan(fa) or is_nan(fb) or fa == 0 or fb == 0 or
                same_sign(fa, fb))


def _finish_bisect(s: Search, x_a, f_a, x_b, f_b) -> RootResults:
    if s.verbose:
        print(f"... Iteration {s.it}: Bracket found [{x_a}, {x_b}]")
    res = bisect_root(s.func, x_a, x_b, f_a=f_a, f_b=f_b,
                      verbose=s.verbose)
    return RootResults(res.root, res.certificate,
                       s.it + res.iterations, s.fevals + res.fevals,
                       'hybrid+bisect')


def _difference_step(x, fx):
    # Steffensen step h = f(x), limited to max(1, |x|) in size.
    h_max = max(1, abs(x))
    return fx if abs(fx) <= h_max else (h_max if fx > 0 else -h_max)


def _hybrid_slope(s: Search, x, fx, hist: list):
    # Returns (slope, extra_point), extra_point being any new (x, f(x))
    # evaluated to form the slope.  slope is None if unavailable.
    try:
        if len(hist) == 2:
            p_a, p_b = hist
            slope = (_dd((x, fx), p_a) + _dd((x, fx), p_b) -
                     _dd(p_a, p_b))
            if _slope_ok(slope):
                return slope, None

        if hist:
            slope = _dd((x, fx), hist[0])
            if _slope_ok(slope):
                return slope, None

    except _Degenerate:
        pass

    x_h = s.confine(x, x + _difference_step(x, fx))
    if x_h == x:
        return None, None

    f_h = s(x_h)
    return (f_h - fx) / (x_h - x), (x_h, f_h)


def _damped_step(s: Search, x, fx, step):
    # Take x - step, halving the step while |f| does not decrease.
    for _ in range(_MAX_HALVINGS + 1):
        x_new = s.confine(x, x - step)
        fx_new = s(x_new)
        if (fx_new == 0 or _straddles(fx, fx_new) or
                (is_finite(fx_new) and abs(fx_new) < abs(fx))):
            break
        step /= 2

    return x_new, fx_new


def _probe(s: Search, x, fx):
    # Walk outwards on both sides of x with doubling steps until a point
    # with a smaller |f| or a sign change is found.  Returns None if
    # there is none.
    h = _difference_step(x, fx)
    for _ in range(_MAX_PROBES):
        for x_p in (x + h, x - h):
            x_p = s.confine(x, x_p)
            if x_p == x:
                continue
            f_p = s(x_p)
            if (f_p == 0 or _straddles(fx, f_p) or
                    (is_finite(f_p) and abs(f_p) < abs(fx))):
                return x_p, f_p
        h *= 2

    return None


def _hybrid(s: Search, max_iter: int) -> RootResults:
    x = s.x0
    fx = s(x)
    if (res := s.certify(x, fx)) is not None:
        return res

    # Steps below this size are near convergence and are continued past
    # the new point to try for a bracket.
    small = s.tol ** 0.5

    hist = []  # Previous points, most recent first.
    for it in range(1, max_iter + 1):
        s.it = it
        slope, extra = _hybrid_slope(s, x, fx, hist)
        if extra is not None and (extra[1] == 0 or
                                  _straddles(fx, extra[1])):
            x_new, fx_new = extra

        elif slope is not None and _slope_ok(slope):
            x_new, fx_new = _damped_step(s, x, fx, fx / slope)

        elif hist:
            hist = []  # Retry with a difference step.
            continue

        elif (probe := _probe(s, x, fx)) is not None:
            x_new, fx_new = probe

        else:
            if (res := s.certify(x, fx)) is not None:
                return res
            s.fail(2, "Degenerate slope.")

        if _straddles(fx, fx_new):
            return _finish_bisect(s, x, fx, x_new, fx_new)

        if (fx_new != 0 and x_new != x and
                abs(x_new - x) <= small * max(1, abs(x))):
            x_o = s.confine(x_new, 2 * x_new - x)
            if x_o != x_new:
                f_o = s(x_o)
                if f_o == 0:
                    return s.check_step(x_new, fx_new, x_o, f_o)
                if _straddles(fx_new, f_o):
                    return _finish_bisect(s, x_new, fx_new, x_o, f_o)

        if (res := s.check_step(x, fx, x_new, fx_new)) is not None:
            return res

        hist = [(x, fx)] + hist[:1]
        x, fx = x_new, fx_new

    s.fail(1, "Reached max_iter.")
