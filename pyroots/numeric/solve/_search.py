"""
Bookkeeping shared by the iterative (single starting point) solvers:
evaluation counting, best point tracking, confinement to a bracket and
convergence certificates.
"""

from collections.abc import Callable

from pyroots.numeric.float_ops import (adjacent, has_adjacent, is_finite,
                                       machine_eps, promote, same_sign,
                                       sign_change_at_unit)
from pyroots.numeric.solve.exception import ConvergenceFailure
from pyroots.numeric.solve.result import Certificate, RootResults


# ======================================================================

class Search:
    """
    State of one root search.  Calling the object evaluates the function,
    counts the evaluation and records the best point seen.

    Parameters
    ----------
    func : Callable[[scalar], scalar]
        Function being solved.
    x0 : scalar
        Starting point.
    method : str
        Name used in results and error messages.
    bracket : (scalar, scalar), optional
        Window confining all evaluation points, in any order.
    tol : scalar, optional
        Tolerance for the `TOLERANCE_MET` certificate (default is
        ``10 * machine_eps``).
    allow_tol : bool, default = False
        If `True` the `TOLERANCE_MET` certificate may be issued.  It is
        always allowed for values without adjacent floats.
    verbose : bool, default = False
        Print progress.
    """

    def __init__(self, func: Callable, x0, method: str, *, bracket=None,
                 tol=None, allow_tol: bool = False, verbose: bool = False):
        if bracket is not None:
            lo, hi = bracket
            x0, lo, hi = promote(x0, lo, hi)
            lo, hi = min(lo, hi), max(lo, hi)
            if not (lo <= x0 <= hi):
                raise ValueError("Starting point cannot be outside "
                                 "bracket.")
            self.window = (lo, hi)
        else:
            x0, = promote(x0)
            self.window = None

        if tol is None:
            eps = machine_eps(x0)
            if eps is None:
                raise ValueError(f"tol is required for values of type "
                                 f"{type(x0).__name__}.")
            tol = 10 * eps

        self.func, self.x0, self.method = func, x0, method
        self.tol, self.verbose = tol, verbose
        self.allow_tol = allow_tol or not has_adjacent(x0)
        self.it, self.fevals = 0, 0
        self.best = None

    def __call__(self, x):
        fx = self.func(x)
        self.fevals += 1
        if is_finite(fx) and (self.best is None or
                              abs(fx) < abs(self.best[1])):
            self.best = (x, fx)
        return fx

    # ------------------------------------------------------------------

    def confine(self, x_from, x_new):
        """
        Return `x_new`, or if it lies outside the bracket the midpoint
        between `x_from` and the violated bound.
        """
        if self.window is None:
            return x_new

        lo, hi = self.window
        if x_new < lo:
            return (x_from + lo) / 2
        if x_new > hi:
            return (x_from + hi) / 2
        return x_new

    def result(self, x, certificate: Certificate,
               method: str = None) -> RootResults:
        return RootResults(x, certificate, self.it, self.fevals,
                           method or self.method)

    def fail(self, flag: int, details: str):
        """Raise `ConvergenceFailure` reporting the best point found."""
        x, fx = self.best if self.best is not None else (self.x0, None)
        raise ConvergenceFailure(f"{self.method}() failed to converge:",
                                 flag=flag, details=details, x=x, fx=fx,
                                 iterations=self.it, fevals=self.fevals)

    # ------------------------------------------------------------------

    def certify(self, x, fx) -> RootResults | None:
        """
        Return a result with the strongest certificate available at `x`,
        or `None` if there is none.  Checking for a sign change at unit
        costs up to two evaluations.  A non-finite `fx` raises
        `ConvergenceFailure` (flag 4).
        """
        if fx == 0:
            return self.result(x, Certificate.EXACT_ZERO)

        if not is_finite(fx):
            self.fail(4, "Non-finite function value.")

        if has_adjacent(x):
            found, x_c, fx_c, _ = sign_change_at_unit(self, x, fx)
            if found:
                return self.result(x_c, Certificate.EXACT_ZERO if fx_c == 0
                                   else Certificate.SIGN_CHANGE_AT_UNIT)

        if self.allow_tol and abs(fx) < self.tol:
            return self.result(x, Certificate.TOLERANCE_MET)

        return None

    def check_step(self, x, fx, x_new, fx_new) -> RootResults | None:
        """
        Check for convergence after a step from `x` to `x_new`.  Returns
        a result if converged, `None` to continue, or raises
        `ConvergenceFailure` if the step is unusable.
        """
        if self.verbose:
            print(f"... Iteration {self.it}: x = {x_new}, f = {fx_new}")

        if fx_new == 0:
            return self.result(x_new, Certificate.EXACT_ZERO)

        if not (is_finite(x_new) and is_finite(fx_new)):
            self.fail(4, "Non-finite iterate or function value.")

        if has_adjacent(x_new):
            if (x_new != x and adjacent(x, x_new) and
                    not same_sign(fx, fx_new)):
                x_b = x if abs(fx) <= abs(fx_new) else x_new
                return self.result(x_b, Certificate.SIGN_CHANGE_AT_UNIT)

            small_step = abs(x_new - x) <= 4 * machine_eps(x) * abs(x_new)
        else:
            small_step = False

        if (x_new == x or small_step or
                (self.allow_tol and abs(fx_new) < self.tol)):
            res = self.certify(x_new, fx_new)
            if res is not None:
                return res

            if x_new == x:
                self.fail(3, "Iteration stalled.")

        return None
