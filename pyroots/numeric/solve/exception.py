"""
Exceptions and warnings raised by the root finders.
"""

# ======================================================================

class SolverError(RuntimeError):
    """
    Base class for failures of the root finders.  Diagnostic keyword
    arguments become attributes and are listed below the message when
    the error is printed, e.g.::

        order8() failed to converge:
        flag -> 1
        details -> Reached max_iter.
        x -> 0.0012
        ...

    Attributes
    ----------
    flag : int or None
        Solver specific failure code (see `ConvergenceFailure`).
    details : str or None
        Short description of the failure.
    """

    def __init__(self, *args, flag: int = None, details: str = None,
                 **kwargs):
        super().__init__(*args)
        self.flag, self.details = flag, details
        for k, v in kwargs.items():
            setattr(self, k, v)

    def __str__(self):
        lines = [super().__str__()]
        lines += [f"{k} -> {v}" for k, v in self.__dict__.items()
                  if v is not None]
        return "\n".join(lines)


# ----------------------------------------------------------------------

class ConvergenceFailure(SolverError):
    """
    The iteration budget was exhausted (or the iteration stalled) before
    any convergence certificate could be issued.  The failing iterate is
    always attached:

    - `x`, `fx`: Best point found (smallest ``|f(x)|``) and its value.
    - `iterations`, `fevals`: Work done before failing.

    Flags used by the solvers:

    - 1: Reached `max_iter`.
    - 2: Degenerate slope (zero, non-finite or coincident points).
    - 3: Iteration stalled without a certificate.
    - 4: Non-finite iterate or function value.
    """


class ZeroDerivativeError(SolverError):
    """
    The denominator of a Newton or Halley update was exactly zero.  The
    point where this occurred is attached as `x`.
    """


# ----------------------------------------------------------------------

class InvalidBracketError(ValueError):
    """
    The endpoints of a bracket do not give function values of opposite
    sign, so a root is not guaranteed to lie between them.
    """


class InvalidOrderError(ValueError):
    """
    The requested convergence order is not one of the supported values.
    """


# ----------------------------------------------------------------------

class RefinementDidNotImprove(RuntimeWarning):
    """
    Issued when the multiplicity-aware refinement did not reduce the
    residual.  The unrefined estimate is returned in this case, as the
    multiplicity structure is only a best-effort hint.
    """
