import dataclasses
import enum


# ======================================================================

class Certificate(enum.Enum):
    """
    Describes how strongly a returned value is guaranteed to be a root.

    Attributes
    ----------
    EXACT_ZERO
        ``f(x) == 0`` exactly.
    SIGN_CHANGE_AT_UNIT
        `f` changes sign between `x` and its floating point successor or
        predecessor.  This is the tightest bracket achievable without an
        exact zero.
    TOLERANCE_MET
        ``|f(x)| < tol``, or for values without adjacent representable
        neighbours the final bracket width was within a relative
        tolerance.  The result is plausible but not guaranteed.
    """
    EXACT_ZERO = 'exact zero'
    SIGN_CHANGE_AT_UNIT = 'sign change at unit'
    TOLERANCE_MET = 'tolerance met'

    @property
    def guaranteed(self) -> bool:
        """`True` if a root is mathematically guaranteed at (or
        immediately next to) the returned value."""
        return self is not Certificate.TOLERANCE_MET


# ----------------------------------------------------------------------

@dataclasses.dataclass(frozen=True, slots=True)
class RootResults:
    """
    Output of the scalar root finders.

    Attributes
    ----------
    root : float
        Root found.
    certificate : Certificate
        Strength of the convergence guarantee attached to `root`.
    iterations : int
        Number of iterations (steps) taken.
    fevals : int
        Number of function evaluations made.
    method : str
        Name of the method that produced `root`.  When the hybrid
        method finishes by bisection this is ``'hybrid+bisect'``.
    """
    root: object
    certificate: Certificate
    iterations: int = 0
    fevals: int = 0
    method: str = ''
