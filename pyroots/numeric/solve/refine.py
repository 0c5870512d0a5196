"""
Structured Gauss-Newton refinement of polynomial roots with known
multiplicities.

Roots of multiplicity `m` found by unstructured methods are only
accurate to about :math:`\\epsilon^{1/m}`.  If the multiplicities are
known, solving instead for the distinct roots that best reproduce the
polynomial's coefficients restores (to first order) the accuracy of a
simple root [1]_.

References
----------
.. [1] Zeng, Z., "Computing multiple roots of inexact polynomials",
   Mathematics of Computation 74, No. 250, pp. 869-903, 2005.
"""
import dataclasses
import warnings
from collections.abc import Sequence

import numpy as np
import numpy.polynomial.polynomial as npoly
import scipy.linalg

from pyroots.numeric.polynomial import as_coeffs
from pyroots.numeric.solve.exception import RefinementDidNotImprove


# ======================================================================

@dataclasses.dataclass(frozen=True, slots=True)
class RefineResult:
    """
    Result of `refine_roots`.

    Attributes
    ----------
    roots : numpy.ndarray
        Refined distinct roots (the original estimate if `improved` is
        `False`).
    multiplicities : tuple[int, ...]
        Multiplicity of each root, unchanged from the input.
    backward_error : float
        Weighted residual :math:`\\|W (g(z) - b)\\|_2` of the returned
        roots, where `b` are the monic coefficients of the polynomial
        and :math:`W_{ii} = 1 / \\max(1, |b_i|)`.
    improved : bool
        `True` if the refinement reduced the residual.
    """
    roots: np.ndarray
    multiplicities: tuple[int, ...]
    backward_error: float
    improved: bool


# ----------------------------------------------------------------------

def refine_roots(p, roots: Sequence, multiplicities: Sequence[int], *,
                 max_iter: int = 20, tol: float = None) -> RefineResult:
    r"""
    Refine approximate distinct `roots` of polynomial `p` having the given
    `multiplicities`.

    The monic coefficients :math:`b` of `p` (omitting the leading 1) are
    matched by those of :math:`g(z) = \prod_j (x - z_j)^{m_j}` using
    Gauss-Newton iteration on the weighted least squares problem
    :math:`\min_z \|W(g(z) - b)\|`.  Column `j` of the Jacobian holds the
    coefficients of :math:`-m_j \prod_i (x - z_i)^{m_i} / (x - z_j)`.

    Parameters
    ----------
    p : array_like or numpy.polynomial.Polynomial
        Polynomial coefficients in ascending power order.
    roots : sequence of scalar
        Initial estimates of the distinct roots (real or complex).
    multiplicities : sequence of int
        Multiplicity of each root.  These must sum to the degree of `p`.
    max_iter : int, default = 20
        Maximum number of Gauss-Newton steps.
    tol : float, optional
        Stop when the correction is smaller than `tol` relative to the
        size of the roots.  Default is machine epsilon.

    Returns
    -------
    RefineResult
        If the residual was not reduced, the original estimate is returned
        with ``improved=False`` and a `RefinementDidNotImprove` warning is
        issued.  A zero initial residual is returned unchanged without a
        warning.

    Raises
    ------
    ValueError
        If the multiplicities do not sum to the degree of `p`, or the
        number of roots and multiplicities differ.
    """
    b, mults = _monic(p, multiplicities)
    if len(roots) != len(mults):
        raise ValueError("Number of roots and multiplicities must match.")

    z0 = np.asarray(roots)
    if not np.iscomplexobj(z0):
        z0 = z0.astype(float)
    if tol is None:
        tol = np.finfo(float).eps

    weight = 1 / np.maximum(1, np.abs(b))
    res0 = _residual_norm(z0, mults, b, weight)
    if res0 == 0:
        return RefineResult(z0, mults, 0.0, False)

    z, best_z, best_res = z0, z0, res0
    prev_dz = np.inf
    for _ in range(max_iter):
        jac = _jacobian(z, mults) * weight[:, None]
        r = (_expand(z, mults) - b) * weight
        dz, *_ = scipy.linalg.lstsq(jac, r)
        z = z - dz

        res = _residual_norm(z, mults, b, weight)
        if not np.isfinite(res):
            break
        if res < best_res:
            best_z, best_res = z, res

        dz_norm = np.linalg.norm(dz)
        if dz_norm <= tol * max(1.0, np.linalg.norm(z)) or dz_norm >= prev_dz:
            break
        prev_dz = dz_norm

    if best_res < res0:
        return RefineResult(best_z, mults, float(best_res), True)

    warnings.warn(RefinementDidNotImprove(
        f"Root refinement did not reduce the residual "
        f"({res0:.3e}); returning the original estimate."), stacklevel=2)
    return RefineResult(z0, mults, float(res0), False)


def backward_error(p, roots: Sequence,
                   multiplicities: Sequence[int]) -> float:
    """
    Weighted coefficient residual of `roots` with `multiplicities` as
    roots of `p`, as reported by `refine_roots`.
    """
    b, mults = _monic(p, multiplicities)
    weight = 1 / np.maximum(1, np.abs(b))
    return float(_residual_norm(np.asarray(roots), mults, b, weight))


# ----------------------------------------------------------------------

def _monic(p, multiplicities) -> tuple[np.ndarray, tuple[int, ...]]:
    # Monic coefficients of p without the leading 1.
    c = np.array([float(ci) for ci in as_coeffs(p)])
    mults = tuple(int(m) for m in multiplicities)
    if any(m < 1 for m in mults) or sum(mults) != len(c) - 1:
        raise ValueError(f"Multiplicities {mults} must be positive and "
                         f"sum to the degree {len(c) - 1}.")
    return c[:-1] / c[-1], mults


def _expand(z: np.ndarray, mults: tuple[int, ...],
            drop: int = None) -> np.ndarray:
    # Coefficients of prod (x - z_j)^m_j without the leading 1.  If
    # `drop` is given, one factor of root `drop` is removed and the full
    # coefficients are returned.
    m = list(mults)
    if drop is not None:
        m[drop] -= 1
    c = npoly.polyfromroots(np.repeat(z, m)) if sum(m) else np.ones(1)
    return c if drop is not None else c[:-1]


def _jacobian(z: np.ndarray, mults: tuple[int, ...]) -> np.ndarray:
    return np.column_stack([-m * _expand(z, mults, drop=j)
                            for j, m in enumerate(mults)])


def _residual_norm(z, mults, b, weight):
    return np.linalg.norm((_expand(z, mults) - b) * weight)
