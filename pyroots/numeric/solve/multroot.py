"""
Roots of polynomials together with their multiplicities.

The multiplicity structure is found from the GCD chain
:math:`p_0 = p,\\ p_{k+1} = \\gcd(p_k, p_k')` [1]_.  A root of `p` with
multiplicity `m` is a root of :math:`p_0, ..., p_{m-1}` only, so with
:math:`v_j = p_{j-1} / p_j` (the product of the distinct roots of
multiplicity at least `j`), the roots of :math:`a_j = v_j / v_{j+1}` are
exactly those of multiplicity `j`.  The distinct root estimates are then
refined by `refine_roots` using the known multiplicities.

For integer or rational coefficients the GCDs are computed exactly and
the multiplicities are exact.  The real roots of each exact factor
:math:`a_j` are then isolated with a Sturm sequence and located to a
sign change between adjacent floats using exact evaluation, so they are
accurate even for ill-conditioned polynomials such as Wilkinson's.

For real (floating point) coefficients a numerical GCD is used which
decides each GCD degree from a singular value and residual threshold
`gcd_tol`.  Roots closer together than this tolerance can resolve are
merged into one root with the combined multiplicity.

References
----------
.. [1] Zeng, Z., "Computing multiple roots of inexact polynomials",
   Mathematics of Computation 74, No. 250, pp. 869-903, 2005.
"""
import dataclasses
from fractions import Fraction

import numpy as np
import numpy.polynomial.polynomial as npoly
import scipy.linalg

from pyroots.numeric.float_ops import same_sign
from pyroots.numeric.polynomial import (
    as_coeffs, coefficient_domain, conv_matrix, exact_deriv,
    exact_divmod, exact_eval, exact_gcd, isolate_real_roots,
    lstsq_divide)
from pyroots.numeric.solve.bisect_root import bisect_root
from pyroots.numeric.solve.exception import SolverError
from pyroots.numeric.solve.refine import backward_error, refine_roots

# Roots with imaginary part below this (relative to max(1, |z|)) are
# taken as real.
_REAL_TOL = 1e-8

# Maximum Gauss-Newton steps when polishing a numerical GCD.
_GCD_MAX_ITER = 10


# ======================================================================

@dataclasses.dataclass(frozen=True, slots=True)
class MultRootResult:
    """
    Distinct roots of a polynomial with their multiplicities.

    Attributes
    ----------
    roots : tuple
        Distinct roots sorted by real then imaginary part.  Numerically
        real roots are `float`, others `complex`.
    multiplicities : tuple[int, ...]
        Multiplicity of each root.  These sum to the degree.
    backward_error : float
        Weighted coefficient residual of the roots (see `refine_roots`).
    refined : bool
        `True` if Gauss-Newton refinement improved the initial estimate.
    """
    roots: tuple
    multiplicities: tuple[int, ...]
    backward_error: float
    refined: bool

    def as_dict(self) -> dict:
        """Return ``{root: multiplicity}``."""
        return dict(zip(self.roots, self.multiplicities))

    def real_roots(self) -> list[float]:
        """Return the real roots in ascending order."""
        return [r for r in self.roots if isinstance(r, float)]


# ----------------------------------------------------------------------

def multroot(p, *, gcd_tol: float = 1e-10, refine: bool = True,
             max_iter: int = 20) -> MultRootResult:
    """
    Find the distinct roots of polynomial `p` and their multiplicities.

    Parameters
    ----------
    p : array_like or numpy.polynomial.Polynomial
        Polynomial coefficients in ascending power order, degree >= 1.
        For integer and `Fraction` coefficients the multiplicities are
        exact and each real root is certified by an exact sign change
        between adjacent floats, however ill-conditioned the polynomial.
    gcd_tol : float, default = 1e-10
        Residual threshold deciding the numerical GCD degree for real
        coefficients (not used for exact coefficients).  A candidate GCD
        is only tried if the smallest singular value of its Sylvester
        matrix is below ``sqrt(gcd_tol)``.
    refine : bool, default = True
        If `True`, refine the roots with `refine_roots`.  Certified
        real roots are never changed by refinement, so for exact
        coefficients only complex roots are refined.
    max_iter : int, default = 20
        Maximum refinement steps.

    Returns
    -------
    MultRootResult

    Raises
    ------
    ValueError
        If `p` has degree < 1.
    SolverError
        If the numerical GCD chain has inconsistent degrees (roots too
        close to resolve with `gcd_tol`).

    Examples
    --------
    >>> res = multroot([-2, 5, -4, 1])  # (x - 1)^2 (x - 2)
    >>> res.roots, res.multiplicities
    ((1.0, 2.0), (2, 1))
    """
    coeffs = as_coeffs(p)
    if len(coeffs) < 2:
        raise ValueError("Polynomial must have degree >= 1.")

    chain = gcd_chain(coeffs, gcd_tol=gcd_tol)
    exact = isinstance(chain[0][0], Fraction)
    if exact:
        # Real roots are certified and come first.
        roots, mults, n_fixed = _exact_roots(_exact_factors(chain))
    else:
        roots, mults, n_fixed = [], [], 0
        for j, a_j in enumerate(_float_factors(chain), start=1):
            a_roots = npoly.polyroots(a_j)
            roots.extend(a_roots)
            mults.extend([j] * len(a_roots))

    roots = np.array(roots)
    refined = False
    if refine and n_fixed < len(roots):
        res = refine_roots(coeffs, roots, mults, max_iter=max_iter)
        roots = np.concatenate([roots[:n_fixed], res.roots[n_fixed:]])
        refined = res.improved

    error = backward_error(coeffs, roots, mults)
    found = [float(z.real) for z in roots[:n_fixed]]
    found += [complex(z) if exact else _real_or_complex(z)
              for z in roots[n_fixed:]]

    pairs = sorted(zip(found, mults), key=lambda rm: (rm[0].real, rm[0].imag))
    return MultRootResult(tuple(r for r, _ in pairs),
                          tuple(m for _, m in pairs), error, refined)


def find_multiplicity_structure(p, **kwargs) -> dict:
    """
    Return ``{root: multiplicity}`` for polynomial `p`.  Keyword
    arguments are passed to `multroot`.

    Examples
    --------
    >>> import numpy.polynomial.polynomial as npoly
    >>> p = npoly.polyfromroots([1, 2, 2, 3, 3, 3, 3]).astype(int)
    >>> find_multiplicity_structure(list(p))
    {1.0: 1, 2.0: 2, 3.0: 4}
    """
    return multroot(p, **kwargs).as_dict()


# ----------------------------------------------------------------------

def gcd_chain(p, *, gcd_tol: float = 1e-10) -> list:
    """
    Return the GCD chain ``[p_0, p_1, ..., p_m]`` where ``p_0 = p``,
    ``p_{k+1} = gcd(p_k, p_k')`` and ``p_m`` is a constant.  Degrees
    strictly decrease along the chain.

    For integer or rational coefficients the links are lists of
    `Fraction` (monic after the first).  Otherwise they are unit-norm
    `numpy` arrays of the numerical GCD, see `multroot` for `gcd_tol`.
    """
    coeffs = as_coeffs(p)
    if coefficient_domain(coeffs) != 'real':
        chain = [[Fraction(c) for c in coeffs]]
        while len(chain[-1]) > 1:
            chain.append(exact_gcd(chain[-1], exact_deriv(chain[-1])))
        return chain

    f = np.array([float(c) for c in coeffs])
    chain = [f / np.linalg.norm(f)]
    while len(chain[-1]) > 1:
        chain.append(_float_gcd(chain[-1], gcd_tol))
    return chain


# ======================================================================

def _exact_factors(chain: list) -> list:
    v = [exact_divmod(chain[j - 1], chain[j])[0]
         for j in range(1, len(chain))]
    return [exact_divmod(v[j], v[j + 1])[0]
            for j in range(len(v) - 1)] + [v[-1]]


def _exact_roots(factors: list) -> tuple[list, list[int], int]:
    # Roots of exact square free factors: certified real roots first,
    # then complex estimates.  Returns (roots, multiplicities, n_real).
    real, real_m, cplx, cplx_m = [], [], [], []
    for j, a_j in enumerate(factors, start=1):
        if len(a_j) < 2:
            continue

        a_real = [_certified_root(a_j, lo, hi)
                  for lo, hi in isolate_real_roots(a_j)]
        real += a_real
        real_m += [j] * len(a_real)

        n_cplx = len(a_j) - 1 - len(a_real)
        if n_cplx:
            est = npoly.polyroots(np.array([float(c) for c in a_j]))
            est = sorted(est, key=lambda z: -abs(complex(z).imag))
            cplx += [complex(z) for z in est[:n_cplx]]
            cplx_m += [j] * n_cplx

    return real + cplx, real_m + cplx_m, len(real)


def _certified_root(a: list[Fraction], lo: Fraction, hi: Fraction) -> float:
    # Float root of square free `a` isolated in (lo, hi), with a sign
    # change at unit checked by exact evaluation.
    def func(x):
        return exact_eval(a, x)

    f_lo = func(lo)
    while True:
        x_lo, x_hi = float(lo), float(hi)
        if x_lo == x_hi:
            return x_lo

        f_x_lo, f_x_hi = func(x_lo), func(x_hi)
        if f_x_lo == 0:
            return x_lo
        if f_x_hi == 0:
            return x_hi
        if not same_sign(f_x_lo, f_x_hi):
            return bisect_root(func, x_lo, x_hi, f_a=f_x_lo,
                               f_b=f_x_hi).root

        # Rounding the ends lost the root, so narrow the exact interval.
        mid = (lo + hi) / 2
        f_mid = func(mid)
        if f_mid == 0:
            return float(mid)
        if same_sign(f_mid, f_lo):
            lo, f_lo = mid, f_mid
        else:
            hi = mid


def _float_factors(chain: list) -> list:
    v = [lstsq_divide(chain[j - 1], chain[j])
         for j in range(1, len(chain))]
    for j in range(len(v) - 1):
        if len(v[j]) < len(v[j + 1]):
            raise SolverError("multroot() failed: inconsistent GCD chain.",
                              details="Roots may be too close to resolve "
                                      "with the given gcd_tol.",
                              degrees=[len(c) - 1 for c in chain])

    return [lstsq_divide(v[j], v[j + 1])
            for j in range(len(v) - 1)] + [v[-1]]


def _real_or_complex(z):
    z = complex(z)
    if abs(z.imag) <= _REAL_TOL * max(1.0, abs(z)):
        return z.real
    return z


# ----------------------------------------------------------------------

def _float_gcd(f: np.ndarray, gcd_tol: float) -> np.ndarray:
    # Numerical gcd(f, f') of unit-norm f.  Candidate degrees are tried
    # from highest to lowest so the first accepted is the GCD.
    n = len(f) - 1
    g = npoly.polyder(f)
    g = g / np.linalg.norm(g)

    for k in range(n - 1, 0, -1):
        j = n - k  # Degree of cofactor v in f = u * v.

        # f * w - g * v = 0 has a nonzero solution iff deg gcd >= k.
        sylv = np.hstack([conv_matrix(f, j), -conv_matrix(g, j + 1)])
        _, s, vh = scipy.linalg.svd(sylv)
        if s[-1] > np.sqrt(gcd_tol):
            continue

        w, v = vh[-1, :j], vh[-1, j:]
        u, *_ = scipy.linalg.lstsq(conv_matrix(v, k + 1), f)
        u, residual = _polish_gcd(f, g, u, v, w)
        if residual <= gcd_tol:
            return u / np.linalg.norm(u)

    return np.ones(1)


def _polish_gcd(f, g, u, v, w) -> tuple[np.ndarray, float]:
    # Gauss-Newton refinement of f = u * v, g = u * w with the scaling
    # condition r.u = 1.  Returns (u, residual).
    k, j = len(u), len(v)
    r = u / np.dot(u, u)

    def residual(u_, v_, w_):
        return max(np.linalg.norm(np.convolve(u_, v_) - f),
                   np.linalg.norm(np.convolve(u_, w_) - g))

    best = (residual(u, v, w), u)
    for _ in range(_GCD_MAX_ITER):
        jac = np.block([
            [r[None, :], np.zeros((1, j)), np.zeros((1, j - 1))],
            [conv_matrix(v, k), conv_matrix(u, j), np.zeros((len(f), j - 1))],
            [conv_matrix(w, k), np.zeros((len(g), j)), conv_matrix(u, j - 1)]])
        rhs = np.concatenate([[np.dot(r, u) - 1],
                              np.convolve(u, v) - f,
                              np.convolve(u, w) - g])
        dz, *_ = scipy.linalg.lstsq(jac, rhs)
        u, v, w = u - dz[:k], v - dz[k:k + j], w - dz[k + j:]

        res = residual(u, v, w)
        if not res < best[0]:
            break
        best = (res, u)

    return best[1], best[0]
