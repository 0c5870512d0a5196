"""
Derivatives (:mod:`pyroots.numeric.derivative`)
===============================================

.. currentmodule:: pyroots.numeric.derivative

Default derivative provider for the solvers that need `f'` or `f''`.
Solvers accept any single-argument callable as a derivative; this
module is only used when none is supplied.
"""
from collections.abc import Callable

import numpy as np
import scipy.differentiate


# ======================================================================

def derivative(f: Callable[[float], float], n: int = 1, *,
               initial_step: float = 0.5) -> Callable[[float], float]:
    """
    Return a callable giving the `n`-th derivative of scalar function
    `f`, computed by adaptive central finite differences
    (``scipy.differentiate.derivative``).  Higher derivatives are
    obtained by repeated differentiation.

    Parameters
    ----------
    f : Callable[[float], float]
        Scalar function.  It need not accept arrays.
    n : int, default = 1
        Order of the derivative.
    initial_step : float, default = 0.5
        Initial finite difference step size passed to SciPy.

    Returns
    -------
    Callable[[float], float]

    Examples
    --------
    >>> import math
    >>> d_sin = derivative(math.sin)
    >>> round(d_sin(0.0), 10)
    1.0
    """
    if n < 1:
        raise ValueError(f"Derivative order must be >= 1, got {n}.")

    df = f
    for _ in range(n):
        df = _first_derivative(df, initial_step)

    return df


def _first_derivative(f, initial_step):
    f_vec = np.vectorize(f, otypes=[float])

    def df(x):
        res = scipy.differentiate.derivative(f_vec, float(x),
                                             initial_step=initial_step)
        return float(res.df)

    return df
