"""
Numeric (:mod:`pyroots.numeric`)
================================

.. currentmodule:: pyroots.numeric

Core numeric functions used by the solvers.

.. autosummary::
    :toctree:

    solve
    derivative
    float_ops
    polynomial

"""
from .derivative import derivative
from .float_ops import (adjacent, float_midpoint, has_adjacent, is_finite,
                        is_nan, machine_eps, predecessor, promote,
                        same_sign, sign, sign_change_at_unit, successor)
from .polynomial import (as_coeffs, coefficient_domain, divided_difference,
                         newton_poly_coeff, newton_poly_deriv)
