"""
======================================
Solvers (:mod:`pyroots.numeric.solve`)
======================================

.. currentmodule:: pyroots.numeric.solve

Functions for finding real roots of scalar equations and the roots and
multiplicities of polynomials.  Every scalar solver returns a
`RootResults` with a `Certificate` describing how strongly the root is
guaranteed, or raises an exception.

Functions
---------

.. autosummary::
    :toctree:

    find_root
    find_real_roots
    bisect_root
    derivative_free
    newton
    halley
    secant
    multroot
    find_multiplicity_structure
    gcd_chain
    refine_roots

Results
-------

.. autosummary::
    :toctree:

    Certificate
    RootResults
    MultRootResult
    RefineResult

Exceptions
----------

.. autosummary::
    :toctree:

    SolverError
    ConvergenceFailure
    ZeroDerivativeError
    InvalidBracketError
    InvalidOrderError
    RefinementDidNotImprove

"""

from .bisect_root import bisect_root
from .derivative_free import derivative_free
from .exception import (ConvergenceFailure, InvalidBracketError,
                        InvalidOrderError, RefinementDidNotImprove,
                        SolverError, ZeroDerivativeError)
from .find_root import find_real_roots, find_root
from .multroot import (MultRootResult, find_multiplicity_structure,
                       gcd_chain, multroot)
from .newton import halley, newton, secant
from .refine import RefineResult, refine_roots
from .result import Certificate, RootResults
