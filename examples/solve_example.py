#!/usr/bin/env python3

# Examples of finding roots of scalar functions and polynomials.

import math

import mpmath

from pyroots.numeric.solve import (ConvergenceFailure, derivative_free,
                                   find_real_roots, find_root, multroot,
                                   newton)


def kepler(x):
    """Kepler's equation with eccentricity 0.9 and mean anomaly 0.3."""
    return x - 0.9 * math.sin(x) - 0.3


# Bracketing search: the result is a sign change between adjacent floats.
res = find_root(kepler, 0.0, 2.0, verbose=True)
print(f"\nBracketed: {res}\n")

# Derivative-free search from a single point, each supported order.
for order in (0, 1, 2, 5, 8, 16):
    try:
        res = derivative_free(kepler, 1.0, order=order)
    except ConvergenceFailure as e:
        print(f"Order {order:2d}: {e}")
        continue
    print(f"Order {order:2d}: x = {res.root!r}, {res.certificate.name}, "
          f"{res.fevals} evaluations.")

# Extended precision stops on a residual tolerance instead.
mpmath.mp.dps = 40
res = newton(lambda x: x ** 2 - 2, mpmath.mpf(1), lambda x: 2 * x,
             tol=mpmath.mpf(10) ** -35)
print(f"\nsqrt(2) = {res.root} ({res.certificate.name})")
mpmath.mp.dps = 15

# Roots of (x - 1)^3 (x - 2)^2 (2x + 1) with their multiplicities.
p_res = multroot([-4, 8, 7, -31, 31, -13, 2])
print(f"\nmultroot: {p_res.as_dict()}")
print(f"Backward error: {p_res.backward_error:.3e}")

# All real roots of a function within an interval.
print(f"\nReal roots of sin(x) on [-7, 7]: "
      f"{find_real_roots(math.sin, -7, 7, n=50)}")
