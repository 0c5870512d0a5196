
import math


# ======================================================================

def int_poly(roots) -> list[int]:
    """Integer coefficients (ascending) of the product of (x - r)."""
    c = [1]
    for r in roots:
        c = [(c[k - 1] if k > 0 else 0) - (c[k] * r if k < len(c) else 0)
             for k in range(len(c) + 1)]
    return c


def binomial_poly(a: int, m: int) -> list[int]:
    """Integer coefficients (ascending) of (x - a)^m."""
    return [math.comb(m, k) * (-a) ** (m - k) for k in range(m + 1)]


def poly_mul(p: list[int], q: list[int]) -> list[int]:
    c = [0] * (len(p) + len(q) - 1)
    for i, p_i in enumerate(p):
        for j, q_j in enumerate(q):
            c[i + j] += p_i * q_j
    return c
