from unittest import TestCase

import math

from .poly_tst_functions import binomial_poly, int_poly, poly_mul
from .scalar_tst_functions import cos_x, cubic, cubic_exact, f


# ======================================================================

class TestFindRoot(TestCase):
    def test_bracket_form(self):
        from pyroots.numeric.float_ops import successor
        from pyroots.numeric.solve.find_root import find_root
        from pyroots.numeric.solve.result import Certificate

        res = find_root(cos_x, 0, 1)
        self.assertIs(res.certificate, Certificate.EXACT_ZERO)
        self.assertEqual(cos_x(res.root), 0)

        self.assertEqual(find_root(cos_x, (0, 1)), res)

        res = find_root(math.sin, math.pi / 2, 3 * math.pi / 2)
        self.assertIs(res.certificate, Certificate.SIGN_CHANGE_AT_UNIT)
        self.assertAlmostEqual(res.root, math.pi, places=15)

        # Bracket form is idempotent.
        res2 = find_root(math.sin, res.root, successor(res.root))
        self.assertEqual(res2.root, res.root)
        self.assertEqual(res2.iterations, 0)

    def test_numpy_scalars(self):
        import numpy as np
        from pyroots.numeric.solve.find_root import find_root

        res = find_root(np.sin, 3.0, 4.0)
        self.assertTrue(res.certificate.guaranteed)
        self.assertAlmostEqual(res.root, math.pi, places=15)

        res = find_root(np.cos, 1.0)
        self.assertTrue(res.certificate.guaranteed)
        self.assertAlmostEqual(res.root, math.pi / 2, places=15)

    def test_guess_form(self):
        from pyroots.numeric.solve.find_root import find_root

        res = find_root(cubic, 2.0)
        self.assertTrue(res.certificate.guaranteed)
        self.assertAlmostEqual(res.root, cubic_exact, places=14)

        res = find_root(cubic, 2.0, order=16)
        self.assertAlmostEqual(res.root, cubic_exact, places=12)

    def test_errors(self):
        from pyroots.numeric.solve.exception import (InvalidBracketError,
                                                     InvalidOrderError)
        from pyroots.numeric.solve.find_root import find_root

        with self.assertRaises(InvalidBracketError):
            find_root(f, 2.0, 3.0)
        with self.assertRaises(InvalidOrderError):
            find_root(f, 1.0, order=3)
        with self.assertRaises(ValueError):
            find_root(f, 1.0, 2.0, order=2)


# ----------------------------------------------------------------------

class TestFindRealRoots(TestCase):
    def test_function_sieve(self):
        from pyroots.numeric.solve.find_root import find_real_roots

        self.assertEqual(find_real_roots(lambda x: x ** 3 - x),
                         [-1.0, 0.0, 1.0])

        roots = find_real_roots(
            lambda x: (x - 1) * (x - 2) * (x - 3) ** 3 * (x ** 2 + 1))
        self.assertEqual(len(roots), 3)
        for r, r_exact in zip(roots, (1, 2, 3)):
            self.assertLessEqual(abs(r - r_exact), 1e-12)

        roots = find_real_roots(lambda x: x ** 5 - 1.5 * x + 1)
        self.assertEqual(len(roots), 1)

        # Limits.
        self.assertEqual(len(find_real_roots(math.sin, 0.5, 7.0)), 2)

        # Even multiplicity zero inside a subinterval is missed.
        self.assertEqual(find_real_roots(lambda x: (x - 0.55) ** 2), [])

        with self.assertRaises(ValueError):
            find_real_roots(math.sin, 1.0, 0.0)

    def test_polynomial(self):
        import numpy as np
        from pyroots.numeric.solve.find_root import find_real_roots

        self.assertEqual(len(find_real_roots([1, -1.5, 0, 0, 0, 1])), 1)
        self.assertEqual(find_real_roots([-1, 1]), [1.0])

        p = poly_mul(int_poly([1, 2, 3, 3, 3]), [1, 0, 1])
        roots = find_real_roots(p)
        np.testing.assert_allclose(roots, [1.0, 2.0, 3.0], atol=1e-12)

        # Double roots are found, unlike the sieve.
        roots = find_real_roots(np.polynomial.Polynomial([0.3025, -1.1, 1]))
        self.assertEqual(len(roots), 1)
        self.assertAlmostEqual(roots[0], 0.55, places=10)

        # Limits.
        roots = find_real_roots(p, 1.5, 2.5)
        self.assertEqual(len(roots), 1)
        self.assertAlmostEqual(roots[0], 2.0, places=12)

    def test_polynomial_object(self):
        import numpy as np
        from pyroots.numeric.solve.find_root import find_real_roots

        # Polynomial objects are callable, but are still solved as
        # polynomials rather than sampled.
        roots = find_real_roots(np.polynomial.Polynomial([-2, 0, 1]))
        np.testing.assert_allclose(roots, [-math.sqrt(2), math.sqrt(2)],
                                   rtol=1e-14)

        roots = find_real_roots(np.polynomial.Polynomial([0.3025, -1.1, 1]))
        self.assertEqual(len(roots), 1)

    def test_exact_coefficients(self):
        from pyroots.numeric.float_ops import predecessor, successor
        from pyroots.numeric.polynomial import exact_eval
        from pyroots.numeric.solve.find_root import find_real_roots

        # Wilkinson's polynomial.
        self.assertEqual(find_real_roots(int_poly(range(1, 21))),
                         [float(k) for k in range(1, 21)])

        # (x - 20)^5 - (x - 20) + 1, with a single real root near 18.8.
        c = list(binomial_poly(20, 5))
        c[0] += 21
        c[1] -= 1
        roots = find_real_roots(c)
        self.assertEqual(len(roots), 1)
        r = roots[0]
        self.assertAlmostEqual(r, 20 - 1.1673039782614187, places=12)

        # Exact sign change between r and a neighbour.
        p_r = exact_eval(c, r)
        self.assertTrue(p_r == 0 or
                        exact_eval(c, predecessor(r)) * p_r < 0 or
                        p_r * exact_eval(c, successor(r)) < 0)
