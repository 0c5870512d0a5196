from unittest import TestCase

from .poly_tst_functions import binomial_poly, int_poly, poly_mul


# ======================================================================

class TestGCDChain(TestCase):
    def test_exact_chain(self):
        from fractions import Fraction
        from pyroots.numeric.solve.multroot import gcd_chain

        # (x - 1)^2 (x - 2)
        chain = gcd_chain([-2, 5, -4, 1])
        self.assertEqual([len(p) - 1 for p in chain], [3, 1, 0])
        self.assertEqual(chain[1], [Fraction(-1), Fraction(1)])

        chain = gcd_chain(binomial_poly(1, 5))
        self.assertEqual([len(p) - 1 for p in chain], [5, 4, 3, 2, 1, 0])

    def test_float_chain(self):
        import numpy.polynomial.polynomial as npoly
        from pyroots.numeric.solve.multroot import gcd_chain

        p = npoly.polyfromroots([1.0, 2.0, 2.0, 3.0, 3.0, 3.0, 3.0])
        chain = gcd_chain(p)
        self.assertEqual([len(c) - 1 for c in chain], [7, 4, 2, 1, 0])

        # Square free polynomial.
        chain = gcd_chain([1.0, -1.5, 0.0, 0.0, 0.0, 1.0])
        self.assertEqual([len(c) - 1 for c in chain], [5, 0])


# ----------------------------------------------------------------------

class TestMultRoot(TestCase):
    def test_integer_coefficients(self):
        from pyroots.numeric.solve.multroot import (
            find_multiplicity_structure, multroot)

        p = int_poly([1, 2, 2, 3, 3, 3, 3])
        self.assertEqual(find_multiplicity_structure(p),
                         {1: 1, 2: 2, 3: 4})

        p = int_poly([1, 2, 2, 3, 3, 3])
        res = multroot(p)
        self.assertEqual(res.multiplicities, (1, 2, 3))
        for r, r_exact in zip(res.roots, (1, 2, 3)):
            self.assertAlmostEqual(r, r_exact, places=12)

        p = int_poly([1, 1, 2, 2, 3, 3, 3, 3])
        res = multroot(p)
        self.assertEqual(sorted(res.multiplicities), [2, 2, 4])
        self.assertEqual(sum(res.multiplicities), 8)
        for r, r_exact in zip(res.roots, (1, 2, 3)):
            self.assertAlmostEqual(r, r_exact, places=12)

    def test_high_multiplicity(self):
        from pyroots.numeric.solve.multroot import multroot

        res = multroot(binomial_poly(1, 28))
        self.assertEqual(res.as_dict(), {1.0: 28})
        self.assertEqual(res.backward_error, 0.0)

        # Unstructured eigenvalue roots are badly spread for comparison.
        import numpy.polynomial.polynomial as npoly
        naive = npoly.polyroots([float(c) for c in binomial_poly(1, 28)])
        self.assertGreater(max(abs(naive - 1)), 1e-3)

    def test_wilkinson(self):
        from pyroots.numeric.solve.multroot import multroot

        # Badly conditioned, but integer roots are found exactly.
        res = multroot(int_poly(range(1, 21)))
        self.assertEqual(res.roots, tuple(float(k) for k in range(1, 21)))
        self.assertEqual(res.multiplicities, (1,) * 20)
        self.assertFalse(res.refined)

        # Repeated roots among them.
        res = multroot(int_poly([1, 2, 3, 4, 5, 6, 7, 8, 9, 10,
                                 11, 12, 13, 14, 15, 15, 15]))
        self.assertEqual(res.as_dict()[15.0], 3)
        self.assertEqual(len(res.roots), 15)

    def test_rational_coefficients(self):
        from fractions import Fraction
        from pyroots.numeric.solve.multroot import multroot

        # (x - 1/2)^2 (x + 1/3)
        p = [Fraction(1, 12), Fraction(-1, 12), Fraction(-2, 3), Fraction(1)]
        res = multroot(p)
        self.assertEqual(res.multiplicities, (1, 2))
        self.assertAlmostEqual(res.roots[0], -1 / 3, places=14)
        self.assertAlmostEqual(res.roots[1], 0.5, places=14)

    def test_float_coefficients(self):
        import numpy as np
        import numpy.polynomial.polynomial as npoly
        from pyroots.numeric.solve.multroot import multroot

        p = npoly.polyfromroots([1.0, 2.0, 2.0, 3.0, 3.0, 3.0, 3.0])
        res = multroot(np.polynomial.Polynomial(p))
        self.assertEqual(res.multiplicities, (1, 2, 4))
        for r, r_exact in zip(res.roots, (1, 2, 3)):
            self.assertAlmostEqual(r, r_exact, places=8)

        p = npoly.polyfromroots([1.0, 1.0, 2.0, 2.0, 3.0, 3.0, 3.0, 3.0])
        res = multroot(p)
        self.assertEqual(res.multiplicities, (2, 2, 4))

    def test_complex_roots(self):
        from pyroots.numeric.solve.multroot import multroot

        # (x - 1)(x - 2)(x - 3)^3 (x^2 + 1)
        p = poly_mul(int_poly([1, 2, 3, 3, 3]), [1, 0, 1])
        res = multroot(p)
        self.assertEqual(sum(res.multiplicities), 7)
        self.assertEqual(len(res.roots), 5)
        self.assertEqual(len(res.real_roots()), 3)
        for r, r_exact in zip(res.real_roots(), (1, 2, 3)):
            self.assertAlmostEqual(r, r_exact, places=12)

        cplx = [r for r in res.roots if isinstance(r, complex)]
        self.assertEqual(len(cplx), 2)
        for z in cplx:
            self.assertAlmostEqual(abs(z), 1.0, places=12)
            self.assertAlmostEqual(z.real, 0.0, places=12)

        # x^5 - x + 1 has one real root and two complex pairs.
        res = multroot([1, -1, 0, 0, 0, 1])
        self.assertEqual(res.multiplicities, (1, 1, 1, 1, 1))
        self.assertEqual(len(res.real_roots()), 1)

    def test_no_refinement(self):
        from pyroots.numeric.solve.multroot import multroot

        res = multroot(int_poly([1, 2, 2]), refine=False)
        self.assertFalse(res.refined)
        self.assertEqual(res.as_dict(), {1.0: 1, 2.0: 2})

    def test_invalid(self):
        from pyroots.numeric.solve.multroot import multroot

        with self.assertRaises(ValueError):
            multroot([3])
        with self.assertRaises(ValueError):
            multroot([0, 0])
