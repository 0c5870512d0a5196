from unittest import TestCase

import math


# ======================================================================

class TestAdjacent(TestCase):
    def test_successor_predecessor(self):
        import numpy as np
        from pyroots.numeric.float_ops import predecessor, successor

        self.assertEqual(successor(1.0), 1.0 + 2 ** -52)
        self.assertEqual(predecessor(1.0), 1.0 - 2 ** -53)
        self.assertEqual(successor(0.0), 5e-324)
        self.assertEqual(predecessor(0.0), -5e-324)
        self.assertIsInstance(successor(1.0), float)

        x32 = successor(np.float32(1))
        self.assertIsInstance(x32, np.float32)
        self.assertEqual(x32, np.float32(1) + np.finfo(np.float32).eps)

    def test_no_adjacent(self):
        import mpmath
        from pyroots.numeric.float_ops import (has_adjacent, machine_eps,
                                               successor)

        self.assertTrue(has_adjacent(1.0))
        self.assertFalse(has_adjacent(mpmath.mpf(1)))
        self.assertFalse(has_adjacent(1))
        with self.assertRaises(TypeError):
            successor(mpmath.mpf(1))

        self.assertEqual(machine_eps(mpmath.mpf(1)), mpmath.mp.eps)
        self.assertIsNone(machine_eps(1))

    def test_adjacent(self):
        from pyroots.numeric.float_ops import adjacent, successor

        x = 1.0
        self.assertTrue(adjacent(x, x))
        self.assertTrue(adjacent(successor(x), x))
        self.assertFalse(adjacent(x, successor(successor(x))))
        self.assertTrue(adjacent(-5e-324, 0.0))


# ----------------------------------------------------------------------

class TestFloatMidpoint(TestCase):
    def test_midpoint(self):
        from pyroots.numeric.float_ops import float_midpoint

        self.assertEqual(float_midpoint(-1.0, 2.0), 0.0)
        self.assertEqual(float_midpoint(1.0, 4.0), 2.0)
        self.assertEqual(float_midpoint(1.0, 2.0), 1.5)
        self.assertEqual(float_midpoint(-4.0, -1.0), -2.0)
        self.assertEqual(float_midpoint(0.0, math.inf), 1.5)
        self.assertTrue(math.isnan(float_midpoint(math.nan, 1.0)))

    def test_bisection_steps(self):
        from pyroots.numeric.float_ops import adjacent, float_midpoint

        # Any float64 bracket collapses in at most 64 halvings.
        for a, b in ((0.0, math.inf), (1e-300, 1e300), (-1e300, 1e-300),
                     (1.0, 2.0)):
            with self.subTest(a=a, b=b):
                steps = 0
                while not adjacent(a, b):
                    m = float_midpoint(a, b)
                    self.assertTrue(a < m < b)
                    a = m  # Worst case, always keep the right half.
                    steps += 1
                self.assertLessEqual(steps, 64)


# ----------------------------------------------------------------------

class TestPredicates(TestCase):
    def test_signs(self):
        import numpy as np
        from pyroots.numeric.float_ops import same_sign, sign

        self.assertEqual(sign(-3.0), -1)
        self.assertEqual(sign(0.0), 0)
        self.assertEqual(sign(math.nan), 0)
        self.assertTrue(same_sign(1e-200, 1e-200))  # Product underflows.
        self.assertFalse(same_sign(1.0, 0.0))
        self.assertFalse(same_sign(-1.0, 1.0))

        # NumPy scalars.
        self.assertEqual(sign(np.float64(2.0)), 1)
        self.assertEqual(sign(np.float32(-0.5)), -1)
        self.assertEqual(sign(np.float64(math.nan)), 0)
        self.assertTrue(same_sign(np.float64(-1.0), -2.0))
        self.assertFalse(same_sign(np.float32(1.0), np.float32(-1.0)))

    def test_finite_nan(self):
        import mpmath
        from pyroots.numeric.float_ops import is_finite, is_nan

        self.assertFalse(is_finite(math.inf))
        self.assertFalse(is_finite(mpmath.mpf('nan')))
        self.assertTrue(is_finite(mpmath.mpf(2)))
        self.assertTrue(is_nan(mpmath.mpf('nan')))
        self.assertFalse(is_nan(1.0))

    def test_promote(self):
        from fractions import Fraction
        import mpmath
        import numpy as np
        from pyroots.numeric.float_ops import promote

        self.assertEqual(promote(1, Fraction(1, 2)), (1.0, 0.5))
        self.assertIsInstance(promote(1)[0], float)
        self.assertTrue(all(isinstance(x, mpmath.mpf)
                            for x in promote(mpmath.mpf(1), 2.0)))
        self.assertTrue(all(isinstance(x, np.float32)
                            for x in promote(np.float32(1), 2.0)))


# ----------------------------------------------------------------------

class TestSignChangeAtUnit(TestCase):
    def test_sign_change(self):
        from pyroots.numeric.float_ops import sign_change_at_unit

        found, x, fx, fevals = sign_change_at_unit(math.sin, math.pi)
        self.assertTrue(found)
        self.assertEqual(x, math.pi)
        self.assertEqual(fevals, 3)

        found, x, fx, fevals = sign_change_at_unit(math.sin, 3.0, 0.5)
        self.assertFalse(found)
        self.assertEqual(fevals, 2)

    def test_zero_neighbour(self):
        from pyroots.numeric.float_ops import sign_change_at_unit, successor

        x0 = successor(2.0)
        found, x, fx, _ = sign_change_at_unit(lambda x: x - 2.0, x0)
        self.assertTrue(found)
        self.assertEqual((x, fx), (2.0, 0.0))

    def test_nan_neighbour(self):
        from pyroots.numeric.float_ops import sign_change_at_unit

        found, *_ = sign_change_at_unit(
            lambda x: math.nan if x != 1.0 else 1.0, 1.0)
        self.assertFalse(found)

    def test_nan_centre(self):
        from pyroots.numeric.float_ops import sign_change_at_unit

        found, x, fx, fevals = sign_change_at_unit(
            lambda x: math.nan if x == 0 else x, 0.0)
        self.assertFalse(found)
        self.assertEqual(x, 0.0)
        self.assertTrue(math.isnan(fx))
        self.assertEqual(fevals, 1)
