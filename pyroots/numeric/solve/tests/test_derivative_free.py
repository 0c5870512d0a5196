from unittest import TestCase

from .scalar_tst_functions import (cos_x, cube_root, cubic, cubic_exact, f,
                                   f_exact, no_real_root, sinc_plus_one)


# ======================================================================

class TestDerivativeFree(TestCase):
    def test_fixed_orders(self):
        from pyroots.numeric.solve.derivative_free import derivative_free

        for order in (1, 2, 5, 8, 16):
            with self.subTest(order=order):
                res = derivative_free(cubic, 2.0, order=order)
                self.assertAlmostEqual(res.root, cubic_exact, places=12)
                self.assertLessEqual(abs(cubic(res.root)), 1e-13)

    def test_hybrid(self):
        from pyroots.numeric.solve.derivative_free import derivative_free
        from pyroots.numeric.solve.result import Certificate

        res = derivative_free(cos_x, 1.0)
        self.assertEqual(res.method, 'hybrid+bisect')
        self.assertIs(res.certificate, Certificate.EXACT_ZERO)
        self.assertAlmostEqual(res.root, 0.7390851332151607, places=15)

        # Hybrid only issues guaranteed certificates.
        for x0 in (-3.0, 0.0, 1.0, 10.0):
            with self.subTest(x0=x0):
                res = derivative_free(f, x0)
                self.assertTrue(res.certificate.guaranteed)
                self.assertTrue(abs(res.root - f_exact) < 1e-14 or
                                abs(res.root + 0.6180339887498949) < 1e-14)

    def test_hybrid_more_robust(self):
        from pyroots.numeric.solve.derivative_free import derivative_free
        from pyroots.numeric.solve.exception import ConvergenceFailure

        # Infinite slope at the root defeats the high order method ...
        with self.assertRaises(ConvergenceFailure):
            derivative_free(cube_root, 1.0, order=8)

        # ... but the hybrid method finds a bracket and bisects.
        res = derivative_free(cube_root, 1.0)
        self.assertEqual(res.root, 0.0)
        self.assertEqual(res.method, 'hybrid+bisect')

    def test_idempotent(self):
        from pyroots.numeric.solve.derivative_free import derivative_free

        for order in (0, 1, 2, 5, 8, 16):
            with self.subTest(order=order):
                res = derivative_free(cubic, 2.0, order=order)
                res2 = derivative_free(cubic, res.root, order=order)
                self.assertEqual(res2.root, res.root)
                self.assertEqual(res2.iterations, 0)
                self.assertIs(res2.certificate, res.certificate)

    def test_bracket(self):
        from pyroots.numeric.solve.derivative_free import derivative_free

        for order in (0, 2, 8):
            with self.subTest(order=order):
                res = derivative_free(f, 1.5, order=order,
                                      bracket=(1.0, 2.0))
                self.assertAlmostEqual(res.root, f_exact, places=14)

        with self.assertRaises(ValueError):
            derivative_free(f, 3.0, bracket=(1.0, 2.0))

    def test_failures(self):
        from pyroots.numeric.solve.derivative_free import derivative_free
        from pyroots.numeric.solve.exception import (ConvergenceFailure,
                                                     InvalidOrderError)

        for order in (3, 4, -1, 32):
            with self.subTest(order=order):
                with self.assertRaises(InvalidOrderError):
                    derivative_free(f, 1.0, order=order)

        self.assertTrue(issubclass(InvalidOrderError, ValueError))

        # No real root.
        for order in (0, 2, 5):
            with self.subTest(order=order):
                with self.assertRaises(ConvergenceFailure) as cm:
                    derivative_free(no_real_root, 1.0, order=order)
                self.assertIsNotNone(cm.exception.x)

        # Iteration limit.
        with self.assertRaises(ConvergenceFailure) as cm:
            derivative_free(cubic, 100.0, order=2, max_iter=2)
        self.assertEqual(cm.exception.flag, 1)

        # Undefined at the starting point.
        for order in (0, 2, 8):
            with self.subTest(order=order):
                with self.assertRaises(ConvergenceFailure) as cm:
                    derivative_free(sinc_plus_one, 0.0, order=order)
                self.assertEqual(cm.exception.flag, 4)

    def test_fevals(self):
        import numpy as np
        from pyroots.numeric.solve.derivative_free import derivative_free

        # Every call is counted once, including the final bisection.
        calls = []

        def counted(x):
            calls.append(x)
            return cube_root(x)

        res = derivative_free(counted, 1.0)
        self.assertEqual(res.method, 'hybrid+bisect')
        self.assertEqual(res.fevals, len(calls))
        self.assertIsInstance(counted(2.0), np.float64)

    def test_extended_precision(self):
        import mpmath
        from pyroots.numeric.solve.derivative_free import derivative_free
        from pyroots.numeric.solve.result import Certificate

        with mpmath.workdps(30):
            res = derivative_free(lambda x: x ** 2 - 2, mpmath.mpf(1),
                                  order=8)
            self.assertIn(res.certificate, (Certificate.EXACT_ZERO,
                                            Certificate.TOLERANCE_MET))
            self.assertLess(abs(res.root - mpmath.sqrt(2)),
                            mpmath.mpf('1e-25'))
