import unittest

import numpy as np
import scipy.stats as sp

from catpipe import UnivariateFinite, categorical, fit, is_distribution
from catpipe.distributions import (
    Continuous,
    Discrete,
    Distribution,
    NonEuclidean,
    ValueSupport,
)


class Point(Distribution):
    """Degenerate distribution used to exercise the base class."""

    def __init__(self, x, rng=None):
        self._x = np.asarray(x, dtype=float)
        self._rng = rng or np.random.default_rng()

    def sample(self, n_samples, *, rng=None):
        return np.repeat(self._x[None, :], n_samples, axis=0)

    @classmethod
    def from_distribution(cls, convert_from, **fit_kwargs):
        return cls(convert_from.sample(1)[0])


class TestValueSupport(unittest.TestCase):

    def test_finite_support_is_non_euclidean(self):
        self.assertIs(UnivariateFinite.value_support, NonEuclidean)
        self.assertEqual(UnivariateFinite.variate_form, "univariate")
        for kind in (Continuous, Discrete, NonEuclidean):
            self.assertTrue(issubclass(kind, ValueSupport))
        self.assertFalse(issubclass(NonEuclidean, (Continuous, Discrete)))


class TestIsDistribution(unittest.TestCase):

    def test_types_and_instances(self):
        (a,) = categorical(["a"])
        d = UnivariateFinite.from_dict({a: 1.0})
        self.assertTrue(is_distribution(d))
        self.assertTrue(is_distribution(UnivariateFinite))
        self.assertTrue(is_distribution(Distribution))
        self.assertTrue(is_distribution(Point([0.0])))

    def test_scipy_distributions_are_sampleable(self):
        self.assertTrue(is_distribution(sp.norm(0.0, 1.0)))
        self.assertTrue(is_distribution(sp.poisson))

    def test_other_values(self):
        self.assertFalse(is_distribution(3.0))
        self.assertFalse(is_distribution(str))
        self.assertFalse(is_distribution([0.5, 0.5]))


class TestEquality(unittest.TestCase):

    def setUp(self):
        self.levels = categorical(["yes", "no", "maybe"])

    def test_reflexive_and_structural(self):
        d1 = UnivariateFinite.from_levels(self.levels, [0.1, 0.2, 0.7], rng=np.random.default_rng(0))
        d2 = UnivariateFinite.from_levels(self.levels, [0.1, 0.2, 0.7], rng=np.random.default_rng(1))
        self.assertEqual(d1, d1)
        self.assertEqual(d1, d2)

    def test_changed_probability_breaks_equality(self):
        d1 = UnivariateFinite.from_levels(self.levels, [0.1, 0.2, 0.7])
        d2 = UnivariateFinite.from_levels(self.levels, [0.2, 0.1, 0.7])
        self.assertNotEqual(d1, d2)

    def test_different_pools_are_unequal(self):
        other = categorical(["yes", "no", "maybe"])
        d1 = UnivariateFinite.from_levels(self.levels, [0.1, 0.2, 0.7])
        d2 = UnivariateFinite.from_levels(other, [0.1, 0.2, 0.7])
        self.assertNotEqual(d1, d2)

    def test_equality_is_generic_over_distribution_types(self):
        self.assertEqual(Point([1.0, 2.0]), Point([1.0, 2.0]))
        self.assertNotEqual(Point([1.0, 2.0]), Point([1.0, 3.0]))
        d = UnivariateFinite.from_dict({self.levels[0]: 1.0})
        self.assertNotEqual(Point([1.0]), d)

    def test_unhashable(self):
        with self.assertRaises(TypeError):
            hash(Point([0.0]))


class TestGenericFunctions(unittest.TestCase):

    def test_fit_requires_distribution_type(self):
        with self.assertRaises(TypeError):
            fit(list, [1, 2])

    def test_base_defaults(self):
        p = Point([1.0, 2.0])
        np.testing.assert_allclose(p.rand(), [1.0, 2.0])
        with self.assertRaises(NotImplementedError):
            p.mode()
        with self.assertRaises(NotImplementedError):
            fit(Point, [[1.0, 2.0]])


if __name__ == "__main__":
    unittest.main()
