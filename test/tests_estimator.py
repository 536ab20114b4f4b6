#!/usr/bin/env python
#
#    This file is part of Pi by Monte Carlo (PIMC).
#
#    PIMC is free software: you can redistribute it and/or modify
#    it under the terms of the GNU Lesser General Public License as
#    published by the Free Software Foundation, either version 3 of
#    the License, or (at your option) any later version.
#
#    PIMC is distributed in the hope that it will be useful,
#    but WITHOUT ANY WARRANTY; without even the implied warranty of
#    MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
#    GNU Lesser General Public License for more details.
#
#    You should have received a copy of the GNU Lesser General Public
#    License along with PIMC. If not, see <http://www.gnu.org/licenses/>.
#
import math
import unittest

from pimc import estimator
from pimc._types import Tally, InvalidSampleCount, RandomSourceFailure
from pimc.sources import RandomSource, SequenceSource


class CountingSource(RandomSource):
    """Records how many values were drawn."""
    def __init__(self):
        self.draws = 0

    def nextUniform(self):
        self.draws += 1
        return 0.0


class TestEstimator(unittest.TestCase):
    def __init__(self, *args, **kwargs):
        super(TestEstimator, self).__init__(*args, **kwargs)

    def test_range(self):
        for n in (1, 2, 10, 1000):
            value = estimator.estimate(n)
            self.assertGreaterEqual(value, 0.0)
            self.assertLessEqual(value, 4.0)

    def test_single_sample(self):
        self.assertIn(estimator.estimate(1, seed=3), (0.0, 4.0))

    def test_invalid_counts(self):
        for n in (0, -1, -1000):
            source = CountingSource()
            with self.assertRaises(InvalidSampleCount):
                estimator.estimate(n, source=source)
            self.assertEqual(source.draws, 0)

    def test_non_integer_counts(self):
        for n in (2.5, 10.0, "100", None, True):
            source = CountingSource()
            with self.assertRaises(InvalidSampleCount):
                estimator.estimate(n, source=source)
            self.assertEqual(source.draws, 0)

    def test_invalid_count_is_value_error(self):
        self.assertRaises(ValueError, estimator.validateSampleCount, 0)

    def test_convergence(self):
        # A 0.1 tolerance at 10000 samples is more than 5 standard deviations
        for seed in range(5):
            value = estimator.estimate(10000, seed=seed)
            self.assertAlmostEqual(value, math.pi, delta=0.1)

    def test_convergence_unseeded(self):
        misses = sum(
            abs(estimator.estimate(20000) - math.pi) > 0.1
            for _ in range(3)
        )
        # Accept an occasional statistical outlier
        self.assertLessEqual(misses, 1)

    def test_determinism(self):
        first = estimator.estimate(5000, seed=1234)
        second = estimator.estimate(5000, seed=1234)
        self.assertEqual(first, second)

    def test_seed_and_source(self):
        with self.assertRaises(ValueError):
            estimator.estimate(1, source=CountingSource(), seed=1)

    def test_boundary_inside(self):
        self.assertTrue(estimator.isInside(1.0, 0.0))
        self.assertTrue(estimator.isInside(0.0, -1.0))
        self.assertFalse(estimator.isInside(0.8, 0.61))
        self.assertFalse(estimator.isInside(1.0, 1e-7))
        source = SequenceSource([1.0, 0.0])
        self.assertEqual(estimator.sampleBatch(1, source), Tally(1, 1))
        self.assertEqual(estimator.estimate(1, SequenceSource([1.0, 0.0])),
                         4.0)
        source = SequenceSource([0.8, 0.61, 1.0, 1e-7])
        self.assertEqual(estimator.sampleBatch(2, source), Tally(0, 2))

    def test_known_points(self):
        # (0, 0), (1, 1), (0.5, 0.5), (2, 2)
        values = [0, 0, 1, 1, 0.5, 0.5, 2, 2]
        tally = estimator.sampleBatch(4, SequenceSource(values))
        self.assertEqual(tally.inside, 2)
        self.assertEqual(tally.total, 4)
        self.assertEqual(estimator.piEstimate(tally), 2.0)
        self.assertEqual(estimator.estimate(4, SequenceSource(values)), 2.0)

    def test_exhausted_source(self):
        with self.assertRaises(RandomSourceFailure):
            estimator.estimate(3, SequenceSource([0, 0, 0, 0, 0]))

    def test_empty_batch(self):
        source = CountingSource()
        self.assertEqual(estimator.sampleBatch(0, source), Tally(0, 0))
        self.assertEqual(source.draws, 0)

    def test_empty_tally(self):
        with self.assertRaises(InvalidSampleCount):
            estimator.piEstimate(Tally())

    def test_large_counts(self):
        tally = Tally(2 ** 60, 2 ** 62)
        self.assertEqual(estimator.piEstimate(tally), 1.0)


if __name__ == "__main__":
    t = unittest.TestLoader().loadTestsFromTestCase(TestEstimator)
    unittest.TextTestRunner(verbosity=2).run(t)
