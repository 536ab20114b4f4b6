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
import unittest

from pimc import reduction
from pimc._types import Tally


class TestTally(unittest.TestCase):
    def __init__(self, *args, **kwargs):
        super(TestTally, self).__init__(*args, **kwargs)

    def test_default(self):
        self.assertEqual(Tally(), (0, 0))

    def test_invariant(self):
        self.assertRaises(ValueError, Tally, 3, 2)
        self.assertRaises(ValueError, Tally, -1, 2)
        self.assertRaises(ValueError, Tally, 0, -1)
        self.assertEqual(Tally(2, 2).inside, 2)

    def test_add(self):
        self.assertEqual(Tally(1, 3) + Tally(2, 2), Tally(3, 5))

    def test_sum(self):
        self.assertEqual(sum([Tally(1, 2), Tally(0, 3)], Tally()), Tally(1, 5))


class TestReduction(unittest.TestCase):
    def __init__(self, *args, **kwargs):
        super(TestReduction, self).__init__(*args, **kwargs)

    def test_split_even(self):
        self.assertEqual(reduction.splitSamples(12, 4), [3, 3, 3, 3])

    def test_split_remainder(self):
        counts = reduction.splitSamples(10, 4)
        self.assertEqual(counts, [3, 3, 2, 2])
        self.assertEqual(sum(counts), 10)

    def test_split_more_lanes_than_samples(self):
        self.assertEqual(reduction.splitSamples(2, 4), [1, 1, 0, 0])

    def test_split_invalid(self):
        self.assertRaises(ValueError, reduction.splitSamples, 10, 0)

    def test_batches(self):
        self.assertEqual(list(reduction.batchSizes(25, 10)), [10, 10, 5])
        self.assertEqual(list(reduction.batchSizes(20, 10)), [10, 10])
        self.assertEqual(list(reduction.batchSizes(0, 10)), [])

    def test_batches_invalid(self):
        with self.assertRaises(ValueError):
            list(reduction.batchSizes(10, 0))

    def test_seeds(self):
        self.assertEqual(reduction.laneSeeds(None, 3), [None, None, None])
        seeds = reduction.laneSeeds(42, 3)
        self.assertEqual(seeds, reduction.laneSeeds(42, 3))
        self.assertEqual(len(set(seeds)), 3)
        # Adding lanes keeps the seeds of the first ones
        self.assertEqual(reduction.laneSeeds(42, 5)[:3], seeds)

    def test_reduce(self):
        tallies = [Tally(1, 4), Tally(3, 3), Tally(0, 1)]
        self.assertEqual(reduction.reduceTallies(tallies), Tally(4, 8))
        self.assertEqual(reduction.reduceTallies(reversed(tallies)),
                         Tally(4, 8))
        self.assertEqual(reduction.reduceTallies([]), Tally())


if __name__ == "__main__":
    t = unittest.TestLoader().loadTestsFromTestCase(TestTally)
    unittest.TextTestRunner(verbosity=2).run(t)
    t = unittest.TestLoader().loadTestsFromTestCase(TestReduction)
    unittest.TextTestRunner(verbosity=2).run(t)
