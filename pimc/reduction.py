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
import random
from functools import reduce
import operator

from ._types import Tally


def splitSamples(n, lanes):
    """Divide *n* samples among *lanes*. The first lanes take the remainder,
    so counts differ by one at most."""
    if lanes < 1:
        raise ValueError("At least one lane is needed, got {0}.".format(lanes))
    base, remainder = divmod(n, lanes)
    return [base + int(index < remainder) for index in range(lanes)]


def batchSizes(count, batchSize):
    """Generates the sizes of the batches needed to draw *count* samples."""
    if batchSize < 1:
        raise ValueError("Invalid batch size: {0}.".format(batchSize))
    while count > 0:
        size = min(batchSize, count)
        yield size
        count -= size


def laneSeeds(seed, lanes):
    """Derives one seed per lane from the seed of the run.

    An unseeded run gives unseeded lanes."""
    if seed is None:
        return [None] * lanes
    seeder = random.Random(seed)
    return [seeder.getrandbits(64) for _ in range(lanes)]


def reduceTallies(tallies):
    """Sums partial tallies. Order is irrelevant."""
    return reduce(operator.add, tallies, Tally())
