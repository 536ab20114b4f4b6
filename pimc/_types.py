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
from collections import namedtuple
import time


class InvalidSampleCount(ValueError):
    """The sample count is not a positive integer."""
    pass


class RandomSourceFailure(Exception):
    """The random source is exhausted or unavailable."""
    pass


class WorkerFailure(Exception):
    """A worker process failed before delivering its tally."""
    pass


# This class encapsulates a stopwatch that returns elapse time in seconds.
class StopWatch(object):
    # initialize stopwatch.
    def __init__(self):
        self.totalTime = 0
        self.startTime = time.time()
        self.halted = False
    # return elapse time.
    def get(self):
        if self.halted:
            return self.totalTime
        else:
            return self.totalTime + time.time() - self.startTime
    # halt stopWatch.
    def halt(self):
        if not self.halted:
            self.halted = True
            self.totalTime += time.time() - self.startTime
    # set stopwatch to zero.
    def reset(self):
        self.__init__()


class Tally(namedtuple('Tally', ['inside', 'total'])):
    """Counts of classified samples.

    A tally is immutable; partial tallies coming from batches, lanes or
    worker processes are merged with ``+``, which sums both counters.

    :param inside: Number of samples that fell inside the unit circle.
    :param total: Number of samples drawn."""
    __slots__ = ()

    def __new__(cls, inside=0, total=0):
        if not 0 <= inside <= total:
            raise ValueError(
                "Inconsistent tally: {0} inside out of {1} samples.".format(
                    inside,
                    total,
                )
            )
        return super(Tally, cls).__new__(cls, inside, total)

    def __add__(self, other):
        if not isinstance(other, Tally):
            return NotImplemented
        return Tally(self.inside + other.inside, self.total + other.total)

    def __repr__(self):
        return "Tally(inside={0}, total={1})".format(self.inside, self.total)
