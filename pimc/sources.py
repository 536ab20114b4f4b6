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
"""Sources of uniform random values consumed by the estimator.

Any object exposing a ``nextUniform()`` method returning a float can be
handed to :func:`~pimc.estimator.estimate`; the classes below are the ones
shipped with PIMC."""
import random

from ._types import RandomSourceFailure


class RandomSource(object):
    """Capability interface of a source of uniform random values."""

    def nextUniform(self):
        """Returns the next value of the source."""
        raise NotImplementedError


class PseudoRandomSource(RandomSource):
    """Uniform values in [low, high] drawn from a private Mersenne Twister.

    :param seed: Seed of the generator. If None, the generator is seeded from
        the operating system entropy and runs are not reproducible.
    :param low: Lower bound of the range.
    :param high: Upper bound of the range."""

    def __init__(self, seed=None, low=-1.0, high=1.0):
        if not low < high:
            raise ValueError(
                "Empty range [{0}, {1}].".format(low, high)
            )
        self.seed = seed
        self.low = float(low)
        self.high = float(high)
        self._generator = random.Random(seed)

    def __repr__(self):
        return "{0}(seed={1!r}, low={2}, high={3})".format(
            self.__class__.__name__,
            self.seed,
            self.low,
            self.high,
        )

    def nextUniform(self):
        return self._generator.uniform(self.low, self.high)


class SequenceSource(RandomSource):
    """Finite source replaying the given values in order.

    Values are returned untouched, out of range values included.
    :class:`~pimc._types.RandomSourceFailure` is raised once the values
    are exhausted."""

    def __init__(self, values):
        self._values = iter(values)
        self.consumed = 0

    def nextUniform(self):
        try:
            value = next(self._values)
        except StopIteration:
            raise RandomSourceFailure(
                "Random source exhausted after {0} values.".format(
                    self.consumed
                )
            )
        self.consumed += 1
        return value
