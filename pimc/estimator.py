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
"""
Estimation of Pi using a Monte Carlo method.

Points are drawn uniformly in the square [-1, 1] x [-1, 1]; the fraction of
them falling inside the inscribed unit circle approximates pi / 4.
"""
from numbers import Integral

from ._types import Tally, InvalidSampleCount
from .sources import PseudoRandomSource


def validateSampleCount(n):
    """Ensures *n* is a usable sample count and returns it.

    :param n: The requested number of samples.

    :returns: *n*, unchanged.

    Raises :class:`~pimc._types.InvalidSampleCount` for anything other than an
    integer greater or equal to 1. Values are never coerced."""
    if isinstance(n, bool) or not isinstance(n, Integral):
        raise InvalidSampleCount(
            "The sample count must be an integer, got {0!r}.".format(n)
        )
    if n < 1:
        raise InvalidSampleCount(
            "The sample count must be at least 1, got {0}.".format(n)
        )
    return n


def isInside(x, y):
    """Points on the circle itself are inside."""
    return x * x + y * y <= 1.0


def sampleBatch(n, source):
    """Draws *n* points from *source* and counts those inside the circle.

    :param n: Number of points to draw. Zero yields an empty tally.
    :param source: Any object with a *nextUniform()* method.

    :returns: A :class:`~pimc._types.Tally` of the batch."""
    draw = source.nextUniform
    inside = 0
    for _ in range(n):
        x = draw()
        y = draw()
        # Inlined isInside(), this is the hot loop
        if x * x + y * y <= 1.0:
            inside += 1
    return Tally(inside, n)


def piEstimate(tally):
    """Converts a tally to an approximation of pi."""
    if not tally.total:
        raise InvalidSampleCount("Cannot estimate pi from zero samples.")
    return 4.0 * tally.inside / tally.total


def estimate(n, source=None, seed=None):
    """Estimates pi from *n* random points.

    :param n: Number of points to draw. Must be an integer >= 1.
    :param source: The random source to draw coordinates from. If None, a
        :class:`~pimc.sources.PseudoRandomSource` over [-1, 1] is used.
    :param seed: Seed of the default source. Can't be combined with *source*.

    :returns: A float in [0.0, 4.0].

    The sample count is validated before any value is drawn from the
    source."""
    validateSampleCount(n)
    if source is None:
        source = PseudoRandomSource(seed)
    elif seed is not None:
        raise ValueError("A seed can only be given to the default source.")
    return piEstimate(sampleBatch(n, source))
