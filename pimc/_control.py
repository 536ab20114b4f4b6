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
"""Cooperative execution of lanes inside the current process.

Every lane runs in its own greenlet and gives control back to the controller
after each batch, which lets the controller interleave the lanes and refresh
the progress display between batches."""
from functools import partial

import greenlet

import pimc
from ._types import Tally
from .estimator import sampleBatch
from .reduction import batchSizes


def _runLane(count, source, batchSize):
    """Body of a lane greenlet. Switches the cumulative tally back to the
    controller after each batch and returns the final one."""
    controller = greenlet.getcurrent().parent
    tally = Tally()
    for size in batchSizes(count, batchSize):
        tally = tally + sampleBatch(size, source)
        controller.switch(tally)
    return tally


def runLanes(laneCounts, sources, batchSize=None, onSwitch=None):
    """Runs every lane to completion.

    :param laneCounts: Number of samples of each lane.
    :param sources: One random source per lane.
    :param batchSize: Samples drawn by a lane before it yields. Defaults to
        ``pimc.BATCH_SIZE``.
    :param onSwitch: Called with the list of current lane tallies after every
        round over the pending lanes.

    :returns: The final tally of every lane, in lane order.

    An exception raised inside a lane is propagated to the caller; the other
    lanes are abandoned."""
    if len(laneCounts) != len(sources):
        raise ValueError("Every lane needs its own random source.")
    if batchSize is None:
        batchSize = pimc.BATCH_SIZE

    lanes = [
        greenlet.greenlet(partial(_runLane, count, source, batchSize))
        for count, source in zip(laneCounts, sources)
    ]
    tallies = [Tally() for _ in lanes]
    pending = list(range(len(lanes)))
    pimc.logger.debug("Running {0} lane(s) cooperatively.".format(len(lanes)))

    while pending:
        for index in list(pending):
            tallies[index] = lanes[index].switch()
            if lanes[index].dead:
                pending.remove(index)
                pimc.logger.debug("Lane {0} done: {1}.".format(
                    index,
                    tallies[index],
                ))
        if onSwitch is not None:
            onSwitch(list(tallies))
    return tallies
