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
"""Terminal progress display: a spinner and one progress bar per lane."""
import itertools
import math
import sys
import time

import pimc

CLEAR_SCREEN = "\x1b[H\x1b[2J"
CURSOR_HOME = "\x1b[H"
HIDE_CURSOR = "\x1b[?25l"
SHOW_CURSOR = "\x1b[?25h"

BAR_WIDTH = 50


class Spinner(object):
    """Endless cycle of braille frames."""
    FRAMES = ("⠋", "⠙", "⠹", "⠸", "⠼", "⠴", "⠦", "⠧", "⠇", "⠏")

    def __init__(self):
        self._frames = itertools.cycle(self.FRAMES)

    def __iter__(self):
        return self

    def __next__(self):
        return next(self._frames)


def progressBar(percent, width=BAR_WIDTH):
    """Renders *percent* (clamped to [0, 100]) as a bar *width* cells wide."""
    percent = min(max(percent, 0.0), 100.0)
    filled = int(percent / 100.0 * width)
    return "[{0}{1}] {2:.1f}%".format(
        "█" * filled,
        "░" * (width - filled),
        percent,
    )


class ProgressDisplay(object):
    """Redraws the progress of every lane in place.

    :param laneCounts: Number of samples assigned to each lane.
    :param stream: Where to draw. Defaults to stderr, stdout being reserved
        for the result.
    :param interval: Minimum delay in seconds between two redraws."""

    def __init__(self, laneCounts, stream=None, interval=None):
        self.laneCounts = list(laneCounts)
        self.stream = stream if stream is not None else sys.stderr
        self.interval = pimc.PROGRESS_INTERVAL if interval is None else interval
        self.spinner = Spinner()
        self.lastDraw = None

    def render(self, tallies):
        """Returns the text of one frame."""
        lines = ["Computing... {0}".format(next(self.spinner)), "", "Lanes:", ""]
        for lane, (count, tally) in enumerate(zip(self.laneCounts, tallies)):
            if count:
                percent = 100.0 * tally.total / count
            else:
                percent = 100.0
            lines.append("[Lane {0}]: {1}".format(lane, progressBar(percent)))
            lines.append("")
        return "\n".join(lines) + "\n"

    def start(self):
        self.stream.write(HIDE_CURSOR + CLEAR_SCREEN)
        self.stream.flush()

    def refresh(self, tallies, force=False):
        """Draws a frame unless the previous one is too recent."""
        now = time.time()
        if not force and self.lastDraw is not None \
                and now - self.lastDraw < self.interval:
            return False
        self.lastDraw = now
        self.stream.write(CURSOR_HOME + self.render(tallies))
        self.stream.flush()
        return True

    def finish(self, tallies):
        self.refresh(tallies, force=True)
        self.stream.write(SHOW_CURSOR)
        self.stream.flush()


def formatReport(value, samples, elapsed):
    """Formats the full result of a run."""
    if elapsed > 0:
        rate = "{0:.2e}".format(samples / elapsed)
    else:
        rate = "inf"
    return "\n".join([
        "Results:",
        "Pi estimate:       {0:.10f}".format(value),
        "Actual pi:         {0:.10f}".format(math.pi),
        "Deviation:         {0:.10f}".format(abs(value - math.pi)),
        "Samples used:      {0}".format(samples),
        "Computation time:  {0:.2f}s".format(elapsed),
        "Samples / second:  {0}".format(rate),
    ])
