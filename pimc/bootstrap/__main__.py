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
import sys
import os
import argparse
import logging
import traceback

try:
    import psutil
except ImportError:
    psutil = None

import pimc
from pimc import utils
from pimc._comm import Reporter
from pimc._types import Tally
from pimc.estimator import sampleBatch
from pimc.reduction import batchSizes
from pimc.sources import PseudoRandomSource


class Bootstrap(object):
    """Runs one lane in a worker process and reports it to the launcher."""
    def __init__(self):
        self.parser = None
        self.args = None

    def makeParser(self):
        """Generate the argparse parser object containing the worker
           accepted parameters
        """
        self.parser = argparse.ArgumentParser(
            description='Runs one lane of a PIMC estimation.',
            prog="{0} -m pimc.bootstrap".format(sys.executable),
        )
        self.parser.add_argument('--address',
                                 help="Address of the launcher collector",
                                 required=True)
        self.parser.add_argument('--lane',
                                 help="Index of the lane run by this worker",
                                 type=int,
                                 default=0)
        self.parser.add_argument('--samples',
                                 help="Number of samples to draw",
                                 type=int,
                                 required=True)
        self.parser.add_argument('--batch-size',
                                 help="Samples drawn between two progress "
                                      "reports",
                                 type=int,
                                 default=pimc.BATCH_SIZE)
        self.parser.add_argument('--seed',
                                 help="Seed of the lane random source",
                                 type=int,
                                 default=None)
        self.parser.add_argument('--nice',
                                 help="Adjust the niceness of the process",
                                 type=int,
                                 default=None)
        self.parser.add_argument('--verbose',
                                 help="Verbosity level",
                                 type=int,
                                 default=0)

    def parse(self, argv=None):
        if self.parser is None:
            self.makeParser()
        self.args = self.parser.parse_args(argv)

    def setNice(self):
        if not psutil:
            pimc.logger.error("psutil not installed.")
            raise ImportError("psutil is needed for nice functionnality.")
        p = psutil.Process(os.getpid())
        p.nice(self.args.nice)

    def main(self, argv=None):
        if self.args is None:
            self.parse(argv)

        pimc.logger = utils.initLogging(self.args.verbose, name="worker")
        try:
            pimc.logger.handlers[0].setFormatter(
                logging.Formatter(
                    "[%(asctime)-15s] %(module)-9s (lane {0}) %(levelname)-7s "
                    "%(message)s".format(self.args.lane)
                )
            )
        except IndexError:
            pass

        reporter = Reporter(self.args.address, self.args.lane)
        try:
            if self.args.nice is not None:
                self.setNice()
            tally = self.run(reporter)
        except Exception as e:
            pimc.logger.error(traceback.format_exc())
            reporter.sendError("{0}: {1}".format(e.__class__.__name__, e))
            return -1
        else:
            reporter.sendDone(tally)
            return 0
        finally:
            reporter.close()

    def run(self, reporter):
        """Draws the samples of the lane batch by batch."""
        source = PseudoRandomSource(self.args.seed)
        pimc.logger.debug("Drawing {0} samples from {1}.".format(
            self.args.samples,
            source,
        ))
        tally = Tally()
        for size in batchSizes(self.args.samples, self.args.batch_size):
            tally = tally + sampleBatch(size, source)
            reporter.sendProgress(tally)
        return tally


if __name__ == "__main__":
    sys.exit(Bootstrap().main())
