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
# Global imports
import argparse
import sys
import signal
import traceback

# Local imports
from pimc import utils
from pimc import _control
from pimc._comm import Collector, DONE, ERROR
from pimc._types import (
    StopWatch,
    Tally,
    InvalidSampleCount,
    RandomSourceFailure,
    WorkerFailure,
)
from pimc.display import ProgressDisplay, formatReport
from pimc.estimator import piEstimate, validateSampleCount
from pimc.launch import Worker
from pimc.reduction import splitSamples, laneSeeds, reduceTallies
from pimc.sources import PseudoRandomSource
import pimc

try:
    signal.signal(signal.SIGQUIT, utils.KeyboardInterruptHandler)
except AttributeError:
    # SIGQUIT doesn't exist on Windows
    signal.signal(signal.SIGTERM, utils.KeyboardInterruptHandler)

# Polls without news before giving up on workers that exited silently
EXITED_WORKER_GRACE = 20


class PimcApp(object):
    """PIMC application. Splits the samples over the lanes, runs them on the
    chosen backend and combines their tallies."""
    LAUNCH_WORKER_CLASS = Worker

    def __init__(self, samples, workers=1, backend="local", seed=None,
                 batchSize=None, progress=False, nice=None, verbose=0,
                 stream=None):
        # Assure setup sanity
        self.samples = validateSampleCount(samples)
        if workers < 1:
            raise ValueError("At least one worker is needed.")
        if backend not in ("local", "zmq"):
            raise ValueError("Unknown backend {0!r}.".format(backend))

        self.workers = workers
        self.backend = backend
        self.seed = seed
        self.batchSize = pimc.BATCH_SIZE if batchSize is None else batchSize
        self.nice = nice
        self.verbose = verbose
        self.laneCounts = splitSamples(samples, workers)
        self.seeds = laneSeeds(seed, workers)
        self.tallies = [Tally() for _ in self.laneCounts]
        self.display = ProgressDisplay(self.laneCounts, stream) if progress \
            else None
        self.processes = []
        self.stopWatch = StopWatch()

        pimc.logger.info("PIMC {0}.{1}: drawing {2} samples over {3} lane(s) "
                         "using the {4} backend.".format(
                             pimc.__version__,
                             pimc.__revision__,
                             samples,
                             workers,
                             backend,
                         ))
        if seed is not None:
            pimc.logger.debug("Lane seeds: {0}".format(self.seeds))

    def _update(self, tallies):
        self.tallies = tallies
        if self.display:
            self.display.refresh(tallies)

    def runLocal(self):
        """Every lane runs as a greenlet inside this process."""
        sources = [PseudoRandomSource(seed) for seed in self.seeds]
        return _control.runLanes(
            self.laneCounts,
            sources,
            batchSize=self.batchSize,
            onSwitch=self._update,
        )

    def runWorkers(self):
        """Every lane runs in its own worker process."""
        collector = Collector()
        try:
            for lane, (count, seed) in enumerate(zip(self.laneCounts,
                                                     self.seeds)):
                worker = self.LAUNCH_WORKER_CLASS(
                    lane=lane,
                    samples=count,
                    seed=seed,
                    batchSize=self.batchSize,
                    address=collector.address,
                    nice=self.nice,
                    verbose=self.verbose,
                )
                worker.launch()
                self.processes.append(worker)
            return self._collect(collector)
        finally:
            collector.close()

    def _collect(self, collector):
        tallies = list(self.tallies)
        done = set()
        silentPolls = 0
        while len(done) < len(self.processes):
            messages = collector.receive(pimc.PROGRESS_INTERVAL)
            for kind, lane, payload in messages:
                if kind == ERROR:
                    raise WorkerFailure(
                        "Lane {0} failed: {1}".format(lane, payload)
                    )
                tallies[lane] = payload
                if kind == DONE:
                    pimc.logger.debug("Lane {0} done: {1}.".format(
                        lane,
                        payload,
                    ))
                    done.add(lane)
            self._update(list(tallies))

            for lane, worker in enumerate(self.processes):
                exitCode = worker.poll()
                if exitCode and lane not in done:
                    raise WorkerFailure(
                        "Lane {0} exited with code {1}.".format(lane, exitCode)
                    )
            if messages:
                silentPolls = 0
            elif all(w.poll() is not None for w in self.processes):
                silentPolls += 1
                if silentPolls > EXITED_WORKER_GRACE:
                    raise WorkerFailure(
                        "Workers exited without reporting lanes {0}.".format(
                            sorted(set(range(len(self.processes))) - done)
                        )
                    )
        return tallies

    def run(self):
        """Runs the lanes and returns the estimate."""
        self.stopWatch.reset()
        if self.display:
            self.display.start()
        try:
            if self.backend == "zmq":
                tallies = self.runWorkers()
            else:
                tallies = self.runLocal()
        finally:
            if self.display:
                self.display.finish(self.tallies)
        self.stopWatch.halt()

        self.tallies = tallies
        total = reduceTallies(tallies)
        if total.total != self.samples:
            raise WorkerFailure(
                "Lost samples: {0} drawn instead of {1}.".format(
                    total.total,
                    self.samples,
                )
            )
        pimc.logger.info("{0} of {1} samples inside the circle.".format(
            total.inside,
            total.total,
        ))
        return piEstimate(total)

    def elapsed(self):
        return self.stopWatch.get()

    def close(self):
        """Subprocess cleanup."""
        for worker in self.processes:
            worker.close()
        if self.processes:
            pimc.logger.info('Finished cleaning spawned subprocesses.')


def makeParser():
    """Create the PIMC module arguments parser."""
    parser = argparse.ArgumentParser(
        description="Estimates pi using a Monte Carlo method.",
        prog="{0} -m pimc".format(sys.executable),
    )
    parser.add_argument('--samples', '-s',
                        help="Number of random points to draw (default: the "
                             "{0} environment variable, else {1})".format(
                                 pimc.SAMPLES_ENV,
                                 pimc.DEFAULT_SAMPLES,
                             ),
                        type=int,
                        metavar="NumberOfSamples")
    parser.add_argument('--workers', '-n',
                        help="Number of lanes the samples are split over. 0 "
                             "uses one lane per CPU. (default: 1)",
                        type=int,
                        default=1,
                        metavar="NumberOfWorkers")
    parser.add_argument('--backend',
                        help="Run the lanes cooperatively in this process "
                             "(local) or in worker processes (zmq)",
                        choices=['local', 'zmq'],
                        default='local')
    parser.add_argument('--seed',
                        help="Seed making the estimate reproducible",
                        type=int)
    parser.add_argument('--batch-size',
                        help="Samples drawn by a lane between two progress "
                             "updates (default: {0})".format(pimc.BATCH_SIZE),
                        type=int,
                        default=pimc.BATCH_SIZE,
                        metavar="BatchSize")
    parser.add_argument('--nice',
                        type=int,
                        metavar="NiceLevel",
                        help="*nix niceness level (-20 to 19) of the zmq "
                             "workers")
    parser.add_argument('--progress',
                        help="Show a progress bar per lane on stderr",
                        action='store_true')
    parser.add_argument('--report',
                        help="Print the deviation from pi, the elapsed time "
                             "and the throughput along with the estimate",
                        action='store_true')
    parser.add_argument('--verbose', '-v',
                        action='count',
                        help="Verbosity level of the launcher (-vv for more)",
                        default=0)
    parser.add_argument('--quiet', '-q',
                        action='store_true')
    return parser


def main(argv=None):
    """Execution of the PIMC module. Parses its command-line arguments and
    prints the estimate."""
    # Generate a argparse parser and parse the command-line arguments
    parser = makeParser()
    args = parser.parse_args(argv)

    verbose = args.verbose if not args.quiet else -1
    pimc.logger = utils.initLogging(verbosity=verbose, name="launcher")

    app = None
    exitCode = 0
    try:
        samples = utils.getSampleCount(args.samples)
        workers = args.workers if args.workers else utils.getCPUcount()
        app = PimcApp(samples, workers, args.backend, args.seed,
                      args.batch_size, args.progress, args.nice,
                      max(verbose, 0))
        value = app.run()
    except (InvalidSampleCount, RandomSourceFailure, WorkerFailure,
            ValueError) as e:
        pimc.logger.error(str(e))
        exitCode = -1
    except Exception:
        pimc.logger.error('Error while running PIMC:')
        pimc.logger.error(traceback.format_exc())
        exitCode = -1
    else:
        if args.report:
            print(formatReport(value, samples, app.elapsed()))
        else:
            print(repr(value))
    finally:
        if app is not None:
            app.close()

    # Exit with the proper exit code
    if exitCode:
        sys.exit(exitCode)


if __name__ == "__main__":
    main()
