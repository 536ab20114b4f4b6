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
from collections import namedtuple
import os
import sys
import subprocess

# Local
import pimc


class Worker(object):
    """A local worker process running one lane."""
    BOOTSTRAP_MODULE = 'pimc.bootstrap'
    LAUNCHING_ARGUMENTS = namedtuple(
        'launchingArguments',
        ['lane', 'samples', 'seed', 'batchSize', 'address', 'nice',
         'verbose', 'pythonExecutable',
         ]
    )

    def __init__(self, lane, samples, seed, batchSize, address, nice=None,
                 verbose=0, pythonExecutable=sys.executable):
        self.arguments = self.LAUNCHING_ARGUMENTS(
            lane=lane,
            samples=samples,
            seed=seed,
            batchSize=batchSize,
            address=address,
            nice=nice,
            verbose=verbose,
            pythonExecutable=pythonExecutable,
        )
        self.subprocess = None

    def __repr__(self):
        return "Worker(lane {0}, {1} samples)".format(
            self.arguments.lane,
            self.arguments.samples,
        )

    def getCommand(self):
        """Generate the worker command as list"""
        worker = self.arguments
        c = [worker.pythonExecutable, '-m', self.BOOTSTRAP_MODULE]
        c.extend(['--address', worker.address])
        c.extend(['--lane', str(worker.lane)])
        c.extend(['--samples', str(worker.samples)])
        c.extend(['--batch-size', str(worker.batchSize)])
        if worker.seed is not None:
            c.extend(['--seed', str(worker.seed)])
        if worker.nice is not None:
            c.extend(['--nice', str(worker.nice)])
        if worker.verbose:
            c.extend(['--verbose', str(worker.verbose)])
        return c

    def getEnvironment(self):
        """The current environment, with this copy of pimc importable."""
        env = os.environ.copy()
        packageParent = os.path.dirname(
            os.path.dirname(os.path.abspath(pimc.__file__))
        )
        pythonPath = env.get('PYTHONPATH')
        env['PYTHONPATH'] = (
            os.pathsep.join([packageParent, pythonPath])
            if pythonPath else packageParent
        )
        return env

    def launch(self):
        """Start the worker process."""
        pimc.logger.debug("{0}: Launching '{1}'".format(
            self,
            " ".join(self.getCommand()),
        ))
        self.subprocess = subprocess.Popen(
            self.getCommand(),
            env=self.getEnvironment(),
        )
        return self.subprocess

    def poll(self):
        """Exit code of the worker, None while it runs."""
        if self.subprocess is None:
            return None
        return self.subprocess.poll()

    def close(self):
        """Process cleanup."""
        if self.subprocess is not None and self.subprocess.poll() is None:
            pimc.logger.debug('Terminating {0}.'.format(self))
            self.subprocess.terminate()
            self.subprocess.wait()
