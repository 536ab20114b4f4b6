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
__author__ = ("PIMC Development Team",)
__version__ = "0.1"
__revision__ = "0"

import logging


# Replaced by the launcher (or the worker bootstrap) once logging is set up
logger = logging.getLogger()

DEFAULT_SAMPLES = 1000000
BATCH_SIZE = 10000
SAMPLES_ENV = "PIMC_SAMPLES"

PROGRESS_INTERVAL = 0.05
