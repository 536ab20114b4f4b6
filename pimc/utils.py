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
from multiprocessing import cpu_count
from logging.config import dictConfig
import os
import logging

import pimc
from ._types import InvalidSampleCount
from .estimator import validateSampleCount


loggingConfig = {}

def initLogging(verbosity=0, name="PIMC"):
        """Creates a logger writing on stderr."""
        global loggingConfig

        verbose_levels = {
            -2: "CRITICAL",
            -1: "ERROR",
            0: "WARNING",
            1: "INFO",
            2: "DEBUG",
            3: "NOTSET",
        }
        verbosity = min(max(verbosity, -2), 3)
        log_handlers = {
            "console":
            {
                "class": "logging.StreamHandler",
                "formatter": "{name}Formatter".format(name=name),
                "stream": "ext://sys.stderr",
            },
        }
        loggingConfig.update({
            "{name}Logger".format(name=name):
            {
                "handlers": ["console"],
                "level": verbose_levels[verbosity],
                "propagate": False,
            },
        })
        dict_log_config = {
            "version": 1,
            "disable_existing_loggers": False,
            "handlers": log_handlers,
            "loggers": loggingConfig,
            "formatters":
            {
                "{name}Formatter".format(name=name):
                {
                    "format": "[%(asctime)-15s] %(module)-9s "
                              "%(levelname)-7s %(message)s",
                },
            },
        }
        dictConfig(dict_log_config)
        return logging.getLogger("{name}Logger".format(name=name))


def getCPUcount():
    """Try to get the number of cpu on the current host."""
    try:
        return cpu_count()
    except NotImplementedError:
        return 1


def getSampleCount(value=None, environ=None):
    """Return the number of samples to draw.

    The command-line value wins over the environment variable, which wins
    over the default."""
    if value is not None:
        return validateSampleCount(value)
    if environ is None:
        environ = os.environ
    fromEnv = environ.get(pimc.SAMPLES_ENV)
    if fromEnv is None:
        return pimc.DEFAULT_SAMPLES
    try:
        n = int(fromEnv.strip())
    except ValueError:
        raise InvalidSampleCount(
            "{0}={1!r} is not an integer.".format(pimc.SAMPLES_ENV, fromEnv)
        )
    return validateSampleCount(n)


def KeyboardInterruptHandler(signum, frame):
    """This is use in the interruption handler"""
    raise KeyboardInterrupt("Shutting down!")
