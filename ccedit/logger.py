# Copyright 2025 The ccedit developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

"""Logging setup for ccedit.

Modules log through ``logging.getLogger(__name__)``.  The console shows
warnings and errors unless ``-v``/``-q`` say otherwise, ``--log`` copies
every message to a file, and ``--trace`` prints the raw bytes exchanged
with a bridge.

Before the command line is parsed, CCEDIT_DEBUG sets the console level,
CCEDIT_LOG and CCEDIT_LOG_LEVEL open a log file, and CCEDIT_TRACE turns
on the bridge trace.
"""

import argparse
import logging
import os
import sys

from ccedit import CCEDIT_VERSION
from ccedit import platform

#: Raw bridge traffic is logged here at debug level
TRACE_LOGGER = 'ccedit.trace'

#: Level names accepted on the command line and in the environment
LEVELS = {"critical": logging.CRITICAL,
          "error":    logging.ERROR,
          "warn":     logging.WARNING,
          "warning":  logging.WARNING,
          "info":     logging.INFO,
          "debug":    logging.DEBUG,
          }


def version_string():
    return "ccedit %s on %s (Python %s)" % (
        CCEDIT_VERSION, platform.get_platform().os_version_string(),
        sys.version.split()[0])


class VersionAction(argparse.Action):
    def __call__(self, parser, namespace, value, option_string=None):
        print(version_string())
        sys.exit(0)


def add_version_argument(parser):
    parser.add_argument("--version", action=VersionAction, nargs=0,
                        help="Print version and exit")


def parse_level(value):
    """Return the logging level for a level name or number

    Raises ValueError if @value is neither.
    """
    try:
        level = int(value)
    except ValueError:
        try:
            level = LEVELS[value.strip().lower()]
        except KeyError:
            raise ValueError("Unknown log level %r (use one of %s)" % (
                value, ", ".join(LEVELS)))
    return min(level, logging.CRITICAL)


def _level_argument(value):
    try:
        return parse_level(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


class Logger:
    console_format = '%(levelname)s: %(message)s'
    file_format = '[%(asctime)s] %(name)s - %(levelname)s: %(message)s'

    def __init__(self):
        self.root = logging.getLogger()
        self.root.setLevel(logging.DEBUG)
        self.LOG = logging.getLogger(__name__)

        # Any CCEDIT_DEBUG that is not a level still means "debug"
        debug = os.getenv("CCEDIT_DEBUG")
        self.early_level = logging.WARNING
        if debug:
            try:
                self.early_level = parse_level(debug)
            except ValueError:
                self.early_level = logging.DEBUG

        self.console = logging.StreamHandler()
        self.console.setLevel(self.early_level)
        self.console.setFormatter(logging.Formatter(self.console_format))
        self.root.addHandler(self.console)

        self.logfile = None
        self.trace = None

        logname = os.getenv("CCEDIT_LOG")
        if logname:
            self.create_log_file(logname)
            level = os.getenv("CCEDIT_LOG_LEVEL")
            if level:
                try:
                    self.set_log_level(level)
                except ValueError as e:
                    self.LOG.warning("Ignoring CCEDIT_LOG_LEVEL: %s", e)

        if os.getenv("CCEDIT_TRACE"):
            self.enable_trace()

    def create_log_file(self, name):
        """Start copying every message to @name, truncating it first"""
        if self.logfile is not None:
            self.LOG.error("Already logging to %s", self.logfile.baseFilename)
            return
        self.logfile = logging.FileHandler(name, mode='w', encoding='utf-8')
        self.logfile.setFormatter(logging.Formatter(self.file_format))
        self.root.addHandler(self.logfile)

    def set_verbosity(self, level):
        self.console.setLevel(min(level, logging.CRITICAL))

    def set_log_level(self, level):
        """Set the log file level from a level name or number"""
        self.logfile.setLevel(parse_level(level))

    def enable_trace(self):
        """Print raw bridge traffic on stderr whatever the console level"""
        if self.trace is not None:
            return
        self.trace = logging.StreamHandler()
        self.trace.setFormatter(logging.Formatter('%(message)s'))
        self.trace.addFilter(logging.Filter(TRACE_LOGGER))
        self.root.addHandler(self.trace)
        # Keep the console from printing the same records twice
        self.console.addFilter(
            lambda record: not record.name.startswith(TRACE_LOGGER))

    instance: object


Logger.instance = Logger()


def add_arguments(parser):
    group = parser.add_argument_group("Logging Options")
    group.add_argument("-q", "--quiet", action="count", default=0,
                       help="Show fewer messages")
    group.add_argument("-v", "--verbose", action="count", default=0,
                       help="Show more messages")
    group.add_argument("--log", dest="log_file", metavar="FILE",
                       help="Also write every message to FILE")
    group.add_argument("--log-level", type=_level_argument, default="debug",
                       help="Log file level (%s, or a number).  "
                       "Defaults to 'debug'." % ", ".join(LEVELS))
    group.add_argument("--trace", action="store_true",
                       help="Print the raw bytes exchanged with the bridge")


def handle_options(options):
    logger = Logger.instance

    if options.verbose or options.quiet:
        logger.set_verbosity(
            logging.WARNING + 10 * (options.quiet - options.verbose))

    if options.log_file:
        logger.create_log_file(options.log_file)
        logger.set_log_level(options.log_level)

    if options.trace:
        logger.enable_trace()

    logger.LOG.debug(version_string())
