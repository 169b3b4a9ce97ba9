import argparse
import io
import logging
import os
import shutil
import tempfile
from unittest import mock

import ddt

from ccedit import logger
from tests.unit import base


@ddt.ddt
class TestLogger(base.BaseTest):
    def make_parser(self):
        parser = argparse.ArgumentParser()
        logger.add_arguments(parser)
        return parser

    def make_logger(self, env):
        with mock.patch.dict(os.environ, env, clear=True):
            inst = logger.Logger()
        self.addCleanup(inst.root.removeHandler, inst.console)
        if inst.logfile:
            self.addCleanup(inst.logfile.close)
            self.addCleanup(inst.root.removeHandler, inst.logfile)
        return inst

    def test_version_string(self):
        self.assertIn('ccedit %s on ' % logger.CCEDIT_VERSION,
                      logger.version_string())

    @ddt.data(('info', logging.INFO), ('WARN', logging.WARNING),
              ('warning', logging.WARNING), ('15', 15), (99, 50))
    @ddt.unpack
    def test_parse_level(self, value, expected):
        self.assertEqual(expected, logger.parse_level(value))

    def test_parse_level_unknown(self):
        self.assertRaises(ValueError, logger.parse_level, 'loud')

    def test_handle_options_verbosity(self):
        options = self.make_parser().parse_args(['-v', '-v'])
        with mock.patch.object(logger.Logger.instance,
                               'set_verbosity') as mock_set:
            logger.handle_options(options)
        mock_set.assert_called_once_with(logging.DEBUG)

    def test_handle_options_log_file(self):
        options = self.make_parser().parse_args(['--log', '/tmp/x.log',
                                                 '--log-level', 'info'])
        inst = logger.Logger.instance
        with mock.patch.object(inst, 'create_log_file') as mock_create, \
                mock.patch.object(inst, 'set_log_level') as mock_level:
            logger.handle_options(options)
        mock_create.assert_called_once_with('/tmp/x.log')
        mock_level.assert_called_once_with(logging.INFO)

    def test_bad_log_level_is_usage_error(self):
        with mock.patch('sys.stderr', new=io.StringIO()) as stderr:
            self.assertRaises(SystemExit, self.make_parser().parse_args,
                              ['--log-level', 'loud'])
        self.assertIn('Unknown log level', stderr.getvalue())

    def test_debug_env(self):
        inst = self.make_logger({'CCEDIT_DEBUG': 'info'})
        self.assertEqual(logging.INFO, inst.console.level)
        inst = self.make_logger({'CCEDIT_DEBUG': 'yes'})
        self.assertEqual(logging.DEBUG, inst.console.level)

    def test_bad_log_level_env(self):
        tempdir = tempfile.mkdtemp()
        self.addCleanup(shutil.rmtree, tempdir)
        logname = os.path.join(tempdir, 'ccedit.log')
        inst = self.make_logger({'CCEDIT_LOG': logname,
                                 'CCEDIT_LOG_LEVEL': 'loud'})
        self.assertIsNotNone(inst.logfile)
        self.assertEqual(logging.NOTSET, inst.logfile.level)

    def test_trace(self):
        inst = logger.Logger.instance
        stream = io.StringIO()
        self.use(mock.patch.object(inst, 'trace', None))
        self.use(mock.patch.object(inst.console, 'filters', []))
        with mock.patch('logging.StreamHandler',
                        return_value=logging.StreamHandler(stream)):
            inst.enable_trace()
        self.addCleanup(inst.root.removeHandler, inst.trace)

        logging.getLogger('ccedit.trace.bridge').debug('W: 7B')
        logging.getLogger('ccedit.bank').debug('not traffic')
        self.assertEqual('W: 7B\n', stream.getvalue())

        record = logging.LogRecord('ccedit.trace.bridge', logging.DEBUG,
                                   __file__, 1, 'x', None, None)
        self.assertFalse(inst.console.filter(record))
