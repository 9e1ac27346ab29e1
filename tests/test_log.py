"""Test log."""

import logging
import unittest

from .context import cotester  # noqa: F401

from cotester import log  # noqa: I100


class TestLog(unittest.TestCase):
    """Test log."""

    def test_logging_level_to_syslog(self):
        self.assertEqual(7, log.logging_level_to_syslog(logging.DEBUG))
        self.assertEqual(6, log.logging_level_to_syslog(logging.INFO))
        self.assertEqual(4, log.logging_level_to_syslog(logging.WARNING))
        self.assertEqual(3, log.logging_level_to_syslog(logging.ERROR))
        self.assertEqual(2, log.logging_level_to_syslog(logging.CRITICAL))
        self.assertEqual(1, log.logging_level_to_syslog(logging.CRITICAL + 10))

    def test_syslog_formatter(self):
        formatter = log.SyslogFormatter('prog: %(message)s')
        record = logging.LogRecord('root', logging.WARNING, __file__, 1, 'Log %s is empty',
                                   ('-',), None)
        self.assertEqual('<4>prog: Log - is empty', formatter.format(record))
