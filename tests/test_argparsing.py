"""Test argparsing."""

import argparse
import unittest

from .context import cotester  # noqa: F401

from cotester import argparsing  # noqa: I100
from cotester import config


class TestArgparsing(unittest.TestCase):
    """Test argparsing."""

    def setUp(self):
        super().setUp()
        self.parser = argparse.ArgumentParser()
        argparsing.arguments_logging(self.parser)
        argparsing.arguments_config(self.parser)
        argparsing.arguments_report(self.parser)

    def clear_override(self, name: str):
        config.overrides.pop(name, None)
        config.get.cache_clear()

    def test_defaults(self):
        args = self.parser.parse_args([])
        self.assertEqual('', args.tags)
        self.assertIsNone(args.base_url)
        self.assertEqual('text', args.format)
        self.assertFalse(args.verbose)
        self.assertFalse(args.debug)
        self.assertFalse(args.level_prefix)

    def test_report_args(self):
        args = self.parser.parse_args(['--tags', '@smoke and not @wip', '--format', 'json',
                                       '--base-url', 'http://cdn'])
        self.assertEqual('@smoke and not @wip', args.tags)
        self.assertEqual('json', args.format)
        self.assertEqual('http://cdn', args.base_url)

    def test_set_override(self):
        self.addCleanup(self.clear_override, 'default_browser')
        self.addCleanup(self.clear_override, 'legacy_titles')
        self.parser.parse_args(['--set', 'default_browser="Edge"',
                                '--set', "legacy_titles=['Smoke Suite']"])
        self.assertEqual('Edge', config.get('default_browser'))
        self.assertEqual(['Smoke Suite'], config.get('legacy_titles'))

    def test_set_empty(self):
        self.addCleanup(self.clear_override, 'media_base_url')
        self.parser.parse_args(['--set', 'media_base_url='])
        self.assertEqual('', config.get('media_base_url'))

    def test_set_missing_equals(self):
        with self.assertRaises(argparse.ArgumentTypeError):
            self.parser.parse_args(['--set', 'default_browser'])
