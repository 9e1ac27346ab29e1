"""Functions to set up common argument parsers."""

import argparse
import ast

from cotester import config


REPORT_FORMATS = ['text', 'json']


class OverrideConfigAction(argparse.Action):
    """argparsing action that adds a configuration override of the form NAME=VALUE.

    VALUE is a Python literal; an empty VALUE is stored as the empty string.
    """
    def __init__(self, option_strings, dest: str, **kwargs):
        kwargs.setdefault('metavar', 'NAME=VALUE')
        super().__init__(option_strings=option_strings, dest=dest, nargs=1, **kwargs)

    def __call__(self, parser, namespace, values, option_string=None):
        for assignment in values:
            name, sep, rawval = assignment.partition('=')
            if not sep or not name:
                raise argparse.ArgumentTypeError(f'Missing = in {assignment}')
            # Let any exceptions through here since they provide detail about the problem
            config.add_override(name, ast.literal_eval(rawval) if rawval else '')


def arguments_config(parser: argparse.ArgumentParser):
    """Add arguments needed for manipulating the configuration."""
    parser.add_argument(
        '--set',
        action=OverrideConfigAction,
        help='Override a config value')


def arguments_logging(parser: argparse.ArgumentParser):
    """Add arguments needed for logging."""
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Show more log messages')
    parser.add_argument(
        '--debug',
        action='store_true',
        help='Show debug level log messages (implies --verbose)')
    parser.add_argument(
        '--level-prefix',
        action='store_true',
        help='Include syslog priority level in log message as <N> prefix')


def arguments_report(parser: argparse.ArgumentParser):
    """Add arguments controlling how a parsed run is reported."""
    parser.add_argument(
        '--tags',
        default='',
        help='Tag expression the run was started with (informational only)')
    parser.add_argument(
        '--base-url',
        help='Base URL for video and screenshot links (default: media_base_url config value)')
    parser.add_argument(
        '--format',
        choices=REPORT_FORMATS,
        default='text',
        help='Specify output format')
