"""Rebuild test reports from the logs of parallel test runs."""

import argparse
import json
import logging
import sys

from cotester import argparsing
from cotester import log
from cotester import logfile
from cotester import summarize
from cotester.logparser import runlogparse
from cotester.reportdef import DashboardData

# Name shown for a log read from stdin
STDIN_NAME = '-'


def parse_args(args=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description='Rebuild a test report from the log of a parallel test run')
    argparsing.arguments_logging(parser)
    argparsing.arguments_config(parser)
    argparsing.arguments_report(parser)
    parser.add_argument(
        '--archive',
        help='Also store the (first) log, zstd compressed, in this .zst file')
    parser.add_argument(
        'files',
        nargs='*',
        help='Log files to parse; files ending in .zst are decompressed. Reads stdin if none')
    return parser.parse_args(args=args)


def read_logs(files: list[str]) -> list[tuple[str, str]]:
    """Return the name and contents of each log."""
    if not files:
        return [(STDIN_NAME, logfile.read_stream(sys.stdin.buffer))]
    return [(fn, logfile.read_log(fn)) for fn in files]


def output_text(reports: list[tuple[str, DashboardData]]):
    """Write the reports in a human-friendly format."""
    for name, data in reports:
        if len(reports) > 1:
            print(f'== {name}')
        print(''.join(summarize.describe_cases(data)), end='')
        if runlogparse.is_low_confidence(data):
            print('(no test structure was recognized in this log)')
        summarize.show_totals(data, details=True)


def output_json(reports: list[tuple[str, DashboardData]]):
    """Write the reports in the JSON form consumed by the dashboard."""
    if len(reports) == 1:
        doc = reports[0][1].to_dict()
    else:
        doc = {name: data.to_dict() for name, data in reports}
    print(json.dumps(doc, ensure_ascii=False, indent=2))


def run(args: argparse.Namespace) -> int:
    status = 0
    reports = []
    logs = read_logs(args.files)
    if args.archive and logs:
        logfile.write_compressed(args.archive, logs[0][1])
    for name, text in logs:
        data = runlogparse.parse(text, args.tags, args.base_url)
        if data is None:
            logging.error('Log %s is empty', name)
            status = 1
            continue
        logging.info('%s: %d test cases', name, data.summary.total)
        reports.append((name, data))

    if args.format == 'json':
        output_json(reports)
    else:
        output_text(reports)
    return status


def main():
    args = parse_args()
    log.setup(args)
    sys.exit(run(args))


if __name__ == '__main__':
    main()
