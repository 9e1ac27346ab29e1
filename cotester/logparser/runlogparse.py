"""Rebuilds a test report from the log of a parallel Cucumber/Playwright run.

The log is the combined output of all workers of a run, so lines from different tests are
interleaved and there is nothing on most lines saying which test wrote it. The report is
built in these passes:

  1. every line is normalized (ANSI escapes removed, mis-decoded icons repaired)
  2. Feature: and Scenario: declarations are collected as the known test titles
  3. each line is attributed to a test case (see attribution.py) and classified as a step
     of it (see classify.py), or recorded as a run-wide line
  4. run-wide lines are prepended to every test case and the totals are counted

Any non-empty log produces a report, even one with no recognizable structure at all.
"""

import dataclasses
import logging
from typing import Optional

from cotester import config
from cotester.logparser import attribution
from cotester.logparser import classify
from cotester.logparser import markers
from cotester.logparser import normalize
from cotester.logparser.parsecontext import ParseContext
from cotester.reportdef import DashboardData, StepKind, Summary, TestCase


# Title of the single test case made when nothing in the log could be attributed
FALLBACK_LOG_TITLE = 'Execution Log'

# Titles that signal the log's structure was not recognized
FALLBACK_TITLES = frozenset((FALLBACK_LOG_TITLE, attribution.FALLBACK_STEP_TITLE))


def split_lines(log_text: str) -> list[str]:
    """Split a log into normalized lines.

    str.splitlines() is not used since it also splits on characters (like U+0085) that are part
    of mis-decoded icons.
    """
    return [normalize.normalize_line(l) for l in log_text.split('\n')]


def scan_declarations(ctx: ParseContext, lines: list[str]):
    """Record the titles of all declared features and scenarios as known titles."""
    for l in lines:
        if title := markers.declared_title(l):
            logging.debug('Found declaration of %r', title)
            ctx.add_known_title(title)


def fallback_case(ctx: ParseContext, lines: list[str]) -> TestCase:
    """Put every non-blank line into a single test case.

    Blank lines are left out; they do not become empty log steps.
    """
    logging.debug('No test cases found; reporting the raw log')
    case = ctx.get_or_create(FALLBACK_LOG_TITLE)
    for l in lines:
        if l:
            case.add_step(StepKind.LOG, l)
    return case


def finish_cases(ctx: ParseContext, step_seconds: int) -> list[TestCase]:
    """Merge the run-wide lines into each test case and fill in the derived fields."""
    testcases = list(ctx.cases.values())
    for case in testcases:
        # Each test case gets its own copy of every run-wide step
        case.steps[:0] = [dataclasses.replace(s) for s in ctx.global_steps]
        case.duration = f'{len(case.steps) * step_seconds}s'
        # The browser is tracked for the run as a whole, so the last one seen wins everywhere
        case.browser = ctx.browser
    return testcases


def is_low_confidence(data: DashboardData) -> bool:
    """Return True if the report could only be built by falling back to a synthetic test."""
    return len(data.testcases) == 1 and data.testcases[0].title in FALLBACK_TITLES


def parse(log_text: Optional[str], tags: str = '',
          base_url: Optional[str] = None) -> Optional[DashboardData]:
    """Parse a run log into a report.

    Args:
        log_text: the complete log of the run
        tags: tag expression the run was started with; only informational
        base_url: prefix of video and screenshot URLs; defaults to the media_base_url config value

    Returns:
        the report, or None if the log is empty
    """
    if not log_text:
        return None
    if base_url is None:
        base_url = config.expandstr(config.get('media_base_url'))
    logging.debug('Parsing %d character log for tags %r', len(log_text), tags)

    ctx = ParseContext(base_url, config.get('default_browser'), config.get('legacy_titles'))
    lines = split_lines(log_text)
    scan_declarations(ctx, lines)

    for l in lines:
        if not l:
            continue
        if title := attribution.attribute_line(ctx, l):
            classify.classify_line(ctx.get_or_create(title), l, ctx.base_url)

    if not ctx.cases:
        # Run-wide lines are already among the raw lines
        ctx.global_steps = []
        fallback_case(ctx, lines)
    testcases = finish_cases(ctx, config.get('step_duration_seconds'))

    summary = Summary.of(testcases)
    logging.debug('Found %d test cases, %d failed', summary.total, summary.failed)
    return DashboardData(summary, testcases)
