"""Decide which test case each line of an interleaved run log belongs to.

Parallel workers write to the same log, so consecutive lines may belong to different tests
and most lines do not say which test they belong to. Each line is run through the rules in
ATTRIBUTION_RULES in order and the first one to reach a verdict decides. Explicit markers are
trusted most; falling back on whichever test was last active is the least reliable guess and
is tried last.
"""

import logging
from typing import Callable, NamedTuple, Optional

from cotester.logparser import markers
from cotester.logparser.parsecontext import ParseContext


# Title given to step lines seen before any test could be identified
FALLBACK_STEP_TITLE = 'Test Execution'


class Attribution(NamedTuple):
    """Verdict of an attribution rule.

    title is the test case receiving the line, or None if the rule consumed the line
    without giving it to a test case.
    """
    title: Optional[str]


CONSUMED = Attribution(None)

# Arguments are the parse context, the line and the lowercased line
Rule = Callable[[ParseContext, str, str], Optional[Attribution]]


def start_fallback(ctx: ParseContext) -> str:
    if FALLBACK_STEP_TITLE not in ctx.cases:
        logging.debug('No test identified yet; using %r', FALLBACK_STEP_TITLE)
    return ctx.activate(FALLBACK_STEP_TITLE)


def rule_global_banner(ctx: ParseContext, line: str, lowered: str) -> Optional[Attribution]:
    """Run-wide banners are kept once each and shared by all test cases."""
    if not markers.is_global_banner(line):
        return None
    if not ctx.add_global_step(line):
        logging.debug('Duplicate run banner: %s', line)
    return CONSUMED


def rule_declaration(ctx: ParseContext, line: str, lowered: str) -> Optional[Attribution]:
    """A Feature: or Scenario: line makes its title the active one.

    A plain declaration is consumed. The test case itself is only created once a line is
    given to it, so a feature whose lines all mention one of its scenarios does not show up
    as an empty test. A declaration that also reports a step, error or artifact is given to
    the declared test so the event is recorded.
    """
    title = markers.declared_title(line)
    if title is None:
        return None
    if markers.declaration_has_event(line):
        return Attribution(ctx.activate(title)) if title else None
    if title:
        ctx.activate(title)
    return CONSUMED


def rule_known_title(ctx: ParseContext, line: str, lowered: str) -> Optional[Attribution]:
    if title := ctx.match_known_title(lowered):
        return Attribution(ctx.activate(title))
    return None


def rule_spec_filename(ctx: ParseContext, line: str, lowered: str) -> Optional[Attribution]:
    if r := markers.SPEC_FILE_RE.search(line):
        name = r.group(1)
        ctx.add_known_title(name)
        return Attribution(ctx.activate(name))
    return None


def rule_legacy_title(ctx: ParseContext, line: str, lowered: str) -> Optional[Attribution]:
    for title in ctx.legacy_titles:
        if title.lower() in lowered:
            return Attribution(ctx.activate(title))
    return None


def rule_orphan_step(ctx: ParseContext, line: str, lowered: str) -> Optional[Attribution]:
    """Step events always belong to some test, even when none has been identified."""
    if not markers.is_step_event(line):
        return None
    return Attribution(ctx.last_active or start_fallback(ctx))


def rule_active_carryover(ctx: ParseContext, line: str, lowered: str) -> Optional[Attribution]:
    if ctx.last_active:
        return Attribution(ctx.last_active)
    return None


def rule_orphan_artifact(ctx: ParseContext, line: str, lowered: str) -> Optional[Attribution]:
    """Videos and screenshots are kept even when no test has been identified."""
    if markers.is_artifact(line):
        return Attribution(start_fallback(ctx))
    return None


ATTRIBUTION_RULES: list[tuple[str, Rule]] = [
    ('global_banner', rule_global_banner),
    ('declaration', rule_declaration),
    ('known_title', rule_known_title),
    ('spec_filename', rule_spec_filename),
    ('legacy_title', rule_legacy_title),
    ('orphan_step', rule_orphan_step),
    ('active_carryover', rule_active_carryover),
    ('orphan_artifact', rule_orphan_artifact),
]


def detect_browser(ctx: ParseContext, line: str):
    """Track the browser named on the line, if any. This never consumes the line."""
    if browser := markers.browser_name(line):
        ctx.browser = browser


def attribute_line(ctx: ParseContext, line: str) -> Optional[str]:
    """Return the title of the test case a normalized line belongs to.

    None means the line belongs to no test case, either because it was recorded as a
    run-wide line or because nothing could be attributed to it.
    """
    detect_browser(ctx, line)
    lowered = line.lower()
    for _, rule in ATTRIBUTION_RULES:
        if (verdict := rule(ctx, line, lowered)) is not None:
            return verdict.title
    logging.debug('No test case for line: %s', line)
    return None
