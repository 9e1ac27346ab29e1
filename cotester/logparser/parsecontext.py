"""State kept while parsing a single run log."""

import logging
from typing import Optional

from cotester.reportdef import StepKind, TestCase, TestStep, slugify


class ParseContext:
    """Everything one parse of one log accumulates.

    A new context is made for every parse so that concurrent parses share nothing.

    Attributes:
        base_url: prefix for video and screenshot URLs
        browser: most recently detected browser; applies to every test case in the run
        legacy_titles: project names matched as a last resort
        cases: test cases by title, in order of creation
        known_titles: titles that lines are matched against, in order of discovery
        global_steps: run-wide lines, each recorded once, shared by every test case
        last_active: title of the test case that most recently received a line
    """

    def __init__(self, base_url: str, browser: str, legacy_titles: list[str]):
        self.base_url = base_url
        self.browser = browser
        self.legacy_titles = legacy_titles
        self.cases: dict[str, TestCase] = {}
        self.known_titles: list[str] = []
        self.global_steps: list[TestStep] = []
        self.last_active: Optional[str] = None
        self._global_contents: set[str] = set()
        self._ids: set[str] = set()

    def add_known_title(self, title: str):
        if title and title not in self.known_titles:
            self.known_titles.append(title)

    def match_known_title(self, lowered: str) -> Optional[str]:
        """Return the known title contained in a lowercased line.

        When more than one matches, the longest (most specific) one wins, then the one
        discovered first.
        """
        best = None
        for title in self.known_titles:
            if title.lower() in lowered and (best is None or len(title) > len(best)):
                best = title
        return best

    def unique_id(self, title: str) -> str:
        base = slugify(title)
        ident = base
        count = 1
        while ident in self._ids:
            count += 1
            ident = f'{base}-{count}'
        self._ids.add(ident)
        return ident

    def get_or_create(self, title: str) -> TestCase:
        """Return the test case with this title, creating it if necessary."""
        if case := self.cases.get(title):
            return case
        logging.debug('New test case %r', title)
        case = TestCase(id=self.unique_id(title), title=title, browser=self.browser)
        self.cases[title] = case
        self.add_known_title(title)
        return case

    def activate(self, title: str) -> str:
        """Make title the one that unattributed lines fall back to."""
        self.last_active = title
        return title

    def add_global_step(self, line: str) -> bool:
        """Record a run-wide line unless an identical one was already seen.

        Returns True if it was recorded.
        """
        if line in self._global_contents:
            return False
        self._global_contents.add(line)
        self.global_steps.append(TestStep(StepKind.CONFIG, line))
        return True
