"""Type definitions of reconstructed test reports."""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class StepKind(Enum):
    """Kind of a single classified transcript line."""
    STEP = 'step'              # a step started
    SUCCESS = 'success'        # a step (or the run) passed
    FAILURE = 'failure'        # a step reported failure
    LOG = 'log'                # plain transcript line
    CONFIG = 'config'          # run-wide banner shared by all test cases
    VIDEO = 'video'            # a video was recorded
    SCREENSHOT = 'screenshot'  # a screenshot was recorded
    ERROR = 'error'            # error, exception or failed assertion


class StepOutcome(Enum):
    """Result shown next to a step."""
    PASS = 'PASS'
    FAIL = 'FAIL'
    INFO = 'INFO'


class CaseStatus(Enum):
    """Overall result of a test case."""
    PASSED = 'PASSED'
    FAILED = 'FAILED'
    SKIPPED = 'SKIPPED'


FAILING_KINDS = frozenset((StepKind.FAILURE, StepKind.ERROR))
PASSING_KINDS = frozenset((StepKind.SUCCESS, StepKind.VIDEO, StepKind.SCREENSHOT))

SLUG_RE = re.compile(r'[^a-z0-9]+')


def outcome_of(kind: StepKind) -> StepOutcome:
    """Return the outcome implied by a step kind."""
    if kind in FAILING_KINDS:
        return StepOutcome.FAIL
    if kind in PASSING_KINDS:
        return StepOutcome.PASS
    return StepOutcome.INFO


def slugify(title: str) -> str:
    """Turn a test title into an identifier made of lowercase letters, digits and dashes."""
    return SLUG_RE.sub('-', title.lower()).strip('-') or 'test'


@dataclass
class TestStep:
    """One transcript line that belongs to a test case."""
    __test__ = False

    kind: StepKind
    content: str
    outcome: StepOutcome = field(init=False)

    def __post_init__(self):
        self.outcome = outcome_of(self.kind)

    def to_dict(self) -> dict[str, str]:
        return {
            'type': self.kind.value,
            'content': self.content,
            'status': self.outcome.value,
        }


@dataclass
class TestCase:
    """A logical test (scenario, spec file, or synthesized fallback) rebuilt from a transcript."""
    __test__ = False

    id: str  # noqa: A003
    title: str
    browser: str
    status: CaseStatus = CaseStatus.PASSED
    duration: str = '0s'
    steps: list[TestStep] = field(default_factory=list)
    video: Optional[str] = None
    videos: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    screenshots: list[str] = field(default_factory=list)

    def add_step(self, kind: StepKind, content: str):
        self.steps.append(TestStep(kind, content))

    def fail(self, message: str, kind: StepKind, content: str):
        """Record a failure. A failed test case never goes back to passing."""
        self.status = CaseStatus.FAILED
        self.errors.append(message)
        self.add_step(kind, content)

    def add_video(self, url: str, content: str):
        self.video = url
        self.videos.append(url)
        self.add_step(StepKind.VIDEO, content)

    def to_dict(self) -> dict[str, Any]:
        return {
            'id': self.id,
            'title': self.title,
            'status': self.status.value,
            'duration': self.duration,
            'browser': self.browser,
            'steps': [s.to_dict() for s in self.steps],
            'video': self.video,
            'videos': list(self.videos),
            'errors': list(self.errors),
            'screenshots': list(self.screenshots),
        }


@dataclass
class Summary:
    """Test case counts by status."""
    total: int = 0
    passed: int = 0
    failed: int = 0
    skipped: int = 0

    @classmethod
    def of(cls, testcases: list[TestCase]) -> 'Summary':
        return cls(
            total=len(testcases),
            passed=len([1 for t in testcases if t.status == CaseStatus.PASSED]),
            failed=len([1 for t in testcases if t.status == CaseStatus.FAILED]),
            skipped=len([1 for t in testcases if t.status == CaseStatus.SKIPPED]))


@dataclass
class DashboardData:
    """Result of parsing one run transcript."""
    summary: Summary
    testcases: list[TestCase]

    def to_dict(self) -> dict[str, Any]:
        """Return the structure in the form consumed by the dashboard."""
        return {
            'summary': {
                'total': self.summary.total,
                'passed': self.summary.passed,
                'failed': self.summary.failed,
                'skipped': self.summary.skipped,
            },
            'testCases': [t.to_dict() for t in self.testcases],
        }
