"""Summarize parsed run reports as text"""

import io
from typing import List

from cotester.reportdef import CaseStatus, DashboardData


def show_totals(data: DashboardData, details: bool = False):
    print(''.join(summarize_totals(data, details)))


def summarize_totals(data: DashboardData, details: bool = False) -> List[str]:
    f = io.StringIO()
    print('PASSED:', data.summary.passed, file=f)
    print('FAILED:', data.summary.failed, file=f)
    print('SKIPPED:', data.summary.skipped, file=f)
    print('TOTAL:', data.summary.total, file=f)
    if details:
        # Show why the failed tests failed
        for case in data.testcases:
            if case.status == CaseStatus.FAILED:
                print(f'{case.title}:', file=f)
                for error in case.errors:
                    print(f'  {error}', file=f)
    f.seek(0)
    return f.readlines()


def describe_cases(data: DashboardData) -> List[str]:
    """Return one line per test case with its status, title, browser and artifact counts."""
    lines = []
    for case in data.testcases:
        artifacts = []
        if case.videos:
            artifacts.append(f'{len(case.videos)} video(s)')
        if case.screenshots:
            artifacts.append(f'{len(case.screenshots)} screenshot(s)')
        extra = f' {", ".join(artifacts)}' if artifacts else ''
        lines.append(f'{case.status.value:7} {case.title} '
                     f'[{case.browser}, {len(case.steps)} steps, {case.duration}]{extra}\n')
    return lines
