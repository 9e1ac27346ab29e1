"""Turn a line attributed to a test case into a step of that test case."""

import logging
import urllib.parse

from cotester.logparser import markers
from cotester.reportdef import StepKind, TestCase


def artifact_url(base_url: str, folder: str, filename: str) -> str:
    """Return the URL at which the backend serves an artifact file."""
    return f'{base_url.rstrip("/")}/{folder}/{urllib.parse.quote(filename)}'


def classify_line(case: TestCase, line: str, base_url: str):
    """Add the normalized line to the test case as the appropriate kind of step.

    Checks are made in order and the first match wins. Declaration lines are not recorded.
    """
    if r := markers.STEP_START_RE.search(line):
        case.add_step(StepKind.STEP, f'▶ {markers.text_after(r, line)}'.rstrip())

    elif r := markers.STEP_PASS_RE.search(line):
        case.add_step(StepKind.SUCCESS, f'✓ {markers.text_after(r, line)}'.rstrip())

    elif r := markers.STEP_FAIL_RE.search(line):
        message = markers.text_after(r, line)
        case.fail(message, StepKind.FAILURE, f'✗ {message}'.rstrip())

    elif (path := markers.video_path(line)) is not None:
        if filename := markers.artifact_filename(path):
            case.add_video(artifact_url(base_url, 'videos', filename), f'🎥 {filename}')
        else:
            logging.debug('No file in video line: %s', line)
            case.add_step(StepKind.LOG, line)

    elif (path := markers.screenshot_path(line)) is not None:
        filename = markers.artifact_filename(path)
        if filename.lower().endswith(markers.SCREENSHOT_EXTENSIONS):
            case.screenshots.append(artifact_url(base_url, 'screenshots', filename))
        else:
            logging.debug('Ignoring screenshot line without an image file: %s', line)

    elif markers.RUN_COMPLETED in line:
        case.add_step(StepKind.SUCCESS, f'✓ {line}')

    elif markers.ERROR_RE.search(line):
        case.fail(line, StepKind.ERROR, line)

    elif markers.declared_title(line) is None:
        case.add_step(StepKind.LOG, line)
