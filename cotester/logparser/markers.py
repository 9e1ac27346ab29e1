"""Markers recognized in parallel Cucumber/Playwright run logs.

All matching is done on lines that have already been normalized.
"""

import re
from typing import Optional


# Test case declarations; the title runs up to the next colon
DECLARATION_RE = re.compile(r'(?:Feature|Scenario):([^:]*)')

# Run-wide banners, printed once per run (or once per worker) rather than per test
GLOBAL_BANNERS = (
    'Starting test run',
    'Parallel Execution:',
    'Thread Count:',
    'Environment:',
)
CONFIG_LOADED_RE = re.compile(r'\bconfig(?:uration)? loaded\b', re.IGNORECASE)
# 🌐 Browser: firefox | Headless: true | SlowMo: 200ms
BROWSER_BANNER = 'Browser:'
BROWSER_BANNER_HINTS = ('🌐', 'Headless')

# Browser: chromium
BROWSER_RE = re.compile(r'browser:\s*(\w+)', re.IGNORECASE)
BROWSER_NAMES = {
    'chromium': 'Chrome',
    'firefox': 'Firefox',
    'webkit': 'Safari',
}

# tests/login.spec.ts, checkout.test.ts, features/search.feature
SPEC_FILE_RE = re.compile(r'([\w-]+)\.(?:spec\.ts|test\.ts|feature)\b')

# Step events logged by the test hooks, either spelled out or as a glyph
STEP_START_RE = re.compile(r'STEP START:\s*|[➡▶]\ufe0f?\s*')
STEP_PASS_RE = re.compile(r'STEP PASS:\s*|[✓✔✅]\ufe0f?\s*')
STEP_FAIL_RE = re.compile(r'STEP FAIL:\s*|[✗✘❌]\ufe0f?\s*')

# 🎥 Video kaydedildi: C:\runs\output\videos\3f2a.webm
VIDEO_RE = re.compile(r'Video (?:kaydedildi|saved|recorded):')
VIDEO_GLYPH = '🎥'
# 📸 Screenshot kaydedildi: /app/screenshots/login-failed.png
SCREENSHOT_RE = re.compile(r'Screenshot (?:kaydedildi|saved|recorded):')
SCREENSHOT_GLYPH = '📸'
SCREENSHOT_EXTENSIONS = ('.png', '.jpg', '.jpeg')
PATH_SEPARATOR_RE = re.compile(r'[\\/]')

RUN_COMPLETED = 'Test run completed successfully'

# Anything that looks like an error, exception or failed assertion
ERROR_RE = re.compile(
    r'Error:|Exception|TimeoutError|AssertionError|expect\(|toBeVisible'
    r'|Test run failed|failed with exit code')


def declared_title(line: str) -> Optional[str]:
    """Return the title declared by a Feature: or Scenario: line.

    None is returned for lines that are not declarations; an empty string for a declaration
    without a title.
    """
    if r := DECLARATION_RE.search(line):
        return r.group(1).strip()
    return None


def is_global_banner(line: str) -> bool:
    if any(banner in line for banner in GLOBAL_BANNERS):
        return True
    if BROWSER_BANNER in line and any(hint in line for hint in BROWSER_BANNER_HINTS):
        return True
    return bool(CONFIG_LOADED_RE.search(line))


def browser_name(line: str) -> Optional[str]:
    """Return the display name of the browser mentioned on a line, if any."""
    if r := BROWSER_RE.search(line):
        return BROWSER_NAMES.get(r.group(1).lower(), r.group(1))
    return None


def is_step_event(line: str) -> bool:
    return bool(STEP_START_RE.search(line) or STEP_PASS_RE.search(line)
                or STEP_FAIL_RE.search(line))


def text_after(r: re.Match, line: str) -> str:
    """Return the text following a step marker match, with any repeated markers removed."""
    text = line[r.end():]
    while m := r.re.match(text):
        text = text[m.end():]
    return text.strip()


def video_path(line: str) -> Optional[str]:
    """Return the text naming the file of a recorded video, or None if this is no video line."""
    if r := VIDEO_RE.search(line):
        return line[r.end():].strip()
    if VIDEO_GLYPH in line and 'Screenshot' not in line:
        return line.split(VIDEO_GLYPH, 1)[1].strip()
    return None


def screenshot_path(line: str) -> Optional[str]:
    """Return the text naming the file of a screenshot, or None if this is no screenshot line."""
    if r := SCREENSHOT_RE.search(line):
        return line[r.end():].strip()
    if SCREENSHOT_GLYPH in line:
        return line.split(SCREENSHOT_GLYPH, 1)[1].strip()
    return None


def is_artifact(line: str) -> bool:
    return video_path(line) is not None or screenshot_path(line) is not None


def declaration_has_event(line: str) -> bool:
    """Return True if a declaration line also reports a step, error or artifact.

    Only the text outside the declaration itself is checked, so a title such as
    "Login Exception path" does not count as an error.
    """
    rest = DECLARATION_RE.sub('', line, count=1)
    return (is_step_event(rest) or is_artifact(rest) or bool(ERROR_RE.search(rest))
            or RUN_COMPLETED in rest)


def artifact_filename(path: str) -> str:
    """Return the base file name of a Windows or POSIX path."""
    return PATH_SEPARATOR_RE.split(path)[-1].strip().strip('"\'')
