"""Reconstruct structured test reports from parallel test run transcripts."""

__version__ = '0.1.0'
