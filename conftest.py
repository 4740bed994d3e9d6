"""Shared test configuration for the paperhand repository.

Logging is configured once per session so that every package's structlog
loggers write to stderr, never to the stdout captured by CLI tests.
"""

from paperhand_common import configure_logging


def pytest_configure(config):
    """Configure structured logging before any test runs."""
    configure_logging(level="WARNING", json_output=False)
