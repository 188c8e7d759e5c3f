"""Pytest configuration and shared fixtures."""

import logging
from collections.abc import Iterator

import pytest

# The utcstamp testing plugin is registered via a ``pytest11`` entry
# point (pyproject.toml) for external consumers.  In our own test
# suite we disable it (``-p no:utcstamp``) and load it here instead so
# that pytest-cov is already tracing when the package is imported.
pytest_plugins = ["utcstamp.testing._plugin"]


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )
    config.addinivalue_line(
        "markers", "slow: Exhaustive tests over the whole calendar cycle"
    )


@pytest.fixture
def _restore_root_logger() -> Iterator[None]:
    """Save and restore root logger handlers and level.

    Ensures tests that call ``configure_logging()`` (directly or via
    the CLI) don't leak state across subsequent tests.
    """
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    yield
    for h in root.handlers:
        if h not in original_handlers:
            h.close()
    root.handlers = original_handlers
    root.setLevel(original_level)
