"""Public test-support utilities for utcstamp.

Provided symbols:

- :class:`FakeClock` — deterministic clock for timing tests.
- :func:`make_settings` — factory for ``Settings`` without ``.env`` files.
"""

from utcstamp.testing._clock import FakeClock
from utcstamp.testing._settings import make_settings

__all__ = [
    "FakeClock",
    "make_settings",
]
