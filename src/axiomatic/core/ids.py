"""Process-wide unique ids.

Contexts, classes and instances all draw from the same monotonically
increasing counter, so a uid also tells you creation order.
"""

from __future__ import annotations

import itertools

_counter = itertools.count(1)


def next_uid() -> int:
    """Return a new process-unique integer id."""
    return next(_counter)
