"""Caller-side "latest request wins" gate.

The resolver never cancels or deduplicates work. A caller that may start a
new request while an older one is still awaiting takes a token before the
call and checks it afterwards:

    token = generation.begin()
    resolved = await resolver.resolve(ref)
    generation.ensure_current(token)   # raises StaleRequestError if superseded
"""

from __future__ import annotations

import itertools

from sourceref.core.errors import StaleRequestError


class RequestGeneration:
    """Monotonically increasing request counter."""

    def __init__(self) -> None:
        self._counter = itertools.count(1)
        self._current = 0

    @property
    def current(self) -> int:
        return self._current

    def begin(self) -> int:
        """Start a new request, superseding every earlier token."""
        self._current = next(self._counter)
        return self._current

    def is_current(self, token: int) -> bool:
        return token == self._current

    def ensure_current(self, token: int) -> None:
        if not self.is_current(token):
            raise StaleRequestError.superseded(token, self._current)
