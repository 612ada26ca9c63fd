# src/daily_dose/tasks/ids.py

from __future__ import annotations

import logging

from ulid import ULID

logger = logging.getLogger(__name__)


class MonotonicUlidFactory:
    """
    Mint ULID strings that sort in creation order.

    ULIDs minted within the same millisecond are only random after the
    timestamp prefix, so two tasks added back to back could sort out of order.
    When the clock has not advanced past the previous id, the previous id is
    incremented by one instead.
    """

    def __init__(self) -> None:
        self._last: ULID | None = None

    def __call__(self) -> str:
        candidate = ULID()
        last = self._last
        if last is not None and int(candidate) <= int(last):
            candidate = ULID.from_int(int(last) + 1)
            logger.debug("Clock did not advance; bumped id to %s", candidate)
        self._last = candidate
        return str(candidate)
