"""Deadline precondition for state-changing router operations."""

from __future__ import annotations

from collections.abc import Callable

import structlog

from amm_router.errors import Expired

logger = structlog.get_logger()


def ensure_not_expired(deadline: int, clock: Callable[[], int]) -> None:
    """Reject the operation if ``clock()`` is past ``deadline``.

    Called first in every guarded operation, before any collaborator is
    touched. An operation is still valid at exactly ``deadline``.

    Raises:
        Expired: If the deadline has passed
    """
    now = clock()
    if now > deadline:
        logger.warning("operation_expired", deadline=deadline, now=now)
        raise Expired(f"Deadline {deadline} passed (now {now})")
