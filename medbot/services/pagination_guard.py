"""Suppress intent routing while the user is picking from a paginated list.

While any pagination marker is set, only digits (a list index) and navigation
words (next, back, cancel, ...) are allowed through. Everything else becomes a
`pagination_selection` so a stray keyword can't yank the user out of the list.
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from medbot.config.settings import NAVIGATION_KEYWORDS
from medbot.services.response import IntentResult, compose
from medbot.services.session import SessionView

logger = logging.getLogger(__name__)

DIGITS = re.compile(r"[0-9]+")


def is_navigation(lowered: str) -> bool:
    return any(kw in lowered for kw in NAVIGATION_KEYWORDS)


def check_pagination(lowered: str, session: SessionView) -> Optional[IntentResult]:
    """Return a pagination_selection result, or None to let the cascade run."""
    active = session.pagination.active()
    if not active:
        return None

    if DIGITS.fullmatch(lowered):
        logger.debug("Numeric input with open list (%s); deferring to dialogue manager", ", ".join(active))
        return compose("pagination_selection", source="numeric-context")

    if is_navigation(lowered):
        return None

    logger.info("User in pagination context (%s); ignoring intent", ", ".join(active))
    return compose("pagination_selection", source="pagination-context")


__all__ = ["DIGITS", "check_pagination", "is_navigation"]
