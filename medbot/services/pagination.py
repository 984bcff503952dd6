"""Pagination helpers for numbered list replies (products, doctors, cart)."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Sequence

ItemFormatter = Callable[[Any, int], str]

# ASCII only: str.isdigit() accepts "²", which int() rejects
_DIGITS = re.compile(r"[0-9]+")


def _default_formatter(item: Any, index: int) -> str:
    if isinstance(item, dict):
        return str(item.get("name", item))
    return str(getattr(item, "name", item))


@dataclass
class Page:
    items: List[Any]
    page: int
    total_pages: int

    @property
    def can_go_previous(self) -> bool:
        return self.page > 1

    @property
    def can_go_next(self) -> bool:
        return self.page < self.total_pages


@dataclass
class Selection:
    """Parsed reply to a numbered list.

    kind is "paginate" (next/previous), "select" (1-based number) or "unknown".
    """

    valid: bool
    kind: Optional[str] = None
    direction: Optional[str] = None
    target_page: Optional[int] = None
    index: Optional[int] = None  # 0-based
    error: Optional[str] = None


def paginate(items: Sequence[Any], page: int, page_size: int) -> Page:
    total_pages = max(1, math.ceil(len(items) / page_size))
    page = min(max(1, page), total_pages)
    start = (page - 1) * page_size
    return Page(items=list(items[start:start + page_size]), page=page, total_pages=total_pages)


def parse_user_selection(user_input: str, max_options: int, current_page: int, total_pages: int) -> Selection:
    if not user_input or not isinstance(user_input, str):
        return Selection(valid=False)

    text = user_input.strip().lower()
    if text in ("next", "n"):
        if current_page < total_pages:
            return Selection(valid=True, kind="paginate", direction="next", target_page=current_page + 1)
        return Selection(valid=False, kind="paginate", direction="next", error="Already on last page")

    if text in ("previous", "prev", "p"):
        if current_page > 1:
            return Selection(valid=True, kind="paginate", direction="previous", target_page=current_page - 1)
        return Selection(valid=False, kind="paginate", direction="previous", error="Already on first page")

    if _DIGITS.fullmatch(text):
        number = int(text)
        if 1 <= number <= max_options:
            return Selection(valid=True, kind="select", index=number - 1)
        return Selection(valid=False, kind="select", error=f"Invalid selection. Choose 1-{max_options}")

    return Selection(valid=False, kind="unknown", error='Invalid input. Type a number, "next", or "previous"')


def build_paginated_list_message(
    items: Sequence[Any],
    page: int,
    total_pages: int,
    title: str = "",
    formatter: ItemFormatter = _default_formatter,
) -> str:
    if not items:
        return f'No items to display for "{title}"'

    lines = [f"{title} (Page {page}/{total_pages})", ""]
    for index, item in enumerate(items):
        lines.append(f"{index + 1}. {formatter(item, index)}")
        lines.append("")

    lines.append("📍 *Navigation:*")
    if page > 1:
        lines.append(f'• Type "Previous" to go to page {page - 1}')
    if page < total_pages:
        lines.append(f'• Type "Next" to go to page {page + 1}')
    lines.append(f"• Type a number (1-{len(items)}) to select an item")
    return "\n".join(lines)


__all__ = ["Page", "Selection", "build_paginated_list_message", "paginate", "parse_user_selection"]
