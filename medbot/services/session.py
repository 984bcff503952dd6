"""Read-only view of a caller-owned chat session.

The dialogue manager owns and mutates session data; the intent engine only
ever sees a frozen snapshot of it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, List, Mapping, Optional

from medbot.config.settings import PAGINATION_MARKERS


@dataclass(frozen=True)
class PaginationMarkers:
    """Pagination markers; any truthy value means that list is being paged."""

    doctor_specialty: Any = None
    doctor: Any = None
    product: Any = None
    cart: Any = None

    @classmethod
    def from_data(cls, data: Optional[Mapping[str, Any]]) -> "PaginationMarkers":
        data = data or {}
        return cls(
            doctor_specialty=data.get("doctorSpecialtyPagination"),
            doctor=data.get("doctorPagination"),
            product=data.get("productPagination"),
            cart=data.get("cartPagination"),
        )

    def active(self) -> List[str]:
        """Wire keys of the markers that are currently set."""
        values = (self.doctor_specialty, self.doctor, self.product, self.cart)
        return [key for key, value in zip(PAGINATION_MARKERS, values) if value]

    def any_active(self) -> bool:
        return bool(self.active())


@dataclass(frozen=True)
class SessionView:
    data: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def of(cls, session: Any) -> "SessionView":
        """Snapshot a session given as a SessionView, an object with `.data`, a mapping, or None."""
        if isinstance(session, SessionView):
            return session
        data = getattr(session, "data", session)
        if not isinstance(data, Mapping):
            data = {}
        elif isinstance(data.get("data"), Mapping):
            # Plain dict shaped like a session: {"data": {...}}
            data = data["data"]
        return cls(data=MappingProxyType(dict(data)))

    @property
    def pagination(self) -> PaginationMarkers:
        return PaginationMarkers.from_data(self.data)


__all__ = ["PaginationMarkers", "SessionView"]
