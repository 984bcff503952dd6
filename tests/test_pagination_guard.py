"""Unit tests for the pagination guard."""

from __future__ import annotations

import pytest

from medbot.services.pagination_guard import check_pagination, is_navigation
from medbot.services.session import SessionView


def _view(**data) -> SessionView:
    return SessionView.of(data)


class TestCheckPagination:
    def test_no_markers(self) -> None:
        assert check_pagination("3", _view()) is None

    @pytest.mark.parametrize("value", [False, None, {}, 0, ""])
    def test_falsy_marker_is_inactive(self, value) -> None:
        assert check_pagination("cardiologist", _view(productPagination=value)) is None

    def test_digits(self) -> None:
        r = check_pagination("12", _view(doctorPagination=True))
        assert r.intent == "pagination_selection"
        assert r.source == "numeric-context"
        assert r.fulfillment_text is None

    def test_other_text_is_suppressed(self) -> None:
        r = check_pagination("cardiologist", _view(productPagination=True))
        assert r.intent == "pagination_selection"
        assert r.source == "pagination-context"

    @pytest.mark.parametrize("text", ["next", "previous page", "back", "cancel", "stop please"])
    def test_navigation_passes(self, text) -> None:
        assert check_pagination(text, _view(cartPagination={"page": 2})) is None


class TestMarkers:
    def test_active_order(self) -> None:
        view = _view(cartPagination=True, doctorSpecialtyPagination=True)
        assert view.pagination.active() == ["doctorSpecialtyPagination", "cartPagination"]
        assert view.pagination.any_active()

    def test_view_is_read_only(self) -> None:
        view = _view(productPagination=True)
        with pytest.raises(TypeError):
            view.data["productPagination"] = False


def test_is_navigation_substring() -> None:
    assert is_navigation("go back")
    assert not is_navigation("paracetamol")
