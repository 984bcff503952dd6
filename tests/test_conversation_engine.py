"""Unit tests for the dialogue manager: auth gating, list replies and cart."""

from __future__ import annotations

from medbot.services.conversation_engine import (
    Catalog,
    ConversationRegistry,
    ConversationSession,
)


def _run_steps(session: ConversationSession, user_inputs: list[str]):
    return [session.step(text) for text in user_inputs]


class TestAuthGate:
    def test_protected_intent_needs_login(self, catalog: Catalog) -> None:
        session = ConversationSession("u1", catalog=catalog)
        turn = session.step("find paracetamol")
        assert "Authentication Required" in turn.text
        assert turn.active_markers == []

    def test_login_and_logout(self, logged_in_session: ConversationSession) -> None:
        turn = logged_in_session.step("logout")
        assert not logged_in_session.logged_in
        assert turn.intent_result.intent == "logout"

    def test_footer_follows_login_state(self, logged_in_session: ConversationSession) -> None:
        assert logged_in_session.step("help").text.endswith('"logout" to sign out')


class TestProductList:
    def test_search_then_select(self, logged_in_session: ConversationSession) -> None:
        listed, stray, picked = _run_steps(logged_in_session, ["find paracetamol", "cardiologist", "1"])

        assert listed.active_markers == ["productPagination"]
        assert "Paracetamol 500mg" in listed.text

        # A keyword while the list is open keeps the list
        assert stray.intent_result.intent == "pagination_selection"
        assert stray.active_markers == ["productPagination"]
        assert "Invalid input" in stray.text

        assert picked.active_markers == []
        assert [item.name for item in logged_in_session.cart] == ["Paracetamol 500mg"]

    def test_back_closes_list_and_add_by_index(self, logged_in_session: ConversationSession) -> None:
        _, closed, added = _run_steps(logged_in_session, ["find paracetamol", "back", "add 1 2"])
        assert closed.active_markers == []
        assert "closed the list" in closed.text
        assert added.intent_result.intent == "add_to_cart"
        assert logged_in_session.cart[0].quantity == 2

    def test_superscript_digit_keeps_list_open(self, logged_in_session: ConversationSession) -> None:
        _, turn = _run_steps(logged_in_session, ["find paracetamol", "²"])
        assert turn.intent_result.intent == "pagination_selection"
        assert turn.active_markers == ["productPagination"]
        assert "Invalid input" in turn.text

    def test_no_results(self, logged_in_session: ConversationSession) -> None:
        turn = logged_in_session.step("find unobtainium tablet")
        assert "no products found" in turn.text
        assert turn.active_markers == []


class TestDoctorFlow:
    def test_specialty_pages_then_doctor(self, logged_in_session: ConversationSession) -> None:
        first, second, doctors, chosen, booked = _run_steps(
            logged_in_session,
            ["find a doctor", "next", "1", "1", "book appointment 2025-01-31 10:00am"],
        )
        assert first.active_markers == ["doctorSpecialtyPagination"]
        assert "(Page 1/2)" in first.text
        assert "(Page 2/2)" in second.text

        assert doctors.active_markers == ["doctorPagination"]
        assert "Dr. Segun Ajayi" in doctors.text

        assert chosen.active_markers == []
        assert logged_in_session.data["selectedDoctor"]["name"] == "Dr. Segun Ajayi"

        assert booked.intent_result.intent == "book_appointment"
        assert "Dr. Segun Ajayi" in booked.text
        assert "2025-01-31" in booked.text

    def test_confirmed_booking_clears_doctor(self, logged_in_session: ConversationSession) -> None:
        turns = _run_steps(
            logged_in_session,
            ["find a cardiologist", "1", "book appointment 2025-01-31 10:00am", "book appointment 2025-02-01 11:00am"],
        )
        assert "Dr. Adaeze Okafor" in turns[2].text
        assert "selectedDoctor" not in logged_in_session.data
        assert "Appointment request noted" not in turns[3].text
        assert turns[3].active_markers == ["doctorSpecialtyPagination"]

    def test_specialty_search(self, logged_in_session: ConversationSession) -> None:
        turn = logged_in_session.step("find a cardiologist")
        assert turn.active_markers == ["doctorPagination"]
        assert "Dr. Adaeze Okafor" in turn.text
        assert "Dr. Tunde Bakare" in turn.text

    def test_previous_on_first_page(self, logged_in_session: ConversationSession) -> None:
        _, turn = _run_steps(logged_in_session, ["find a doctor", "previous"])
        assert "Already on first page" in turn.text
        assert turn.active_markers == ["doctorSpecialtyPagination"]


class TestCart:
    def test_empty_cart(self, logged_in_session: ConversationSession) -> None:
        assert "Your cart is empty" in logged_in_session.step("cart").text

    def test_cart_list(self, logged_in_session: ConversationSession) -> None:
        _, _, turn = _run_steps(logged_in_session, ["find paracetamol", "1", "cart"])
        assert turn.active_markers == ["cartPagination"]
        assert "Paracetamol 500mg x1" in turn.text


class TestRegistry:
    def test_sessions_are_per_sender(self, catalog: Catalog) -> None:
        registry = ConversationRegistry(catalog=catalog)
        registry.step("a", "login a@example.com pw")
        assert registry.get("a").logged_in
        assert not registry.get("b").logged_in
        assert registry.get("a") is registry.get("a")

    def test_least_recent_session_is_evicted(self, catalog: Catalog) -> None:
        registry = ConversationRegistry(catalog=catalog, max_sessions=2)
        first = registry.get("a")
        second = registry.get("b")
        registry.get("a")
        registry.get("c")
        assert registry.get("a") is first
        assert registry.get("b") is not second

    def test_reset(self, catalog: Catalog) -> None:
        registry = ConversationRegistry(catalog=catalog)
        first = registry.get("a")
        registry.reset("a")
        assert registry.get("a") is not first
