"""Unit tests for per-intent entity extraction."""

from __future__ import annotations

from medbot.services import entity_extractors as ex
from medbot.services.order_parser import parse_order_id_from_text


class TestAuth:
    def test_registration_keeps_case(self) -> None:
        params = ex.extract_registration("Register Ada Lovelace ada@example.com MyPass")
        assert params == {"name": "Ada Lovelace", "email": "ada@example.com", "password": "MyPass"}

    def test_registration_without_password(self) -> None:
        assert ex.extract_registration("register Ada ada@x.io") == {"name": "Ada", "email": "ada@x.io"}

    def test_login_without_details(self) -> None:
        assert ex.extract_login("login") == {}

    def test_email(self) -> None:
        assert ex.extract_email("contact a.b-c@mail.co.uk now") == "a.b-c@mail.co.uk"
        assert ex.extract_email("no address here") is None

    def test_password_reset_lowercases_email(self) -> None:
        assert ex.extract_password_reset("reset password ADA@X.IO") == {"email": "ada@x.io"}


class TestShopping:
    def test_product_search_strips_filler(self) -> None:
        assert ex.extract_product_search("Do you have the Panadol tablet") == {"product": "Panadol"}

    def test_product_search_generic_word_only(self) -> None:
        assert ex.extract_product_search("medicine") == {}

    def test_add_by_name(self) -> None:
        assert ex.extract_add_to_cart("add paracetamol qty 3") == {"productName": "paracetamol", "quantity": "3"}

    def test_add_by_index_and_quantity(self) -> None:
        assert ex.extract_add_to_cart("add 2 5") == {"productIndex": "2", "quantity": "5"}

    def test_add_by_index(self) -> None:
        assert ex.extract_add_to_cart("add 2") == {"productIndex": "2", "quantity": "1"}

    def test_add_without_target(self) -> None:
        assert ex.extract_add_to_cart("add to cart") == {}

    def test_place_order_with_preposition(self) -> None:
        params = ex.extract_place_order("deliver to 5 Broad Street, Lagos, pay with flutterwave")
        assert params == {"address": "5 Broad Street", "paymentMethod": "Flutterwave"}

    def test_place_order_bare_address(self) -> None:
        assert ex.extract_place_order("15 Awolowo Road, Ikoyi") == {"address": "15 Awolowo Road"}

    def test_payment_method(self) -> None:
        assert ex.extract_payment_method("I'll pay CASH") == "Cash on Delivery"
        assert ex.extract_payment_method("card") is None

    def test_payment_ignores_cash_provider(self) -> None:
        assert ex.extract_payment("pay 12345 cash", parse_order_id_from_text) == {"orderId": "12345"}

    def test_track_order_without_id(self) -> None:
        assert ex.extract_track_order("where is it", lambda text: None) == {}


class TestHealth:
    def test_doctor_search_location(self) -> None:
        params = ex.extract_doctor_search("pediatrician in port harcourt on monday")
        assert params == {"specialty": "pediatrician", "location": "port harcourt"}

    def test_doctor_search_nothing(self) -> None:
        assert ex.extract_doctor_search("find a doctor") == {}

    def test_appointment(self) -> None:
        params = ex.extract_appointment("book 3 on 12/05/2025 at 9:15 pm")
        assert params == {"doctorIndex": "3", "date": "12/05/2025", "time": "9:15 pm"}

    def test_diagnostic(self) -> None:
        assert ex.extract_diagnostic_test("I want a Malaria Test") == {"testType": "malaria test"}

    def test_healthcare_category(self) -> None:
        assert ex.extract_healthcare_category("first aid kit") == {"category": "first aid"}
