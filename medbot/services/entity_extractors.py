"""Per-intent parameter extraction from raw chat text.

Every extractor is total: when a value can't be found its key is left out.
Names and passwords are taken from the original text so their case survives.
"""

from __future__ import annotations

import re
from typing import Callable, List, Optional, Sequence

from medbot.config.settings import (
    DIAGNOSTIC_TESTS,
    DOCTOR_SPECIALTIES,
    HEALTHCARE_CATEGORIES,
)
from medbot.services.response import (
    AppointmentParams,
    AuthParams,
    CartParams,
    DiagnosticParams,
    DoctorSearchParams,
    HealthcareProductParams,
    OrderParams,
    PasswordResetParams,
    PaymentParams,
    ProductSearchParams,
    TrackOrderParams,
)

OrderIdParser = Callable[[str], Optional[str]]

EMAIL = re.compile(r"[\w.-]+@[\w.-]+\.\w+")

REGISTER_PREFIX = re.compile(r"^(register|signup|sign up|create account|new account)", re.IGNORECASE)
LOGIN_PREFIX = re.compile(r"^(login|signin|sign in|log in|authenticate)", re.IGNORECASE)

SEARCH_PHRASES = ("search", "find", "show", "look for", "do you have", "give me", "send me")
PRODUCT_TYPE_WORDS = ("medicine", "drug", "product", "medication", "pill", "tablet")
_LEADING_ARTICLE = re.compile(r"^(for|a|an|the)\s+", re.IGNORECASE)

_ADD_NAME_QTY = re.compile(r"add\s+(.+?)(?:\s+quantity|\s+qty)?\s+(\d+)", re.IGNORECASE)
_ADD_INDEX_QTY = re.compile(r"add\s+(\d+)\s+(\d+)")
_ADD_INDEX = re.compile(r"add\s+(\d+)")

_ADDRESS_AFTER_PREP = re.compile(r"\b(?:at|to|address|location)\b:?\s*([^,]+)", re.IGNORECASE)
_ADDRESS = re.compile(r"[^,]+")

_LOCATION = re.compile(r"\bin\s+([a-z\s]+?)(?:\s+on|\s+at|$)", re.IGNORECASE)

_NUMBER = re.compile(r"\d+")
_DATE = re.compile(r"(\d{4}-\d{2}-\d{2}|\d{1,2}/\d{1,2}/\d{4})")
_TIME = re.compile(r"(\d{1,2}):(\d{2})\s*(am|pm)?", re.IGNORECASE)


def extract_email(text: str) -> Optional[str]:
    m = EMAIL.search(text)
    return m.group(0) if m else None


def _split_after_prefix(message: str, prefix: re.Pattern) -> List[str]:
    rest = prefix.sub("", message.strip(), count=1).strip()
    return rest.split()


def extract_registration(message: str) -> AuthParams:
    """`register <name...> <email> <password...>`: name before the email, password after."""
    params: AuthParams = {}
    email = extract_email(message)
    if email:
        params["email"] = email

    parts = _split_after_prefix(message, REGISTER_PREFIX)
    email_index = next((i for i, part in enumerate(parts) if "@" in part), -1)
    if email_index > 0:
        params["name"] = " ".join(parts[:email_index])
    if email_index != -1:
        params["email"] = parts[email_index]
        if email_index + 1 < len(parts):
            params["password"] = " ".join(parts[email_index + 1:])
    return params


def extract_login(message: str) -> AuthParams:
    params: AuthParams = {}
    email = extract_email(message)
    if email:
        params["email"] = email

    parts = _split_after_prefix(message, LOGIN_PREFIX)
    for i, part in enumerate(parts):
        if "@" in part:
            params["email"] = part
            if i + 1 < len(parts):
                params["password"] = " ".join(parts[i + 1:])
            break
    return params


def extract_product_search(message: str) -> ProductSearchParams:
    """Best-effort product name: drop the search phrase, articles and generic product words."""
    params: ProductSearchParams = {}
    lowered = message.lower()
    product_name = message

    for phrase in SEARCH_PHRASES:
        index = lowered.find(phrase)
        if index != -1:
            product_name = message[index + len(phrase):].strip()
            break

    product_name = _LEADING_ARTICLE.sub("", product_name, count=1).strip()
    for word in PRODUCT_TYPE_WORDS:
        product_name = re.sub(rf"\b{word}\b", "", product_name, count=1, flags=re.IGNORECASE).strip()

    if product_name:
        params["product"] = product_name
    return params


def extract_add_to_cart(message: str) -> CartParams:
    """Try name+quantity, then index+quantity, then index alone (quantity 1)."""
    params: CartParams = {}
    lowered = message.lower()

    m = _ADD_NAME_QTY.search(lowered)
    if m and not m.group(1).strip().isdigit():
        params["productName"] = m.group(1).strip()
        params["quantity"] = m.group(2)
        return params

    m = _ADD_INDEX_QTY.search(lowered)
    if m:
        params["productIndex"] = m.group(1)
        params["quantity"] = m.group(2)
        return params

    m = _ADD_INDEX.search(lowered)
    if m:
        params["productIndex"] = m.group(1)
        params["quantity"] = "1"
    return params


def extract_payment_method(message: str) -> Optional[str]:
    lowered = message.lower()
    if "flutterwave" in lowered:
        return "Flutterwave"
    if "paystack" in lowered:
        return "Paystack"
    if "cash" in lowered:
        return "Cash on Delivery"
    return None


def extract_place_order(message: str) -> OrderParams:
    params: OrderParams = {}
    m = _ADDRESS_AFTER_PREP.search(message) or _ADDRESS.search(message)
    if m:
        address = (m.group(1) if m.groups() else m.group(0)).strip()
        if address:
            params["address"] = address

    method = extract_payment_method(message)
    if method:
        params["paymentMethod"] = method
    return params


def extract_track_order(message: str, parse_order_id: OrderIdParser) -> TrackOrderParams:
    params: TrackOrderParams = {}
    order_id = parse_order_id(message)
    if order_id:
        params["orderId"] = order_id
    return params


def extract_payment(message: str, parse_order_id: OrderIdParser) -> PaymentParams:
    params: PaymentParams = {}
    order_id = parse_order_id(message)
    if order_id:
        params["orderId"] = order_id
    # Cash is a delivery option, not a gateway
    method = extract_payment_method(message)
    if method in ("Flutterwave", "Paystack"):
        params["provider"] = method
    return params


def _first_contained(lowered: str, vocabulary: Sequence[str]) -> Optional[str]:
    return next((term for term in vocabulary if term in lowered), None)


def extract_doctor_search(message: str) -> DoctorSearchParams:
    params: DoctorSearchParams = {}
    lowered = message.lower()

    specialty = _first_contained(lowered, DOCTOR_SPECIALTIES)
    if specialty:
        params["specialty"] = specialty

    m = _LOCATION.search(lowered)
    if m and m.group(1).strip():
        params["location"] = m.group(1).strip()
    return params


def extract_appointment(message: str) -> AppointmentParams:
    """First number is the doctor's list index; dates as YYYY-MM-DD or M/D/YYYY; times as HH:MM[am|pm]."""
    params: AppointmentParams = {}

    m = _NUMBER.search(message)
    if m:
        params["doctorIndex"] = m.group(0)

    m = _DATE.search(message)
    if m:
        params["date"] = m.group(1)

    m = _TIME.search(message)
    if m:
        params["time"] = m.group(0).strip()
    return params


def extract_diagnostic_test(message: str) -> DiagnosticParams:
    params: DiagnosticParams = {}
    test = _first_contained(message.lower(), DIAGNOSTIC_TESTS)
    if test:
        params["testType"] = test
    return params


def extract_healthcare_category(message: str) -> HealthcareProductParams:
    params: HealthcareProductParams = {}
    category = _first_contained(message.lower(), HEALTHCARE_CATEGORIES)
    if category:
        params["category"] = category
    return params


def extract_password_reset(message: str) -> PasswordResetParams:
    params: PasswordResetParams = {}
    email = extract_email(message.lower())
    if email:
        params["email"] = email
    return params


__all__ = [
    "EMAIL",
    "LOGIN_PREFIX",
    "OrderIdParser",
    "REGISTER_PREFIX",
    "extract_add_to_cart",
    "extract_appointment",
    "extract_diagnostic_test",
    "extract_doctor_search",
    "extract_email",
    "extract_healthcare_category",
    "extract_login",
    "extract_password_reset",
    "extract_payment",
    "extract_payment_method",
    "extract_place_order",
    "extract_product_search",
    "extract_registration",
    "extract_track_order",
]
