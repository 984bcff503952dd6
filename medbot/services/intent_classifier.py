"""Intent classification as an ordered rule cascade.

Flow for one message:
- Pagination guard: while a list is open, only digits and navigation words
  get past it.
- Rules, top to bottom; the first whose predicate matches handles the message.
  Order matters: doctor phrases must be tried before product phrases so
  "find a doctor" never becomes a product search.
- Keyword fallback (fuzzy vocabulary hits, then broad regexes).
- `unknown`.

`classify` never raises: any fault becomes an `error` result and is logged.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, Optional, Tuple

from medbot.config.settings import (
    ERROR_TEXT,
    FEATURE_COMMANDS,
    GREETING_KEYWORDS,
    GREETING_THRESHOLD,
    HELP_KEYWORDS,
    HELP_MESSAGE,
    HELP_THRESHOLD,
    INVALID_MESSAGE_TEXT,
    LOGOUT_KEYWORDS,
    LOGOUT_THRESHOLD,
    UNKNOWN_TEXT,
)
from medbot.services import entity_extractors as ex
from medbot.services.keywords import extract_keywords
from medbot.services.order_parser import parse_order_id_from_text
from medbot.services.pagination_guard import DIGITS, check_pagination
from medbot.services.response import IntentResult, compose
from medbot.services.session import SessionView
from medbot.services.similarity import is_fuzzy_match

logger = logging.getLogger(__name__)

_DOCTOR_WORDS = re.compile(
    r"\b(doctor|physician|specialist|cardiologist|pediatrician|dermatologist|gynecologist|neurologist|orthopedic)\b"
)
_DOCTOR_SEARCH = re.compile(r"^(find|search|need|look for|consult).*?(doctor|physician|specialist)")
_PRODUCT_WORDS = re.compile(
    r"\b(medicine|drug|medication|pill|tablet|paracetamol|aspirin|ibuprofen|amoxicillin|insulin|antibiotic|vaccine|panadol)\b"
)
_PRODUCT_SEARCH = re.compile(r"^(search|find|show|look|give|send).*?(medicine|drug|product|medication|pill|tablet)")
_DOCTOR_MENTION = re.compile(r"\b(doctor|physician|specialist|cardiologist|pediatrician|dermatologist)\b")
_ADD_TO_CART = (
    re.compile(r"^(add|put|move).*?(cart|basket)"),
    re.compile(r"^(add)\s+([\w\s]+?)(?:\s+(?:qty|quantity))?\s*(\d+)?$"),
    re.compile(r"^(add)\s+\d+(?:\s+\d+)?$"),
)
_PLACE_ORDER = re.compile(r"^(order|checkout|place order|buy|purchase|proceed to|complete|confirm order)")
_TRACK_ORDER = re.compile(r"^(track|where is|status of|check|trace|update on).*?(order|delivery|package)")
_BOOK_APPOINTMENT = re.compile(r"^(book|schedule|make|arrange|reserve).*?(appointment|consultation|visit)")
_PAYMENT = re.compile(r"^(pay|payment|process payment|pay for|settle)")
_VIEW_CART = re.compile(r"^(cart|view cart|show cart|my cart)$")
_SUPPORT = re.compile(
    r"^(support|agent|help me|speak to|chat with|contact|complaint|issue|problem|help|talk to agent)"
)
_DIAGNOSTIC = re.compile(
    r"^(diagnostic|screening|check up|blood test|lab test|medical test|covid test|malaria test|typhoid test|thyroid test)"
)
_HEALTHCARE = re.compile(r"^(healthcare|health care|health products|browse products|equipment|devices|supplies)")
_PASSWORD_RESET = re.compile(r"^(forgot|reset|change).*password")
_PRESCRIPTION = re.compile(r"^(upload|prescription|script|rx|medicine prescription)")

# Tried after the vocabulary fallback, in the same category order
_BROAD_FALLBACK = (
    ("search_doctors", re.compile(r"doctor|physician|clinic|medical|health professional")),
    ("search_products", re.compile(r"medicine|drug|pharmacy|health|medicinal")),
    ("book_appointment", re.compile(r"appointment|consultation|visit|schedule")),
    ("place_order", re.compile(r"order|purchase|buy|checkout|cart")),
    ("track_order", re.compile(r"deliver|shipping|progress|arrive|when|where")),
)

Handler = Callable[[str, str], IntentResult]


@dataclass(frozen=True)
class Rule:
    """One cascade step: `matches` sees the lower-cased text, `handle` gets (original, lowered)."""

    name: str
    matches: Callable[[str], bool]
    handle: Handler


def _fixed(intent: str, text: Optional[str] = None) -> Handler:
    return lambda message, lowered: compose(intent, {}, text)


def _is_digit_command(lowered: str) -> bool:
    return bool(DIGITS.fullmatch(lowered)) and lowered in FEATURE_COMMANDS


class IntentClassifier:
    """Rule-cascade classifier for chat messages.

    The order-ID parser is a collaborator; pass your own to change how
    order references are recognised.
    """

    def __init__(self, order_id_parser: Callable[[str], Optional[str]] | None = None) -> None:
        self._parse_order_id = order_id_parser or parse_order_id_from_text
        self.rules: Tuple[Rule, ...] = self._build_rules()

    def _build_rules(self) -> Tuple[Rule, ...]:
        return (
            # Menu digits 1-8 stop here; the rules below never see them
            Rule("numeric_command", _is_digit_command, self._handle_digit_command),
            Rule("help", lambda t: is_fuzzy_match(t, HELP_KEYWORDS, HELP_THRESHOLD), _fixed("help", HELP_MESSAGE)),
            Rule("logout", lambda t: is_fuzzy_match(t, LOGOUT_KEYWORDS, LOGOUT_THRESHOLD), _fixed("logout")),
            Rule("greeting", lambda t: is_fuzzy_match(t, GREETING_KEYWORDS, GREETING_THRESHOLD), _fixed("greeting")),
            Rule("register", lambda t: bool(ex.REGISTER_PREFIX.match(t)),
                 lambda m, t: compose("register", ex.extract_registration(m))),
            Rule("login", lambda t: bool(ex.LOGIN_PREFIX.match(t)),
                 lambda m, t: compose("login", ex.extract_login(m))),
            # Must stay ahead of search_products
            Rule("search_doctors", self._is_doctor_search,
                 lambda m, t: compose("search_doctors", ex.extract_doctor_search(m))),
            Rule("search_products", self._is_product_search,
                 lambda m, t: compose("search_products", ex.extract_product_search(m))),
            Rule("add_to_cart", lambda t: any(p.search(t) for p in _ADD_TO_CART),
                 lambda m, t: compose("add_to_cart", ex.extract_add_to_cart(m))),
            Rule("place_order", lambda t: bool(_PLACE_ORDER.match(t)),
                 lambda m, t: compose("place_order", ex.extract_place_order(m))),
            Rule("track_order", lambda t: bool(_TRACK_ORDER.match(t)),
                 lambda m, t: compose("track_order", ex.extract_track_order(m, self._parse_order_id))),
            Rule("book_appointment", lambda t: bool(_BOOK_APPOINTMENT.match(t)),
                 lambda m, t: compose("book_appointment", ex.extract_appointment(m))),
            Rule("payment", lambda t: bool(_PAYMENT.match(t)),
                 lambda m, t: compose("payment", ex.extract_payment(m, self._parse_order_id))),
            Rule("view_cart", lambda t: bool(_VIEW_CART.match(t)), _fixed("view_cart", "Showing your cart...")),
            Rule("support", lambda t: bool(_SUPPORT.match(t)),
                 _fixed("support", "Connecting you to our support team...")),
            Rule("diagnostic_tests", lambda t: bool(_DIAGNOSTIC.match(t)),
                 lambda m, t: compose("diagnostic_tests", ex.extract_diagnostic_test(m))),
            Rule("healthcare_products", lambda t: bool(_HEALTHCARE.match(t)) or t == "browse health products",
                 lambda m, t: compose("healthcare_products", ex.extract_healthcare_category(m))),
            Rule("password_reset", lambda t: bool(_PASSWORD_RESET.match(t)), self._handle_password_reset),
            Rule("prescription_upload", lambda t: bool(_PRESCRIPTION.match(t)),
                 _fixed("prescription_upload")),
        )

    # Public API ---------------------------------------------------------
    def classify(self, message: Any, sender_id: str = "", session: Any = None) -> IntentResult:
        """Classify one message against a snapshot of the sender's session."""
        if not message or not isinstance(message, str) or not message.strip():
            return compose("unknown", {}, INVALID_MESSAGE_TEXT)
        try:
            result = self._classify(message, SessionView.of(session))
        except Exception:
            logger.exception("Intent classification failed for sender=%s", sender_id)
            return compose("error", {}, ERROR_TEXT)
        logger.debug("sender=%s intent=%s source=%s", sender_id, result.intent, result.source)
        return result

    # Cascade ------------------------------------------------------------
    def _classify(self, message: str, session: SessionView) -> IntentResult:
        lowered = message.lower().strip()

        guarded = check_pagination(lowered, session)
        if guarded is not None:
            return guarded

        for rule in self.rules:
            if rule.matches(lowered):
                return rule.handle(message, lowered)

        fallback = self._keyword_fallback(lowered)
        if fallback is not None:
            return fallback
        return compose("unknown", {}, UNKNOWN_TEXT)

    def _keyword_fallback(self, lowered: str) -> Optional[IntentResult]:
        hits = extract_keywords(lowered)
        if hits.doctors:
            return compose("search_doctors")
        if hits.products:
            product = " ".join(word for word in lowered.split() if word in hits.products)
            return compose("search_products", {"product": product})
        if hits.appointments:
            return compose("book_appointment")
        if hits.orders:
            return compose("place_order")
        if hits.tracking:
            return compose("track_order", {"orderId": self._parse_order_id(lowered) or ""})

        for intent, pattern in _BROAD_FALLBACK:
            if pattern.search(lowered):
                return compose(intent)
        return None

    # Predicates and handlers -------------------------------------------
    @staticmethod
    def _is_doctor_search(lowered: str) -> bool:
        return bool(_DOCTOR_WORDS.search(lowered) or _DOCTOR_SEARCH.match(lowered))

    @staticmethod
    def _is_product_search(lowered: str) -> bool:
        if _PRODUCT_WORDS.search(lowered):
            return True
        return bool(_PRODUCT_SEARCH.match(lowered)) and not _DOCTOR_MENTION.search(lowered)

    @staticmethod
    def _handle_digit_command(message: str, lowered: str) -> IntentResult:
        return compose(FEATURE_COMMANDS[lowered].intent, {}, None, source="numeric")

    @staticmethod
    def _handle_password_reset(message: str, lowered: str) -> IntentResult:
        params = ex.extract_password_reset(lowered)
        if params.get("email"):
            text = f"Understood. Sending a password reset link to {params['email']}..."
        else:
            text = "I can help with that. What's the email address for your account?"
        return compose("password_reset", params, text)


_default_classifier = IntentClassifier()


def classify(message: Any, sender_id: str = "", session: Any = None) -> IntentResult:
    """Convenience function using the shared default classifier."""
    return _default_classifier.classify(message, sender_id, session)


__all__ = ["IntentClassifier", "Rule", "classify"]
