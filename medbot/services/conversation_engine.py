"""Dialogue manager for the chat bot.

Owns the per-user session data the intent engine only reads. After each
classification it decides what to say and which pagination marker to set:

- productPagination         product search results
- doctorSpecialtyPagination specialties, when no specialty was given
- doctorPagination          doctors for a specialty
- cartPagination            cart contents

While a marker is set, digits select from the open list and next/previous
page through it; back/cancel/exit/stop close it.
"""

from __future__ import annotations

import json
import logging
import threading
from collections import OrderedDict
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from medbot.services.intent_classifier import IntentClassifier
from medbot.services.pagination import (
    build_paginated_list_message,
    paginate,
    parse_user_selection,
)
from medbot.services.pagination_guard import is_navigation
from medbot.services.response import IntentResult, format_response_with_options, requires_auth
from medbot.services.session import SessionView

logger = logging.getLogger(__name__)

DATA_PATH = Path(__file__).resolve().parents[2] / "data" / "catalog.json"

_CLOSE_WORDS = ("back", "cancel", "exit", "stop")
_LIST_TITLES = {
    "productPagination": "💊 Medicines",
    "doctorSpecialtyPagination": "🩺 Specialties",
    "doctorPagination": "👨‍⚕️ Doctors",
    "cartPagination": "🛒 Your Cart",
}


@dataclass
class CartItem:
    name: str
    price: int
    quantity: int = 1

    def label(self) -> str:
        return f"{self.name} x{self.quantity} (₦{self.price * self.quantity:,})"


class Catalog:
    """Products and doctors shown in list replies."""

    def __init__(self, products: List[Dict[str, Any]], doctors: List[Dict[str, Any]]) -> None:
        self.products = products
        self.doctors = doctors

    @classmethod
    def load(cls, path: Path | None = None) -> "Catalog":
        with (path or DATA_PATH).open("r", encoding="utf-8") as f:
            data = json.load(f)
        return cls(products=data.get("products", []), doctors=data.get("doctors", []))

    def search_products(self, term: Optional[str]) -> List[Dict[str, Any]]:
        if not term:
            return list(self.products)
        words = term.lower().split()
        return [p for p in self.products if any(w in p["name"].lower() for w in words)]

    def specialties(self) -> List[str]:
        return sorted({d["specialty"] for d in self.doctors})

    def find_doctors(self, specialty: Optional[str] = None, location: Optional[str] = None) -> List[Dict[str, Any]]:
        doctors = self.doctors
        if specialty:
            doctors = [d for d in doctors if d["specialty"] == specialty]
        if location:
            # Location only narrows; an unknown city keeps the specialty list
            nearby = [d for d in doctors if d.get("location") == location]
            doctors = nearby or doctors
        return list(doctors)


@dataclass
class AgentTurn:
    text: str
    intent_result: IntentResult
    active_markers: List[str] = field(default_factory=list)


class ConversationSession:
    """Encapsulates stateful dialog behavior for one sender."""

    def __init__(
        self,
        sender_id: str,
        catalog: Catalog | None = None,
        classifier: IntentClassifier | None = None,
        page_size: int = 5,
    ) -> None:
        self.sender_id = sender_id
        self.data: Dict[str, Any] = {}
        self.logged_in = False
        self.cart: List[CartItem] = []
        self.lock = threading.Lock()
        self._catalog = catalog or Catalog.load()
        self._classifier = classifier or IntentClassifier()
        self._page_size = page_size

    # Public API ---------------------------------------------------------
    def view(self) -> SessionView:
        return SessionView.of(self.data)

    def step(self, user_text: str) -> AgentTurn:
        """Classify the message and advance the dialogue."""
        result = self._classifier.classify(user_text, self.sender_id, self.view())
        marker = self._active_marker()
        lowered = (user_text or "").lower().strip()

        if marker and (result.intent == "pagination_selection" or is_navigation(lowered)):
            return self._handle_list_reply(marker, lowered, result)

        if requires_auth(result.intent) and not self.logged_in:
            text = (
                "🔐 *Authentication Required*\n\n"
                f"To {result.intent.replace('_', ' ')}, you need to be logged in.\n\n"
                '📝 Reply "register" to create an account\n'
                '🔐 Reply "login" to sign in\n'
                '🔑 Reply "reset password" if you forgot your password'
            )
            return self._turn(text, result)

        handler = getattr(self, f"_handle_{result.intent}", None)
        if handler is None:
            return self._turn(result.fulfillment_text or "", result)
        return handler(result)

    # Intent handlers ----------------------------------------------------
    def _handle_register(self, result: IntentResult) -> AgentTurn:
        params = result.parameters
        if not all(params.get(k) for k in ("name", "email", "password")):
            return self._turn(result.fulfillment_text or "", result)
        self.logged_in = True
        return self._turn(f"✅ Welcome, {params['name']}! Your account for {params['email']} is ready.", result)

    def _handle_login(self, result: IntentResult) -> AgentTurn:
        params = result.parameters
        if not (params.get("email") and params.get("password")):
            return self._turn(result.fulfillment_text or "", result)
        self.logged_in = True
        return self._turn(f"✅ Logged in as {params['email']}.", result)

    def _handle_logout(self, result: IntentResult) -> AgentTurn:
        self.logged_in = False
        self._clear_lists()
        return self._turn(result.fulfillment_text or "", result)

    def _handle_search_products(self, result: IntentResult) -> AgentTurn:
        term = result.parameters.get("product")
        products = self._catalog.search_products(term)
        if not products:
            return self._turn(f"Sorry, no products found for \"{term}\". Try another name.", result)
        return self._open_list("productPagination", products, result)

    def _handle_search_doctors(self, result: IntentResult) -> AgentTurn:
        specialty = result.parameters.get("specialty")
        if not specialty:
            return self._open_list("doctorSpecialtyPagination", self._catalog.specialties(), result)
        doctors = self._catalog.find_doctors(specialty, result.parameters.get("location"))
        if not doctors:
            return self._turn(f"Sorry, no {specialty} is available right now.", result)
        return self._open_list("doctorPagination", doctors, result)

    def _handle_book_appointment(self, result: IntentResult) -> AgentTurn:
        params = result.parameters
        doctor = self.data.get("selectedDoctor")
        if doctor and params.get("date") and params.get("time"):
            self.data.pop("selectedDoctor", None)
            text = (
                f"📅 Appointment request noted with {doctor['name']} on {params['date']} at {params['time']}. "
                "You will receive a confirmation shortly."
            )
            return self._turn(text, result)
        if doctor:
            text = f"When would you like to see {doctor['name']}? Example: book appointment 2025-01-31 10:00am"
            return self._turn(text, result)
        return self._handle_search_doctors(result)

    def _handle_add_to_cart(self, result: IntentResult) -> AgentTurn:
        params = result.parameters
        quantity = int(params.get("quantity", "1"))
        product: Optional[Dict[str, Any]] = None
        if params.get("productIndex"):
            shown = self.data.get("lastProducts") or []
            idx = int(params["productIndex"]) - 1
            if 0 <= idx < len(shown):
                product = shown[idx]
        elif params.get("productName"):
            matches = self._catalog.search_products(params["productName"])
            product = matches[0] if matches else None
        if product is None:
            return self._turn(result.fulfillment_text or "", result)
        self._add_to_cart(product, quantity)
        return self._turn(f"🛒 Added {product['name']} x{quantity} to your cart. Type 'cart' to view it.", result)

    def _handle_view_cart(self, result: IntentResult) -> AgentTurn:
        if not self.cart:
            return self._turn("🛒 Your cart is empty. Type 'find <medicine>' to start shopping.", result)
        return self._open_list("cartPagination", list(self.cart), result)

    # List handling ------------------------------------------------------
    def _handle_list_reply(self, marker: str, lowered: str, result: IntentResult) -> AgentTurn:
        state = self.data[marker]
        items = state["items"]
        page = paginate(items, state["page"], self._page_size)
        selection = parse_user_selection(lowered, len(page.items), page.page, page.total_pages)

        if selection.valid and selection.kind == "paginate":
            state["page"] = selection.target_page
            return self._turn(self._render_list(marker), result)
        if selection.valid and selection.kind == "select":
            return self._select(marker, page.items[selection.index], result)
        if any(word in lowered for word in _CLOSE_WORDS):
            self._clear_lists()
            return self._turn("Okay, closed the list. What would you like to do next?", result)

        text = f"{selection.error or 'Please choose an option from the list.'}\n\n{self._render_list(marker)}"
        return self._turn(text, result)

    def _select(self, marker: str, item: Any, result: IntentResult) -> AgentTurn:
        self._clear_lists()
        if marker == "productPagination":
            self._add_to_cart(item, 1)
            return self._turn(f"🛒 Added {item['name']} to your cart. Type 'cart' to view it.", result)
        if marker == "doctorSpecialtyPagination":
            doctors = self._catalog.find_doctors(item)
            return self._open_list("doctorPagination", doctors, result)
        if marker == "doctorPagination":
            self.data["selectedDoctor"] = item
            text = (
                f"You selected {item['name']} ({item['specialty']}). "
                "To book, reply with a date and time, e.g. book appointment 2025-01-31 10:00am"
            )
            return self._turn(text, result)
        return self._turn(f"{item.label()} is in your cart. Type 'checkout' to place your order.", result)

    def _open_list(self, marker: str, items: List[Any], result: IntentResult) -> AgentTurn:
        self._clear_lists()
        self.data[marker] = {"items": items, "page": 1}
        if marker == "productPagination":
            self.data["lastProducts"] = items
        logger.debug("sender=%s opened %s with %d items", self.sender_id, marker, len(items))
        return self._turn(self._render_list(marker), result)

    def _render_list(self, marker: str) -> str:
        state = self.data[marker]
        page = paginate(state["items"], state["page"], self._page_size)
        state["page"] = page.page
        return build_paginated_list_message(
            page.items, page.page, page.total_pages, _LIST_TITLES[marker], self._format_item
        )

    # Helpers -------------------------------------------------------------
    @staticmethod
    def _format_item(item: Any, index: int) -> str:
        if isinstance(item, CartItem):
            return item.label()
        if isinstance(item, dict) and "specialty" in item:
            return f"{item['name']} - {item['specialty']} ({item.get('location', '').title()})"
        if isinstance(item, dict):
            return f"{item['name']} - ₦{item.get('price', 0):,}"
        return str(item).title()

    def _active_marker(self) -> Optional[str]:
        active = self.view().pagination.active()
        return active[0] if active else None

    def _clear_lists(self) -> None:
        for marker in _LIST_TITLES:
            self.data.pop(marker, None)

    def _add_to_cart(self, product: Dict[str, Any], quantity: int) -> None:
        for item in self.cart:
            if item.name == product["name"]:
                item.quantity += quantity
                return
        self.cart.append(CartItem(name=product["name"], price=int(product.get("price", 0)), quantity=quantity))

    def _turn(self, text: str, result: IntentResult) -> AgentTurn:
        return AgentTurn(
            text=format_response_with_options(text, self.logged_in),
            intent_result=result,
            active_markers=self.view().pagination.active(),
        )


class ConversationRegistry:
    """Sessions keyed by sender; `step` runs at most one message per sender at a time.

    Holds at most `max_sessions` senders; the least recently used one is dropped first.
    """

    def __init__(self, catalog: Catalog | None = None, page_size: int = 5, max_sessions: int = 1000) -> None:
        self._catalog = catalog or Catalog.load()
        self._classifier = IntentClassifier()
        self._page_size = page_size
        self._max_sessions = max_sessions
        self._sessions: "OrderedDict[str, ConversationSession]" = OrderedDict()
        self._lock = threading.Lock()

    def get(self, sender_id: str) -> ConversationSession:
        with self._lock:
            session = self._sessions.get(sender_id)
            if session is not None:
                self._sessions.move_to_end(sender_id)
                return session
            session = ConversationSession(
                sender_id, catalog=self._catalog, classifier=self._classifier, page_size=self._page_size
            )
            self._sessions[sender_id] = session
            while len(self._sessions) > self._max_sessions:
                evicted, _ = self._sessions.popitem(last=False)
                logger.info("Evicted idle session for sender=%s", evicted)
            return session

    def step(self, sender_id: str, user_text: str) -> AgentTurn:
        session = self.get(sender_id)
        with session.lock:
            return session.step(user_text)

    def reset(self, sender_id: str) -> None:
        with self._lock:
            self._sessions.pop(sender_id, None)


__all__ = [
    "AgentTurn",
    "CartItem",
    "Catalog",
    "ConversationRegistry",
    "ConversationSession",
]
