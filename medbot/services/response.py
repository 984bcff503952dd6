"""Intent results and the composer every classification path returns through."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, TypedDict, Union

from medbot.config.settings import (
    DEFAULT_CONFIDENCE,
    DEFAULT_FULFILLMENT,
    DEFAULT_SOURCE,
    PUBLIC_INTENTS,
)

# Per-intent parameter shapes. Keys are the wire names callers already rely on.


class AuthParams(TypedDict, total=False):
    name: str
    email: str
    password: str


class ProductSearchParams(TypedDict, total=False):
    product: str


class CartParams(TypedDict, total=False):
    productName: str
    productIndex: str
    quantity: str


class OrderParams(TypedDict, total=False):
    address: str
    paymentMethod: str


class TrackOrderParams(TypedDict, total=False):
    orderId: str


class PaymentParams(TypedDict, total=False):
    orderId: str
    provider: str


class DoctorSearchParams(TypedDict, total=False):
    specialty: str
    location: str


class AppointmentParams(TypedDict, total=False):
    doctorIndex: str
    date: str
    time: str


class DiagnosticParams(TypedDict, total=False):
    testType: str


class HealthcareProductParams(TypedDict, total=False):
    category: str


class PasswordResetParams(TypedDict, total=False):
    email: str


IntentParameters = Union[
    AuthParams,
    ProductSearchParams,
    CartParams,
    OrderParams,
    TrackOrderParams,
    PaymentParams,
    DoctorSearchParams,
    AppointmentParams,
    DiagnosticParams,
    HealthcareProductParams,
    PasswordResetParams,
]

# No default text: the dialogue manager answers these itself
_CALLER_COMPOSED = frozenset({"pagination_selection"})


@dataclass(frozen=True)
class IntentResult:
    intent: str
    parameters: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    fulfillment_text: Optional[str] = None
    confidence: float = DEFAULT_CONFIDENCE
    source: str = DEFAULT_SOURCE

    def to_dict(self) -> Dict[str, Any]:
        """Wire shape used by webhook callers."""
        return {
            "intent": self.intent,
            "parameters": dict(self.parameters),
            "fulfillmentText": self.fulfillment_text,
            "confidence": self.confidence,
            "source": self.source,
        }


def compose(
    intent: str,
    parameters: Optional[Mapping[str, str]] = None,
    fulfillment_text: Optional[str] = None,
    source: str = DEFAULT_SOURCE,
) -> IntentResult:
    """Build an IntentResult, filling in the intent's default reply when none is given."""
    if not fulfillment_text and intent not in _CALLER_COMPOSED:
        fulfillment_text = DEFAULT_FULFILLMENT.get(intent) or DEFAULT_FULFILLMENT["unknown"]
    params = {k: v for k, v in (parameters or {}).items() if v}
    return IntentResult(
        intent=intent,
        parameters=MappingProxyType(params),
        fulfillment_text=fulfillment_text or None,
        confidence=DEFAULT_CONFIDENCE,
        source=source,
    )


def requires_auth(intent: str) -> bool:
    return intent not in PUBLIC_INTENTS


def format_response_with_options(message: str, logged_in: bool) -> str:
    """Append the options footer shown under every bot reply."""
    if logged_in:
        options = '📋 *Options:* Type "help" for menu | "logout" to sign out'
    else:
        options = '📋 *Options:* Type "help" for menu | "login" to sign in | "register" to create account'
    return f"{message}\n\n---\n{options}"


__all__ = [
    "AppointmentParams",
    "AuthParams",
    "CartParams",
    "DiagnosticParams",
    "DoctorSearchParams",
    "HealthcareProductParams",
    "IntentParameters",
    "IntentResult",
    "OrderParams",
    "PasswordResetParams",
    "PaymentParams",
    "ProductSearchParams",
    "TrackOrderParams",
    "compose",
    "format_response_with_options",
    "requires_auth",
]
