"""Pydantic settings and app constants."""
from types import MappingProxyType
from typing import NamedTuple

from pydantic import BaseModel, Field


class FeatureCommand(NamedTuple):
    intent: str
    label: str


# Menu shortcuts: reply with a single digit to jump to a feature
FEATURE_COMMANDS = MappingProxyType({
    "1": FeatureCommand("search_products", "Search Medicines"),
    "2": FeatureCommand("search_doctors", "Find Doctors"),
    "3": FeatureCommand("track_order", "Track Orders"),
    "4": FeatureCommand("book_appointment", "Book Appointment"),
    "5": FeatureCommand("view_cart", "View Cart"),
    "6": FeatureCommand("support", "Customer Support"),
    "7": FeatureCommand("prescription_upload", "Upload Prescription"),
    "8": FeatureCommand("healthcare_products", "Browse Healthcare Products"),
})

HELP_MESSAGE = """🏥 *Drugs.ng WhatsApp Bot - Available Services:*

1️⃣ *Search Medicines* - Type "1" or "find paracetamol"
2️⃣ *Find Doctors* - Type "2" or "find a cardiologist"
3️⃣ *Track Orders* - Type "3" or "track 12345"
4️⃣ *Book Appointment* - Type "4" or "book a doctor"
5️⃣ *View Cart* - Type "5" or "cart"
6️⃣ *Customer Support* - Type "6" or "connect me to support"
7️⃣ *Upload Prescription* - Type "7" or "upload prescription"
8️⃣ *Healthcare Products* - Type "8" or "browse health products"

Simply reply with a number (1-8) or describe what you need!"""

# Keyword vocabularies (fallback classification)
PRODUCT_KEYWORDS = (
    "medicine", "drug", "medication", "pill", "tablet", "paracetamol",
    "insulin", "amoxicillin", "blood", "pressure", "monitor", "vitamin",
)
DOCTOR_KEYWORDS = (
    "doctor", "physician", "specialist", "cardiologist", "pediatrician",
    "dermatologist", "neurologist", "consultant",
)
ORDER_KEYWORDS = ("order", "buy", "purchase", "checkout", "cart", "add")
APPOINTMENT_KEYWORDS = ("appointment", "book", "schedule", "consult", "visit", "meeting")
TRACKING_KEYWORDS = ("track", "status", "where", "delivery", "shipped", "arrive")

KEYWORD_THRESHOLD = 0.75

# Short-message rules: (keywords, fuzzy threshold)
HELP_KEYWORDS = ("help", "menu", "what can you do", "capabilities", "features", "?")
HELP_THRESHOLD = 0.85
LOGOUT_KEYWORDS = ("logout", "exit", "bye", "goodbye", "sign out", "log out")
LOGOUT_THRESHOLD = 0.80
GREETING_KEYWORDS = (
    "hello", "hi", "hey", "greetings", "good morning", "good afternoon",
    "good evening", "start", "begin",
)
GREETING_THRESHOLD = 0.80

# Typed while a paginated list is open; these fall through to the cascade
NAVIGATION_KEYWORDS = ("next", "prev", "previous", "back", "cancel", "exit", "stop")

# Wire keys of the session markers set while a list is being paged
PAGINATION_MARKERS = (
    "doctorSpecialtyPagination",
    "doctorPagination",
    "productPagination",
    "cartPagination",
)

DOCTOR_SPECIALTIES = (
    "cardiologist", "pediatrician", "dermatologist", "gynecologist",
    "general practitioner", "neurologist", "orthopedic", "ophthalmologist",
    "pulmonologist", "gastroenterologist", "urologist", "psychiatrist",
)
DIAGNOSTIC_TESTS = (
    "blood test", "covid test", "malaria test", "typhoid test", "thyroid test",
    "glucose test", "lipid profile", "urinalysis", "full blood count",
)
HEALTHCARE_CATEGORIES = (
    "first aid", "medical devices", "thermometer", "oximeter", "glucose meter",
    "bandage", "gauze", "cream", "gel", "kit",
)

# Every classified result carries this; no per-result scoring is done
DEFAULT_CONFIDENCE = 0.9
DEFAULT_SOURCE = "custom-nlp"

UNKNOWN_TEXT = "I didn't understand that. Type 'help' to see what I can do."
INVALID_MESSAGE_TEXT = "Invalid message format"
ERROR_TEXT = "I encountered an error processing your message. Please try again."

DEFAULT_FULFILLMENT = MappingProxyType({
    "help": HELP_MESSAGE,
    "greeting": "Hello! 👋 Welcome to Drugs.ng. Type 'help' to see what I can do for you.",
    "register": (
        "I'll help you register. Please provide your full name, email, and a password.\n\n"
        "Example: register John Doe john@example.com mypassword"
    ),
    "login": (
        "I'll help you login. Please provide your email and password.\n\n"
        "Example: login john@example.com mypassword"
    ),
    "search_products": "What medicine or product are you looking for?",
    "add_to_cart": (
        "Please specify the product number and quantity.\n\n"
        "Example: add 1 2 (adds 2 units of product 1)"
    ),
    "place_order": "I can help you place an order. Please provide your delivery address and payment method.",
    "view_cart": "Showing your cart...",
    "track_order": (
        "Please provide your order ID to track it.\n\n"
        "Example: track 12345 (or send part of your payment reference like "
        "drugsng-12345-... or caption: rx 12345)"
    ),
    "search_doctors": "What type of doctor are you looking for? (e.g., cardiologist, pediatrician)",
    "book_appointment": (
        "I can help you book an appointment. Please provide the doctor and your preferred date and time."
    ),
    "payment": "I can help you make a payment. Please provide your order ID and preferred payment method.",
    "support": "Connecting you to our support team. Please describe your issue.",
    "diagnostic_tests": (
        "What diagnostic test would you like to book? (e.g., blood test, malaria test, thyroid test)"
    ),
    "healthcare_products": (
        "What healthcare product would you like to browse? (e.g., first aid kit, thermometer, oximeter)"
    ),
    "password_reset": "I'll help you reset your password. Please provide your email address.",
    "prescription_upload": (
        "Please upload your prescription document (image or PDF) by sending it as an attachment."
    ),
    "logout": 'You have been logged out. Type "help" to get started again.',
    "unknown": "I'm not sure how to help with that. Type 'help' to see available options.",
    "error": "I encountered an error. Please try again.",
})

# Intents a caller may serve without a logged-in user
PUBLIC_INTENTS = frozenset({
    "register", "login", "greeting", "help", "password_reset", "logout",
    "unknown", "error", "pagination_selection",
})


class Settings(BaseModel):
    log_level: str = Field(default="INFO", description="Root log level for the app")
    page_size: int = Field(default=5, ge=1, description="Items shown per page in list replies")
    bot_name: str = Field(default="Drugs.ng", description="Name shown in the chat UI")
    catalog_path: str = Field(default="", description="Path to a catalog JSON; empty uses data/catalog.json")

    def catalog_configured(self) -> bool:
        return bool(self.catalog_path.strip())
