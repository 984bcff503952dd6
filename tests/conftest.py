"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure project root is on path when running: pytest tests/
_root = Path(__file__).resolve().parent.parent
if str(_root) not in sys.path:
    sys.path.insert(0, str(_root))

from medbot.services.conversation_engine import Catalog, ConversationSession  # noqa: E402


@pytest.fixture
def catalog() -> Catalog:
    return Catalog.load()


@pytest.fixture
def logged_in_session(catalog: Catalog) -> ConversationSession:
    session = ConversationSession("2348012345678", catalog=catalog, page_size=5)
    session.step("login jane@example.com secret")
    assert session.logged_in
    return session
