"""
Shared fixtures for the promo extractor tests.
"""

import pytest

from extraction.models import ExtractionRequest
from extraction.retry import RetryPolicy
from promo_extractor.config import reset_settings


@pytest.fixture(autouse=True)
def clean_settings():
    """Drop cached settings so each test reads its own environment."""
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def make_request():
    """Build an ExtractionRequest for a message text."""

    def _make(text: str, message_id: int = 1, chat: str = "promo-chat", links=()):
        return ExtractionRequest(text=text, chat_id=chat, message_id=message_id, source_links=tuple(links))

    return _make


@pytest.fixture
def instant_policy():
    """Retry policy with no waiting between attempts."""
    return RetryPolicy(max_attempts=3, initial_delay=0, max_delay=0, backoff_multiplier=2.0)
