"""
Product name extraction.
"""

import re
from typing import Optional

from .patterns import EMOJI_RE, emoji_group

_SKIP_PATTERNS = [
    re.compile(r"^(?:cupom|código|codigo|desconto|promoção|promocao|oferta)", re.IGNORECASE),
    re.compile(r"^(?:R\$|por\s+R\$)", re.IGNORECASE),
    re.compile(r"^https?://", re.IGNORECASE),
    re.compile(rf"^{emoji_group('🎫', '🎟', '💳', '🔥', '⚡', '✨', '🎁', '🛒', '📢', '🔗', '➡', '🏪', '💬')}"),
]

_LIST_MARKER_RE = re.compile(r"^\s*[-•*]\s*")

MIN_NAME_LENGTH = 5
MAX_NAME_LENGTH = 200


def extract_product_name(text: str) -> Optional[str]:
    """
    Extract the product name from the first meaningful line.

    Lines with coupons, prices, links or marker emoji are skipped. The first
    remaining line whose cleaned length is between 6 and 199 characters wins.

    Examples:
        >>> extract_product_name("👟 Tênis Nike Air Max\\nR$ 287")
        'Tênis Nike Air Max'
    """
    for line in text.split("\n"):
        trimmed = line.strip()
        if not trimmed:
            continue

        if any(pattern.search(trimmed) for pattern in _SKIP_PATTERNS):
            continue

        cleaned = EMOJI_RE.sub("", trimmed)
        cleaned = _LIST_MARKER_RE.sub("", cleaned).strip()

        if MIN_NAME_LENGTH < len(cleaned) < MAX_NAME_LENGTH:
            return cleaned

    return None
