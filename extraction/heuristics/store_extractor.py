"""
Store/retailer extraction.
"""

import re
from typing import Optional

KNOWN_STORES = [
    "Amazon",
    "Mercado Livre",
    "Magalu",
    "Magazine Luiza",
    "Americanas",
    "Shopee",
    "AliExpress",
    "Kabum",
    "Pichau",
    "Nike",
    "Adidas",
    "Netshoes",
]

_CANONICAL = {name.lower(): name for name in KNOWN_STORES}

_KNOWN_STORE_RE = re.compile(
    r"^[^\S\n]*(" + "|".join(re.escape(name) for name in KNOWN_STORES) + r")\b",
    re.IGNORECASE | re.MULTILINE,
)
_STORE_EMOJI_RE = re.compile(r"🏪\ufe0f?\s*([^\n]+)")


def extract_store(text: str) -> Optional[str]:
    """
    Extract the store name.

    Examples:
        >>> extract_store("Amazon - Só no app\\n30% off")
        'Amazon'
        >>> extract_store("🏪 Mercado Livre")
        'Mercado Livre'
    """
    match = _KNOWN_STORE_RE.search(text)
    if match:
        return _CANONICAL[match.group(1).lower()]

    match = _STORE_EMOJI_RE.search(text)
    if match and match.group(1).strip():
        return match.group(1).strip()

    return None
