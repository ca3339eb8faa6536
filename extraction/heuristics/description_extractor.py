"""
Extraction of the channel owner's hook line ("OLHA O COMBOOO!").
"""

import re
from typing import Optional

from .patterns import CAPS_EXCLAMATION_RE, UPPER, emoji_group

_EXCITED_RE = re.compile(
    rf"^{emoji_group('🔥', '😱', '🤯', '✨', '👀', '💥')}+\s*[{UPPER}\s!]+!+\s*$"
)

# Lines that mean the hook section is over.
_PRODUCT_MARKER_RE = re.compile(rf"^{emoji_group('📺', '👟', '🎮', '📱', '⌨', '💻')}")
_PRICE_RE = re.compile(r"R\$\s*\d+|\bpor\s+\d", re.IGNORECASE)
_COUPON_LABEL_RE = re.compile(r"cupom:", re.IGNORECASE)

MAX_HOOK_LINES = 3


def extract_description(text: str) -> Optional[str]:
    """
    Extract the owner's comment from the top of a message.

    Only the first three non-empty lines are inspected. Must be given the raw
    text, since the cleaner treats these lines as footers.

    Examples:
        >>> extract_description("OLHA O COMBOOO!\\n\\nSmart TV")
        'OLHA O COMBOOO!'
    """
    lines = [line.strip() for line in text.split("\n") if line.strip()]

    for line in lines[:MAX_HOOK_LINES]:
        if CAPS_EXCLAMATION_RE.match(line) or _EXCITED_RE.match(line):
            return line

        if _PRODUCT_MARKER_RE.match(line) or _PRICE_RE.search(line) or _COUPON_LABEL_RE.search(line):
            break

    return None
