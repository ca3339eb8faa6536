"""
Coupon code detection.
"""

import re
from typing import List, Optional

from ..models import Coupon
from .coupon_validator import is_valid_coupon_code
from .patterns import HSPACE, UPPER, emoji_group

# One or more codes separated by "/", "," or the word "ou".
_CODE_LIST = (
    rf"[A-Z0-9]{{3,}}\b"
    rf"(?:{HSPACE}*(?:[/,]|\b(?i:ou)\b){HSPACE}*[A-Z0-9]{{3,}}\b)*"
)

# "cupom: CODE" takes whatever follows the colon. "cupom CODE" without a colon
# is rejected when another all-caps word follows the codes, so headlines like
# "CUPOM NIKE AINDA ATIVO" are ignored.
_EXPLICIT_RE = re.compile(
    rf"\b(?i:cupom)(?:"
    rf"{HSPACE}*:\s*(?P<listed>{_CODE_LIST})"
    rf"|{HSPACE}+(?P<bare>{_CODE_LIST})(?!{HSPACE}+[{UPPER}]{{2,}}\b)"
    rf")",
    re.MULTILINE,
)

_CODE_SEPARATOR_RE = re.compile(r"[/,]|\s+(?i:ou)\s+")

_STANDALONE_RE = re.compile(
    rf"^{HSPACE}*{emoji_group('🎫', '🎟', '💳')}{HSPACE}*"
    rf"(?:(?i:cupom)\b{HSPACE}*:?{HSPACE}*)?"
    rf"(?!(?i:cupom)\b)(?P<code>[A-Z0-9]{{3,20}})(?=\s|$)",
    re.MULTILINE,
)

_DISCOUNT_RE = re.compile(
    r"\d{1,3}(?:[.,]\d+)?\s*%\s*OFF\b|R\$\s*\d+(?:[.,]\d+)*\s*OFF\b",
    re.IGNORECASE,
)


def detect_coupons(text: str) -> List[Coupon]:
    """
    Find coupon codes in a message.

    Supports two patterns, applied in order:
    1. Explicit: "cupom: CODE", "cupom: A / B", "CUPOM: A ou B", "cupom CODE"
    2. Standalone: "🎫 CODE" or "🎟 CUPOM: CODE" at the start of a line

    Codes must pass is_valid_coupon_code. A code found twice is kept once,
    at its first position.

    Args:
        text: Message text to analyze

    Returns:
        Coupons in detection order
    """
    codes: List[str] = []

    for match in _EXPLICIT_RE.finditer(text):
        code_list = match.group("listed") or match.group("bare")
        for code in _CODE_SEPARATOR_RE.split(code_list):
            code = code.strip()
            if is_valid_coupon_code(code) and code not in codes:
                codes.append(code)

    for match in _STANDALONE_RE.finditer(text):
        code = match.group("code")
        if is_valid_coupon_code(code) and code not in codes:
            codes.append(code)

    return [Coupon(code=code) for code in codes]


def extract_discount(text: str) -> Optional[str]:
    """
    Find the first discount expression ("15% OFF", "R$ 200 OFF").

    Returns:
        The expression with whitespace collapsed, or None
    """
    match = _DISCOUNT_RE.search(text)
    if not match:
        return None
    return " ".join(match.group(0).split())
