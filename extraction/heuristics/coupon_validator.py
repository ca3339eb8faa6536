"""
Coupon code validation.
"""

import re

_CODE_RE = re.compile(r"[A-Z0-9]+")


def is_valid_coupon_code(code: str) -> bool:
    """
    Check whether a candidate string looks like a real coupon code.

    A code is 3 to 20 upper-case ASCII letters and digits and is not made of
    digits only (bare numbers are usually prices or phone fragments).

    Examples:
        >>> is_valid_coupon_code("HARDMOB8")
        True
        >>> is_valid_coupon_code("123")
        False
        >>> is_valid_coupon_code("AB")
        False
    """
    if not 3 <= len(code) <= 20:
        return False
    if not _CODE_RE.fullmatch(code):
        return False
    return not code.isdigit()
