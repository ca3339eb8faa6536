"""
Price extraction. Prices are returned as integer centavos.
"""

import re
from typing import List, Optional

_AMOUNT = r"(\d+(?:[.,]\d+)*)"

# The amount must not be cut short, so "R$200 OFF" is never read as "R$20".
_AMOUNT_END = r"(?!\d|[.,]\d)"

# Priority 1: "por" marks the final price ("DE 549 | POR 287"). An installment
# count ("por 12x de R$ 50") is not a price.
_FINAL_PRICE_RE = re.compile(rf"\bpor\s+(?:R\$\s*)?{_AMOUNT}{_AMOUNT_END}(?!\s*x\b)", re.IGNORECASE)

# Priority 2: any R$ amount that is not a discount ("cupom de R$80", "R$ 50 OFF").
_CURRENCY_PRICE_RE = re.compile(
    rf"(?<!cupom de )(?<!desconto de )R\$\s*{_AMOUNT}{_AMOUNT_END}(?!\s*OFF)",
    re.IGNORECASE,
)

_DECIMAL_TAIL_RE = re.compile(r"(.*)[.,](\d{1,2})")


def amount_to_cents(amount: str) -> int:
    """
    Convert a pt-BR amount string to centavos.

    The last separator is the decimal mark when one or two digits follow it;
    every other "." or "," groups thousands.

    Examples:
        >>> amount_to_cents("3.447,76")
        344776
        >>> amount_to_cents("2.799")
        279900
        >>> amount_to_cents("99.90")
        9990
    """
    match = _DECIMAL_TAIL_RE.fullmatch(amount)
    if match:
        whole, fraction = match.groups()
    else:
        whole, fraction = amount, ""

    reais = int(re.sub(r"[.,]", "", whole) or "0")
    centavos = int(fraction.ljust(2, "0")) if fraction else 0
    return reais * 100 + centavos


def _collect(pattern: re.Pattern, text: str) -> List[int]:
    prices = []
    for match in pattern.finditer(text):
        cents = amount_to_cents(match.group(1))
        if cents > 0:
            prices.append(cents)
    return prices


def extract_price(text: str) -> Optional[int]:
    """
    Extract the offer price from a message.

    Priority 1: prices after "por" (final price). When several appear, the
    lowest one is the actual offer.
    Priority 2: generic R$ prices, ignoring discount amounts.

    Args:
        text: Message text to extract price from

    Returns:
        Price in centavos, or None if no price found
    """
    prices = _collect(_FINAL_PRICE_RE, text)
    if prices:
        return min(prices)

    prices = _collect(_CURRENCY_PRICE_RE, text)
    return min(prices) if prices else None
