"""
Heuristic extractors for promo messages.

Each extractor is an independent pure function over a string, so price,
coupon and product logic can be tested and tuned in isolation.
"""

from .coupon_detector import detect_coupons, extract_discount
from .coupon_validator import is_valid_coupon_code
from .description_extractor import extract_description
from .extractor import RegexExtractor, extract_promo
from .price_extractor import amount_to_cents, extract_price
from .product_extractor import extract_product_name
from .store_extractor import extract_store
from .text_cleaner import clean_promo_text

__all__ = [
    "RegexExtractor",
    "amount_to_cents",
    "clean_promo_text",
    "detect_coupons",
    "extract_description",
    "extract_discount",
    "extract_price",
    "extract_product_name",
    "extract_promo",
    "extract_store",
    "is_valid_coupon_code",
]
