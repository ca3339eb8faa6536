"""
Promo Extractor

Turns free-form Brazilian-Portuguese promo messages into structured records
(product, price, store, coupons, category) using a language model with a
deterministic regex pipeline as fallback.
"""

__version__ = "1.0.0"
