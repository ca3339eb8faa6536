"""
Promo Extraction Engine

Dual-strategy extraction of structured promo data: a language-model extractor
wrapped in a retry policy, backed by a deterministic regex pipeline.
"""

__version__ = "1.0.0"

from .models import (
    Category,
    Coupon,
    ExtractionRequest,
    ExtractionResult,
)

__all__ = [
    "Category",
    "Coupon",
    "ExtractionRequest",
    "ExtractionResult",
]
