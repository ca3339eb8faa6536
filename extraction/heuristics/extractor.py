"""
Deterministic regex extraction pipeline.

Composes the text cleaner and the field extractors into one strategy that
satisfies the same contract as the AI extractor. Every step is a pure function
of the message text, so the pipeline never fails and never shares state.
"""

from ..models import ExtractionRequest, ExtractionResult
from .coupon_detector import detect_coupons, extract_discount
from .description_extractor import extract_description
from .price_extractor import extract_price
from .product_extractor import extract_product_name
from .store_extractor import extract_store
from .text_cleaner import clean_promo_text


def extract_promo(request: ExtractionRequest) -> ExtractionResult:
    """
    Run the regex pipeline over one message.

    The description comes from the original text, everything else from the
    cleaned text. Product key and category are left empty: assigning them
    needs semantic judgment the regexes cannot make.
    """
    text = request.text

    description = extract_description(text)

    cleaned_text = clean_promo_text(text)

    coupons = detect_coupons(cleaned_text)
    discount = extract_discount(cleaned_text)
    if discount:
        coupons = [
            coupon if coupon.discount else coupon.model_copy(update={"discount": discount})
            for coupon in coupons
        ]

    return ExtractionResult(
        cleaned_text=cleaned_text,
        description=description,
        product=extract_product_name(cleaned_text),
        store=extract_store(cleaned_text),
        price_cents=extract_price(cleaned_text),
        coupons=coupons,
        product_key=None,
        category=None,
    )


class RegexExtractor:
    """Extraction strategy backed by the regex pipeline."""

    name = "regex"

    def is_configured(self) -> bool:
        """The regex pipeline needs no configuration."""
        return True

    async def extract(self, request: ExtractionRequest) -> ExtractionResult:
        """Extract fields from the request text."""
        return extract_promo(request)
