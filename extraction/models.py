"""
Data models for promo message extraction.

These models are the shared contract between the extraction strategies: every
strategy receives an ExtractionRequest and returns an ExtractionResult. Both
are frozen, so a result never changes after the strategy that built it returns.
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, PositiveInt, ValidationError, field_validator, model_validator

from promo_extractor.utils.errors import InputValidationError


class Category(str, Enum):
    """Product categories a promo can be filed under."""

    ELECTRONICS = "eletronicos"
    COMPUTING = "informatica"
    SMARTPHONES = "celulares"
    GAMES = "games"
    APPLIANCES = "eletrodomesticos"
    HOME = "casa"
    FASHION = "moda"
    BEAUTY = "beleza"
    HEALTH = "saude"
    SPORTS = "esportes"
    BOOKS = "livros"
    TOYS = "brinquedos"
    FOOD = "alimentos"
    DRINKS = "bebidas"
    PETS = "pets"
    AUTOMOTIVE = "automotivo"
    TOOLS = "ferramentas"
    OTHER = "outros"

    @classmethod
    def parse(cls, value: Any) -> Optional["Category"]:
        """Return the matching category, or None for unknown values."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


class ExtractionRequest(BaseModel):
    """A raw promo message handed to the extraction engine."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    text: str = Field(..., min_length=1, description="Raw message text")
    chat_id: str = Field(..., alias="chat", min_length=1, description="Source chat/channel")
    message_id: PositiveInt = Field(..., alias="messageId", description="Source message ID")
    source_links: Tuple[str, ...] = Field(default=(), alias="links", description="Links found in the message")

    @field_validator("text")
    @classmethod
    def validate_text(cls, v: str) -> str:
        """Reject whitespace-only messages."""
        if not v.strip():
            raise ValueError("Text is required")
        return v

    @field_validator("chat_id", mode="before")
    @classmethod
    def coerce_chat_id(cls, v: Any) -> Any:
        """Telegram chat IDs arrive as integers."""
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("source_links")
    @classmethod
    def validate_links(cls, v: Tuple[str, ...]) -> Tuple[str, ...]:
        """Every link must be an absolute http(s) URL."""
        for link in v:
            parsed = urlparse(link)
            if parsed.scheme not in ("http", "https") or not parsed.netloc:
                raise ValueError(f"Invalid URL: {link}")
        return v

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "ExtractionRequest":
        """
        Build a request from untrusted input.

        Raises:
            InputValidationError: If any field is missing or malformed
        """
        try:
            return cls.model_validate(payload)
        except ValidationError as e:
            errors = [
                {"field": ".".join(str(part) for part in err["loc"]), "message": err["msg"]}
                for err in e.errors()
            ]
            raise InputValidationError("Invalid extraction request", errors) from e


class Coupon(BaseModel):
    """A discount code found in a promo message."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    code: str = Field(..., min_length=1)
    discount: Optional[str] = None
    description: Optional[str] = None
    expires_at: Optional[str] = Field(None, alias="expiresAt")
    url: Optional[str] = None


class ExtractionResult(BaseModel):
    """Normalized record produced by an extraction strategy."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    cleaned_text: str = Field(..., alias="text", description="Text without promotional footers")
    description: Optional[str] = Field(None, description="Channel owner's hook line")
    product: Optional[str] = None
    store: Optional[str] = None
    price_cents: Optional[int] = Field(None, alias="price", description="Price in centavos")
    coupons: Tuple[Coupon, ...] = Field(default=())
    product_key: Optional[str] = Field(None, alias="productKey", description="Normalized product slug")
    category: Optional[Category] = None

    @model_validator(mode="after")
    def check_unique_coupons(self) -> "ExtractionResult":
        """No two coupons may share a code."""
        codes = [coupon.code for coupon in self.coupons]
        if len(codes) != len(set(codes)):
            raise ValueError("Duplicate coupon codes")
        return self

    def to_response(self) -> Dict[str, Any]:
        """Serialize with the public field names."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=False)

    def summary(self) -> Dict[str, Any]:
        """Flat summary used in completion logs."""
        return {
            "coupons_count": len(self.coupons),
            "has_price": self.price_cents is not None,
            "has_product": self.product is not None,
            "has_store": self.store is not None,
            "has_product_key": self.product_key is not None,
        }


def dedupe_coupons(coupons: List[Coupon]) -> Tuple[Coupon, ...]:
    """Drop coupons whose code was already seen, keeping detection order."""
    seen = set()
    unique = []
    for coupon in coupons:
        if coupon.code in seen:
            continue
        seen.add(coupon.code)
        unique.append(coupon)
    return tuple(unique)
