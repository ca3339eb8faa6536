"""
AI extractor.

Sends the promo message to an OpenAI-compatible chat completions endpoint
(OpenAI itself or Abacus RouteLLM) and maps the JSON reply onto the shared
ExtractionResult. Each attempt runs under a hard deadline and the whole
attempt is retried by the retry policy on transient failures.
"""

import asyncio
import json
import re
from typing import Any, Dict, List, Optional

import openai
from openai import AsyncOpenAI
from pydantic import ValidationError

from extraction.models import Category, Coupon, ExtractionRequest, ExtractionResult, dedupe_coupons
from extraction.retry import RETRY_PRESETS, RetryPolicy, RetryPreset, run_with_retry
from promo_extractor.config import AIProviderConfig, LLMProvider
from promo_extractor.utils.errors import ApiError, ConfigurationError, MissingConfigurationError, ParsingError
from promo_extractor.utils.logging import get_logger

from .prompts import EXTRACTION_SYSTEM_PROMPT

logger = get_logger(__name__)

_FENCED_JSON_RE = re.compile(r"```json\s*([\s\S]*?)\s*```")


class AIExtractor:
    """Extraction strategy backed by a remote language model."""

    def __init__(
        self,
        config: AIProviderConfig,
        client: Optional[AsyncOpenAI] = None,
        retry_policy: RetryPolicy = RETRY_PRESETS[RetryPreset.STANDARD],
    ):
        """
        Initialize the AI extractor.

        Args:
            config: Provider, credentials, model and timeout
            client: Pre-built client; created lazily from config when omitted
            retry_policy: Retry schedule for transient API failures
        """
        self.config = config
        self.retry_policy = retry_policy
        self._client = client

    @property
    def name(self) -> str:
        return self.config.provider.value

    def is_configured(self) -> bool:
        """Check that a provider is selected and credentials are present."""
        return self.config.is_complete

    def _ensure_client(self) -> AsyncOpenAI:
        """Create the API client on first use."""
        if self._client is None:
            self._client = AsyncOpenAI(
                api_key=self.config.api_key,
                base_url=self.config.base_url,
                timeout=self.config.timeout_seconds,
                # Retries are owned by run_with_retry
                max_retries=0,
            )
        return self._client

    async def extract(self, request: ExtractionRequest) -> ExtractionResult:
        """
        Extract structured data from the request text.

        Raises:
            ConfigurationError: If the provider is not configured
            ApiError: If the endpoint keeps failing or fails permanently
            ParsingError: If the reply is not the expected JSON
        """
        if self.config.provider is LLMProvider.NONE:
            raise ConfigurationError(
                "AI extractor is not configured",
                {"provider": self.config.provider.value},
            )
        if not self.config.api_key:
            raise MissingConfigurationError("LLM_API_KEY")
        if not self.config.model:
            raise MissingConfigurationError("LLM_MODEL")

        async def attempt() -> ExtractionResult:
            payload = self.build_payload(request.text)
            content = await self.call_api(payload)
            extracted = self.parse_response(content)
            return self.to_result(extracted, request.text)

        return await run_with_retry(attempt, self.retry_policy)

    def build_payload(self, text: str) -> Dict[str, Any]:
        """Build the chat completions request body."""
        payload: Dict[str, Any] = {
            "model": self.config.model,
            "messages": [
                {"role": "system", "content": EXTRACTION_SYSTEM_PROMPT},
                {"role": "user", "content": text},
            ],
            "response_format": {"type": "json_object"},
        }
        if self.config.temperature is not None:
            payload["temperature"] = self.config.temperature
        if self.config.max_tokens is not None:
            payload["max_tokens"] = self.config.max_tokens
        return payload

    async def call_api(self, payload: Dict[str, Any]) -> str:
        """
        Send one request and return the reply content.

        The call is cancelled once the deadline passes; that and any other
        transport failure surface as ApiError with a status for retry
        classification.
        """
        client = self._ensure_client()
        timeout = self.config.timeout_seconds

        try:
            response = await asyncio.wait_for(
                client.chat.completions.create(**payload, timeout=timeout),
                timeout=timeout,
            )
        except (asyncio.TimeoutError, openai.APITimeoutError) as e:
            raise ApiError(f"Request timeout after {timeout}s", 408) from e
        except openai.APIStatusError as e:
            raise ApiError(
                f"{self.name} API error ({e.status_code}): {e.message}",
                e.status_code,
            ) from e
        except openai.APIConnectionError as e:
            raise ApiError(f"Network error: {e}", 0) from e

        content = None
        if response.choices:
            content = response.choices[0].message.content

        if not content:
            raise ApiError(f"No content in {self.name} response", 500)

        return content

    def parse_response(self, content: str) -> Dict[str, Any]:
        """
        Parse the model reply as a JSON object.

        Looks for a ```json fenced block first, then the first balanced JSON
        object, then tries the raw content.

        Raises:
            ParsingError: If no JSON object with a string "text" field is found
        """
        fenced = _FENCED_JSON_RE.search(content)
        try:
            if fenced:
                parsed = json.loads(fenced.group(1))
            else:
                parsed = _first_json_object(content)
                if parsed is None:
                    parsed = json.loads(content)
        except json.JSONDecodeError as e:
            raise ParsingError(f"Failed to parse AI response: {e}") from e

        if not isinstance(parsed, dict):
            raise ParsingError("Failed to parse AI response: expected a JSON object")

        if not isinstance(parsed.get("text"), str):
            raise ParsingError('Failed to parse AI response: missing or invalid "text" field')

        return parsed

    def to_result(self, extracted: Dict[str, Any], original_text: str) -> ExtractionResult:
        """
        Map the parsed reply onto an ExtractionResult.

        Raises:
            ParsingError: If a field has the wrong shape
        """
        price = extracted.get("price")
        # pydantic would read a JSON boolean as 0 or 1
        if isinstance(price, bool):
            raise ParsingError(f"Unexpected AI response shape: price is {price!r}")

        try:
            coupons = _parse_coupons(extracted.get("coupons"))

            category = None
            if extracted.get("category"):
                category = Category.parse(extracted["category"])
                if category is None:
                    logger.warning(
                        "Discarding unknown category from model",
                        extra={"category": extracted["category"]},
                    )

            return ExtractionResult(
                cleaned_text=extracted.get("text") or original_text,
                description=extracted.get("description") or None,
                product=extracted.get("product") or None,
                store=extracted.get("store") or None,
                price_cents=price,
                coupons=dedupe_coupons(coupons),
                product_key=extracted.get("productKey") or None,
                category=category,
            )
        except (ValidationError, KeyError, TypeError, AttributeError) as e:
            raise ParsingError(f"Unexpected AI response shape: {e}") from e


def _first_json_object(content: str) -> Optional[Any]:
    """Decode the first brace-balanced JSON value, or None if there is none."""
    start = content.find("{")
    if start == -1:
        return None
    decoder = json.JSONDecoder()
    value, _ = decoder.raw_decode(content, start)
    return value


def _parse_coupons(raw: Any) -> List[Coupon]:
    if not raw:
        return []
    coupons = []
    for item in raw:
        # The model sometimes labels the discount "information"
        discount = item.get("discount") or item.get("information")
        coupons.append(
            Coupon(
                code=item["code"],
                discount=discount or None,
                description=item.get("description") or None,
                expires_at=item.get("expiresAt") or None,
                url=item.get("url") or None,
            )
        )
    return coupons
