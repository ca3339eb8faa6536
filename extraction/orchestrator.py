"""
Extraction orchestrator.

Entry point for extraction requests. Tries the primary (AI) strategy when it is
configured and falls back to the deterministic regex strategy on any failure,
so callers only see an error when no strategy can produce a result.
"""

import logging
from typing import Dict, Optional

from extraction.models import ExtractionRequest, ExtractionResult
from extraction.strategies.base_strategy import ExtractionStrategy
from promo_extractor.utils.errors import ApiError, ConfigurationError
from promo_extractor.utils.logging import get_logger


class ExtractorOrchestrator:
    """Sequences the primary and fallback extraction strategies."""

    def __init__(
        self,
        primary: Optional[ExtractionStrategy] = None,
        fallback: Optional[ExtractionStrategy] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the orchestrator.

        Args:
            primary: Strategy tried first, skipped when unconfigured
            fallback: Strategy used when the primary is missing or fails
            logger: Logger for request events; module logger when omitted
        """
        self.primary = primary
        self.fallback = fallback
        self.logger = logger or get_logger(__name__)

    async def extract(self, request: ExtractionRequest) -> ExtractionResult:
        """
        Extract structured data from a promo message.

        Args:
            request: Validated extraction request

        Returns:
            Result from the primary strategy, or from the fallback

        Raises:
            ConfigurationError: If no strategy is available
            Exception: The primary strategy's error when there is no fallback
        """
        self.logger.info(
            "Extract request received",
            extra={
                "message_id": request.message_id,
                "chat_id": request.chat_id,
                "text_length": len(request.text),
            },
        )

        result: Optional[ExtractionResult] = None
        used: Optional[str] = None

        if self.primary is not None and self.primary.is_configured():
            try:
                result = await self.primary.extract(request)
                used = self.primary.name
                self.logger.info(
                    "AI extraction successful",
                    extra={"provider": self.primary.name, "message_id": request.message_id},
                )
            except Exception as e:
                if self.fallback is None:
                    self.logger.error(
                        f"AI extraction failed: {e}",
                        extra=_error_fields(e),
                    )
                    raise
                self.logger.warning(
                    "AI extraction failed, falling back to regex",
                    extra=_error_fields(e),
                )

        if result is None:
            if self.fallback is None:
                raise ConfigurationError(
                    "No extraction strategy available",
                    {"strategy": self.current_strategy()},
                )
            result = await self.fallback.extract(request)
            used = self.fallback.name

        self.logger.info(
            "Extract completed",
            extra={"extractor": used, "message_id": request.message_id, **result.summary()},
        )
        return result

    def current_strategy(self) -> Dict[str, str]:
        """Describe which strategies would run, based on configuration only."""
        fallback_name = self.fallback.name if self.fallback is not None else "none"

        if self.primary is not None and self.primary.is_configured():
            primary_name = f"ai-{self.primary.name}"
        else:
            primary_name = fallback_name

        return {"primary": primary_name, "fallback": fallback_name}


def _error_fields(error: BaseException) -> Dict[str, object]:
    """Flatten an error into log fields, classifying API failures."""
    fields: Dict[str, object] = {
        "error": str(error),
        "error_type": type(error).__name__,
    }
    if isinstance(error, ApiError):
        fields["status_code"] = error.status_code
        fields["error_kind"] = error.kind
    return fields
