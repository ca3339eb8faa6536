"""
Factory for wiring extraction strategies from application settings.
"""

import logging
from typing import Dict, Optional

from extraction.ai import AIExtractor
from extraction.heuristics import RegexExtractor
from extraction.orchestrator import ExtractorOrchestrator
from promo_extractor.config import LLMProvider, Settings
from promo_extractor.utils.logging import get_logger

logger = get_logger(__name__)


def create_orchestrator(
    settings: Settings,
    logger_override: Optional[logging.Logger] = None,
    regex_only: bool = False,
) -> ExtractorOrchestrator:
    """
    Build an orchestrator for the configured provider.

    Args:
        settings: Application settings
        logger_override: Logger handed to the orchestrator
        regex_only: Skip the AI strategy even when a provider is configured

    Returns:
        Orchestrator with an AI primary (when configured) and a regex fallback
        (unless disabled in settings)
    """
    primary: Optional[AIExtractor] = None
    if not regex_only and settings.llm_provider is not LLMProvider.NONE:
        primary = AIExtractor(
            settings.ai_provider_config(),
            retry_policy=settings.retry_policy,
        )
        if not primary.is_configured():
            logger.warning(
                f"LLM provider '{settings.llm_provider.value}' selected but no API key or model set",
                extra={"provider": settings.llm_provider.value},
            )

    fallback: Optional[RegexExtractor] = None
    if settings.fallback_enabled or primary is None:
        fallback = RegexExtractor()

    orchestrator = ExtractorOrchestrator(primary=primary, fallback=fallback, logger=logger_override)
    logger.info("Extraction strategies ready", extra=orchestrator.current_strategy())
    return orchestrator


def available_strategies() -> Dict[str, str]:
    """
    Get list of available strategies with descriptions.

    Returns:
        Dictionary of strategy names to descriptions
    """
    return {
        "regex": "Deterministic regex pipeline (always available)",
        LLMProvider.OPENAI.value: "OpenAI chat completions",
        LLMProvider.ABACUS.value: "Abacus RouteLLM (OpenAI-compatible)",
    }
