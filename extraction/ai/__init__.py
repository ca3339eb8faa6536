"""AI-backed extraction through OpenAI-compatible chat endpoints."""

from .extractor import AIExtractor
from .prompts import EXTRACTION_SYSTEM_PROMPT, PROMPT_VERSION

__all__ = ["AIExtractor", "EXTRACTION_SYSTEM_PROMPT", "PROMPT_VERSION"]
