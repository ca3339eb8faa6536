"""
Extraction strategies.

A strategy turns one ExtractionRequest into an ExtractionResult. The regex
and AI extractors both implement ExtractionStrategy; strategy_factory wires
them into an orchestrator from the application settings.
"""

from .base_strategy import ExtractionStrategy

__all__ = ["ExtractionStrategy"]
