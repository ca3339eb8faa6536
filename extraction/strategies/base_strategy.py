"""
Extraction strategy interface.

The orchestrator accepts any object with this shape; the regex and AI
extractors satisfy it structurally without a shared base class.
"""

from typing import Protocol, runtime_checkable

from extraction.models import ExtractionRequest, ExtractionResult


@runtime_checkable
class ExtractionStrategy(Protocol):
    """Interface shared by all extractors."""

    @property
    def name(self) -> str:
        """Short identifier used in logs and health output."""
        ...

    def is_configured(self) -> bool:
        """
        Check whether the strategy can run.

        Returns:
            True if every credential and setting the strategy needs is present
        """
        ...

    async def extract(self, request: ExtractionRequest) -> ExtractionResult:
        """
        Extract structured promo data from a message.

        Args:
            request: Validated extraction request

        Returns:
            Extraction result for the message
        """
        ...
