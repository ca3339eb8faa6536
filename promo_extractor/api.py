"""
HTTP interface for the promo extractor.

Exposes the extraction orchestrator over FastAPI:

    POST /api/extractors/extract   extract one promo message
    GET  /health                   liveness plus the active strategy
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import Body, FastAPI, Request
from fastapi.responses import JSONResponse

from extraction.models import ExtractionRequest
from extraction.orchestrator import ExtractorOrchestrator
from extraction.strategies.strategy_factory import create_orchestrator
from promo_extractor import __version__
from promo_extractor.config import Settings, get_settings
from promo_extractor.utils.errors import InputValidationError, PromoExtractorException
from promo_extractor.utils.logging import get_logger

logger = get_logger(__name__)


def create_app(
    orchestrator: Optional[ExtractorOrchestrator] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        orchestrator: Orchestrator to serve; built from settings when omitted
        settings: Application settings; process-wide settings when omitted
    """
    settings = settings or get_settings()
    orchestrator = orchestrator or create_orchestrator(settings)

    app = FastAPI(title="Promo Extractor", version=__version__)

    @app.exception_handler(InputValidationError)
    async def handle_invalid_input(request: Request, exc: InputValidationError) -> JSONResponse:
        return JSONResponse(status_code=422, content={"message": exc.message, "errors": exc.errors})

    @app.exception_handler(PromoExtractorException)
    async def handle_extractor_error(request: Request, exc: PromoExtractorException) -> JSONResponse:
        logger.error(
            f"Extraction failed: {exc.message}",
            extra={"error_type": type(exc).__name__, "path": request.url.path},
        )
        return JSONResponse(status_code=502, content={"message": exc.message})

    @app.post("/api/extractors/extract")
    async def extract(payload: Any = Body(...)) -> Dict[str, Any]:
        """Extract structured data from one promo message."""
        if not isinstance(payload, dict):
            raise InputValidationError("Request body must be a JSON object")
        extraction_request = ExtractionRequest.from_payload(payload)
        result = await orchestrator.extract(extraction_request)
        return result.to_response()

    @app.get("/health")
    async def health() -> Dict[str, Any]:
        """Get service health and the configured strategy."""
        return {
            "status": "ok",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "version": __version__,
            "llm_provider": settings.llm_provider.value,
            "strategy": orchestrator.current_strategy(),
        }

    return app
