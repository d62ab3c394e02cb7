"""Health check endpoints."""

from fastapi import APIRouter, Depends

from .....adapters.outbound.llm import OllamaClient
from .....core.services import IndexingService
from ..deps import get_indexing_service, get_ollama_client
from ..models import HealthResponse

router = APIRouter(tags=["health"])

API_VERSION = "1.0.0"


@router.get("/health", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Liveness probe; does not touch the model server."""
    return HealthResponse(status="healthy", version=API_VERSION, ollama="not_checked")


@router.get("/ready", response_model=HealthResponse)
def readiness_check(
    client: OllamaClient = Depends(get_ollama_client),
    indexing: IndexingService = Depends(get_indexing_service),
) -> HealthResponse:
    """Readiness probe: checks that Ollama answers and reports corpus size."""
    available = client.is_available()
    status = indexing.status()
    return HealthResponse(
        status="ready" if available else "degraded",
        version=API_VERSION,
        ollama="connected" if available else "unreachable",
        documents=status["documents"],
        indexed_documents=status["indexed_documents"],
    )
