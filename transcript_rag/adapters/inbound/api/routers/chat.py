"""Grounded chat endpoint."""

from fastapi import APIRouter, Depends

from .....config.settings import Settings
from .....core.services import ChatService, default_style_guide
from ..deps import get_chat_service, get_settings
from ..models import ChatRequest, ChatResponseModel, ErrorResponse

router = APIRouter(tags=["chat"])


@router.post(
    "/chat",
    response_model=ChatResponseModel,
    responses={400: {"model": ErrorResponse, "description": "Empty or invalid query"}},
)
def chat(
    request: ChatRequest,
    service: ChatService = Depends(get_chat_service),
    settings: Settings = Depends(get_settings),
) -> ChatResponseModel:
    """Answer one chat turn.

    Missing documents, missing embeddings, weak retrieval and model
    failures all come back as a normal response with ``has_grounding``
    false and an explanatory ``answer``; check ``outcome`` to tell them apart.
    """
    style_guide = request.style_guide.to_domain() if request.style_guide else default_style_guide()
    response = service.respond(
        request.query, request.to_context(settings.max_context_chars), style_guide
    )
    return ChatResponseModel.from_domain(response)
