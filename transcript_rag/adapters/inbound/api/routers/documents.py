"""Document upload, listing, indexing and removal."""

import logging

from fastapi import APIRouter, Depends, status

from .....core.services import IndexingService
from ..deps import get_indexing_service
from ..models import DocumentCreate, DocumentResponse, ErrorResponse, IndexResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/documents", tags=["documents"])

_errors = {
    400: {"model": ErrorResponse, "description": "Invalid request"},
    404: {"model": ErrorResponse, "description": "Document not found"},
}


@router.post(
    "",
    response_model=DocumentResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: _errors[400]},
)
def create_document(
    request: DocumentCreate,
    indexing: IndexingService = Depends(get_indexing_service),
) -> DocumentResponse:
    document = indexing.add_document(
        request.title, request.text, filename=request.filename, tags=request.tags
    )
    return DocumentResponse.from_domain(document, indexed=False)


@router.get("", response_model=list[DocumentResponse])
def list_documents(
    indexing: IndexingService = Depends(get_indexing_service),
) -> list[DocumentResponse]:
    store = indexing.embedding_store
    return [
        DocumentResponse.from_domain(d, indexed=store.has_embeddings(d.id))
        for d in indexing.list_documents()
    ]


@router.delete("/{document_id}", status_code=status.HTTP_204_NO_CONTENT, responses=_errors)
def delete_document(
    document_id: str,
    indexing: IndexingService = Depends(get_indexing_service),
) -> None:
    indexing.remove_document(document_id)


@router.post("/{document_id}/index", response_model=IndexResponse, responses={404: _errors[404]})
def index_document(
    document_id: str,
    indexing: IndexingService = Depends(get_indexing_service),
) -> IndexResponse:
    """Chunk and embed a document. Any model failure aborts the whole document."""
    embedded = indexing.index_document(document_id)
    logger.info(f"Indexed {document_id} via API ({len(embedded)} chunks)")
    return IndexResponse(
        document_id=document_id,
        chunks=len(embedded),
        dimension=embedded[0].dimension if embedded else 0,
    )
