"""
Document API endpoints.

Routes:
- POST /documents - Ingest and index a document
- GET /documents - List documents (optional status filter)
- GET /documents/{document_id} - Get a document
- GET /documents/{document_id}/chunks - List a document's chunks
- POST /documents/{document_id}/reindex - Rebuild a document's chunks
- DELETE /documents/{document_id} - Delete a document and its chunks

Dependencies: faq_rag.application.services, faq_rag.models
System role: Document HTTP API
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status

from faq_rag.api.deps import get_document_service
from faq_rag.application.services.document_service import DocumentService
from faq_rag.core.document_processing.models import (
    DocumentStatus,
    IngestionRequest,
    PipelineResult,
)
from faq_rag.core.exceptions import DocumentBusyError, DocumentNotFoundError
from faq_rag.models.document import (
    ChunkListResponse,
    ChunkResponse,
    DocumentListResponse,
    DocumentResponse,
    IndexingResponse,
    IngestDocumentRequest,
    ReindexRequest,
)
from faq_rag.observability.log_utils import log_with_context

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/documents", tags=["documents"])


def _indexing_response(result: PipelineResult) -> IndexingResponse:
    return IndexingResponse(**result.model_dump())


@router.post("", response_model=IndexingResponse, status_code=status.HTTP_201_CREATED)
async def ingest_document(
    request: IngestDocumentRequest,
    document_service: DocumentService = Depends(get_document_service),
) -> IndexingResponse:
    """
    Ingest a document and index it synchronously.

    Indexing failures (bad input, storage errors) are reported in the body
    with status "failed"; the document keeps that status and its reason.

    Raises:
        HTTPException(409): Document is already being indexed
    """
    log_with_context(
        logger,
        logging.INFO,
        "Ingestion requested",
        document_id=request.document_id,
        title=request.title,
        text_length=len(request.raw_text),
    )
    try:
        result = await document_service.ingest(IngestionRequest(**request.model_dump()))
    except DocumentBusyError as e:
        raise HTTPException(status_code=409, detail=e.message)
    return _indexing_response(result)


@router.get("", response_model=DocumentListResponse)
async def list_documents(
    status_filter: DocumentStatus | None = Query(default=None, alias="status"),
    limit: int = Query(default=100, ge=1, le=1000),
    offset: int = Query(default=0, ge=0),
    document_service: DocumentService = Depends(get_document_service),
) -> DocumentListResponse:
    """List documents, newest first."""
    documents = await document_service.list_documents(
        status=status_filter, limit=limit, offset=offset
    )
    return DocumentListResponse(
        documents=[DocumentResponse.model_validate(document) for document in documents],
        total=len(documents),
    )


@router.get("/{document_id}", response_model=DocumentResponse)
async def get_document(
    document_id: str,
    document_service: DocumentService = Depends(get_document_service),
) -> DocumentResponse:
    """
    Get one document.

    Raises:
        HTTPException(404): Document not found
    """
    try:
        document = await document_service.get_document(document_id)
    except DocumentNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    return DocumentResponse.model_validate(document)


@router.get("/{document_id}/chunks", response_model=ChunkListResponse)
async def get_document_chunks(
    document_id: str,
    document_service: DocumentService = Depends(get_document_service),
) -> ChunkListResponse:
    """
    List a document's chunks in index order (embeddings omitted).

    Raises:
        HTTPException(404): Document not found
    """
    try:
        chunks = await document_service.get_chunks(document_id)
    except DocumentNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    return ChunkListResponse(
        document_id=document_id,
        chunks=[ChunkResponse.model_validate(chunk) for chunk in chunks],
        total=len(chunks),
    )


@router.post("/{document_id}/reindex", response_model=IndexingResponse)
async def reindex_document(
    document_id: str,
    request: ReindexRequest | None = None,
    document_service: DocumentService = Depends(get_document_service),
) -> IndexingResponse:
    """
    Delete a document's chunks and index it again.

    Raises:
        HTTPException(404): Document not found
        HTTPException(409): Document is already being indexed
    """
    raw_text = request.raw_text if request else None
    try:
        result = await document_service.reindex(document_id, raw_text)
    except DocumentNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except DocumentBusyError as e:
        raise HTTPException(status_code=409, detail=e.message)
    return _indexing_response(result)


@router.delete("/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_document(
    document_id: str,
    document_service: DocumentService = Depends(get_document_service),
) -> None:
    """
    Delete a document and all of its chunks.

    Raises:
        HTTPException(404): Document not found
        HTTPException(409): Document is being indexed
    """
    try:
        await document_service.delete_document(document_id)
    except DocumentNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except DocumentBusyError as e:
        raise HTTPException(status_code=409, detail=e.message)
