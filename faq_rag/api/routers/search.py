"""
Search API endpoint.

Routes: POST /search

Dependencies: faq_rag.application.services, faq_rag.models
System role: Similarity search HTTP API
"""

from fastapi import APIRouter, Depends, HTTPException

from faq_rag.api.deps import get_retrieval_service
from faq_rag.application.services.retrieval_service import RetrievalService
from faq_rag.core.exceptions import SearchUnavailableError
from faq_rag.models.search import SearchRequest, SearchResponse

router = APIRouter(prefix="/search", tags=["search"])


@router.post("", response_model=SearchResponse)
async def search(
    request: SearchRequest,
    retrieval_service: RetrievalService = Depends(get_retrieval_service),
) -> SearchResponse:
    """
    Rank indexed chunks by similarity to the query.

    An empty result list means no chunk matched; a failure is reported as
    503 so it is never mistaken for "no matches".

    Raises:
        HTTPException(422): Blank query
        HTTPException(503): Search unavailable
    """
    try:
        hits = await retrieval_service.search(
            request.query,
            limit=request.limit,
            threshold=request.threshold,
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except SearchUnavailableError as e:
        raise HTTPException(status_code=503, detail=e.message)

    return SearchResponse(
        query=request.query,
        results=hits,
        count=len(hits),
        embedding_source=retrieval_service.embedder.source,
    )
