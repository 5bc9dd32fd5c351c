"""Embed API endpoints"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from review_embed.core.embedder import place_embedder
from review_embed.core.schema_composer import compose_schema
from review_embed.models.errors import ApplicationError
from review_embed.models.schemas import EmbedRequest, EmbedResponse, ErrorResponse, SchemaRequest
import logging

logger = logging.getLogger(__name__)

router = APIRouter()

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
    502: {"model": ErrorResponse},
}


def _error_response(error: dict, status_code: int) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=error)


@router.post("/embed", response_model=EmbedResponse, responses=ERROR_RESPONSES)
async def embed(request: EmbedRequest):
    """
    Fetch a place and render its schema, reviews and opening hours.

    Returns the JSON-LD record, the render instructions and, when `html` was
    posted, the rendered page.
    """
    result = await place_embedder.embed(request.place_id, request.options, request.html)
    if result.error is not None:
        logger.error(f"[ENDPOINT] Embed failed for {request.place_id}: {result.error['code']}")
        status_code = ApplicationError.status_for(result.error["code"])
        return _error_response(result.error, status_code)

    return EmbedResponse(
        place_id=result.place_id,
        schema_record=result.schema_record,
        instructions=result.instructions,
        html=result.html,
        feature_errors=result.feature_errors,
    )


@router.post("/schema", responses=ERROR_RESPONSES)
async def schema(request: SchemaRequest):
    """Return only the structured-data record for a place."""
    try:
        payload = await place_embedder.fetcher.fetch_place(request.place_id)
    except ApplicationError as e:
        logger.error(f"[ENDPOINT] Schema fetch failed for {request.place_id}: {e.code.value}")
        return _error_response(e.model_dump(), e.http_status)

    return compose_schema(payload, request.schema_fields, place_embedder.closed_token)
