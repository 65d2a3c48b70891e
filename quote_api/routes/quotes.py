from typing import Any

import structlog
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from quote_api.dependencies import get_quote_store, get_request_id
from quote_api.services.quote_store import QuoteStore

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.get("/quote")
def random_quote(
    store: QuoteStore = Depends(get_quote_store),
    request_id: str = Depends(get_request_id),
) -> dict[str, Any]:
    """
    Return one quote picked uniformly at random.

    Returns:
        dict: Quote text, author and request ID
    """
    quote = store.get_random()
    return {"quote": quote.text, "author": quote.author, "requestId": request_id}


@router.get("/quotes")
def list_quotes(
    store: QuoteStore = Depends(get_quote_store),
    request_id: str = Depends(get_request_id),
) -> dict[str, Any]:
    """
    Return the whole collection in load order.

    Returns:
        dict: Quote count, quotes and request ID
    """
    quotes = store.get_all()
    return {
        "count": len(quotes),
        "quotes": [quote.model_dump() for quote in quotes],
        "requestId": request_id,
    }


@router.get("/quotes/{quote_id}", response_model=None)
def get_quote(
    quote_id: str,
    store: QuoteStore = Depends(get_quote_store),
    request_id: str = Depends(get_request_id),
) -> Any:
    """
    Return a single quote by ID.

    The ID is taken as a raw string so that malformed values get the same
    404 as unknown IDs rather than a validation error.

    Args:
        quote_id: Raw path segment

    Returns:
        dict: Quote fields plus request ID, or a 404 JSONResponse
    """
    quote = store.get_by_id(quote_id)
    if quote is None:
        logger.info("quote_not_found", request_id=request_id, quote_id=quote_id)
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={
                "error": "Quote not found",
                "message": f"No quote exists with ID: {quote_id}",
                "requestId": request_id,
            },
        )

    return {**quote.model_dump(), "requestId": request_id}
