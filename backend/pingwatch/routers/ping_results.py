"""Ping results API."""
import logging
from typing import List

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from ..errors import StoreError
from ..schemas import PingResultResponse, ErrorResponse
from ..services.store import ResultStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["ping-results"])


def get_store(request: Request) -> ResultStore:
    """Dependency returning the store created at startup."""
    return request.app.state.store


@router.get(
    "/ping-results",
    response_model=List[PingResultResponse],
    responses={500: {"model": ErrorResponse}},
)
async def list_ping_results(store: ResultStore = Depends(get_store)):
    """Return every stored ping result."""
    try:
        rows = await store.list_all()
    except StoreError as e:
        logger.error(str(e))
        return JSONResponse(status_code=500, content={"error": "Failed to fetch data"})
    return [PingResultResponse.model_validate(row) for row in rows]
