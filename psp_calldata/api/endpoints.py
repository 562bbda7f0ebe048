"""API endpoints for swap calldata preparation."""

from functools import lru_cache

import structlog
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from psp_calldata.cache import CacheStore, FileCacheStore, MemoryCacheStore, ResponseCache
from psp_calldata.config import Settings
from psp_calldata.errors import (
    CollaboratorError,
    InvalidInput,
    UnsupportedSelector,
)
from psp_calldata.models.request import SwapRequest
from psp_calldata.orchestrator import RouteOrchestrator
from psp_calldata.paraswap import ParaSwapClient

logger = structlog.get_logger()

router = APIRouter()


class CalldataResponse(BaseModel):
    """Emitted record plus the cache key it is stored under."""

    encoded: str
    cache_key: str = Field(alias="cacheKey")
    cached: bool

    model_config = {"populate_by_name": True}


@lru_cache(maxsize=1)
def get_default_orchestrator() -> RouteOrchestrator:
    settings = Settings.from_env()
    client = ParaSwapClient(
        api_url=settings.api_url,
        timeout=settings.timeout,
        partner=settings.partner,
    )
    # Handlers run concurrently in the threadpool
    store: CacheStore = (
        FileCacheStore(settings.cache_dir, lock=True)
        if settings.cache_dir is not None
        else MemoryCacheStore()
    )
    return RouteOrchestrator(client, client, ResponseCache(store), partner=settings.partner)


def get_orchestrator() -> RouteOrchestrator:
    """Dependency provider for the orchestrator.

    Override this in tests to inject one wired to a mock aggregator:
        app.dependency_overrides[get_orchestrator] = lambda: orchestrator
    """
    return get_default_orchestrator()


@router.post("/calldata", response_model=CalldataResponse, response_model_by_alias=True)
def prepare_calldata(
    request: SwapRequest,
    orchestrator: RouteOrchestrator = Depends(get_orchestrator),
) -> CalldataResponse:
    """Prepare the adapter record for one swap.

    Error Handling:
        - Invalid request schema: 422 (Pydantic)
        - Unsupported router method: 422
        - Aggregator timeout or transport failure: 504
        - Aggregator rejected the quote or build: 502
    """
    logger.info(
        "received_calldata_request",
        chain_id=request.chain_id,
        side=request.side.value,
        max=request.max,
    )
    try:
        prepared = orchestrator.run(request)
    except (InvalidInput, UnsupportedSelector) as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    except CollaboratorError as e:
        logger.warning("aggregator_failed", error_type=type(e).__name__, error=str(e))
        raise HTTPException(status_code=504 if e.retryable else 502, detail=str(e)) from e

    return CalldataResponse(
        encoded=prepared.output.decode("ascii"),
        cache_key=prepared.key,
        cached=prepared.cached,
    )
