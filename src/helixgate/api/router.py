"""REST API routers."""

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from fastapi.responses import JSONResponse

from helixgate import __version__
from helixgate.api.deps import get_query_proxy, get_registry
from helixgate.api.schemas import ErrorResponse, HealthResponse, MetricsResponse
from helixgate.config import settings
from helixgate.engine import (
    AnimalNotFound,
    AnimalRegistry,
    DateRangeInvalid,
    QueryProxy,
    SchemaInvalid,
    StoreFailure,
)
from helixgate.models import Animal, AnimalCreate, TagResponse
from helixgate.observability.metrics import metrics

logger = logging.getLogger("helixgate.api")

router = APIRouter(prefix="/api")


def _error(status_code: int, code: str, message: str) -> JSONResponse:
    body = ErrorResponse(error_code=code, message=message)
    return JSONResponse(status_code=status_code, content=body.model_dump(by_alias=True))


# ============================================================================
# Health & Metrics
# ============================================================================


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    return HealthResponse(status="healthy", version=__version__)


@router.get("/metrics", response_model=MetricsResponse)
async def get_metrics():
    """Process-local counters and summaries."""
    return MetricsResponse(**metrics.snapshot())


# ============================================================================
# Zoo registry
# ============================================================================


zoo_router = APIRouter(prefix="/zoo/v1/animals", tags=["zoo"])


@zoo_router.post("", response_model=Animal)
async def create_animal(
    body: AnimalCreate,
    animals: AnimalRegistry = Depends(get_registry),
):
    """Register an animal under the next free id."""
    return animals.create(body)


@zoo_router.get("", response_model=list[Animal])
async def list_animals(animals: AnimalRegistry = Depends(get_registry)):
    return animals.list_animals()


@zoo_router.get("/{animal_id}", response_model=Animal)
async def get_animal(
    animal_id: int,
    animals: AnimalRegistry = Depends(get_registry),
):
    try:
        return animals.get(animal_id)
    except AnimalNotFound as e:
        raise HTTPException(status_code=404, detail=e.message)


@zoo_router.put("", response_model=Animal)
async def update_animal(
    body: Animal,
    animals: AnimalRegistry = Depends(get_registry),
):
    """Replace an animal by id. Unknown ids are inserted."""
    return animals.update(body)


@zoo_router.delete("/{animal_id}", response_model=Animal)
async def delete_animal(
    animal_id: int,
    animals: AnimalRegistry = Depends(get_registry),
):
    try:
        return animals.delete(animal_id)
    except AnimalNotFound as e:
        raise HTTPException(status_code=404, detail=e.message)


router.include_router(zoo_router)


# ============================================================================
# Time-series query proxy
# ============================================================================


async def _read_json(request: Request) -> Any:
    """Request body as JSON, or None when it is empty or not JSON."""
    try:
        return await request.json()
    except ValueError:
        return None


@router.post(
    f"/{settings.proxy_endpoint}",
    response_model=list[TagResponse],
    responses={
        204: {"description": "Query succeeded with zero rows"},
        422: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    tags=["proxy"],
)
async def query_time_series(
    request: Request,
    proxy: QueryProxy = Depends(get_query_proxy),
):
    """
    Fetch events for the requested tags within a date range.

    The body is validated here rather than by FastAPI so that schema
    errors carry the JH-4001 code instead of the framework's 422 body.
    """
    payload = await _read_json(request)

    try:
        result = await proxy.handle(payload)
    except (SchemaInvalid, DateRangeInvalid) as e:
        return _error(422, e.code, e.message)
    except StoreFailure as e:
        return _error(500, e.code, e.message)
    except Exception:
        logger.exception("Unhandled error in query proxy")
        failure = StoreFailure()
        return _error(500, failure.code, failure.message)

    if not result.has_rows:
        return Response(status_code=204)

    return JSONResponse(
        status_code=200,
        content=[r.model_dump(mode="json", by_alias=True) for r in result.responses],
    )
