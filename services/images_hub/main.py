"""FastAPI application for the image search hub.

GET /search?q=query&providers=unsplash,pexels&page=1&per_page=20
"""

import logging
import os
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from core.config import configure_logging
from core.images import (
    CANONICAL_ORDER,
    ImageSearchService,
    ImageSource,
    SearchResponse,
    ValidationError,
)
from core.utils.async_http_client import cleanup_all_clients, register_cleanup

from .auth import current_user_id
from .config import DEFAULT_PER_PAGE, MAX_PER_PAGE

configure_logging()
logger = logging.getLogger(__name__)


class ErrorResponse(BaseModel):
    """Body of every non-2xx response."""

    error: str
    message: str


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    providers: dict[str, bool]


class ApiError(Exception):
    """Error rendered as an ErrorResponse with the given status code."""

    def __init__(self, status_code: int, error: str, message: str):
        self.status_code = status_code
        self.error = error
        self.message = message
        super().__init__(message)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    configure_logging(run_id=f"hub-api-{os.getpid()}")
    service = ImageSearchService()
    register_cleanup("ImageSearchService", service.close)
    app.state.search_service = service
    logger.info(f"Image hub started, providers: {service.provider_status()}")
    yield
    await cleanup_all_clients()


app = FastAPI(
    title="Image Search Hub API",
    description="Unified image search across Unsplash, Pixabay and Pexels",
    version="1.0.0",
    lifespan=lifespan,
)


@app.exception_handler(ApiError)
async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=exc.error, message=exc.message).model_dump(),
    )


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content=ErrorResponse(error="Bad Request", message=exc.message).model_dump(),
    )


def get_search_service(request: Request) -> ImageSearchService:
    """The process-wide service built at startup."""
    return request.app.state.search_service


def require_user(request: Request) -> str:
    user_id = current_user_id(request)
    if not user_id:
        raise ApiError(401, "Unauthorized", "Authentication required")
    return user_id


def _parse_int(raw: str | None, default: int) -> int | None:
    """Strict parsing of ASCII digit strings; None for anything else."""
    if raw is None or raw.strip() == "":
        return default
    digits = raw.strip()
    # int() would also accept "+5", "1_0" and non-ASCII digits
    if not (digits.isascii() and digits.isdigit()):
        return None
    return int(digits)


def parse_search_params(
    q: str | None,
    providers: str | None,
    page: str | None,
    per_page: str | None,
) -> tuple[str, list[ImageSource], int, int]:
    """Validate raw query-string values.

    Raises:
        ValidationError: Any parameter is missing or out of range
    """
    query = (q or "").strip()
    if not query:
        raise ValidationError("Query parameter 'q' is required")

    if not providers:
        sources = list(CANONICAL_ORDER)
    else:
        sources = ImageSource.parse_list(providers)
    if not sources:
        raise ValidationError("At least one provider must be specified")

    page_number = _parse_int(page, 1)
    if page_number is None or page_number < 1:
        raise ValidationError("Page must be a positive integer")

    page_size = _parse_int(per_page, DEFAULT_PER_PAGE)
    if page_size is None or not 1 <= page_size <= MAX_PER_PAGE:
        raise ValidationError(f"per_page must be between 1 and {MAX_PER_PAGE}")

    return query, sources, page_number, page_size


@app.get("/health", response_model=HealthResponse)
async def health_check(
    service: ImageSearchService = Depends(get_search_service),
) -> HealthResponse:
    """Report which providers have credentials configured."""
    status = service.provider_status()
    return HealthResponse(
        status="healthy" if all(status.values()) else "degraded",
        providers=status,
    )


@app.get(
    "/search",
    response_model=SearchResponse,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def search(
    q: str | None = None,
    providers: str | None = None,
    page: str | None = None,
    per_page: str | None = None,
    user_id: str = Depends(require_user),
    service: ImageSearchService = Depends(get_search_service),
) -> Any:
    """Search the selected providers and return results grouped by provider."""
    query, sources, page_number, page_size = parse_search_params(
        q, providers, page, per_page
    )
    try:
        return await service.search(
            query, providers=sources, page=page_number, per_page=page_size
        )
    except ValidationError:
        raise
    except Exception as e:
        logger.exception(f"Search API error for '{query}'")
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(
                error="Internal Server Error",
                message=str(e) or "Failed to search images",
            ).model_dump(),
        )
