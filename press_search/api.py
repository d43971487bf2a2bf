"""HTTP adapter: parses a query string into a SearchRequest and runs the integration."""

import logging
from typing import Any

from fastapi import APIRouter, FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel

from .config import IntegrationConfig
from .classifier import is_sentinel
from .errors import InvalidPageSizeError, SearchBackendError
from .integration import IntegrationController
from .log import setup_logging
from .models import SearchRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/search", tags=["search"])

# These get set by init_api()
_controller: IntegrationController | None = None
_config: IntegrationConfig | None = None

# Query string keys that are not taxonomy query variables
_RESERVED_PARAMS = {"s", "paged", "posts_per_page", "post_type", "year", "monthnum", "day", "orderby", "order"}


def init_api(controller: IntegrationController, config: IntegrationConfig | None = None):
    """Initialize API with the integration controller."""
    global _controller, _config
    _controller = controller
    _config = config or controller.config


# --- Request/Response Models ---


class SearchResponse(BaseModel):
    integrated: bool
    is_search: bool
    keyword: str
    page: int
    found_posts: int
    max_num_pages: int
    items: list[Any]


# --- Query string parsing ---


def parse_advanced_params(params, query_var: str) -> dict[str, str]:
    """Collect ``sp[key]=value`` style parameters into a dict."""
    prefix = f"{query_var}["
    advanced = {}
    for key, value in params.items():
        if key.startswith(prefix) and key.endswith("]"):
            advanced[key[len(prefix):-1]] = value
    return advanced


def _page_size(value: str | None, default: int) -> Any:
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError:
        # Rejected by the hydrator as an invalid page size
        return value


def build_request(params, config: IntegrationConfig) -> SearchRequest:
    """Build a SearchRequest from query parameters."""
    keyword = (params.get("s") or "").strip()
    query_vars = {
        key: value
        for key, value in params.items()
        if key not in _RESERVED_PARAMS and not key.startswith(f"{config.query_var}[")
    }

    return SearchRequest(
        keyword=keyword,
        page=params.get("paged") or 1,
        page_size=_page_size(params.get("posts_per_page"), config.default_page_size),
        raw_content_types=params.get("post_type"),
        query_vars=query_vars,
        year=params.get("year"),
        month=params.get("monthnum"),
        day=params.get("day"),
        advanced=parse_advanced_params(params, config.query_var),
        order_by=params.get("orderby"),
        order=params.get("order"),
        is_main_query=True,
        is_search=bool(keyword),
        is_home=not params,
    )


# --- Endpoints ---


@router.get("/", response_model=SearchResponse)
def search(http_request: Request):
    """
    Run a content search from WordPress-style query parameters.

    Supports ``s``, ``paged``, ``posts_per_page``, ``post_type`` (comma list),
    ``year``/``monthnum``/``day`` archives, ``orderby``/``order``, registered
    taxonomy query variables, and advanced fields as ``sp[force]``,
    ``sp[f]`` and ``sp[t]``.
    """
    if _controller is None or _config is None:
        raise HTTPException(status_code=503, detail="Search service not initialized")

    request = build_request(http_request.query_params, _config)

    try:
        result, _state = _controller.handle(request)
    except InvalidPageSizeError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except SearchBackendError as e:
        raise HTTPException(status_code=502, detail=str(e))

    if result is None:
        return SearchResponse(
            integrated=False,
            is_search=request.is_search,
            keyword="" if is_sentinel(request.keyword) else request.keyword,
            page=request.page,
            found_posts=0,
            max_num_pages=0,
            items=[],
        )

    return SearchResponse(
        integrated=True,
        is_search=request.is_search,
        keyword=request.keyword,
        page=request.page,
        found_posts=result.found_count,
        max_num_pages=result.max_page,
        items=jsonable_encoder(result.items),
    )


def create_app(controller: IntegrationController, config: IntegrationConfig | None = None) -> FastAPI:
    """Build a standalone app serving the search router."""
    config = config or controller.config
    setup_logging(config.log_level, config.log_format)
    init_api(controller, config)

    app = FastAPI(title="Press Search")
    app.include_router(router)
    return app
