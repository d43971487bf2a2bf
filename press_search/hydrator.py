"""Search execution and result hydration."""

import logging
import math
from typing import Any, Callable, Optional, Protocol

from .errors import InvalidPageSizeError, PressSearchError, SearchBackendError
from .log import log_error_with_context
from .models import (
    HydratedResultSet,
    IntegrationStage,
    IntegrationState,
    SearchOutcome,
    SearchRequest,
    StructuredQuery,
)

logger = logging.getLogger(__name__)

OverrideHook = Callable[[SearchOutcome, SearchRequest], Optional[list]]
ContentLookup = Callable[[int], Any]


class SearchClient(Protocol):
    """Executes structured queries against the search backend."""

    def search(self, query: StructuredQuery) -> SearchOutcome:
        ...


def max_pages(found_count: int, page_size: int) -> int:
    """Number of pages needed to show ``found_count`` results."""
    if page_size <= 0:
        raise InvalidPageSizeError(page_size)
    return math.ceil(max(found_count, 0) / page_size)


def coerce_identifier(value: Any) -> int | None:
    """Return a positive integer identifier, or None if the value is not one."""
    if value is None or isinstance(value, bool):
        return None
    try:
        identifier = int(str(value).strip())
    except ValueError:
        return None
    return identifier if identifier > 0 else None


def _found_count(outcome: SearchOutcome, keyword: str) -> int:
    try:
        total = int(outcome.total or 0)
    except (TypeError, ValueError) as e:
        log_error_with_context(logger, "Search backend returned a malformed total", e, keyword=keyword)
        raise SearchBackendError(f"Malformed total from search backend: {outcome.total!r}", keyword=keyword) from e
    return max(total, 0)


def _page_size(query: StructuredQuery) -> int:
    try:
        page_size = int(query.page_size)
    except (TypeError, ValueError):
        raise InvalidPageSizeError(query.page_size) from None
    if page_size <= 0:
        raise InvalidPageSizeError(query.page_size)
    return page_size


class ResultHydrator:
    """
    Runs a structured query and turns its hits into content objects.

    Collaborators:
    - search_client: executes the query
    - content_lookup: resolves an identifier to a content object (or None)
    - override_hook: may replace the whole result for non-empty outcomes
    """

    def __init__(
        self,
        search_client: SearchClient,
        content_lookup: ContentLookup,
        override_hook: OverrideHook | None = None,
    ):
        self.search_client = search_client
        self.content_lookup = content_lookup
        self.override_hook = override_hook

    def execute(self, query: StructuredQuery) -> SearchOutcome:
        """Run the query, wrapping client failures in SearchBackendError."""
        try:
            return self.search_client.search(query)
        except PressSearchError:
            raise
        except Exception as e:
            log_error_with_context(
                logger,
                "Search backend failed",
                e,
                keyword=query.keyword,
                page=query.page,
                content_types=",".join(query.content_types),
            )
            raise SearchBackendError(f"Search backend failed: {e}", keyword=query.keyword) from e

    def hydrate(
        self,
        query: StructuredQuery,
        request: SearchRequest,
        state: IntegrationState | None = None,
    ) -> HydratedResultSet:
        """
        Execute the query and build a page of results.

        Args:
            query: Structured query to run
            request: The originating host request (passed to the override hook)
            state: Per-request state updated with the outcome and found count

        Returns:
            HydratedResultSet

        Raises:
            InvalidPageSizeError: page size missing or not positive
            SearchBackendError: the search client failed
        """
        page_size = _page_size(query)

        outcome = self.execute(query)
        found_count = _found_count(outcome, query.keyword)
        max_page = max_pages(found_count, page_size)

        if state is not None:
            state.outcome = outcome
            state.found_count = found_count
            state.stage = IntegrationStage.SEARCHED

        logger.info(
            f"Search '{query.keyword}' page {query.page}: {found_count} found, {len(outcome.hits)} hits"
        )

        if not outcome.hits:
            return HydratedResultSet(items=[], found_count=found_count, max_page=max_page)

        if self.override_hook is not None:
            override = self.override_hook(outcome, request)
            if override is not None:
                logger.debug("Search results replaced by override hook")
                return HydratedResultSet(
                    items=override,
                    found_count=found_count,
                    max_page=max_page,
                    overridden=True,
                )

        items = []
        for value in outcome.pluck_field():
            identifier = coerce_identifier(value)
            if identifier is None:
                logger.debug(f"Skipping invalid identifier: {value!r}")
                continue
            item = self.content_lookup(identifier)
            if item is None:
                logger.debug(f"Skipping unresolvable identifier: {identifier}")
                continue
            items.append(item)

        return HydratedResultSet(items=items, found_count=found_count, max_page=max_page)
