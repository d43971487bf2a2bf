"""Translation of host requests into structured backend queries."""

import logging
from typing import Any, Iterable

from .dates import DateRangeResolver
from .models import (
    AdvancedFields,
    SearchRequest,
    SortBy,
    SortOrder,
    StructuredQuery,
    normalize_page,
)
from .taxonomy import TaxonomyRegistry, TaxonomyResolver

logger = logging.getLogger(__name__)

ANY_CONTENT_TYPE = "any"


def _split_types(value: Any) -> list[str]:
    if isinstance(value, str):
        return [t.strip() for t in value.split(",") if t.strip()]
    if isinstance(value, (list, tuple, set, frozenset)):
        return [str(t).strip() for t in value if str(t).strip()]
    return []


def parse_sort_by(value: Any) -> SortBy | None:
    """Accept only allow-listed sort fields; anything else means backend default."""
    if not value:
        return None
    try:
        return SortBy(value)
    except (ValueError, TypeError):
        logger.debug(f"Dropping unsupported orderby: {value!r}")
        return None


def parse_sort_order(value: Any) -> SortOrder | None:
    if not value:
        return None
    try:
        return SortOrder(str(value).strip().lower())
    except ValueError:
        logger.debug(f"Dropping unsupported order: {value!r}")
        return None


class QueryTranslator:
    """
    Builds a StructuredQuery from a host request.

    Malformed inputs never raise: each one narrows to "omit that filter".
    """

    def __init__(
        self,
        taxonomy_registry: TaxonomyRegistry,
        indexed_content_types: Iterable[str],
        default_content_types: Iterable[str],
        facets: dict | None = None,
        date_field: str = "post_date",
    ):
        self.taxonomy_resolver = TaxonomyResolver(taxonomy_registry)
        self.date_resolver = DateRangeResolver(default_field=date_field)
        self.indexed_content_types = list(indexed_content_types)
        self.default_content_types = list(default_content_types)
        self.facets = facets

    @classmethod
    def from_config(cls, config, taxonomy_registry: TaxonomyRegistry) -> "QueryTranslator":
        return cls(
            taxonomy_registry=taxonomy_registry,
            indexed_content_types=config.indexed_content_types,
            default_content_types=config.default_content_types(),
            facets=config.facets,
            date_field=config.date_field,
        )

    def content_types(self, request: SearchRequest) -> tuple[str, ...]:
        """
        Resolve the content types to search.

        Explicit types (other than the "any" wildcard) are kept only if they
        are indexed. Falls back to the default searchable types whenever no
        usable type remains, so the result is never empty.
        """
        requested = _split_types(request.content_types)
        if ANY_CONTENT_TYPE in requested:
            requested = []
        if not requested:
            requested = _split_types(request.raw_content_types)

        content_types = []
        for content_type in requested:
            if content_type not in self.indexed_content_types:
                logger.debug(f"Dropping unindexed content type: {content_type}")
                continue
            if content_type not in content_types:
                content_types.append(content_type)

        if not content_types:
            content_types = list(dict.fromkeys(self.default_content_types))

        return tuple(content_types)

    def translate(self, request: SearchRequest, advanced: AdvancedFields | None = None) -> StructuredQuery:
        """
        Translate a request into a structured query.

        Args:
            request: The host request (sentinel keyword already stripped)
            advanced: Parsed advanced fields for the request

        Returns:
            StructuredQuery asking only for result identifiers
        """
        if advanced is None:
            advanced = AdvancedFields.from_raw(request.advanced)

        query = StructuredQuery(
            keyword=request.keyword or "",
            page=normalize_page(request.page),
            page_size=request.page_size,
            taxonomy_filters=self.taxonomy_resolver.resolve(request),
            content_types=self.content_types(request),
            date_range=self.date_resolver.resolve(request, advanced),
            order_by=parse_sort_by(request.order_by),
            order=parse_sort_order(request.order),
            facets=self.facets or None,
        )

        logger.debug(f"Translated query: {query.to_args()}")
        return query
