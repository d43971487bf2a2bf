"""Data models for the search integration."""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping

# Field the backend is asked to return for each hit.
IDENTIFIER_FIELD = "post_id"


class SortBy(Enum):
    """Sort options accepted by the backend."""
    DATE = "date"
    RELEVANCE = "relevance"


class SortOrder(Enum):
    """Sort order options."""
    ASC = "asc"
    DESC = "desc"


class IntegrationStage(Enum):
    """Where a request is in the integration pipeline."""
    IDLE = "idle"
    CLASSIFIED = "classified"
    TRANSLATING = "translating"
    SEARCHED = "searched"
    HYDRATED = "hydrated"
    BYPASSED = "bypassed"


def _is_one(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    try:
        return int(str(value).strip()) == 1
    except (TypeError, ValueError):
        return False


def _clean(value: Any) -> str | None:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


@dataclass
class AdvancedFields:
    """Advanced search fields carried by the advanced query variable."""
    force: bool = False
    date_from: str | None = None
    date_to: str | None = None

    @classmethod
    def from_raw(cls, data: Any) -> "AdvancedFields":
        """
        Parse the raw query variable value.

        Accepts ``from``/``to`` as well as the short ``f``/``t`` keys.
        Anything that is not a mapping yields empty fields.
        """
        if isinstance(data, AdvancedFields):
            return data
        if not isinstance(data, dict) or not data:
            return cls()

        date_from = data.get("from")
        if date_from in (None, ""):
            date_from = data.get("f")
        date_to = data.get("to")
        if date_to in (None, ""):
            date_to = data.get("t")

        return cls(
            force=_is_one(data.get("force")),
            date_from=_clean(date_from),
            date_to=_clean(date_to),
        )

    def is_empty(self) -> bool:
        return not (self.force or self.date_from or self.date_to)


@dataclass
class SearchRequest:
    """
    A host request as seen by the integration.

    Owned by the host; the classifier and controller mutate it in place.
    """
    keyword: str = ""
    page: int = 1
    page_size: int | None = 10

    # Structured content-type filter, or the raw comma list from the query string
    content_types: list[str] | str | None = None
    raw_content_types: str | None = None

    # Query variables as parsed by the host (taxonomy vars live here)
    query_vars: dict[str, Any] = field(default_factory=dict)

    year: int | str | None = None
    month: int | str | None = None
    day: int | str | None = None

    advanced: AdvancedFields | dict[str, Any] | None = None

    order_by: str | None = None
    order: str | None = None

    is_main_query: bool = True
    is_search: bool = False
    is_home: bool = False

    # Written back after hydration
    found_posts: int = 0
    max_num_pages: int = 0

    def __post_init__(self):
        self.page = normalize_page(self.page)


def normalize_page(page: Any) -> int:
    """Coerce a pagination cursor to an integer >= 1."""
    try:
        page = abs(int(page))
    except (TypeError, ValueError):
        return 1
    return page or 1


@dataclass(frozen=True)
class DateRange:
    """Inclusive timestamp window, formatted ``YYYY-MM-DD HH:MM:SS``."""
    start: str | None = None
    end: str | None = None
    field: str | None = None

    def to_args(self) -> dict[str, str]:
        args = {"gte": self.start, "lte": self.end, "field": self.field}
        return {k: v for k, v in args.items() if v is not None}


@dataclass(frozen=True)
class StructuredQuery:
    """Backend-ready description of a search request."""
    keyword: str
    page: int
    page_size: int | None
    taxonomy_filters: Mapping[str, tuple[str, ...]] = field(default_factory=dict)
    content_types: tuple[str, ...] = ()
    date_range: DateRange | None = None
    order_by: SortBy | None = None
    order: SortOrder | None = None
    facets: Mapping[str, Any] | None = None
    returned_fields: frozenset[str] = frozenset({IDENTIFIER_FIELD})

    def __post_init__(self):
        # Read-only views so the built query cannot be changed through its containers
        filters = {k: tuple(v) for k, v in self.taxonomy_filters.items()}
        object.__setattr__(self, "taxonomy_filters", MappingProxyType(filters))
        object.__setattr__(self, "content_types", tuple(self.content_types))
        object.__setattr__(self, "returned_fields", frozenset(self.returned_fields))
        if self.facets is not None:
            object.__setattr__(self, "facets", MappingProxyType(dict(self.facets)))

    def to_args(self) -> dict[str, Any]:
        """Render the query in the search client's argument vocabulary."""
        args: dict[str, Any] = {
            "query": self.keyword,
            "posts_per_page": self.page_size,
            "paged": self.page,
        }
        if self.taxonomy_filters:
            args["terms"] = {k: list(v) for k, v in self.taxonomy_filters.items()}
        if self.content_types:
            args["post_type"] = list(self.content_types)
        if self.date_range:
            args["date_range"] = self.date_range.to_args()
        if self.order_by:
            args["orderby"] = self.order_by.value
        if self.order:
            args["order"] = self.order.value
        if self.facets:
            args["facets"] = dict(self.facets)
        args["fields"] = sorted(self.returned_fields)
        return args


@dataclass
class SearchOutcome:
    """What the search client returned for one query."""
    hits: list[Any] = field(default_factory=list)
    total: int = 0
    aggregations: dict[str, Any] | None = None

    def pluck_field(self, name: str = IDENTIFIER_FIELD) -> list[Any]:
        """
        Return one value of ``name`` per hit, in hit order.

        Looks in the hit's ``fields`` block first, then ``_source``, then the
        hit itself. A hit that is not a mapping is taken as the value.
        Single-element lists are unwrapped; missing values are None.
        """
        values = []
        for hit in self.hits:
            if not isinstance(hit, Mapping):
                # Plain identifier
                values.append(hit)
                continue
            value = None
            for container in (hit.get("fields"), hit.get("_source"), hit):
                if isinstance(container, Mapping) and name in container:
                    value = container[name]
                    break
            if isinstance(value, (list, tuple)):
                value = value[0] if value else None
            values.append(value)
        return values


@dataclass
class HydratedResultSet:
    """A page of content objects plus paging numbers."""
    items: list[Any] = field(default_factory=list)
    found_count: int = 0
    max_page: int = 0
    overridden: bool = False


@dataclass
class IntegrationState:
    """Per-request state. Allocate one per request and drop it afterwards."""
    stage: IntegrationStage = IntegrationStage.IDLE
    advanced: AdvancedFields = field(default_factory=AdvancedFields)
    query: StructuredQuery | None = None
    outcome: SearchOutcome | None = None
    found_count: int = 0
