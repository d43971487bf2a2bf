"""
Press Search - full-text search integration for content queries.

Translates host content queries into structured search-backend queries and
hydrates the returned identifiers back into a page of content objects.
"""

__version__ = "0.1.0"

from .classifier import SENTINEL_KEYWORD, RequestClassifier
from .config import IntegrationConfig, TaxonomyConfig, load_config
from .dates import DateRangeResolver
from .errors import InvalidPageSizeError, PressSearchError, SearchBackendError
from .hydrator import ResultHydrator, SearchClient
from .integration import IntegrationController, register_query_vars
from .log import setup_logging
from .models import (
    AdvancedFields,
    DateRange,
    HydratedResultSet,
    IntegrationStage,
    IntegrationState,
    SearchOutcome,
    SearchRequest,
    SortBy,
    SortOrder,
    StructuredQuery,
)
from .taxonomy import StaticTaxonomyRegistry, Taxonomy, TaxonomyRegistry, TaxonomyResolver
from .translator import QueryTranslator

__all__ = [
    "SENTINEL_KEYWORD",
    "RequestClassifier",
    "IntegrationConfig",
    "TaxonomyConfig",
    "load_config",
    "DateRangeResolver",
    "PressSearchError",
    "InvalidPageSizeError",
    "SearchBackendError",
    "ResultHydrator",
    "SearchClient",
    "IntegrationController",
    "register_query_vars",
    "setup_logging",
    "AdvancedFields",
    "DateRange",
    "HydratedResultSet",
    "IntegrationStage",
    "IntegrationState",
    "SearchOutcome",
    "SearchRequest",
    "SortBy",
    "SortOrder",
    "StructuredQuery",
    "StaticTaxonomyRegistry",
    "Taxonomy",
    "TaxonomyRegistry",
    "TaxonomyResolver",
    "QueryTranslator",
]
