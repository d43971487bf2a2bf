"""Integration controller: classification, translation, search and hydration per request."""

import logging
from typing import Callable

from .classifier import RequestClassifier
from .config import IntegrationConfig
from .hydrator import ContentLookup, OverrideHook, ResultHydrator, SearchClient
from .models import (
    AdvancedFields,
    HydratedResultSet,
    IntegrationStage,
    IntegrationState,
    SearchRequest,
)
from .taxonomy import StaticTaxonomyRegistry, TaxonomyRegistry
from .translator import QueryTranslator

logger = logging.getLogger(__name__)

# (request, default decision) -> final decision
ShouldIntegrate = Callable[[SearchRequest, bool], bool]


def register_query_vars(query_vars: list[str], query_var: str = "sp") -> list[str]:
    """Return the host's query variables with the advanced-field variable added."""
    if query_var in query_vars:
        return list(query_vars)
    return [*query_vars, query_var]


def default_should_integrate(request: SearchRequest) -> bool:
    return request.is_main_query and request.is_search


class IntegrationController:
    """
    Replaces the host's default fetch with backend search results.

    The host calls ``classify()`` while parsing a request, then ``run()`` where
    it would otherwise fetch content. Each request gets its own
    IntegrationState; the controller itself holds no per-request data.
    """

    def __init__(
        self,
        search_client: SearchClient,
        content_lookup: ContentLookup,
        config: IntegrationConfig | None = None,
        taxonomy_registry: TaxonomyRegistry | None = None,
        override_hook: OverrideHook | None = None,
        should_integrate: ShouldIntegrate | None = None,
    ):
        self.config = config or IntegrationConfig()
        self.taxonomy_registry = taxonomy_registry or StaticTaxonomyRegistry.from_config(self.config)
        self.should_integrate = should_integrate

        self.classifier = RequestClassifier()
        self.translator = QueryTranslator.from_config(self.config, self.taxonomy_registry)
        self.hydrator = ResultHydrator(
            search_client=search_client,
            content_lookup=content_lookup,
            override_hook=override_hook,
        )

    def query_vars(self, query_vars: list[str]) -> list[str]:
        return register_query_vars(query_vars, self.config.query_var)

    def classify(self, request: SearchRequest) -> IntegrationState:
        """
        Classify a request during parsing and start its state.

        Returns:
            A fresh IntegrationState for this request
        """
        state = IntegrationState()
        if not self.config.enabled:
            state.advanced = AdvancedFields.from_raw(request.advanced)
            return state

        state.advanced = self.classifier.classify(request)
        state.stage = IntegrationStage.CLASSIFIED
        return state

    def integrates(self, request: SearchRequest) -> bool:
        """Whether this request should be served by the search backend."""
        if not self.config.enabled:
            return False
        decision = default_should_integrate(request)
        if self.should_integrate is not None:
            decision = bool(self.should_integrate(request, decision))
        return decision

    def run(self, request: SearchRequest, state: IntegrationState | None = None) -> HydratedResultSet | None:
        """
        Fetch the results for a request from the search backend.

        Args:
            request: The host request
            state: State returned by ``classify()``; a fresh one is created if omitted

        Returns:
            HydratedResultSet, or None when the request is not integrated and
            the host should run its default fetch

        Raises:
            InvalidPageSizeError: page size missing or not positive
            SearchBackendError: the search client failed
        """
        if state is None:
            state = IntegrationState(advanced=AdvancedFields.from_raw(request.advanced))

        if not self.integrates(request):
            state.stage = IntegrationStage.BYPASSED
            logger.debug("Request not integrated, leaving it to the host")
            return None

        self.classifier.strip_sentinel(request)
        request.is_search = True

        state.stage = IntegrationStage.TRANSLATING
        state.query = self.translator.translate(request, state.advanced)

        result = self.hydrator.hydrate(state.query, request, state)
        state.stage = IntegrationStage.HYDRATED

        request.found_posts = result.found_count
        request.max_num_pages = result.max_page
        return result

    def handle(self, request: SearchRequest) -> tuple[HydratedResultSet | None, IntegrationState]:
        """Classify and run a request in one call."""
        state = self.classify(request)
        return self.run(request, state), state
