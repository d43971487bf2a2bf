"""
Press Search - Taxonomy Tests

Tests for the taxonomy registry and resolver.
"""

import pytest

from press_search.config import IntegrationConfig
from press_search.models import SearchRequest
from press_search.taxonomy import StaticTaxonomyRegistry, Taxonomy, TaxonomyResolver


@pytest.fixture
def registry():
    """Registry with two public taxonomies and one private one."""
    return StaticTaxonomyRegistry([
        Taxonomy(name="category", query_var="category_name"),
        Taxonomy(name="post_tag", query_var="tag"),
        Taxonomy(name="internal", query_var="internal", public=False),
    ])


class TestStaticTaxonomyRegistry:
    """Tests for StaticTaxonomyRegistry."""

    def test_public_only(self, registry):
        """Test private taxonomies are not listed."""
        assert registry.public_query_vars() == {"category": "category_name", "post_tag": "tag"}

    def test_from_config(self):
        """Test building the registry from configuration."""
        registry = StaticTaxonomyRegistry.from_config(IntegrationConfig())
        assert registry.public_query_vars() == {"category": "category_name", "post_tag": "tag"}


class TestTaxonomyResolver:
    """Tests for TaxonomyResolver.resolve."""

    def test_maps_query_vars_to_taxonomies(self, registry):
        """Test query variables are keyed by taxonomy identifier."""
        request = SearchRequest(query_vars={"category_name": "news", "tag": "python"})
        filters = TaxonomyResolver(registry).resolve(request)
        assert filters == {"category": ["news"], "post_tag": ["python"]}

    def test_splits_term_lists(self, registry):
        """Test comma and plus separated term lists."""
        request = SearchRequest(query_vars={"category_name": "news,sports", "tag": "a+b+a"})
        filters = TaxonomyResolver(registry).resolve(request)
        assert filters == {"category": ["news", "sports"], "post_tag": ["a", "b"]}

    def test_list_values(self, registry):
        """Test list-valued query variables."""
        request = SearchRequest(query_vars={"tag": ["x", "y"]})
        assert TaxonomyResolver(registry).resolve(request) == {"post_tag": ["x", "y"]}

    def test_ignores_unregistered_and_private(self, registry):
        """Test unknown and private query variables are ignored."""
        request = SearchRequest(query_vars={"internal": "secret", "color": "red", "tag": "ok"})
        assert TaxonomyResolver(registry).resolve(request) == {"post_tag": ["ok"]}

    def test_ignores_empty_values(self, registry):
        """Test empty values produce no filter."""
        request = SearchRequest(query_vars={"category_name": "", "tag": None})
        assert TaxonomyResolver(registry).resolve(request) == {}

    def test_idempotent(self, registry):
        """Test resolving twice gives the same filters."""
        request = SearchRequest(query_vars={"category_name": "news", "tag": "a,b"})
        resolver = TaxonomyResolver(registry)
        assert resolver.resolve(request) == resolver.resolve(request)
