"""Taxonomy term filters."""

import logging
import re
from dataclasses import dataclass
from typing import Any, Iterable, Protocol

from .models import SearchRequest

logger = logging.getLogger(__name__)

_TERM_SEPARATORS = re.compile(r"[,+]")


@dataclass(frozen=True)
class Taxonomy:
    """A categorization axis registered with the host."""
    name: str
    query_var: str
    public: bool = True


class TaxonomyRegistry(Protocol):
    """Read-only view of the host's taxonomies."""

    def public_query_vars(self) -> dict[str, str]:
        """Map each public taxonomy identifier to its query variable."""
        ...


class StaticTaxonomyRegistry:
    """Registry backed by a fixed list of taxonomies."""

    def __init__(self, taxonomies: Iterable[Taxonomy] = ()):
        self.taxonomies = list(taxonomies)

    @classmethod
    def from_config(cls, config) -> "StaticTaxonomyRegistry":
        return cls(
            Taxonomy(name=t.name, query_var=t.query_var, public=t.public)
            for t in config.taxonomies
        )

    def public_query_vars(self) -> dict[str, str]:
        return {t.name: t.query_var for t in self.taxonomies if t.public and t.query_var}


def _terms(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        raw = _TERM_SEPARATORS.split(value)
    elif isinstance(value, (list, tuple, set, frozenset)):
        raw = [str(v) for v in value]
    else:
        raw = [str(value)]

    terms = []
    for term in raw:
        term = term.strip()
        if term and term not in terms:
            terms.append(term)
    return terms


class TaxonomyResolver:
    """Maps registered taxonomy query variables on a request to term filters."""

    def __init__(self, registry: TaxonomyRegistry):
        self.registry = registry

    def resolve(self, request: SearchRequest) -> dict[str, list[str]]:
        """
        Build the taxonomy filter for a request.

        Query variables that belong to no public taxonomy are ignored.

        Returns:
            Mapping of taxonomy identifier to term identifiers
        """
        by_query_var = {qv: name for name, qv in self.registry.public_query_vars().items()}

        filters: dict[str, list[str]] = {}
        for qv, value in request.query_vars.items():
            taxonomy = by_query_var.get(qv)
            if taxonomy is None:
                continue
            terms = _terms(value)
            if terms:
                filters[taxonomy] = terms

        if filters:
            logger.debug(f"Taxonomy filters: {filters}")
        return filters
