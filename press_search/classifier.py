"""Forced-search classification.

A request that is not a keyword search can still ask to be rendered as one
(``sp[force]=1``). Hosts decide "is this a search" from the keyword, so the
classifier plants a reserved keyword before routing happens and the
controller strips it again before the query is built.
"""

import logging

from .models import AdvancedFields, SearchRequest

logger = logging.getLogger(__name__)

# Reserved keyword marking a forced, keyword-less search. Never user input.
SENTINEL_KEYWORD = "1441f19754335ca4638bfdf1aea00c6d"


def is_sentinel(keyword: str | None) -> bool:
    return keyword == SENTINEL_KEYWORD


class RequestClassifier:
    """Marks forced searches on the host's main query."""

    def classify(self, request: SearchRequest) -> AdvancedFields:
        """
        Classify a request, mutating it in place when a search is forced.

        Args:
            request: The host request

        Returns:
            The parsed advanced fields of the request
        """
        advanced = AdvancedFields.from_raw(request.advanced)

        if not request.is_main_query:
            return advanced

        if not request.is_search and advanced.force:
            logger.debug("Forcing search mode for keyword-less request")
            request.keyword = SENTINEL_KEYWORD
            request.is_search = True
            request.is_home = False

        return advanced

    @staticmethod
    def strip_sentinel(request: SearchRequest) -> bool:
        """Remove the reserved keyword. Returns True if it was present."""
        if is_sentinel(request.keyword):
            request.keyword = ""
            return True
        return False
