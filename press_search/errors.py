"""Exceptions raised by the search integration."""


class PressSearchError(Exception):
    """Base error for the search integration."""
    pass


class InvalidPageSizeError(PressSearchError):
    """Page size is missing or not a positive integer."""
    def __init__(self, page_size):
        self.page_size = page_size
        super().__init__(f"Invalid page size: {page_size!r}")


class SearchBackendError(PressSearchError):
    """The search client failed while executing a query."""
    def __init__(self, message: str, keyword: str | None = None):
        self.keyword = keyword
        super().__init__(message)
