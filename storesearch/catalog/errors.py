"""
Exceptions raised while talking to the catalog search endpoint.

Batch-level failures (``TransportFailure``, ``ProtocolFailure`` and
``DecodeFailure``) abort a whole search and are reported to the caller
as an unsuccessful completion.  ``ItemParseError`` concerns a single
record only; the service drops that record and carries on with the
rest of the batch.
"""

from typing import Optional


class SearchError(Exception):
    """Base class for every error raised by the catalog package."""


class TransportFailure(SearchError):
    """The request never produced a response (connection, timeout, ...)."""


class ProtocolFailure(SearchError):
    """The endpoint answered with a non-success status code."""

    def __init__(self, status_code: int, url: Optional[str] = None):
        self.status_code = status_code
        self.url = url
        super().__init__(f"Search endpoint returned status {status_code}")


class DecodeFailure(SearchError):
    """The response body is not the expected ``{"results": [...]}`` envelope."""


class ItemParseError(SearchError, ValueError):
    """A single result record could not be turned into a ``CatalogItem``."""
