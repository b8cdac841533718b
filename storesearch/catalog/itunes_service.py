"""
iTunes Search API integration for the catalogue.  This module knows how
to talk to the remote endpoint and nothing else; it keeps no state
between calls.  It exposes:

* ``build_search_url()`` -- compose the ``GET`` URL for a query text
  and a ``Category``.

* ``fetch_results()`` -- perform the request and return the raw
  ``results`` list, raising one of the batch-level errors from
  ``errors.py`` when the request or the envelope is unusable.

* ``search_catalog()`` -- the two steps above followed by per-item
  parsing and sorting.  Malformed records are dropped, never fatal.

Requests go through an ``httpx.AsyncClient`` so that cancelling the
awaiting task aborts the network operation itself.
"""

from __future__ import annotations

import logging
import urllib.parse
from typing import Any, Iterable, List

import httpx

from ..config import SearchSettings
from .errors import DecodeFailure, ItemParseError, ProtocolFailure, TransportFailure
from .schemas import CatalogItem, Category, sort_by_name


logger = logging.getLogger(__name__)


def create_client(settings: SearchSettings) -> httpx.AsyncClient:
    """Return an ``AsyncClient`` configured with the headers and timeout from ``settings``."""
    return httpx.AsyncClient(
        timeout=settings.timeout_seconds,
        headers={
            "User-Agent": settings.user_agent,
            "Accept": "application/json",
        },
    )


def build_search_url(text: str, category: Category, settings: SearchSettings) -> str:
    """Compose the search URL.

    Spaces and reserved characters in ``text`` are percent-encoded
    (``%20`` rather than ``+``).  The ``entity`` parameter is omitted
    for ``Category.ALL``.
    """
    params = {
        "term": text,
        "limit": settings.result_limit,
    }
    entity = category.entity
    if entity:
        params["entity"] = entity
    query = urllib.parse.urlencode(params, quote_via=urllib.parse.quote)
    return f"{settings.endpoint}?{query}"


async def fetch_results(client: httpx.AsyncClient, url: str) -> List[Any]:
    """Fetch ``url`` and return the undecoded item records of its ``results`` list."""
    try:
        response = await client.get(url)
    except httpx.HTTPError as exc:
        raise TransportFailure(f"Error fetching {url}: {exc}") from exc
    if not response.is_success:
        raise ProtocolFailure(response.status_code, url)
    try:
        payload = response.json()
    except ValueError as exc:
        raise DecodeFailure(f"Response from {url} is not valid JSON") from exc
    if not isinstance(payload, dict):
        raise DecodeFailure(f"Response from {url} is not a JSON object")
    results = payload.get("results")
    if not isinstance(results, list):
        raise DecodeFailure(f"Response from {url} has no 'results' list")
    return results


def parse_results(records: Iterable[Any]) -> List[CatalogItem]:
    """Parse every record, skip the malformed ones and sort the rest by name."""
    items: List[CatalogItem] = []
    dropped = 0
    for index, record in enumerate(records):
        try:
            items.append(CatalogItem.parse(record))
        except ItemParseError as exc:
            dropped += 1
            logger.debug("Dropping result #%d: %s", index, exc)
    if dropped:
        logger.info("Dropped %d malformed result(s), kept %d", dropped, len(items))
    return sort_by_name(items)


async def search_catalog(
    client: httpx.AsyncClient,
    text: str,
    category: Category,
    settings: SearchSettings,
) -> List[CatalogItem]:
    """Search the catalog and return the parsed items, sorted by name."""
    url = build_search_url(text, category, settings)
    logger.info("Searching catalog: %s", url)
    records = await fetch_results(client, url)
    return parse_results(records)
