import httpx
import pytest

from storesearch.catalog.search import Search
from storesearch.config import SearchSettings


def make_record(name="Song", price=0.99, **overrides):
    """A track record shaped like the iTunes Search API returns it."""
    record = {
        "wrapperType": "track",
        "kind": "song",
        "trackName": name,
        "artistName": "Some Artist",
        "primaryGenreName": "Pop",
        "currency": "USD",
        "trackPrice": price,
        "artworkUrl60": "https://example.com/60.jpg",
        "artworkUrl100": "https://example.com/100.jpg",
        "trackViewUrl": "https://example.com/track",
    }
    record.update(overrides)
    return record


def results_response(*records):
    return httpx.Response(200, json={"resultCount": len(records), "results": list(records)})


@pytest.fixture
def settings():
    return SearchSettings()


@pytest.fixture
def make_search(settings):
    """Build a ``Search`` whose HTTP traffic is answered by ``handler``."""

    def _make(handler):
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return Search(settings, client=client)

    return _make


@pytest.fixture
def completions():
    """Collects the success flags passed to ``on_complete``."""
    return []
