"""
Catalog package for the store search client.

This package contains the item and state schemas, the iTunes Search
API client, the ``Search`` orchestrator that owns the current search,
and a small set of routes that expose that search over HTTP so that a
front-end can trigger a query and render its outcome.
"""

from .router import router as search_router  # noqa: F401
from .schemas import Category, CatalogItem  # noqa: F401
from .search import Search  # noqa: F401
