"""
Route definitions for the search API.

Endpoints under /api/search:
- POST /                   : start a search (supersedes the running one)
- GET  /state              : current search state
- GET  /results/{index}    : one result with its display fields

The router is only a renderer.  It starts searches and reads the state
of the application's ``Search`` instance; it never changes that state
itself.
"""

from __future__ import annotations

import functools
import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from .presentation import item_detail
from .schemas import ItemDetail, Results, SearchRequest, SearchState
from .search import Search


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/search", tags=["search"])


def get_search(request: Request) -> Search:
    return request.app.state.search


def _log_completion(term: str, success: bool) -> None:
    if success:
        logger.info("Search for %r finished", term)
    else:
        logger.warning("Search for %r failed; state reset", term)


@router.post("", response_model=SearchState, status_code=202)
async def start_search(body: SearchRequest, search: Search = Depends(get_search)) -> SearchState:
    """
    Start a search and return the state observed right after the call.

    A blank term is ignored and the unchanged state is returned.
    """
    search.perform_search(body.term, body.category, functools.partial(_log_completion, body.term))
    return search.state


@router.get("/state", response_model=SearchState)
async def read_state(search: Search = Depends(get_search)) -> SearchState:
    return search.state


@router.get("/results/{index}", response_model=ItemDetail)
async def read_result(index: int, search: Search = Depends(get_search)) -> ItemDetail:
    state = search.state
    if not isinstance(state, Results):
        raise HTTPException(status_code=404, detail="No search results available")
    if index < 0 or index >= len(state.items):
        raise HTTPException(status_code=404, detail="Result not found")
    return item_detail(state.items[index])
