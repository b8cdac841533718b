"""
The search orchestrator.

``Search`` is the single owner of "what is the current search and how
did it end".  It runs on an asyncio event loop: ``perform_search()``
must be called from the thread running that loop, commits the
``Loading`` state synchronously and schedules the fetch as a task.
The state change and the caller's ``on_complete`` callback both run
later on the same loop, so a renderer never observes a half-applied
transition.

Only one request is ever in flight.  Starting a new search cancels the
previous task (which aborts its HTTP request) and bumps a generation
counter; a completion whose generation is no longer current is
discarded without touching the state or calling back.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional

import httpx

from ..config import SearchSettings
from .errors import SearchError
from .itunes_service import create_client, search_catalog
from .schemas import (
    LOADING,
    NO_RESULTS,
    NOT_SEARCHED_YET,
    Category,
    Results,
    SearchState,
)


logger = logging.getLogger(__name__)

OnComplete = Callable[[bool], None]


class Search:
    """Tracks one logical search at a time against the catalog endpoint."""

    def __init__(
        self,
        settings: Optional[SearchSettings] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.settings = settings or SearchSettings()
        self._owns_client = client is None
        self._client = client if client is not None else create_client(self.settings)
        self._state: SearchState = NOT_SEARCHED_YET
        self._task: Optional[asyncio.Task] = None
        self._generation = 0

    @property
    def state(self) -> SearchState:
        return self._state

    def current_state(self) -> SearchState:
        return self._state

    @property
    def pending(self) -> Optional[asyncio.Task]:
        """The task of the in-flight search, or ``None`` when idle."""
        return self._task

    def perform_search(
        self,
        query_text: str,
        category: Category,
        on_complete: OnComplete,
    ) -> Optional[asyncio.Task]:
        """Start a search, superseding any search still in flight.

        Blank ``query_text`` is ignored: nothing changes, ``on_complete``
        is never called and ``None`` is returned.  Otherwise the state is
        ``Loading`` when this returns, and ``on_complete(success)`` is
        called once the search reaches a terminal state, unless a newer
        search supersedes it first.
        """
        if not query_text or not query_text.strip():
            logger.debug("Ignoring blank search text")
            return None

        category = Category(category)
        loop = asyncio.get_running_loop()
        self._supersede()
        self._generation += 1
        self._state = LOADING
        self._task = loop.create_task(
            self._run(self._generation, query_text, category, on_complete)
        )
        return self._task

    def cancel(self) -> None:
        """Abort the in-flight search, if any, and fall back to ``NotSearchedYet``."""
        task = self._task
        self._task = None
        if task is None or task.done():
            return
        logger.info("Cancelling in-flight search (generation %d)", self._generation)
        task.cancel()
        self._generation += 1
        self._state = NOT_SEARCHED_YET

    async def aclose(self) -> None:
        """Cancel any in-flight search and release the HTTP client."""
        task = self._task
        self.cancel()
        if task is not None:
            await asyncio.gather(task, return_exceptions=True)
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "Search":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    def _supersede(self) -> None:
        task = self._task
        self._task = None
        if task is not None and not task.done():
            logger.info("Superseding in-flight search (generation %d)", self._generation)
            task.cancel()

    async def _run(
        self,
        generation: int,
        text: str,
        category: Category,
        on_complete: OnComplete,
    ) -> None:
        try:
            items = await search_catalog(self._client, text, category, self.settings)
        except asyncio.CancelledError:
            logger.debug("Search generation %d cancelled", generation)
            raise
        except SearchError as exc:
            if self._is_current(generation):
                logger.warning("Search for %r failed: %s", text, exc)
                self._finish(NOT_SEARCHED_YET, False, on_complete)
            return
        except Exception:
            if self._is_current(generation):
                logger.exception("Unexpected error while searching for %r", text)
                self._finish(NOT_SEARCHED_YET, False, on_complete)
            return

        if not self._is_current(generation):
            return
        if items:
            logger.info("Search for %r returned %d item(s)", text, len(items))
            self._finish(Results(items=tuple(items)), True, on_complete)
        else:
            logger.info("Search for %r returned no results", text)
            self._finish(NO_RESULTS, True, on_complete)

    def _is_current(self, generation: int) -> bool:
        if generation != self._generation:
            logger.debug("Discarding stale completion of generation %d", generation)
            return False
        return True

    def _finish(self, state: SearchState, success: bool, on_complete: OnComplete) -> None:
        self._state = state
        self._task = None
        try:
            on_complete(success)
        except Exception:
            logger.exception("Search completion callback raised")
