from __future__ import annotations

import logging
import time
from typing import Callable

from gitmind.domain.entities import ExploreResult, SearchState
from .orchestrator import SearchOrchestrator

log = logging.getLogger(__name__)


class ExploreApplicationService:
    """
    The top-level use case: look a handle up and wait for its insight.

    `on_profile` is called once profile and repositories are in state, before
    the insight is known; `on_insight` is called when the search has settled.
    Both receive the orchestrator's SearchState.
    """

    def __init__(self, orchestrator: SearchOrchestrator, on_profile: Callable[[SearchState], None] | None = None, on_insight: Callable[[SearchState], None] | None = None) -> None:
        self._orchestrator = orchestrator
        self._on_profile   = on_profile
        self._on_insight   = on_insight

    async def execute(self, handle: str) -> ExploreResult | None:
        """Returns None when `handle` is blank and nothing was searched."""
        started = time.monotonic()

        state = await self._orchestrator.search(handle)
        if state is None:
            log.info("Skipping blank handle")
            return None

        if state.error is not None:
            elapsed = time.monotonic() - started
            if self._on_insight:
                self._on_insight(state)
            return ExploreResult(
                handle        = state.query,
                status        = "failed",
                elapsed_secs  = elapsed,
                error_message = state.error,
            )

        if self._on_profile:
            self._on_profile(state)

        outcome = await self._orchestrator.wait_for_insight()
        elapsed = time.monotonic() - started

        if self._on_insight:
            self._on_insight(state)

        log.info("Explored %s | %d repos | %.1fs", state.query, len(state.repositories), elapsed)
        return ExploreResult(
            handle         = state.query,
            status         = "success",
            elapsed_secs   = elapsed,
            repositories   = len(state.repositories),
            insight_status = outcome.status if outcome else None,
        )
