from __future__ import annotations
import asyncio
import logging
from typing import Callable, Sequence

from gitmind.domain.entities import Account, InsightOutcome, InsightStatus, RepositorySummary, SearchState
from gitmind.domain.errors import AccountLookupError, RepositoryFetchDegraded
from gitmind.domain.interfaces import IInsightGenerator, IProfileFetcher, IRepositoryFetcher
from .insight_generator import FALLBACK_TEXT

log = logging.getLogger(__name__)

GENERIC_ERROR = "User not found or API error."

StateListener = Callable[[SearchState], None]


class SearchOrchestrator:
    """
    Turns one submitted handle into profile → repositories → insight.

    All dependencies are injected:
      - IProfileFetcher     → account lookup
      - IRepositoryFetcher  → recent repositories
      - IInsightGenerator   → AI summary

    The orchestrator is the only writer of its SearchState and changes it
    only through the _begin/_fail/_loaded/_insight_ready transitions. Each
    accepted submit bumps state.generation; a transition carrying an older
    generation is dropped, so a slow chain from a previous search can never
    overwrite the current one.

    search() returns as soon as profile and repositories are in state. The
    insight runs as a background task, observable via state.analyzing and
    awaitable with wait_for_insight().
    """

    def __init__(self, profiles: IProfileFetcher, repositories: IRepositoryFetcher, insights: IInsightGenerator) -> None:
        self._profiles     = profiles
        self._repositories = repositories
        self._insights     = insights
        self._state        = SearchState()
        self._listeners: list[StateListener] = []
        self._insight_task: asyncio.Task | None = None
        self._pending: set[asyncio.Task] = set()

    @property
    def state(self) -> SearchState:
        return self._state

    def subscribe(self, listener: StateListener) -> None:
        """Call `listener(state)` after every state transition."""
        self._listeners.append(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self._state)
            except Exception:
                log.exception("State listener %r failed", listener)

    def _is_current(self, generation: int) -> bool:
        return generation == self._state.generation

    # Transitions

    def _begin(self, handle: str) -> int:
        """Idle/Loaded/Error → Loading. Clears everything from the previous search."""
        state = self._state
        state.generation  += 1
        state.query        = handle
        state.loading      = True
        state.analyzing    = False
        state.account      = None
        state.repositories = ()
        state.insight      = None
        state.error        = None
        state.warnings     = []
        self._notify()
        return state.generation

    def _fail(self, generation: int, message: str) -> bool:
        """Loading → Error."""
        if not self._is_current(generation):
            log.debug("Dropping stale failure from generation %d", generation)
            return False
        self._state.loading = False
        self._state.error   = message
        self._notify()
        return True

    def _loaded(self, generation: int, account: Account, repositories: Sequence[RepositorySummary], warnings: list[str]) -> bool:
        """Loading → Loaded with analyzing=True."""
        if not self._is_current(generation):
            log.debug("Dropping stale results for %s from generation %d", account.login, generation)
            return False
        state = self._state
        state.account      = account
        state.repositories = tuple(repositories)
        state.warnings     = list(warnings)
        state.loading      = False
        state.analyzing    = True
        self._notify()
        return True

    def _insight_ready(self, generation: int, outcome: InsightOutcome) -> bool:
        """analyzing=True → analyzing=False with the insight set."""
        if not self._is_current(generation):
            log.debug("Dropping stale insight from generation %d", generation)
            return False
        self._state.insight   = outcome
        self._state.analyzing = False
        self._notify()
        return True

    # Use case

    async def search(self, handle: str | None) -> SearchState | None:
        """
        Run a search for `handle`.

        Blank input is ignored: no request is made and the state is left
        untouched (returns None). Otherwise the previous results are cleared
        before the first await and the state is returned once profile and
        repositories are known (or the account lookup failed).
        """
        handle = (handle or "").strip()
        if not handle:
            log.debug("Ignoring blank search input")
            return None

        self._insight_task = None
        generation = self._begin(handle)
        log.info("Search #%d | %s", generation, handle)

        try:
            account = await self._profiles.fetch_account(handle)
        except AccountLookupError as exc:
            log.info("Search #%d aborted: %s", generation, exc)
            self._fail(generation, GENERIC_ERROR)
            return self._state
        except Exception as exc:
            log.error("Search #%d aborted by unexpected error: %s", generation, exc, exc_info=True)
            self._fail(generation, GENERIC_ERROR)
            return self._state

        if not self._is_current(generation):
            log.debug("Search #%d superseded before repositories were requested", generation)
            return self._state

        repositories, warnings = await self._fetch_repositories(handle)

        if self._loaded(generation, account, repositories, warnings):
            task = asyncio.create_task(self._analyze(generation, account, repositories))
            self._insight_task = task
            self._pending.add(task)
            task.add_done_callback(self._pending.discard)
        return self._state

    async def _fetch_repositories(self, handle: str) -> tuple[list[RepositorySummary], list[str]]:
        try:
            return list(await self._repositories.fetch_repositories(handle)), []
        except RepositoryFetchDegraded as exc:
            log.warning("%s; continuing with no repositories", exc)
            return [], [str(exc)]
        except Exception as exc:
            log.error("Repository listing for %s failed unexpectedly: %s", handle, exc, exc_info=True)
            return [], [str(RepositoryFetchDegraded(handle, str(exc)))]

    async def _analyze(self, generation: int, account: Account, repositories: Sequence[RepositorySummary]) -> None:
        try:
            outcome = await self._insights.generate(account, repositories)
        except Exception as exc:
            log.error("Insight generator raised for %s: %s", account.login, exc, exc_info=True)
            outcome = InsightOutcome(FALLBACK_TEXT, InsightStatus.UNAVAILABLE)

        if self._insight_ready(generation, outcome):
            log.info("Search #%d | insight %s", generation, outcome.status.value)

    async def wait_for_insight(self) -> InsightOutcome | None:
        """Wait for the current search's insight, if one is pending."""
        task = self._insight_task
        if task is not None:
            await task
        return self._state.insight

    async def drain(self) -> None:
        """Wait for every insight task still running, stale ones included."""
        if self._pending:
            await asyncio.gather(*list(self._pending))
