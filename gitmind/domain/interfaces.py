"""
Domain Layer — Interfaces (Abstract Contracts)
-----------------------------------------------
The application layer (InsightGenerator, SearchOrchestrator) depends on these
abstractions only. GitHubClient and GeminiCompleter implement them in the
infrastructure layer, and tests pass small fakes through the same seams.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Sequence

from .entities import Account, InsightOutcome, RepositorySummary


class IProfileFetcher(ABC):
    """Looks up one account by handle."""

    @abstractmethod
    async def fetch_account(self, handle: str) -> Account:
        """
        Return the Account for `handle`.

        Raises:
            AccountNotFound — the endpoint answered with a non-2xx status
            NetworkError    — transport failure or undecodable body
        """
        ...


class IRepositoryFetcher(ABC):
    """Lists the most recently updated repositories of one account."""

    @abstractmethod
    async def fetch_repositories(self, handle: str) -> list[RepositorySummary]:
        """
        Return at most 6 repositories, most recently updated first.

        Raises:
            RepositoryFetchDegraded — the listing failed; callers treat this
                                      as an empty list plus a warning
        """
        ...


class ITextCompleter(ABC):
    """A generative text completion service."""

    @abstractmethod
    async def complete(self, prompt: str) -> str | None:
        """Return the generated text, or None/"" when the service sent none."""
        ...


class IInsightGenerator(ABC):
    """Turns an account and its repositories into a short prose profile."""

    @abstractmethod
    async def generate(self, account: Account, repositories: Sequence[RepositorySummary]) -> InsightOutcome:
        """Never raises: failures come back as an UNAVAILABLE outcome."""
        ...
