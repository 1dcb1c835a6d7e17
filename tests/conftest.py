from __future__ import annotations

import asyncio

import pytest

from gitmind.application.insight_generator import InsightGenerator
from gitmind.application.orchestrator import SearchOrchestrator
from gitmind.domain.entities import Account, RepositorySummary
from gitmind.domain.interfaces import IProfileFetcher, IRepositoryFetcher, ITextCompleter


class FakeProfiles(IProfileFetcher):
    def __init__(self, account: Account | None = None, error: Exception | None = None) -> None:
        self.account = account
        self.error = error
        self.calls: list[str] = []
        self.gate: asyncio.Event | None = None

    async def fetch_account(self, handle: str) -> Account:
        self.calls.append(handle)
        account, error = self.account, self.error
        if self.gate is not None:
            await self.gate.wait()
        if error is not None:
            raise error
        return account


class FakeRepositories(IRepositoryFetcher):
    def __init__(self, repos: list[RepositorySummary] | None = None, error: Exception | None = None) -> None:
        self.repos = repos or []
        self.error = error
        self.calls: list[str] = []

    async def fetch_repositories(self, handle: str) -> list[RepositorySummary]:
        self.calls.append(handle)
        if self.error is not None:
            raise self.error
        return list(self.repos)


class FakeCompleter(ITextCompleter):
    def __init__(self, text: str | None = "Resumo gerado.", error: Exception | None = None) -> None:
        self.text = text
        self.error = error
        self.prompts: list[str] = []
        self.gate: asyncio.Event | None = None

    async def complete(self, prompt: str) -> str | None:
        self.prompts.append(prompt)
        text, error = self.text, self.error
        if self.gate is not None:
            await self.gate.wait()
        if error is not None:
            raise error
        return text


def make_account(login: str = "octocat", **overrides) -> Account:
    fields = dict(
        login        = login,
        name         = "The Octocat",
        avatar_url   = f"https://avatars.example/{login}",
        bio          = None,
        public_repos = 8,
        followers    = 100,
        following    = 0,
        html_url     = f"https://github.com/{login}",
        location     = None,
    )
    fields.update(overrides)
    return Account(**fields)


def make_repo(name: str = "Hello-World", language: str | None = "Go", repo_id: int = 1, **overrides) -> RepositorySummary:
    fields = dict(
        id               = repo_id,
        name             = name,
        description      = None,
        stargazers_count = 5,
        forks_count      = 2,
        language         = language,
        html_url         = f"https://github.com/octocat/{name}",
        updated_at       = None,
    )
    fields.update(overrides)
    return RepositorySummary(**fields)


@pytest.fixture
def account() -> Account:
    return make_account()


@pytest.fixture
def profiles(account) -> FakeProfiles:
    return FakeProfiles(account=account)


@pytest.fixture
def repositories() -> FakeRepositories:
    return FakeRepositories(repos=[make_repo()])


@pytest.fixture
def completer() -> FakeCompleter:
    return FakeCompleter()


@pytest.fixture
def orchestrator(profiles, repositories, completer) -> SearchOrchestrator:
    return SearchOrchestrator(
        profiles     = profiles,
        repositories = repositories,
        insights     = InsightGenerator(completer),
    )
