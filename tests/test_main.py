import httpx
import pytest

import main
from gitmind.application.insight_generator import FALLBACK_TEXT
from gitmind.infrastructure import gemini_client
from gitmind.infrastructure.gemini_client import DEFAULT_MODEL
from gitmind.infrastructure.github_client import GITHUB_API_URL
from gitmind.presentation.report import ANALYZING, ERROR_PANEL

OCTOCAT = {
    "login": "octocat",
    "name": "The Octocat",
    "avatar_url": "https://avatars.githubusercontent.com/u/583231",
    "public_repos": 8,
    "followers": 100,
    "following": 9,
    "html_url": "https://github.com/octocat",
}

HELLO_WORLD = {
    "id": 1296269,
    "name": "Hello-World",
    "stargazers_count": 5,
    "forks_count": 2,
    "language": "Go",
    "html_url": "https://github.com/octocat/Hello-World",
    "updated_at": "2024-01-26T19:14:43Z",
}


@pytest.fixture
def github_api():
    """MockTransport-backed client that knows only octocat; every other user is a 404."""
    requested = []

    def handler(request):
        requested.append(request.url.path)
        if request.url.path == "/users/octocat":
            return httpx.Response(200, json=OCTOCAT)
        if request.url.path == "/users/octocat/repos":
            return httpx.Response(200, json=[HELLO_WORLD])
        return httpx.Response(404, json={"message": "Not Found"})

    return httpx.AsyncClient(transport=httpx.MockTransport(handler)), requested


@pytest.fixture
def no_ai_key(monkeypatch):
    for var in gemini_client.API_KEY_VARS:
        monkeypatch.delenv(var, raising=False)


def test_read_env_defaults(monkeypatch):
    monkeypatch.delenv("GITHUB_API_URL", raising=False)
    monkeypatch.delenv("GITMIND_MODEL", raising=False)

    assert main._read_env() == (GITHUB_API_URL, DEFAULT_MODEL)


def test_read_env_overrides(monkeypatch):
    monkeypatch.setenv("GITHUB_API_URL", "https://ghe.example/api/v3")
    monkeypatch.setenv("GITMIND_MODEL", "gemini-other")

    assert main._read_env() == ("https://ghe.example/api/v3", "gemini-other")


def test_cli_requires_a_handle():
    with pytest.raises(SystemExit):
        main.cli([])


def test_cli_passes_handles_and_config(monkeypatch):
    calls = []

    async def fake_build_and_run(handles, base_url, model):
        calls.append((handles, base_url, model))
        return 0

    monkeypatch.setattr(main, "build_and_run", fake_build_and_run)
    monkeypatch.setenv("GITMIND_MODEL", "gemini-other")
    monkeypatch.delenv("GITHUB_API_URL", raising=False)

    assert main.cli(["octocat", "torvalds"]) == 0
    assert calls == [(["octocat", "torvalds"], GITHUB_API_URL, "gemini-other")]


class TestBuildAndRun:

    @pytest.mark.asyncio
    async def test_each_handle_is_searched_and_a_failure_sets_exit_code(self, github_api, no_ai_key, capsys):
        http, requested = github_api

        async with http:
            code = await main.build_and_run(["octocat", "   ", "ghost"], GITHUB_API_URL, DEFAULT_MODEL, client=http)
            assert not http.is_closed

        out = capsys.readouterr().out
        assert code == 1
        assert requested == ["/users/octocat", "/users/octocat/repos", "/users/ghost"]
        assert "The Octocat (@octocat)" in out
        assert ANALYZING in out
        assert "Hello-World" in out
        assert FALLBACK_TEXT in out
        assert ERROR_PANEL in out
        assert out.index(ANALYZING) < out.index(FALLBACK_TEXT) < out.index(ERROR_PANEL)

    @pytest.mark.asyncio
    async def test_all_found_exits_zero(self, github_api, no_ai_key, capsys):
        http, requested = github_api

        async with http:
            code = await main.build_and_run(["octocat"], GITHUB_API_URL, DEFAULT_MODEL, client=http)

        assert code == 0
        assert ERROR_PANEL not in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_only_blank_handles_exit_zero_without_requests(self, github_api, no_ai_key):
        http, requested = github_api

        async with http:
            code = await main.build_and_run(["", "  "], GITHUB_API_URL, DEFAULT_MODEL, client=http)

        assert code == 0
        assert requested == []
