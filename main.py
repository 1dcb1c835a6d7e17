"""
main.py — Dependency Wiring (Composition Root)
------------------------------------------------
This file has ONE job: wire all the pieces together and run the app.

It does NOT contain any business logic. It just:
  1. Reads configuration from environment variables and CLI flags
  2. Creates concrete implementations of each interface
  3. Injects them into the classes that need them
  4. Calls the top-level use case (ExploreApplicationService.execute)
  5. Prints the report and exits

Dependency graph (what depends on what):
                         main.py  (wires everything)
                            │
              ┌─────────────┴──────────────┐
              ▼                            ▼
    ExploreApplicationService         report.render
              │
              ▼
    SearchOrchestrator
              │
    ┌─────────┼──────────────────┐
    ▼         ▼                  ▼
IProfileFetcher  IRepositoryFetcher  IInsightGenerator
(GitHubClient)   (GitHubClient)      (InsightGenerator → GeminiCompleter)
"""

from __future__ import annotations

import asyncio
import logging
import os
import sys
import argparse

import httpx

# Application layer
from gitmind.application.explore_service import ExploreApplicationService
from gitmind.application.insight_generator import InsightGenerator
from gitmind.application.orchestrator import SearchOrchestrator

# Infrastructure layer
from gitmind.infrastructure.gemini_client import DEFAULT_MODEL, GeminiCompleter, read_api_key
from gitmind.infrastructure.github_client import GITHUB_API_URL, GitHubClient

# Presentation
from gitmind.presentation.report import render

log = logging.getLogger("gitmind")

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


def _read_env() -> tuple[str, str]:
    """
    Read optional environment variables.
    The AI key is not required here: without it only the insight degrades.
    """
    base_url = os.environ.get("GITHUB_API_URL") or GITHUB_API_URL
    model    = os.environ.get("GITMIND_MODEL") or DEFAULT_MODEL

    if not read_api_key():
        log.warning("GEMINI_API_KEY / API_KEY not set, AI insights will be unavailable")

    return base_url, model


def _print_state(state) -> None:
    print(render(state))
    print()


# ---------------------------------------------------------------------------
# Dependency wiring
# ---------------------------------------------------------------------------

async def build_and_run(handles: list[str], base_url: str, model: str, client: httpx.AsyncClient | None = None) -> int:
    """
    Wires all dependencies together and explores each handle in turn.
    Returns the process exit code: 0 if every search found its account.

    An injected `client` is left open; one created here is closed here.
    """
    owns_client = client is None
    if owns_client:
        client = httpx.AsyncClient()
    failures = 0

    try:
        github = GitHubClient(client=client, base_url=base_url)
        insights = InsightGenerator(completer=GeminiCompleter(model_name=model))
        orchestrator = SearchOrchestrator(
            profiles     = github,     # injected IProfileFetcher
            repositories = github,     # injected IRepositoryFetcher
            insights     = insights,   # injected IInsightGenerator
        )
        service = ExploreApplicationService(
            orchestrator = orchestrator,
            on_profile   = _print_state,
            on_insight   = _print_state,
        )

        for handle in handles:
            result = await service.execute(handle)
            if result is None:
                continue
            if result.status != "success":
                log.error("Search for %s failed: %s", result.handle, result.error_message)
                failures += 1

        await orchestrator.drain()
    finally:
        if owns_client:
            await client.aclose()

    return 1 if failures else 0


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def cli(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Explore GitHub profiles with an AI-generated personality summary"
    )
    parser.add_argument(
        "handles",
        nargs   = "+",
        help    = "GitHub usernames to look up",
    )
    parser.add_argument(
        "--log-level",
        default = "WARNING",
        choices = ["DEBUG", "INFO", "WARNING", "ERROR"],
        help    = "Logging verbosity (default: WARNING)",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s [%(levelname)s] %(name)s — %(message)s",
        datefmt="%H:%M:%S",
    )

    base_url, model = _read_env()
    return asyncio.run(build_and_run(args.handles, base_url, model))


if __name__ == "__main__":
    sys.exit(cli())
