from __future__ import annotations

import logging
from typing import Iterable, Sequence

from gitmind.domain.entities import Account, InsightOutcome, InsightStatus, RepositorySummary
from gitmind.domain.interfaces import IInsightGenerator, ITextCompleter

log = logging.getLogger(__name__)

PLACEHOLDER_TEXT = "Analysis complete."
FALLBACK_TEXT = "The AI could not analyze this profile right now."
NO_BIO = "No bio"
SEPARATOR = ", "

PROMPT_TEMPLATE = """Based on this GitHub profile, create a professional and punchy summary (max 3 sentences) in Portuguese.
Name: {name}
Bio: {bio}
Tech Stack based on repos: {languages}
Recent projects: {projects}
Format: A brief developer personality profile."""


def distinct_languages(repositories: Iterable[RepositorySummary]) -> list[str]:
    """Non-empty primary languages in order of first appearance, without duplicates."""
    seen: list[str] = []
    for repo in repositories:
        if repo.language and repo.language not in seen:
            seen.append(repo.language)
    return seen


def build_prompt(account: Account, repositories: Sequence[RepositorySummary]) -> str:
    return PROMPT_TEMPLATE.format(
        name      = account.display_name,
        bio       = account.bio or NO_BIO,
        languages = SEPARATOR.join(distinct_languages(repositories)),
        projects  = SEPARATOR.join(repo.name for repo in repositories),
    )


class InsightGenerator(IInsightGenerator):
    """
    Builds the developer-profile prompt and asks the injected ITextCompleter
    for a summary.

    Failures stop here: whatever the completer raises is logged and turned
    into an UNAVAILABLE outcome carrying FALLBACK_TEXT.
    """

    def __init__(self, completer: ITextCompleter) -> None:
        self._completer = completer

    async def generate(self, account: Account, repositories: Sequence[RepositorySummary]) -> InsightOutcome:
        prompt = build_prompt(account, repositories)
        try:
            text = await self._completer.complete(prompt)
            if text is not None and not isinstance(text, str):
                raise TypeError(f"completion is {type(text).__name__}, not str")
        except Exception as exc:
            log.warning("Insight for %s unavailable: %s", account.login, exc)
            return InsightOutcome(FALLBACK_TEXT, InsightStatus.UNAVAILABLE)

        if not text or not text.strip():
            log.info("AI returned no text for %s, using placeholder", account.login)
            return InsightOutcome(PLACEHOLDER_TEXT, InsightStatus.PLACEHOLDER)

        return InsightOutcome(text.strip(), InsightStatus.GENERATED)
