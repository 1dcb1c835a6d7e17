from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


@dataclass(frozen=True)
class Account:
    """
    Immutable snapshot of a GitHub account, fetched fresh for every search.

    Field names mirror the REST payload because the profile card shows them
    as-is; the translation from raw JSON happens in the GitHub client.
    """
    login:        str
    name:         str | None
    avatar_url:   str
    bio:          str | None
    public_repos: int
    followers:    int
    following:    int
    html_url:     str
    location:     str | None

    @property
    def display_name(self) -> str:
        return self.name or self.login


@dataclass(frozen=True)
class RepositorySummary:
    """One recently updated repository. Order is whatever the API returned."""
    id:               int
    name:             str
    description:      str | None
    stargazers_count: int
    forks_count:      int
    language:         str | None
    html_url:         str
    updated_at:       datetime | None


class InsightStatus(str, Enum):
    GENERATED   = "generated"
    PLACEHOLDER = "placeholder"   # AI answered, but with no text
    UNAVAILABLE = "unavailable"   # AI call failed


@dataclass(frozen=True)
class InsightOutcome:
    """
    Result of one InsightGenerator run.

    `text` is what gets displayed either way; `status` lets callers tell a
    real summary from the two fallback strings.
    """
    text:   str
    status: InsightStatus

    @property
    def degraded(self) -> bool:
        return self.status is InsightStatus.UNAVAILABLE


class SearchPhase(str, Enum):
    IDLE    = "idle"
    LOADING = "loading"
    LOADED  = "loaded"
    ERROR   = "error"


@dataclass
class SearchState:
    """
    Everything the presentation layer needs to draw one search.

    Owned and mutated only by SearchOrchestrator. `generation` increases on
    every accepted submit so late async results can be matched against the
    search that issued them.
    """
    query:        str = ""
    loading:      bool = False
    analyzing:    bool = False
    account:      Account | None = None
    repositories: tuple[RepositorySummary, ...] = ()
    insight:      InsightOutcome | None = None
    error:        str | None = None
    warnings:     list[str] = field(default_factory=list)
    generation:   int = 0

    @property
    def phase(self) -> SearchPhase:
        if self.loading:
            return SearchPhase.LOADING
        if self.error is not None:
            return SearchPhase.ERROR
        if self.account is not None:
            return SearchPhase.LOADED
        return SearchPhase.IDLE

    @property
    def insight_text(self) -> str | None:
        """The opaque InsightResult string shown to the user."""
        return self.insight.text if self.insight else None


@dataclass(frozen=True)
class ExploreResult:
    """
    Immutable value object summarising one finished search.
    Returned by the application service to the composition root.
    """
    handle:         str
    status:         str
    elapsed_secs:   float
    repositories:   int = 0
    insight_status: InsightStatus | None = None
    error_message:  str | None = None
