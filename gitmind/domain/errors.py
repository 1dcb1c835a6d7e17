"""
Domain Layer — Error Taxonomy
-----------------------------
Only AccountLookupError is ever allowed to reach the user as an error state.
The other kinds are absorbed where they happen:

  blank input              → search() returns without touching state
  RepositoryFetchDegraded  → empty repository list + recorded warning
  InsightUnavailable       → fixed fallback text
"""

from __future__ import annotations


class GitMindError(Exception):
    """Base class for every error raised by this package."""
    pass


class AccountLookupError(GitMindError):
    """The account lookup failed; the search is aborted."""

    def __init__(self, handle: str, message: str) -> None:
        self.handle = handle
        super().__init__(message)


class AccountNotFound(AccountLookupError):
    """The account endpoint answered with a non-2xx status."""

    def __init__(self, handle: str, status_code: int) -> None:
        self.status_code = status_code
        super().__init__(handle, f"Account '{handle}' not found (HTTP {status_code})")


class NetworkError(AccountLookupError):
    """Transport failure, or a body that could not be decoded into an Account."""

    def __init__(self, handle: str, reason: str) -> None:
        self.reason = reason
        super().__init__(handle, f"Network error looking up '{handle}': {reason}")


class RepositoryFetchDegraded(GitMindError):
    """Repository listing failed; recorded as a warning, never raised past the fetcher."""

    def __init__(self, handle: str, reason: str) -> None:
        self.handle = handle
        self.reason = reason
        super().__init__(f"Repositories for '{handle}' unavailable: {reason}")


class InsightUnavailable(GitMindError):
    """The AI completion could not be produced."""
    pass


class MissingCredentialError(InsightUnavailable):
    """No AI credential is configured in the environment."""
    pass
