from __future__ import annotations

from gitmind.domain.entities import Account, RepositorySummary, SearchPhase, SearchState

APP_TITLE = "GitMind Explorer"
ERROR_PANEL = "Oops! User not found or API error."
NO_BIO = "This developer is a mystery (no bio)."
NO_DESCRIPTION = "No description."
NO_LANGUAGE = "Code"
ANALYZING = "Processing profile insights..."
LOADING = "Loading {query}..."


def _profile_lines(account: Account) -> list[str]:
    lines = [
        f"{account.display_name} (@{account.login})",
        account.html_url,
        "",
        account.bio or NO_BIO,
        "",
        f"Repos: {account.public_repos}  Followers: {account.followers}  Following: {account.following}",
    ]
    if account.location:
        lines.append(f"Location: {account.location}")
    return lines


def _repository_lines(repo: RepositorySummary) -> list[str]:
    return [
        f"  * {repo.name}  [{repo.language or NO_LANGUAGE}]  ★ {repo.stargazers_count}  ⑂ {repo.forks_count}",
        f"    {repo.description or NO_DESCRIPTION}",
        f"    {repo.html_url}",
    ]


def render(state: SearchState) -> str:
    """Plain-text view of a SearchState, one of idle / loading / error / loaded."""
    phase = state.phase

    if phase is SearchPhase.IDLE:
        return APP_TITLE
    if phase is SearchPhase.LOADING:
        return LOADING.format(query=state.query)
    if phase is SearchPhase.ERROR:
        return ERROR_PANEL

    lines = _profile_lines(state.account)
    lines += ["", "AI insight:"]
    if state.analyzing:
        lines.append(f"  {ANALYZING}")
    else:
        lines.append(f'  "{state.insight_text}"')

    lines += ["", "Recent projects:"]
    for repo in state.repositories:
        lines += _repository_lines(repo)
    return "\n".join(lines)
