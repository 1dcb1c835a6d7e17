from gitmind.domain.entities import InsightOutcome, InsightStatus, SearchState
from gitmind.presentation.report import (
    ANALYZING,
    APP_TITLE,
    ERROR_PANEL,
    NO_BIO,
    NO_DESCRIPTION,
    NO_LANGUAGE,
    render,
)

from conftest import make_account, make_repo


def test_idle_state_shows_title():
    assert render(SearchState()) == APP_TITLE


def test_loading_state_names_the_query():
    assert "octocat" in render(SearchState(query="octocat", loading=True))


def test_error_state_shows_only_the_error_panel():
    text = render(SearchState(query="ghost", error="User not found or API error."))
    assert text == ERROR_PANEL


def test_loaded_state_while_analyzing():
    state = SearchState(
        query        = "octocat",
        analyzing    = True,
        account      = make_account(),
        repositories = (make_repo("Hello-World", language=None),),
    )

    text = render(state)

    assert "The Octocat (@octocat)" in text
    assert NO_BIO in text
    assert ANALYZING in text
    assert "Hello-World" in text
    assert f"[{NO_LANGUAGE}]" in text
    assert NO_DESCRIPTION in text


def test_loaded_state_with_insight():
    state = SearchState(
        query        = "octocat",
        account      = make_account(bio="Mascot", location="San Francisco"),
        repositories = (make_repo(description="My first repository"),),
        insight      = InsightOutcome("Resumo gerado.", InsightStatus.GENERATED),
    )

    text = render(state)

    assert '"Resumo gerado."' in text
    assert ANALYZING not in text
    assert "Mascot" in text
    assert "Location: San Francisco" in text
    assert "My first repository" in text
    assert "[Go]" in text
