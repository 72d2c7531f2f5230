"""
Pytest fixtures for release notes tests.

Usage:
    def test_something(pr_factory, issue_factory):
        pr = pr_factory(title="feat: add dashboard", username="alice")
        issue = issue_factory(number=12, title="fix: crash")
"""

from datetime import datetime, timezone
from typing import Optional
from unittest.mock import MagicMock

import pytest

from release_notes.config import LlmBackend, ReleaseNotesConfig
from release_notes.models import Author, PullRequestRecord


def make_pr(
    number: int = 1,
    title: str = "feat: New feature",
    username: Optional[str] = "userA",
    body: Optional[str] = None,
    created_at: Optional[datetime] = None,
    is_pull_request: bool = True,
) -> PullRequestRecord:
    author = Author(username=username, link=f"https://github.com/{username}") if username else None
    return PullRequestRecord(
        title=title,
        author=author,
        number=number,
        link=f"https://github.com/test-org/test-repo/pull/{number}",
        body=body if body is not None else f"Body for PR {number}",
        created_at=created_at or datetime(2025, 1, 1, tzinfo=timezone.utc),
        is_pull_request=is_pull_request,
    )


def make_issue(
    number: int = 1,
    title: str = "feat: New feature",
    login: Optional[str] = "userA",
    user_type: str = "User",
    body: Optional[str] = None,
    is_pull_request: bool = True,
) -> MagicMock:
    """Mock of a PyGithub Issue as returned by Repository.get_issues()."""
    issue = MagicMock()
    issue.number = number
    issue.title = title
    issue.html_url = f"https://github.com/test-org/test-repo/pull/{number}"
    issue.body = body if body is not None else f"Body for PR {number}"
    issue.created_at = datetime(2025, 1, 1, tzinfo=timezone.utc)
    issue.pull_request = MagicMock() if is_pull_request else None
    if login is None:
        issue.user = None
    else:
        issue.user = MagicMock(login=login, html_url=f"https://github.com/{login}", type=user_type)
    return issue


@pytest.fixture
def pr_factory():
    return make_pr


@pytest.fixture
def issue_factory():
    return make_issue


@pytest.fixture
def config() -> ReleaseNotesConfig:
    """AI Lab configuration with a non default port and endpoint."""
    return ReleaseNotesConfig(
        token="test-token",
        organization="test-org",
        repository="test-repo",
        milestone="1.0.0",
        username="test-user",
        model="test-model",
        port="12345",
        endpoint="/api/test",
        backend=LlmBackend.AI_LAB,
    )


@pytest.fixture
def ollama_config(config) -> ReleaseNotesConfig:
    return ReleaseNotesConfig(
        token=config.token,
        organization=config.organization,
        repository=config.repository,
        milestone=config.milestone,
        username=config.username,
        model="gemma3:27b",
        port="11434",
        endpoint="/api/generate",
        backend=LlmBackend.OLLAMA,
    )
