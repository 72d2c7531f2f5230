"""
GitHub data fetching module.

This module handles all GitHub API interactions for fetching milestone pull
requests, repository contributors and the issues referenced by pull requests
using PyGithub.
"""

import dataclasses
import logging
import re
from typing import Dict, List, Optional

from github import Auth, Github
from github.Issue import Issue
from github.Repository import Repository

from .config import BOT_LOGINS, BOT_USER_TYPE, GITHUB_PER_PAGE
from .models import Author, PullRequestRecord

# Set up logging
logger = logging.getLogger("release-notes.fetcher")

# Tries to find "Closes #12345" or "Fixes #42"
ISSUE_REFERENCE_RE = re.compile(r"(Closes|Fixes)\s#\d+", re.I)


class MilestoneNotFoundError(LookupError):
    """Raised when no milestone of the repository has the requested title."""

    def __init__(self, title: str, available: List[str]) -> None:
        super().__init__(f"Milestone '{title}' was not found in: [{','.join(available)}]")
        self.title = title
        self.available = available


def to_record(issue: Issue) -> PullRequestRecord:
    """Convert a PyGithub issue into a PullRequestRecord."""
    user = issue.user
    author = Author(username=user.login, link=user.html_url) if user else None
    return PullRequestRecord(
        title=issue.title,
        author=author,
        number=issue.number,
        link=issue.html_url,
        body=issue.body,
        created_at=issue.created_at,
        is_pull_request=issue.pull_request is not None,
        is_bot=bool(user) and user.type == BOT_USER_TYPE,
    )


def is_human_pull_request(record: PullRequestRecord) -> bool:
    """True for pull requests authored by a user that is not a known bot."""
    return (
        record.is_pull_request
        and record.author is not None
        and not record.is_bot
        and record.author.username not in BOT_LOGINS
    )


class GitHubFetcher:
    """
    Fetch milestone pull requests and contributor data from GitHub using PyGithub.

    Args:
        token: Personal access token used as a bearer token.
        client: Optional preconfigured Github client.
    """

    def __init__(self, token: Optional[str] = None, client: Optional[Github] = None) -> None:
        if client is not None:
            self._g = client
        else:
            auth = Auth.Token(token) if token else None
            self._g = Github(auth=auth, per_page=GITHUB_PER_PAGE, retry=None)
        self._repos: Dict[str, Repository] = {}
        logger.debug("GitHub client initialized (authenticated=%s)", bool(token or client))

    def _repo(self, owner: str, repo_name: str) -> Repository:
        full_name = f"{owner}/{repo_name}"
        if full_name not in self._repos:
            self._repos[full_name] = self._g.get_repo(full_name)
        return self._repos[full_name]

    def fetch_milestone_prs(self, owner: str, repo_name: str, milestone_title: str) -> List[PullRequestRecord]:
        """
        Fetch closed pull requests of a milestone.

        Closed issues are read page by page until an empty page comes back,
        then everything that is not a pull request by a human is dropped.

        Args:
            owner: Repository owner (organization or user)
            repo_name: Repository name
            milestone_title: Exact title of the milestone, e.g. "1.18.0"

        Returns:
            Pull requests in API order

        Raises:
            MilestoneNotFoundError: If no milestone has that title
        """
        repo = self._repo(owner, repo_name)
        milestones = list(repo.get_milestones())
        milestone = next((m for m in milestones if m.title == milestone_title), None)
        if milestone is None:
            raise MilestoneNotFoundError(milestone_title, [m.title for m in milestones])

        logger.info("Fetching closed issues of milestone %s (#%d)", milestone.title, milestone.number)
        issues = repo.get_issues(milestone=milestone, state="closed")
        records: List[PullRequestRecord] = []
        page = 0
        while True:
            batch = issues.get_page(page)
            if not batch:
                break
            records.extend(to_record(issue) for issue in batch)
            page += 1

        prs = [record for record in records if is_human_pull_request(record)]
        logger.info("Found %d pull requests out of %d closed issues", len(prs), len(records))
        return prs

    def fetch_contributor_counts(self, owner: str, repo_name: str) -> Dict[str, int]:
        """
        Fetch lifetime contribution counts for the first page of contributors.

        Returns:
            Mapping of login -> number of contributions
        """
        contributors = self._repo(owner, repo_name).get_contributors().get_page(0)
        counts = {c.login: c.contributions for c in contributors if c.login}
        logger.debug("Fetched %d contributors for %s/%s", len(counts), owner, repo_name)
        return counts

    def include_data_from_issue(self, owner: str, repo_name: str, pr: PullRequestRecord) -> PullRequestRecord:
        """
        Prepend the body of the issue a pull request closes or fixes.

        Only the first "Closes #N" / "Fixes #N" reference is used. Errors from
        the issue lookup are not handled here.

        Returns:
            A copy of the record with the issue body in front, or the record itself
        """
        match = ISSUE_REFERENCE_RE.search(pr.body or "")
        if not match:
            return pr

        issue_number = int(match.group(0).split("#")[1])
        logger.debug("PR #%d references issue #%d", pr.number, issue_number)
        issue = self._repo(owner, repo_name).get_issue(number=issue_number)
        return dataclasses.replace(pr, body=(issue.body or "") + pr.body)
