"""
Data models for the release notes generator.

This module contains the shared data structures used across all modules.
"""

import datetime
from dataclasses import dataclass, field
from typing import List, Optional


CATEGORY_TITLES = {
    "feat": "Features",
    "fix": "Bug Fixes",
    "chore": "Chores",
    "docs": "Documentation",
    "refactor": "Refactoring",
    "test": "Tests",
    "ci": "Continuous Integration",
}


@dataclass
class Author:
    """Author of a pull request."""
    username: str
    link: str


@dataclass
class PullRequestRecord:
    """A closed pull request taken from a milestone."""
    title: str
    author: Optional[Author]
    number: int
    link: str
    body: Optional[str] = None
    created_at: Optional[datetime.datetime] = None
    is_pull_request: bool = True
    is_bot: bool = False


@dataclass
class PRCategory:
    """Pull requests sharing the same conventional commit type."""
    category: str
    prs: List[PullRequestRecord] = field(default_factory=list)

    @property
    def title(self) -> str:
        return CATEGORY_TITLES.get(self.category, self.category.capitalize())


@dataclass
class HighlightedPR:
    """Language model summary of a notable change."""
    title: str
    short_desc: str
    long_desc: str
