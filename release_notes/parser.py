"""
Pull request title parsing and categorization module.

This module classifies pull requests by their Conventional Commits style
title prefix and groups them into changelog categories.
"""

import re
from typing import Dict, List, Optional

from .models import PRCategory, PullRequestRecord

PRIORITY_ORDER = ("feat", "fix", "chore")


class PRTitleParser:
    """
    Parse a pull request title into its category.

    Titles such as "chore(test): ..." or "feat(tests): ..." are filed under "test".
    """

    PREFIX_RE = re.compile(r"^\s*(chore|feat|docs|fix|refactor|test|ci)", re.I)
    TEST_SCOPE_RE = re.compile(r"\(test", re.I)

    @staticmethod
    def parse(title: str) -> Optional[str]:
        """
        Return the lower-cased category of a title, or None when it has no known prefix.
        """
        m = PRTitleParser.PREFIX_RE.match(title)
        if not m:
            return None
        if PRTitleParser.TEST_SCOPE_RE.search(title):
            return "test"
        return m.group(1).lower()


class PRCategorizer:
    """
    Group pull requests into changelog categories using the PRTitleParser.

    Pull requests without a known prefix or without an author are left out.
    """

    @staticmethod
    def includes(pr: PullRequestRecord) -> bool:
        """True when the pull request belongs in the changelog."""
        return bool(pr.author) and PRTitleParser.parse(pr.title) is not None

    def categorize(self, prs: List[PullRequestRecord]) -> List[PRCategory]:
        """
        Group pull requests by category.

        Args:
            prs: Pull requests of the milestone

        Returns:
            Categories in the order they were first encountered
        """
        groups: Dict[str, PRCategory] = {}

        for pr in prs:
            category = PRTitleParser.parse(pr.title)
            if category is None or not pr.author:
                continue
            groups.setdefault(category, PRCategory(category=category)).prs.append(pr)

        return list(groups.values())

    @staticmethod
    def sort_changelog(changelog: List[PRCategory]) -> List[PRCategory]:
        """
        Order categories as feat, fix, chore, then everything else as encountered.
        """
        def priority(category: PRCategory) -> float:
            if category.category in PRIORITY_ORDER:
                return PRIORITY_ORDER.index(category.category)
            return float("inf")

        return sorted(changelog, key=priority)
