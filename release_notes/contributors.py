"""
First-time contributor detection.

A user is a first-time contributor when every contribution they ever made to
the repository belongs to the current milestone.
"""

from typing import Dict, List, Mapping

from .models import PullRequestRecord


def count_milestone_prs(prs: List[PullRequestRecord]) -> Dict[str, int]:
    """Count pull requests in the milestone for each author."""
    counts: Dict[str, int] = {}
    for pr in prs:
        if pr.is_pull_request and pr.author:
            username = pr.author.username
            counts[username] = counts.get(username, 0) + 1
    return counts


def is_new_contributor(
    username: str,
    contributor_counts: Mapping[str, int],
    milestone_counts: Mapping[str, int],
) -> bool:
    total = contributor_counts.get(username, 0)
    return total == milestone_counts.get(username, 0) and total > 0


def first_time_contributors(
    prs: List[PullRequestRecord],
    contributor_counts: Mapping[str, int],
) -> List[PullRequestRecord]:
    """
    Select one pull request per first-time contributor.

    Args:
        prs: Pull requests of the milestone
        contributor_counts: Lifetime contributions keyed by username

    Returns:
        The earliest created pull request of every first-time contributor,
        in order of each contributor's first appearance
    """
    milestone_counts = count_milestone_prs(prs)
    earliest: Dict[str, PullRequestRecord] = {}

    for pr in prs:
        if not pr.author:
            continue
        username = pr.author.username
        if not is_new_contributor(username, contributor_counts, milestone_counts):
            continue

        current = earliest.get(username)
        if current is None:
            earliest[username] = pr
        elif pr.created_at and current.created_at and pr.created_at < current.created_at:
            earliest[username] = pr

    return list(earliest.values())
