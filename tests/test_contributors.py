"""
Tests for first-time contributor detection.
"""

from datetime import datetime, timezone

from release_notes.contributors import count_milestone_prs, first_time_contributors, is_new_contributor


def _at(hour):
    return datetime(2023, 2, 1, hour, tzinfo=timezone.utc)


class TestCountMilestonePRs:
    def test_counts_prs_per_user(self, pr_factory):
        prs = [pr_factory(301, 'feat: A1', 'userA'), pr_factory(302, 'fix: A2', 'userA'), pr_factory(303, 'fix: B', 'userB')]

        assert count_milestone_prs(prs) == {'userA': 2, 'userB': 1}

    def test_counts_sum_to_prs_with_author(self, pr_factory):
        prs = [
            pr_factory(1, username='userA'),
            pr_factory(2, username=None),
            pr_factory(3, username='userB'),
            pr_factory(4, username='userB', is_pull_request=False),
        ]

        assert sum(count_milestone_prs(prs).values()) == 2


class TestIsNewContributor:
    def test_true_when_counts_match(self):
        assert is_new_contributor('newUser', {'newUser': 2}, {'newUser': 2})

    def test_false_when_counts_differ(self):
        assert not is_new_contributor('oldUser', {'oldUser': 5}, {'oldUser': 2})

    def test_false_when_both_zero(self):
        assert not is_new_contributor('ghost', {}, {})
        assert not is_new_contributor('ghost', {'ghost': 0}, {'ghost': 0})


class TestFirstTimeContributors:
    def test_keeps_earliest_pr(self, pr_factory):
        later = pr_factory(201, 'feat: First PR', 'newUser', created_at=_at(10))
        earlier = pr_factory(202, 'fix: Older PR', 'newUser', created_at=_at(9))

        result = first_time_contributors([later, earlier], {'newUser': 2})

        assert len(result) == 1
        assert result[0].author.username == 'newUser'
        assert result[0].number == 202

    def test_skips_returning_contributors(self, pr_factory):
        prs = [pr_factory(1, username='veteran'), pr_factory(2, username='rookie')]

        result = first_time_contributors(prs, {'veteran': 40, 'rookie': 1})

        assert [pr.author.username for pr in result] == ['rookie']

    def test_skips_users_missing_from_contributors(self, pr_factory):
        assert first_time_contributors([pr_factory(1, username='outsider')], {}) == []

    def test_order_of_first_appearance(self, pr_factory):
        prs = [
            pr_factory(1, username='bob', created_at=_at(12)),
            pr_factory(2, username='alice', created_at=_at(11)),
            pr_factory(3, username='bob', created_at=_at(8)),
        ]

        result = first_time_contributors(prs, {'alice': 1, 'bob': 2})

        assert [pr.number for pr in result] == [3, 2]
