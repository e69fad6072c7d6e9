"""Unit tests for the aggregation functions over stored repositories."""

from __future__ import annotations

from datetime import UTC, datetime

from codeinsight.services import aggregation

from tests.helpers.mock_factories import make_commit, make_repository, make_user

# 2024-01-15 is a Monday
MONDAY = datetime(2024, 1, 15, tzinfo=UTC)


def _at(day: datetime, hour: int, minute: int = 0) -> datetime:
    return day.replace(hour=hour, minute=minute)


# ═══════════════════════════════════════════════════════════════════════════
# Languages
# ═══════════════════════════════════════════════════════════════════════════


class TestLanguageDistribution:
    """Tests for byte-weighted language shares."""

    def test_shares_across_repositories(self):
        repos = [
            make_repository(name="a", languages={"JavaScript": 800, "Python": 200}),
            make_repository(name="b", languages={"JavaScript": 200}),
        ]

        shares = aggregation.language_distribution(repos)

        assert [s.language for s in shares] == ["JavaScript", "Python"]
        assert shares[0].bytes == 1000
        assert shares[0].percentage == 83.33
        assert shares[0].repositories == 2
        assert shares[1].bytes == 200
        assert shares[1].percentage == 16.67
        assert shares[1].repositories == 1

    def test_percentages_sum_to_100_within_rounding(self):
        repos = [
            make_repository(languages={"Go": 333, "Rust": 333, "C": 334}),
            make_repository(languages={"Go": 1}),
        ]

        total = sum(s.percentage for s in aggregation.language_distribution(repos))

        assert abs(total - 100) < 0.05

    def test_sorted_by_bytes_descending(self):
        repos = [make_repository(languages={"Shell": 10, "TypeScript": 5000, "CSS": 300})]

        shares = aggregation.language_distribution(repos)

        assert [s.language for s in shares] == ["TypeScript", "CSS", "Shell"]

    def test_no_bytes_gives_empty_distribution(self):
        repos = [make_repository(languages={}), make_repository(languages={"Python": 0})]

        assert aggregation.language_distribution(repos) == []

    def test_no_repositories(self):
        assert aggregation.language_distribution([]) == []


class TestLanguageProficiencyData:
    def test_dominant_language_is_largest(self):
        repos = [make_repository(languages={"Python": 100, "Go": 900})]

        data = aggregation.language_proficiency_data(repos)

        assert data.total_languages == 2
        assert data.dominant_language == "Go"

    def test_empty(self):
        data = aggregation.language_proficiency_data([])

        assert data.total_languages == 0
        assert data.dominant_language is None
        assert data.languages == []


# ═══════════════════════════════════════════════════════════════════════════
# Commit activity
# ═══════════════════════════════════════════════════════════════════════════


class TestCommitHeatmap:
    """Tests for the 7x24 weekday/hour grid."""

    def test_monday_commits(self):
        repo = make_repository(
            commits=[
                make_commit(sha="a", date=_at(MONDAY, 9)),
                make_commit(sha="b", date=_at(MONDAY, 9, 30)),
                make_commit(sha="c", date=_at(MONDAY, 14)),
            ]
        )

        grid = aggregation.commit_heatmap([repo])

        assert len(grid) == 7
        assert all(len(row) == 24 for row in grid)
        assert grid[1][9] == 2
        assert grid[1][14] == 1
        assert sum(sum(row) for row in grid) == 3

    def test_sunday_is_row_zero(self):
        sunday = datetime(2024, 1, 14, 23, tzinfo=UTC)
        repo = make_repository(commits=[make_commit(date=sunday)])

        grid = aggregation.commit_heatmap([repo])

        assert grid[0][23] == 1

    def test_empty(self):
        grid = aggregation.commit_heatmap([make_repository(commits=[])])

        assert sum(sum(row) for row in grid) == 0


class TestActivityTimeline:
    def test_buckets_by_utc_day_oldest_first(self):
        repos = [
            make_repository(
                commits=[
                    make_commit(sha="a", date=_at(MONDAY, 9), additions=10, deletions=2),
                    make_commit(sha="b", date=datetime(2024, 1, 10, 12, tzinfo=UTC)),
                ]
            ),
            make_repository(
                commits=[make_commit(sha="c", date=_at(MONDAY, 18), additions=5, deletions=1)]
            ),
        ]

        timeline = aggregation.activity_timeline(repos)

        assert [day.date.isoformat() for day in timeline] == ["2024-01-10", "2024-01-15"]
        assert timeline[1].commits == 2
        assert timeline[1].additions == 15
        assert timeline[1].deletions == 3

    def test_uses_utc_calendar_date(self):
        from datetime import timedelta, timezone

        # 23:30 at UTC-5 is 04:30 the next day in UTC
        local = datetime(2024, 1, 15, 23, 30, tzinfo=timezone(timedelta(hours=-5)))
        repo = make_repository(commits=[make_commit(date=local)])

        timeline = aggregation.activity_timeline([repo])

        assert timeline[0].date.isoformat() == "2024-01-16"


class TestRecentActivity:
    def test_newest_first_with_repository_name(self):
        repos = [
            make_repository(name="old", commits=[make_commit(sha="1", date=_at(MONDAY, 1))]),
            make_repository(name="new", commits=[make_commit(sha="2", date=_at(MONDAY, 20))]),
        ]

        activity = aggregation.recent_activity(repos)

        assert [entry.sha for entry in activity] == ["2", "1"]
        assert activity[0].repository == "new"

    def test_limited_to_twenty(self):
        commits = [make_commit(sha=str(i), date=_at(MONDAY, i % 24)) for i in range(5)]
        repos = [make_repository(name=f"r{i}", commits=commits) for i in range(5)]

        assert len(aggregation.recent_activity(repos)) == 20


class TestDevelopmentPatternStats:
    def test_counts_and_busiest_slots(self):
        repos = [
            make_repository(
                commits=[
                    make_commit(sha="a", date=_at(MONDAY, 9), additions=10, deletions=4),
                    make_commit(sha="b", date=_at(MONDAY, 9), additions=6, deletions=0),
                    make_commit(sha="c", date=datetime(2024, 2, 3, 14, tzinfo=UTC)),
                ]
            ),
            make_repository(commits=[]),
        ]

        stats = aggregation.development_pattern_stats(repos)

        assert stats.total_commits == 3
        assert stats.average_commits_per_repo == 1.5
        assert stats.most_active_day == 1
        assert stats.most_active_hour == 9
        assert stats.commits_by_month == {"2024-1": 2, "2024-2": 1}
        assert stats.commits_by_day == {1: 2, 6: 1}
        assert stats.code_changes.total_additions == 16
        assert stats.code_changes.total_deletions == 4
        assert stats.code_changes.net_changes == 12
        assert stats.code_changes.average_changes_per_commit == 6.67

    def test_ties_go_to_lowest_slot(self):
        repo = make_repository(
            commits=[
                make_commit(sha="a", date=datetime(2024, 1, 17, 15, tzinfo=UTC)),
                make_commit(sha="b", date=_at(MONDAY, 11)),
            ]
        )

        stats = aggregation.development_pattern_stats([repo])

        assert stats.most_active_day == 1
        assert stats.most_active_hour == 11

    def test_no_commits(self):
        stats = aggregation.development_pattern_stats([])

        assert stats.total_commits == 0
        assert stats.average_commits_per_repo == 0.0
        assert stats.most_active_day is None
        assert stats.most_active_hour is None
        assert stats.code_changes.average_changes_per_commit == 0.0


class TestCommitPatternSummary:
    def _commits(self, messages_and_dates):
        from codeinsight.schemas.commit import CommitSummary

        return [
            CommitSummary.model_validate(make_commit(sha=str(i), message=message, date=moment))
            for i, (message, moment) in enumerate(messages_and_dates)
        ]

    def test_empty(self):
        summary = aggregation.commit_pattern_summary([])

        assert summary.avg_commits_per_month == 0
        assert summary.message_quality == "unknown"
        assert summary.consistency == "low"

    def test_same_day_commits_count_as_one_month(self):
        message = "Refactor the sync service into smaller steps please"
        commits = self._commits([(message, _at(MONDAY, hour)) for hour in range(3)])

        summary = aggregation.commit_pattern_summary(commits)

        assert summary.avg_commits_per_month == 3
        assert summary.message_quality == "excellent"
        assert summary.consistency == "high"

    def test_sparse_short_messages(self):
        commits = self._commits(
            [
                ("wip", datetime(2024, 1, 1, tzinfo=UTC)),
                ("fix", datetime(2024, 7, 1, tzinfo=UTC)),
            ]
        )

        summary = aggregation.commit_pattern_summary(commits)

        assert summary.message_quality == "poor"
        assert summary.consistency == "low"
        # 2 commits over 182 days (~6.07 months)
        assert summary.avg_commits_per_month == 0


# ═══════════════════════════════════════════════════════════════════════════
# Profile-level summaries
# ═══════════════════════════════════════════════════════════════════════════


class TestCareerData:
    def test_account_age_in_whole_years(self):
        user = make_user(github_created_at=datetime(2020, 6, 1, tzinfo=UTC))

        data = aggregation.career_data(user, [], now=datetime(2024, 5, 1, tzinfo=UTC))

        assert data.profile.account_age_years == 3

    def test_top_languages_by_repository_count(self):
        repos = [
            make_repository(name="a", language="Python"),
            make_repository(name="b", language="Go"),
            make_repository(name="c", language="Python"),
            make_repository(name="d", language=None),
        ]

        data = aggregation.career_data(make_user(), repos)

        assert data.top_languages[0].language == "Python"
        assert data.top_languages[0].repositories == 2
        assert len(data.top_languages) == 2

    def test_limits_repositories_to_ten(self):
        repos = [make_repository(name=f"r{i}") for i in range(12)]

        data = aggregation.career_data(make_user(), repos)

        assert len(data.repositories) == 10

    def test_missing_creation_date(self):
        data = aggregation.career_data(make_user(github_created_at=None), [])

        assert data.profile.account_age_years == 0


class TestOverviewStats:
    def test_totals(self):
        user = make_user(last_analysis=datetime(2024, 1, 20, tzinfo=UTC))
        repos = [
            make_repository(language="Python", stargazers_count=5, forks_count=1,
                            commits=[make_commit(sha="a"), make_commit(sha="b")]),
            make_repository(language="Python", stargazers_count=7, forks_count=0, commits=[]),
            make_repository(language="Go", stargazers_count=0, forks_count=3,
                            commits=[make_commit(sha="c")]),
        ]

        stats = aggregation.overview_stats(user, repos, analyses_count=2)

        assert stats.total_repositories == 3
        assert stats.total_commits == 3
        assert stats.total_stars == 12
        assert stats.total_forks == 4
        assert stats.languages_count == 2
        assert stats.last_analysis == user.last_analysis
        assert stats.analyses_count == 2

    def test_top_repositories_by_stars(self):
        repos = [
            make_repository(name=f"r{stars}", github_repo_id=stars, stargazers_count=stars)
            for stars in (3, 50, 1, 9, 20, 7)
        ]

        top = aggregation.top_repositories(repos)

        assert [repo.name for repo in top] == ["r50", "r20", "r9", "r7", "r3"]
        assert top[0].id == 50


class TestRepositoryStats:
    def test_language_bytes_and_recent_activity(self):
        repos = [
            make_repository(name="a", languages={"Python": 100},
                            commits=[make_commit(sha="x", date=_at(MONDAY, 10))]),
            make_repository(name="b", languages={"Python": 50, "Go": 10}),
        ]

        stats = aggregation.repository_stats(repos)

        assert stats.total_repos == 2
        assert stats.total_commits == 1
        assert stats.languages == {"Python": 150, "Go": 10}
        assert stats.recent_activity[0].repository == "a"


class TestCodeQualityData:
    def test_snapshot_of_single_repository(self):
        repo = make_repository(
            name="api",
            language="Python",
            languages={"Python": 900, "Dockerfile": 100},
            topics=["fastapi"],
            commits=[make_commit(sha="a"), make_commit(sha="b")],
        )

        data = aggregation.code_quality_data(repo)

        assert data.repository.name == "api"
        assert data.repository.commits == 2
        assert data.primary_language == "Python"
        assert data.languages == ["Python", "Dockerfile"]
        assert data.language_distribution[0].percentage == 90.0
        assert data.commit_patterns.avg_commits_per_month == 2
