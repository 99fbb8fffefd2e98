"""Tests for today / version match subsets."""

from __future__ import annotations

from datetime import UTC, date, datetime, timedelta, timezone

from domain.common import Match, Team, index_teams
from domain.filters import (
    available_versions,
    filter_matches_by_version,
    local_date,
    matches_on_day,
)

TEAMS = [
    Team(id="a26", name="A", league="Bundesliga", rating=4.0, overall_rating=80, version="FC26"),
    Team(id="b26", name="B", league="Bundesliga", rating=4.0, overall_rating=80, version="FC26"),
    Team(id="a25", name="A", league="Bundesliga", rating=4.0, overall_rating=80, version="FC25"),
]


def test_matches_on_day_with_utc_bounds() -> None:
    matches = [
        Match(id="early", team_a_id="a26", team_b_id="b26", played_at="2026-04-02T00:00:00Z"),
        Match(id="late", team_a_id="a26", team_b_id="b26", played_at=datetime(2026, 4, 2, 23, 59)),
        Match(id="next", team_a_id="a26", team_b_id="b26", played_at="2026-04-03T00:00:00+00:00"),
        Match(id="shifted", team_a_id="a26", team_b_id="b26", played_at="2026-04-03T01:00:00+02:00"),
        Match(id="unknown", team_a_id="a26", team_b_id="b26", played_at=None),
    ]
    assert [match.id for match in matches_on_day(matches, date(2026, 4, 2), UTC)] == ["early", "late", "shifted"]


def test_matches_on_day_follows_local_midnight() -> None:
    plus_two = timezone(timedelta(hours=2))
    matches = [
        Match(id="evening", team_a_id="a26", team_b_id="b26", played_at=datetime(2026, 4, 2, 21, 30)),
        Match(id="late", team_a_id="a26", team_b_id="b26", played_at=datetime(2026, 4, 2, 22, 30)),
        Match(id="before", team_a_id="a26", team_b_id="b26", played_at=datetime(2026, 4, 1, 21, 59)),
    ]

    # 22:30 UTC is 00:30 on the next day at UTC+2.
    assert [match.id for match in matches_on_day(matches, date(2026, 4, 2), plus_two)] == ["evening"]
    assert [match.id for match in matches_on_day(matches, date(2026, 4, 3), plus_two)] == ["late"]
    assert local_date(datetime(2026, 4, 1, 22, 0), plus_two) == date(2026, 4, 2)


def test_version_filter_requires_both_teams_in_version() -> None:
    matches = [
        Match(id="same", team_a_id="a26", team_b_id="b26"),
        Match(id="mixed", team_a_id="a26", team_b_id="a25"),
        Match(id="orphan", team_a_id="a26", team_b_id="gone"),
    ]
    teams_by_id = index_teams(TEAMS)

    assert [match.id for match in filter_matches_by_version(matches, teams_by_id, "FC26")] == ["same"]
    assert len(filter_matches_by_version(matches, teams_by_id, "All")) == 3
    assert len(filter_matches_by_version(matches, teams_by_id, None)) == 3


def test_available_versions_are_sorted_and_distinct() -> None:
    assert available_versions(TEAMS) == ["FC25", "FC26"]
