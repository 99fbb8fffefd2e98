"""Match subsets used by the today / version-filtered views."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import UTC, date, datetime, tzinfo

from domain.common import Match, Team, parse_played_at

ALL_VERSIONS = "All"


def local_date(instant: datetime, tz: tzinfo | None = None) -> date:
    """Calendar day of a naive UTC instant in ``tz`` (system local zone when omitted)."""
    return instant.replace(tzinfo=UTC).astimezone(tz).date()


def matches_on_day(matches: Iterable[Match], day: date, tz: tzinfo | None = None) -> list[Match]:
    """Matches played on ``day``, midnight to midnight in ``tz``."""
    selected: list[Match] = []
    for match in matches:
        played_at = parse_played_at(match.played_at)
        if played_at is not None and local_date(played_at, tz) == day:
            selected.append(match)
    return selected


def filter_matches_by_version(
    matches: Iterable[Match],
    teams_by_id: Mapping[str, Team],
    version: str | None,
) -> list[Match]:
    """Keep matches where both teams belong to ``version``."""
    if version is None or version == ALL_VERSIONS:
        return list(matches)

    selected: list[Match] = []
    for match in matches:
        team_a = teams_by_id.get(match.team_a_id)
        team_b = teams_by_id.get(match.team_b_id)
        if team_a is None or team_b is None:
            continue
        if team_a.version == version and team_b.version == version:
            selected.append(match)
    return selected


def available_versions(teams: Iterable[Team]) -> list[str]:
    return sorted({team.version for team in teams if team.version})


__all__ = [
    "ALL_VERSIONS",
    "available_versions",
    "filter_matches_by_version",
    "local_date",
    "matches_on_day",
]
