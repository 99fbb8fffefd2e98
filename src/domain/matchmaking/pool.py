"""Eligible-pool filtering applied before the matchmaking engine runs."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from domain.common import Match, Team

NATION_LEAGUE = "Nation"


@dataclass(frozen=True)
class PoolFilter:
    """Star-rating window and category switches for the eligible pool."""

    min_rating: float = 4.0
    max_rating: float = 5.0
    exclude_nations: bool = False
    version: str | None = None
    nation_league: str = NATION_LEAGUE

    def matches(self, team: Team) -> bool:
        if not self.min_rating <= team.rating <= self.max_rating:
            return False
        if self.exclude_nations and team.league == self.nation_league:
            return False
        if self.version is not None and team.version != self.version:
            return False
        return True

    def describe(self) -> str:
        nation_text = " excluding nations" if self.exclude_nations else ""
        version_text = f" version {self.version}" if self.version is not None else ""
        return f"{self.min_rating:.1f}-{self.max_rating:.1f} stars{nation_text}{version_text}"


def played_team_ids(matches: Iterable[Match]) -> set[str]:
    """Every team id appearing on either side of the given matches."""
    played: set[str] = set()
    for match in matches:
        played.update(match.team_ids)
    return played


def build_eligible_pool(
    teams: Iterable[Team],
    matches_today: Iterable[Match],
    pool_filter: PoolFilter,
    extra_excluded_ids: Iterable[str] = (),
) -> list[Team]:
    """Teams passing the filter that have not already played today."""
    excluded = played_team_ids(matches_today)
    excluded.update(extra_excluded_ids)
    return [team for team in teams if pool_filter.matches(team) and team.id not in excluded]


__all__ = ["NATION_LEAGUE", "PoolFilter", "build_eligible_pool", "played_team_ids"]
