"""Usage and recency counters derived from the full match history."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime

from domain.common import Match, pair_key, parse_played_at


@dataclass(frozen=True)
class MatchupStats:
    """Snapshot of how often and how recently teams and pairs have played."""

    team_counts: dict[str, int] = field(default_factory=dict)
    last_played: dict[str, datetime] = field(default_factory=dict)
    pair_counts: dict[tuple[str, str], int] = field(default_factory=dict)
    pair_last_played: dict[tuple[str, str], datetime] = field(default_factory=dict)
    max_team_count: int = 0

    def team_count(self, team_id: str) -> int:
        return self.team_counts.get(team_id, 0)

    def pair_count(self, key: tuple[str, str]) -> int:
        return self.pair_counts.get(key, 0)


def build_matchup_stats(matches: Iterable[Match]) -> MatchupStats:
    """Scan the match log once; unscored matches still count as plays."""
    team_counts: dict[str, int] = {}
    last_played: dict[str, datetime] = {}
    pair_counts: dict[tuple[str, str], int] = {}
    pair_last_played: dict[tuple[str, str], datetime] = {}
    max_team_count = 0

    for match in matches:
        played_at = parse_played_at(match.played_at)

        for team_id in match.team_ids:
            next_count = team_counts.get(team_id, 0) + 1
            team_counts[team_id] = next_count
            if next_count > max_team_count:
                max_team_count = next_count

            if played_at is not None:
                previous = last_played.get(team_id)
                if previous is None or played_at > previous:
                    last_played[team_id] = played_at

        key = pair_key(match.team_a_id, match.team_b_id)
        pair_counts[key] = pair_counts.get(key, 0) + 1
        if played_at is not None:
            previous_pair = pair_last_played.get(key)
            if previous_pair is None or played_at > previous_pair:
                pair_last_played[key] = played_at

    return MatchupStats(
        team_counts=team_counts,
        last_played=last_played,
        pair_counts=pair_counts,
        pair_last_played=pair_last_played,
        max_team_count=max_team_count,
    )


__all__ = ["MatchupStats", "build_matchup_stats"]
