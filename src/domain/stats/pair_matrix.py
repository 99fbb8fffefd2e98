"""Win percentages for every pair of players who shared a side."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from itertools import combinations

from domain.common import Match, Player, Side, pair_key


@dataclass(frozen=True)
class PairStats:
    wins: int = 0
    losses: int = 0

    @property
    def total_matches(self) -> int:
        return self.wins + self.losses

    @property
    def win_percentage(self) -> float:
        if self.total_matches == 0:
            return 0.0
        return (self.wins / self.total_matches) * 100

    @property
    def display_win_percentage(self) -> float:
        return round(self.win_percentage, 1)


PairMatrix = dict[tuple[str, str], PairStats]


def build_pair_win_matrix(matches: Iterable[Match]) -> PairMatrix:
    """Count shared wins and losses per teammate pair; draws are ignored."""
    counters: dict[tuple[str, str], list[int]] = {}

    for match in matches:
        winner = match.winner_side
        if winner is None:
            continue
        for side in (Side.A, Side.B):
            won = winner is side
            roster = sorted(set(match.players_for(side)))
            for first_id, second_id in combinations(roster, 2):
                counter = counters.setdefault(pair_key(first_id, second_id), [0, 0])
                counter[0 if won else 1] += 1

    return {key: PairStats(wins=wins, losses=losses) for key, (wins, losses) in counters.items()}


def pair_stats_for(matrix: Mapping[tuple[str, str], PairStats], first_id: str, second_id: str) -> PairStats | None:
    return matrix.get(pair_key(first_id, second_id))


def active_players(matches: Iterable[Match], players: Iterable[Player]) -> list[Player]:
    """Catalog players appearing on any roster, sorted by name."""
    seen: set[str] = set()
    for match in matches:
        seen.update(match.players_a)
        seen.update(match.players_b)
    return sorted((player for player in players if player.id in seen), key=lambda player: player.name.lower())


__all__ = ["PairMatrix", "PairStats", "active_players", "build_pair_win_matrix", "pair_stats_for"]
