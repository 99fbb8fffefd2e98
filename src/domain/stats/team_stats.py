"""Per-team win/loss statistics."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from domain.common import UNKNOWN_TEAM_NAME, Match, Side, Team, index_teams


@dataclass(frozen=True)
class TeamStanding:
    team_id: str
    team_name: str
    total_matches: int = 0
    total_wins: int = 0
    total_losses: int = 0
    win_percentage: float = 0.0
    loss_percentage: float = 0.0

    @property
    def total_draws(self) -> int:
        return self.total_matches - self.total_wins - self.total_losses


def calculate_team_statistics(matches: Iterable[Match], teams: Iterable[Team]) -> list[TeamStanding]:
    """Fold scored matches into win/loss counts for every catalog team.

    Draws raise the match total of both teams without touching wins or losses.
    Teams referenced by a match but missing from the catalog are reported
    under a placeholder name. Output keeps catalog order, unknown teams last.
    """
    teams_by_id = index_teams(teams)
    names = {team_id: team.name for team_id, team in teams_by_id.items()}
    counters: dict[str, list[int]] = {team_id: [0, 0, 0] for team_id in teams_by_id}

    for match in matches:
        if not match.is_scored:
            continue
        winner = match.winner_side
        for side in (Side.A, Side.B):
            team_id = match.team_id_for(side)
            if team_id not in counters:
                counters[team_id] = [0, 0, 0]
                names[team_id] = UNKNOWN_TEAM_NAME
            counter = counters[team_id]
            counter[0] += 1
            if winner is side:
                counter[1] += 1
            elif winner is side.opposite:
                counter[2] += 1

    standings: list[TeamStanding] = []
    for team_id, (total, wins, losses) in counters.items():
        standings.append(
            TeamStanding(
                team_id=team_id,
                team_name=names[team_id],
                total_matches=total,
                total_wins=wins,
                total_losses=losses,
                win_percentage=(wins / total) * 100 if total > 0 else 0.0,
                loss_percentage=(losses / total) * 100 if total > 0 else 0.0,
            )
        )
    return standings


def top_win_percentage_teams(stats: Sequence[TeamStanding], limit: int = 5) -> list[TeamStanding]:
    """Teams with at least one match, best win percentage first."""
    played = [team for team in stats if team.total_matches > 0]
    played.sort(key=lambda team: -team.win_percentage)
    return played[:limit]


def top_loss_percentage_teams(stats: Sequence[TeamStanding], limit: int = 5) -> list[TeamStanding]:
    """Teams with at least one match, worst loss percentage first, busier teams first on ties."""
    played = [team for team in stats if team.total_matches > 0]
    played.sort(key=lambda team: (-team.loss_percentage, -team.total_matches))
    return played[:limit]


__all__ = [
    "TeamStanding",
    "calculate_team_statistics",
    "top_loss_percentage_teams",
    "top_win_percentage_teams",
]
