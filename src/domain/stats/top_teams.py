"""Most successful teams per player."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from domain.common import Match, Player, Side, Team, index_teams


@dataclass(frozen=True)
class PlayerTeamRecord:
    team_id: str
    team_name: str
    wins: int
    goals: int
    matches_played: int


@dataclass(frozen=True)
class PlayerTopTeams:
    player_id: str
    player_name: str
    top_teams: tuple[PlayerTeamRecord, ...]


def calculate_player_top_teams(
    matches: Iterable[Match],
    players: Iterable[Player],
    teams: Iterable[Team],
    *,
    limit: int = 3,
) -> list[PlayerTopTeams]:
    """Rank the teams each player has fielded by wins, then goals scored."""
    if limit <= 0:
        raise ValueError("limit must be greater than 0")

    teams_by_id = index_teams(teams)
    player_list = list(players)
    # player_id -> team_id -> [wins, goals, matches]
    per_player: dict[str, dict[str, list[int]]] = {player.id: {} for player in player_list}

    for match in matches:
        if not match.is_scored:
            continue
        winner = match.winner_side
        for side in (Side.A, Side.B):
            team_id = match.team_id_for(side)
            if team_id not in teams_by_id:
                continue
            for player_id in match.players_for(side):
                player_teams = per_player.get(player_id)
                if player_teams is None:
                    continue
                counter = player_teams.setdefault(team_id, [0, 0, 0])
                counter[2] += 1
                counter[1] += match.score_for(side) or 0
                if winner is side:
                    counter[0] += 1

    results: list[PlayerTopTeams] = []
    for player in player_list:
        player_teams = per_player[player.id]
        if not player_teams:
            continue
        records = [
            PlayerTeamRecord(
                team_id=team_id,
                team_name=teams_by_id[team_id].name,
                wins=wins,
                goals=goals,
                matches_played=played,
            )
            for team_id, (wins, goals, played) in player_teams.items()
        ]
        records.sort(key=lambda record: (-record.wins, -record.goals))
        results.append(
            PlayerTopTeams(
                player_id=player.id,
                player_name=player.name,
                top_teams=tuple(records[:limit]),
            )
        )

    results.sort(key=lambda entry: entry.player_name.lower())
    return results


__all__ = ["PlayerTeamRecord", "PlayerTopTeams", "calculate_player_top_teams"]
