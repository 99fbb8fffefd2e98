"""Player standings folded from scored match history."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from domain.common import (
    UNKNOWN_PLAYER_NAME,
    Match,
    Player,
    Side,
    Team,
    index_players,
    index_teams,
)


@dataclass(frozen=True)
class PlayerStanding:
    player_id: str
    player_name: str
    points: int = 0
    goals_for: int = 0
    goals_against: int = 0
    goal_difference: int = 0
    total_overall_rating: int = 0
    matches_played: int = 0
    rated_matches: int = 0

    @property
    def average_overall_rating(self) -> float:
        """Mean overall rating of the teams this player fielded (0 when unknown)."""
        if self.rated_matches == 0:
            return 0.0
        return self.total_overall_rating / self.rated_matches


@dataclass
class _StandingAccumulator:
    player_id: str
    player_name: str
    points: int = 0
    goals_for: int = 0
    goals_against: int = 0
    total_overall_rating: int = 0
    matches_played: int = 0
    rated_matches: int = 0

    def freeze(self) -> PlayerStanding:
        return PlayerStanding(
            player_id=self.player_id,
            player_name=self.player_name,
            points=self.points,
            goals_for=self.goals_for,
            goals_against=self.goals_against,
            goal_difference=self.goals_for - self.goals_against,
            total_overall_rating=self.total_overall_rating,
            matches_played=self.matches_played,
            rated_matches=self.rated_matches,
        )


def calculate_standings(
    matches: Iterable[Match],
    players: Iterable[Player],
    teams: Iterable[Team],
) -> list[PlayerStanding]:
    """Rank players by points, then goal difference, then goals scored.

    Every catalog player is listed, with zero counters when they have not
    played. Roster entries missing from the catalog are kept under a
    placeholder name. Unscored matches are skipped; draws still count toward
    goals, matches played and the fielded-team rating sum.
    """
    players_by_id = index_players(players)
    teams_by_id = index_teams(teams)

    accumulators: dict[str, _StandingAccumulator] = {
        player_id: _StandingAccumulator(player_id=player_id, player_name=player.name)
        for player_id, player in players_by_id.items()
    }

    for match in matches:
        if not match.is_scored:
            continue
        winner = match.winner_side

        for side in (Side.A, Side.B):
            goals_for = match.score_for(side) or 0
            goals_against = match.score_for(side.opposite) or 0
            team = teams_by_id.get(match.team_id_for(side))

            for player_id in match.players_for(side):
                accumulator = accumulators.get(player_id)
                if accumulator is None:
                    accumulator = _StandingAccumulator(
                        player_id=player_id,
                        player_name=UNKNOWN_PLAYER_NAME,
                    )
                    accumulators[player_id] = accumulator

                accumulator.goals_for += goals_for
                accumulator.goals_against += goals_against
                accumulator.matches_played += 1
                if winner is side:
                    accumulator.points += 1
                if team is not None:
                    accumulator.total_overall_rating += team.overall_rating
                    accumulator.rated_matches += 1

    standings = [accumulator.freeze() for accumulator in accumulators.values()]
    standings.sort(key=lambda s: (-s.points, -s.goal_difference, -s.goals_for))
    return standings


__all__ = ["PlayerStanding", "calculate_standings"]
