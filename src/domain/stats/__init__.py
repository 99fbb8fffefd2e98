"""Match-history aggregation modules."""

from domain.stats.pair_matrix import (
    PairMatrix,
    PairStats,
    active_players,
    build_pair_win_matrix,
    pair_stats_for,
)
from domain.stats.standings import PlayerStanding, calculate_standings
from domain.stats.team_stats import (
    TeamStanding,
    calculate_team_statistics,
    top_loss_percentage_teams,
    top_win_percentage_teams,
)
from domain.stats.top_teams import PlayerTeamRecord, PlayerTopTeams, calculate_player_top_teams

__all__ = [
    "PairMatrix",
    "PairStats",
    "PlayerStanding",
    "PlayerTeamRecord",
    "PlayerTopTeams",
    "TeamStanding",
    "active_players",
    "build_pair_win_matrix",
    "calculate_player_top_teams",
    "calculate_standings",
    "calculate_team_statistics",
    "pair_stats_for",
    "top_loss_percentage_teams",
    "top_win_percentage_teams",
]
