"""Weighted matchmaking modules."""

from domain.matchmaking.config import (
    MatchmakingProfileConfig,
    load_matchmaking_profiles,
    select_profile,
)
from domain.matchmaking.engine import MatchmakingEngine, MatchmakingParameters, MatchupOutcome
from domain.matchmaking.history import MatchupStats, build_matchup_stats
from domain.matchmaking.pool import NATION_LEAGUE, PoolFilter, build_eligible_pool, played_team_ids
from domain.matchmaking.sampler import weighted_choice

__all__ = [
    "MatchmakingEngine",
    "MatchmakingParameters",
    "MatchmakingProfileConfig",
    "MatchupOutcome",
    "MatchupStats",
    "NATION_LEAGUE",
    "PoolFilter",
    "build_eligible_pool",
    "build_matchup_stats",
    "load_matchmaking_profiles",
    "played_team_ids",
    "select_profile",
    "weighted_choice",
]
