"""Streak and badge detection modules."""

from domain.achievements.engine import (
    Achievement,
    PlayerAchievementData,
    build_player_history,
    calculate_player_achievements,
)
from domain.achievements.rules import ACHIEVEMENT_RULES, AggregateRule, BadgeDefinition, MatchRule
from domain.achievements.streaks import PlayerStreak, calculate_streak

__all__ = [
    "ACHIEVEMENT_RULES",
    "Achievement",
    "AggregateRule",
    "BadgeDefinition",
    "MatchRule",
    "PlayerAchievementData",
    "PlayerStreak",
    "build_player_history",
    "calculate_player_achievements",
    "calculate_streak",
]
