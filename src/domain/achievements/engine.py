"""Replay each player's decided matches to derive streaks and badges."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import datetime

from domain.achievements.rules import (
    ACHIEVEMENT_RULES,
    AchievementRule,
    MatchContext,
    PlayerHistory,
)
from domain.achievements.streaks import PlayerStreak, calculate_streak
from domain.common import UNKNOWN_PLAYER_NAME, Match, Player, Team, index_teams, parse_played_at


@dataclass(frozen=True)
class Achievement:
    id: str
    name: str
    emoji: str
    description: str
    earned_count: int
    match_ids: tuple[str, ...]


@dataclass(frozen=True)
class PlayerAchievementData:
    player_id: str
    player_name: str
    streak: PlayerStreak
    achievements: tuple[Achievement, ...]
    total_matches: int


def chronological(matches: Iterable[Match]) -> list[Match]:
    """Scored matches, oldest first; unparseable play times sort to the front."""
    scored = [match for match in matches if match.is_scored]
    scored.sort(key=lambda match: parse_played_at(match.played_at) or datetime.min)
    return scored


def build_player_history(player_id: str, ordered_matches: Sequence[Match], teams_by_id: dict[str, Team]) -> PlayerHistory:
    contexts: list[MatchContext] = []
    loss_run = 0

    for match in ordered_matches:
        side = match.side_of_player(player_id)
        if side is None:
            continue
        winner = match.winner_side
        # Undecided draws are left out of every badge, not just the streaks.
        if winner is None:
            continue

        won = winner is side
        contexts.append(
            MatchContext(
                match=match,
                side=side,
                won=won,
                goals_for=match.score_for(side) or 0,
                goals_against=match.score_for(side.opposite) or 0,
                player_team=teams_by_id.get(match.team_id_for(side)),
                opponent_team=teams_by_id.get(match.team_id_for(side.opposite)),
                preceding_loss_streak=loss_run,
            )
        )
        loss_run = 0 if won else loss_run + 1

    streak = calculate_streak([context.won for context in contexts])
    return PlayerHistory(contexts=tuple(contexts), streak=streak)


def evaluate_rules(history: PlayerHistory, rules: Sequence[AchievementRule] = ACHIEVEMENT_RULES) -> list[Achievement]:
    achievements: list[Achievement] = []
    for rule in rules:
        award = rule.evaluate(history)
        if award is None:
            continue
        achievements.append(
            Achievement(
                id=rule.badge.id,
                name=rule.badge.name,
                emoji=rule.badge.emoji,
                description=award.description or rule.badge.description,
                earned_count=award.earned_count,
                match_ids=award.match_ids,
            )
        )
    return achievements


def calculate_player_achievements(
    matches: Iterable[Match],
    players: Iterable[Player],
    teams: Iterable[Team],
    *,
    rules: Sequence[AchievementRule] = ACHIEVEMENT_RULES,
) -> list[PlayerAchievementData]:
    """Streaks and badges for every player with at least one decided match."""
    teams_by_id = index_teams(teams)
    ordered = chronological(matches)

    names = {player.id: player.name for player in players}
    for match in ordered:
        for player_id in (*match.players_a, *match.players_b):
            names.setdefault(player_id, UNKNOWN_PLAYER_NAME)

    results: list[PlayerAchievementData] = []
    for player_id, player_name in names.items():
        history = build_player_history(player_id, ordered, teams_by_id)
        if not history.contexts:
            continue
        results.append(
            PlayerAchievementData(
                player_id=player_id,
                player_name=player_name,
                streak=history.streak,
                achievements=tuple(evaluate_rules(history, rules)),
                total_matches=len(history.contexts),
            )
        )

    results.sort(
        key=lambda data: (
            -data.streak.longest_win_streak,
            -data.streak.current_win_streak,
            -data.total_matches,
        )
    )
    return results


__all__ = [
    "Achievement",
    "PlayerAchievementData",
    "build_player_history",
    "calculate_player_achievements",
    "chronological",
    "evaluate_rules",
]
