"""Declarative badge catalog evaluated against a player's match history.

Per-match rules are predicates over a single ``MatchContext``; every match
satisfying the predicate adds one to the badge count. Aggregate rules look at
the whole ``PlayerHistory`` and award a badge (with its contributing matches)
at most once per evaluation, except where the rule itself counts several
qualifying groups.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from domain.achievements.streaks import PlayerStreak, longest_win_run
from domain.common import Match, Side, Team

GIANT_KILLER_OVR_GAP = 5
FORTRESS_MIN_CLEAN_SHEETS = 5
DEMOLITION_MIN_MARGIN = 4
LIGHTNING_STRIKE_MIN_GOALS = 6
LUCKY_CHARM_MIN_PENALTY_WINS = 3
HOT_STREAK_MIN_RUN = 3
UNBEATABLE_MIN_RUN = 5
CONSISTENCY_MIN_WINS_WITH_TEAM = 3
VERSATILE_MIN_TEAMS = 5
DIAMOND_LEAGUE_MIN_OVR = 90
UNDERDOG_MAX_OVR = 70
COMEBACK_MIN_LOSS_STREAK = 3
PERFECTIONIST_MIN_MATCHES = 10
PERFECTIONIST_MIN_WIN_RATE = 0.75


@dataclass(frozen=True)
class BadgeDefinition:
    id: str
    name: str
    emoji: str
    description: str


@dataclass(frozen=True)
class MatchContext:
    """One decided match seen from a single player's side."""

    match: Match
    side: Side
    won: bool
    goals_for: int
    goals_against: int
    player_team: Team | None
    opponent_team: Team | None
    preceding_loss_streak: int

    @property
    def match_id(self) -> str:
        return self.match.id

    @property
    def team_id(self) -> str:
        return self.match.team_id_for(self.side)

    @property
    def won_on_penalties(self) -> bool:
        return self.won and self.match.won_on_penalties

    @property
    def is_clean_sheet(self) -> bool:
        return self.goals_against == 0 and self.goals_for >= 1


@dataclass(frozen=True)
class PlayerHistory:
    contexts: tuple[MatchContext, ...]
    streak: PlayerStreak

    @property
    def wins(self) -> tuple[MatchContext, ...]:
        return tuple(context for context in self.contexts if context.won)

    def longest_win_run_ids(self) -> tuple[str, ...]:
        run = longest_win_run([context.won for context in self.contexts])
        return tuple(self.contexts[index].match_id for index in run)


@dataclass(frozen=True)
class Award:
    earned_count: int
    match_ids: tuple[str, ...]
    description: str | None = None


@dataclass(frozen=True)
class MatchRule:
    badge: BadgeDefinition
    predicate: Callable[[MatchContext], bool]

    def evaluate(self, history: PlayerHistory) -> Award | None:
        match_ids = tuple(context.match_id for context in history.contexts if self.predicate(context))
        if not match_ids:
            return None
        return Award(earned_count=len(match_ids), match_ids=match_ids)


@dataclass(frozen=True)
class AggregateRule:
    badge: BadgeDefinition
    evaluate: Callable[[PlayerHistory], Award | None]


AchievementRule = MatchRule | AggregateRule


def _giant_killer(context: MatchContext) -> bool:
    if not context.won or context.player_team is None or context.opponent_team is None:
        return False
    gap = context.opponent_team.overall_rating - context.player_team.overall_rating
    return gap >= GIANT_KILLER_OVR_GAP


def _demolition(context: MatchContext) -> bool:
    return context.won and context.goals_for - context.goals_against >= DEMOLITION_MIN_MARGIN


def _diamond_league(context: MatchContext) -> bool:
    return (
        context.won
        and context.player_team is not None
        and context.player_team.overall_rating >= DIAMOND_LEAGUE_MIN_OVR
    )


def _underdog_hero(context: MatchContext) -> bool:
    return (
        context.won
        and context.player_team is not None
        and context.player_team.overall_rating < UNDERDOG_MAX_OVR
    )


def _comeback_kid(context: MatchContext) -> bool:
    return context.won and context.preceding_loss_streak >= COMEBACK_MIN_LOSS_STREAK


def _fortress(history: PlayerHistory) -> Award | None:
    clean_sheets = tuple(context.match_id for context in history.contexts if context.is_clean_sheet)
    if len(clean_sheets) < FORTRESS_MIN_CLEAN_SHEETS:
        return None
    return Award(earned_count=1, match_ids=clean_sheets)


def _lucky_charm(history: PlayerHistory) -> Award | None:
    penalty_wins = tuple(context.match_id for context in history.contexts if context.won_on_penalties)
    if len(penalty_wins) < LUCKY_CHARM_MIN_PENALTY_WINS:
        return None
    return Award(earned_count=1, match_ids=penalty_wins)


def _win_run_award(history: PlayerHistory, minimum: int) -> Award | None:
    longest = history.streak.longest_win_streak
    if longest < minimum:
        return None
    return Award(
        earned_count=1,
        match_ids=history.longest_win_run_ids(),
        description=f"Achieved a {longest}-game win streak",
    )


def _hot_streak(history: PlayerHistory) -> Award | None:
    return _win_run_award(history, HOT_STREAK_MIN_RUN)


def _unbeatable(history: PlayerHistory) -> Award | None:
    return _win_run_award(history, UNBEATABLE_MIN_RUN)


def _consistency_king(history: PlayerHistory) -> Award | None:
    wins_by_team: dict[str, list[str]] = {}
    for context in history.wins:
        wins_by_team.setdefault(context.team_id, []).append(context.match_id)

    qualifying = [ids for ids in wins_by_team.values() if len(ids) >= CONSISTENCY_MIN_WINS_WITH_TEAM]
    if not qualifying:
        return None
    match_ids = tuple(match_id for ids in qualifying for match_id in ids)
    return Award(earned_count=len(qualifying), match_ids=match_ids)


def _versatile(history: PlayerHistory) -> Award | None:
    first_win_per_team: dict[str, str] = {}
    for context in history.wins:
        first_win_per_team.setdefault(context.team_id, context.match_id)
    if len(first_win_per_team) < VERSATILE_MIN_TEAMS:
        return None
    return Award(earned_count=1, match_ids=tuple(first_win_per_team.values()))


def _perfectionist(history: PlayerHistory) -> Award | None:
    total = len(history.contexts)
    if total < PERFECTIONIST_MIN_MATCHES:
        return None
    wins = history.wins
    if len(wins) / total < PERFECTIONIST_MIN_WIN_RATE:
        return None
    return Award(earned_count=1, match_ids=tuple(context.match_id for context in wins))


ACHIEVEMENT_RULES: tuple[AchievementRule, ...] = (
    MatchRule(
        BadgeDefinition("giant-killer", "Giant Killer", "🗡️", "Won with a team 5+ OVR lower than opponent"),
        _giant_killer,
    ),
    MatchRule(
        BadgeDefinition("clean-sheet", "Clean Sheet King", "🧤", "Kept a clean sheet (0 goals conceded, 1+ scored)"),
        lambda context: context.is_clean_sheet,
    ),
    AggregateRule(
        BadgeDefinition("fortress", "Fortress", "🏰", "Kept 5+ clean sheets"),
        _fortress,
    ),
    MatchRule(
        BadgeDefinition("demolition", "Demolition", "💀", "Won by 4+ goals difference"),
        _demolition,
    ),
    MatchRule(
        BadgeDefinition("lightning-strike", "Lightning Strike", "⚡", "Scored 6+ goals in a match"),
        lambda context: context.goals_for >= LIGHTNING_STRIKE_MIN_GOALS,
    ),
    MatchRule(
        BadgeDefinition("penalty-specialist", "Penalty Specialist", "🤝", "Won a match on penalties"),
        lambda context: context.won_on_penalties,
    ),
    AggregateRule(
        BadgeDefinition("lucky-charm", "Lucky Charm", "🍀", "Won 3+ matches on penalties"),
        _lucky_charm,
    ),
    AggregateRule(
        BadgeDefinition("hot-streak", "Hot Streak", "🔥", "Achieved a 3+ game win streak"),
        _hot_streak,
    ),
    AggregateRule(
        BadgeDefinition("unbeatable", "Unbeatable", "👑", "Achieved a 5+ game win streak"),
        _unbeatable,
    ),
    AggregateRule(
        BadgeDefinition("consistency-king", "Consistency King", "🎯", "Won 3+ matches with the same team"),
        _consistency_king,
    ),
    AggregateRule(
        BadgeDefinition("versatile", "Versatile", "🌍", "Won with 5+ different teams"),
        _versatile,
    ),
    MatchRule(
        BadgeDefinition("diamond-league", "Diamond League", "💎", "Won with a team rated 90+ OVR"),
        _diamond_league,
    ),
    MatchRule(
        BadgeDefinition("underdog-hero", "Underdog Hero", "🐕", "Won with a team rated below 70 OVR"),
        _underdog_hero,
    ),
    MatchRule(
        BadgeDefinition("comeback-kid", "Comeback Kid", "🔄", "Won right after a 3+ game losing streak"),
        _comeback_kid,
    ),
    AggregateRule(
        BadgeDefinition("perfectionist", "Perfectionist", "✨", "10+ matches with a 75%+ win rate"),
        _perfectionist,
    ),
)


__all__ = [
    "ACHIEVEMENT_RULES",
    "AchievementRule",
    "AggregateRule",
    "Award",
    "BadgeDefinition",
    "MatchContext",
    "MatchRule",
    "PlayerHistory",
]
