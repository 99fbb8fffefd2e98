"""Shared records for matchmaking and match-history analytics."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import IntEnum

UNKNOWN_TEAM_NAME = "Unknown Team"
UNKNOWN_PLAYER_NAME = "Unknown Player"


class Side(IntEnum):
    """Which entry of a match record a team or roster belongs to."""

    A = 1
    B = 2

    @property
    def opposite(self) -> Side:
        return Side.B if self is Side.A else Side.A


@dataclass(frozen=True)
class Team:
    """Team catalog entry with its star and skill ratings."""

    id: str
    name: str
    league: str
    rating: float
    overall_rating: int
    attack_rating: int = 0
    midfield_rating: int = 0
    defend_rating: int = 0
    version: str = ""


@dataclass(frozen=True)
class Player:
    id: str
    name: str


@dataclass(frozen=True)
class Match:
    """One played (or scheduled) pairing with the rosters of both sides."""

    id: str
    team_a_id: str
    team_b_id: str
    score_a: int | None = None
    score_b: int | None = None
    penalties_winner: Side | None = None
    played_at: datetime | str | None = None
    players_a: tuple[str, ...] = ()
    players_b: tuple[str, ...] = ()

    @property
    def is_scored(self) -> bool:
        return self.score_a is not None and self.score_b is not None

    @property
    def winner_side(self) -> Side | None:
        """Higher score wins; level scores fall back to the penalty shootout."""
        if self.score_a is None or self.score_b is None:
            return None
        if self.score_a > self.score_b:
            return Side.A
        if self.score_b > self.score_a:
            return Side.B
        if self.penalties_winner is not None:
            return Side(self.penalties_winner)
        return None

    @property
    def is_decided(self) -> bool:
        return self.winner_side is not None

    @property
    def won_on_penalties(self) -> bool:
        return (
            self.is_scored
            and self.score_a == self.score_b
            and self.penalties_winner is not None
        )

    @property
    def team_ids(self) -> tuple[str, str]:
        return self.team_a_id, self.team_b_id

    def team_id_for(self, side: Side) -> str:
        return self.team_a_id if side is Side.A else self.team_b_id

    def score_for(self, side: Side) -> int | None:
        return self.score_a if side is Side.A else self.score_b

    def players_for(self, side: Side) -> tuple[str, ...]:
        return self.players_a if side is Side.A else self.players_b

    def side_of_player(self, player_id: str) -> Side | None:
        if player_id in self.players_a:
            return Side.A
        if player_id in self.players_b:
            return Side.B
        return None


@dataclass(frozen=True)
class HistorySnapshot:
    """Catalogs and match log handed to the analytics core in one piece."""

    teams: tuple[Team, ...]
    players: tuple[Player, ...]
    matches: tuple[Match, ...]


def pair_key(first_id: str, second_id: str) -> tuple[str, str]:
    """Order-independent key for an unordered pair of identifiers."""
    return (first_id, second_id) if first_id <= second_id else (second_id, first_id)


def parse_played_at(value: datetime | str | None) -> datetime | None:
    """Normalise a play timestamp to naive UTC, or ``None`` when unusable."""
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        text = str(value).strip()
        if not text:
            return None
        if text.endswith(("Z", "z")):
            text = f"{text[:-1]}+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(UTC).replace(tzinfo=None)
    return parsed


def index_teams(teams: Iterable[Team]) -> dict[str, Team]:
    return {team.id: team for team in teams}


def index_players(players: Iterable[Player]) -> dict[str, Player]:
    return {player.id: player for player in players}


def team_name(teams_by_id: Mapping[str, Team], team_id: str) -> str:
    team = teams_by_id.get(team_id)
    return team.name if team is not None else UNKNOWN_TEAM_NAME


__all__ = [
    "HistorySnapshot",
    "Match",
    "Player",
    "Side",
    "Team",
    "UNKNOWN_PLAYER_NAME",
    "UNKNOWN_TEAM_NAME",
    "index_players",
    "index_teams",
    "pair_key",
    "parse_played_at",
    "team_name",
]
