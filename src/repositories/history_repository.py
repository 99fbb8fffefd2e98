"""Read/write access to teams, players, matches and rosters using SQLAlchemy."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from sqlalchemy import insert, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from domain.common import HistorySnapshot, Match, Player, Side, Team
from models import Base, MatchPlayerRecord, MatchRecord, PlayerRecord, TeamRecord

HISTORY_TABLES = (
    TeamRecord.__table__,
    PlayerRecord.__table__,
    MatchRecord.__table__,
    MatchPlayerRecord.__table__,
)


@dataclass(frozen=True)
class MatchDraft:
    """A pairing about to be stored, optionally with its final score."""

    team_a_id: str
    team_b_id: str
    players_a: tuple[str, ...] = ()
    players_b: tuple[str, ...] = ()
    played_at: datetime | None = None
    score_a: int | None = None
    score_b: int | None = None
    penalties_winner: Side | None = None


def ensure_history_schema(engine: Engine) -> None:
    """Create the teams, players, matches and match_players tables if missing."""
    Base.metadata.create_all(bind=engine, tables=list(HISTORY_TABLES))


def _build_cutoff_time(lookback_days: int | None) -> datetime | None:
    if lookback_days is None or lookback_days <= 0:
        return None
    return datetime.now(UTC).replace(tzinfo=None) - timedelta(days=lookback_days)


def fetch_teams(session: Session) -> list[Team]:
    """Team catalog ordered by name."""
    rows = session.scalars(select(TeamRecord).order_by(TeamRecord.name, TeamRecord.id)).all()
    return [
        Team(
            id=row.id,
            name=row.name,
            league=row.league,
            rating=float(row.rating),
            overall_rating=int(row.overall_rating),
            attack_rating=int(row.attack_rating),
            midfield_rating=int(row.midfield_rating),
            defend_rating=int(row.defend_rating),
            version=row.version,
        )
        for row in rows
    ]


def fetch_players(session: Session) -> list[Player]:
    rows = session.scalars(select(PlayerRecord).order_by(PlayerRecord.name)).all()
    return [Player(id=row.id, name=row.name) for row in rows]


def fetch_matches(session: Session, lookback_days: int | None = None) -> list[Match]:
    """Matches with rosters folded in, oldest first.

    ``team1``/``team2`` columns map to sides A/B. A ``lookback_days`` of
    ``None`` or ``0`` returns the whole history.
    """
    cutoff_time = _build_cutoff_time(lookback_days)

    match_statement = select(MatchRecord).order_by(MatchRecord.played_at, MatchRecord.id)
    if cutoff_time is not None:
        match_statement = match_statement.where(MatchRecord.played_at >= cutoff_time)
    match_rows = session.scalars(match_statement).all()
    if not match_rows:
        return []

    roster_statement = select(
        MatchPlayerRecord.match_id,
        MatchPlayerRecord.player_id,
        MatchPlayerRecord.team_number,
    ).order_by(MatchPlayerRecord.match_id, MatchPlayerRecord.created_at, MatchPlayerRecord.id)
    if cutoff_time is not None:
        roster_statement = roster_statement.join(
            MatchRecord, MatchRecord.id == MatchPlayerRecord.match_id
        ).where(MatchRecord.played_at >= cutoff_time)

    rosters: dict[str, dict[Side, list[str]]] = {}
    for row in session.execute(roster_statement).mappings():
        try:
            side = Side(int(row["team_number"]))
        except ValueError as exc:
            raise ValueError(
                f"match_id={row['match_id']} has invalid team_number={row['team_number']!r}"
            ) from exc
        rosters.setdefault(row["match_id"], {Side.A: [], Side.B: []})[side].append(row["player_id"])

    matches: list[Match] = []
    for row in match_rows:
        roster = rosters.get(row.id, {Side.A: [], Side.B: []})
        matches.append(
            Match(
                id=row.id,
                team_a_id=row.team1_id,
                team_b_id=row.team2_id,
                score_a=row.team1_score,
                score_b=row.team2_score,
                penalties_winner=_optional_side(row.penalties_winner, row.id),
                played_at=row.played_at,
                players_a=tuple(roster[Side.A]),
                players_b=tuple(roster[Side.B]),
            )
        )
    return matches


def fetch_history(session: Session, lookback_days: int | None = None) -> HistorySnapshot:
    """Teams, players and matches in one consistent read."""
    return HistorySnapshot(
        teams=tuple(fetch_teams(session)),
        players=tuple(fetch_players(session)),
        matches=tuple(fetch_matches(session, lookback_days)),
    )


def _optional_side(value: object, match_id: str) -> Side | None:
    if value is None:
        return None
    try:
        return Side(int(value))
    except (TypeError, ValueError) as exc:
        raise ValueError(f"match_id={match_id} has invalid penalties_winner={value!r}") from exc


def _validate_result(score_a: int | None, score_b: int | None, penalties_winner: Side | None) -> None:
    if (score_a is None) != (score_b is None):
        raise ValueError("score_a and score_b must both be set or both be empty")
    if score_a is not None and score_a < 0:
        raise ValueError(f"score_a must be >= 0, got {score_a}")
    if score_b is not None and score_b < 0:
        raise ValueError(f"score_b must be >= 0, got {score_b}")
    if penalties_winner is not None and (score_a is None or score_a != score_b):
        raise ValueError("penalties_winner is only allowed when the scores are level")


def insert_match(session: Session, draft: MatchDraft) -> str:
    """Insert a match and its roster rows; returns the new match id."""
    if draft.team_a_id == draft.team_b_id:
        raise ValueError(f"team_a_id and team_b_id must differ, got {draft.team_a_id}")
    overlap = sorted(set(draft.players_a) & set(draft.players_b))
    if overlap:
        raise ValueError(f"players cannot be on both sides: {', '.join(overlap)}")
    _validate_result(draft.score_a, draft.score_b, draft.penalties_winner)

    record = MatchRecord(
        team1_id=draft.team_a_id,
        team2_id=draft.team_b_id,
        team1_score=draft.score_a,
        team2_score=draft.score_b,
        penalties_winner=None if draft.penalties_winner is None else int(draft.penalties_winner),
    )
    if draft.played_at is not None:
        record.played_at = draft.played_at
    session.add(record)
    session.flush()

    payload = [
        {"match_id": record.id, "player_id": player_id, "team_number": int(side)}
        for side, roster in ((Side.A, draft.players_a), (Side.B, draft.players_b))
        for player_id in roster
    ]
    if payload:
        session.execute(insert(MatchPlayerRecord), payload)
    return record.id


def record_result(
    session: Session,
    match_id: str,
    *,
    score_a: int,
    score_b: int,
    penalties_winner: Side | None = None,
) -> None:
    """Store the final score of an existing match."""
    _validate_result(score_a, score_b, penalties_winner)
    record = session.get(MatchRecord, match_id)
    if record is None:
        raise ValueError(f"Unknown match_id={match_id}")
    record.team1_score = score_a
    record.team2_score = score_b
    record.penalties_winner = None if penalties_winner is None else int(penalties_winner)
    session.flush()


def replace_team(session: Session, match_id: str, side: Side, team_id: str) -> None:
    """Swap the team on one side of a stored match."""
    record = session.get(MatchRecord, match_id)
    if record is None:
        raise ValueError(f"Unknown match_id={match_id}")
    other_team_id = record.team2_id if side is Side.A else record.team1_id
    if other_team_id == team_id:
        raise ValueError(f"team_id={team_id} is already on the other side of match_id={match_id}")
    if side is Side.A:
        record.team1_id = team_id
    else:
        record.team2_id = team_id
    session.flush()


def add_teams(session: Session, teams: Sequence[Team]) -> None:
    """Bulk insert team catalog entries."""
    if not teams:
        return
    payload = [
        {
            "id": team.id,
            "name": team.name,
            "league": team.league,
            "rating": team.rating,
            "overall_rating": team.overall_rating,
            "attack_rating": team.attack_rating,
            "midfield_rating": team.midfield_rating,
            "defend_rating": team.defend_rating,
            "version": team.version or "FC25",
        }
        for team in teams
    ]
    session.execute(insert(TeamRecord), payload)


def add_players(session: Session, players: Sequence[Player]) -> None:
    if not players:
        return
    session.execute(insert(PlayerRecord), [{"id": player.id, "name": player.name} for player in players])


__all__ = [
    "HISTORY_TABLES",
    "MatchDraft",
    "add_players",
    "add_teams",
    "ensure_history_schema",
    "fetch_history",
    "fetch_matches",
    "fetch_players",
    "fetch_teams",
    "insert_match",
    "record_result",
    "replace_team",
]
