"""Fetch history, run matchmaking or analytics, and optionally write back."""

from __future__ import annotations

import random
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import UTC, date, datetime, tzinfo

from domain.achievements import PlayerAchievementData, calculate_player_achievements
from domain.common import HistorySnapshot, Match, Side, Team, index_teams, parse_played_at
from domain.filters import filter_matches_by_version, local_date, matches_on_day
from domain.matchmaking import (
    MatchmakingEngine,
    MatchmakingProfileConfig,
    build_eligible_pool,
    build_matchup_stats,
)
from domain.stats import (
    PairMatrix,
    PlayerStanding,
    PlayerTopTeams,
    TeamStanding,
    build_pair_win_matrix,
    calculate_player_top_teams,
    calculate_standings,
    calculate_team_statistics,
)
from repositories import MatchDraft, fetch_history, insert_match, record_result


@dataclass(frozen=True)
class MatchupSummary:
    """Outcome of one matchup request against the stored history."""

    profile_name: str
    config_file: str
    processed_matches: int
    played_today: int
    pool_size: int
    teams: tuple[Team, Team] | None
    message: str | None
    match_id: str | None
    recorded: bool


@dataclass(frozen=True)
class HistoryReport:
    """Every analytics view over one (optionally filtered) match subset."""

    matches: tuple[Match, ...]
    standings: list[PlayerStanding]
    team_stats: list[TeamStanding]
    pair_matrix: PairMatrix
    achievements: list[PlayerAchievementData]
    top_teams: list[PlayerTopTeams]


def _utc_now() -> datetime:
    return datetime.now(UTC).replace(tzinfo=None)


def generate_matchup(
    *,
    session_factory,
    profile: MatchmakingProfileConfig,
    now: datetime | None = None,
    rng: random.Random | None = None,
    players_a: Sequence[str] = (),
    players_b: Sequence[str] = (),
    record: bool = False,
    tz: tzinfo | None = None,
    echo: Callable[[str], None] | None = None,
) -> MatchupSummary:
    """Suggest one pairing for ``profile``; store it when ``record`` is set."""
    now = parse_played_at(now) or _utc_now()
    lookback_days = None if profile.lookback_days == 0 else profile.lookback_days

    with session_factory() as session:
        snapshot = fetch_history(session, lookback_days)
        matches_today = matches_on_day(snapshot.matches, local_date(now, tz), tz)
        pool = build_eligible_pool(snapshot.teams, matches_today, profile.pool_filter)

        engine = MatchmakingEngine(
            build_matchup_stats(snapshot.matches),
            now=now,
            rng=rng,
            params=profile.parameters,
        )
        outcome = engine.generate(
            pool,
            max_ovr_diff=profile.max_ovr_diff,
            filter_description=profile.pool_filter.describe(),
        )

        if echo is not None:
            echo(
                f"config={profile.file_path.name} "
                f"profile={profile.name} "
                f"processed_matches={len(snapshot.matches)} "
                f"played_today={len(matches_today)} "
                f"pool_size={len(pool)}"
            )

        match_id: str | None = None
        if outcome.teams is not None and record:
            team_a, team_b = outcome.teams
            try:
                match_id = insert_match(
                    session,
                    MatchDraft(
                        team_a_id=team_a.id,
                        team_b_id=team_b.id,
                        players_a=tuple(players_a),
                        players_b=tuple(players_b),
                        played_at=now,
                    ),
                )
                session.commit()
            except Exception:
                session.rollback()
                raise

            if echo is not None:
                echo(f"recorded match_id={match_id} team_a={team_a.id} team_b={team_b.id}")

        return MatchupSummary(
            profile_name=profile.name,
            config_file=profile.file_path.name,
            processed_matches=len(snapshot.matches),
            played_today=len(matches_today),
            pool_size=len(pool),
            teams=outcome.teams,
            message=outcome.message,
            match_id=match_id,
            recorded=match_id is not None,
        )


def record_match_result(
    *,
    session_factory,
    match_id: str,
    score_a: int,
    score_b: int,
    penalties_winner: Side | None = None,
    echo: Callable[[str], None] | None = None,
) -> None:
    """Store the final score of a suggested match."""
    with session_factory() as session:
        try:
            record_result(
                session,
                match_id,
                score_a=score_a,
                score_b=score_b,
                penalties_winner=penalties_winner,
            )
            session.commit()
        except Exception:
            session.rollback()
            raise

    if echo is not None:
        penalties_text = "" if penalties_winner is None else f" penalties_winner={penalties_winner.name}"
        echo(f"recorded_result match_id={match_id} score={score_a}-{score_b}{penalties_text}")


def load_history(session_factory, lookback_days: int | None = None) -> HistorySnapshot:
    with session_factory() as session:
        return fetch_history(session, lookback_days)


def build_history_report(
    snapshot: HistorySnapshot,
    *,
    day: date | None = None,
    version: str | None = None,
    top_teams_limit: int = 3,
    tz: tzinfo | None = None,
) -> HistoryReport:
    """Run every aggregator over the matches selected by ``day`` and ``version``."""
    matches: list[Match] = list(snapshot.matches)
    if day is not None:
        matches = matches_on_day(matches, day, tz)
    matches = filter_matches_by_version(matches, index_teams(snapshot.teams), version)

    return HistoryReport(
        matches=tuple(matches),
        standings=calculate_standings(matches, snapshot.players, snapshot.teams),
        team_stats=calculate_team_statistics(matches, snapshot.teams),
        pair_matrix=build_pair_win_matrix(matches),
        achievements=calculate_player_achievements(matches, snapshot.players, snapshot.teams),
        top_teams=calculate_player_top_teams(
            matches,
            snapshot.players,
            snapshot.teams,
            limit=top_teams_limit,
        ),
    )


__all__ = [
    "HistoryReport",
    "MatchupSummary",
    "build_history_report",
    "generate_matchup",
    "load_history",
    "record_match_result",
]
