"""Tests for weighted team and opponent selection."""

from __future__ import annotations

import random
from datetime import UTC, datetime, timedelta, timezone

import pytest

from domain.common import Match, Side, Team
from domain.matchmaking import (
    MatchmakingEngine,
    MatchmakingParameters,
    MatchupStats,
    build_matchup_stats,
)

NOW = datetime(2026, 1, 11, 12, 0, 0)


def _team(team_id: str, overall: int, league: str = "Premier League", rating: float = 4.5) -> Team:
    return Team(id=team_id, name=f"Team {team_id}", league=league, rating=rating, overall_rating=overall)


def _engine(matches: list[Match] | None = None, seed: int = 1) -> MatchmakingEngine:
    return MatchmakingEngine(build_matchup_stats(matches or []), now=NOW, rng=random.Random(seed))


def test_days_since_uses_whole_days_and_caps_missing_history() -> None:
    engine = _engine()
    assert engine.days_since(NOW - timedelta(days=3, hours=23)) == 3
    assert engine.days_since(NOW + timedelta(days=2)) == 0
    assert engine.days_since(None) == 30


def test_unplayed_team_gets_maximum_usage_and_recency_weight() -> None:
    engine = _engine()
    assert engine.team_weight("fresh") == pytest.approx(31.0)


def test_team_weight_favours_rarely_and_not_recently_used_teams() -> None:
    history = [
        Match(id="m1", team_a_id="busy", team_b_id="other", played_at=NOW - timedelta(days=10)),
        Match(id="m2", team_a_id="busy", team_b_id="third", played_at=NOW - timedelta(days=1)),
    ]
    engine = _engine(history)

    # busy: usage max(1, 2 - 2 + 1) = 1, recency 1 + 1
    assert engine.team_weight("busy") == pytest.approx(2.0)
    # other: usage 2 - 1 + 1 = 2, recency 10 + 1
    assert engine.team_weight("other") == pytest.approx(22.0)
    # never played: usage 3, recency 31
    assert engine.team_weight("fresh") == pytest.approx(93.0)


def test_recency_weight_is_capped_at_max_recency_days() -> None:
    history = [Match(id="m1", team_a_id="old", team_b_id="older", played_at=NOW - timedelta(days=400))]
    engine = MatchmakingEngine(
        build_matchup_stats(history),
        now=NOW,
        params=MatchmakingParameters(max_recency_days=10),
    )
    assert engine.team_weight("old") == pytest.approx(11.0)


def test_pair_weight_decays_with_repeat_meetings() -> None:
    history = [
        Match(id="m1", team_a_id="t1", team_b_id="t2", played_at=NOW - timedelta(days=10)),
        Match(id="m2", team_a_id="t2", team_b_id="t1", played_at=NOW - timedelta(days=10)),
    ]
    engine = _engine(history)

    assert engine.pair_weight(("t1", "t2")) == pytest.approx(11.0 / 3.0)
    assert engine.pair_weight(("t1", "t3")) == pytest.approx(31.0)


def test_only_opponents_within_the_ovr_gap_are_candidates() -> None:
    engine = _engine()
    reference = _team("ref", 80)
    pool = [reference, _team("a", 70), _team("b", 76), _team("c", 84), _team("d", 92)]

    candidates = engine.opponent_candidates(pool, reference, max_ovr_diff=5)
    assert {team.overall_rating for team in candidates} == {76, 84}


def test_opponent_weight_rewards_closer_ratings() -> None:
    engine = _engine()
    reference = _team("ref", 80)

    close = engine.opponent_weight(reference, _team("close", 80), max_ovr_diff=5)
    far = engine.opponent_weight(reference, _team("far", 85), max_ovr_diff=5)
    assert close == pytest.approx(31.0 * 31.0 * 6)
    assert far == pytest.approx(31.0 * 31.0 * 1)
    assert engine.opponent_weight(reference, _team("any", 60), max_ovr_diff=None) == pytest.approx(31.0 * 31.0)


def test_nation_teams_only_meet_other_nation_teams() -> None:
    engine = _engine()
    nation = _team("n1", 82, league="Nation")
    pool = [nation, _team("n2", 83, league="Nation"), _team("c1", 81), _team("c2", 82)]

    assert [team.id for team in engine.opponent_candidates(pool, nation)] == ["n2"]
    club = pool[2]
    assert {team.id for team in engine.opponent_candidates(pool, club)} == {"c2"}


def test_pool_of_one_yields_no_matchup() -> None:
    engine = _engine()
    assert engine.select_matchup([_team("solo", 80)]) is None


def test_selected_matchup_is_two_distinct_pool_teams() -> None:
    pool = [_team("a", 80), _team("b", 82), _team("c", 79), _team("d", 84)]
    for seed in range(20):
        matchup = _engine(seed=seed).select_matchup(pool, max_ovr_diff=5)
        assert matchup is not None
        primary, opponent = matchup
        assert primary.id != opponent.id
        assert abs(primary.overall_rating - opponent.overall_rating) <= 5


def test_same_seed_gives_same_matchup() -> None:
    pool = [_team(str(index), 75 + index) for index in range(8)]
    first = _engine(seed=5).select_matchup(pool, max_ovr_diff=3)
    second = _engine(seed=5).select_matchup(pool, max_ovr_diff=3)
    assert first == second


def test_generate_reports_remaining_pool_when_nothing_fits() -> None:
    engine = _engine()
    outcome = engine.generate([_team("solo", 80)], max_ovr_diff=5, filter_description="4.0-5.0 stars")

    assert not outcome.found
    assert outcome.remaining == 1
    assert outcome.message == (
        "Not enough teams available for a new matchup within the current filter (4.0-5.0 stars) "
        "that haven't played today. Only 1 team(s) remaining."
    )


def test_generate_mentions_ovr_gap_when_pool_is_large_enough() -> None:
    engine = _engine()
    outcome = engine.generate([_team("a", 60), _team("b", 90)], max_ovr_diff=5)

    assert outcome.teams is None
    assert outcome.remaining == 2
    assert "max OVR diff 5" in (outcome.message or "")


def test_generate_returns_teams_when_a_pairing_exists() -> None:
    outcome = _engine().generate([_team("a", 80), _team("b", 81)], max_ovr_diff=5)
    assert outcome.found
    assert outcome.message is None
    assert {team.id for team in outcome.teams or ()} == {"a", "b"}


def test_replace_side_keeps_opponent_that_still_fits() -> None:
    engine = _engine()
    team_a, team_b, replacement = _team("a", 80), _team("b", 81), _team("r", 83)
    pool = [team_a, team_b, replacement, _team("x", 82)]

    assert engine.replace_side((team_a, team_b), Side.A, replacement, pool, max_ovr_diff=5) == (replacement, team_b)
    assert engine.replace_side((team_a, team_b), Side.B, replacement, pool, max_ovr_diff=5) == (team_a, replacement)


def test_replace_side_redraws_opponent_that_no_longer_fits() -> None:
    engine = _engine()
    team_a, team_b, replacement = _team("a", 80), _team("b", 81), _team("r", 95)
    close = _team("close", 93)
    pool = [team_a, team_b, replacement, close]

    assert engine.replace_side((team_a, team_b), Side.A, replacement, pool, max_ovr_diff=5) == (replacement, close)


def test_replace_side_skips_teams_that_already_played() -> None:
    engine = _engine()
    team_a, team_b, replacement = _team("a", 80), _team("b", 81), _team("r", 82)
    fresh = _team("fresh", 83)
    pool = [team_a, team_b, replacement, fresh]

    updated = engine.replace_side(
        (team_a, team_b),
        Side.A,
        replacement,
        pool,
        played_team_ids={"b", "a"},
        max_ovr_diff=5,
    )
    assert updated == (replacement, fresh)


def test_replace_side_keeps_old_opponent_and_reports_when_nothing_fits() -> None:
    engine = _engine()
    team_a, team_b, replacement = _team("a", 80), _team("b", 60), _team("r", 99)
    messages: list[str] = []

    updated = engine.replace_side(
        (team_a, team_b),
        Side.A,
        replacement,
        [team_a, team_b, replacement],
        max_ovr_diff=5,
        echo=messages.append,
    )
    assert updated == (replacement, team_b)
    assert messages == ["no replacement opponent found team_id=r kept_opponent_id=b"]


def test_replace_side_rejects_unknown_side() -> None:
    engine = _engine()
    team_a, team_b = _team("a", 80), _team("b", 81)
    with pytest.raises(ValueError, match="side must be"):
        engine.replace_side((team_a, team_b), 3, _team("r", 80), [team_a, team_b])


def test_engine_accepts_prebuilt_stats() -> None:
    stats = MatchupStats(team_counts={"a": 4}, max_team_count=4)
    engine = MatchmakingEngine(stats, now=NOW)
    assert engine.team_weight("a") == pytest.approx(31.0)
    assert engine.team_weight("b") == pytest.approx(5.0 * 31.0)


def test_primary_team_is_drawn_from_the_pool() -> None:
    engine = _engine(seed=9)
    pool = [_team("a", 80), _team("b", 70), _team("c", 90)]

    assert engine.select_primary_team([]) is None
    for _ in range(25):
        assert engine.select_primary_team(pool) in pool


def test_timezone_aware_now_is_normalised_to_utc() -> None:
    history = [Match(id="m1", team_a_id="a", team_b_id="b", played_at=NOW - timedelta(days=2))]
    aware_now = datetime(2026, 1, 11, 14, 0, tzinfo=timezone(timedelta(hours=2)))
    engine = MatchmakingEngine(build_matchup_stats(history), now=aware_now, rng=random.Random(4))

    assert engine.now == NOW
    assert engine.days_since(NOW - timedelta(days=2)) == 2
    assert engine.select_matchup([_team("a", 80), _team("b", 82), _team("c", 81)], max_ovr_diff=5) is not None

    utc_engine = MatchmakingEngine(build_matchup_stats(history), now=NOW.replace(tzinfo=UTC))
    assert utc_engine.team_weight("a") == pytest.approx(3.0)
