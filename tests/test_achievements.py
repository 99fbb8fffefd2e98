"""Tests for badge detection over replayed match history."""

from __future__ import annotations

from datetime import datetime, timedelta

from domain.achievements import Achievement, PlayerAchievementData, calculate_player_achievements
from domain.common import Match, Player, Side, Team

TEAMS = [
    Team(id="low", name="Minnows", league="League Two", rating=2.5, overall_rating=68),
    Team(id="mid", name="Solid", league="Premier League", rating=4.0, overall_rating=80),
    Team(id="high", name="Giants", league="Premier League", rating=5.0, overall_rating=91),
]
PLAYERS = [Player(id="p1", name="Ana"), Player(id="p2", name="Ben")]
START = datetime(2026, 5, 1, 18, 0)


def _match(
    index: int,
    team_a: str,
    team_b: str,
    score_a: int,
    score_b: int,
    penalties_winner: Side | None = None,
) -> Match:
    return Match(
        id=f"m{index}",
        team_a_id=team_a,
        team_b_id=team_b,
        score_a=score_a,
        score_b=score_b,
        penalties_winner=penalties_winner,
        played_at=START + timedelta(days=index),
        players_a=("p1",),
        players_b=("p2",),
    )


SEASON = [
    _match(1, "low", "high", 1, 0),
    _match(2, "mid", "high", 2, 2, Side.A),
    _match(3, "mid", "low", 0, 3),
    _match(4, "high", "mid", 5, 0),
    _match(5, "high", "low", 6, 2),
    _match(6, "mid", "low", 1, 0),
]


def _badges(data: PlayerAchievementData) -> dict[str, Achievement]:
    return {achievement.id: achievement for achievement in data.achievements}


def test_streaks_follow_play_order_not_input_order() -> None:
    results = calculate_player_achievements(list(reversed(SEASON)), PLAYERS, TEAMS)
    ana = results[0]

    assert ana.player_id == "p1"
    assert ana.total_matches == 6
    assert ana.streak.longest_win_streak == 3
    assert ana.streak.current_win_streak == 3
    assert ana.streak.is_hot_streak


def test_per_match_badges_count_each_qualifying_match() -> None:
    ana = calculate_player_achievements(SEASON, PLAYERS, TEAMS)[0]
    badges = _badges(ana)

    assert badges["giant-killer"].match_ids == ("m1", "m2")
    assert badges["clean-sheet"].earned_count == 3
    assert badges["clean-sheet"].match_ids == ("m1", "m4", "m6")
    assert badges["demolition"].match_ids == ("m4", "m5")
    assert badges["lightning-strike"].match_ids == ("m5",)
    assert badges["penalty-specialist"].match_ids == ("m2",)
    assert badges["diamond-league"].match_ids == ("m4", "m5")
    assert badges["underdog-hero"].match_ids == ("m1",)
    assert "fortress" not in badges
    assert "comeback-kid" not in badges


def test_hot_streak_lists_the_run_and_describes_its_length() -> None:
    badges = _badges(calculate_player_achievements(SEASON, PLAYERS, TEAMS)[0])

    hot = badges["hot-streak"]
    assert hot.earned_count == 1
    assert hot.match_ids == ("m4", "m5", "m6")
    assert hot.description == "Achieved a 3-game win streak"
    assert "unbeatable" not in badges


def test_opponent_view_of_the_same_season() -> None:
    results = calculate_player_achievements(SEASON, PLAYERS, TEAMS)
    ben = results[1]
    badges = _badges(ben)

    assert ben.player_id == "p2"
    assert ben.streak.longest_win_streak == 1
    assert ben.streak.current_loss_streak == 3
    assert set(badges) == {"giant-killer", "clean-sheet", "underdog-hero"}


def test_long_run_after_losses_unlocks_aggregate_badges() -> None:
    matches = [_match(index, "mid", "high", 0, 1) for index in range(1, 4)]
    matches += [_match(index, "mid", "high", 2, 1) for index in range(4, 13)]
    ana = calculate_player_achievements(matches, PLAYERS[:1], TEAMS)[0]
    badges = _badges(ana)

    assert badges["comeback-kid"].match_ids == ("m4",)
    assert badges["unbeatable"].description == "Achieved a 9-game win streak"
    assert len(badges["unbeatable"].match_ids) == 9
    assert badges["consistency-king"].earned_count == 1
    assert len(badges["consistency-king"].match_ids) == 9
    assert badges["perfectionist"].earned_count == 1
    assert len(badges["perfectionist"].match_ids) == 9


def test_versatile_and_lucky_charm() -> None:
    teams = [
        Team(id=f"club{index}", name=f"Club {index}", league="Serie A", rating=4.0, overall_rating=80)
        for index in range(5)
    ]
    matches = [_match(index, f"club{index}", "club4" if index != 4 else "club0", 1, 1, Side.A) for index in range(5)]
    badges = _badges(calculate_player_achievements(matches, PLAYERS[:1], teams)[0])

    assert badges["versatile"].match_ids == ("m0", "m1", "m2", "m3", "m4")
    assert badges["lucky-charm"].earned_count == 1
    assert badges["penalty-specialist"].earned_count == 5


def test_draws_and_unscored_matches_do_not_count() -> None:
    matches = [
        _match(1, "mid", "high", 1, 1),
        Match(id="m2", team_a_id="mid", team_b_id="high", players_a=("p1",), players_b=("p2",)),
    ]
    assert calculate_player_achievements(matches, PLAYERS, TEAMS) == []


def test_results_ordered_by_longest_then_current_then_total() -> None:
    players = [Player(id="p1", name="Ana"), Player(id="p2", name="Ben"), Player(id="p3", name="Cai")]
    matches = [
        Match(
            id="m1",
            team_a_id="mid",
            team_b_id="high",
            score_a=2,
            score_b=0,
            played_at=START,
            players_a=("p3",),
            players_b=("p2",),
        ),
        Match(
            id="m2",
            team_a_id="mid",
            team_b_id="high",
            score_a=2,
            score_b=0,
            played_at=START + timedelta(days=1),
            players_a=("p3",),
            players_b=("p1",),
        ),
        Match(
            id="m3",
            team_a_id="mid",
            team_b_id="high",
            score_a=0,
            score_b=1,
            played_at=START + timedelta(days=2),
            players_a=("p2",),
            players_b=("p1",),
        ),
    ]
    results = calculate_player_achievements(matches, players, TEAMS)
    assert [data.player_id for data in results] == ["p3", "p1", "p2"]


def test_unknown_roster_ids_are_reported_with_placeholder_name() -> None:
    matches = [
        Match(
            id="m1",
            team_a_id="mid",
            team_b_id="high",
            score_a=1,
            score_b=0,
            played_at=START,
            players_a=("ghost",),
            players_b=("p1",),
        )
    ]
    results = calculate_player_achievements(matches, PLAYERS[:1], TEAMS)
    assert [(data.player_id, data.player_name) for data in results] == [("ghost", "Unknown Player"), ("p1", "Ana")]


def test_fortress_hot_streak_and_unbeatable_share_one_run() -> None:
    matches = [_match(index, "mid", "high", 1, 0) for index in range(1, 6)]
    badges = _badges(calculate_player_achievements(matches, PLAYERS[:1], TEAMS)[0])
    run = ("m1", "m2", "m3", "m4", "m5")

    assert badges["fortress"].earned_count == 1
    assert badges["fortress"].match_ids == run
    assert badges["clean-sheet"].earned_count == 5
    assert badges["hot-streak"].match_ids == run
    assert badges["unbeatable"].match_ids == run
    assert badges["hot-streak"].description == badges["unbeatable"].description == "Achieved a 5-game win streak"


def test_consistency_king_counts_each_team_reaching_three_wins() -> None:
    matches = [_match(index, "mid", "high", 2, 1) for index in range(1, 4)]
    matches += [_match(index, "low", "high", 2, 1) for index in range(4, 7)]
    matches.append(_match(7, "high", "mid", 2, 1))
    badges = _badges(calculate_player_achievements(matches, PLAYERS[:1], TEAMS)[0])

    assert badges["consistency-king"].earned_count == 2
    assert badges["consistency-king"].match_ids == ("m1", "m2", "m3", "m4", "m5", "m6")


def test_lightning_strike_needs_a_decided_match_but_not_a_win() -> None:
    matches = [_match(1, "mid", "high", 6, 6), _match(2, "mid", "high", 6, 7)]
    results = calculate_player_achievements(matches, PLAYERS, TEAMS)
    by_player = {data.player_id: _badges(data) for data in results}

    assert by_player["p1"]["lightning-strike"].match_ids == ("m2",)
    assert by_player["p2"]["lightning-strike"].match_ids == ("m2",)
    assert all(data.total_matches == 1 for data in results)
