"""Weighted team and opponent selection for new matchups."""

from __future__ import annotations

import random
from collections.abc import Callable, Collection, Sequence
from dataclasses import dataclass
from datetime import UTC, datetime

from domain.common import Side, Team, pair_key, parse_played_at
from domain.matchmaking.history import MatchupStats
from domain.matchmaking.pool import NATION_LEAGUE
from domain.matchmaking.sampler import weighted_choice

SECONDS_PER_DAY = 86_400.0


@dataclass(frozen=True)
class MatchmakingParameters:
    max_recency_days: int = 30
    nation_league: str = NATION_LEAGUE


@dataclass(frozen=True)
class MatchupOutcome:
    """Result of one matchup request; ``teams`` is ``None`` when nothing fits."""

    teams: tuple[Team, Team] | None
    remaining: int
    message: str | None = None

    @property
    def found(self) -> bool:
        return self.teams is not None


class MatchmakingEngine:
    """Pick pairings that favour rarely and not recently used teams and pairs."""

    def __init__(
        self,
        stats: MatchupStats,
        *,
        now: datetime | None = None,
        rng: random.Random | None = None,
        params: MatchmakingParameters | None = None,
    ) -> None:
        self.stats = stats
        self.now = parse_played_at(now) or datetime.now(UTC).replace(tzinfo=None)
        self.rng = rng
        self.params = params or MatchmakingParameters()

    def days_since(self, instant: datetime | None) -> int:
        if instant is None:
            return self.params.max_recency_days
        elapsed = max(0.0, (self.now - instant).total_seconds())
        return int(elapsed // SECONDS_PER_DAY)

    def _recency_weight(self, instant: datetime | None) -> int:
        return min(self.params.max_recency_days, self.days_since(instant)) + 1

    def team_weight(self, team_id: str) -> float:
        usage_weight = max(1, self.stats.max_team_count - self.stats.team_count(team_id) + 1)
        return float(usage_weight * self._recency_weight(self.stats.last_played.get(team_id)))

    def pair_weight(self, key: tuple[str, str]) -> float:
        recency_weight = self._recency_weight(self.stats.pair_last_played.get(key))
        frequency_weight = 1.0 / (1 + self.stats.pair_count(key))
        return recency_weight * frequency_weight

    def is_category_compatible(self, reference: Team, candidate: Team) -> bool:
        """Nation-league teams only meet each other; everyone else avoids them."""
        nation = self.params.nation_league
        if reference.league == nation:
            return candidate.league == nation
        return candidate.league != nation

    def select_primary_team(self, pool: Sequence[Team]) -> Team | None:
        return weighted_choice(pool, lambda team: self.team_weight(team.id), self.rng)

    def opponent_candidates(
        self,
        pool: Sequence[Team],
        reference: Team,
        max_ovr_diff: int | None = None,
    ) -> list[Team]:
        candidates = [
            team
            for team in pool
            if team.id != reference.id and self.is_category_compatible(reference, team)
        ]
        if max_ovr_diff is not None:
            candidates = [
                team
                for team in candidates
                if abs(team.overall_rating - reference.overall_rating) <= max_ovr_diff
            ]
        return candidates

    def opponent_weight(self, reference: Team, candidate: Team, max_ovr_diff: int | None) -> float:
        weight = self.team_weight(candidate.id) * self.pair_weight(pair_key(reference.id, candidate.id))
        if max_ovr_diff is not None:
            diff = abs(candidate.overall_rating - reference.overall_rating)
            weight *= max(1, max_ovr_diff - diff + 1)
        return weight

    def select_opponent(
        self,
        pool: Sequence[Team],
        reference: Team,
        max_ovr_diff: int | None = None,
    ) -> Team | None:
        candidates = self.opponent_candidates(pool, reference, max_ovr_diff)
        if not candidates:
            return None
        return weighted_choice(
            candidates,
            lambda team: self.opponent_weight(reference, team, max_ovr_diff),
            self.rng,
        )

    def select_matchup(
        self,
        pool: Sequence[Team],
        max_ovr_diff: int | None = None,
    ) -> tuple[Team, Team] | None:
        if len(pool) < 2:
            return None
        primary = self.select_primary_team(pool)
        if primary is None:
            return None
        opponent = self.select_opponent(pool, primary, max_ovr_diff)
        if opponent is None:
            return None
        return primary, opponent

    def generate(
        self,
        pool: Sequence[Team],
        *,
        max_ovr_diff: int | None = None,
        filter_description: str | None = None,
    ) -> MatchupOutcome:
        """Wrap ``select_matchup`` into an outcome carrying a user-facing message."""
        teams = self.select_matchup(pool, max_ovr_diff)
        if teams is not None:
            return MatchupOutcome(teams=teams, remaining=len(pool))

        constraints = []
        if filter_description:
            constraints.append(filter_description)
        if max_ovr_diff is not None and len(pool) >= 2:
            constraints.append(f"max OVR diff {max_ovr_diff}")
        constraint_text = f" within the current filter ({', '.join(constraints)})" if constraints else ""
        message = (
            f"Not enough teams available for a new matchup{constraint_text} "
            f"that haven't played today. Only {len(pool)} team(s) remaining."
        )
        return MatchupOutcome(teams=None, remaining=len(pool), message=message)

    def replace_side(
        self,
        current: tuple[Team, Team],
        side: Side,
        replacement: Team,
        pool: Sequence[Team],
        *,
        played_team_ids: Collection[str] = (),
        max_ovr_diff: int | None = None,
        echo: Callable[[str], None] | None = None,
    ) -> tuple[Team, Team]:
        """Swap one side of a pairing, redrawing the opponent only when it no longer fits."""
        if side not in (Side.A, Side.B):
            raise ValueError(f"side must be Side.A or Side.B, got {side!r}")

        opponent = current[1] if side is Side.A else current[0]

        pool_ids = {team.id for team in pool}
        opponent_is_valid = (
            opponent.id != replacement.id
            and opponent.id in pool_ids
            and opponent.id not in played_team_ids
            and (
                max_ovr_diff is None
                or abs(opponent.overall_rating - replacement.overall_rating) <= max_ovr_diff
            )
            and self.is_category_compatible(replacement, opponent)
        )

        if not opponent_is_valid:
            opponent_pool = [
                team
                for team in pool
                if team.id not in played_team_ids and team.id != replacement.id
            ]
            new_opponent = self.select_opponent(opponent_pool, replacement, max_ovr_diff)
            if new_opponent is not None:
                opponent = new_opponent
            elif echo is not None:
                echo(
                    "no replacement opponent found "
                    f"team_id={replacement.id} kept_opponent_id={opponent.id}"
                )

        if side is Side.A:
            return replacement, opponent
        return opponent, replacement


__all__ = ["MatchmakingEngine", "MatchmakingParameters", "MatchupOutcome"]
