"""Load matchmaking profiles from a directory of TOML files."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any
import tomllib

from domain.matchmaking.engine import MatchmakingParameters
from domain.matchmaking.pool import NATION_LEAGUE, PoolFilter


@dataclass(frozen=True)
class MatchmakingProfileConfig:
    """One named set of pool filters and matchmaking weights."""

    name: str
    description: str | None
    file_path: Path
    lookback_days: int
    pool_filter: PoolFilter
    parameters: MatchmakingParameters
    max_ovr_diff: int | None

    def as_config_json(self) -> dict[str, Any]:
        return {
            "lookback_days": self.lookback_days,
            "min_rating": self.pool_filter.min_rating,
            "max_rating": self.pool_filter.max_rating,
            "exclude_nations": self.pool_filter.exclude_nations,
            "version": self.pool_filter.version,
            "max_ovr_diff": self.max_ovr_diff,
            "max_recency_days": self.parameters.max_recency_days,
            "nation_league": self.parameters.nation_league,
        }


def load_matchmaking_profiles(config_dir: Path) -> list[MatchmakingProfileConfig]:
    """Load and validate every ``*.toml`` profile in ``config_dir``, sorted by file name."""
    if not config_dir.exists():
        raise FileNotFoundError(f"Config directory not found: {config_dir}")
    if not config_dir.is_dir():
        raise NotADirectoryError(f"Config path is not a directory: {config_dir}")

    config_files = sorted(config_dir.glob("*.toml"))
    if not config_files:
        raise ValueError(f"No .toml config files found in: {config_dir}")

    profiles: list[MatchmakingProfileConfig] = []
    for file_path in config_files:
        with file_path.open("rb") as file:
            profiles.append(_parse_matchmaking_profile(tomllib.load(file), file_path))

    names = [profile.name for profile in profiles]
    if len(names) != len(set(names)):
        raise ValueError(f"Duplicate matchmaking profile names found in {config_dir}: {names}")

    return profiles


def select_profile(profiles: list[MatchmakingProfileConfig], name: str | None) -> MatchmakingProfileConfig:
    """Return the named profile, or the first one when ``name`` is omitted."""
    if not profiles:
        raise ValueError("No profiles available to select from")
    if name is None:
        return profiles[0]
    for profile in profiles:
        if profile.name == name:
            return profile
    available = ", ".join(profile.name for profile in profiles)
    raise ValueError(f"Unknown profile '{name}'; available: {available}")


def _parse_matchmaking_profile(raw: dict[str, Any], file_path: Path) -> MatchmakingProfileConfig:
    profile_raw = raw.get("profile", {})
    filter_raw = raw.get("filter", {})
    matchmaking_raw = raw.get("matchmaking", {})

    name = str(profile_raw.get("name", "")).strip()
    if not name:
        raise ValueError(f"{file_path}: [profile].name is required")

    description_value = profile_raw.get("description")
    description = None if description_value is None else str(description_value)

    lookback_days = int(profile_raw.get("lookback_days", 0))
    if lookback_days < 0:
        raise ValueError(f"{file_path}: [profile].lookback_days must be >= 0")

    nation_league = str(matchmaking_raw.get("nation_league", NATION_LEAGUE))
    version_value = filter_raw.get("version")
    pool_filter = PoolFilter(
        min_rating=float(filter_raw.get("min_rating", 4.0)),
        max_rating=float(filter_raw.get("max_rating", 5.0)),
        exclude_nations=bool(filter_raw.get("exclude_nations", False)),
        version=None if version_value in (None, "", "All") else str(version_value),
        nation_league=nation_league,
    )
    parameters = MatchmakingParameters(
        max_recency_days=int(matchmaking_raw.get("max_recency_days", 30)),
        nation_league=nation_league,
    )

    # Negative values disable the rating-gap constraint.
    max_ovr_diff_value = int(matchmaking_raw.get("max_ovr_diff", 5))
    max_ovr_diff = None if max_ovr_diff_value < 0 else max_ovr_diff_value

    _validate(file_path=file_path, pool_filter=pool_filter, parameters=parameters)

    return MatchmakingProfileConfig(
        name=name,
        description=description,
        file_path=file_path,
        lookback_days=lookback_days,
        pool_filter=pool_filter,
        parameters=parameters,
        max_ovr_diff=max_ovr_diff,
    )


def _validate(*, file_path: Path, pool_filter: PoolFilter, parameters: MatchmakingParameters) -> None:
    if pool_filter.min_rating < 0.0 or pool_filter.min_rating > 5.0:
        raise ValueError(f"{file_path}: [filter].min_rating must be between 0 and 5")
    if pool_filter.max_rating < 0.0 or pool_filter.max_rating > 5.0:
        raise ValueError(f"{file_path}: [filter].max_rating must be between 0 and 5")
    if pool_filter.min_rating > pool_filter.max_rating:
        raise ValueError(f"{file_path}: [filter].min_rating must be <= [filter].max_rating")
    if parameters.max_recency_days <= 0:
        raise ValueError(f"{file_path}: [matchmaking].max_recency_days must be > 0")
    if not parameters.nation_league.strip():
        raise ValueError(f"{file_path}: [matchmaking].nation_league must not be empty")


__all__ = ["MatchmakingProfileConfig", "load_matchmaking_profiles", "select_profile"]
