"""Database repository helpers."""

from repositories.history_repository import (
    HISTORY_TABLES,
    MatchDraft,
    add_players,
    add_teams,
    ensure_history_schema,
    fetch_history,
    fetch_matches,
    fetch_players,
    fetch_teams,
    insert_match,
    record_result,
    replace_team,
)

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
