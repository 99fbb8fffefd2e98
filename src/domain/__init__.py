"""Matchmaking and match-history analytics modules."""

from domain.common import HistorySnapshot, Match, Player, Side, Team

__all__ = ["HistorySnapshot", "Match", "Player", "Side", "Team"]
