"""ORM models."""

from models.base import Base
from models.match import MatchPlayerRecord, MatchRecord
from models.player import PlayerRecord
from models.team import TeamRecord

__all__ = [
    "Base",
    "MatchPlayerRecord",
    "MatchRecord",
    "PlayerRecord",
    "TeamRecord",
]
