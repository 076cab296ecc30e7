"""Domain records and status variants."""

from .records import Player, Team
from .status import AVAILABLE, Available, PlayerStatus, SaleEntry, Sold, UnsoldInRound

__all__ = [
    "AVAILABLE",
    "Available",
    "Player",
    "PlayerStatus",
    "SaleEntry",
    "Sold",
    "Team",
    "UnsoldInRound",
]
