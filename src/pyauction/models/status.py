"""Player status variants and ledger entries."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Available:
    """Not yet sold and not passed over in any round."""


@dataclass(frozen=True)
class Sold:
    team_id: str
    bid_amount: int
    round_number: int


@dataclass(frozen=True)
class UnsoldInRound:
    round_number: int


PlayerStatus = Union[Available, Sold, UnsoldInRound]

AVAILABLE = Available()


@dataclass(frozen=True)
class SaleEntry:
    """One purchase on a team's ledger."""

    player_id: str
    bid_amount: int
    round_sold: int
