"""Result values and error kinds returned by the auction core."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from pyauction.models import SaleEntry
from pyauction.persistence.snapshot import PersistenceLoadFailure


class RejectionReason(str, Enum):
    ALREADY_SOLD = "already_sold"
    BELOW_BASE_PRICE = "below_base_price"
    ROSTER_FULL = "roster_full"
    INSUFFICIENT_RESERVE = "insufficient_reserve"
    BUDGET_EXCEEDED = "budget_exceeded"
    NOT_IN_ROUND = "not_in_round"
    ROUND_INCOMPLETE = "round_incomplete"
    AUCTION_COMPLETE = "auction_complete"


class UnknownTeamError(KeyError):
    """No team record matches the supplied identifier."""


class UnknownPlayerError(KeyError):
    """No player record matches the supplied identifier."""


class SessionDisposedError(RuntimeError):
    """Raised when a disposed session receives a command."""


@dataclass(frozen=True)
class BidDecision:
    accepted: bool
    reason: Optional[RejectionReason] = None
    message: str = ""

    @classmethod
    def accept(cls) -> "BidDecision":
        return cls(accepted=True)

    @classmethod
    def reject(cls, reason: RejectionReason, message: str) -> "BidDecision":
        return cls(accepted=False, reason=reason, message=message)


@dataclass(frozen=True)
class ActionResult:
    """Outcome of an operator command."""

    ok: bool
    message: str
    reason: Optional[RejectionReason] = None
    current_round: Optional[int] = None
    sale: Optional[SaleEntry] = None
    unresolved: int = 0
    released: Tuple[str, ...] = ()

    @classmethod
    def rejected(
        cls,
        reason: RejectionReason,
        message: str,
        *,
        current_round: Optional[int] = None,
        unresolved: int = 0,
    ) -> "ActionResult":
        return cls(
            ok=False,
            message=message,
            reason=reason,
            current_round=current_round,
            unresolved=unresolved,
        )


def format_millions(amount: int | float) -> str:
    """Render a currency amount in millions, e.g. 1_500_000 -> '1.50M'."""

    return f"{amount / 1_000_000:.2f}M"
