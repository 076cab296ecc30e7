"""Auction core: round policy, bid validation, ledger, round control and sessions."""

from .controller import RoundController
from .ledger import AuctionLedger, TeamLedger
from .policy import base_price, eligible_players
from .results import (
    ActionResult,
    BidDecision,
    PersistenceLoadFailure,
    RejectionReason,
    SessionDisposedError,
    UnknownPlayerError,
    UnknownTeamError,
    format_millions,
)
from .service import DEFAULT_SESSION_KEY, AuctionSession, build_session
from .validator import validate_bid

__all__ = [
    "ActionResult",
    "AuctionLedger",
    "AuctionSession",
    "BidDecision",
    "DEFAULT_SESSION_KEY",
    "PersistenceLoadFailure",
    "RejectionReason",
    "RoundController",
    "SessionDisposedError",
    "TeamLedger",
    "UnknownPlayerError",
    "UnknownTeamError",
    "base_price",
    "build_session",
    "eligible_players",
    "format_millions",
    "validate_bid",
]
