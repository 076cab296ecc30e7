"""Pydantic models for API I/O."""

from .auction import (
    ActionResponse,
    AuctionSummaryResponse,
    BidRequest,
    CandidateResponse,
    PlayerResponse,
    PurchaseResponse,
    SaleResponse,
    TeamSummaryResponse,
)

__all__ = [
    "ActionResponse",
    "AuctionSummaryResponse",
    "BidRequest",
    "CandidateResponse",
    "PlayerResponse",
    "PurchaseResponse",
    "SaleResponse",
    "TeamSummaryResponse",
]
