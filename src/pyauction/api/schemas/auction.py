from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class BidRequest(BaseModel):
    player_id: str = Field(..., min_length=1)
    team_id: str = Field(..., min_length=1)
    amount: int


class SaleResponse(BaseModel):
    player_id: str
    bid_amount: int
    round_sold: int


class ActionResponse(BaseModel):
    ok: bool
    message: str
    reason: Optional[str] = None
    current_round: Optional[int] = None
    sale: Optional[SaleResponse] = None
    unresolved: int = 0
    released: List[str] = Field(default_factory=list)


class PlayerResponse(BaseModel):
    player_id: str
    player_name: str
    base_price: int
    round_base_price: int
    availability_percentage: float | None = None
    availability_comments: str = ""
    availability_status: str | None = None
    photo_url: str | None = None
    status: str


class CandidateResponse(BaseModel):
    current_round: int
    candidate: Optional[PlayerResponse] = None
    pending_players: int


class PurchaseResponse(BaseModel):
    player_id: str
    player_name: str
    bid_amount: int
    round_sold: int


class TeamSummaryResponse(BaseModel):
    team_id: str
    team_name: str
    captain_name: str
    max_budget: int
    budget_used: int
    remaining_purse: int
    roster_count: int
    max_players: int
    min_players: int | None = None
    below_minimum: bool
    purchases: List[PurchaseResponse]


class AuctionSummaryResponse(BaseModel):
    current_round: int
    max_round: int
    pending_players: int
    unsold_this_round: List[str]
    sold_players: int
    total_players: int
    complete: bool
