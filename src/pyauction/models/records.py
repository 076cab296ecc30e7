"""Canonical team and player records shared across ingest and the auction core."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, model_validator
from pydantic.config import ConfigDict


class Team(BaseModel):
    """A bidding team as supplied at auction start. Spend and roster live in the ledger."""

    team_id: str = Field(..., min_length=1)
    team_name: str
    max_budget: int = Field(..., gt=0)
    max_players: int = Field(..., ge=0)
    min_players: Optional[int] = Field(default=None, ge=0)
    captain_name: str = ""
    banner_url: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _check_min_players(self) -> "Team":
        if self.min_players is not None and self.min_players > self.max_players:
            raise ValueError(
                f"min_players ({self.min_players}) exceeds max_players ({self.max_players})"
            )
        return self


class Player(BaseModel):
    """A player offered in the auction."""

    player_id: str = Field(..., min_length=1)
    player_name: str
    base_price: int = Field(..., gt=0)
    round3_base_price: Optional[int] = Field(default=None, gt=0)
    availability_percentage: Optional[float] = Field(default=None, ge=0.0, le=100.0)
    availability_comments: str = ""
    availability_status: Optional[str] = None
    photo_url: Optional[str] = None

    model_config = ConfigDict(frozen=True)
