"""Read-side helpers: team summaries and roster export."""

from .export import export_rosters_to_csv
from .summary import (
    AuctionSummary,
    PurchaseSummary,
    TeamSummary,
    summarize_auction,
    summarize_team,
    summarize_teams,
)

__all__ = [
    "AuctionSummary",
    "PurchaseSummary",
    "TeamSummary",
    "export_rosters_to_csv",
    "summarize_auction",
    "summarize_team",
    "summarize_teams",
]
