"""CSV export of team rosters."""

from __future__ import annotations

import csv
from io import StringIO
from typing import Sequence

from pyauction.auction import AuctionSession, format_millions
from pyauction.reports.summary import summarize_teams


ROSTER_HEADERS: Sequence[str] = (
    "team_id",
    "team_name",
    "player_id",
    "player_name",
    "bid_amount",
    "bid_display",
    "round_sold",
)


def export_rosters_to_csv(session: AuctionSession) -> str:
    """One row per purchased player, grouped by team in team order."""

    buffer = StringIO()
    writer = csv.writer(buffer)
    writer.writerow(ROSTER_HEADERS)
    for summary in summarize_teams(session):
        for purchase in summary.purchases:
            writer.writerow([
                summary.team_id,
                summary.team_name,
                purchase.player_id,
                purchase.player_name,
                purchase.bid_amount,
                format_millions(purchase.bid_amount),
                purchase.round_sold,
            ])
    return buffer.getvalue()


__all__ = [
    "ROSTER_HEADERS",
    "export_rosters_to_csv",
]
