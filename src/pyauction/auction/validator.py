"""Bid validation.

Checks run in a fixed order and the first failure is reported, so the same
bid always produces the same message:

1. player already sold
2. bid below the round's base price (or not a positive integer)
3. team roster full
4. bid would leave too little budget to fill the team's remaining slots
   at ``min_per_player`` each
5. bid exceeds the team's remaining budget

"""

from __future__ import annotations

from pyauction.auction.ledger import TeamLedger
from pyauction.auction.policy import base_price
from pyauction.auction.results import BidDecision, RejectionReason, format_millions
from pyauction.config import AuctionRules
from pyauction.models import Player, PlayerStatus, Sold, Team


def _is_positive_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def validate_bid(
    team: Team,
    team_ledger: TeamLedger,
    player: Player,
    status: PlayerStatus,
    bid_amount: int,
    round_number: int,
    rules: AuctionRules,
) -> BidDecision:
    if isinstance(status, Sold):
        return BidDecision.reject(RejectionReason.ALREADY_SOLD, "Player already sold.")

    minimum = base_price(round_number, player, rules)
    if not _is_positive_int(bid_amount) or bid_amount < minimum:
        return BidDecision.reject(
            RejectionReason.BELOW_BASE_PRICE,
            f"Bid must be at least ${format_millions(minimum)}.",
        )

    roster_count = team_ledger.roster_count
    if roster_count >= team.max_players:
        return BidDecision.reject(RejectionReason.ROSTER_FULL, "Team has reached maximum players.")

    budget_used = team_ledger.budget_used
    remaining_spots = team.max_players - roster_count - 1
    min_reserve = remaining_spots * rules.min_per_player
    if budget_used + bid_amount + min_reserve > team.max_budget:
        return BidDecision.reject(
            RejectionReason.INSUFFICIENT_RESERVE,
            f"Bid too high. Must reserve ${format_millions(rules.min_per_player)} per remaining spot.",
        )

    if budget_used + bid_amount > team.max_budget:
        return BidDecision.reject(RejectionReason.BUDGET_EXCEEDED, "Team budget exceeded.")

    return BidDecision.accept()
