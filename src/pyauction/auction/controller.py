"""Round state machine: candidate selection, skips and round advancement."""

from __future__ import annotations

import logging
import random
from typing import Iterable, List, Optional

from pyauction.auction.ledger import AuctionLedger
from pyauction.auction.policy import eligible_players, is_eligible
from pyauction.auction.results import ActionResult, RejectionReason
from pyauction.config import AuctionRules
from pyauction.models import Player, Sold, UnsoldInRound


logger = logging.getLogger(__name__)


class RoundController:
    """Tracks the current round over an ``AuctionLedger``.

    The pending pool is never stored: it is whatever the round policy
    offers for the current round given the ledger's statuses, so sold and
    skipped players drop out and players released by a team reset come
    back when the round would include them.
    """

    def __init__(
        self,
        ledger: AuctionLedger,
        rules: AuctionRules,
        *,
        rng: random.Random | None = None,
    ) -> None:
        self._ledger = ledger
        self._rules = rules
        self._rng = rng or random.Random()
        self.current_round = 1
        self._unsold: List[str] = []
        self._candidate_id: Optional[str] = None

    @property
    def rules(self) -> AuctionRules:
        return self._rules

    @property
    def unsold_this_round(self) -> List[str]:
        return list(self._unsold)

    @property
    def candidate_id(self) -> Optional[str]:
        return self._candidate_id

    def pending_players(self) -> List[Player]:
        return eligible_players(self.current_round, self._ledger.players, self._ledger.statuses)

    def is_pending(self, player_id: str) -> bool:
        return is_eligible(self.current_round, self._ledger.status_of(player_id))

    @property
    def is_complete(self) -> bool:
        return self.current_round >= self._rules.max_round and not self.pending_players()

    def next_candidate(self) -> Optional[Player]:
        if self._candidate_id is not None and self.is_pending(self._candidate_id):
            return self._ledger.player(self._candidate_id)
        pending = self.pending_players()
        if not pending:
            self._candidate_id = None
            return None
        candidate = self._rng.choice(pending)
        self._candidate_id = candidate.player_id
        return candidate

    def skip(self, player_id: str) -> ActionResult:
        status = self._ledger.status_of(player_id)
        if isinstance(status, Sold):
            return ActionResult.rejected(
                RejectionReason.ALREADY_SOLD,
                "Player already sold.",
                current_round=self.current_round,
            )
        if not is_eligible(self.current_round, status):
            return ActionResult.rejected(
                RejectionReason.NOT_IN_ROUND,
                f"Player {player_id} is not up for bidding in round {self.current_round}.",
                current_round=self.current_round,
            )
        self._ledger.mark_unsold(player_id, self.current_round)
        self._unsold.append(player_id)
        if self._candidate_id == player_id:
            self._candidate_id = None
        logger.info("Skipped %s in round %d", player_id, self.current_round)
        return ActionResult(
            ok=True,
            message=f"Player {player_id} marked unsold in round {self.current_round}.",
            current_round=self.current_round,
        )

    def record_sale(self, player_id: str) -> None:
        """Drop a just-sold player from the unsold list and candidate slot."""

        if player_id in self._unsold:
            self._unsold.remove(player_id)
        if self._candidate_id == player_id:
            self._candidate_id = None

    def advance(self) -> ActionResult:
        unresolved = len(self.pending_players())
        if unresolved:
            return ActionResult.rejected(
                RejectionReason.ROUND_INCOMPLETE,
                f"Round {self.current_round} has {unresolved} unresolved players. "
                "Please sell or mark them as unsold first.",
                current_round=self.current_round,
                unresolved=unresolved,
            )
        if self.current_round >= self._rules.max_round:
            return ActionResult.rejected(
                RejectionReason.AUCTION_COMPLETE,
                "Auction completed! All rounds finished.",
                current_round=self.current_round,
            )
        self.current_round += 1
        self._unsold = []
        self._candidate_id = None
        logger.info(
            "Advanced to round %d with %d eligible players",
            self.current_round,
            len(self.pending_players()),
        )
        return ActionResult(
            ok=True,
            message=f"Round {self.current_round} started.",
            current_round=self.current_round,
        )

    def restore(self, current_round: int, unsold: Iterable[str]) -> None:
        if not 1 <= current_round <= self._rules.max_round:
            raise ValueError(
                f"current_round must lie in 1..{self._rules.max_round}, got {current_round}"
            )
        self.current_round = current_round
        # keep only players still marked unsold in this round
        self._unsold = [
            player_id
            for player_id in unsold
            if self._ledger.status_of(player_id) == UnsoldInRound(current_round)
        ]
        self._candidate_id = None

    def reset(self) -> None:
        self.current_round = 1
        self._unsold = []
        self._candidate_id = None
