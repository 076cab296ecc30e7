"""Auction session aggregate and operator command surface."""

from __future__ import annotations

import logging
import random
import sqlite3
import threading
from typing import Iterable, List, Optional, Sequence

from pyauction.auction.controller import RoundController
from pyauction.auction.ledger import AuctionLedger, TeamLedger
from pyauction.auction.policy import base_price
from pyauction.auction.results import (
    ActionResult,
    PersistenceLoadFailure,
    RejectionReason,
    SessionDisposedError,
    format_millions,
)
from pyauction.auction.validator import validate_bid
from pyauction.config import AuctionRules, get_rules
from pyauction.models import Player, PlayerStatus, Sold, Team, UnsoldInRound
from pyauction.persistence import SessionStore, decode_session, encode_session


logger = logging.getLogger(__name__)

DEFAULT_SESSION_KEY = "auctionState"


class AuctionSession:
    """Owns the ledger and round state of one auction run.

    Every successful mutating command writes the session through to the
    configured store. The store is best-effort: a failed write is logged
    and the in-memory state stays authoritative. Mutating commands are
    serialized by a per-session lock.
    """

    def __init__(
        self,
        teams: Iterable[Team],
        players: Iterable[Player],
        rules: AuctionRules | None = None,
        *,
        store: SessionStore | None = None,
        session_key: str = DEFAULT_SESSION_KEY,
        rng: random.Random | None = None,
    ) -> None:
        self.rules = rules or get_rules()
        self.ledger = AuctionLedger(teams, players)
        self.controller = RoundController(self.ledger, self.rules, rng=rng)
        self._store = store
        self._session_key = session_key
        self._lock = threading.RLock()
        self._disposed = False

    # ---------- lifecycle ----------

    @classmethod
    def create(
        cls,
        teams: Iterable[Team],
        players: Iterable[Player],
        rules: AuctionRules | None = None,
        *,
        store: SessionStore | None = None,
        session_key: str = DEFAULT_SESSION_KEY,
        rng: random.Random | None = None,
    ) -> "AuctionSession":
        return cls(teams, players, rules, store=store, session_key=session_key, rng=rng)

    @classmethod
    def load(
        cls,
        teams: Iterable[Team],
        players: Iterable[Player],
        rules: AuctionRules | None = None,
        *,
        store: SessionStore | None = None,
        session_key: str = DEFAULT_SESSION_KEY,
        rng: random.Random | None = None,
    ) -> "AuctionSession":
        session = cls(teams, players, rules, store=store, session_key=session_key, rng=rng)
        session.load_session()
        return session

    def dispose(self) -> None:
        with self._lock:
            if self._disposed:
                return
            self._persist()
            self._disposed = True

    @property
    def disposed(self) -> bool:
        return self._disposed

    def _ensure_active(self) -> None:
        if self._disposed:
            raise SessionDisposedError("Auction session has been disposed")

    # ---------- persistence ----------

    def _persist(self) -> None:
        if self._store is None:
            return
        payload = encode_session(
            current_round=self.controller.current_round,
            ledgers={
                team.team_id: list(self.ledger.team_ledger(team.team_id).selected_players)
                for team in self.ledger.teams
            },
            unsold_players=self.controller.unsold_this_round,
            statuses=self.ledger.statuses,
        )
        try:
            self._store.save(self._session_key, payload)
        except (OSError, sqlite3.Error) as exc:
            logger.warning("Failed to save auction session %s: %s", self._session_key, exc)

    def load_session(self) -> bool:
        """Resume the saved session, if any. Returns True when state was restored.

        A missing or unreadable blob leaves the session in its initial state.
        """

        with self._lock:
            self._ensure_active()
            self.ledger.restore({}, {})
            self.controller.reset()
            if self._store is None:
                return False
            try:
                payload = self._store.load(self._session_key)
            except (OSError, sqlite3.Error) as exc:
                logger.warning("Failed to read auction session %s: %s", self._session_key, exc)
                return False
            if payload is None:
                return False
            try:
                state = decode_session(
                    payload,
                    team_ids=[team.team_id for team in self.ledger.teams],
                    player_ids=[player.player_id for player in self.ledger.players],
                    max_round=self.rules.max_round,
                )
            except PersistenceLoadFailure as exc:
                logger.warning("Failed to load saved auction; starting fresh: %s", exc)
                return False
            self.ledger.restore(state.entries_by_team, state.unsold_rounds)
            self.controller.restore(state.current_round, state.unsold_players)
            logger.info(
                "Resumed auction %s at round %d", self._session_key, self.controller.current_round
            )
            return True

    # ---------- queries ----------

    @property
    def current_round(self) -> int:
        return self.controller.current_round

    @property
    def is_complete(self) -> bool:
        return self.controller.is_complete

    @property
    def teams(self) -> List[Team]:
        return self.ledger.teams

    @property
    def players(self) -> List[Player]:
        return self.ledger.players

    def team(self, team_id: str) -> Team:
        return self.ledger.team(team_id)

    def player(self, player_id: str) -> Player:
        return self.ledger.player(player_id)

    def team_ledger(self, team_id: str) -> TeamLedger:
        return self.ledger.team_ledger(team_id)

    def status_of(self, player_id: str) -> PlayerStatus:
        return self.ledger.status_of(player_id)

    def pending_players(self) -> List[Player]:
        return self.controller.pending_players()

    def unsold_players(self) -> List[Player]:
        return [self.ledger.player(player_id) for player_id in self.controller.unsold_this_round]

    def base_price_for(self, player_id: str) -> int:
        return base_price(self.current_round, self.ledger.player(player_id), self.rules)

    # ---------- commands ----------

    def get_next_candidate(self) -> Optional[Player]:
        with self._lock:
            self._ensure_active()
            return self.controller.next_candidate()

    def place_bid(self, player_id: str, team_id: str, amount: int) -> ActionResult:
        with self._lock:
            self._ensure_active()
            team = self.ledger.team(team_id)
            player = self.ledger.player(player_id)
            status = self.ledger.status_of(player_id)
            team_ledger = self.ledger.team_ledger(team_id)
            round_number = self.controller.current_round

            # skipped players stay sellable until the round ends
            if not (
                isinstance(status, Sold)
                or self.controller.is_pending(player_id)
                or status == UnsoldInRound(round_number)
            ):
                return ActionResult.rejected(
                    RejectionReason.NOT_IN_ROUND,
                    f"{player.player_name} is not up for bidding in round {round_number}.",
                    current_round=round_number,
                )
            decision = validate_bid(team, team_ledger, player, status, amount, round_number, self.rules)
            if not decision.accepted:
                return ActionResult.rejected(
                    decision.reason, decision.message, current_round=round_number
                )

            entry = self.ledger.apply_sale(team_id, player_id, amount, round_number)
            self.controller.record_sale(player_id)
            self._persist()
            return ActionResult(
                ok=True,
                message=f"Sold to {team.team_name} for ${format_millions(amount)}",
                current_round=round_number,
                sale=entry,
            )

    def skip_candidate(self, player_id: str) -> ActionResult:
        with self._lock:
            self._ensure_active()
            result = self.controller.skip(player_id)
            if result.ok:
                self._persist()
            return result

    def advance_round(self) -> ActionResult:
        with self._lock:
            self._ensure_active()
            result = self.controller.advance()
            if result.ok:
                self._persist()
            return result

    def reset_team(self, team_id: str) -> ActionResult:
        with self._lock:
            self._ensure_active()
            team = self.ledger.team(team_id)
            released = self.ledger.reset_team(team_id)
            self._persist()
            return ActionResult(
                ok=True,
                message=f"Reset {team.team_name}; released {len(released)} players.",
                current_round=self.controller.current_round,
                released=released,
            )


def build_session(
    teams: Sequence[Team],
    players: Sequence[Player],
    rules: AuctionRules | None = None,
    *,
    store: SessionStore | None = None,
    session_key: str = DEFAULT_SESSION_KEY,
    seed: int | None = None,
    resume: bool = True,
) -> AuctionSession:
    rng = random.Random(seed) if seed is not None else None
    factory = AuctionSession.load if resume else AuctionSession.create
    return factory(teams, players, rules, store=store, session_key=session_key, rng=rng)
