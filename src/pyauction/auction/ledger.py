"""Per-team purchase ledger and per-player status tracking."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Tuple

from pyauction.auction.results import UnknownPlayerError, UnknownTeamError
from pyauction.models import AVAILABLE, Player, PlayerStatus, SaleEntry, Sold, Team, UnsoldInRound


logger = logging.getLogger(__name__)


@dataclass
class TeamLedger:
    team_id: str
    selected_players: List[SaleEntry] = field(default_factory=list)

    @property
    def budget_used(self) -> int:
        return sum(entry.bid_amount for entry in self.selected_players)

    @property
    def roster_count(self) -> int:
        return len(self.selected_players)


class AuctionLedger:
    """Mutable aggregate over team purchases and player statuses.

    ``apply_sale`` does not validate; callers run the bid validator first.
    """

    def __init__(self, teams: Iterable[Team], players: Iterable[Player]):
        self._teams: Dict[str, Team] = {}
        for team in teams:
            if team.team_id in self._teams:
                raise ValueError(f"Duplicate team_id {team.team_id!r}")
            self._teams[team.team_id] = team
        self._players: Dict[str, Player] = {}
        for player in players:
            if player.player_id in self._players:
                raise ValueError(f"Duplicate player_id {player.player_id!r}")
            self._players[player.player_id] = player
        self._ledgers: Dict[str, TeamLedger] = {
            team_id: TeamLedger(team_id) for team_id in self._teams
        }
        self._statuses: Dict[str, PlayerStatus] = {
            player_id: AVAILABLE for player_id in self._players
        }

    @property
    def teams(self) -> List[Team]:
        return list(self._teams.values())

    @property
    def players(self) -> List[Player]:
        return list(self._players.values())

    @property
    def statuses(self) -> Mapping[str, PlayerStatus]:
        return dict(self._statuses)

    def team(self, team_id: str) -> Team:
        try:
            return self._teams[team_id]
        except KeyError:
            raise UnknownTeamError(team_id) from None

    def player(self, player_id: str) -> Player:
        try:
            return self._players[player_id]
        except KeyError:
            raise UnknownPlayerError(player_id) from None

    def team_ledger(self, team_id: str) -> TeamLedger:
        try:
            return self._ledgers[team_id]
        except KeyError:
            raise UnknownTeamError(team_id) from None

    def status_of(self, player_id: str) -> PlayerStatus:
        try:
            return self._statuses[player_id]
        except KeyError:
            raise UnknownPlayerError(player_id) from None

    def apply_sale(self, team_id: str, player_id: str, bid_amount: int, round_number: int) -> SaleEntry:
        ledger = self.team_ledger(team_id)
        self.player(player_id)
        entry = SaleEntry(player_id=player_id, bid_amount=bid_amount, round_sold=round_number)
        ledger.selected_players.append(entry)
        self._statuses[player_id] = Sold(team_id=team_id, bid_amount=bid_amount, round_number=round_number)
        logger.info(
            "Sold %s to %s for %d in round %d", player_id, team_id, bid_amount, round_number
        )
        return entry

    def mark_unsold(self, player_id: str, round_number: int) -> None:
        self.player(player_id)
        self._statuses[player_id] = UnsoldInRound(round_number)

    def reset_team(self, team_id: str) -> Tuple[str, ...]:
        """Release every player bought by ``team_id`` and clear its purchases."""

        ledger = self.team_ledger(team_id)
        released = tuple(entry.player_id for entry in ledger.selected_players)
        for player_id in released:
            self._statuses[player_id] = AVAILABLE
        ledger.selected_players.clear()
        logger.info("Reset team %s; released %d players", team_id, len(released))
        return released

    def restore(
        self,
        entries_by_team: Mapping[str, Iterable[SaleEntry]],
        unsold_rounds: Mapping[str, int],
    ) -> None:
        """Replace all ledger state with saved purchases and unsold markers.

        Every id must be known; nothing is changed if one is not.
        """

        staged: Dict[str, List[SaleEntry]] = {}
        for team_id, entries in entries_by_team.items():
            self.team_ledger(team_id)
            staged[team_id] = list(entries)
            for entry in staged[team_id]:
                self.player(entry.player_id)
        for player_id in unsold_rounds:
            self.player(player_id)

        statuses: Dict[str, PlayerStatus] = {player_id: AVAILABLE for player_id in self._players}
        for player_id, round_number in unsold_rounds.items():
            statuses[player_id] = UnsoldInRound(round_number)
        for team_id, entries in staged.items():
            for entry in entries:
                statuses[entry.player_id] = Sold(
                    team_id=team_id,
                    bid_amount=entry.bid_amount,
                    round_number=entry.round_sold,
                )

        self._statuses = statuses
        for team_id, ledger in self._ledgers.items():
            ledger.selected_players = list(staged.get(team_id, ()))
