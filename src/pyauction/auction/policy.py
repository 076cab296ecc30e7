"""Round eligibility and pricing."""

from __future__ import annotations

from typing import Iterable, List, Mapping

from pyauction.config import AuctionRules
from pyauction.models import AVAILABLE, Available, Player, PlayerStatus, UnsoldInRound


def is_eligible(round_number: int, status: PlayerStatus) -> bool:
    if round_number == 1:
        return isinstance(status, Available)
    return isinstance(status, UnsoldInRound) and status.round_number == round_number - 1


def eligible_players(
    round_number: int,
    players: Iterable[Player],
    statuses: Mapping[str, PlayerStatus],
) -> List[Player]:
    """Players open for bidding in ``round_number``.

    Round 1 offers every ``Available`` player. Later rounds offer only the
    players left unsold in exactly the previous round; players passed over
    earlier are not carried further. Input order is preserved.
    """

    if round_number < 1:
        raise ValueError(f"round_number must be >= 1, got {round_number}")
    return [
        player
        for player in players
        if is_eligible(round_number, statuses.get(player.player_id, AVAILABLE))
    ]


def base_price(round_number: int, player: Player, rules: AuctionRules) -> int:
    """Minimum acceptable bid for ``player`` in ``round_number``."""

    if round_number == rules.final_round and player.round3_base_price is not None:
        return player.round3_base_price
    return player.base_price
