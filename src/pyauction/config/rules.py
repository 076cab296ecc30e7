"""Auction rule sets: round count and per-slot reserve floor."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, replace
from typing import Dict, Iterable, Mapping


logger = logging.getLogger(__name__)

_MAX_ROUND_ENV = "PYAUCTION_MAX_ROUND"
_MIN_PER_PLAYER_ENV = "PYAUCTION_MIN_PER_PLAYER"


@dataclass(frozen=True)
class AuctionRules:
    name: str
    max_round: int
    min_per_player: int
    final_round: int = field(default=0)

    def __post_init__(self) -> None:
        if self.max_round < 1:
            raise ValueError(f"max_round must be at least 1, got {self.max_round}")
        if self.min_per_player < 0:
            raise ValueError(f"min_per_player must be non-negative, got {self.min_per_player}")
        # final_round=0 means "the last round"
        if self.final_round <= 0:
            object.__setattr__(self, "final_round", self.max_round)


_AUCTION_RULES: Dict[str, AuctionRules] = {
    "STANDARD": AuctionRules(
        name="STANDARD",
        max_round=3,
        min_per_player=1_000_000,
    ),
    "SINGLE_ROUND": AuctionRules(
        name="SINGLE_ROUND",
        max_round=1,
        min_per_player=1_000_000,
    ),
}

DEFAULT_RULES = "STANDARD"


def iter_rules() -> Iterable[AuctionRules]:
    """Return an iterator of all configured rule sets."""

    return _AUCTION_RULES.values()


def get_rules(name: str = DEFAULT_RULES) -> AuctionRules:
    """Fetch a rule set by name, raising KeyError if missing."""

    key = name.upper()
    if key not in _AUCTION_RULES:
        raise KeyError(f"No auction rules configured for name={name!r}")
    return _AUCTION_RULES[key]


def _env_int(env: Mapping[str, str], name: str, *, min_value: int) -> int | None:
    raw = env.get(name)
    if raw is None or raw == "":
        return None
    try:
        value = int(raw.replace("_", "").replace(",", ""))
    except ValueError:
        logger.warning("Invalid int for %s: %s; ignoring", name, raw)
        return None
    if value < min_value:
        logger.warning("%s=%d is below %d; ignoring", name, value, min_value)
        return None
    return value


def resolve_rules(name: str = DEFAULT_RULES, env: Mapping[str, str] | None = None) -> AuctionRules:
    """Look up a named rule set and apply any environment overrides."""

    rules = get_rules(name)
    env = os.environ if env is None else env
    max_round = _env_int(env, _MAX_ROUND_ENV, min_value=1)
    min_per_player = _env_int(env, _MIN_PER_PLAYER_ENV, min_value=0)
    if max_round is None and min_per_player is None:
        return rules
    return replace(
        rules,
        max_round=max_round if max_round is not None else rules.max_round,
        min_per_player=min_per_player if min_per_player is not None else rules.min_per_player,
        # re-derive the final round from the (possibly overridden) max_round
        final_round=0,
    )
