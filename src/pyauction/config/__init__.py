"""Configuration helpers for auction rules."""

from .rules import DEFAULT_RULES, AuctionRules, get_rules, iter_rules, resolve_rules

__all__ = [
    "DEFAULT_RULES",
    "AuctionRules",
    "get_rules",
    "iter_rules",
    "resolve_rules",
]
