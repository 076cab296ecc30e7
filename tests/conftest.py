from __future__ import annotations

import random

import pytest

from pyauction.auction import AuctionSession
from pyauction.config import get_rules
from pyauction.persistence import MemorySessionStore
from tests.factories import sample_players, sample_teams


@pytest.fixture
def rules():
    return get_rules("STANDARD")


@pytest.fixture
def store():
    return MemorySessionStore()


@pytest.fixture
def session(rules, store):
    return AuctionSession.create(
        sample_teams(),
        sample_players(),
        rules,
        store=store,
        rng=random.Random(7),
    )
