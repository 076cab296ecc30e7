"""Persist and load CLI auction profiles."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from pyauction.config import DEFAULT_RULES


@dataclass
class AuctionProfile:
    teams_path: Optional[str] = None
    players_path: Optional[str] = None
    rules: str = DEFAULT_RULES
    db_path: Optional[str] = None
    session_key: str = "auctionState"

    @classmethod
    def load(cls, path: Path) -> "AuctionProfile":
        data = json.loads(path.read_text(encoding="utf-8"))
        return cls(
            teams_path=data.get("teams_path"),
            players_path=data.get("players_path"),
            rules=data.get("rules", DEFAULT_RULES),
            db_path=data.get("db_path"),
            session_key=data.get("session_key", "auctionState"),
        )

    def save(self, path: Path) -> None:
        payload = {
            "teams_path": self.teams_path,
            "players_path": self.players_path,
            "rules": self.rules,
            "db_path": self.db_path,
            "session_key": self.session_key,
        }
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
