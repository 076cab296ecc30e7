"""REST API for running an auction session."""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

from fastapi import FastAPI, HTTPException
from fastapi.responses import Response

from pyauction.api.schemas import (
    ActionResponse,
    AuctionSummaryResponse,
    BidRequest,
    CandidateResponse,
    PlayerResponse,
    PurchaseResponse,
    SaleResponse,
    TeamSummaryResponse,
)
from pyauction.auction import (
    ActionResult,
    AuctionSession,
    UnknownPlayerError,
    UnknownTeamError,
    build_session,
)
from pyauction.config import DEFAULT_RULES, resolve_rules
from pyauction.ingest import load_players, load_teams
from pyauction.models import Available, Player, PlayerStatus, Sold, UnsoldInRound
from pyauction.persistence import SqliteSessionStore
from pyauction.reports import (
    TeamSummary,
    export_rosters_to_csv,
    summarize_auction,
    summarize_team,
    summarize_teams,
)


logger = logging.getLogger(__name__)

_TEAMS_ENV = "PYAUCTION_TEAMS_PATH"
_PLAYERS_ENV = "PYAUCTION_PLAYERS_PATH"
_RULES_ENV = "PYAUCTION_RULES"
_SESSION_KEY_ENV = "PYAUCTION_SESSION_KEY"


def status_label(status: PlayerStatus) -> str:
    if isinstance(status, Sold):
        return f"sold:{status.team_id}"
    if isinstance(status, UnsoldInRound):
        return f"unsold:{status.round_number}"
    if isinstance(status, Available):
        return "available"
    raise TypeError(f"Unknown player status {status!r}")


def action_to_response(result: ActionResult) -> ActionResponse:
    sale = None
    if result.sale is not None:
        sale = SaleResponse(
            player_id=result.sale.player_id,
            bid_amount=result.sale.bid_amount,
            round_sold=result.sale.round_sold,
        )
    return ActionResponse(
        ok=result.ok,
        message=result.message,
        reason=result.reason.value if result.reason is not None else None,
        current_round=result.current_round,
        sale=sale,
        unresolved=result.unresolved,
        released=list(result.released),
    )


def player_to_response(session: AuctionSession, player: Player) -> PlayerResponse:
    return PlayerResponse(
        player_id=player.player_id,
        player_name=player.player_name,
        base_price=player.base_price,
        round_base_price=session.base_price_for(player.player_id),
        availability_percentage=player.availability_percentage,
        availability_comments=player.availability_comments,
        availability_status=player.availability_status,
        photo_url=player.photo_url,
        status=status_label(session.status_of(player.player_id)),
    )


def team_summary_to_response(summary: TeamSummary) -> TeamSummaryResponse:
    return TeamSummaryResponse(
        team_id=summary.team_id,
        team_name=summary.team_name,
        captain_name=summary.captain_name,
        max_budget=summary.max_budget,
        budget_used=summary.budget_used,
        remaining_purse=summary.remaining_purse,
        roster_count=summary.roster_count,
        max_players=summary.max_players,
        min_players=summary.min_players,
        below_minimum=summary.below_minimum,
        purchases=[
            PurchaseResponse(
                player_id=purchase.player_id,
                player_name=purchase.player_name,
                bid_amount=purchase.bid_amount,
                round_sold=purchase.round_sold,
            )
            for purchase in summary.purchases
        ],
    )


def _session_from_env() -> AuctionSession:
    teams_path = os.getenv(_TEAMS_ENV)
    players_path = os.getenv(_PLAYERS_ENV)
    if not teams_path or not players_path:
        raise RuntimeError(f"{_TEAMS_ENV} and {_PLAYERS_ENV} must be set when no session is supplied")
    rules = resolve_rules(os.getenv(_RULES_ENV, DEFAULT_RULES))
    store = SqliteSessionStore()
    logger.info("Resuming auction from %s", store.db_path)
    return build_session(
        load_teams(Path(teams_path)),
        load_players(Path(players_path)),
        rules,
        store=store,
        session_key=os.getenv(_SESSION_KEY_ENV, "auctionState"),
    )


def create_app(session: AuctionSession | None = None) -> FastAPI:
    if session is None:
        session = _session_from_env()

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        yield
        session.dispose()

    app = FastAPI(title="pyauction", lifespan=lifespan)
    app.state.session = session

    def _team_or_404(team_id: str) -> None:
        try:
            session.team(team_id)
        except UnknownTeamError:
            raise HTTPException(status_code=404, detail=f"Team not found: {team_id}") from None

    def _player_or_404(player_id: str) -> None:
        try:
            session.player(player_id)
        except UnknownPlayerError:
            raise HTTPException(status_code=404, detail=f"Player not found: {player_id}") from None

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/session", response_model=AuctionSummaryResponse)
    async def get_session():
        summary = summarize_auction(session)
        return AuctionSummaryResponse(
            current_round=summary.current_round,
            max_round=summary.max_round,
            pending_players=summary.pending_players,
            unsold_this_round=list(summary.unsold_this_round),
            sold_players=summary.sold_players,
            total_players=summary.total_players,
            complete=summary.complete,
        )

    @app.post("/session/load")
    async def load_session() -> dict[str, Any]:
        restored = session.load_session()
        return {"restored": restored, "current_round": session.current_round}

    @app.get("/teams", response_model=list[TeamSummaryResponse])
    async def list_teams():
        return [team_summary_to_response(summary) for summary in summarize_teams(session)]

    @app.get("/teams/{team_id}", response_model=TeamSummaryResponse)
    async def get_team(team_id: str):
        _team_or_404(team_id)
        return team_summary_to_response(summarize_team(session, team_id))

    @app.post("/teams/{team_id}/reset", response_model=ActionResponse)
    async def reset_team(team_id: str):
        _team_or_404(team_id)
        return action_to_response(session.reset_team(team_id))

    @app.get("/pool", response_model=list[PlayerResponse])
    async def pool():
        return [player_to_response(session, player) for player in session.pending_players()]

    @app.get("/unsold", response_model=list[PlayerResponse])
    async def unsold():
        return [player_to_response(session, player) for player in session.unsold_players()]

    @app.get("/candidates/next", response_model=CandidateResponse)
    async def next_candidate():
        candidate = session.get_next_candidate()
        return CandidateResponse(
            current_round=session.current_round,
            candidate=player_to_response(session, candidate) if candidate is not None else None,
            pending_players=len(session.pending_players()),
        )

    @app.post("/candidates/{player_id}/skip", response_model=ActionResponse)
    async def skip_candidate(player_id: str):
        _player_or_404(player_id)
        return action_to_response(session.skip_candidate(player_id))

    @app.post("/bids", response_model=ActionResponse)
    async def place_bid(bid: BidRequest):
        _team_or_404(bid.team_id)
        _player_or_404(bid.player_id)
        return action_to_response(session.place_bid(bid.player_id, bid.team_id, bid.amount))

    @app.post("/rounds/advance", response_model=ActionResponse)
    async def advance_round():
        return action_to_response(session.advance_round())

    @app.get("/export.csv")
    async def export_csv():
        return Response(
            content=export_rosters_to_csv(session),
            media_type="text/csv",
            headers={"Content-Disposition": "attachment; filename=rosters.csv"},
        )

    return app
