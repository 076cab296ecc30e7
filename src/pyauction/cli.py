"""Command-line interface for driving a saved auction session."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from pyauction.auction import (
    ActionResult,
    AuctionSession,
    UnknownPlayerError,
    UnknownTeamError,
    build_session,
    format_millions,
)
from pyauction.config import DEFAULT_RULES, resolve_rules
from pyauction.config_loader import AuctionProfile
from pyauction.ingest import load_players, load_teams, parse_money
from pyauction.persistence import SqliteSessionStore
from pyauction.reports import export_rosters_to_csv, summarize_auction, summarize_teams


EXIT_REJECTED = 1
EXIT_UNKNOWN_ID = 2


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run a multi-round player auction")
    parser.add_argument("--teams", type=Path, default=None, help="Teams file (.json or .csv)")
    parser.add_argument("--players", type=Path, default=None, help="Players file (.json or .csv)")
    parser.add_argument("--rules", default=None, help=f"Rule set name (default {DEFAULT_RULES})")
    parser.add_argument(
        "--db",
        type=Path,
        default=None,
        help="SQLite file holding saved sessions (overrides PYAUCTION_DB_PATH)",
    )
    parser.add_argument("--session-key", default=None, help="Name of the saved session")
    parser.add_argument("--seed", type=int, default=None, help="Seed for random candidate selection")
    parser.add_argument("--load-profile", type=Path, help="Load options from a profile JSON", default=None)
    parser.add_argument("--save-profile", type=Path, help="Save options to a profile JSON", default=None)
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("status", help="Show round progress and team purses")
    sub.add_parser("next", help="Draw the next candidate for bidding")

    bid = sub.add_parser("bid", help="Sell a player to a team")
    bid.add_argument("player_id")
    bid.add_argument("team_id")
    bid.add_argument("amount", help="Bid amount, e.g. 1500000 or 1.5M")

    skip = sub.add_parser("skip", help="Mark a player unsold in the current round")
    skip.add_argument("player_id")

    sub.add_parser("advance", help="Move to the next round")

    reset = sub.add_parser("reset", help="Release every player bought by a team")
    reset.add_argument("team_id")

    export = sub.add_parser("export", help="Write team rosters as CSV")
    export.add_argument("--output", type=Path, default=None, help="Output CSV path (stdout if omitted)")

    serve = sub.add_parser("serve", help="Serve the HTTP API")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)
    return parser.parse_args(argv)


def _resolve_profile(args: argparse.Namespace) -> AuctionProfile:
    profile = AuctionProfile.load(args.load_profile) if args.load_profile else AuctionProfile()
    if args.teams is not None:
        profile.teams_path = str(args.teams)
    if args.players is not None:
        profile.players_path = str(args.players)
    if args.rules is not None:
        profile.rules = args.rules
    if args.db is not None:
        profile.db_path = str(args.db)
    if args.session_key is not None:
        profile.session_key = args.session_key
    return profile


def _open_session(profile: AuctionProfile, *, seed: int | None) -> AuctionSession:
    if not profile.teams_path or not profile.players_path:
        raise SystemExit("--teams and --players are required (or supply them via --load-profile)")
    store = SqliteSessionStore(Path(profile.db_path) if profile.db_path else None)
    return build_session(
        load_teams(Path(profile.teams_path)),
        load_players(Path(profile.players_path)),
        resolve_rules(profile.rules),
        store=store,
        session_key=profile.session_key,
        seed=seed,
    )


def _print_result(result: ActionResult) -> int:
    if result.ok:
        print(result.message)
        return 0
    reason = result.reason.value if result.reason is not None else "rejected"
    print(f"Rejected ({reason}): {result.message}")
    return EXIT_REJECTED


def _print_status(session: AuctionSession) -> None:
    summary = summarize_auction(session)
    state = "complete" if summary.complete else f"{summary.pending_players} pending"
    print(f"Round {summary.current_round}/{summary.max_round}: {state}")
    print(f"Sold {summary.sold_players}/{summary.total_players} players")
    if summary.unsold_this_round:
        print(f"Unsold this round: {', '.join(summary.unsold_this_round)}")
    for team in summarize_teams(session):
        flag = " (below minimum)" if team.below_minimum else ""
        print(
            f"  {team.team_name}: {team.roster_count}/{team.max_players} players, "
            f"remaining purse ${format_millions(team.remaining_purse)}{flag}"
        )
        for purchase in team.purchases:
            print(f"    - {purchase.player_name} ${format_millions(purchase.bid_amount)}")


def _run_command(args: argparse.Namespace, session: AuctionSession) -> int:
    if args.command == "status":
        _print_status(session)
        return 0
    if args.command == "next":
        candidate = session.get_next_candidate()
        if candidate is None:
            print("All available players are sold or skipped!")
            return 0
        price = session.base_price_for(candidate.player_id)
        print(f"{candidate.player_id}: {candidate.player_name} (base price ${format_millions(price)})")
        if candidate.availability_percentage is not None:
            print(f"  Availability: {candidate.availability_percentage:g}%")
        if candidate.availability_comments:
            print(f"  Comments: {candidate.availability_comments}")
        return 0
    if args.command == "bid":
        try:
            amount = parse_money(args.amount)
        except ValueError as exc:
            print(str(exc))
            return EXIT_REJECTED
        return _print_result(session.place_bid(args.player_id, args.team_id, amount or 0))
    if args.command == "skip":
        return _print_result(session.skip_candidate(args.player_id))
    if args.command == "advance":
        return _print_result(session.advance_round())
    if args.command == "reset":
        return _print_result(session.reset_team(args.team_id))
    if args.command == "export":
        csv_text = export_rosters_to_csv(session)
        if args.output:
            args.output.write_text(csv_text, encoding="utf-8")
            print(f"Wrote rosters to {args.output}")
        else:
            sys.stdout.write(csv_text)
        return 0
    raise ValueError(f"Unknown command {args.command!r}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    profile = _resolve_profile(args)
    if args.save_profile:
        profile.save(args.save_profile)
        print(f"Saved profile to {args.save_profile}")

    session = _open_session(profile, seed=args.seed)

    if args.command == "serve":
        import uvicorn

        from pyauction.api import create_app

        uvicorn.run(create_app(session), host=args.host, port=args.port)
        return 0

    try:
        return _run_command(args, session)
    except UnknownTeamError as exc:
        print(f"Unknown team: {exc.args[0]}")
        return EXIT_UNKNOWN_ID
    except UnknownPlayerError as exc:
        print(f"Unknown player: {exc.args[0]}")
        return EXIT_UNKNOWN_ID
    finally:
        session.dispose()


if __name__ == "__main__":
    sys.exit(main())
