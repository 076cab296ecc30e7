"""Lightweight REST client for the pyauction API."""

from __future__ import annotations

import argparse
import json

import httpx

from pyauction.ingest import parse_money


def _print_json(resp: httpx.Response) -> None:
    if resp.status_code == 404:
        raise SystemExit(resp.json().get("detail", "not found"))
    resp.raise_for_status()
    print(json.dumps(resp.json(), indent=2))


def _bid_payload(player_id: str, team_id: str, amount: str) -> dict:
    try:
        amount_value = parse_money(amount)
    except ValueError as exc:
        raise SystemExit(f"Invalid amount {amount!r}: {exc}") from exc
    if amount_value is None:
        raise SystemExit("Bid amount is required")
    return {"player_id": player_id, "team_id": team_id, "amount": amount_value}


def main() -> None:
    parser = argparse.ArgumentParser(description="Interact with the pyauction REST API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:8000")
    parser.add_argument("--status", action="store_true", help="Show round progress")
    parser.add_argument("--teams", action="store_true", help="List team purses and rosters")
    parser.add_argument("--next", action="store_true", help="Draw the next candidate")
    parser.add_argument(
        "--bid",
        nargs=3,
        metavar=("PLAYER_ID", "TEAM_ID", "AMOUNT"),
        help="Sell a player to a team; AMOUNT accepts 1500000, 1.5M or 750K",
    )
    parser.add_argument("--skip", metavar="PLAYER_ID", help="Mark a player unsold this round")
    parser.add_argument("--advance", action="store_true", help="Advance to the next round")
    parser.add_argument("--reset-team", metavar="TEAM_ID", help="Release a team's players")
    parser.add_argument("--export", metavar="PATH", help="Download rosters CSV to PATH")
    args = parser.parse_args()

    with httpx.Client(base_url=args.base_url) as client:
        if args.bid:
            _print_json(client.post("/bids", json=_bid_payload(*args.bid)))
        if args.skip:
            _print_json(client.post(f"/candidates/{args.skip}/skip"))
        if args.reset_team:
            _print_json(client.post(f"/teams/{args.reset_team}/reset"))
        if args.advance:
            _print_json(client.post("/rounds/advance"))
        if args.next:
            _print_json(client.get("/candidates/next"))
        if args.teams:
            _print_json(client.get("/teams"))
        if args.status:
            _print_json(client.get("/session"))
        if args.export:
            resp = client.get("/export.csv")
            resp.raise_for_status()
            with open(args.export, "w", encoding="utf-8", newline="") as f:
                f.write(resp.text)
            print(f"Saved rosters to {args.export}")


if __name__ == "__main__":
    main()
