import csv
from io import StringIO

from pyauction.reports import export_rosters_to_csv, summarize_auction, summarize_team, summarize_teams
from pyauction.reports.export import ROSTER_HEADERS


def test_team_summary_tracks_purse_and_minimum(session):
    session.place_bid("p2", "t2", 1_500_000)

    titans = summarize_team(session, "t2")

    assert titans.budget_used == 1_500_000
    assert titans.remaining_purse == 8_500_000
    assert titans.roster_count == 1
    assert titans.below_minimum
    assert titans.purchases[0].player_name == "Bela"

    strikers = summarize_team(session, "t1")
    assert strikers.captain_name == "Asha"
    assert not strikers.below_minimum


def test_summarize_teams_keeps_team_order(session):
    assert [summary.team_id for summary in summarize_teams(session)] == ["t1", "t2"]


def test_auction_summary_counts(session):
    session.place_bid("p1", "t1", 1_000_000)
    session.skip_candidate("p3")

    summary = summarize_auction(session)

    assert summary.current_round == 1
    assert summary.max_round == 3
    assert summary.pending_players == 2
    assert summary.unsold_this_round == ("p3",)
    assert summary.sold_players == 1
    assert summary.total_players == 4
    assert not summary.complete


def test_export_rosters_csv(session):
    session.place_bid("p4", "t2", 2_000_000)
    session.place_bid("p1", "t1", 1_000_000)

    rows = list(csv.reader(StringIO(export_rosters_to_csv(session))))

    assert rows[0] == list(ROSTER_HEADERS)
    assert rows[1] == ["t1", "Strikers", "p1", "Arjun", "1000000", "1.00M", "1"]
    assert rows[2] == ["t2", "Titans", "p4", "Dev", "2000000", "2.00M", "1"]
