from __future__ import annotations

import logging
import random
from collections import Counter
from itertools import permutations

from matchday.core.events import ScorerRecord
from matchday.core.fixtures import Fixture, fixtures_for_week, league_slug, round_robin, weeks
from matchday.core.season import play_season, play_week
from matchday.core.standings import TableRow, apply_result_to_table, build_table, sort_table
from matchday.core.stats import player_season_stats, top_scorers


def _played(fid, week, home, away, hs, as_, **extra) -> Fixture:
    return Fixture(
        fixture_id=fid,
        week=week,
        home_id=home,
        away_id=away,
        played=True,
        home_score=hs,
        away_score=as_,
        **extra,
    )


# ---------- Spelschema ----------


def test_round_robin_four_clubs(league_clubs):
    fixtures = round_robin(league_clubs)
    assert len(fixtures) == 12
    assert weeks(fixtures) == [1, 2, 3, 4, 5, 6]
    pairs = Counter((f.home_id, f.away_id) for f in fixtures)
    ids = [c.club_id for c in league_clubs]
    assert set(pairs) == set(permutations(ids, 2))
    assert all(n == 1 for n in pairs.values())
    for week in weeks(fixtures):
        playing = [cid for f in fixtures_for_week(fixtures, week) for cid in (f.home_id, f.away_id)]
        assert len(playing) == len(set(playing))
    assert fixtures[0].fixture_id == "fix-testligan-1-1"


def test_round_robin_odd_number_of_clubs(make_club):
    clubs = [make_club(f"c{i}") for i in range(5)]
    fixtures = round_robin(clubs)
    assert len(fixtures) == 20
    assert weeks(fixtures) == list(range(1, 11))


def test_single_round_halves_schedule(league_clubs):
    fixtures = round_robin(league_clubs, double_round=False)
    assert len(fixtures) == 6
    assert weeks(fixtures) == [1, 2, 3]


def test_round_robin_groups_by_league(make_club):
    clubs = [
        make_club("a1", league="Allsvenskan"),
        make_club("s1", league="Superettan"),
        make_club("a2", league="Allsvenskan"),
        make_club("s2", league="Superettan"),
        make_club("lonely", league="Division 9"),
    ]
    fixtures = round_robin(clubs)
    assert {f.league for f in fixtures} == {"Allsvenskan", "Superettan"}
    for f in fixtures:
        assert f.home_id[0] == f.away_id[0]
        assert f.fixture_id.startswith(f"fix-{league_slug(f.league)}-")


def test_round_robin_shuffle_is_reproducible(league_clubs):
    first = round_robin(league_clubs, rng=random.Random(5))
    second = round_robin(league_clubs, rng=random.Random(5))
    assert [(f.home_id, f.away_id) for f in first] == [(f.home_id, f.away_id) for f in second]
    assert [c.club_id for c in league_clubs] == ["alpha", "bravo", "charlie", "delta"]


def test_league_slug():
    assert league_slug("Division 2 Norra") == "division-2-norra"
    assert league_slug("!!!") == "league"


# ---------- Omgångar och säsong ----------


def test_play_week_is_reproducible_and_pure(league_clubs):
    fixtures = round_robin(league_clubs)
    first = play_week(fixtures, league_clubs, 1, rng=random.Random(8))
    second = play_week(fixtures, league_clubs, 1, rng=random.Random(8))
    assert len(first) == 2
    assert all(f.played for f in first)
    assert [(f.home_score, f.away_score) for f in first] == [(f.home_score, f.away_score) for f in second]
    assert not any(f.played for f in fixtures)


def test_play_week_skips_unknown_club(league_clubs, caplog):
    fixtures = [
        Fixture(fixture_id="fix-x-1-1", week=1, home_id="alpha", away_id="ghost"),
        Fixture(fixture_id="fix-x-1-2", week=1, home_id="bravo", away_id="charlie"),
    ]
    with caplog.at_level(logging.WARNING, logger="matchday.core.season"):
        played = play_week(fixtures, league_clubs, 1, rng=random.Random(1))
    assert [f.fixture_id for f in played] == ["fix-x-1-2"]
    assert "fix-x-1-1" in caplog.text


def test_skipped_fixture_does_not_shift_later_results(league_clubs):
    good = Fixture(fixture_id="fix-x-1-2", week=1, home_id="bravo", away_id="charlie")
    ghost = Fixture(fixture_id="fix-x-1-1", week=1, home_id="alpha", away_id="ghost")
    with_ghost = play_week([ghost, good], league_clubs, 1, rng=random.Random(4))
    replaced = Fixture(fixture_id="fix-x-1-1", week=1, home_id="alpha", away_id="delta")
    with_real = play_week([replaced, good], league_clubs, 1, rng=random.Random(4))
    assert with_ghost[0].events == with_real[1].events


def test_play_week_ignores_already_played(league_clubs):
    done = _played("fix-x-1-1", 1, "alpha", "bravo", 2, 0)
    assert play_week([done], league_clubs, 1, rng=random.Random(0)) == []


def test_play_season_plays_everything(league_clubs):
    fixtures = round_robin(league_clubs)
    season = play_season(fixtures, league_clubs, rng=random.Random(42))
    assert [f.fixture_id for f in season] == [f.fixture_id for f in fixtures]
    assert all(f.played for f in season)

    table = build_table(league_clubs, season)
    assert [row.mp for row in table] == [6, 6, 6, 6]
    assert sum(row.gf for row in table) == sum(row.ga for row in table)
    draws = sum(1 for f in season if f.home_score == f.away_score)
    assert sum(row.pts for row in table) == 3 * len(season) - draws


# ---------- Tabell ----------


def test_apply_result_points():
    table = {}
    apply_result_to_table(table, _played("f1", 1, "a", "b", 2, 1), {"a": "A", "b": "B"})
    apply_result_to_table(table, _played("f2", 2, "b", "a", 0, 0))
    apply_result_to_table(table, Fixture(fixture_id="f3", week=3, home_id="a", away_id="b"))
    a, b = table["a"], table["b"]
    assert (a.mp, a.w, a.d, a.losses, a.gf, a.ga, a.pts) == (2, 1, 1, 0, 2, 1, 4)
    assert (b.mp, b.w, b.d, b.losses, b.pts) == (2, 0, 1, 1, 1)
    assert a.name == "A"


def test_sort_table_tie_breaks():
    table = {
        "x": TableRow("x", "Xenon", pts=6, gf=5, ga=2),
        "y": TableRow("y", "Ypsilon", pts=6, gf=6, ga=3),
        "z": TableRow("z", "Zulu", pts=6, gf=4, ga=2),
        "b": TableRow("b", "Beta", pts=3, gf=1, ga=1),
        "a": TableRow("a", "Alfa", pts=3, gf=1, ga=1),
    }
    assert [r.club_id for r in sort_table(table)] == ["y", "x", "z", "a", "b"]


def test_build_table_lists_clubs_without_matches(league_clubs):
    table = build_table(league_clubs, [])
    assert [r.name for r in table] == ["Alpha", "Bravo", "Charlie", "Delta"]
    assert all(r.pts == 0 for r in table)


# ---------- Spelarstatistik ----------


def test_player_season_stats_by_id():
    fixtures = []
    for week in range(1, 8):
        scorers = []
        if week % 2:
            scorers.append(ScorerRecord(name="Kim", minute=10, team_id="a", scorer_id="p1"))
        # namne på andra sidan räknas inte
        scorers.append(ScorerRecord(name="Kim", minute=20, team_id="b", scorer_id="q1"))
        fixtures.append(_played(f"f{week}", week, "a", "b", 1, 1, home_xi=["p1"], away_xi=["q1"], scorers=scorers))
    fixtures.append(Fixture(fixture_id="f8", week=8, home_id="a", away_id="b", home_xi=["p1"]))

    stats = player_season_stats("p1", "a", reversed(fixtures))
    assert stats.appearances == 7
    assert stats.goals == 4
    assert stats.points == 4
    assert stats.form == [True, False, True, False, True]


def test_top_scorers():
    fixtures = [
        _played(
            "f1",
            1,
            "a",
            "b",
            3,
            0,
            scorers=[
                ScorerRecord(name="Berg", minute=5, team_id="a", scorer_id="p2"),
                ScorerRecord(name="Ahl", minute=7, team_id="a", scorer_id="p1"),
                ScorerRecord(name="Unknown Player", minute=9, team_id="a"),
            ],
        ),
        _played("f2", 2, "b", "a", 0, 1, scorers=[ScorerRecord(name="Berg", minute=3, team_id="a", scorer_id="p2")]),
    ]
    rows = top_scorers(fixtures)
    assert [(r["player_id"], r["goals"]) for r in rows] == [("p2", 2), ("p1", 1)]
    assert top_scorers(fixtures, limit=1)[0]["name"] == "Berg"
