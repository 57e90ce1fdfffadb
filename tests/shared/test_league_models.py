"""
Unit Tests for Shared League Models

Tests league structure validation, standings helpers and the tiebreak keys.
"""

from dataclasses import replace

import pytest

from shared.league_exceptions import (
    InvalidLeagueStructureException,
    InvalidSeasonYearException,
    InvalidStandingsException,
)
from shared.league_models import Conference, Division, LeagueStructure, Team, validate_season_year
from shared.team_standing import (
    TeamStanding,
    check_conference_ranks,
    check_division_ranks,
    index_standings,
)
from shared.tiebreakers import draft_tiebreak_key, sort_best_first, sort_worst_first


class TestLeagueStructure:
    """Membership validation and lookups"""

    def test_default_league(self, league):
        assert len(league) == 32
        assert league.team_ids == list(range(1, 33))
        assert league.get_division_teams(Conference.AFC, Division.EAST) == [1, 2, 3, 4]
        assert league.get_division_teams(Conference.NFC, Division.WEST) == [29, 30, 31, 32]

    def test_conference_lookup(self, league):
        assert league.conference_of(16) is Conference.AFC
        assert league.conference_of(17) is Conference.NFC
        assert league.division_of(10) is Division.SOUTH

    def test_matchup_flags(self, league):
        assert league.is_divisional_matchup(1, 4)
        assert not league.is_divisional_matchup(1, 5)
        assert league.is_conference_matchup(1, 16)
        assert not league.is_conference_matchup(1, 17)

    def test_conference_teams_grouped_by_division(self, league):
        assert league.get_conference_teams(Conference.NFC) == list(range(17, 33))

    def test_unknown_team(self, league):
        assert 33 not in league
        with pytest.raises(InvalidLeagueStructureException):
            league.get_team(33)

    def test_wrong_team_count(self, league):
        with pytest.raises(InvalidLeagueStructureException) as exc_info:
            LeagueStructure(league.teams[:-1])

        assert exc_info.value.context_dict["team_count"] == 31

    def test_duplicate_team_ids(self, league):
        teams = league.teams
        teams[-1] = Team(team_id=1, conference=Conference.NFC, division=Division.WEST)

        with pytest.raises(InvalidLeagueStructureException):
            LeagueStructure(teams)

    def test_unbalanced_division(self, league):
        teams = league.teams
        teams[0] = Team(team_id=1, conference=Conference.AFC, division=Division.NORTH)

        with pytest.raises(InvalidLeagueStructureException) as exc_info:
            LeagueStructure(teams)

        assert exc_info.value.context_dict["division"] == "East"

    def test_from_division_map_rejects_unknown_names(self):
        with pytest.raises(InvalidLeagueStructureException):
            LeagueStructure.from_division_map({("XFL", "East"): [1, 2, 3, 4]})

    def test_team_str(self):
        team = Team(team_id=7, conference=Conference.AFC, division=Division.NORTH, name="Pittsburgh")
        assert str(team) == "Pittsburgh (AFC North)"

    def test_conference_opponent(self):
        assert Conference.AFC.opponent is Conference.NFC
        assert Conference.NFC.opponent is Conference.AFC


class TestSeasonYear:
    """Supported year range"""

    def test_in_range(self):
        assert validate_season_year(2025) == 2025

    @pytest.mark.parametrize("season_year", [1969, 2101, "2025", True])
    def test_rejected(self, season_year):
        with pytest.raises(InvalidSeasonYearException):
            validate_season_year(season_year)


class TestTeamStanding:
    """Derived standing values"""

    def test_win_percentage_counts_ties_as_half(self):
        standing = TeamStanding(team_id=1, wins=8, losses=8, ties=1)

        assert standing.games_played == 17
        assert standing.win_percentage == pytest.approx(8.5 / 17)
        assert standing.record_string == "8-8-1"

    def test_empty_record(self):
        standing = TeamStanding(team_id=1)

        assert standing.win_percentage == 0.0
        assert standing.record_string == "0-0"

    def test_point_differential(self):
        assert TeamStanding(team_id=1, points_for=300, points_against=350).point_differential == -50


class TestStandingsHelpers:
    """Indexing and rank consistency checks"""

    def test_default_standings_ranks(self, default_standings):
        by_team = {s.team_id: s for s in default_standings}

        assert by_team[1].division_rank == 1
        assert by_team[4].division_rank == 4
        # Division leaders hold conference ranks 1-4, then second-place teams
        assert [by_team[t].conference_rank for t in (1, 5, 9, 13, 2)] == [1, 2, 3, 4, 5]
        assert by_team[32].conference_rank == 16

    def test_default_standings_are_consistent(self, league, default_standings):
        by_team = index_standings(default_standings, league)

        check_division_ranks(by_team, league)
        check_conference_ranks(by_team, league)

    def test_duplicate_standing(self, league, default_standings):
        with pytest.raises(InvalidStandingsException):
            index_standings(default_standings + [default_standings[0]], league)

    def test_unknown_team_standing(self, league, default_standings):
        with pytest.raises(InvalidStandingsException):
            index_standings(default_standings + [TeamStanding(team_id=40)], league)

    def test_bad_conference_ranks(self, league, default_standings):
        broken = [replace(s, conference_rank=1) if s.team_id == 2 else s for s in default_standings]

        with pytest.raises(InvalidStandingsException) as exc_info:
            check_conference_ranks(index_standings(broken, league), league)

        assert exc_info.value.context_dict["field"] == "conference_rank"


class TestTiebreakers:
    """Best-first and worst-first orderings"""

    @pytest.fixture
    def tied_pair(self):
        weaker_schedule = TeamStanding(team_id=3, wins=9, losses=8, strength_of_schedule=0.45)
        stronger_schedule = TeamStanding(team_id=2, wins=9, losses=8, strength_of_schedule=0.55)
        return weaker_schedule, stronger_schedule

    def test_win_percentage_first(self):
        better = TeamStanding(team_id=9, wins=10, losses=7, strength_of_schedule=0.1)
        worse = TeamStanding(team_id=1, wins=9, losses=8, strength_of_schedule=0.9)

        assert sort_best_first([worse, better]) == [better, worse]
        assert sort_worst_first([better, worse]) == [worse, better]

    def test_strength_of_schedule_breaks_record_tie(self, tied_pair):
        weaker_schedule, stronger_schedule = tied_pair

        assert sort_best_first(tied_pair)[0] is stronger_schedule
        assert sort_worst_first(tied_pair)[0] is weaker_schedule

    def test_point_differential_next(self):
        plus = TeamStanding(team_id=5, wins=9, losses=8, points_for=400, points_against=350)
        minus = TeamStanding(team_id=6, wins=9, losses=8, points_for=350, points_against=400)

        assert sort_best_first([minus, plus])[0] is plus
        assert sort_worst_first([plus, minus])[0] is minus

    def test_team_id_is_final_tiebreak_both_ways(self):
        a = TeamStanding(team_id=12, wins=8, losses=9)
        b = TeamStanding(team_id=4, wins=8, losses=9)

        assert [s.team_id for s in sort_best_first([a, b])] == [4, 12]
        assert [s.team_id for s in sort_worst_first([a, b])] == [4, 12]

    def test_draft_key_orders_worst_first(self):
        keys = [draft_tiebreak_key(TeamStanding(team_id=t, wins=w, losses=17 - w)) for t, w in ((1, 3), (2, 12))]
        assert keys[0] < keys[1]
