"""
Unit Tests for DraftOrderService

Tests draft order calculation including:
- Non-playoff teams drafting first (picks 1-18)
- Playoff team ordering by elimination round
- Reversed tiebreakers (strength of schedule, point differential)
- Multi-round generation (7 rounds, 224 picks)
- Pick explanations, projections and validation
"""

from dataclasses import replace

import pytest

from mocks.game_simulator import HomeTeamWinsSimulator, play_current_round
from offseason.draft_order_exceptions import DraftOrderException
from offseason.draft_order_service import (
    NON_PLAYOFF,
    PRELIMINARY,
    SUPER_BOWL_WIN,
    WILD_CARD_LOSS,
    DraftOrderService,
    calculate_draft_order,
)
from playoff_system.playoff_manager import PlayoffManager
from shared.league_exceptions import InvalidStandingsException


# team_id -> (wins, strength_of_schedule, point_differential)
RECORDS = {
    # Non-playoff: 4 and 3 tie at 2-15 (SOS decides), 7 and 8 tie at 3-14 (differential decides)
    4: (2, 0.48, 0), 3: (2, 0.52, 0),
    7: (3, 0.50, -100), 8: (3, 0.50, -50),
    11: (4, 0.50, 0), 12: (4, 0.50, 0),
    14: (5, 0.50, 0), 15: (5, 0.50, 0),
    16: (6, 0.50, 0), 19: (6, 0.50, 0),
    20: (7, 0.50, 0), 23: (7, 0.50, 0),
    24: (8, 0.50, 0), 27: (8, 0.50, 0),
    28: (9, 0.50, 0), 30: (9, 0.50, 0),
    31: (10, 0.50, 0), 32: (10, 0.50, 0),
    # Wild card losers
    18: (5, 0.50, 0), 2: (9, 0.50, 0), 6: (10, 0.50, 0),
    10: (11, 0.50, 0), 22: (12, 0.50, 0), 26: (13, 0.50, 0),
    # Divisional losers
    29: (9, 0.50, 0), 9: (10, 0.50, 0), 13: (11, 0.50, 0), 25: (12, 0.50, 0),
    # Conference losers: same record, easier schedule picks first
    21: (12, 0.45, 0), 5: (12, 0.55, 0),
    # Super Bowl
    17: (14, 0.50, 0), 1: (14, 0.50, 0),
}

EXPECTED_ORDER = [
    4, 3, 7, 8, 11, 12, 14, 15, 16, 19, 20, 23, 24, 27, 28, 30, 31, 32,
    18, 2, 6, 10, 22, 26,
    29, 9, 13, 25,
    21, 5,
    17,
    1,
]


@pytest.fixture
def standings(default_standings):
    """
    Final standings with hand-picked records.

    Division and conference ranks stay neutral so the playoff field is the
    neutral-standings field: AFC 1, 5, 9, 13, 2, 6, 10 and NFC 17, 21, 25,
    29, 18, 22, 26.
    """
    crafted = []
    for standing in default_standings:
        wins, sos, differential = RECORDS[standing.team_id]
        crafted.append(replace(
            standing,
            wins=wins,
            losses=17 - wins,
            points_for=300 + differential,
            points_against=300,
            strength_of_schedule=sos
        ))
    return crafted


@pytest.fixture
def completed_playoffs(league, default_standings):
    """Bracket where the home team wins every game: team 1 beats team 17."""
    manager = PlayoffManager(league)
    schedule = manager.generate_playoff_bracket(default_standings, 2025)
    for _ in range(4):
        schedule = manager.advance_playoff_round(
            schedule, play_current_round(schedule, HomeTeamWinsSimulator())
        )
    return schedule


@pytest.fixture
def service():
    """Create service instance for testing"""
    return DraftOrderService(season_year=2025)


@pytest.fixture
def draft_order(service, standings, completed_playoffs):
    return service.calculate_draft_order(standings, completed_playoffs)


class TestRoundOneOrder:
    """Round 1 order from standings and playoff results"""

    def test_full_order(self, draft_order):
        assert draft_order.team_ids == EXPECTED_ORDER
        assert len(draft_order) == 32
        assert draft_order.season_year == 2025

    def test_every_team_once(self, draft_order):
        assert sorted(draft_order.team_ids) == list(range(1, 33))

    def test_strength_of_schedule_tiebreak(self, draft_order):
        """Easier schedule picks first between equal records."""
        assert draft_order.draft_position(4) == 1
        assert draft_order.draft_position(3) == 2

    def test_point_differential_tiebreak(self, draft_order):
        assert draft_order.draft_position(7) == 3
        assert draft_order.draft_position(8) == 4

    def test_team_id_final_tiebreak(self, draft_order):
        assert draft_order.draft_position(11) < draft_order.draft_position(12)

    def test_playoff_team_behind_better_non_playoff_team(self, draft_order):
        """A 5-12 wild card loser still picks after every non-playoff team."""
        assert draft_order.draft_position(18) == 19
        assert draft_order.draft_position(32) == 18

    def test_conference_losers_by_schedule_strength(self, draft_order):
        assert draft_order.draft_position(21) == 29
        assert draft_order.draft_position(5) == 30

    def test_super_bowl_teams_last(self, draft_order):
        assert draft_order.get_pick(31).team_id == 17
        assert draft_order.get_pick(32).team_id == 1
        assert draft_order.get_pick(32).reason == SUPER_BOWL_WIN

    def test_reasons_fill_their_ranges(self, service, draft_order):
        for pick in draft_order:
            first, last = service.get_pick_range_for_group(pick.reason)
            assert first <= pick.overall_pick <= last

    def test_pick_details(self, draft_order):
        pick = draft_order.get_pick(1)

        assert pick.round_number == 1
        assert pick.team_record == "2-15"
        assert pick.strength_of_schedule == pytest.approx(0.48)
        assert pick.original_team_id == pick.team_id
        assert "Team 4" in str(pick)

    def test_module_function(self, standings, completed_playoffs):
        assert calculate_draft_order(standings, completed_playoffs) == EXPECTED_ORDER

    def test_same_inputs_same_order(self, service, standings, completed_playoffs, draft_order):
        assert service.calculate_draft_order(standings, completed_playoffs) == draft_order


class TestExplanations:
    """explain_draft_position text"""

    @pytest.mark.parametrize("team_id,expected", [
        (4, "Pick #1: Missed playoffs with 2-15 record"),
        (18, "Pick #19: Eliminated in Wild Card round (5-12)"),
        (29, "Pick #25: Eliminated in Divisional round (9-8)"),
        (21, "Pick #29: Lost Conference Championship (12-5)"),
        (17, "Pick #31: Lost Super Bowl (14-3)"),
        (1, "Pick #32: Super Bowl champion"),
    ])
    def test_explanation(self, service, draft_order, team_id, expected):
        assert service.explain_draft_position(draft_order, team_id) == expected

    def test_unknown_team(self, service, draft_order):
        with pytest.raises(ValueError):
            service.explain_draft_position(draft_order, 99)


class TestValidation:
    """Sequencing and input errors"""

    def test_incomplete_bracket_rejected(self, service, standings, league, default_standings):
        bracket = PlayoffManager(league).generate_playoff_bracket(default_standings, 2025)

        with pytest.raises(DraftOrderException) as exc_info:
            service.calculate_draft_order(standings, bracket)

        assert exc_info.value.context_dict["bracket_state"] == "wild_card"
        assert exc_info.value.error_code == "DRAFT_ORDER_001"

    def test_missing_standings_rejected(self, service, standings, completed_playoffs):
        with pytest.raises(InvalidStandingsException):
            service.calculate_draft_order(standings[:-1], completed_playoffs)

    def test_duplicate_standing_rejected(self, service, standings, completed_playoffs):
        doubled = standings[:-1] + [standings[0]]

        with pytest.raises(InvalidStandingsException) as exc_info:
            service.calculate_draft_order(doubled, completed_playoffs)

        assert exc_info.value.context_dict["team_id"] == 1

    def test_playoff_team_without_standing(self, service, standings, completed_playoffs):
        """32 distinct standings that leave out the champion."""
        swapped = [replace(s, team_id=99) if s.team_id == 1 else s for s in standings]

        with pytest.raises(DraftOrderException) as exc_info:
            service.calculate_draft_order(swapped, completed_playoffs)

        assert exc_info.value.context_dict["team_ids"] == [1]

    def test_wrong_group_size_rejected(self, service):
        groups = {
            NON_PLAYOFF: list(range(1, 20)),
            WILD_CARD_LOSS: list(range(20, 25)),
            "divisional_loss": [25, 26, 27, 28],
            "conference_loss": [29, 30],
            "super_bowl_loss": [31],
            SUPER_BOWL_WIN: [32],
        }

        with pytest.raises(DraftOrderException) as exc_info:
            service._validate_groups(groups)

        assert exc_info.value.context_dict["group"] == NON_PLAYOFF


class TestGroupsAndRounds:
    """Pick ranges and later rounds"""

    @pytest.mark.parametrize("reason,expected", [
        (NON_PLAYOFF, (1, 18)),
        (WILD_CARD_LOSS, (19, 24)),
        ("divisional_loss", (25, 28)),
        ("conference_loss", (29, 30)),
        ("super_bowl_loss", (31, 31)),
        (SUPER_BOWL_WIN, (32, 32)),
    ])
    def test_pick_ranges(self, service, reason, expected):
        assert service.get_pick_range_for_group(reason) == expected

    def test_unknown_group(self, service):
        with pytest.raises(ValueError):
            service.get_pick_range_for_group("lottery")

    def test_all_rounds(self, service, draft_order):
        picks = service.generate_all_rounds(draft_order)

        assert len(picks) == 224
        assert [p.overall_pick for p in picks] == list(range(1, 225))
        assert picks[32].round_number == 2
        assert picks[32].pick_in_round == 1
        assert picks[32].team_id == 4
        assert picks[-1].round_number == 7
        assert picks[-1].team_id == 1


class TestPreliminaryOrder:
    """Projection that ignores playoff results"""

    def test_orders_every_team_worst_first(self, service, standings):
        projection = service.calculate_preliminary_draft_order(standings)

        assert projection.team_ids[:4] == [4, 3, 7, 8]
        assert projection.team_ids[-2:] == [1, 17]
        assert all(pick.reason == PRELIMINARY for pick in projection)

    def test_projection_explanation(self, service, standings):
        projection = service.calculate_preliminary_draft_order(standings)

        assert service.explain_draft_position(projection, 4) == "Pick #1: Projected from 2-15 record"
