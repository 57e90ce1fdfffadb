"""
Unit Tests for Bye Week Assignment

Tests template-based bye placement, window enforcement and division
diversity.
"""

from collections import Counter

import pytest

from scheduling.bye_weeks import (
    BYE_WEEK_TEMPLATES,
    ByeWeekAssigner,
    assign_bye_weeks,
    teams_on_bye_by_week,
)
from scheduling.config import ByeWeekConfig
from scheduling.schedule_exceptions import ByeWeekPlacementException
from shared.league_models import Conference, Division


class TestByeWeekAssigner:
    """Tests for ByeWeekAssigner"""

    @pytest.fixture
    def bye_weeks(self, league):
        return assign_bye_weeks(league)

    def test_every_team_has_one_bye(self, league, bye_weeks):
        assert sorted(bye_weeks) == league.team_ids

    def test_byes_inside_window(self, bye_weeks):
        assert all(5 <= week <= 14 for week in bye_weeks.values())

    def test_division_uses_at_least_two_weeks(self, league, bye_weeks):
        for conference in Conference:
            for division in Division:
                team_ids = league.get_division_teams(conference, division)
                assert len({bye_weeks[team_id] for team_id in team_ids}) >= 2

    def test_every_bye_week_holds_even_team_count(self, bye_weeks):
        for week, count in Counter(bye_weeks.values()).items():
            assert count % 2 == 0, f"week {week} has {count} teams on bye"

    def test_template_applies_in_team_id_order(self, bye_weeks):
        # AFC East (teams 1-4) uses (5, 5, 10, 10)
        assert [bye_weeks[team_id] for team_id in (1, 2, 3, 4)] == [5, 5, 10, 10]
        # NFC North (teams 21-24) uses (14, 8, 8, 14)
        assert [bye_weeks[team_id] for team_id in (21, 22, 23, 24)] == [14, 8, 8, 14]

    def test_assignment_is_deterministic(self, league):
        assert assign_bye_weeks(league) == assign_bye_weeks(league)

    def test_week_outside_window_rejected(self, league):
        assigner = ByeWeekAssigner(config=ByeWeekConfig(start_week=6, end_week=14))

        with pytest.raises(ByeWeekPlacementException) as exc_info:
            assigner.assign(league)

        assert exc_info.value.context_dict["week"] == 5

    def test_missing_template_rejected(self, league):
        templates = dict(BYE_WEEK_TEMPLATES)
        del templates[(Conference.NFC, Division.WEST)]

        with pytest.raises(ByeWeekPlacementException):
            ByeWeekAssigner(templates=templates).assign(league)

    def test_short_template_rejected(self, league):
        templates = dict(BYE_WEEK_TEMPLATES)
        templates[(Conference.AFC, Division.EAST)] = (5, 5, 10)

        with pytest.raises(ByeWeekPlacementException):
            ByeWeekAssigner(templates=templates).assign(league)


class TestTeamsOnByeByWeek:
    """Grouping helper"""

    def test_groups_sorted_by_team(self):
        grouped = teams_on_bye_by_week({3: 10, 1: 5, 2: 5, 4: 10})
        assert grouped == {5: [1, 2], 10: [3, 4]}
