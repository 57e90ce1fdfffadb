"""
Bye Week Assigner

Maps every team to one bye week in the configured window using a fixed
per-division template. Within a division the four template weeks apply to
the teams in ascending team ID order.

Template design: division rivals that share a bye week are exactly the pair
meeting in that week's divisional slate (see week_placement.WEEK_LAYOUT), so
the displaced game moves intact to the final week. Each division uses two
distinct weeks and every bye week holds an even number of teams.
"""

import logging
from typing import Dict, Mapping, Optional, Tuple

from shared.league_models import Conference, Division, LeagueStructure
from .config import ByeWeekConfig
from .schedule_exceptions import ByeWeekPlacementException


logger = logging.getLogger(__name__)

# (conference, division) -> bye weeks for the division's teams in team ID order.
# Weeks 5/10 pair teams t0-t1 and t2-t3, weeks 7/12 pair t0-t2 and t1-t3,
# weeks 8/14 pair t0-t3 and t1-t2.
BYE_WEEK_TEMPLATES: Dict[Tuple[Conference, Division], Tuple[int, int, int, int]] = {
    (Conference.AFC, Division.EAST): (5, 5, 10, 10),
    (Conference.AFC, Division.NORTH): (7, 12, 7, 12),
    (Conference.AFC, Division.SOUTH): (8, 14, 14, 8),
    (Conference.AFC, Division.WEST): (10, 10, 5, 5),
    (Conference.NFC, Division.EAST): (12, 7, 12, 7),
    (Conference.NFC, Division.NORTH): (14, 8, 8, 14),
    (Conference.NFC, Division.SOUTH): (7, 12, 7, 12),
    (Conference.NFC, Division.WEST): (8, 14, 14, 8),
}


class ByeWeekAssigner:
    """
    Deterministic bye week assignment by division template.

    The assigner only places teams; the division diversity rule (at least two
    distinct bye weeks per division) is checked by the schedule validator.
    """

    def __init__(
        self,
        config: Optional[ByeWeekConfig] = None,
        templates: Optional[Mapping[Tuple[Conference, Division], Tuple[int, ...]]] = None,
        logger: Optional[logging.Logger] = None
    ):
        self.config = config or ByeWeekConfig()
        self.templates = dict(templates or BYE_WEEK_TEMPLATES)
        self.logger = logger or logging.getLogger(__name__)

    def assign(self, league: LeagueStructure) -> Dict[int, int]:
        """
        Assign a bye week to every team.

        Args:
            league: Validated league structure

        Returns:
            Dict mapping team_id to bye week

        Raises:
            ByeWeekPlacementException: If a template is missing, has the
                wrong length, or names a week outside the window
        """
        bye_weeks: Dict[int, int] = {}

        for conference in Conference:
            for division in Division:
                team_ids = league.get_division_teams(conference, division)
                template = self.templates.get((conference, division))

                if template is None or len(template) != len(team_ids):
                    raise ByeWeekPlacementException(
                        f"No bye template for {conference.value} {division.display_name} "
                        f"covering {len(team_ids)} teams"
                    )

                for team_id, week in zip(team_ids, template):
                    if not self.config.contains(week):
                        raise ByeWeekPlacementException(
                            f"Bye week {week} outside window "
                            f"{self.config.start_week}-{self.config.end_week}",
                            team_id=team_id,
                            week=week
                        )
                    bye_weeks[team_id] = week

        self.logger.debug(f"Assigned bye weeks for {len(bye_weeks)} teams")
        return bye_weeks


def assign_bye_weeks(league: LeagueStructure, config: Optional[ByeWeekConfig] = None) -> Dict[int, int]:
    """Assign bye weeks with the standard division templates"""
    return ByeWeekAssigner(config=config).assign(league)


def teams_on_bye_by_week(bye_weeks: Mapping[int, int]) -> Dict[int, list]:
    """Group team ids by bye week"""
    by_week: Dict[int, list] = {}
    for team_id, week in sorted(bye_weeks.items()):
        by_week.setdefault(week, []).append(team_id)
    return by_week
