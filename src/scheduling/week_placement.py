"""
Week Placement

Single-pass placement of generated pairings into weeks 1-18.

The generator delivers every component as a list of *slates*: each slate is
a perfect matching of all 32 teams (every team plays exactly once). The 17
slates are laid out one per week over weeks 1-17 by WEEK_LAYOUT. A team's
bye week always falls on a divisional slate where its opponent shares the
same bye, so that game is lifted out of its slate and replayed in week 18.
The result: 17 distinct game weeks per team, no game in a bye week, and no
search or backtracking.

Time slots are attached afterwards as a per-week label.
"""

from dataclasses import dataclass
import logging
from typing import Dict, List, Mapping, Optional, Tuple

from .config import ScheduleConfig
from .models import GameComponent, ScheduledGame, TimeSlot
from .schedule_exceptions import ByeWeekPlacementException, ScheduleGenerationException


logger = logging.getLogger(__name__)

SlateKey = Tuple[GameComponent, int]

MAKEUP_WEEK = 18

# Week -> (component, slate index). Divisional slates 0-2 are first legs and
# 3-5 the return legs, so both meetings of a pair sit at least five weeks apart.
WEEK_LAYOUT: Dict[int, SlateKey] = {
    1: (GameComponent.INTRACONF_ROTATION, 0),
    2: (GameComponent.INTERCONF_ROTATION, 0),
    3: (GameComponent.STANDINGS_INTRACONF, 0),
    4: (GameComponent.INTRACONF_ROTATION, 1),
    5: (GameComponent.DIVISIONAL, 0),
    6: (GameComponent.INTERCONF_ROTATION, 1),
    7: (GameComponent.DIVISIONAL, 1),
    8: (GameComponent.DIVISIONAL, 2),
    9: (GameComponent.INTRACONF_ROTATION, 2),
    10: (GameComponent.DIVISIONAL, 3),
    11: (GameComponent.INTERCONF_ROTATION, 2),
    12: (GameComponent.DIVISIONAL, 4),
    13: (GameComponent.EXTRA_GAME, 0),
    14: (GameComponent.DIVISIONAL, 5),
    15: (GameComponent.INTRACONF_ROTATION, 3),
    16: (GameComponent.INTERCONF_ROTATION, 3),
    17: (GameComponent.STANDINGS_INTRACONF, 1),
}

# Fixed broadcast windows per week; remaining games are early Sunday.
PRIMETIME_SLOTS = (TimeSlot.THURSDAY_NIGHT, TimeSlot.SUNDAY_NIGHT, TimeSlot.MONDAY_NIGHT)
LATE_SUNDAY_GAMES = 4


@dataclass(frozen=True)
class Pairing:
    """A generated game that has not been given a week yet"""
    home_team_id: int
    away_team_id: int
    component: GameComponent
    is_divisional: bool
    is_conference: bool


class WeekPlacer:
    """Places component slates into weeks and labels time slots."""

    def __init__(self, config: ScheduleConfig, logger: Optional[logging.Logger] = None):
        self.config = config
        self.logger = logger or logging.getLogger(__name__)

    def place(
        self,
        slates: Mapping[SlateKey, List[Pairing]],
        bye_weeks: Mapping[int, int]
    ) -> List[ScheduledGame]:
        """
        Assign every pairing to a week.

        Args:
            slates: Component slates keyed by (component, slate index)
            bye_weeks: team_id -> bye week

        Returns:
            ScheduledGame list in week order

        Raises:
            ScheduleGenerationException: If the slates do not match the layout
                or are not perfect matchings
            ByeWeekPlacementException: If a bye cannot be honored
        """
        self._check_slates(slates, bye_weeks)

        weekly: Dict[int, List[Pairing]] = {week: [] for week in range(1, self.config.total_weeks + 1)}

        for week, slate_key in sorted(WEEK_LAYOUT.items()):
            for pairing in slates[slate_key]:
                home_off = bye_weeks[pairing.home_team_id] == week
                away_off = bye_weeks[pairing.away_team_id] == week

                if home_off and away_off:
                    weekly[MAKEUP_WEEK].append(pairing)
                elif home_off or away_off:
                    team_id = pairing.home_team_id if home_off else pairing.away_team_id
                    opponent_id = pairing.away_team_id if home_off else pairing.home_team_id
                    raise ByeWeekPlacementException(
                        f"Team {team_id} has a week {week} bye but its week {week} opponent "
                        f"{opponent_id} does not",
                        team_id=team_id,
                        week=week,
                        season_year=self.config.season_year
                    )
                else:
                    weekly[week].append(pairing)

        self._check_makeup_week(weekly[MAKEUP_WEEK], bye_weeks)

        games: List[ScheduledGame] = []
        for week in sorted(weekly):
            games.extend(self._label_week(week, weekly[week]))

        self.logger.debug(
            f"Placed {len(games)} games across {len(weekly)} weeks "
            f"({len(weekly[MAKEUP_WEEK])} games in week {MAKEUP_WEEK})"
        )
        return games

    def _check_slates(self, slates: Mapping[SlateKey, List[Pairing]], bye_weeks: Mapping[int, int]) -> None:
        expected_keys = set(WEEK_LAYOUT.values())
        if set(slates) != expected_keys:
            missing = sorted(f"{c.value}[{i}]" for c, i in expected_keys - set(slates))
            extra = sorted(f"{c.value}[{i}]" for c, i in set(slates) - expected_keys)
            raise ScheduleGenerationException(
                f"Slates do not match week layout (missing: {missing}, unexpected: {extra})",
                season_year=self.config.season_year
            )

        team_ids = set(bye_weeks)
        for (component, index), pairings in slates.items():
            seen: List[int] = []
            for pairing in pairings:
                seen.extend((pairing.home_team_id, pairing.away_team_id))
            if len(seen) != len(set(seen)) or set(seen) != team_ids:
                raise ScheduleGenerationException(
                    f"Slate {component.value}[{index}] is not a perfect matching of all teams",
                    season_year=self.config.season_year
                )

    def _check_makeup_week(self, pairings: List[Pairing], bye_weeks: Mapping[int, int]) -> None:
        teams = []
        for pairing in pairings:
            teams.extend((pairing.home_team_id, pairing.away_team_id))
        if sorted(teams) != sorted(bye_weeks):
            raise ByeWeekPlacementException(
                f"Week {MAKEUP_WEEK} must hold exactly one game per team, "
                f"got {len(pairings)} games",
                week=MAKEUP_WEEK,
                season_year=self.config.season_year
            )

    def _label_week(self, week: int, pairings: List[Pairing]) -> List[ScheduledGame]:
        """Order a week's games, give them ids and broadcast windows."""
        # Division games get the primetime windows first
        ordered = sorted(
            pairings,
            key=lambda p: (not p.is_divisional, p.home_team_id)
        )

        games = []
        for position, pairing in enumerate(ordered):
            games.append(ScheduledGame(
                game_id=f"{self.config.season_year}_W{week:02d}_G{position + 1:02d}",
                week=week,
                home_team_id=pairing.home_team_id,
                away_team_id=pairing.away_team_id,
                component=pairing.component,
                is_divisional=pairing.is_divisional,
                is_conference=pairing.is_conference,
                time_slot=self._time_slot_for(position, len(ordered))
            ))
        return games

    @staticmethod
    def _time_slot_for(position: int, games_in_week: int) -> TimeSlot:
        if position < len(PRIMETIME_SLOTS):
            return PRIMETIME_SLOTS[position]
        if position >= games_in_week - LATE_SUNDAY_GAMES:
            return TimeSlot.LATE_SUNDAY
        return TimeSlot.EARLY_SUNDAY
