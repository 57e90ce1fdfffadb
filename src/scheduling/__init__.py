"""
Scheduling Module

Regular-season schedule generation and validation:
- Division rotation tables (3-year intraconference, 4-year interconference)
- Bye week assignment by division template
- 272-game schedule generation (five game components, 18 weeks)
- Schedule validation gates
"""

from .bye_weeks import ByeWeekAssigner, assign_bye_weeks
from .config import ByeWeekConfig, ScheduleConfig
from .matchup_policy import CROSS_RANK_POLICY, DEFAULT_POLICY, STRAIGHT_RANK_POLICY, RankMatchingPolicy
from .models import GameComponent, ScheduledGame, SeasonSchedule, TimeSlot
from .rotation import (
    extra_game_host_conference,
    extra_game_opponent_division,
    interconf_opponent,
    intraconf_opponent,
)
from .schedule_exceptions import ScheduleGenerationException
from .schedule_generator import SeasonScheduleGenerator, generate_season_schedule
from .schedule_validator import ScheduleValidationResult, ScheduleValidator, validate_schedule

__all__ = [
    'ByeWeekAssigner',
    'assign_bye_weeks',
    'ByeWeekConfig',
    'ScheduleConfig',
    'RankMatchingPolicy',
    'STRAIGHT_RANK_POLICY',
    'CROSS_RANK_POLICY',
    'DEFAULT_POLICY',
    'GameComponent',
    'ScheduledGame',
    'SeasonSchedule',
    'TimeSlot',
    'intraconf_opponent',
    'interconf_opponent',
    'extra_game_opponent_division',
    'extra_game_host_conference',
    'ScheduleGenerationException',
    'SeasonScheduleGenerator',
    'generate_season_schedule',
    'ScheduleValidator',
    'ScheduleValidationResult',
    'validate_schedule',
]
