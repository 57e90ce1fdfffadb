"""
Shared league models

Team/league reference data, standings records, tiebreak keys and the base
exception hierarchy used across the scheduling, playoff and draft systems.
"""

from .league_exceptions import (
    LeagueException,
    InvalidLeagueStructureException,
    InvalidSeasonYearException,
    InvalidStandingsException,
)
from .league_models import Conference, Division, Team, LeagueStructure, validate_season_year
from .team_standing import TeamStanding, create_default_standings, index_standings
from .tiebreakers import playoff_tiebreak_key, draft_tiebreak_key

__all__ = [
    'LeagueException',
    'InvalidLeagueStructureException',
    'InvalidSeasonYearException',
    'InvalidStandingsException',
    'Conference',
    'Division',
    'Team',
    'LeagueStructure',
    'validate_season_year',
    'TeamStanding',
    'create_default_standings',
    'index_standings',
    'playoff_tiebreak_key',
    'draft_tiebreak_key',
]
