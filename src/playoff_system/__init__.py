"""
Playoff System

NFL playoff seeding and bracket progression components.
"""

from .bracket_models import BracketState, PlayoffBracket, PlayoffMatchup, PlayoffRound, PlayoffSchedule
from .playoff_exceptions import (
    InvalidBracketException,
    InvalidRoundException,
    InvalidSeedingException,
    PlayoffException,
    PlayoffStateException,
)
from .playoff_manager import PlayoffManager, advance_playoff_round, generate_playoff_bracket
from .playoff_seeder import PlayoffSeeder
from .seeding_models import ConferenceSeeding, PlayoffSeed, PlayoffSeeding

__all__ = [
    'PlayoffSeeder',
    'PlayoffSeeding',
    'ConferenceSeeding',
    'PlayoffSeed',
    'PlayoffManager',
    'generate_playoff_bracket',
    'advance_playoff_round',
    'PlayoffRound',
    'BracketState',
    'PlayoffMatchup',
    'PlayoffBracket',
    'PlayoffSchedule',
    'PlayoffException',
    'InvalidRoundException',
    'InvalidSeedingException',
    'InvalidBracketException',
    'PlayoffStateException',
]
