"""
Constants package

League-wide constants shared by the scheduling, playoff and draft systems.
"""

from .team_ids import TeamIDs

__all__ = [
    'TeamIDs',
]
