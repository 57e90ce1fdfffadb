"""
Tiebreak Keys

The playoff tiebreak chain and its reversal for draft ordering:

    win percentage -> strength of schedule -> point differential
    -> conference win percentage -> division win percentage -> team id

Seeding prefers the higher value at every step. Draft ordering applies the
same chain in the opposite direction (the worse value picks earlier). Team ID
ascending is the final deterministic tiebreak in both directions.
"""

from typing import Iterable, List, Tuple

from .team_standing import TeamStanding


def playoff_tiebreak_key(standing: TeamStanding) -> Tuple:
    """Sort key ordering best team first"""
    return (
        -standing.win_percentage,
        -standing.strength_of_schedule,
        -standing.point_differential,
        -standing.conference_win_percentage,
        -standing.division_win_percentage,
        standing.team_id,
    )


def draft_tiebreak_key(standing: TeamStanding) -> Tuple:
    """Sort key ordering worst team first (earliest draft pick)"""
    return (
        standing.win_percentage,
        standing.strength_of_schedule,
        standing.point_differential,
        standing.conference_win_percentage,
        standing.division_win_percentage,
        standing.team_id,
    )


def sort_best_first(standings: Iterable[TeamStanding]) -> List[TeamStanding]:
    return sorted(standings, key=playoff_tiebreak_key)


def sort_worst_first(standings: Iterable[TeamStanding]) -> List[TeamStanding]:
    return sorted(standings, key=draft_tiebreak_key)
