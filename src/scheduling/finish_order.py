"""
Previous-Season Finish Order

Lookup of each division's previous-season finishing order, built from
TeamStanding division ranks. Standings-based games pair teams by these ranks.
"""

from typing import Dict, Iterable, Optional, Tuple

from shared.league_models import Conference, Division, LeagueStructure
from shared.team_standing import (
    TeamStanding,
    check_division_ranks,
    create_default_standings,
    index_standings,
)


class FinishOrder:
    """Division rank of every team, and the team at each (division, rank)."""

    def __init__(self, league: LeagueStructure, standings: Iterable[TeamStanding]):
        standings_by_team = index_standings(standings, league)
        check_division_ranks(standings_by_team, league)

        self._rank_by_team: Dict[int, int] = {
            team_id: standing.division_rank for team_id, standing in standings_by_team.items()
        }
        self._team_by_slot: Dict[Tuple[Conference, Division, int], int] = {}
        for team in league.teams:
            rank = self._rank_by_team[team.team_id]
            self._team_by_slot[(team.conference, team.division, rank)] = team.team_id

    @classmethod
    def from_standings(
        cls,
        league: LeagueStructure,
        standings: Optional[Iterable[TeamStanding]] = None
    ) -> 'FinishOrder':
        """Build from standings, or from neutral default standings when None"""
        if standings is None:
            standings = create_default_standings(league)
        return cls(league, standings)

    def rank_of(self, team_id: int) -> int:
        return self._rank_by_team[team_id]

    def team_at(self, conference: Conference, division: Division, rank: int) -> int:
        return self._team_by_slot[(conference, division, rank)]
