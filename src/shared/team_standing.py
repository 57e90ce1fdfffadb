"""
Team Standing Model

Read-only view of a team's final regular-season standing. Standings are
produced by an external accumulator; the scheduling, playoff and draft
systems only read them.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping

from .league_exceptions import InvalidStandingsException
from .league_models import Conference, Division, LeagueStructure


@dataclass(frozen=True)
class TeamStanding:
    """
    A team's standing with the splits and ranks the league core consumes.

    Attributes:
        team_id: Team this standing belongs to
        wins / losses / ties: Overall record
        points_for / points_against: Season point totals
        strength_of_schedule: Average opponent win percentage (0.0-1.0)
        division_wins / division_losses / division_ties: Record against division rivals
        conference_wins / conference_losses / conference_ties: Record against conference teams
        division_rank: Finish within division (1-4)
        conference_rank: Finish within conference (1-16)
    """
    team_id: int
    wins: int = 0
    losses: int = 0
    ties: int = 0
    points_for: int = 0
    points_against: int = 0
    strength_of_schedule: float = 0.0
    division_wins: int = 0
    division_losses: int = 0
    division_ties: int = 0
    conference_wins: int = 0
    conference_losses: int = 0
    conference_ties: int = 0
    division_rank: int = 1
    conference_rank: int = 1

    @property
    def games_played(self) -> int:
        """Total games played"""
        return self.wins + self.losses + self.ties

    @property
    def win_percentage(self) -> float:
        """Win percentage with ties counted as half a win"""
        return _percentage(self.wins, self.losses, self.ties)

    @property
    def division_win_percentage(self) -> float:
        return _percentage(self.division_wins, self.division_losses, self.division_ties)

    @property
    def conference_win_percentage(self) -> float:
        return _percentage(self.conference_wins, self.conference_losses, self.conference_ties)

    @property
    def point_differential(self) -> int:
        """Calculate point differential"""
        return self.points_for - self.points_against

    @property
    def record_string(self) -> str:
        """Get record as string (e.g., '10-7' or '9-7-1')"""
        if self.ties > 0:
            return f"{self.wins}-{self.losses}-{self.ties}"
        return f"{self.wins}-{self.losses}"

    @property
    def division_record(self) -> str:
        """Get division record string"""
        return f"{self.division_wins}-{self.division_losses}"

    @property
    def conference_record(self) -> str:
        """Get conference record string"""
        return f"{self.conference_wins}-{self.conference_losses}"


def _percentage(wins: int, losses: int, ties: int) -> float:
    games = wins + losses + ties
    if games == 0:
        return 0.0
    return (wins + ties * 0.5) / games


# ==================== Standings helpers ====================

def index_standings(
    standings: Iterable[TeamStanding],
    league: LeagueStructure
) -> Dict[int, TeamStanding]:
    """
    Key standings by team ID and check they cover exactly the league's teams.

    Raises:
        InvalidStandingsException: On duplicate, unknown or missing teams
    """
    by_team: Dict[int, TeamStanding] = {}
    for standing in standings:
        if standing.team_id in by_team:
            raise InvalidStandingsException(
                f"Duplicate standing for team {standing.team_id}",
                team_id=standing.team_id
            )
        if standing.team_id not in league:
            raise InvalidStandingsException(
                f"Standing for team {standing.team_id} which is not in the league",
                team_id=standing.team_id
            )
        by_team[standing.team_id] = standing

    missing = [team_id for team_id in league.team_ids if team_id not in by_team]
    if missing:
        raise InvalidStandingsException(
            f"Missing standings for {len(missing)} teams: {missing}",
            team_id=missing[0]
        )
    return by_team


def check_division_ranks(
    standings_by_team: Mapping[int, TeamStanding],
    league: LeagueStructure
) -> None:
    """
    Check every division's ranks are exactly 1-4.

    Raises:
        InvalidStandingsException: If a division's ranks are not a permutation of 1-4
    """
    for conference in Conference:
        for division in Division:
            team_ids = league.get_division_teams(conference, division)
            ranks = sorted(standings_by_team[team_id].division_rank for team_id in team_ids)
            if ranks != list(range(1, len(team_ids) + 1)):
                raise InvalidStandingsException(
                    f"{conference.value} {division.display_name} division ranks {ranks} "
                    f"are not 1-{len(team_ids)}",
                    team_id=team_ids[0],
                    field_name="division_rank"
                )


def check_conference_ranks(
    standings_by_team: Mapping[int, TeamStanding],
    league: LeagueStructure
) -> None:
    """
    Check every conference's ranks are exactly 1-16.

    Raises:
        InvalidStandingsException: If a conference's ranks are not a permutation of 1-16
    """
    for conference in Conference:
        team_ids = league.get_conference_teams(conference)
        ranks = sorted(standings_by_team[team_id].conference_rank for team_id in team_ids)
        if ranks != list(range(1, len(team_ids) + 1)):
            raise InvalidStandingsException(
                f"{conference.value} conference ranks are not 1-{len(team_ids)}",
                team_id=team_ids[0],
                field_name="conference_rank"
            )


def create_default_standings(league: LeagueStructure) -> List[TeamStanding]:
    """
    Neutral standings for a league with no previous season.

    Division rank follows ascending team ID inside each division; conference
    rank lists the division leaders first, then every second-place team, and
    so on, each tier in East/North/South/West order.
    """
    standings = []
    for team in league.teams:
        division_teams = league.get_division_teams(team.conference, team.division)
        division_rank = division_teams.index(team.team_id) + 1
        standings.append(TeamStanding(
            team_id=team.team_id,
            division_rank=division_rank,
            conference_rank=(division_rank - 1) * len(Division) + team.division.index + 1
        ))
    return standings
