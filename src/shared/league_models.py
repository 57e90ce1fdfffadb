"""
League Structure Models

Immutable reference data for the league: conferences, divisions, teams and
the validated 2 conference x 4 division x 4 team membership that every
scheduling, playoff and draft computation works against.
"""

from dataclasses import dataclass
from enum import Enum
import logging
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

from constants.team_ids import TeamIDs
from .league_exceptions import InvalidLeagueStructureException, InvalidSeasonYearException


logger = logging.getLogger(__name__)

TEAM_COUNT = 32
TEAMS_PER_DIVISION = 4
DIVISIONS_PER_CONFERENCE = 4

MIN_SEASON_YEAR = 1970
MAX_SEASON_YEAR = 2100


class Conference(Enum):
    """The two conferences"""
    AFC = "AFC"
    NFC = "NFC"

    @property
    def opponent(self) -> 'Conference':
        """The opposite conference"""
        return Conference.NFC if self is Conference.AFC else Conference.AFC


class Division(Enum):
    """Division within a conference; the value is the rotation table index"""
    EAST = 0
    NORTH = 1
    SOUTH = 2
    WEST = 3

    @property
    def index(self) -> int:
        return self.value

    @property
    def display_name(self) -> str:
        return self.name.title()

    @classmethod
    def from_index(cls, index: int) -> 'Division':
        return cls(index)

    @classmethod
    def from_name(cls, name: str) -> 'Division':
        return cls[name.upper()]


@dataclass(frozen=True)
class Team:
    """Immutable team reference data"""
    team_id: int
    conference: Conference
    division: Division
    name: Optional[str] = None

    @property
    def division_key(self) -> Tuple[Conference, Division]:
        return (self.conference, self.division)

    def __str__(self) -> str:
        label = self.name or f"Team {self.team_id}"
        return f"{label} ({self.conference.value} {self.division.display_name})"


def validate_season_year(season_year: int) -> int:
    """
    Check that a season year is inside the supported range.

    Raises:
        InvalidSeasonYearException: If the year is out of range or not an int
    """
    if not isinstance(season_year, int) or isinstance(season_year, bool):
        raise InvalidSeasonYearException(season_year, MIN_SEASON_YEAR, MAX_SEASON_YEAR)
    if season_year < MIN_SEASON_YEAR or season_year > MAX_SEASON_YEAR:
        raise InvalidSeasonYearException(season_year, MIN_SEASON_YEAR, MAX_SEASON_YEAR)
    return season_year


class LeagueStructure:
    """
    Validated, fixed league membership.

    Membership is checked once on construction: exactly 32 unique teams,
    two conferences of four divisions, four teams per division. Division
    member lists are always returned in ascending team ID order, which is
    the canonical ordering used by bye templates and game generation.
    """

    def __init__(self, teams: Iterable[Team]):
        team_list = list(teams)
        self._validate(team_list)

        self._teams: Dict[int, Team] = {team.team_id: team for team in team_list}
        self._divisions: Dict[Tuple[Conference, Division], Tuple[int, ...]] = {}
        for conference in Conference:
            for division in Division:
                self._divisions[(conference, division)] = tuple(sorted(
                    team.team_id for team in team_list
                    if team.conference is conference and team.division is division
                ))

    @staticmethod
    def _validate(teams: List[Team]) -> None:
        if len(teams) != TEAM_COUNT:
            raise InvalidLeagueStructureException(
                f"League requires exactly {TEAM_COUNT} teams, got {len(teams)}",
                team_count=len(teams)
            )

        team_ids = [team.team_id for team in teams]
        if len(set(team_ids)) != len(team_ids):
            duplicates = sorted({tid for tid in team_ids if team_ids.count(tid) > 1})
            raise InvalidLeagueStructureException(
                f"Duplicate team IDs in league: {duplicates}",
                team_count=len(teams)
            )

        for conference in Conference:
            for division in Division:
                members = [
                    team.team_id for team in teams
                    if team.conference is conference and team.division is division
                ]
                if len(members) != TEAMS_PER_DIVISION:
                    raise InvalidLeagueStructureException(
                        f"{conference.value} {division.display_name} has {len(members)} teams, "
                        f"expected {TEAMS_PER_DIVISION}",
                        team_count=len(teams),
                        conference=conference.value,
                        division=division.display_name
                    )

    @classmethod
    def default(cls) -> 'LeagueStructure':
        """Build the default league from the TeamIDs constants"""
        return cls.from_division_map(TeamIDs.get_division_map())

    @classmethod
    def from_division_map(
        cls,
        division_map: Mapping[Tuple[str, str], Iterable[int]]
    ) -> 'LeagueStructure':
        """
        Build a league from {("AFC", "East"): [team ids], ...}.

        Raises:
            InvalidLeagueStructureException: On unknown names or bad membership
        """
        teams = []
        for (conference_name, division_name), team_ids in division_map.items():
            try:
                conference = Conference(conference_name.upper())
                division = Division.from_name(division_name)
            except (KeyError, ValueError) as e:
                raise InvalidLeagueStructureException(
                    f"Unknown conference/division '{conference_name} {division_name}'",
                    conference=conference_name,
                    division=division_name,
                    original_exception=e
                )
            for team_id in team_ids:
                teams.append(Team(team_id=team_id, conference=conference, division=division))
        return cls(teams)

    # ==================== Lookups ====================

    @property
    def teams(self) -> List[Team]:
        """All teams in ascending team ID order"""
        return [self._teams[team_id] for team_id in sorted(self._teams)]

    @property
    def team_ids(self) -> List[int]:
        return sorted(self._teams)

    def get_team(self, team_id: int) -> Team:
        """
        Get a team by ID.

        Raises:
            InvalidLeagueStructureException: If the team is not in the league
        """
        team = self._teams.get(team_id)
        if team is None:
            raise InvalidLeagueStructureException(
                f"Team {team_id} is not a member of this league",
                team_count=len(self._teams)
            )
        return team

    def conference_of(self, team_id: int) -> Conference:
        return self.get_team(team_id).conference

    def division_of(self, team_id: int) -> Division:
        return self.get_team(team_id).division

    def get_division_teams(self, conference: Conference, division: Division) -> List[int]:
        """Team IDs of one division, ascending"""
        return list(self._divisions[(conference, division)])

    def get_conference_teams(self, conference: Conference) -> List[int]:
        """Team IDs of one conference, grouped by division"""
        teams: List[int] = []
        for division in Division:
            teams.extend(self._divisions[(conference, division)])
        return teams

    def is_divisional_matchup(self, team_a: int, team_b: int) -> bool:
        return self.get_team(team_a).division_key == self.get_team(team_b).division_key

    def is_conference_matchup(self, team_a: int, team_b: int) -> bool:
        return self.conference_of(team_a) is self.conference_of(team_b)

    def __contains__(self, team_id: object) -> bool:
        return team_id in self._teams

    def __iter__(self) -> Iterator[Team]:
        return iter(self.teams)

    def __len__(self) -> int:
        return len(self._teams)
