"""
League Team ID Constants

Readable constants for the 32 numerical team IDs of the default league.
IDs are laid out conference-major, division-minor: AFC East is 1-4,
AFC North 5-8, ... NFC West 29-32.

Example:
    from constants.team_ids import TeamIDs

    afc_east = TeamIDs.get_division_teams("AFC", "East")
    all_ids = TeamIDs.get_all_team_ids()
"""

from typing import Dict, List, Tuple


class TeamIDs:
    """Constants for the default league's numerical team IDs"""

    # AFC East
    BUFFALO_BILLS = 1
    MIAMI_DOLPHINS = 2
    NEW_ENGLAND_PATRIOTS = 3
    NEW_YORK_JETS = 4

    # AFC North
    BALTIMORE_RAVENS = 5
    CINCINNATI_BENGALS = 6
    CLEVELAND_BROWNS = 7
    PITTSBURGH_STEELERS = 8

    # AFC South
    HOUSTON_TEXANS = 9
    INDIANAPOLIS_COLTS = 10
    JACKSONVILLE_JAGUARS = 11
    TENNESSEE_TITANS = 12

    # AFC West
    DENVER_BRONCOS = 13
    KANSAS_CITY_CHIEFS = 14
    LAS_VEGAS_RAIDERS = 15
    LOS_ANGELES_CHARGERS = 16

    # NFC East
    DALLAS_COWBOYS = 17
    NEW_YORK_GIANTS = 18
    PHILADELPHIA_EAGLES = 19
    WASHINGTON_COMMANDERS = 20

    # NFC North
    CHICAGO_BEARS = 21
    DETROIT_LIONS = 22
    GREEN_BAY_PACKERS = 23
    MINNESOTA_VIKINGS = 24

    # NFC South
    ATLANTA_FALCONS = 25
    CAROLINA_PANTHERS = 26
    NEW_ORLEANS_SAINTS = 27
    TAMPA_BAY_BUCCANEERS = 28

    # NFC West
    ARIZONA_CARDINALS = 29
    LOS_ANGELES_RAMS = 30
    SAN_FRANCISCO_49ERS = 31
    SEATTLE_SEAHAWKS = 32

    CONFERENCES = ("AFC", "NFC")
    DIVISIONS = ("East", "North", "South", "West")
    TEAMS_PER_DIVISION = 4

    @classmethod
    def get_all_team_ids(cls) -> List[int]:
        """Get all valid team IDs in ascending order"""
        return sorted(
            value for attr, value in vars(cls).items()
            if attr.isupper() and isinstance(value, int) and attr != "TEAMS_PER_DIVISION"
        )

    @classmethod
    def get_division_teams(cls, conference: str, division: str) -> List[int]:
        """
        Get team IDs for a specific division.

        Args:
            conference: "AFC" or "NFC"
            division: "East", "North", "South" or "West"

        Returns:
            The four team IDs of that division, or an empty list if unknown
        """
        return list(cls.get_division_map().get((conference.upper(), division.title()), []))

    @classmethod
    def get_conference_teams(cls, conference: str) -> List[int]:
        """Get the 16 team IDs of a conference ("AFC" or "NFC")"""
        teams: List[int] = []
        for division in cls.DIVISIONS:
            teams.extend(cls.get_division_teams(conference, division))
        return teams

    @classmethod
    def get_division_map(cls) -> Dict[Tuple[str, str], Tuple[int, ...]]:
        """Map (conference, division) to its team IDs"""
        division_map = {}
        next_id = 1
        for conference in cls.CONFERENCES:
            for division in cls.DIVISIONS:
                division_map[(conference, division)] = tuple(
                    range(next_id, next_id + cls.TEAMS_PER_DIVISION)
                )
                next_id += cls.TEAMS_PER_DIVISION
        return division_map
