"""
Division Rotation Tables

Pure functions mapping (division index, year) to the divisions a division
plays as a full block in a given season:

- Intraconference rotation: 3-year cycle keyed on ``year % 3``
- Interconference rotation: 4-year cycle keyed on ``year % 4``
- Extra (17th) game: the interconference pairing from two years earlier
- Extra-game host conference: odd years AFC, even years NFC

Division indices follow Division: East 0, North 1, South 2, West 3.
Every function is total over valid division indices and any integer year.
"""

from typing import List, Tuple

from shared.league_models import Conference


DIVISION_COUNT = 4

# INTRACONF_ROTATION[division][year % 3] -> paired division, same conference.
# Each column is an involution, so the pairing is symmetric.
INTRACONF_ROTATION = (
    (2, 1, 3),
    (3, 0, 2),
    (0, 3, 1),
    (1, 2, 0),
)

# INTERCONF_ROTATION[afc_division][year % 4] -> NFC division.
# Rows and columns are permutations: every column pairs the AFC divisions with
# distinct NFC divisions, and every row visits all four NFC divisions.
INTERCONF_ROTATION = (
    (3, 2, 1, 0),
    (2, 1, 0, 3),
    (1, 0, 3, 2),
    (0, 3, 2, 1),
)

EXTRA_GAME_YEAR_LAG = 2


def _check_division(division_index: int) -> None:
    if division_index not in range(DIVISION_COUNT):
        raise ValueError(f"Division index must be 0-{DIVISION_COUNT - 1}, got {division_index}")


def intraconf_opponent(division_index: int, year: int) -> int:
    """
    Division (same conference) played as a full block in ``year``.

    Args:
        division_index: Division index 0-3
        year: Season year

    Returns:
        Paired division index, never equal to ``division_index``
    """
    _check_division(division_index)
    return INTRACONF_ROTATION[division_index][year % 3]


def interconf_opponent(conference: Conference, division_index: int, year: int) -> Tuple[Conference, int]:
    """
    Division of the opposite conference played as a full block in ``year``.

    Args:
        conference: Conference of the division
        division_index: Division index 0-3
        year: Season year

    Returns:
        (opposite conference, paired division index)
    """
    _check_division(division_index)
    column = year % 4
    if conference is Conference.AFC:
        return Conference.NFC, INTERCONF_ROTATION[division_index][column]

    for afc_division, row in enumerate(INTERCONF_ROTATION):
        if row[column] == division_index:
            return Conference.AFC, afc_division
    raise ValueError(f"Interconference table has no AFC partner for NFC division {division_index}")


def extra_game_opponent_division(conference: Conference, division_index: int, year: int) -> Tuple[Conference, int]:
    """Opposite-conference division supplying the 17th-game opponent."""
    return interconf_opponent(conference, division_index, year - EXTRA_GAME_YEAR_LAG)


def extra_game_host_conference(year: int) -> Conference:
    """Conference whose teams host the 17th game (odd years AFC, even years NFC)."""
    return Conference.AFC if year % 2 == 1 else Conference.NFC


def super_bowl_home_conference(year: int) -> Conference:
    """Conference whose champion is the designated Super Bowl home team."""
    return extra_game_host_conference(year)


def rotation_cycle(conference: Conference, division_index: int, start_year: int, years: int) -> List[int]:
    """Interconference partner division for each of ``years`` consecutive seasons."""
    return [
        interconf_opponent(conference, division_index, year)[1]
        for year in range(start_year, start_year + years)
    ]


def intraconf_cycle(division_index: int, start_year: int, years: int) -> List[int]:
    """Intraconference partner division for each of ``years`` consecutive seasons."""
    return [intraconf_opponent(division_index, year) for year in range(start_year, start_year + years)]
