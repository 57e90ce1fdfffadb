"""
Pytest configuration for test discovery and imports.

Provides fixtures for testing including:
- Default league structure
- Neutral and accumulated standings
- Generated season schedules
"""

import sys
from pathlib import Path

import pytest


# Determine paths
project_root = Path(__file__).parent.parent
src_path = project_root / "src"
tests_path = project_root / "tests"


def pytest_configure(config):
    """Configure pytest - runs very early in startup.

    src/ goes first so packages like scheduling are never shadowed by the
    same-named test directories; tests/ goes last for the shared mocks.
    """
    seen = set()
    new_path = []
    for p in sys.path:
        if p not in seen and p not in (str(src_path), str(project_root), str(tests_path)):
            seen.add(p)
            new_path.append(p)

    new_path.insert(0, str(src_path))
    new_path.insert(1, str(project_root))
    new_path.append(str(tests_path))

    sys.path[:] = new_path


# ============================================================================
# LEAGUE FIXTURES
# ============================================================================

@pytest.fixture(scope="session")
def league():
    """Default 32-team league (AFC East 1-4 ... NFC West 29-32)."""
    from shared.league_models import LeagueStructure
    return LeagueStructure.default()


@pytest.fixture
def default_standings(league):
    """Neutral previous-season standings (division rank by team ID)."""
    from shared.team_standing import create_default_standings
    return create_default_standings(league)


# ============================================================================
# SCHEDULE FIXTURES
# ============================================================================

@pytest.fixture(scope="session")
def schedule_2025(league):
    """2025 schedule generated from neutral standings."""
    from scheduling.schedule_generator import SeasonScheduleGenerator
    return SeasonScheduleGenerator(league).generate_season(2025)


@pytest.fixture(scope="session")
def played_season_2025(league, schedule_2025):
    """
    2025 regular season with the home team winning every game.

    Returns:
        (completed schedule, accumulated final standings)
    """
    from mocks.game_simulator import HomeTeamWinsSimulator, play_regular_season
    from mocks.standings_accumulator import StandingsAccumulator

    completed = play_regular_season(schedule_2025, HomeTeamWinsSimulator())
    standings = StandingsAccumulator(league).accumulate(completed.games)
    return completed, standings
