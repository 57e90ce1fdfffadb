"""
Configuration for the Season Schedule Generator

Centralized configuration for season length, per-team game counts and the
bye week window.
"""

from dataclasses import dataclass, field
from typing import List, Tuple
import json

from shared.league_models import MAX_SEASON_YEAR, MIN_SEASON_YEAR


@dataclass
class ByeWeekConfig:
    """Configuration for bye week scheduling"""
    start_week: int = 5                        # Earliest bye week
    end_week: int = 14                         # Latest bye week
    min_distinct_weeks_per_division: int = 2   # Division teams never all off together

    def validate(self) -> bool:
        """Validate bye week configuration"""
        if self.start_week < 1 or self.end_week > 17:
            return False
        if self.start_week >= self.end_week:
            return False
        if self.min_distinct_weeks_per_division < 1 or self.min_distinct_weeks_per_division > 4:
            return False
        return True

    def contains(self, week: int) -> bool:
        return self.start_week <= week <= self.end_week


@dataclass
class ScheduleConfig:
    """Complete configuration for regular-season schedule generation"""

    season_year: int
    total_weeks: int = 18
    games_per_team: int = 17

    bye_week: ByeWeekConfig = field(default_factory=ByeWeekConfig)

    def validate(self) -> Tuple[bool, List[str]]:
        """Validate entire configuration"""
        errors = []

        if self.season_year < MIN_SEASON_YEAR or self.season_year > MAX_SEASON_YEAR:
            errors.append(f"Invalid season year: {self.season_year}")

        if self.total_weeks != 18:
            errors.append(f"Season uses 18 weeks, got {self.total_weeks}")

        if self.games_per_team != 17:
            errors.append(f"Teams play 17 games, got {self.games_per_team}")

        if self.games_per_team != self.total_weeks - 1:
            errors.append("Each team needs exactly one bye week")

        if not self.bye_week.validate():
            errors.append("Invalid bye week configuration")

        return len(errors) == 0, errors

    @property
    def total_games(self) -> int:
        """League-wide game count (32 teams, two per game)"""
        return 32 * self.games_per_team // 2

    def to_dict(self) -> dict:
        return {
            'season_year': self.season_year,
            'total_weeks': self.total_weeks,
            'games_per_team': self.games_per_team,
            'bye_week': {
                'start_week': self.bye_week.start_week,
                'end_week': self.bye_week.end_week,
                'min_distinct_weeks_per_division': self.bye_week.min_distinct_weeks_per_division
            }
        }

    def to_json(self, filepath: str):
        """Save configuration to JSON file"""
        with open(filepath, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def from_dict(cls, data: dict) -> 'ScheduleConfig':
        config = cls(
            season_year=data['season_year'],
            total_weeks=data.get('total_weeks', 18),
            games_per_team=data.get('games_per_team', 17)
        )

        if 'bye_week' in data:
            bye_data = data['bye_week']
            config.bye_week = ByeWeekConfig(
                start_week=bye_data.get('start_week', 5),
                end_week=bye_data.get('end_week', 14),
                min_distinct_weeks_per_division=bye_data.get('min_distinct_weeks_per_division', 2)
            )

        return config

    @classmethod
    def from_json(cls, filepath: str) -> 'ScheduleConfig':
        """Load configuration from JSON file"""
        with open(filepath, 'r') as f:
            data = json.load(f)
        return cls.from_dict(data)

    @classmethod
    def default_for_season(cls, season_year: int) -> 'ScheduleConfig':
        """Create the standard 18-week, 17-game configuration for a season"""
        return cls(
            season_year=season_year,
            bye_week=ByeWeekConfig(start_week=5, end_week=14)
        )


# Global default configuration
DEFAULT_CONFIG = ScheduleConfig.default_for_season(2025)
