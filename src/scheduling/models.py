"""
Schedule Data Models

Immutable value types for a generated regular season. Recording a game
result never mutates a schedule: it returns a new SeasonSchedule holding the
updated game.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, List, Mapping, Optional, Tuple


class GameComponent(Enum):
    """Category of a regular-season game; every game belongs to exactly one."""
    DIVISIONAL = "divisional"                  # A: both legs against each division rival
    INTRACONF_ROTATION = "intraconf_rotation"  # B: full block vs rotated same-conference division
    INTERCONF_ROTATION = "interconf_rotation"  # C: full block vs rotated other-conference division
    STANDINGS_INTRACONF = "standings_intraconf"  # D: same-finish opponents in the two other divisions
    EXTRA_GAME = "extra_game"                  # E: 17th game, two-year-lagged interconference pairing

    @property
    def games_per_team(self) -> int:
        return COMPONENT_GAMES_PER_TEAM[self]

    @property
    def league_total(self) -> int:
        return COMPONENT_GAMES_PER_TEAM[self] * 32 // 2


COMPONENT_GAMES_PER_TEAM: Dict[GameComponent, int] = {
    GameComponent.DIVISIONAL: 6,
    GameComponent.INTRACONF_ROTATION: 4,
    GameComponent.INTERCONF_ROTATION: 4,
    GameComponent.STANDINGS_INTRACONF: 2,
    GameComponent.EXTRA_GAME: 1,
}


class TimeSlot(Enum):
    """Broadcast window label; informational only"""
    THURSDAY_NIGHT = "thursday_night"
    EARLY_SUNDAY = "early_sunday"
    LATE_SUNDAY = "late_sunday"
    SUNDAY_NIGHT = "sunday_night"
    MONDAY_NIGHT = "monday_night"


@dataclass(frozen=True)
class ScheduledGame:
    """
    A single regular-season game.

    Produced without a result by the generator; ``with_result`` returns a
    completed copy.
    """
    game_id: str
    week: int
    home_team_id: int
    away_team_id: int
    component: GameComponent
    is_divisional: bool
    is_conference: bool
    time_slot: TimeSlot = TimeSlot.EARLY_SUNDAY
    is_complete: bool = False
    home_score: Optional[int] = None
    away_score: Optional[int] = None
    winner_id: Optional[int] = None

    @property
    def teams(self) -> Tuple[int, int]:
        return (self.home_team_id, self.away_team_id)

    @property
    def matchup_key(self) -> Tuple[int, int]:
        """Unordered pairing key (lower id first)"""
        return tuple(sorted(self.teams))

    @property
    def is_tie(self) -> bool:
        return self.is_complete and self.winner_id is None

    def involves(self, team_id: int) -> bool:
        return team_id == self.home_team_id or team_id == self.away_team_id

    def opponent_of(self, team_id: int) -> int:
        if team_id == self.home_team_id:
            return self.away_team_id
        if team_id == self.away_team_id:
            return self.home_team_id
        raise ValueError(f"Team {team_id} does not play in game {self.game_id}")

    def is_home(self, team_id: int) -> bool:
        return team_id == self.home_team_id

    def with_result(self, home_score: int, away_score: int) -> 'ScheduledGame':
        """Return a completed copy of this game; equal scores record a tie."""
        if home_score < 0 or away_score < 0:
            raise ValueError(f"Scores must be non-negative, got {home_score}-{away_score}")

        if home_score > away_score:
            winner_id = self.home_team_id
        elif away_score > home_score:
            winner_id = self.away_team_id
        else:
            winner_id = None

        return replace(
            self,
            is_complete=True,
            home_score=home_score,
            away_score=away_score,
            winner_id=winner_id
        )

    def to_dict(self) -> dict:
        return {
            'game_id': self.game_id,
            'week': self.week,
            'home_team_id': self.home_team_id,
            'away_team_id': self.away_team_id,
            'component': self.component.value,
            'is_divisional': self.is_divisional,
            'is_conference': self.is_conference,
            'time_slot': self.time_slot.value,
            'is_complete': self.is_complete,
            'home_score': self.home_score,
            'away_score': self.away_score,
            'winner_id': self.winner_id
        }


@dataclass(frozen=True)
class SeasonSchedule:
    """
    A full regular season: 272 games and each team's bye week.

    Games are kept in (week, game_id) order.
    """
    season_year: int
    games: Tuple[ScheduledGame, ...]
    bye_weeks: Mapping[int, int] = field(default_factory=dict)

    def __post_init__(self):
        ordered = tuple(sorted(self.games, key=lambda g: (g.week, g.game_id)))
        object.__setattr__(self, 'games', ordered)
        object.__setattr__(self, 'bye_weeks', dict(self.bye_weeks))

    # ==================== Queries ====================

    @property
    def total_games(self) -> int:
        return len(self.games)

    @property
    def team_ids(self) -> List[int]:
        teams = set()
        for game in self.games:
            teams.update(game.teams)
        return sorted(teams)

    @property
    def weeks(self) -> List[int]:
        return sorted({game.week for game in self.games})

    def get_game(self, game_id: str) -> ScheduledGame:
        for game in self.games:
            if game.game_id == game_id:
                return game
        raise KeyError(f"No game '{game_id}' in {self.season_year} schedule")

    def get_week_games(self, week: int) -> List[ScheduledGame]:
        """All games in a week"""
        return [game for game in self.games if game.week == week]

    def get_team_schedule(self, team_id: int) -> List[ScheduledGame]:
        """A team's games in week order"""
        return [game for game in self.games if game.involves(team_id)]

    def get_team_remaining_games(self, team_id: int) -> List[ScheduledGame]:
        return [game for game in self.get_team_schedule(team_id) if not game.is_complete]

    def get_team_completed_games(self, team_id: int) -> List[ScheduledGame]:
        return [game for game in self.get_team_schedule(team_id) if game.is_complete]

    def get_opponents(self, team_id: int) -> List[int]:
        """Opponents in week order (division rivals appear twice)"""
        return [game.opponent_of(team_id) for game in self.get_team_schedule(team_id)]

    def get_matchup(self, team_a: int, team_b: int) -> List[ScheduledGame]:
        """Every game between two teams"""
        return [game for game in self.games if game.involves(team_a) and game.involves(team_b)]

    def get_component_games(self, component: GameComponent) -> List[ScheduledGame]:
        return [game for game in self.games if game.component is component]

    def get_bye_week(self, team_id: int) -> Optional[int]:
        return self.bye_weeks.get(team_id)

    def get_teams_on_bye(self, week: int) -> List[int]:
        return sorted(team_id for team_id, bye in self.bye_weeks.items() if bye == week)

    @property
    def completed_game_count(self) -> int:
        return sum(1 for game in self.games if game.is_complete)

    def is_regular_season_complete(self) -> bool:
        return bool(self.games) and all(game.is_complete for game in self.games)

    # ==================== Results ====================

    def record_result(self, game_id: str, home_score: int, away_score: int) -> 'SeasonSchedule':
        """Return a new schedule with one game's result recorded."""
        updated = self.get_game(game_id).with_result(home_score, away_score)
        return self.replace_games([updated])

    def replace_games(self, updated_games: List[ScheduledGame]) -> 'SeasonSchedule':
        """Return a new schedule with games swapped in by game_id."""
        by_id = {game.game_id: game for game in updated_games}
        unknown = set(by_id) - {game.game_id for game in self.games}
        if unknown:
            raise KeyError(f"Unknown game ids: {sorted(unknown)}")

        return SeasonSchedule(
            season_year=self.season_year,
            games=tuple(by_id.get(game.game_id, game) for game in self.games),
            bye_weeks=self.bye_weeks
        )

    def to_dict(self) -> dict:
        return {
            'season_year': self.season_year,
            'total_games': self.total_games,
            'bye_weeks': {str(team_id): week for team_id, week in sorted(self.bye_weeks.items())},
            'games': [game.to_dict() for game in self.games]
        }
