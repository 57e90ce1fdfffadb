"""
Season Schedule Validator

A bank of independent checks ("gates") over a generated SeasonSchedule and
the rotation tables. Every gate runs on every call and reports all of its
failures; nothing is raised and nothing is mutated.

Gates:
    game_count             17 games per team
    league_total           272 games
    home_away_balance      9 home for extra-game host conference, 8 otherwise
    divisional_structure   6 divisional games, both legs vs each rival
    intraconf_rotation     full block vs the rotated same-conference division
    interconf_rotation     full block vs the rotated other-conference division
    standings_component    2 same-finish games, 1 home / 1 away
    extra_game             one 17th game vs the expected team, host at home
    no_duplicate_matchups  non-division opponents met at most once
    component_buckets      96 / 64 / 64 / 32 / 16 games per component
    pairing_symmetry       game references consistent from both sides
    extra_game_separation  17th-game division differs from interconference division
    rotation_advancement   rotation tables advance over consecutive years
    host_alternation       extra-game host alternates every year
    bye_weeks              one bye per team, inside the window, never on a game week
    bye_diversity          at least two distinct bye weeks per division

Usage Example:
    from scheduling.schedule_validator import validate_schedule

    result = validate_schedule(schedule, league, previous_standings)
    if not result.valid:
        for gate, errors in result.gate_failures.items():
            print(gate, errors)
"""

from collections import Counter, defaultdict
from dataclasses import dataclass, field
from enum import Enum
import logging
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple, Union

from shared.league_exceptions import LeagueException
from shared.league_models import Conference, Division, LeagueStructure, Team
from shared.team_standing import TeamStanding
from .config import ByeWeekConfig, ScheduleConfig
from .finish_order import FinishOrder
from .matchup_policy import DEFAULT_POLICY, RankMatchingPolicy
from .models import COMPONENT_GAMES_PER_TEAM, GameComponent, ScheduledGame, SeasonSchedule
from .rotation import (
    extra_game_host_conference,
    extra_game_opponent_division,
    interconf_opponent,
    intraconf_opponent,
)


class ValidationSeverity(Enum):
    """Severity levels for validation errors"""
    CRITICAL = "critical"  # Schedule unusable
    ERROR = "error"        # Invariant violated
    WARNING = "warning"    # Potential issue, review recommended
    INFO = "info"          # Informational, no action needed


@dataclass
class ValidationError:
    """
    Single validation error.

    Attributes:
        severity: Error severity level
        category: Gate name (e.g., "game_count", "bye_weeks")
        message: Human-readable error message
        context: Additional context (team IDs, weeks, etc.)
        suggestion: Suggested fix
    """
    severity: ValidationSeverity
    category: str
    message: str
    context: Dict[str, Any] = field(default_factory=dict)
    suggestion: Optional[str] = None

    def __str__(self) -> str:
        """String representation for logging"""
        result = f"[{self.severity.value.upper()}] {self.category}: {self.message}"
        if self.context:
            result += f"\n  Context: {self.context}"
        if self.suggestion:
            result += f"\n  Suggestion: {self.suggestion}"
        return result


@dataclass
class ScheduleValidationResult:
    """
    Result of a validation run.

    Attributes:
        valid: Whether every gate passed
        errors: Gate failures
        warnings: Non-fatal findings
        info: Informational messages
        total_checks: Number of gates run
        gates_run: Gate names in run order
    """
    valid: bool
    errors: List[ValidationError] = field(default_factory=list)
    warnings: List[ValidationError] = field(default_factory=list)
    info: List[ValidationError] = field(default_factory=list)
    total_checks: int = 0
    gates_run: List[str] = field(default_factory=list)

    def add_error(
        self,
        severity: ValidationSeverity,
        category: str,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        suggestion: Optional[str] = None
    ):
        """Add validation error to result"""
        error = ValidationError(
            severity=severity,
            category=category,
            message=message,
            context=context or {},
            suggestion=suggestion
        )

        if severity == ValidationSeverity.CRITICAL or severity == ValidationSeverity.ERROR:
            self.errors.append(error)
            self.valid = False
        elif severity == ValidationSeverity.WARNING:
            self.warnings.append(error)
        else:
            self.info.append(error)

    @property
    def passed(self) -> bool:
        return self.valid

    @property
    def gate_failures(self) -> Dict[str, List[str]]:
        """Failing gate name -> its error messages"""
        failures: Dict[str, List[str]] = {}
        for error in self.errors:
            failures.setdefault(error.category, []).append(error.message)
        return failures

    @property
    def failed_gates(self) -> List[str]:
        return [gate for gate in self.gates_run if gate in self.gate_failures]

    @property
    def all_errors(self) -> List[str]:
        """Every failure as '<gate>: <message>'"""
        return [f"{error.category}: {error.message}" for error in self.errors]

    def get_summary(self) -> str:
        """Get human-readable summary"""
        return (
            f"Validation Result: {'PASS' if self.valid else 'FAIL'}\n"
            f"  Total Checks: {self.total_checks}\n"
            f"  Failed Gates: {', '.join(self.failed_gates) or 'none'}\n"
            f"  Errors: {len(self.errors)}\n"
            f"  Warnings: {len(self.warnings)}"
        )


class ScheduleValidator:
    """
    Runs every schedule gate against one season.

    Attributes:
        schedule: Schedule under test
        league: League the schedule was generated for
        finish_order: Previous-season finish order used by standings games
        policy: Rank matching policy used by standings games
    """

    # Consecutive seasons checked by the rotation-only gates (lcm of 3 and 4)
    ROTATION_WINDOW_YEARS = 12

    def __init__(
        self,
        schedule: SeasonSchedule,
        league: LeagueStructure,
        previous_standings: Optional[Iterable[TeamStanding]] = None,
        policy: RankMatchingPolicy = DEFAULT_POLICY,
        config: Optional[ScheduleConfig] = None,
        logger: Optional[logging.Logger] = None
    ):
        self.schedule = schedule
        self.league = league
        self.previous_standings = previous_standings
        self.policy = policy
        self.config = config or ScheduleConfig.default_for_season(schedule.season_year)
        self._logger = logger or logging.getLogger(__name__)

        self._year = schedule.season_year
        self._team_games: Dict[int, List[ScheduledGame]] = defaultdict(list)
        for game in schedule.games:
            self._team_games[game.home_team_id].append(game)
            if game.away_team_id != game.home_team_id:
                self._team_games[game.away_team_id].append(game)

    @property
    def gates(self) -> List[Tuple[str, Callable[[ScheduleValidationResult], None]]]:
        return [
            ("game_count", self._check_game_count),
            ("league_total", self._check_league_total),
            ("home_away_balance", self._check_home_away_balance),
            ("divisional_structure", self._check_divisional_structure),
            ("intraconf_rotation", self._check_intraconf_rotation),
            ("interconf_rotation", self._check_interconf_rotation),
            ("standings_component", self._check_standings_component),
            ("extra_game", self._check_extra_game),
            ("no_duplicate_matchups", self._check_no_duplicate_matchups),
            ("component_buckets", self._check_component_buckets),
            ("pairing_symmetry", self._check_pairing_symmetry),
            ("extra_game_separation", self._check_extra_game_separation),
            ("rotation_advancement", self._check_rotation_advancement),
            ("host_alternation", self._check_host_alternation),
            ("bye_weeks", self._check_bye_weeks),
            ("bye_diversity", self._check_bye_diversity),
        ]

    def validate_all(self) -> ScheduleValidationResult:
        """
        Run all gates.

        Returns:
            ScheduleValidationResult listing every failing gate
        """
        result = ScheduleValidationResult(valid=True)

        self._logger.info(f"Starting schedule validation for {self._year} season")

        for gate_name, gate in self.gates:
            result.gates_run.append(gate_name)
            result.total_checks += 1
            try:
                gate(result)
            except (LeagueException, KeyError, ValueError) as e:
                # Malformed data (unknown team, missing standing) fails the gate
                self._fail(result, gate_name, f"Gate could not evaluate schedule: {e}")

        if result.valid:
            self._logger.info(f"Validation complete: {result.total_checks} gates, all passed")
        else:
            self._logger.warning(
                f"Validation complete: {result.total_checks} gates, "
                f"{len(result.failed_gates)} failed ({', '.join(result.failed_gates)}), "
                f"{len(result.errors)} errors"
            )

        return result

    # ==================== Helpers ====================

    def _fail(self, result: ScheduleValidationResult, gate: str, message: str, **context) -> None:
        result.add_error(ValidationSeverity.ERROR, gate, message, context=context)

    def _games_of(self, team_id: int, component: Optional[GameComponent] = None) -> List[ScheduledGame]:
        games = self._team_games.get(team_id, [])
        if component is None:
            return list(games)
        return [game for game in games if game.component is component]

    def _division_teams(self, conference: Conference, division_index: int) -> List[int]:
        return self.league.get_division_teams(conference, Division.from_index(division_index))

    def _finish_order(self) -> FinishOrder:
        return FinishOrder.from_standings(self.league, self.previous_standings)

    def _check_block(
        self,
        result: ScheduleValidationResult,
        gate: str,
        component: GameComponent,
        team: Team,
        expected_opponents: List[int]
    ) -> None:
        """Full-division block: one game vs each expected opponent, 2 home / 2 away."""
        games = self._games_of(team.team_id, component)
        opponents = sorted(game.opponent_of(team.team_id) for game in games)

        if opponents != sorted(expected_opponents):
            self._fail(
                result, gate,
                f"Team {team.team_id} {component.value} opponents {opponents}, "
                f"expected {sorted(expected_opponents)}",
                team_id=team.team_id
            )
            return

        home_games = sum(1 for game in games if game.is_home(team.team_id))
        expected_home = len(expected_opponents) // 2
        if home_games != expected_home:
            self._fail(
                result, gate,
                f"Team {team.team_id} has {home_games} home {component.value} games, "
                f"expected {expected_home}",
                team_id=team.team_id
            )

    # ==================== Gates ====================

    def _check_game_count(self, result: ScheduleValidationResult) -> None:
        for team_id in self.league.team_ids:
            count = len(self._games_of(team_id))
            if count != self.config.games_per_team:
                self._fail(
                    result, "game_count",
                    f"Team {team_id} plays {count} games, expected {self.config.games_per_team}",
                    team_id=team_id
                )

    def _check_league_total(self, result: ScheduleValidationResult) -> None:
        if self.schedule.total_games != self.config.total_games:
            self._fail(
                result, "league_total",
                f"Schedule has {self.schedule.total_games} games, expected {self.config.total_games}"
            )

    def _check_home_away_balance(self, result: ScheduleValidationResult) -> None:
        host = extra_game_host_conference(self._year)
        for team in self.league.teams:
            games = self._games_of(team.team_id)
            home = sum(1 for game in games if game.is_home(team.team_id))
            away = len(games) - home
            expected_home = 9 if team.conference is host else 8
            expected_away = self.config.games_per_team - expected_home
            if home != expected_home or away != expected_away:
                self._fail(
                    result, "home_away_balance",
                    f"Team {team.team_id} ({team.conference.value}) has {home}H/{away}A, "
                    f"expected {expected_home}H/{expected_away}A with {host.value} hosting",
                    team_id=team.team_id
                )

    def _check_divisional_structure(self, result: ScheduleValidationResult) -> None:
        for team in self.league.teams:
            games = self._games_of(team.team_id, GameComponent.DIVISIONAL)
            rivals = [
                team_id for team_id in self.league.get_division_teams(team.conference, team.division)
                if team_id != team.team_id
            ]

            if len(games) != 2 * len(rivals):
                self._fail(
                    result, "divisional_structure",
                    f"Team {team.team_id} has {len(games)} divisional games, expected {2 * len(rivals)}",
                    team_id=team.team_id
                )

            for rival in rivals:
                legs = [game for game in games if game.involves(rival)]
                home_legs = sum(1 for game in legs if game.is_home(team.team_id))
                if len(legs) != 2 or home_legs != 1:
                    self._fail(
                        result, "divisional_structure",
                        f"Team {team.team_id} vs rival {rival}: {len(legs)} games, {home_legs} at home "
                        f"(expected 2 games, 1 at home)",
                        team_id=team.team_id
                    )

            outsiders = [game.opponent_of(team.team_id) for game in games
                         if game.opponent_of(team.team_id) not in rivals]
            if outsiders:
                self._fail(
                    result, "divisional_structure",
                    f"Team {team.team_id} has divisional games against non-rivals {outsiders}",
                    team_id=team.team_id
                )

    def _check_intraconf_rotation(self, result: ScheduleValidationResult) -> None:
        for team in self.league.teams:
            partner = intraconf_opponent(team.division.index, self._year)
            self._check_block(
                result, "intraconf_rotation", GameComponent.INTRACONF_ROTATION, team,
                self._division_teams(team.conference, partner)
            )

    def _check_interconf_rotation(self, result: ScheduleValidationResult) -> None:
        for team in self.league.teams:
            conference, partner = interconf_opponent(team.conference, team.division.index, self._year)
            self._check_block(
                result, "interconf_rotation", GameComponent.INTERCONF_ROTATION, team,
                self._division_teams(conference, partner)
            )

    def _check_standings_component(self, result: ScheduleValidationResult) -> None:
        finish_order = self._finish_order()

        for team in self.league.teams:
            partner = intraconf_opponent(team.division.index, self._year)
            other_divisions = [
                index for index in range(len(Division))
                if index != team.division.index and index != partner
            ]
            opponent_rank = self.policy.opponent_rank(finish_order.rank_of(team.team_id))
            expected = sorted(
                finish_order.team_at(team.conference, Division.from_index(index), opponent_rank)
                for index in other_divisions
            )

            games = self._games_of(team.team_id, GameComponent.STANDINGS_INTRACONF)
            opponents = sorted(game.opponent_of(team.team_id) for game in games)
            if opponents != expected:
                self._fail(
                    result, "standings_component",
                    f"Team {team.team_id} standings opponents {opponents}, expected {expected}",
                    team_id=team.team_id
                )
                continue

            home = sum(1 for game in games if game.is_home(team.team_id))
            if home != 1:
                self._fail(
                    result, "standings_component",
                    f"Team {team.team_id} hosts {home} standings games, expected 1",
                    team_id=team.team_id
                )

    def _check_extra_game(self, result: ScheduleValidationResult) -> None:
        finish_order = self._finish_order()
        host = extra_game_host_conference(self._year)

        for team in self.league.teams:
            games = self._games_of(team.team_id, GameComponent.EXTRA_GAME)
            if len(games) != 1:
                self._fail(
                    result, "extra_game",
                    f"Team {team.team_id} has {len(games)} extra games, expected 1",
                    team_id=team.team_id
                )
                continue

            game = games[0]
            conference, division_index = extra_game_opponent_division(
                team.conference, team.division.index, self._year
            )
            expected = finish_order.team_at(
                conference,
                Division.from_index(division_index),
                self.policy.opponent_rank(finish_order.rank_of(team.team_id))
            )
            opponent = game.opponent_of(team.team_id)
            if opponent != expected:
                self._fail(
                    result, "extra_game",
                    f"Team {team.team_id} extra game opponent {opponent}, expected {expected}",
                    team_id=team.team_id
                )

            if self.league.conference_of(game.home_team_id) is not host:
                self._fail(
                    result, "extra_game",
                    f"Extra game {game.game_id} hosted by team {game.home_team_id}, "
                    f"expected a {host.value} host",
                    team_id=team.team_id
                )

    def _check_no_duplicate_matchups(self, result: ScheduleValidationResult) -> None:
        counts = Counter(
            game.matchup_key for game in self.schedule.games
            if game.component is not GameComponent.DIVISIONAL
        )
        for (team_a, team_b), count in sorted(counts.items()):
            if count > 1:
                self._fail(
                    result, "no_duplicate_matchups",
                    f"Teams {team_a} and {team_b} meet {count} times outside the division"
                )
            elif self.league.is_divisional_matchup(team_a, team_b):
                self._fail(
                    result, "no_duplicate_matchups",
                    f"Division rivals {team_a} and {team_b} meet in a non-divisional game"
                )

    def _check_component_buckets(self, result: ScheduleValidationResult) -> None:
        league_counts = Counter(game.component for game in self.schedule.games)

        for component in GameComponent:
            per_team = COMPONENT_GAMES_PER_TEAM[component]
            expected_total = per_team * len(self.league) // 2
            if league_counts[component] != expected_total:
                self._fail(
                    result, "component_buckets",
                    f"{component.value} has {league_counts[component]} games, expected {expected_total}"
                )

            for team_id in self.league.team_ids:
                count = len(self._games_of(team_id, component))
                if count != per_team:
                    self._fail(
                        result, "component_buckets",
                        f"Team {team_id} has {count} {component.value} games, expected {per_team}",
                        team_id=team_id
                    )

    def _check_pairing_symmetry(self, result: ScheduleValidationResult) -> None:
        game_ids = Counter(game.game_id for game in self.schedule.games)
        for game_id, count in game_ids.items():
            if count > 1:
                self._fail(result, "pairing_symmetry", f"Game id {game_id} used {count} times")

        for game in self.schedule.games:
            if game.home_team_id == game.away_team_id:
                self._fail(result, "pairing_symmetry", f"Game {game.game_id} has a team playing itself")
                continue

            unknown = [team_id for team_id in game.teams if team_id not in self.league]
            if unknown:
                self._fail(result, "pairing_symmetry", f"Game {game.game_id} references unknown teams {unknown}")
                continue

            if game.is_divisional != self.league.is_divisional_matchup(*game.teams):
                self._fail(result, "pairing_symmetry", f"Game {game.game_id} has a wrong divisional flag")
            if game.is_conference != self.league.is_conference_matchup(*game.teams):
                self._fail(result, "pairing_symmetry", f"Game {game.game_id} has a wrong conference flag")
            if game.is_divisional != (game.component is GameComponent.DIVISIONAL):
                self._fail(
                    result, "pairing_symmetry",
                    f"Game {game.game_id} divisional flag disagrees with component {game.component.value}"
                )

            # Reverse lookup from each side must reproduce the same pairing
            for team_id in game.teams:
                opponent = game.opponent_of(team_id)
                mirrored = [g for g in self._games_of(opponent) if g.game_id == game.game_id]
                if len(mirrored) != 1 or mirrored[0].opponent_of(opponent) != team_id:
                    self._fail(
                        result, "pairing_symmetry",
                        f"Game {game.game_id} not reproduced from team {opponent}'s schedule"
                    )

    def _check_extra_game_separation(self, result: ScheduleValidationResult) -> None:
        for conference in Conference:
            for division in Division:
                extra = extra_game_opponent_division(conference, division.index, self._year)
                current = interconf_opponent(conference, division.index, self._year)
                if extra == current:
                    self._fail(
                        result, "extra_game_separation",
                        f"{conference.value} {division.display_name} extra-game division {extra[1]} "
                        f"equals its {self._year} interconference division"
                    )

        for team_id in self.league.team_ids:
            rotation_opponents = {
                game.opponent_of(team_id)
                for game in self._games_of(team_id, GameComponent.INTERCONF_ROTATION)
            }
            for game in self._games_of(team_id, GameComponent.EXTRA_GAME):
                if game.opponent_of(team_id) in rotation_opponents:
                    self._fail(
                        result, "extra_game_separation",
                        f"Team {team_id} extra game repeats interconference opponent "
                        f"{game.opponent_of(team_id)}",
                        team_id=team_id
                    )

    def _check_rotation_advancement(self, result: ScheduleValidationResult) -> None:
        for error in check_rotation_tables(self._year, self.ROTATION_WINDOW_YEARS):
            self._fail(result, "rotation_advancement", error)

    def _check_host_alternation(self, result: ScheduleValidationResult) -> None:
        for year in range(self._year, self._year + self.ROTATION_WINDOW_YEARS):
            if extra_game_host_conference(year) is extra_game_host_conference(year + 1):
                self._fail(
                    result, "host_alternation",
                    f"Extra-game host does not alternate between {year} and {year + 1}"
                )

    def _check_bye_weeks(self, result: ScheduleValidationResult) -> None:
        bye_config: ByeWeekConfig = self.config.bye_week

        for team_id in self.league.team_ids:
            bye = self.schedule.get_bye_week(team_id)
            weeks = [game.week for game in self._games_of(team_id)]

            if bye is None:
                self._fail(result, "bye_weeks", f"Team {team_id} has no bye week", team_id=team_id)
            elif not bye_config.contains(bye):
                self._fail(
                    result, "bye_weeks",
                    f"Team {team_id} bye week {bye} outside {bye_config.start_week}-{bye_config.end_week}",
                    team_id=team_id
                )
            elif bye in weeks:
                self._fail(result, "bye_weeks", f"Team {team_id} plays during its week {bye} bye", team_id=team_id)

            duplicates = sorted(week for week, count in Counter(weeks).items() if count > 1)
            if duplicates:
                self._fail(
                    result, "bye_weeks",
                    f"Team {team_id} plays more than once in weeks {duplicates}",
                    team_id=team_id
                )

            outside = sorted(week for week in weeks if week < 1 or week > self.config.total_weeks)
            if outside:
                self._fail(result, "bye_weeks", f"Team {team_id} has games in invalid weeks {outside}", team_id=team_id)

        unknown = sorted(team_id for team_id in self.schedule.bye_weeks if team_id not in self.league)
        if unknown:
            self._fail(result, "bye_weeks", f"Bye weeks assigned to unknown teams {unknown}")

    def _check_bye_diversity(self, result: ScheduleValidationResult) -> None:
        minimum = self.config.bye_week.min_distinct_weeks_per_division
        for conference in Conference:
            for division in Division:
                team_ids = self.league.get_division_teams(conference, division)
                distinct = {self.schedule.get_bye_week(team_id) for team_id in team_ids}
                if len(distinct) < minimum:
                    self._fail(
                        result, "bye_diversity",
                        f"{conference.value} {division.display_name} uses {len(distinct)} distinct "
                        f"bye weeks, needs at least {minimum}"
                    )


def check_rotation_tables(start_year: int, years: int) -> List[str]:
    """
    Check the rotation tables over consecutive seasons.

    Returns:
        Error messages (empty when the tables advance correctly)
    """
    errors: List[str] = []
    division_count = len(Division)

    for year in range(start_year, start_year + years):
        for division in range(division_count):
            partner = intraconf_opponent(division, year)
            if partner == division:
                errors.append(f"{year}: division {division} paired with itself")
            if intraconf_opponent(partner, year) != division:
                errors.append(f"{year}: intraconference pairing {division}->{partner} not symmetric")

            window = {intraconf_opponent(division, y) for y in range(year, year + 3)}
            if window != set(range(division_count)) - {division}:
                errors.append(
                    f"{year}-{year + 2}: division {division} intraconference window covers {sorted(window)}"
                )

            for conference in Conference:
                other, nfc_partner = interconf_opponent(conference, division, year)
                if interconf_opponent(other, nfc_partner, year) != (conference, division):
                    errors.append(
                        f"{year}: interconference pairing {conference.value} {division} not symmetric"
                    )

                cycle = {interconf_opponent(conference, division, y)[1] for y in range(year, year + 4)}
                if cycle != set(range(division_count)):
                    errors.append(
                        f"{year}-{year + 3}: {conference.value} division {division} interconference "
                        f"window covers {sorted(cycle)}"
                    )

                extra = extra_game_opponent_division(conference, division, year)
                if extra != interconf_opponent(conference, division, year - 2):
                    errors.append(f"{year}: {conference.value} {division} extra game not lagged two years")

        if interconf_opponent(Conference.AFC, 0, year) == interconf_opponent(Conference.AFC, 0, year + 1):
            errors.append(f"{year}: interconference rotation did not advance")

    return errors


def validate_schedule(
    schedule: SeasonSchedule,
    teams: Union[LeagueStructure, Iterable[Team]],
    previous_standings: Optional[Iterable[TeamStanding]] = None,
    policy: RankMatchingPolicy = DEFAULT_POLICY,
    config: Optional[ScheduleConfig] = None
) -> ScheduleValidationResult:
    """
    Run every gate against a schedule.

    Args:
        schedule: Generated season schedule
        teams: League structure or its teams
        previous_standings: Standings the schedule was generated from
            (None means neutral standings, as in generation)
        policy: Rank matching policy the schedule was generated with
        config: Schedule configuration (defaults to the standard season)

    Returns:
        ScheduleValidationResult; never raises for schedule defects
    """
    league = teams if isinstance(teams, LeagueStructure) else LeagueStructure(teams)
    if previous_standings is not None:
        previous_standings = list(previous_standings)
    validator = ScheduleValidator(schedule, league, previous_standings, policy, config)
    return validator.validate_all()
