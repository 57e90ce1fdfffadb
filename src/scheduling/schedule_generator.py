"""
Season Schedule Generator

Generates a complete 18-week, 272-game regular season from a closed-form
rotation formula. Given the same league, season year and previous-season
standings the output is always identical; nothing is random and nothing is
searched.

Each team's 17 games come from five components:
- Divisional (6): home and away against each division rival
- Intraconference rotation (4): every team of the rotated same-conference division
- Interconference rotation (4): every team of the rotated other-conference division
- Standings-based intraconference (2): same-finish teams in the two remaining
  same-conference divisions
- Extra game (1): same-finish team in the interconference division from two
  seasons earlier, hosted league-wide by one conference

Every component is produced as slates (perfect matchings of all 32 teams),
which WeekPlacer lays out over weeks 1-17 with bye games moved to week 18.
"""

import logging
from typing import Dict, Iterable, List, Optional, Union

from shared.league_models import Conference, Division, LeagueStructure, Team, validate_season_year
from shared.team_standing import TeamStanding
from .bye_weeks import ByeWeekAssigner
from .config import ScheduleConfig
from .finish_order import FinishOrder
from .matchup_policy import DEFAULT_POLICY, RankMatchingPolicy
from .models import GameComponent, SeasonSchedule
from .rotation import (
    extra_game_host_conference,
    extra_game_opponent_division,
    interconf_opponent,
    intraconf_opponent,
)
from .schedule_exceptions import ScheduleConfigurationException, ScheduleGenerationException
from .week_placement import Pairing, SlateKey, WeekPlacer


class SeasonScheduleGenerator:
    """
    Builds regular-season schedules for a fixed league.

    The generator holds only immutable inputs (league, policy), so one
    instance can produce any number of seasons.
    """

    TOTAL_TEAMS = 32
    TEAMS_PER_DIVISION = 4
    ROTATION_SLATES = 4

    # One-factorization of a 4-team division by team position.
    # Slates 0-2 are the first meetings, 3-5 the return legs.
    DIVISION_MATCHINGS = (
        ((0, 1), (2, 3)),
        ((0, 2), (1, 3)),
        ((0, 3), (1, 2)),
    )

    def __init__(
        self,
        league: LeagueStructure,
        policy: RankMatchingPolicy = DEFAULT_POLICY,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize schedule generator.

        Args:
            league: Validated 32-team league structure
            policy: Rank matching policy for standings-based games
            logger: Optional logger for tracking generation progress
        """
        self.league = league
        self.policy = policy
        self.logger = logger or logging.getLogger(__name__)

    def generate_season(
        self,
        season_year: int,
        previous_standings: Optional[Iterable[TeamStanding]] = None,
        config: Optional[ScheduleConfig] = None
    ) -> SeasonSchedule:
        """
        Generate a complete regular season.

        Args:
            season_year: Season year (drives every rotation)
            previous_standings: Last season's standings (division_rank is used);
                None uses neutral standings ordered by team id
            config: Optional schedule configuration for this season

        Returns:
            SeasonSchedule with 272 games and 32 bye weeks

        Raises:
            InvalidSeasonYearException: If the year is out of range
            InvalidStandingsException: If standings are incomplete or inconsistent
            ScheduleGenerationException: If configuration or placement fails
        """
        validate_season_year(season_year)
        config = self._resolve_config(season_year, config)

        self.logger.info(
            f"Generating {season_year} season schedule "
            f"(rank policy '{self.policy.name}')"
        )

        finish_order = FinishOrder.from_standings(self.league, previous_standings)
        bye_weeks = ByeWeekAssigner(config=config.bye_week, logger=self.logger).assign(self.league)

        slates: Dict[SlateKey, List[Pairing]] = {}
        slates.update(self._generate_divisional_slates(season_year))
        slates.update(self._generate_intraconf_rotation_slates(season_year))
        slates.update(self._generate_interconf_rotation_slates(season_year))
        slates.update(self._generate_standings_slates(season_year, finish_order))
        slates.update(self._generate_extra_game_slates(season_year, finish_order))

        games = WeekPlacer(config, logger=self.logger).place(slates, bye_weeks)
        schedule = SeasonSchedule(season_year=season_year, games=tuple(games), bye_weeks=bye_weeks)

        self._validate_season_schedule(schedule, config)

        self.logger.info(
            f"{season_year} schedule complete: {schedule.total_games} games over "
            f"{config.total_weeks} weeks"
        )
        return schedule

    def _resolve_config(self, season_year: int, config: Optional[ScheduleConfig]) -> ScheduleConfig:
        config = config or ScheduleConfig.default_for_season(season_year)

        if config.season_year != season_year:
            raise ScheduleGenerationException(
                f"Config is for season {config.season_year}, not {season_year}",
                season_year=season_year
            )

        is_valid, errors = config.validate()
        if not is_valid:
            raise ScheduleConfigurationException(errors, season_year=season_year)
        return config

    # ==================== Component A: Divisional ====================

    def _generate_divisional_slates(self, season_year: int) -> Dict[SlateKey, List[Pairing]]:
        """Two meetings with each rival, one at home; home side of leg one alternates by year."""
        slates: Dict[SlateKey, List[Pairing]] = {}

        for index, matching in enumerate(self.DIVISION_MATCHINGS):
            first_legs: List[Pairing] = []
            return_legs: List[Pairing] = []

            for conference in Conference:
                for division in Division:
                    team_ids = self.league.get_division_teams(conference, division)
                    for first, second in matching:
                        home, away = team_ids[first], team_ids[second]
                        if (season_year + index) % 2 == 1:
                            home, away = away, home
                        first_legs.append(self._pairing(home, away, GameComponent.DIVISIONAL))
                        return_legs.append(self._pairing(away, home, GameComponent.DIVISIONAL))

            slates[(GameComponent.DIVISIONAL, index)] = first_legs
            slates[(GameComponent.DIVISIONAL, index + len(self.DIVISION_MATCHINGS))] = return_legs

        return slates

    # ==================== Component B: Intraconference rotation ====================

    def _generate_intraconf_rotation_slates(self, season_year: int) -> Dict[SlateKey, List[Pairing]]:
        slates = {(GameComponent.INTRACONF_ROTATION, s): [] for s in range(self.ROTATION_SLATES)}

        for conference in Conference:
            for division in Division:
                partner = Division.from_index(intraconf_opponent(division.index, season_year))
                if partner.index < division.index:
                    continue  # pair already produced from the partner's side
                self._add_block(
                    slates,
                    GameComponent.INTRACONF_ROTATION,
                    self.league.get_division_teams(conference, division),
                    self.league.get_division_teams(conference, partner),
                    season_year
                )

        return slates

    # ==================== Component C: Interconference rotation ====================

    def _generate_interconf_rotation_slates(self, season_year: int) -> Dict[SlateKey, List[Pairing]]:
        slates = {(GameComponent.INTERCONF_ROTATION, s): [] for s in range(self.ROTATION_SLATES)}

        for division in Division:
            other_conference, partner_index = interconf_opponent(Conference.AFC, division.index, season_year)
            self._add_block(
                slates,
                GameComponent.INTERCONF_ROTATION,
                self.league.get_division_teams(Conference.AFC, division),
                self.league.get_division_teams(other_conference, Division.from_index(partner_index)),
                season_year
            )

        return slates

    def _add_block(
        self,
        slates: Dict[SlateKey, List[Pairing]],
        component: GameComponent,
        first_division: List[int],
        second_division: List[int],
        season_year: int
    ) -> None:
        """
        Add all 16 games between two divisions.

        Slate s pairs position i with position (i + s) % 4. Home side follows a
        checkerboard on (i + j + year), giving every team two home games.
        """
        size = len(first_division)
        for s in range(self.ROTATION_SLATES):
            for i in range(size):
                j = (i + s) % size
                first, second = first_division[i], second_division[j]
                if (i + j + season_year % 2) % 2 == 0:
                    pairing = self._pairing(first, second, component)
                else:
                    pairing = self._pairing(second, first, component)
                slates[(component, s)].append(pairing)

    # ==================== Component D: Standings-based intraconference ====================

    def _generate_standings_slates(
        self,
        season_year: int,
        finish_order: FinishOrder
    ) -> Dict[SlateKey, List[Pairing]]:
        """
        Two games against same-finish teams from the two divisions not in the
        intraconference rotation.

        The rotation splits each conference into two division pairs; every
        division meets both divisions of the other pair. Home side uses the
        (pair position + year + rank) parity so each team hosts exactly once.
        """
        slates = {(GameComponent.STANDINGS_INTRACONF, s): [] for s in range(2)}
        partner_of_east = intraconf_opponent(Division.EAST.index, season_year)
        group_one = sorted([Division.EAST.index, partner_of_east])
        group_two = [index for index in range(len(Division)) if index not in group_one]

        for conference in Conference:
            for i, first_index in enumerate(group_one):
                for j, second_index in enumerate(group_two):
                    slate = (i + j) % 2
                    first_division = Division.from_index(first_index)
                    second_division = Division.from_index(second_index)

                    for rank in range(1, self.TEAMS_PER_DIVISION + 1):
                        first = finish_order.team_at(conference, first_division, rank)
                        second = finish_order.team_at(
                            conference, second_division, self.policy.opponent_rank(rank)
                        )
                        if (i + j) % 2 == (season_year + rank) % 2:
                            pairing = self._pairing(first, second, GameComponent.STANDINGS_INTRACONF)
                        else:
                            pairing = self._pairing(second, first, GameComponent.STANDINGS_INTRACONF)
                        slates[(GameComponent.STANDINGS_INTRACONF, slate)].append(pairing)

        return slates

    # ==================== Component E: Extra game ====================

    def _generate_extra_game_slates(
        self,
        season_year: int,
        finish_order: FinishOrder
    ) -> Dict[SlateKey, List[Pairing]]:
        """One cross-conference game per team; the host conference is home in all 16."""
        host = extra_game_host_conference(season_year)
        pairings: List[Pairing] = []

        for division in Division:
            other_conference, partner_index = extra_game_opponent_division(
                Conference.AFC, division.index, season_year
            )
            partner = Division.from_index(partner_index)

            for rank in range(1, self.TEAMS_PER_DIVISION + 1):
                afc_team = finish_order.team_at(Conference.AFC, division, rank)
                nfc_team = finish_order.team_at(other_conference, partner, self.policy.opponent_rank(rank))
                if host is Conference.AFC:
                    pairings.append(self._pairing(afc_team, nfc_team, GameComponent.EXTRA_GAME))
                else:
                    pairings.append(self._pairing(nfc_team, afc_team, GameComponent.EXTRA_GAME))

        return {(GameComponent.EXTRA_GAME, 0): pairings}

    # ==================== Helpers ====================

    def _pairing(self, home_team_id: int, away_team_id: int, component: GameComponent) -> Pairing:
        return Pairing(
            home_team_id=home_team_id,
            away_team_id=away_team_id,
            component=component,
            is_divisional=component is GameComponent.DIVISIONAL,
            is_conference=self.league.is_conference_matchup(home_team_id, away_team_id)
        )

    def _validate_season_schedule(self, schedule: SeasonSchedule, config: ScheduleConfig) -> None:
        """
        Sanity check on totals before handing the schedule out.

        Full invariant checking lives in ScheduleValidator.

        Raises:
            ScheduleGenerationException: If totals are wrong
        """
        if schedule.total_games != config.total_games:
            raise ScheduleGenerationException(
                f"Invalid total games: {schedule.total_games}, expected {config.total_games}",
                season_year=schedule.season_year
            )

        for team_id in self.league.team_ids:
            games_played = len(schedule.get_team_schedule(team_id))
            if games_played != config.games_per_team:
                raise ScheduleGenerationException(
                    f"Team {team_id} plays {games_played} games, expected {config.games_per_team}",
                    season_year=schedule.season_year
                )

        self.logger.debug("Schedule totals check passed")

    # ==================== Utility Methods ====================

    def get_schedule_summary(self, schedule: SeasonSchedule) -> dict:
        """
        Get summary statistics of a generated schedule.

        Returns:
            Dictionary with schedule statistics
        """
        return {
            'season_year': schedule.season_year,
            'total_games': schedule.total_games,
            'weeks': len(schedule.weeks),
            'games_per_week': {week: len(schedule.get_week_games(week)) for week in schedule.weeks},
            'games_by_component': {
                component.value: len(schedule.get_component_games(component))
                for component in GameComponent
            },
            'extra_game_host': extra_game_host_conference(schedule.season_year).value,
            'rank_policy': self.policy.name
        }

    def print_week_schedule(self, schedule: SeasonSchedule, week_number: int) -> None:
        """
        Print formatted schedule for a specific week.

        Args:
            schedule: Generated season schedule
            week_number: Week to display (1-18)
        """
        week_games = schedule.get_week_games(week_number)

        print(f"\n{'='*80}")
        print(f"WEEK {week_number} SCHEDULE".center(80))
        print(f"{'='*80}\n")

        for game in week_games:
            print(
                f"  {game.time_slot.value:<15} Team {game.away_team_id:>2} @ Team {game.home_team_id:>2}"
                f"  [{game.component.value}]"
            )

        on_bye = schedule.get_teams_on_bye(week_number)
        if on_bye:
            print(f"\n  Bye: {', '.join(f'Team {team_id}' for team_id in on_bye)}")

        print(f"\n{'='*80}")
        print(f"Total games: {len(week_games)}")
        print(f"{'='*80}\n")


def _as_league(teams: Union[LeagueStructure, Iterable[Team]]) -> LeagueStructure:
    if isinstance(teams, LeagueStructure):
        return teams
    return LeagueStructure(teams)


def generate_season_schedule(
    teams: Union[LeagueStructure, Iterable[Team]],
    previous_standings: Optional[Iterable[TeamStanding]],
    season_year: int,
    policy: RankMatchingPolicy = DEFAULT_POLICY,
    config: Optional[ScheduleConfig] = None
) -> SeasonSchedule:
    """
    Generate a season schedule for a team roster.

    Args:
        teams: League structure or its 32 teams
        previous_standings: Last season's standings, or None for neutral standings
        season_year: Season year
        policy: Rank matching policy for standings-based games
        config: Optional schedule configuration

    Returns:
        SeasonSchedule for the season
    """
    generator = SeasonScheduleGenerator(_as_league(teams), policy=policy)
    return generator.generate_season(season_year, previous_standings, config)


# Demo/testing entry point
if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format='%(levelname)s: %(message)s'
    )

    print("="*80)
    print("SEASON SCHEDULE GENERATOR DEMO".center(80))
    print("="*80)

    demo_generator = SeasonScheduleGenerator(LeagueStructure.default())
    demo_schedule = demo_generator.generate_season(2025)

    summary = demo_generator.get_schedule_summary(demo_schedule)
    print(f"\nTotal games: {summary['total_games']}")
    print(f"Extra game host: {summary['extra_game_host']}")
    for component_name, count in summary['games_by_component'].items():
        print(f"  {component_name:<22} {count}")

    demo_generator.print_week_schedule(demo_schedule, 1)
    demo_generator.print_week_schedule(demo_schedule, 18)
