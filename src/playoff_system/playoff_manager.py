"""
Playoff Manager

Pure logic for NFL playoff bracket generation and progression.
Implements NFL playoff rules including re-seeding after each round.
"""

import logging
from dataclasses import replace
from typing import Dict, Iterable, List, Optional, Tuple, Union

from scheduling.rotation import super_bowl_home_conference
from shared.league_models import Conference, LeagueStructure, Team
from shared.team_standing import TeamStanding
from .bracket_models import (
    BracketState,
    PlayoffBracket,
    PlayoffMatchup,
    PlayoffRound,
    PlayoffSchedule,
)
from .playoff_exceptions import InvalidRoundException, InvalidSeedingException, PlayoffStateException
from .playoff_seeder import PlayoffSeeder
from .seeding_models import PlayoffSeeding


# (seed, team_id) pairs carried between rounds
SeededTeam = Tuple[int, int]


class PlayoffManager:
    """
    Manages NFL playoff bracket generation and progression.

    This is pure business logic - no side effects, no persistence.
    Takes standings/results as input, returns a new PlayoffSchedule as output.

    Implements NFL playoff rules:
    - Wild Card: (2)v(7), (3)v(6), (4)v(5), #1 gets bye
    - Divisional: #1 plays LOWEST remaining seed (re-seeding)
    - Conference: Winners of divisional games, higher seed hosts
    - Super Bowl: AFC Champion vs NFC Champion, designated home side
      alternates by season
    """

    WILD_CARD_MATCHUPS = ((2, 7), (3, 6), (4, 5))

    def __init__(self, league: Optional[LeagueStructure] = None, logger: Optional[logging.Logger] = None):
        """
        Args:
            league: League whose conferences and divisions drive seeding.
                Only bracket generation needs it; advancing a round works
                from the schedule alone.
            logger: Optional logger
        """
        self.league = league
        self.logger = logger or logging.getLogger(__name__)
        self.seeder = PlayoffSeeder(league, logger=self.logger) if league is not None else None

    # ==================== Bracket Generation ====================

    def generate_playoff_bracket(self, standings: Iterable[TeamStanding], season: int) -> PlayoffSchedule:
        """
        Seed the field and build the wild card round.

        Args:
            standings: Final regular-season standings for all 32 teams
            season: Season year

        Returns:
            PlayoffSchedule in WILD_CARD state with 6 games

        Raises:
            InvalidSeedingException: If the manager was built without a league
        """
        if self.seeder is None:
            raise InvalidSeedingException(
                "Playoff seeding needs the league structure; build PlayoffManager with a league"
            )
        seeding = self.seeder.calculate_seeding(standings, season)
        return self.generate_wild_card_bracket(seeding)

    def generate_wild_card_bracket(self, seeding: PlayoffSeeding) -> PlayoffSchedule:
        """
        Generate wild card round from playoff seeding.

        Wild Card matchups:
        - AFC: (2)v(7), (3)v(6), (4)v(5)
        - NFC: (2)v(7), (3)v(6), (4)v(5)
        - #1 seeds get bye week (not in bracket)
        """
        season = seeding.season
        games: List[PlayoffMatchup] = []
        for conference in (Conference.AFC, Conference.NFC):
            seeds = seeding.for_conference(conference).seed_map()
            for home_seed, away_seed in self.WILD_CARD_MATCHUPS:
                games.append(self._create_matchup(
                    season,
                    PlayoffRound.WILD_CARD,
                    conference,
                    len(games) + 1,
                    (home_seed, seeds[home_seed]),
                    (away_seed, seeds[away_seed])
                ))

        PlayoffBracket(PlayoffRound.WILD_CARD, season, tuple(games)).validate()

        self.logger.info(f"Generated {season} wild card round ({len(games)} games)")
        return PlayoffSchedule(
            season=season,
            afc_seeds=seeding.afc.seed_map(),
            nfc_seeds=seeding.nfc.seed_map(),
            state=BracketState.WILD_CARD,
            wild_card_round=tuple(games)
        )

    # ==================== Round Advancement ====================

    def advance_playoff_round(
        self,
        schedule: PlayoffSchedule,
        results: Iterable[PlayoffMatchup]
    ) -> PlayoffSchedule:
        """
        Record one round's results and build the next round.

        Feeding an already recorded round again with the same winners returns
        the schedule unchanged.

        Args:
            schedule: Current playoff schedule
            results: Completed matchups of the round awaiting results

        Returns:
            New PlayoffSchedule advanced by one state

        Raises:
            InvalidRoundException: Empty results, or results from several rounds
            PlayoffStateException: Out-of-order round, incomplete or
                inconsistent results, or a conflicting re-feed
        """
        results = list(results)
        playoff_round = self._results_round(results)
        active_round = schedule.current_round

        if active_round is None or playoff_round.order < active_round.order:
            self._check_recorded_round(schedule, playoff_round, results)
            self.logger.debug(f"{playoff_round.display_name} already recorded; schedule unchanged")
            return schedule

        if playoff_round is not active_round:
            raise PlayoffStateException(
                f"Cannot record {playoff_round.display_name} results while "
                f"{active_round.display_name} is awaiting results",
                current_round=active_round.value,
                requested_round=playoff_round.value
            )

        completed = self._merge_results(schedule.get_round(playoff_round), results)
        next_round = playoff_round.next_round
        updated = self._store_round(schedule, playoff_round, completed)

        if next_round is PlayoffRound.DIVISIONAL:
            updated = replace(updated, divisional_round=self._build_divisional_round(updated))
        elif next_round is PlayoffRound.CONFERENCE:
            updated = replace(updated, conference_championships=self._build_conference_round(updated))
        elif next_round is PlayoffRound.SUPER_BOWL:
            updated = replace(updated, super_bowl=self._build_super_bowl(updated))

        if next_round is not None:
            PlayoffBracket(next_round, schedule.season, updated.get_round(next_round)).validate()

        updated = replace(updated, state=BracketState.awaiting(next_round))
        self.logger.info(
            f"{schedule.season} {playoff_round.display_name} recorded; "
            f"state is now {updated.state.value}"
        )
        return updated

    def _results_round(self, results: List[PlayoffMatchup]) -> PlayoffRound:
        if not results:
            raise InvalidRoundException(
                round_name="",
                message="No playoff results supplied"
            )
        rounds = {result.round for result in results}
        if len(rounds) > 1:
            names = sorted(r.value for r in rounds)
            raise InvalidRoundException(
                round_name=",".join(names),
                message=f"Results mix matchups from several rounds: {names}"
            )
        return results[0].round

    def _check_recorded_round(
        self,
        schedule: PlayoffSchedule,
        playoff_round: PlayoffRound,
        results: List[PlayoffMatchup]
    ) -> None:
        recorded = {game.game_id: game for game in schedule.get_round(playoff_round)}
        for result in results:
            game = recorded.get(result.game_id)
            if game is None or game.winner_id != result.winner_id:
                raise PlayoffStateException(
                    f"{playoff_round.display_name} is already recorded with different results "
                    f"(game {result.game_id})",
                    current_round=schedule.state.value,
                    requested_round=playoff_round.value
                )

    def _merge_results(
        self,
        games: Tuple[PlayoffMatchup, ...],
        results: List[PlayoffMatchup]
    ) -> Tuple[PlayoffMatchup, ...]:
        by_id = {game.game_id: game for game in games}
        for result in results:
            game = by_id.get(result.game_id)
            if game is None:
                raise PlayoffStateException(
                    f"Result for unknown game {result.game_id}",
                    requested_round=result.round.value
                )
            if result.teams != game.teams:
                raise PlayoffStateException(
                    f"Result for {result.game_id} has teams {result.teams}, expected {game.teams}",
                    requested_round=result.round.value
                )
            if not result.is_complete or result.home_score is None or result.away_score is None:
                raise PlayoffStateException(
                    f"Result for {result.game_id} has no final score",
                    requested_round=result.round.value
                )
            # Seeds and teams stay as generated; only the score is taken
            recorded = game.with_result(result.home_score, result.away_score)
            if recorded.winner_id != result.winner_id:
                raise PlayoffStateException(
                    f"Result for {result.game_id} names winner {result.winner_id} but the score "
                    f"{result.home_score}-{result.away_score} makes {recorded.winner_id} the winner",
                    requested_round=result.round.value
                )
            by_id[result.game_id] = recorded

        incomplete = [game.game_id for game in by_id.values() if not game.is_complete]
        if incomplete:
            raise PlayoffStateException(
                f"Round is not complete; missing results for {incomplete}",
                requested_round=games[0].round.value if games else None
            )
        return tuple(by_id[game.game_id] for game in games)

    def _store_round(
        self,
        schedule: PlayoffSchedule,
        playoff_round: PlayoffRound,
        games: Tuple[PlayoffMatchup, ...]
    ) -> PlayoffSchedule:
        if playoff_round is PlayoffRound.WILD_CARD:
            return replace(schedule, wild_card_round=games)
        if playoff_round is PlayoffRound.DIVISIONAL:
            return replace(schedule, divisional_round=games)
        if playoff_round is PlayoffRound.CONFERENCE:
            return replace(schedule, conference_championships=games)
        return replace(schedule, super_bowl=games[0])

    # ==================== Next-Round Builders ====================

    def _build_divisional_round(self, schedule: PlayoffSchedule) -> Tuple[PlayoffMatchup, ...]:
        """
        Create divisional matchups with NFL re-seeding.

        Rule: #1 seed plays LOWEST remaining seed, other two play each other.
        """
        games: List[PlayoffMatchup] = []
        for conference in (Conference.AFC, Conference.NFC):
            winners = self._extract_winners(schedule.wild_card_round, conference)
            if len(winners) != 3:
                raise PlayoffStateException(
                    f"Expected 3 {conference.value} wild card winners, got {len(winners)}",
                    current_round=PlayoffRound.WILD_CARD.value,
                    requested_round=PlayoffRound.DIVISIONAL.value
                )

            one_seed = (1, schedule.seeds_for(conference)[1])
            highest, middle, lowest = sorted(winners)

            games.append(self._create_matchup(
                schedule.season, PlayoffRound.DIVISIONAL, conference, len(games) + 1, one_seed, lowest
            ))
            games.append(self._create_matchup(
                schedule.season, PlayoffRound.DIVISIONAL, conference, len(games) + 1, highest, middle
            ))
        return tuple(games)

    def _build_conference_round(self, schedule: PlayoffSchedule) -> Tuple[PlayoffMatchup, ...]:
        games: List[PlayoffMatchup] = []
        for conference in (Conference.AFC, Conference.NFC):
            winners = self._extract_winners(schedule.divisional_round, conference)
            if len(winners) != 2:
                raise PlayoffStateException(
                    f"Expected 2 {conference.value} divisional winners, got {len(winners)}",
                    current_round=PlayoffRound.DIVISIONAL.value,
                    requested_round=PlayoffRound.CONFERENCE.value
                )
            # Higher seed hosts
            home, away = sorted(winners)
            games.append(self._create_matchup(
                schedule.season, PlayoffRound.CONFERENCE, conference, len(games) + 1, home, away
            ))
        return tuple(games)

    def _build_super_bowl(self, schedule: PlayoffSchedule) -> PlayoffMatchup:
        champions: Dict[Conference, SeededTeam] = {}
        for game in schedule.conference_championships:
            champions[game.conference] = (game.winner_seed, game.winner_id)

        home_conference = super_bowl_home_conference(schedule.season)
        home = champions[home_conference]
        away = champions[home_conference.opponent]
        return self._create_matchup(schedule.season, PlayoffRound.SUPER_BOWL, None, 1, home, away)

    def _extract_winners(self, games: Iterable[PlayoffMatchup], conference: Conference) -> List[SeededTeam]:
        """(seed, team_id) of each completed game's winner in a conference"""
        return [
            (game.winner_seed, game.winner_id)
            for game in games
            if game.conference is conference and game.is_complete
        ]

    def _create_matchup(
        self,
        season: int,
        playoff_round: PlayoffRound,
        conference: Optional[Conference],
        game_number: int,
        home: SeededTeam,
        away: SeededTeam
    ) -> PlayoffMatchup:
        return PlayoffMatchup(
            game_id=f"playoff_{season}_{playoff_round.value}_{game_number}",
            round=playoff_round,
            conference=conference,
            home_team_id=home[1],
            away_team_id=away[1],
            home_seed=home[0],
            away_seed=away[0]
        )

    # ==================== Queries ====================

    def get_current_round(self, schedule: PlayoffSchedule) -> Optional[PlayoffRound]:
        """Round awaiting results, or None once the Super Bowl is recorded"""
        return schedule.current_round

    def are_playoffs_complete(self, schedule: PlayoffSchedule) -> bool:
        return schedule.is_complete

    def get_team_playoff_seed(self, schedule: PlayoffSchedule, team_id: int) -> Optional[int]:
        return schedule.seed_of(team_id)

    def get_team_elimination_round(self, schedule: PlayoffSchedule, team_id: int) -> Optional[PlayoffRound]:
        """
        Round in which a team lost.

        Returns None for non-playoff teams, teams still alive and the champion.
        """
        for game in schedule.all_matchups:
            if game.is_complete and game.loser_id == team_id:
                return game.round
        return None

    def get_teams_alive(self, schedule: PlayoffSchedule) -> List[int]:
        """Seeded teams without a recorded playoff loss"""
        eliminated = {game.loser_id for game in schedule.all_matchups if game.is_complete}
        return [team_id for team_id in schedule.playoff_team_ids if team_id not in eliminated]


# ==================== Module-level API ====================

def generate_playoff_bracket(
    standings: Iterable[TeamStanding],
    season: int,
    teams: Union[LeagueStructure, Iterable[Team]]
) -> PlayoffSchedule:
    """Seed the field and return a PlayoffSchedule with only the wild card round"""
    league = teams if isinstance(teams, LeagueStructure) else LeagueStructure(teams)
    return PlayoffManager(league).generate_playoff_bracket(standings, season)


def advance_playoff_round(schedule: PlayoffSchedule, results: Iterable[PlayoffMatchup]) -> PlayoffSchedule:
    """Record a completed round and build the next one"""
    return PlayoffManager().advance_playoff_round(schedule, results)
