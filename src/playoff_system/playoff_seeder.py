"""
Playoff Seeder

Calculates playoff seeding from final standings.
Pure calculation logic - no side effects.

Seeds 1-4 are the division leaders (division rank 1) ordered by conference
rank; seeds 5-7 are the best remaining teams by conference rank.
"""

import logging
from typing import Dict, Iterable, List, Optional

from shared.league_models import Conference, LeagueStructure
from shared.team_standing import (
    TeamStanding,
    check_conference_ranks,
    check_division_ranks,
    index_standings,
)
from .playoff_exceptions import InvalidSeedingException
from .seeding_models import ConferenceSeeding, PlayoffSeed, PlayoffSeeding


class PlayoffSeeder:
    """
    Calculates playoff seeding from final standings.

    Usage:
        seeder = PlayoffSeeder(league)
        seeding = seeder.calculate_seeding(final_standings, season=2025)
    """

    SEEDS_PER_CONFERENCE = 7
    DIVISION_WINNER_SEEDS = 4

    def __init__(self, league: LeagueStructure, logger: Optional[logging.Logger] = None):
        """
        Initialize playoff seeder.

        Args:
            league: League structure used to group teams by conference/division
            logger: Optional logger
        """
        self.league = league
        self.logger = logger or logging.getLogger(__name__)

    def calculate_seeding(self, standings: Iterable[TeamStanding], season: int) -> PlayoffSeeding:
        """
        Calculate playoff seeding from standings.

        Args:
            standings: Final standings for all league teams
            season: Season year (e.g., 2025)

        Returns:
            PlayoffSeeding with 7 seeds per conference

        Raises:
            InvalidStandingsException: If standings are incomplete or ranks inconsistent
            InvalidSeedingException: If a conference cannot produce 7 distinct seeds
        """
        standings_data = index_standings(standings, self.league)
        check_division_ranks(standings_data, self.league)
        check_conference_ranks(standings_data, self.league)

        seeding = PlayoffSeeding(
            season=season,
            afc=self._calculate_conference_seeding(standings_data, Conference.AFC),
            nfc=self._calculate_conference_seeding(standings_data, Conference.NFC)
        )

        self.logger.info(
            f"Seeding calculated for {season}: "
            f"AFC #1 team {seeding.afc.seeds[0].team_id}, NFC #1 team {seeding.nfc.seeds[0].team_id}"
        )
        return seeding

    def _calculate_conference_seeding(
        self,
        standings_data: Dict[int, TeamStanding],
        conference: Conference
    ) -> ConferenceSeeding:
        """
        Calculate seeding for a single conference.

        Args:
            standings_data: Dict of team standings
            conference: Conference to seed

        Returns:
            ConferenceSeeding with 7 playoff seeds
        """
        conference_teams = [
            standings_data[team_id] for team_id in self.league.get_conference_teams(conference)
        ]

        # Step 1: Division leaders (seeds 1-4), best conference rank first
        division_winners = sorted(
            (team for team in conference_teams if team.division_rank == 1),
            key=lambda t: t.conference_rank
        )
        if len(division_winners) != self.DIVISION_WINNER_SEEDS:
            raise InvalidSeedingException(
                f"{conference.value} has {len(division_winners)} division leaders, "
                f"expected {self.DIVISION_WINNER_SEEDS}",
                conference=conference.value
            )

        # Step 2: Wildcards (seeds 5-7) by conference rank
        leader_ids = {team.team_id for team in division_winners}
        wildcard_count = self.SEEDS_PER_CONFERENCE - self.DIVISION_WINNER_SEEDS
        wildcard_teams = sorted(
            (team for team in conference_teams if team.team_id not in leader_ids),
            key=lambda t: t.conference_rank
        )[:wildcard_count]

        # Step 3: Create playoff seeds
        seeds = []
        for seed_number, team in enumerate(division_winners + wildcard_teams, start=1):
            seeds.append(self._create_playoff_seed(
                team=team,
                seed=seed_number,
                conference=conference,
                is_division_winner=(seed_number <= self.DIVISION_WINNER_SEEDS)
            ))

        self._validate_conference_seeds(seeds, conference)

        self.logger.debug(
            f"{conference.value} seeds: " + ", ".join(f"#{s.seed} team {s.team_id}" for s in seeds)
        )
        return ConferenceSeeding(conference=conference, seeds=tuple(seeds))

    def _validate_conference_seeds(self, seeds: List[PlayoffSeed], conference: Conference) -> None:
        team_ids = [seed.team_id for seed in seeds]
        if len(seeds) != self.SEEDS_PER_CONFERENCE or len(set(team_ids)) != len(team_ids):
            raise InvalidSeedingException(
                f"{conference.value} seeding must contain {self.SEEDS_PER_CONFERENCE} distinct teams, "
                f"got {team_ids}",
                conference=conference.value
            )

    def _create_playoff_seed(
        self,
        team: TeamStanding,
        seed: int,
        conference: Conference,
        is_division_winner: bool
    ) -> PlayoffSeed:
        """
        Create a PlayoffSeed from team standing.

        Args:
            team: Team standing data
            seed: Seed number (1-7)
            conference: Team's conference
            is_division_winner: True for seeds 1-4

        Returns:
            PlayoffSeed object
        """
        division = self.league.division_of(team.team_id)

        return PlayoffSeed(
            seed=seed,
            team_id=team.team_id,
            conference=conference,
            division_name=f"{conference.value} {division.display_name}",
            division_winner=is_division_winner,
            conference_rank=team.conference_rank,
            wins=team.wins,
            losses=team.losses,
            ties=team.ties,
            win_percentage=team.win_percentage,
            point_differential=team.point_differential,
            division_record=team.division_record,
            conference_record=team.conference_record
        )
