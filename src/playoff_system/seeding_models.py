"""
Playoff Seeding Data Models

Data structures for representing playoff seeding calculations.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from shared.league_models import Conference


@dataclass(frozen=True)
class PlayoffSeed:
    """
    Represents a single playoff seed.

    Contains team record and seeding context.
    """
    seed: int                      # 1-7
    team_id: int
    conference: Conference
    division_name: str             # e.g., "AFC North"
    division_winner: bool          # True for seeds 1-4
    conference_rank: int           # Final conference rank (1-16)
    wins: int
    losses: int
    ties: int
    win_percentage: float
    point_differential: int
    division_record: str           # e.g., "5-1"
    conference_record: str         # e.g., "9-3"

    @property
    def record_string(self) -> str:
        """Get record as string (e.g., '13-4' or '10-6-1')."""
        if self.ties > 0:
            return f"{self.wins}-{self.losses}-{self.ties}"
        return f"{self.wins}-{self.losses}"

    @property
    def seed_label(self) -> str:
        """Get seed label (e.g., '#1 Seed (Bye)' or '#6 Seed (Wild Card)')."""
        if self.seed == 1:
            return "#1 Seed (Bye)"
        elif self.seed <= 4:
            return f"#{self.seed} Seed (Division Winner)"
        else:
            return f"#{self.seed} Seed (Wild Card)"


@dataclass(frozen=True)
class ConferenceSeeding:
    """Seeding for a single conference: 7 seeds ordered 1-7."""
    conference: Conference
    seeds: Tuple[PlayoffSeed, ...]

    @property
    def division_winners(self) -> List[PlayoffSeed]:
        return [seed for seed in self.seeds if seed.division_winner]

    @property
    def wildcards(self) -> List[PlayoffSeed]:
        return [seed for seed in self.seeds if not seed.division_winner]

    def get_seed_by_number(self, seed_number: int) -> Optional[PlayoffSeed]:
        """Get seed by seed number (1-7)."""
        for seed in self.seeds:
            if seed.seed == seed_number:
                return seed
        return None

    def get_seed_by_team(self, team_id: int) -> Optional[PlayoffSeed]:
        """Get seed for a specific team."""
        for seed in self.seeds:
            if seed.team_id == team_id:
                return seed
        return None

    def seed_map(self) -> Dict[int, int]:
        """Seed number -> team ID"""
        return {seed.seed: seed.team_id for seed in self.seeds}


@dataclass(frozen=True)
class PlayoffSeeding:
    """
    Complete playoff seeding for both conferences.

    This is the main output of the PlayoffSeeder calculation.
    """
    season: int
    afc: ConferenceSeeding
    nfc: ConferenceSeeding

    def for_conference(self, conference: Conference) -> ConferenceSeeding:
        return self.afc if conference is Conference.AFC else self.nfc

    def get_seed(self, team_id: int) -> Optional[PlayoffSeed]:
        """
        Get playoff seed for a specific team (searches both conferences).

        Returns:
            PlayoffSeed if the team made the field, None otherwise
        """
        return self.afc.get_seed_by_team(team_id) or self.nfc.get_seed_by_team(team_id)

    def is_in_playoffs(self, team_id: int) -> bool:
        return self.get_seed(team_id) is not None

    def get_matchups(self) -> Dict[str, List[tuple]]:
        """
        Get wild card round matchups as (home team, away team).

        Returns:
            {'AFC': [(2, 7), (3, 6), (4, 5)], 'NFC': [...]} by team ID
        """
        matchups = {}
        for seeding in (self.afc, self.nfc):
            seeds = seeding.seed_map()
            matchups[seeding.conference.value] = [
                (seeds[2], seeds[7]),
                (seeds[3], seeds[6]),
                (seeds[4], seeds[5]),
            ]
        return matchups

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        def conference_dict(seeding: ConferenceSeeding) -> Dict[str, Any]:
            return {
                'seeds': [
                    {
                        'seed': s.seed,
                        'team_id': s.team_id,
                        'division_name': s.division_name,
                        'record': s.record_string,
                        'win_percentage': s.win_percentage,
                        'division_winner': s.division_winner,
                        'conference_rank': s.conference_rank,
                        'point_differential': s.point_differential
                    }
                    for s in seeding.seeds
                ]
            }

        return {
            'season': self.season,
            'afc': conference_dict(self.afc),
            'nfc': conference_dict(self.nfc)
        }
