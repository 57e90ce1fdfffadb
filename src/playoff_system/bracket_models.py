"""
Playoff Bracket Data Models

Immutable structures for playoff rounds, matchups and the season's playoff
schedule. PlayoffSchedule carries an explicit BracketState; each advance
produces a new schedule in the next state.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple

from shared.league_models import Conference
from .playoff_exceptions import InvalidBracketException, PlayoffStateException


class PlayoffRound(Enum):
    """Playoff rounds in order"""
    WILD_CARD = "wild_card"
    DIVISIONAL = "divisional"
    CONFERENCE = "conference"
    SUPER_BOWL = "super_bowl"

    @property
    def order(self) -> int:
        return ROUND_ORDER.index(self)

    @property
    def display_name(self) -> str:
        """Get display name for round."""
        return {
            PlayoffRound.WILD_CARD: 'Wild Card',
            PlayoffRound.DIVISIONAL: 'Divisional Round',
            PlayoffRound.CONFERENCE: 'Conference Championship',
            PlayoffRound.SUPER_BOWL: 'Super Bowl',
        }[self]

    @property
    def expected_game_count(self) -> int:
        """Get expected number of games for this round."""
        return {
            PlayoffRound.WILD_CARD: 6,      # 3 AFC + 3 NFC
            PlayoffRound.DIVISIONAL: 4,     # 2 AFC + 2 NFC
            PlayoffRound.CONFERENCE: 2,     # 1 AFC + 1 NFC
            PlayoffRound.SUPER_BOWL: 1,     # 1 game
        }[self]

    @property
    def next_round(self) -> Optional['PlayoffRound']:
        if self is PlayoffRound.SUPER_BOWL:
            return None
        return ROUND_ORDER[self.order + 1]


ROUND_ORDER = (
    PlayoffRound.WILD_CARD,
    PlayoffRound.DIVISIONAL,
    PlayoffRound.CONFERENCE,
    PlayoffRound.SUPER_BOWL,
)


class BracketState(Enum):
    """Bracket state: the round awaiting results, or complete"""
    WILD_CARD = "wild_card"
    DIVISIONAL = "divisional"
    CONFERENCE = "conference"
    SUPER_BOWL = "super_bowl"
    COMPLETE = "complete"

    @property
    def active_round(self) -> Optional[PlayoffRound]:
        """Round awaiting results; None once the bracket is complete"""
        if self is BracketState.COMPLETE:
            return None
        return PlayoffRound(self.value)

    @classmethod
    def awaiting(cls, playoff_round: Optional[PlayoffRound]) -> 'BracketState':
        if playoff_round is None:
            return cls.COMPLETE
        return cls(playoff_round.value)


@dataclass(frozen=True)
class PlayoffMatchup:
    """
    A single playoff game.

    ``conference`` is None for the Super Bowl (neutral site); home/away there
    is a record-keeping designation only.
    """
    game_id: str
    round: PlayoffRound
    conference: Optional[Conference]
    home_team_id: int
    away_team_id: int
    home_seed: int
    away_seed: int
    is_complete: bool = False
    home_score: Optional[int] = None
    away_score: Optional[int] = None
    winner_id: Optional[int] = None

    @property
    def conference_label(self) -> str:
        return self.conference.value if self.conference else "neutral"

    @property
    def teams(self) -> Tuple[int, int]:
        return (self.home_team_id, self.away_team_id)

    @property
    def loser_id(self) -> Optional[int]:
        if self.winner_id is None:
            return None
        return self.away_team_id if self.winner_id == self.home_team_id else self.home_team_id

    @property
    def winner_seed(self) -> Optional[int]:
        if self.winner_id is None:
            return None
        return self.home_seed if self.winner_id == self.home_team_id else self.away_seed

    @property
    def matchup_string(self) -> str:
        """Get matchup as string (e.g., '(7) Team 8 @ (2) Team 5')."""
        if self.conference:
            return f"({self.away_seed}) Team {self.away_team_id} @ ({self.home_seed}) Team {self.home_team_id}"
        return f"Team {self.away_team_id} vs Team {self.home_team_id}"

    def involves(self, team_id: int) -> bool:
        return team_id in self.teams

    def seed_of(self, team_id: int) -> int:
        return self.home_seed if team_id == self.home_team_id else self.away_seed

    def with_result(self, home_score: int, away_score: int) -> 'PlayoffMatchup':
        """
        Return a completed copy of this matchup.

        Raises:
            PlayoffStateException: On a tie (playoff games need a winner)
        """
        if home_score == away_score:
            raise PlayoffStateException(
                f"Playoff game {self.game_id} cannot end in a tie ({home_score}-{away_score})",
                requested_round=self.round.value
            )
        winner_id = self.home_team_id if home_score > away_score else self.away_team_id
        return replace(
            self,
            is_complete=True,
            home_score=home_score,
            away_score=away_score,
            winner_id=winner_id
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'game_id': self.game_id,
            'round': self.round.value,
            'conference': self.conference_label,
            'home_team_id': self.home_team_id,
            'away_team_id': self.away_team_id,
            'home_seed': self.home_seed,
            'away_seed': self.away_seed,
            'is_complete': self.is_complete,
            'home_score': self.home_score,
            'away_score': self.away_score,
            'winner_id': self.winner_id
        }


@dataclass(frozen=True)
class PlayoffBracket:
    """
    Collection of playoff games for one round.

    Used to check a round's structure before it enters a PlayoffSchedule.
    """
    round: PlayoffRound
    season: int
    games: Tuple[PlayoffMatchup, ...]

    def get_afc_games(self) -> List[PlayoffMatchup]:
        """Get all AFC games in this round."""
        return [g for g in self.games if g.conference is Conference.AFC]

    def get_nfc_games(self) -> List[PlayoffMatchup]:
        """Get all NFC games in this round."""
        return [g for g in self.games if g.conference is Conference.NFC]

    def get_super_bowl_game(self) -> Optional[PlayoffMatchup]:
        """Get Super Bowl game if this is the Super Bowl round."""
        if self.round is PlayoffRound.SUPER_BOWL and self.games:
            return self.games[0]
        return None

    def validate(self) -> bool:
        """
        Validate bracket structure.

        Returns:
            True if bracket is valid

        Raises:
            InvalidBracketException: If bracket is invalid
        """
        expected = self.round.expected_game_count
        if len(self.games) != expected:
            raise InvalidBracketException(
                f"Expected {expected} games for {self.round.value}, got {len(self.games)}",
                round_name=self.round.value,
                expected_game_count=expected,
                actual_game_count=len(self.games)
            )

        for game in self.games:
            if game.round is not self.round:
                raise InvalidBracketException(
                    f"Game {game.game_id} round '{game.round.value}' doesn't match "
                    f"bracket round '{self.round.value}'",
                    round_name=self.round.value
                )
            if game.home_team_id == game.away_team_id:
                raise InvalidBracketException(
                    f"Game {game.game_id} has team {game.home_team_id} on both sides",
                    round_name=self.round.value
                )

        if self.round is not PlayoffRound.SUPER_BOWL:
            if len(self.get_afc_games()) != len(self.get_nfc_games()):
                raise InvalidBracketException(
                    f"{self.round.value} must split games evenly between conferences",
                    round_name=self.round.value
                )

        team_ids = [team_id for game in self.games for team_id in game.teams]
        if len(team_ids) != len(set(team_ids)):
            raise InvalidBracketException(
                f"A team appears twice in {self.round.value}",
                round_name=self.round.value
            )

        return True


@dataclass(frozen=True)
class PlayoffSchedule:
    """
    A season's playoff bracket.

    Seed maps are seed number (1-7) -> team ID per conference. Only the
    wild card round exists at first; each advance fills exactly one round
    and moves ``state`` to the next round awaiting results.
    """
    season: int
    afc_seeds: Mapping[int, int]
    nfc_seeds: Mapping[int, int]
    state: BracketState
    wild_card_round: Tuple[PlayoffMatchup, ...]
    divisional_round: Tuple[PlayoffMatchup, ...] = ()
    conference_championships: Tuple[PlayoffMatchup, ...] = ()
    super_bowl: Optional[PlayoffMatchup] = None
    _seed_lookup: Dict[int, Tuple[Conference, int]] = field(default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, 'afc_seeds', dict(self.afc_seeds))
        object.__setattr__(self, 'nfc_seeds', dict(self.nfc_seeds))
        lookup = {team_id: (Conference.AFC, seed) for seed, team_id in self.afc_seeds.items()}
        lookup.update({team_id: (Conference.NFC, seed) for seed, team_id in self.nfc_seeds.items()})
        object.__setattr__(self, '_seed_lookup', lookup)

    # ==================== Rounds ====================

    def get_round(self, playoff_round: PlayoffRound) -> Tuple[PlayoffMatchup, ...]:
        """Matchups of a round (empty if not generated yet)"""
        if playoff_round is PlayoffRound.WILD_CARD:
            return self.wild_card_round
        if playoff_round is PlayoffRound.DIVISIONAL:
            return self.divisional_round
        if playoff_round is PlayoffRound.CONFERENCE:
            return self.conference_championships
        return (self.super_bowl,) if self.super_bowl else ()

    @property
    def all_matchups(self) -> List[PlayoffMatchup]:
        matchups: List[PlayoffMatchup] = []
        for playoff_round in ROUND_ORDER:
            matchups.extend(self.get_round(playoff_round))
        return matchups

    @property
    def current_round(self) -> Optional[PlayoffRound]:
        return self.state.active_round

    @property
    def is_complete(self) -> bool:
        return self.state is BracketState.COMPLETE

    def is_round_complete(self, playoff_round: PlayoffRound) -> bool:
        games = self.get_round(playoff_round)
        return len(games) == playoff_round.expected_game_count and all(g.is_complete for g in games)

    # ==================== Champions ====================

    def _conference_champion(self, conference: Conference) -> Optional[int]:
        for game in self.conference_championships:
            if game.conference is conference and game.is_complete:
                return game.winner_id
        return None

    @property
    def afc_champion(self) -> Optional[int]:
        return self._conference_champion(Conference.AFC)

    @property
    def nfc_champion(self) -> Optional[int]:
        return self._conference_champion(Conference.NFC)

    @property
    def super_bowl_champion(self) -> Optional[int]:
        if self.super_bowl and self.super_bowl.is_complete:
            return self.super_bowl.winner_id
        return None

    @property
    def super_bowl_runner_up(self) -> Optional[int]:
        if self.super_bowl and self.super_bowl.is_complete:
            return self.super_bowl.loser_id
        return None

    # ==================== Seeds ====================

    def seeds_for(self, conference: Conference) -> Dict[int, int]:
        return dict(self.afc_seeds if conference is Conference.AFC else self.nfc_seeds)

    def seed_of(self, team_id: int) -> Optional[int]:
        entry = self._seed_lookup.get(team_id)
        return entry[1] if entry else None

    def conference_of(self, team_id: int) -> Optional[Conference]:
        entry = self._seed_lookup.get(team_id)
        return entry[0] if entry else None

    @property
    def playoff_team_ids(self) -> List[int]:
        return sorted(self._seed_lookup)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'season': self.season,
            'state': self.state.value,
            'afc_seeds': dict(self.afc_seeds),
            'nfc_seeds': dict(self.nfc_seeds),
            'rounds': {
                playoff_round.value: [game.to_dict() for game in self.get_round(playoff_round)]
                for playoff_round in ROUND_ORDER
            },
            'afc_champion': self.afc_champion,
            'nfc_champion': self.nfc_champion,
            'super_bowl_champion': self.super_bowl_champion
        }
