"""
Draft Order Service

Calculates NFL draft order after the Super Bowl based on regular season records,
playoff results, and the reversed playoff tiebreak chain.

NFL Draft Order Rules:
1. Picks 1-18: Non-playoff teams (worst → best)
2. Picks 19-24: Wild Card Round losers (worst → best)
3. Picks 25-28: Divisional Round losers (worst → best)
4. Picks 29-30: Conference Championship losers (worst → best)
5. Pick 31: Super Bowl loser
6. Pick 32: Super Bowl winner
7. Rounds 2-7: Same order as Round 1 (224 base picks total, compensatory picks not yet implemented)

"Worst → best" is the playoff tiebreak chain applied in reverse: lower win
percentage, then easier strength of schedule, lower point differential, lower
conference and division win percentage, and finally team ID.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

from playoff_system.bracket_models import PlayoffRound, PlayoffSchedule
from shared.league_models import TEAM_COUNT
from shared.league_exceptions import InvalidStandingsException
from shared.team_standing import TeamStanding
from shared.tiebreakers import draft_tiebreak_key

from offseason.draft_order_exceptions import DraftOrderException


# Pick reasons, in pick-range order
NON_PLAYOFF = "non_playoff"
WILD_CARD_LOSS = "wild_card_loss"
DIVISIONAL_LOSS = "divisional_loss"
CONFERENCE_LOSS = "conference_loss"
SUPER_BOWL_LOSS = "super_bowl_loss"
SUPER_BOWL_WIN = "super_bowl_win"
PRELIMINARY = "preliminary"

ROUND_LOSS_REASONS = {
    PlayoffRound.WILD_CARD: WILD_CARD_LOSS,
    PlayoffRound.DIVISIONAL: DIVISIONAL_LOSS,
    PlayoffRound.CONFERENCE: CONFERENCE_LOSS,
    PlayoffRound.SUPER_BOWL: SUPER_BOWL_LOSS,
}


@dataclass(frozen=True)
class DraftPickOrder:
    """Single draft pick in order"""
    round_number: int
    pick_in_round: int
    overall_pick: int
    team_id: int
    original_team_id: int  # Same as team_id initially (for trades)
    reason: str  # e.g., "non_playoff", "wild_card_loss", "super_bowl_win"
    team_record: str  # e.g., "4-13"
    strength_of_schedule: float

    def __str__(self) -> str:
        """String representation of draft pick"""
        return (f"Round {self.round_number}, Pick {self.pick_in_round} "
                f"(#{self.overall_pick} overall): Team {self.team_id} - "
                f"{self.reason} ({self.team_record}, SOS: {self.strength_of_schedule:.3f})")


@dataclass(frozen=True)
class DraftOrder:
    """Round 1 order: 32 picks, each team exactly once"""
    season_year: int
    picks: Tuple[DraftPickOrder, ...]

    @property
    def team_ids(self) -> List[int]:
        return [pick.team_id for pick in self.picks]

    def draft_position(self, team_id: int) -> int:
        """
        1-based round 1 pick of a team.

        Raises:
            ValueError: If the team is not in the order
        """
        for pick in self.picks:
            if pick.team_id == team_id:
                return pick.overall_pick
        raise ValueError(f"Team {team_id} not found in {self.season_year} draft order")

    def get_pick(self, position: int) -> DraftPickOrder:
        return self.picks[position - 1]

    def __iter__(self) -> Iterator[DraftPickOrder]:
        return iter(self.picks)

    def __len__(self) -> int:
        return len(self.picks)


class DraftOrderService:
    """
    Service for calculating NFL draft order based on regular season records
    and playoff results.
    """

    # NFL draft has 7 rounds with 32 picks each
    NUM_ROUNDS = 7
    PICKS_PER_ROUND = 32
    TOTAL_PICKS = NUM_ROUNDS * PICKS_PER_ROUND  # 224 (base picks only, compensatory picks not yet implemented)

    # Playoff team counts
    NON_PLAYOFF_TEAMS = 18
    WILD_CARD_LOSERS = 6
    DIVISIONAL_LOSERS = 4
    CONFERENCE_LOSERS = 2
    SUPER_BOWL_LOSER = 1
    SUPER_BOWL_WINNER = 1

    GROUP_SIZES = (
        (NON_PLAYOFF, NON_PLAYOFF_TEAMS),
        (WILD_CARD_LOSS, WILD_CARD_LOSERS),
        (DIVISIONAL_LOSS, DIVISIONAL_LOSERS),
        (CONFERENCE_LOSS, CONFERENCE_LOSERS),
        (SUPER_BOWL_LOSS, SUPER_BOWL_LOSER),
        (SUPER_BOWL_WIN, SUPER_BOWL_WINNER),
    )

    def __init__(self, season_year: int, logger: Optional[logging.Logger] = None):
        """
        Initialize draft order service.

        Args:
            season_year: Season whose results set the order (e.g., 2025 for the 2026 draft)
            logger: Optional logger
        """
        self.season_year = season_year
        self.logger = logger or logging.getLogger(__name__)

        self.logger.info(f"Initialized DraftOrderService for {season_year} season")

    # ==================== Order Calculation ====================

    def calculate_draft_order(
        self,
        standings: Iterable[TeamStanding],
        playoff_schedule: PlayoffSchedule
    ) -> DraftOrder:
        """
        Calculate round 1 draft order.

        Args:
            standings: All 32 teams' final regular season standings
            playoff_schedule: Playoff schedule in COMPLETE state

        Returns:
            DraftOrder with 32 picks

        Raises:
            DraftOrderException: Bracket not complete, playoff teams without a
                standing, or group sizes wrong
            InvalidStandingsException: Duplicate teams, or not exactly 32 teams
        """
        self.logger.info("Calculating draft order...")

        if not playoff_schedule.is_complete:
            raise DraftOrderException(
                f"Draft order requires a complete playoff bracket; "
                f"bracket is awaiting {playoff_schedule.state.value}",
                season_year=self.season_year,
                bracket_state=playoff_schedule.state.value
            )

        standings_data = self._index_standings(standings)
        self._check_playoff_teams(standings_data, playoff_schedule)
        groups = self._partition_teams(standings_data, playoff_schedule)
        self._validate_groups(groups)

        draft_order = self._calculate_round_1_order(standings_data, groups)

        self.logger.info(
            f"Draft order calculation complete: #1 team {draft_order.team_ids[0]}, "
            f"#32 team {draft_order.team_ids[-1]}"
        )
        return draft_order

    def calculate_preliminary_draft_order(self, standings: Iterable[TeamStanding]) -> DraftOrder:
        """
        Order all 32 teams worst → best, ignoring playoff results.

        Usable mid-season as a projection.
        """
        standings_data = self._index_standings(standings)
        draft_order = self._build_order(standings_data, [(PRELIMINARY, list(standings_data))])
        self.logger.debug(f"Preliminary draft order: {draft_order.team_ids}")
        return draft_order

    def _index_standings(self, standings: Iterable[TeamStanding]) -> Dict[int, TeamStanding]:
        """
        Key standings by team ID.

        The team set comes from the standings alone; any 32 distinct IDs work.

        Raises:
            InvalidStandingsException: On a duplicate team or a count other than 32
        """
        standings_data: Dict[int, TeamStanding] = {}
        for standing in standings:
            if standing.team_id in standings_data:
                raise InvalidStandingsException(
                    f"Duplicate standing for team {standing.team_id}",
                    team_id=standing.team_id
                )
            standings_data[standing.team_id] = standing

        if len(standings_data) != TEAM_COUNT:
            raise InvalidStandingsException(
                f"Draft order needs standings for {TEAM_COUNT} teams, got {len(standings_data)}",
                context_dict={"team_count": len(standings_data)}
            )
        return standings_data

    def _check_playoff_teams(
        self,
        standings_data: Mapping[int, TeamStanding],
        playoff_schedule: PlayoffSchedule
    ) -> None:
        missing = [team_id for team_id in playoff_schedule.playoff_team_ids if team_id not in standings_data]
        if missing:
            raise DraftOrderException(
                f"Playoff teams {missing} have no regular season standing",
                season_year=self.season_year,
                bracket_state=playoff_schedule.state.value,
                context_dict={"team_ids": missing}
            )

    def _partition_teams(
        self,
        standings_data: Mapping[int, TeamStanding],
        playoff_schedule: PlayoffSchedule
    ) -> Dict[str, List[int]]:
        """Split all teams by how their season ended"""
        groups: Dict[str, List[int]] = {reason: [] for reason, _ in self.GROUP_SIZES}
        eliminated = set()

        for game in playoff_schedule.all_matchups:
            if game.is_complete:
                groups[ROUND_LOSS_REASONS[game.round]].append(game.loser_id)
                eliminated.add(game.loser_id)

        champion = playoff_schedule.super_bowl_champion
        groups[SUPER_BOWL_WIN].append(champion)
        playoff_teams = eliminated | {champion}

        groups[NON_PLAYOFF] = [team_id for team_id in standings_data if team_id not in playoff_teams]
        return groups

    def _validate_groups(self, groups: Mapping[str, List[int]]) -> None:
        """
        Validate elimination group sizes.

        Raises:
            DraftOrderException: If a group has the wrong number of teams
        """
        for reason, expected in self.GROUP_SIZES:
            actual = len(groups[reason])
            if actual != expected:
                raise DraftOrderException(
                    f"Expected {expected} teams for '{reason}', got {actual}",
                    season_year=self.season_year,
                    context_dict={"group": reason, "team_ids": list(groups[reason])}
                )

        self.logger.debug("Group validation passed")

    def _calculate_round_1_order(
        self,
        standings_data: Mapping[int, TeamStanding],
        groups: Mapping[str, List[int]]
    ) -> DraftOrder:
        ordered_groups = [(reason, groups[reason]) for reason, _ in self.GROUP_SIZES]
        draft_order = self._build_order(standings_data, ordered_groups)
        self.logger.info(f"Round 1 order calculated: {len(draft_order)} picks")
        return draft_order

    def _build_order(
        self,
        standings_data: Mapping[int, TeamStanding],
        ordered_groups: List[Tuple[str, List[int]]]
    ) -> DraftOrder:
        """Concatenate groups, each sorted worst → best"""
        picks: List[DraftPickOrder] = []
        for reason, team_ids in ordered_groups:
            for standing in self._sort_teams_by_record(team_ids, standings_data):
                pick_number = len(picks) + 1
                picks.append(DraftPickOrder(
                    round_number=1,
                    pick_in_round=pick_number,
                    overall_pick=pick_number,
                    team_id=standing.team_id,
                    original_team_id=standing.team_id,
                    reason=reason,
                    team_record=standing.record_string,
                    strength_of_schedule=standing.strength_of_schedule
                ))
        return DraftOrder(season_year=self.season_year, picks=tuple(picks))

    def _sort_teams_by_record(
        self,
        team_ids: List[int],
        standings_data: Mapping[int, TeamStanding]
    ) -> List[TeamStanding]:
        """
        Sort teams worst → best with the reversed tiebreak chain.

        Args:
            team_ids: Teams to sort
            standings_data: All team standings keyed by team ID

        Returns:
            Sorted standings
        """
        sorted_teams = sorted((standings_data[team_id] for team_id in team_ids), key=draft_tiebreak_key)

        self.logger.debug(f"Sorted {len(sorted_teams)} teams by record (worst→best)")
        return sorted_teams

    # ==================== Later Rounds ====================

    def generate_all_rounds(self, draft_order: DraftOrder) -> List[DraftPickOrder]:
        """
        Generate all 7 rounds using Round 1 order.

        Args:
            draft_order: The 32 picks from Round 1

        Returns:
            List of 224 DraftPickOrder objects (7 rounds × 32 picks)
        """
        all_picks = []
        overall_pick = 1

        for round_num in range(1, self.NUM_ROUNDS + 1):
            for round_1_pick in draft_order.picks:
                all_picks.append(DraftPickOrder(
                    round_number=round_num,
                    pick_in_round=round_1_pick.pick_in_round,
                    overall_pick=overall_pick,
                    team_id=round_1_pick.team_id,
                    original_team_id=round_1_pick.original_team_id,
                    reason=round_1_pick.reason,
                    team_record=round_1_pick.team_record,
                    strength_of_schedule=round_1_pick.strength_of_schedule
                ))
                overall_pick += 1

        self.logger.debug(f"Generated {len(all_picks)} total picks across {self.NUM_ROUNDS} rounds")
        return all_picks

    # ==================== Lookups ====================

    def get_pick_range_for_group(self, reason: str) -> Tuple[int, int]:
        """
        First and last round 1 pick reserved for an elimination group.

        Raises:
            ValueError: For an unknown reason
        """
        first_pick = 1
        for group_reason, size in self.GROUP_SIZES:
            if group_reason == reason:
                return first_pick, first_pick + size - 1
            first_pick += size
        raise ValueError(f"Unknown draft group: '{reason}'")

    def explain_draft_position(self, draft_order: DraftOrder, team_id: int) -> str:
        """
        Human-readable justification for a team's pick.

        Examples:
            "Pick #5: Missed playoffs with 4-13 record"
            "Pick #20: Eliminated in Wild Card round (10-7)"
            "Pick #32: Super Bowl champion"
        """
        pick = draft_order.get_pick(draft_order.draft_position(team_id))
        prefix = f"Pick #{pick.overall_pick}"

        if pick.reason == NON_PLAYOFF:
            return f"{prefix}: Missed playoffs with {pick.team_record} record"
        elif pick.reason == WILD_CARD_LOSS:
            return f"{prefix}: Eliminated in Wild Card round ({pick.team_record})"
        elif pick.reason == DIVISIONAL_LOSS:
            return f"{prefix}: Eliminated in Divisional round ({pick.team_record})"
        elif pick.reason == CONFERENCE_LOSS:
            return f"{prefix}: Lost Conference Championship ({pick.team_record})"
        elif pick.reason == SUPER_BOWL_LOSS:
            return f"{prefix}: Lost Super Bowl ({pick.team_record})"
        elif pick.reason == SUPER_BOWL_WIN:
            return f"{prefix}: Super Bowl champion"
        return f"{prefix}: Projected from {pick.team_record} record"


# ==================== Module-level API ====================

def calculate_draft_order(
    standings: Iterable[TeamStanding],
    playoff_schedule: PlayoffSchedule
) -> List[int]:
    """Round 1 draft order as 32 team IDs, pick 1 first"""
    service = DraftOrderService(playoff_schedule.season)
    return service.calculate_draft_order(standings, playoff_schedule).team_ids
