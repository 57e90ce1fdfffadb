"""
Rank Matching Policies

Pairing rule used by the standings-based components (same-conference
standings games and the 17th game): given a team's previous-season division
finish, which finish position it meets in the opposing division.

A policy must be an involution on ranks 1-4 (if rank R meets rank S, then S
meets R) so pairings are symmetric and every team in both divisions gets
exactly one opponent.
"""

from dataclasses import dataclass
from typing import Dict, Mapping

from .schedule_exceptions import MatchupPolicyException


RANKS = (1, 2, 3, 4)


@dataclass(frozen=True)
class RankMatchingPolicy:
    """
    Named rank-to-rank pairing.

    Attributes:
        name: Policy identifier
        pairings: Map from a team's division rank to its opponent's rank
    """
    name: str
    pairings: Mapping[int, int]

    def __post_init__(self):
        object.__setattr__(self, 'pairings', dict(self.pairings))
        self.validate()

    def validate(self) -> None:
        """
        Check the pairing is an involution on ranks 1-4.

        Raises:
            MatchupPolicyException: If the pairing is incomplete or asymmetric
        """
        if set(self.pairings) != set(RANKS) or set(self.pairings.values()) != set(RANKS):
            raise MatchupPolicyException(
                f"Policy '{self.name}' must map ranks {list(RANKS)} onto themselves",
                policy_name=self.name
            )
        for rank, opponent_rank in self.pairings.items():
            if self.pairings[opponent_rank] != rank:
                raise MatchupPolicyException(
                    f"Policy '{self.name}' is not symmetric: {rank}->{opponent_rank} "
                    f"but {opponent_rank}->{self.pairings[opponent_rank]}",
                    policy_name=self.name
                )

    def opponent_rank(self, rank: int) -> int:
        return self.pairings[rank]


STRAIGHT_RANK_POLICY = RankMatchingPolicy(
    name="straight",
    pairings={1: 1, 2: 2, 3: 3, 4: 4}
)

# Adjacent finishes meet: champions play runners-up, third plays fourth.
CROSS_RANK_POLICY = RankMatchingPolicy(
    name="cross",
    pairings={1: 2, 2: 1, 3: 4, 4: 3}
)

DEFAULT_POLICY = STRAIGHT_RANK_POLICY

POLICIES: Dict[str, RankMatchingPolicy] = {
    STRAIGHT_RANK_POLICY.name: STRAIGHT_RANK_POLICY,
    CROSS_RANK_POLICY.name: CROSS_RANK_POLICY,
}


def get_policy(name: str) -> RankMatchingPolicy:
    """Look up a registered policy by name"""
    try:
        return POLICIES[name]
    except KeyError as e:
        raise MatchupPolicyException(
            f"Unknown rank matching policy '{name}' (available: {sorted(POLICIES)})",
            policy_name=name,
            original_exception=e
        )
