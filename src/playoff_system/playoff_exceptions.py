"""
Playoff System Exception Hierarchy

Exceptions for playoff seeding, bracket construction and round advancement.

Exception Hierarchy:
    LeagueException (shared)
    └── PlayoffException
        ├── InvalidRoundException
        ├── InvalidSeedingException
        ├── InvalidBracketException
        └── PlayoffStateException

Sequencing errors (advancing a round early, re-feeding a recorded round with
different winners, incomplete or tied results) raise PlayoffStateException.
"""

from typing import Any, Dict, Optional

from shared.league_exceptions import ExceptionSeverity, LeagueException, RecoveryStrategy


VALID_ROUNDS = ['wild_card', 'divisional', 'conference', 'super_bowl']


class PlayoffException(LeagueException):
    """
    Base exception for all playoff system errors.

    All playoff-specific exceptions inherit from this class.
    """

    def __init__(
        self,
        message: str,
        error_code: str = "PLAYOFF_000",
        severity: ExceptionSeverity = ExceptionSeverity.ERROR,
        recovery_strategy: RecoveryStrategy = RecoveryStrategy.ABORT,
        context_dict: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None
    ):
        super().__init__(
            message=message,
            error_code=error_code,
            severity=severity,
            recovery_strategy=recovery_strategy,
            context_dict=context_dict,
            original_exception=original_exception
        )


class InvalidRoundException(PlayoffException):
    """
    Raised when an invalid playoff round is specified or encountered.

    Examples:
    - Empty result list
    - Results mixing matchups from more than one round
    """

    def __init__(
        self,
        round_name: str,
        message: Optional[str] = None,
        valid_rounds: Optional[list] = None,
        **kwargs
    ):
        context = {
            "invalid_round": round_name,
            "valid_rounds": valid_rounds or VALID_ROUNDS,
            **kwargs.get('context_dict', {})
        }

        super().__init__(
            message=message or f"Invalid playoff round: '{round_name}'",
            error_code="PLAYOFF_ROUND_001",
            severity=ExceptionSeverity.ERROR,
            recovery_strategy=RecoveryStrategy.ABORT,
            context_dict=context,
            original_exception=kwargs.get('original_exception')
        )


class InvalidSeedingException(PlayoffException):
    """
    Raised when playoff seeding data is invalid or incomplete.

    Examples:
    - A division without exactly one division leader
    - Fewer than 7 seeds in a conference
    - Duplicate team IDs in seeding
    """

    def __init__(
        self,
        message: str,
        conference: Optional[str] = None,
        seed_number: Optional[int] = None,
        team_id: Optional[int] = None,
        **kwargs
    ):
        context = {
            "conference": conference,
            "seed_number": seed_number,
            "team_id": team_id,
            **kwargs.get('context_dict', {})
        }

        super().__init__(
            message=message,
            error_code="PLAYOFF_SEED_002",
            severity=ExceptionSeverity.CRITICAL,
            recovery_strategy=RecoveryStrategy.RESET,
            context_dict=context,
            original_exception=kwargs.get('original_exception')
        )


class InvalidBracketException(PlayoffException):
    """
    Raised when playoff bracket structure is invalid.

    Examples:
    - Wrong number of games per round (Wild Card: 6, Divisional: 4, Conference: 2, SB: 1)
    - Conference distribution incorrect (should be 50/50 split except Super Bowl)
    - Same team on both sides of a matchup
    """

    def __init__(
        self,
        message: str,
        round_name: Optional[str] = None,
        expected_game_count: Optional[int] = None,
        actual_game_count: Optional[int] = None,
        **kwargs
    ):
        context = {
            "round": round_name,
            "expected_games": expected_game_count,
            "actual_games": actual_game_count,
            **kwargs.get('context_dict', {})
        }

        super().__init__(
            message=message,
            error_code="PLAYOFF_BRACKET_003",
            severity=ExceptionSeverity.ERROR,
            recovery_strategy=RecoveryStrategy.RESET,
            context_dict=context,
            original_exception=kwargs.get('original_exception')
        )


class PlayoffStateException(PlayoffException):
    """
    Raised when a playoff operation is called out of sequence.

    Examples:
    - Advancing a round whose predecessor is not complete
    - Results missing a winner, or tied
    - Re-feeding an already recorded round with different winners
    """

    def __init__(
        self,
        message: str,
        current_round: Optional[str] = None,
        requested_round: Optional[str] = None,
        **kwargs
    ):
        context = {
            "current_round": current_round,
            "requested_round": requested_round,
            **kwargs.get('context_dict', {})
        }

        super().__init__(
            message=message,
            error_code="PLAYOFF_STATE_004",
            severity=ExceptionSeverity.CRITICAL,
            recovery_strategy=RecoveryStrategy.MANUAL,
            context_dict=context,
            original_exception=kwargs.get('original_exception')
        )
