"""
Draft Order Exceptions

Sequencing and input errors raised while computing the draft order.
"""

from typing import Optional

from shared.league_exceptions import ExceptionSeverity, LeagueException, RecoveryStrategy


class DraftOrderException(LeagueException):
    """
    Raised when a draft order cannot be calculated.

    Examples:
    - Playoff bracket not yet complete
    - Elimination groups of the wrong size (e.g., 5 wild card losers)
    """

    def __init__(
        self,
        message: str,
        season_year: Optional[int] = None,
        bracket_state: Optional[str] = None,
        **kwargs
    ):
        context = {
            "season_year": season_year,
            "bracket_state": bracket_state,
            **kwargs.get('context_dict', {})
        }

        super().__init__(
            message=message,
            error_code="DRAFT_ORDER_001",
            severity=ExceptionSeverity.CRITICAL,
            recovery_strategy=RecoveryStrategy.MANUAL,
            context_dict=context,
            original_exception=kwargs.get('original_exception')
        )
