"""
Scheduling Exceptions

Exceptions raised while building a regular-season schedule. Input contract
violations (team count, membership, year range, standings) use the shared
league exceptions; these cover failures specific to schedule construction.

Exception Hierarchy:
    LeagueException (shared)
    └── ScheduleGenerationException
        ├── ScheduleConfigurationException
        ├── ByeWeekPlacementException
        └── MatchupPolicyException
"""

from typing import Optional

from shared.league_exceptions import ExceptionSeverity, LeagueException, RecoveryStrategy


class ScheduleGenerationException(LeagueException):
    """Raised when a schedule cannot be generated from the given inputs."""

    def __init__(
        self,
        message: str,
        season_year: Optional[int] = None,
        error_code: str = "SCHEDULE_GEN_001",
        **kwargs
    ):
        context = {
            "season_year": season_year,
            **kwargs.get('context_dict', {})
        }

        super().__init__(
            message=message,
            error_code=error_code,
            severity=ExceptionSeverity.CRITICAL,
            recovery_strategy=RecoveryStrategy.ABORT,
            context_dict=context,
            original_exception=kwargs.get('original_exception')
        )


class ScheduleConfigurationException(ScheduleGenerationException):
    """Raised when ScheduleConfig.validate() reports errors."""

    def __init__(self, errors: list, season_year: Optional[int] = None, **kwargs):
        self.errors = list(errors)
        super().__init__(
            message=f"Invalid schedule configuration: {'; '.join(self.errors)}",
            season_year=season_year,
            error_code="SCHEDULE_CONFIG_002",
            **kwargs
        )


class ByeWeekPlacementException(ScheduleGenerationException):
    """
    Raised when bye weeks cannot be honored by week placement.

    Examples:
    - A team's bye opponent in the displaced round does not share the bye
    - A bye week outside the configured window
    """

    def __init__(
        self,
        message: str,
        team_id: Optional[int] = None,
        week: Optional[int] = None,
        season_year: Optional[int] = None,
        **kwargs
    ):
        context = {
            "team_id": team_id,
            "week": week,
            **kwargs.get('context_dict', {})
        }

        super().__init__(
            message=message,
            season_year=season_year,
            error_code="SCHEDULE_BYE_003",
            context_dict=context,
            original_exception=kwargs.get('original_exception')
        )


class MatchupPolicyException(ScheduleGenerationException):
    """Raised when a rank-matching policy is not a pairing of ranks 1-4."""

    def __init__(self, message: str, policy_name: Optional[str] = None, **kwargs):
        super().__init__(
            message=message,
            error_code="SCHEDULE_POLICY_004",
            context_dict={"policy": policy_name, **kwargs.get('context_dict', {})},
            original_exception=kwargs.get('original_exception')
        )
