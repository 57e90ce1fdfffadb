"""
League Exception Hierarchy

Base exception hierarchy shared by the scheduling, playoff and draft systems,
with error codes, severity levels, recovery strategies and context.

Exception Hierarchy:
    LeagueException (base)
    ├── InvalidLeagueStructureException
    ├── InvalidSeasonYearException
    └── InvalidStandingsException

Subsystem exceptions (ScheduleGenerationException, PlayoffException,
DraftOrderException) derive from LeagueException as well.

All exceptions include:
- error_code: Unique identifier for programmatic handling
- severity: CRITICAL, ERROR, WARNING, INFO
- recovery_strategy: ABORT, RESET, MANUAL
- context_dict: Relevant context (season, team_id, counts, etc.)
- original_exception: Wrapped exception if from try/except
"""

from enum import Enum
from typing import Any, Dict, Optional


class ExceptionSeverity(Enum):
    """Severity levels for exceptions"""
    CRITICAL = "critical"  # Input or state unusable, immediate abort required
    ERROR = "error"        # Operation failed, cannot continue
    WARNING = "warning"    # Potential issue, can continue with caution
    INFO = "info"          # Informational only, no action required


class RecoveryStrategy(Enum):
    """Recovery strategies for exception handling"""
    ABORT = "abort"          # Stop the operation immediately
    RESET = "reset"          # Rebuild the input and call again
    MANUAL = "manual"        # Requires caller to fix the call sequence


class LeagueException(Exception):
    """
    Base exception for all league core errors.

    Attributes:
        message: Human-readable error message
        error_code: Unique error code (e.g., "LEAGUE_001")
        severity: Exception severity level
        recovery_strategy: Recommended recovery action
        context_dict: Additional context (season, team_id, etc.)
        original_exception: Original exception if wrapping another exception
    """

    def __init__(
        self,
        message: str,
        error_code: str = "LEAGUE_000",
        severity: ExceptionSeverity = ExceptionSeverity.ERROR,
        recovery_strategy: RecoveryStrategy = RecoveryStrategy.ABORT,
        context_dict: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None
    ):
        self.message = message
        self.error_code = error_code
        self.severity = severity
        self.recovery_strategy = recovery_strategy
        self.context_dict = context_dict or {}
        self.original_exception = original_exception

        super().__init__(self._build_error_message())

    def _build_error_message(self) -> str:
        """Build error message with all context"""
        lines = [
            f"[{self.error_code}] {self.message}",
            f"Severity: {self.severity.value}",
            f"Recovery: {self.recovery_strategy.value}",
        ]

        if self.context_dict:
            lines.append("Context:")
            for key, value in self.context_dict.items():
                lines.append(f"  {key}: {value}")

        if self.original_exception:
            lines.append(
                f"Original Error: {type(self.original_exception).__name__}: "
                f"{str(self.original_exception)}"
            )

        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization"""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "severity": self.severity.value,
            "recovery_strategy": self.recovery_strategy.value,
            "context": self.context_dict,
            "original_error": str(self.original_exception) if self.original_exception else None
        }


class InvalidLeagueStructureException(LeagueException):
    """
    Raised when the team roster does not form a 2 x 4 x 4 league.

    Examples:
    - Team count is not 32
    - A division does not hold exactly 4 teams
    - Duplicate team IDs
    """

    def __init__(
        self,
        message: str,
        team_count: Optional[int] = None,
        conference: Optional[str] = None,
        division: Optional[str] = None,
        **kwargs
    ):
        context = {
            "team_count": team_count,
            "conference": conference,
            "division": division,
            **kwargs.get('context_dict', {})
        }

        super().__init__(
            message=message,
            error_code="LEAGUE_STRUCTURE_001",
            severity=ExceptionSeverity.CRITICAL,
            recovery_strategy=RecoveryStrategy.ABORT,
            context_dict=context,
            original_exception=kwargs.get('original_exception')
        )


class InvalidSeasonYearException(LeagueException):
    """Raised when a season year falls outside the supported range."""

    def __init__(
        self,
        season_year: int,
        min_year: int,
        max_year: int,
        **kwargs
    ):
        context = {
            "season_year": season_year,
            "min_year": min_year,
            "max_year": max_year,
            **kwargs.get('context_dict', {})
        }

        super().__init__(
            message=f"Season year {season_year} outside supported range {min_year}-{max_year}",
            error_code="LEAGUE_YEAR_002",
            severity=ExceptionSeverity.CRITICAL,
            recovery_strategy=RecoveryStrategy.ABORT,
            context_dict=context,
            original_exception=kwargs.get('original_exception')
        )


class InvalidStandingsException(LeagueException):
    """
    Raised when standings records are missing or internally inconsistent.

    Examples:
    - A league team has no standing record
    - Division ranks within a division are not exactly 1-4
    - Conference ranks within a conference are not exactly 1-16
    """

    def __init__(
        self,
        message: str,
        team_id: Optional[int] = None,
        field_name: Optional[str] = None,
        **kwargs
    ):
        context = {
            "team_id": team_id,
            "field": field_name,
            **kwargs.get('context_dict', {})
        }

        super().__init__(
            message=message,
            error_code="LEAGUE_STANDINGS_003",
            severity=ExceptionSeverity.CRITICAL,
            recovery_strategy=RecoveryStrategy.RESET,
            context_dict=context,
            original_exception=kwargs.get('original_exception')
        )
