"""Interactive matching sessions and the collaborators they drive."""

from .console import ConsoleIO, RichConsoleIO, ScriptedConsoleIO
from .copier import FileCopier
from .errors import CopyError
from .machine import (
    TERMINAL_STATES,
    MatchSession,
    SessionContext,
    SessionResult,
    SessionState,
    candidate_table,
)
from .runner import MatchRunner, RunSummary

__all__ = [
    "ConsoleIO",
    "CopyError",
    "FileCopier",
    "MatchRunner",
    "MatchSession",
    "RichConsoleIO",
    "RunSummary",
    "ScriptedConsoleIO",
    "SessionContext",
    "SessionResult",
    "SessionState",
    "TERMINAL_STATES",
    "candidate_table",
]
