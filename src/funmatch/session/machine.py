"""Per-video interactive matching state machine."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, Optional, Sequence

from rich.markup import escape
from rich.table import Table

from funmatch.config.models import SessionSettings
from funmatch.library.models import LibraryEntry
from funmatch.matching import ExtractionResult, MetadataExtractor, ScoredCandidate, ScoringEngine
from funmatch.state import HistoryStore, StateError
from funmatch.studios import StudioRegistry, StudioRegistryError, StudioStore

from .console import ConsoleIO
from .copier import FileCopier
from .errors import CopyError

LOGGER = logging.getLogger(__name__)


class SessionState(str, Enum):
    """Lifecycle states of a match session."""

    ANALYZING = "analyzing"
    AWAITING_INPUT = "awaiting_input"
    REFINED = "refined"
    DONE = "done"
    SKIPPED = "skipped"


TERMINAL_STATES = frozenset({SessionState.DONE, SessionState.SKIPPED})


@dataclass(slots=True)
class SessionResult:
    """Outcome of one video's session.

    Attributes:
        video: The video that was matched.
        state: Terminal state reached.
        selected: Candidate whose script was copied, if any.
        history_recorded: Whether the video was appended to history.
        learned_pattern: Studio pattern added to the registry, if any.
        error: Failure reported to the user, such as a copy error.
        keywords: Keywords in effect when the session ended.
    """

    video: LibraryEntry
    state: SessionState
    selected: Optional[ScoredCandidate] = None
    history_recorded: bool = False
    learned_pattern: Optional[str] = None
    error: Optional[str] = None
    keywords: tuple[str, ...] = field(default_factory=tuple)


@dataclass(slots=True)
class SessionContext:
    """Collaborators shared by every session in a run."""

    scripts: Sequence[LibraryEntry]
    extractor: MetadataExtractor
    engine: ScoringEngine
    history: HistoryStore
    registry: StudioRegistry
    studio_store: StudioStore
    copier: FileCopier
    io: ConsoleIO
    settings: SessionSettings
    script_extension: str = ".funscript"


class MatchSession:
    """Drive one video from analysis to a terminal state.

    ``ANALYZING`` extracts metadata (asking for keywords when nothing usable
    was found). ``AWAITING_INPUT`` shows ranked scripts and reads one line.
    ``REFINED`` loops back to ``AWAITING_INPUT`` with the enlarged keyword
    set. ``DONE`` and ``SKIPPED`` end the session.
    """

    def __init__(self, video: LibraryEntry, context: SessionContext) -> None:
        self._video = video
        self._ctx = context
        self._state = SessionState.ANALYZING
        self._extraction = ExtractionResult()
        self._candidates: list[ScoredCandidate] = []
        self._result = SessionResult(video=video, state=self._state)
        self._handlers: dict[SessionState, Callable[[], SessionState]] = {
            SessionState.ANALYZING: self._analyze,
            SessionState.AWAITING_INPUT: self._await_input,
            SessionState.REFINED: self._refine,
        }

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def extraction(self) -> ExtractionResult:
        return self._extraction

    def run(self) -> SessionResult:
        """Run the session until it reaches ``DONE`` or ``SKIPPED``.

        Raises:
            EOFError: If console input closes during a prompt.
            KeyboardInterrupt: If the user interrupts a prompt.
        """
        while self._state not in TERMINAL_STATES:
            self._state = self._handlers[self._state]()
        self._result.state = self._state
        self._result.keywords = self._extraction.keywords
        return self._result

    # ------------------------------------------------------------------ #
    # State handlers                                                     #
    # ------------------------------------------------------------------ #

    def _analyze(self) -> SessionState:
        ctx = self._ctx
        video = self._video
        ctx.io.print(f"\n[bold cyan]{escape(video.display_name)}[/bold cyan]")
        self._extraction = ctx.extractor.extract(video.display_name, video.full_path)

        if self._extraction.is_empty and ctx.settings.ask_on_empty:
            text = ctx.io.read_line("Nothing usable in this name. Keywords to search for: ").strip()
            if text:
                self._extraction = ctx.extractor.extract(text)

        if self._extraction.is_empty:
            LOGGER.info("No keywords or date for %s; skipping permanently.", video.full_path)
            ctx.io.print("[yellow]No keywords or date found; skipping permanently.[/yellow]")
            self._record_history()
            return SessionState.SKIPPED
        return SessionState.AWAITING_INPUT

    def _await_input(self) -> SessionState:
        ctx = self._ctx
        self._candidates = ctx.engine.rank(
            self._extraction,
            ctx.scripts,
            limit=ctx.settings.display_limit,
            infer_studios=True,
        )
        self._display()

        answer = ctx.io.read_line(self._prompt()).strip()
        if not answer:
            if ctx.settings.default_action == "done":
                self._record_history()
                return SessionState.DONE
            return SessionState.SKIPPED

        if answer.lower() in {marker.lower() for marker in ctx.settings.skip_markers}:
            return SessionState.SKIPPED

        if answer.isdigit() and 1 <= int(answer) <= len(self._candidates):
            return self._select(self._candidates[int(answer) - 1])

        self._extraction = self._extraction.with_keywords(answer.split())
        return SessionState.REFINED

    def _refine(self) -> SessionState:
        LOGGER.debug("Refined keywords for %s: %s", self._video.display_name, self._extraction.keywords)
        return SessionState.AWAITING_INPUT

    # ------------------------------------------------------------------ #
    # Helpers                                                            #
    # ------------------------------------------------------------------ #

    def _select(self, candidate: ScoredCandidate) -> SessionState:
        ctx = self._ctx
        destination = self._video.companion_script_path(ctx.script_extension)
        try:
            ctx.copier.copy(Path(candidate.target_path), destination)
        except CopyError as exc:
            LOGGER.error("%s", exc)
            ctx.io.print(f"[red]Copy failed: {escape(str(exc))}[/red]")
            self._result.error = str(exc)
            return SessionState.SKIPPED

        ctx.io.print(f"[green]Copied {escape(candidate.display_name)} -> {escape(str(destination))}[/green]")
        self._result.selected = candidate
        self._record_history()
        self._offer_learning(candidate)
        return SessionState.DONE

    def _offer_learning(self, candidate: ScoredCandidate) -> None:
        ctx = self._ctx
        label = candidate.inferred_studio
        if self._extraction.studio is not None or not label:
            return
        if label.lower() not in self._video.display_name.lower():
            return

        answer = ctx.io.read_line(f"Learn studio '{label}' from this match? (y/N) ").strip().lower()
        if answer not in {"y", "yes"}:
            return

        pattern = re.escape(label)
        if not ctx.registry.learn(label, pattern):
            return
        try:
            ctx.studio_store.save(ctx.registry)
        except StudioRegistryError as exc:
            LOGGER.error("%s", exc)
            ctx.io.print(f"[red]{escape(str(exc))}[/red]")
            return
        LOGGER.info("Learned studio pattern %r for %s.", pattern, label)
        ctx.io.print(f"[green]Studio '{escape(label)}' will be detected from now on.[/green]")
        self._result.learned_pattern = pattern

    def _record_history(self) -> None:
        try:
            self._ctx.history.append(self._video.full_path)
        except StateError as exc:
            LOGGER.error("%s", exc)
            self._ctx.io.print(f"[red]{escape(str(exc))}[/red]")
            return
        self._result.history_recorded = True

    def _display(self) -> None:
        extraction = self._extraction
        summary = [f"keywords: {', '.join(extraction.keywords) or '-'}"]
        if extraction.studio:
            summary.append(f"studio: {extraction.studio}")
        if extraction.date_raw:
            raw = extraction.date_raw
            summary.append(f"date: {raw.year:04d}-{raw.month:02d}-{raw.day:02d}")
        self._ctx.io.print(f"[dim]{escape(' | '.join(summary))}[/dim]")

        if not self._candidates:
            self._ctx.io.print("[yellow]No matching scripts found.[/yellow]")
            return
        self._ctx.io.print(candidate_table(self._candidates))

    def _prompt(self) -> str:
        default = "done" if self._ctx.settings.default_action == "done" else "skip"
        markers = "/".join(self._ctx.settings.skip_markers) or "s"
        choice = f"1-{len(self._candidates)}, " if self._candidates else ""
        return f"Pick {choice}Enter={default}, {markers}=skip, or type keywords to refine: "


def candidate_table(candidates: Sequence[ScoredCandidate], *, title: str | None = None) -> Table:
    """Render ranked candidates as a numbered table."""
    table = Table(title=title)
    table.add_column("#", justify="right")
    table.add_column("Score", justify="right")
    table.add_column("Script", overflow="fold")
    table.add_column("Folder", overflow="fold")
    table.add_column("Matched", overflow="fold")
    for index, candidate in enumerate(candidates, start=1):
        table.add_row(
            str(index),
            str(candidate.score),
            escape(candidate.display_name),
            escape(candidate.parent_folder),
            escape(", ".join(candidate.matched_terms)),
        )
    return table


__all__ = [
    "MatchSession",
    "SessionContext",
    "SessionResult",
    "SessionState",
    "TERMINAL_STATES",
    "candidate_table",
]
