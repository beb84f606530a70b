"""Run drivers that feed videos through match sessions."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Sequence

from rich.markup import escape

from funmatch.library.models import LibraryEntry
from funmatch.matching import resolve_target

from .machine import MatchSession, SessionContext, SessionResult, SessionState

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class RunSummary:
    """Counts describing one pass over the video library.

    Attributes:
        done: Sessions that ended in ``DONE``.
        skipped: Sessions that ended in ``SKIPPED``.
        failed: Sessions whose script copy failed.
        learned: Studio patterns learned during the run.
        stale: Cached videos no longer present on disk.
        stale_scripts: Cached scripts no longer present on disk.
        already_handled: Videos skipped because of history or an existing script.
    """

    done: int = 0
    skipped: int = 0
    failed: int = 0
    learned: int = 0
    stale: int = 0
    stale_scripts: int = 0
    already_handled: int = 0

    def record(self, result: SessionResult) -> None:
        if result.state is SessionState.DONE:
            self.done += 1
        elif result.error:
            self.failed += 1
        else:
            self.skipped += 1
        if result.learned_pattern:
            self.learned += 1

    def as_dict(self) -> dict[str, int]:
        return {
            "done": self.done,
            "skipped": self.skipped,
            "failed": self.failed,
            "learned": self.learned,
            "stale": self.stale,
            "stale_scripts": self.stale_scripts,
            "already_handled": self.already_handled,
        }


class MatchRunner:
    """Process videos strictly one after another."""

    def __init__(self, context: SessionContext) -> None:
        self._ctx = context

    @property
    def context(self) -> SessionContext:
        return self._ctx

    def run(self, videos: Iterable[LibraryEntry], *, limit: Optional[int] = None) -> RunSummary:
        """Match every pending video.

        Args:
            videos: Cached video entries in library order.
            limit: Stop after this many sessions.

        Returns:
            RunSummary: Per-outcome counts.
        """
        summary = RunSummary(stale_scripts=self._drop_stale_scripts())
        sessions = 0
        for video in videos:
            if limit is not None and sessions >= limit:
                break
            if not Path(video.full_path).exists():
                LOGGER.info("Skipping stale entry %s; file no longer exists.", video.full_path)
                summary.stale += 1
                continue
            if self._already_handled(video):
                summary.already_handled += 1
                continue
            summary.record(MatchSession(video, self._ctx).run())
            sessions += 1
        return summary

    def run_target(
        self,
        query: str,
        videos: Sequence[LibraryEntry],
        *,
        confirm: bool = True,
    ) -> Optional[SessionResult]:
        """Match the single video that best fits ``query``.

        History and existing scripts are ignored so the chosen video always
        reaches the candidate prompt.

        Returns:
            Optional[SessionResult]: ``None`` when nothing matched or the user
            declined the confirmation.
        """
        self._drop_stale_scripts()
        io = self._ctx.io
        target = resolve_target(query, videos)
        if target is None:
            io.print(f"[yellow]No video matches '{escape(query)}'.[/yellow]")
            return None

        io.print(
            f"Best match ({target.hits}/{len(query.split())} terms): "
            f"[bold]{escape(target.entry.display_name)}[/bold]"
        )
        if confirm:
            answer = io.read_line("Match this video? (Y/n) ").strip().lower()
            if answer in {"n", "no"}:
                io.print("[yellow]Cancelled.[/yellow]")
                return None
        return MatchSession(target.entry, self._ctx).run()

    def _drop_stale_scripts(self) -> int:
        """Remove cached scripts missing on disk so they are never ranked."""
        live: list[LibraryEntry] = []
        for script in self._ctx.scripts:
            if Path(script.full_path).exists():
                live.append(script)
            else:
                LOGGER.info("Ignoring stale script %s; file no longer exists.", script.full_path)
        dropped = len(self._ctx.scripts) - len(live)
        self._ctx.scripts = live
        return dropped

    def _already_handled(self, video: LibraryEntry) -> bool:
        if video.full_path in self._ctx.history:
            return True
        if self._ctx.settings.skip_existing_scripts:
            return video.companion_script_path(self._ctx.script_extension).exists()
        return False


__all__ = ["MatchRunner", "RunSummary"]
