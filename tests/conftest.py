"""Shared fixtures for session and runner tests."""

from pathlib import Path
from typing import Callable, Iterable, Optional, Sequence

import pytest

from funmatch.config.models import MatchingSettings, SessionSettings
from funmatch.library import LibraryEntry
from funmatch.matching import MetadataExtractor, ScoringEngine
from funmatch.session import FileCopier, ScriptedConsoleIO, SessionContext
from funmatch.state import HistoryStore
from funmatch.studios import StudioRegistry, StudioStore

ContextFactory = Callable[..., SessionContext]


@pytest.fixture
def make_context(tmp_path: Path) -> ContextFactory:
    """Return a factory building session contexts rooted in ``tmp_path``."""

    def _factory(
        scripts: Sequence[LibraryEntry],
        answers: Iterable[str] = (),
        *,
        registry: Optional[StudioRegistry] = None,
        **session_overrides: object,
    ) -> SessionContext:
        registry = registry if registry is not None else StudioRegistry()
        matching = MatchingSettings()
        return SessionContext(
            scripts=list(scripts),
            extractor=MetadataExtractor(matching, registry),
            engine=ScoringEngine(matching, registry),
            history=HistoryStore(tmp_path / "history.log"),
            registry=registry,
            studio_store=StudioStore(tmp_path / "studios.json"),
            copier=FileCopier(),
            io=ScriptedConsoleIO(answers),
            settings=SessionSettings(**session_overrides),
        )

    return _factory
