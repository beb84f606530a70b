"""Configuration models describing funmatch settings."""

from __future__ import annotations

from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_VIDEO_EXTENSIONS = [".mp4", ".mkv", ".avi", ".wmv", ".mov", ".webm", ".m4v"]

DEFAULT_STOP_WORDS = [
    "the",
    "and",
    "with",
    "for",
    "from",
    "her",
    "his",
    "you",
    "your",
    "are",
    "was",
    "this",
    "that",
    "into",
    "feat",
    "featuring",
    "new",
    "vol",
    "episode",
]

DEFAULT_IGNORED_NUMBERS = [
    "30",
    "60",
    "90",
    "120",
    "180",
    "190",
    "200",
    "220",
    "360",
    "720",
    "1080",
    "1440",
    "1920",
    "2048",
    "2160",
    "2880",
    "3072",
    "3840",
    "4096",
    "5760",
    "7680",
]

# Applied in order against separator-free text; later rules see earlier output.
DEFAULT_CLEANUP_PATTERNS = [
    r"[\[\](){}]",
    r"\b(?:https?\s*:\s*//\s*)?(?:www\s+)?[a-z0-9]+\s+(?:com|net|org)\b",
    r"\b(?:oculus(?:\s*rift)?|rift|quest\s*\d?|vive|pico\s*\d?|psvr\s*\d?|gear\s*vr|smartphone|mobile|desktop)\b",
    r"\b\d{3,5}\s*x\s*\d{3,5}\b",
    r"\b(?:180|190|200|220|360)(?:\s*x\s*180)?\b",
    r"\b(?:sbs|lr|rl|tb|bt|ou|3dh|3dv|fisheye\d*|mkx\d+|vrca\d+|rf52|eac|equirect(?:angular)?|mono|stereo|fov)\b",
    r"\b(?:\d{3,4}p|\d{1,2}k|uhd|fhd|hd|hq|lq)\b",
    r"\b(?:h\s*26[45]|x26[45]|hevc|avc|av1|vp9|aac|\d{2,3}\s*fps|fps)\b",
    r"\b\d+\s*(?:mbps|kbps|mb|gb)\b",
    r"\b(?:vr|vr180|vr360|scene|part|pt|full|video|original|remastered|uncut|xxx)\b",
    r"\b(?:mp4|mkv|avi|wmv|mov|webm|m4v|funscript)\b",
]


class FunmatchBaseModel(BaseModel):
    """Shared configuration for funmatch Pydantic models."""

    model_config = ConfigDict(extra="forbid")


class LibrarySettings(FunmatchBaseModel):
    """Locations and filters used when scanning the video and script libraries.

    Attributes:
        video_roots: Directories scanned for video files.
        script_roots: Directories scanned for companion script files.
        video_extensions: File suffixes treated as videos.
        script_extension: File suffix of companion scripts.
        exclude_paths: Path prefixes or folder names skipped during scans.
        recursive: Whether to descend into subdirectories.
    """

    video_roots: List[str] = Field(default_factory=list)
    script_roots: List[str] = Field(default_factory=list)
    video_extensions: List[str] = Field(default_factory=lambda: list(DEFAULT_VIDEO_EXTENSIONS))
    script_extension: str = ".funscript"
    exclude_paths: List[str] = Field(default_factory=list)
    recursive: bool = True


class MatchingSettings(FunmatchBaseModel):
    """Keyword extraction and scoring policy.

    Attributes:
        stop_words: Lower-case tokens never used as keywords.
        ignored_numbers: Numeric tokens never used as keywords.
        cleanup_patterns: Ordered regular expressions replaced with a space.
        min_keyword_length: Shortest non-numeric token kept as a keyword.
        strong_keyword_length: Shortest keyword awarded clean-strong points.
        min_score: Lowest total score a candidate needs to be listed.
        date_points: Points for a matching compact date.
        studio_points: Points for a matching studio name.
        exact_points: Points for a keyword found as a whole token.
        partial_points: Points for a keyword found as a substring.
        clean_strong_points: Points for a long keyword found in the clean name.
        clean_weak_points: Points for a short keyword found in the clean name.
    """

    stop_words: List[str] = Field(default_factory=lambda: list(DEFAULT_STOP_WORDS))
    ignored_numbers: List[str] = Field(default_factory=lambda: list(DEFAULT_IGNORED_NUMBERS))
    cleanup_patterns: List[str] = Field(default_factory=lambda: list(DEFAULT_CLEANUP_PATTERNS))
    min_keyword_length: int = Field(default=3, ge=1)
    strong_keyword_length: int = Field(default=5, ge=1)
    min_score: int = Field(default=2, ge=1)
    date_points: int = Field(default=10, ge=0)
    studio_points: int = Field(default=5, ge=0)
    exact_points: int = Field(default=2, ge=0)
    partial_points: int = Field(default=1, ge=0)
    clean_strong_points: int = Field(default=3, ge=0)
    clean_weak_points: int = Field(default=1, ge=0)


class SessionSettings(FunmatchBaseModel):
    """Interactive matching behavior.

    Attributes:
        ask_on_empty: Prompt for keywords when nothing usable was extracted.
        default_action: Outcome applied when the prompt receives an empty line.
        skip_markers: Inputs that skip the current video.
        display_limit: Maximum candidates shown in interactive sessions.
        check_limit: Maximum candidates returned by check queries.
        skip_existing_scripts: Skip videos whose companion script already exists.
    """

    ask_on_empty: bool = True
    default_action: Literal["done", "skip"] = "done"
    skip_markers: List[str] = Field(default_factory=lambda: ["s", "skip"])
    display_limit: int = Field(default=12, ge=1)
    check_limit: int = Field(default=10, ge=1)
    skip_existing_scripts: bool = True


class LoggingSettings(FunmatchBaseModel):
    """Runtime logging configuration.

    Attributes:
        level: Logging verbosity level.
        max_size_mb: Maximum log size before rotation.
        backup_count: Number of historical log files to retain.
    """

    level: str = "WARNING"
    max_size_mb: int = 10
    backup_count: int = 3


class FunmatchConfig(FunmatchBaseModel):
    """Top-level configuration struct for funmatch.

    Attributes:
        library: Library scanning settings.
        matching: Extraction and scoring policy.
        session: Interactive session behavior.
        logging: Logging configuration.
    """

    library: LibrarySettings = Field(default_factory=LibrarySettings)
    matching: MatchingSettings = Field(default_factory=MatchingSettings)
    session: SessionSettings = Field(default_factory=SessionSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


__all__ = [
    "FunmatchBaseModel",
    "LibrarySettings",
    "MatchingSettings",
    "SessionSettings",
    "LoggingSettings",
    "FunmatchConfig",
]
