"""Matching engine: normalization, extraction, scoring, and lookups."""

from .dates import DateMatch, find_date
from .extractor import MetadataExtractor
from .models import DateParts, ExtractionResult, ScoredCandidate
from .normalizer import CleanupRule, TextNormalizer
from .query import check_query
from .scoring import ScoringEngine, contains_token
from .target import TargetMatch, resolve_target

__all__ = [
    "CleanupRule",
    "DateMatch",
    "DateParts",
    "ExtractionResult",
    "MetadataExtractor",
    "ScoredCandidate",
    "ScoringEngine",
    "TargetMatch",
    "TextNormalizer",
    "check_query",
    "contains_token",
    "find_date",
    "resolve_target",
]
