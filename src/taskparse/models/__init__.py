"""Data models for taskparse.

Candidates are transient per-field values created during a parse call;
ParseResult is the immutable value returned to the caller.
"""

from .candidates import (
    CategoryCandidate,
    DateCandidate,
    DateSource,
    PriorityCandidate,
    TimeCandidate,
)
from .result import ParseResult

__all__ = [
    "CategoryCandidate",
    "DateCandidate",
    "DateSource",
    "ParseResult",
    "PriorityCandidate",
    "TimeCandidate",
]
