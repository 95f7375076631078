"""Field extraction: the primary tier, the date fallback and title derivation.

Example:
    ```python
    from datetime import date
    from taskparse.extraction import PrimaryExtractor, FallbackDateResolver

    found = PrimaryExtractor().extract("pay rent this weekend", date(2026, 3, 4))
    if found.date is None:
        fallback = FallbackDateResolver().resolve("pay rent this weekend", date(2026, 3, 4))
    ```
"""

from .fallback import FALLBACK_RECOGNIZERS, ExplicitYearDate, FallbackDateResolver
from .primary import PrimaryExtraction, PrimaryExtractor
from .title import COMMAND_PHRASES, CONNECTIVES, TitleExtractor, strip_command

__all__ = [
    "COMMAND_PHRASES",
    "CONNECTIVES",
    "FALLBACK_RECOGNIZERS",
    "ExplicitYearDate",
    "FallbackDateResolver",
    "PrimaryExtraction",
    "PrimaryExtractor",
    "TitleExtractor",
    "strip_command",
]
