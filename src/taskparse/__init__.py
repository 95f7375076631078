"""taskparse: natural-language task parsing.

Turns a voice transcript, a pasted chat message or quick-add text into a
structured task: title, due date, due time, category, priority and a
confidence score for each.

Quick Start:
    from datetime import datetime
    from taskparse import parse

    result = parse("remind me to call the dentist next friday at 10am")
    result.title        # "Call the dentist"
    result.date         # the Friday of next week
    result.time         # 10:00
    result.category     # "health"

Extraction runs in two tiers:
    - Primary: ordered date/time recognizer tables and keyword classifiers
    - Fallback: extra date phrasings, used only when the primary date is
      missing or weak

Chat messages with several requests go through taskparse.messages.
"""

__version__ = "0.1.0"

# Configuration
from .config import ConfidenceWeights, Settings, settings

# Exceptions
from .exceptions import RecognitionError, TaskParseError, ValidationError

# Logging
from .logging import (
    bind_context,
    clear_context,
    configure_from_settings,
    configure_logging,
    get_logger,
    log_context,
    logger,
    unbind_context,
)

# Messages
from .messages import ExtractedTask, extract_tasks

# Models
from .models import (
    CategoryCandidate,
    DateCandidate,
    ParseResult,
    PriorityCandidate,
    TimeCandidate,
)

# Parser
from .parser import TaskParser, get_parser, parse

# Statistics
from .stats import ParsingStats, parsing_stats

__all__ = [
    # Version
    "__version__",
    # Configuration
    "ConfidenceWeights",
    "Settings",
    "settings",
    # Exceptions
    "RecognitionError",
    "TaskParseError",
    "ValidationError",
    # Logging
    "bind_context",
    "clear_context",
    "configure_from_settings",
    "configure_logging",
    "get_logger",
    "log_context",
    "logger",
    "unbind_context",
    # Messages
    "ExtractedTask",
    "extract_tasks",
    # Models
    "CategoryCandidate",
    "DateCandidate",
    "ParseResult",
    "PriorityCandidate",
    "TimeCandidate",
    # Parser
    "TaskParser",
    "get_parser",
    "parse",
    # Statistics
    "ParsingStats",
    "parsing_stats",
]
