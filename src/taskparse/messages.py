"""Extract tasks from pasted chat messages.

A forwarded conversation rarely reads like a quick-add entry. This module
finds the sentences that ask for something ("can you pick up the kids at
5?"), set a reminder, state a deadline or list an action item, turns each
into a task-shaped utterance and runs it through the parser with a single
shared reference time.

Example:
    ```python
    from taskparse.messages import extract_tasks

    tasks = extract_tasks(
        "Sam: hey! can you pick up the dry cleaning tomorrow? "
        "Also the tax forms are due by friday."
    )
    # [ExtractedTask(cue="deadline", title="The tax forms", ...),
    #  ExtractedTask(cue="request", title="Pick up the dry cleaning", ...)]
    ```
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from taskparse.confidence import clamp01
from taskparse.logging import get_logger, log_context
from taskparse.models import ParseResult
from taskparse.parser import TaskParser, get_parser

logger = get_logger(__name__)

Cue = Literal["request", "reminder", "deadline", "action"]

# Cue detection, checked in this order
CUES: tuple[tuple[Cue, re.Pattern[str]], ...] = (
    (
        "deadline",
        re.compile(
            r"\b(?:is\s+due|are\s+due|due\s+(?:by|on|before)|deadline|"
            r"(?:must|needs\s+to|has\s+to)\s+be\s+(?:done|completed|finished|submitted|sent))\b",
            re.IGNORECASE,
        ),
    ),
    (
        "reminder",
        re.compile(
            r"\b(?:remind\s+me|reminder|don'?t\s+(?:let\s+me\s+)?forget|remember\s+to|"
            r"make\s+sure\s+(?:to|you|i)|note\s+to\s+self)\b",
            re.IGNORECASE,
        ),
    ),
    (
        "request",
        re.compile(r"\b(?:can\s+you|could\s+you|would\s+you(?:\s+mind)?|please)\b", re.IGNORECASE),
    ),
    (
        "action",
        re.compile(
            r"^(?:todo|to\s+do|action\s+item)\s*:|"
            r"\b(?:we\s+should|let'?s|need\s+to|have\s+to|pick\s+up|buy)\b",
            re.IGNORECASE,
        ),
    ),
)

# Extra confidence for cues that are explicit about being a task
CUE_BOOST: dict[Cue, float] = {
    "request": 0.0,
    "reminder": 0.1,
    "deadline": 0.15,
    "action": 0.0,
}

# Titles sharing more than this fraction of words are duplicates
DUPLICATE_OVERLAP = 0.7

_BRACKETED = re.compile(r"\[[^\]]*\]")
_SPEAKER = re.compile(
    r"^(?!(?:todo|to\s+do|note|action\s+item|reminder|ps)\s*:)[A-Za-z][\w'.-]*(?:\s[A-Za-z][\w'.-]*)?:\s+",
    re.IGNORECASE,
)
_SENTENCE_END = re.compile(r"(?<=[.!?])\s+")
_WHITESPACE = re.compile(r"\s+")
_LEAD_IN = re.compile(
    r"^(?:(?:hey|hi|hello|also|oh|and|so|ok|okay)\b[\s,!]*)+",
    re.IGNORECASE,
)
_REQUEST_PREFIX = re.compile(
    r"^(?:(?:can|could|would)\s+you(?:\s+mind)?|please|todo\s*:|to\s+do\s*:|action\s+item\s*:|"
    r"we\s+should|let'?s|let\s+us|(?:we|i|you)\s+(?:need|have)\s+to|need\s+to|"
    r"note\s+to\s+self\s*:?|don'?t\s+let\s+me\s+forget\s+to|make\s+sure\s+you)\s+(?:please\s+)?",
    re.IGNORECASE,
)
_TRAILING_PLEASE = re.compile(r",?\s*please\s*([.!?]*)$", re.IGNORECASE)
_DEADLINE_FORMS = (
    re.compile(r"^(?:the\s+)?deadline\s+for\s+(?P<task>.+?)\s+is\s+(?P<when>.+)$", re.IGNORECASE),
    re.compile(
        r"^(?P<task>.+?)\s+(?:is|are)\s+due\b(?:\s+(?:by|on|before))?\s*(?P<when>.*)$",
        re.IGNORECASE,
    ),
    re.compile(r"^(?P<task>.+?)\s+due\s+(?:by|on|before)\s+(?P<when>.+)$", re.IGNORECASE),
    re.compile(
        r"^(?P<task>.+?)\s+(?:must|needs\s+to|has\s+to)\s+be\s+"
        r"(?:done|completed|finished|submitted|sent)\s*(?P<when>.*)$",
        re.IGNORECASE,
    ),
)
_DEADLINE_WORD = re.compile(r"\bdeadline\b\s*:?", re.IGNORECASE)


class ExtractedTask(BaseModel):
    """A task found in a chat message.

    Attributes:
        sentence: The sentence the task came from.
        cue: What marked the sentence as a task.
        result: Parse of the task-shaped rewrite of the sentence.
        priority: Suggested priority; deadlines default to "high".
        confidence: Parse confidence plus the cue boost, in [0, 1].
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    sentence: str = Field(description="Source sentence")
    cue: Cue = Field(description="Task cue that matched")
    result: ParseResult = Field(description="Parse of the task text")
    priority: str | None = Field(default=None, description="Suggested priority")
    confidence: float = Field(ge=0.0, le=1.0, description="Task confidence")

    @property
    def title(self) -> str:
        """Title of the parsed task text."""
        return self.result.title


def preprocess(message: str) -> list[str]:
    """Split a chat message into cleaned sentences.

    Bracketed timestamps and attachment markers are removed and each line
    loses its "Name:" speaker prefix before being split into sentences.
    """
    sentences: list[str] = []
    for line in _BRACKETED.sub(" ", message).splitlines():
        line = _SPEAKER.sub("", _WHITESPACE.sub(" ", line).strip())
        for sentence in _SENTENCE_END.split(line):
            sentence = sentence.strip()
            if sentence:
                sentences.append(sentence)
    return sentences


def detect_cue(sentence: str) -> Cue | None:
    """First cue found in ``sentence``, or None for chit-chat."""
    for cue, pattern in CUES:
        if pattern.search(sentence):
            return cue
    return None


def task_text(sentence: str, cue: Cue) -> str:
    """Rewrite a cued sentence into something that reads like a task."""
    text = _LEAD_IN.sub("", sentence).strip()
    if cue == "deadline":
        body = text.rstrip(".!? ")
        for form in _DEADLINE_FORMS:
            match = form.match(body)
            if match:
                return f"{match.group('task')} {match.group('when')}".strip()
        return _DEADLINE_WORD.sub("", text).strip()

    text = _TRAILING_PLEASE.sub(r"\1", text)
    # Requests can stack: "could you please ..."
    previous = None
    while previous != text:
        previous = text
        text = _REQUEST_PREFIX.sub("", text).strip()
    return text.rstrip("?").strip()


def word_overlap(first: str, second: str) -> float:
    """Shared words relative to the average title length."""
    words1 = first.lower().split()
    words2 = second.lower().split()
    if not words1 or not words2:
        return 0.0
    common = sum(1 for word in words1 if word in words2)
    return common / ((len(words1) + len(words2)) / 2)


def extract_tasks(
    message: str,
    reference_time: datetime | None = None,
    parser: TaskParser | None = None,
) -> list[ExtractedTask]:
    """Find tasks in a pasted chat message.

    Args:
        message: Raw message text, possibly several lines of conversation.
        reference_time: "Now" for every task in the message; captured once
            when omitted.
        parser: Parser to use; defaults to the shared parser.

    Returns:
        Tasks ordered by confidence, highest first, without near-duplicates.
    """
    parser = parser or get_parser()
    reference = reference_time or datetime.now()

    candidates: list[ExtractedTask] = []
    for index, sentence in enumerate(preprocess(message)):
        cue = detect_cue(sentence)
        if cue is None:
            continue
        text = task_text(sentence, cue)
        if len(text) < 3:
            continue
        with log_context(sentence_index=index, cue=cue):
            result = parser.parse(text, reference)
        priority = result.priority
        if priority is None and cue == "deadline":
            priority = "high"
        candidates.append(
            ExtractedTask(
                sentence=sentence,
                cue=cue,
                result=result,
                priority=priority,
                confidence=clamp01(result.overall_confidence + CUE_BOOST[cue]),
            )
        )

    candidates.sort(key=lambda task: task.confidence, reverse=True)
    tasks: list[ExtractedTask] = []
    for candidate in candidates:
        if any(word_overlap(kept.title, candidate.title) > DUPLICATE_OVERLAP for kept in tasks):
            logger.debug("duplicate_task_dropped", title=candidate.title)
            continue
        tasks.append(candidate)

    logger.debug("tasks_extracted", sentences=len(candidates), tasks=len(tasks))
    return tasks
