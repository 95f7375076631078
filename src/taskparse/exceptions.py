"""taskparse exception hierarchy.

Provides structured exceptions for error handling throughout the codebase.
All exceptions inherit from TaskParseError for easy catching.

Ordinary unmatched input never raises: absent fields come back as None.
RecognitionError is raised by calculators and always caught by the
recognizer that invoked them.
"""

from __future__ import annotations


class TaskParseError(Exception):
    """Base exception for all taskparse errors.

    Attributes:
        message: Human-readable error description.
        code: Machine-readable error code.
    """

    code: str = "taskparse_error"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def to_dict(self) -> dict[str, object]:
        """Convert exception to a serializable dictionary."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
            }
        }


class ValidationError(TaskParseError):
    """Invalid input provided.

    Raised when the caller passes something other than a string to parse.

    Attributes:
        field: The argument that failed validation.
        message: Description of the validation failure.
    """

    code: str = "validation_error"

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(f"{field}: {message}")

    def to_dict(self) -> dict[str, object]:
        """Convert exception to a serializable dictionary."""
        return {
            "error": {
                "code": self.code,
                "field": self.field,
                "message": self.message,
            }
        }


class RecognitionError(TaskParseError):
    """A calculator could not turn its matched text into a value.

    Attributes:
        recognizer: Name of the recognizer whose calculator failed.
        matched_text: The text fragment that was matched.
    """

    code: str = "recognition_error"

    def __init__(self, recognizer: str, matched_text: str, reason: str) -> None:
        self.recognizer = recognizer
        self.matched_text = matched_text
        super().__init__(f"{recognizer} could not resolve {matched_text!r}: {reason}")

    def to_dict(self) -> dict[str, object]:
        """Convert exception to a serializable dictionary."""
        return {
            "error": {
                "code": self.code,
                "recognizer": self.recognizer,
                "matched_text": self.matched_text,
                "message": self.message,
            }
        }

