"""Configuration management for taskparse."""

import logging
import warnings
from typing import Literal

from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)


class ConfidenceWeights(BaseModel):
    """Configurable weights for the overall confidence blend.

    The overall confidence formula uses these weights:
        overall = clamp01(
            base +
            title_multi_word (title has >1 word and length >3) +
            title_long (title length >10) +
            date * date_confidence +
            time * time_confidence +
            category * category_confidence +
            priority * priority_confidence +
            description (non-trivial description extracted)
        )

    Absent fields contribute 0. The defaults reach exactly 1.3 when every
    field is present at full confidence, so a well-formed parse saturates.

    Attributes:
        base: Starting confidence for any non-empty input (0.30 default).
        title_multi_word: Bonus for a multi-word title (0.25 default).
        title_long: Extra bonus for a title longer than 10 chars (0.15 default).
        date: Weight for date confidence (0.25 default).
        time: Weight for time confidence (0.15 default).
        category: Weight for category confidence (0.10 default).
        priority: Weight for priority confidence (0.05 default).
        description: Bonus when a description was extracted (0.05 default).
    """

    base: float = Field(
        default=0.30,
        ge=0.0,
        le=1.0,
        description="Starting confidence for non-empty input",
    )
    title_multi_word: float = Field(
        default=0.25,
        ge=0.0,
        le=1.0,
        description="Bonus when the title has more than one word",
    )
    title_long: float = Field(
        default=0.15,
        ge=0.0,
        le=1.0,
        description="Bonus when the title is longer than 10 characters",
    )
    date: float = Field(
        default=0.25,
        ge=0.0,
        le=1.0,
        description="Weight for date confidence",
    )
    time: float = Field(
        default=0.15,
        ge=0.0,
        le=1.0,
        description="Weight for time confidence",
    )
    category: float = Field(
        default=0.10,
        ge=0.0,
        le=1.0,
        description="Weight for category confidence",
    )
    priority: float = Field(
        default=0.05,
        ge=0.0,
        le=1.0,
        description="Weight for priority confidence",
    )
    description: float = Field(
        default=0.05,
        ge=0.0,
        le=1.0,
        description="Bonus when a description was extracted",
    )

    def max_total(self) -> float:
        """Highest unclamped value the blend can reach."""
        return (
            self.base
            + self.title_multi_word
            + self.title_long
            + self.date
            + self.time
            + self.category
            + self.priority
            + self.description
        )

    @model_validator(mode="after")
    def _warn_if_unreachable(self) -> "ConfidenceWeights":
        """Warn if a perfect parse can no longer reach 1.0."""
        total = self.max_total()
        if total < 1.0:
            warnings.warn(
                f"ConfidenceWeights reach at most {total:.3f}; "
                f"overall confidence can never be 1.0.",
                UserWarning,
                stacklevel=2,
            )
            logger.warning(
                "ConfidenceWeights reach at most %.3f (expected >= 1.0): "
                "base=%.2f, date=%.2f, time=%.2f, category=%.2f, priority=%.2f",
                total,
                self.base,
                self.date,
                self.time,
                self.category,
                self.priority,
            )
        return self


class Settings(BaseSettings):
    """taskparse configuration.

    All settings can be overridden with TASKPARSE_ environment variables.
    Nested weights use a double underscore, e.g.
    TASKPARSE_CONFIDENCE_WEIGHTS__DATE=0.3.
    """

    # Confidence blending
    confidence_weights: ConfidenceWeights = Field(
        default_factory=ConfidenceWeights,
        description="Weights for the overall confidence formula",
    )

    # Two-tier date extraction
    fallback_threshold: float = Field(
        default=0.7,
        ge=0.0,
        le=1.0,
        description="Primary date confidence below which the fallback resolver runs",
    )

    # Title and description derivation
    description_min_length: int = Field(
        default=50,
        ge=0,
        description="Minimum input length before a description is extracted",
    )
    description_min_remainder: int = Field(
        default=5,
        ge=0,
        description="A description must be longer than this many characters",
    )
    max_title_passes: int = Field(
        default=5,
        ge=1,
        le=50,
        description=(
            "Maximum stripping passes when deriving a title. Each pass removes "
            "date/time phrases and dangling prepositions; passes stop early "
            "once the text no longer changes."
        ),
    )

    # Keyword classification
    min_fragment_length: int = Field(
        default=4,
        ge=1,
        description=(
            "Words shorter than this only match a keyword by containing it, "
            "never by being contained in one"
        ),
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Log level",
    )
    log_format: Literal["json", "text"] = Field(
        default="json",
        description="Log output format",
    )

    model_config = {
        "env_prefix": "TASKPARSE_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_nested_delimiter": "__",
    }

    @model_validator(mode="after")
    def validate_description_thresholds(self) -> "Settings":
        """A description must be shorter than the input it comes from."""
        if (
            self.description_min_length
            and self.description_min_remainder >= self.description_min_length
        ):
            raise ValueError(
                f"description_min_remainder ({self.description_min_remainder}) must be "
                f"less than description_min_length ({self.description_min_length})"
            )
        return self


# Global settings instance
settings = Settings()
