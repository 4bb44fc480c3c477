"""Five-criterion rating scores."""

from collections.abc import Mapping
from statistics import fmean
from typing import Any

from pydantic import Field

from trackrate.domain.shared.error import ValidationError
from trackrate.domain.shared.model.value import ValueObject

CRITERIA = ("vocals", "production", "lyrics", "quality", "vibe")
MIN_SCORE = 0
MAX_SCORE = 10


class RatingScores(ValueObject):
    vocals: int = Field(ge=MIN_SCORE, le=MAX_SCORE)
    production: int = Field(ge=MIN_SCORE, le=MAX_SCORE)
    lyrics: int = Field(ge=MIN_SCORE, le=MAX_SCORE)
    quality: int = Field(ge=MIN_SCORE, le=MAX_SCORE)
    vibe: int = Field(ge=MIN_SCORE, le=MAX_SCORE)

    @classmethod
    def parse(cls, raw: Mapping[str, Any]) -> "RatingScores":
        """Validate untrusted input field by field.

        The first failing criterion is reported as a single ValidationError.
        Booleans and integral floats are not accepted as integers.
        """
        for name in CRITERIA:
            if raw.get(name) is None:
                raise ValidationError(
                    f"All rating fields ({', '.join(CRITERIA)}) are required",
                    field=name,
                    code="MISSING_RATING_FIELDS",
                )
        for name in CRITERIA:
            value = raw[name]
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValidationError(
                    f"{name} must be an integer", field=name, code="INVALID_RATING_TYPE"
                )
            if not MIN_SCORE <= value <= MAX_SCORE:
                raise ValidationError(
                    f"{name} must be between {MIN_SCORE} and {MAX_SCORE}",
                    field=name,
                    code="RATING_OUT_OF_RANGE",
                )
        return cls(**{name: raw[name] for name in CRITERIA})

    @property
    def mean(self) -> float:
        return fmean(getattr(self, name) for name in CRITERIA)
