"""
Round Result Model

A RoundResult is the immutable outcome of one round: the drawn number, the
drawn color, when it was drawn and the length of the round that produced it.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from .enums import ResultColor

ALLOWED_DURATIONS = (10, 15, 20)
BIG_THRESHOLD = 5


class RoundResult(BaseModel):
    """Outcome of a resolved round."""

    number: int = Field(..., ge=0, le=9, description="Drawn number (0-9)")
    color: ResultColor = Field(..., description="Drawn color")
    timestamp: int = Field(..., ge=0, description="Draw time (epoch ms)")
    duration: int = Field(..., description="Length of the producing round in seconds")

    @field_validator("duration")
    @classmethod
    def _check_duration(cls, v: int) -> int:
        if v not in ALLOWED_DURATIONS:
            raise ValueError(f"duration must be one of {ALLOWED_DURATIONS}, got {v}")
        return v

    @property
    def is_big(self) -> bool:
        """True when the number falls in the big range (5-9)."""
        return self.number >= BIG_THRESHOLD

    def describe(self) -> str:
        size = "Big" if self.is_big else "Small"
        return f"{self.number} {self.color.value.capitalize()} ({size})"

    class Config:
        """Pydantic model configuration."""

        frozen = True
