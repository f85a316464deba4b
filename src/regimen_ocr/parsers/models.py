"""
Parser Models

Pydantic models for the regimen shape every parsing path outputs to.
Field aliases follow the camelCase contract of the program editor that
consumes these records.
"""

import uuid
from datetime import date
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator


FALLBACK_PREFIX = "[FALLBACK] "

_WEEKDAY_NAMES = (
    "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday",
)
_MONTH_NAMES = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def new_id() -> str:
    return str(uuid.uuid4())


def format_display_date(day: date) -> str:
    """Format a date like "Monday, Oct 19" independent of the process locale."""
    return f"{_WEEKDAY_NAMES[day.weekday()]}, {_MONTH_NAMES[day.month - 1]} {day.day}"


class DetectedLanguage(str, Enum):
    """Languages the lexicons cover"""
    ENGLISH = "english"
    SPANISH = "spanish"
    FRENCH = "french"
    GERMAN = "german"
    SWEDISH = "swedish"
    NORWEGIAN = "norwegian"
    DANISH = "danish"
    FINNISH = "finnish"


NORDIC_LANGUAGES = frozenset({
    DetectedLanguage.SWEDISH,
    DetectedLanguage.NORWEGIAN,
    DetectedLanguage.DANISH,
    DetectedLanguage.FINNISH,
})


class Exercise(BaseModel):
    """Single exercise inside a training day"""
    id: str = Field(default_factory=new_id)
    name: str = Field(..., min_length=1)
    sets: int = Field(default=3, ge=0)
    is_reps: bool = Field(default=True, alias="isReps")
    reps: int = Field(default=10, ge=0)
    distance: str = Field(default="", description="Distance per set, e.g. '400m', '5km'")
    duration: str = Field(default="", description="'MM:SS' when the exercise is timed")
    rest_interval: str = Field(default="01:00", alias="restInterval")
    notes: str = ""
    per_side: bool = Field(default=False, alias="perSide")
    media_links: List[str] = Field(default_factory=list, alias="mediaLinks")

    class Config:
        populate_by_name = True

    @model_validator(mode="after")
    def _exclusive_measure(self) -> "Exercise":
        # A measured exercise carries exactly one of distance/duration.
        if self.distance:
            self.is_reps = False
            self.duration = ""
        elif self.duration:
            self.is_reps = False
        else:
            self.is_reps = True
        return self


class WorkoutDay(BaseModel):
    """One training day of a parsed regimen"""
    id: str = Field(default_factory=new_id)
    name: str
    date: str = Field(..., description="ISO date string")
    intensity: str
    original_language: DetectedLanguage = Field(
        default=DetectedLanguage.ENGLISH, alias="originalLanguage"
    )
    exercises: List[Exercise] = Field(default_factory=list)
    source_label: Optional[str] = Field(
        default=None,
        alias="sourceLabel",
        description="Day label as written in the source text ('Monday', 'Dag 2')",
    )

    class Config:
        populate_by_name = True
        use_enum_values = True

    @property
    def is_fallback(self) -> bool:
        return any(e.name.startswith(FALLBACK_PREFIX) for e in self.exercises)
