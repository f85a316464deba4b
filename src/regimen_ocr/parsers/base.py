"""
Parser Base

Working records shared by the parsing stages and the abstract strategy
classes the segmenter and extractor run in order.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional

from .models import DetectedLanguage, Exercise

if TYPE_CHECKING:
    from .exercise_extractor import ExerciseExtractor


DEFAULT_SETS = 3
DEFAULT_REPS = 10
DEFAULT_REST = "01:00"


@dataclass
class ExerciseDraft:
    """Mutable exercise under construction, frozen into an Exercise at the end."""
    name: str = ""
    sets: int = DEFAULT_SETS
    is_reps: bool = True
    reps: int = DEFAULT_REPS
    distance: str = ""
    duration: str = ""
    rest_interval: str = DEFAULT_REST
    notes: str = ""
    per_side: bool = False

    def to_exercise(self) -> Exercise:
        return Exercise(
            name=self.name,
            sets=max(0, self.sets),
            is_reps=self.is_reps,
            reps=max(0, self.reps),
            distance=self.distance,
            duration=self.duration,
            rest_interval=self.rest_interval,
            notes=self.notes,
            per_side=self.per_side,
        )


@dataclass
class ColumnRoles:
    """Column index per role in a tabular export, None when absent"""
    exercise: Optional[int] = None
    sets: Optional[int] = None
    reps: Optional[int] = None
    weight: Optional[int] = None
    rest: Optional[int] = None
    day: Optional[int] = None
    notes: Optional[int] = None


@dataclass
class DaySegment:
    """One day found by a segmentation strategy."""
    label: Optional[str]
    content: str = ""
    exercises: List[Exercise] = field(default_factory=list)
    type_hint: Optional[str] = None


class SegmentationStrategy(ABC):
    """A single way of splitting narrative text into days."""

    name: str = "segmentation"

    @abstractmethod
    def attempt(self, text: str, language: DetectedLanguage) -> Optional[List[DaySegment]]:
        """
        Try to segment text into days.

        Args:
            text: Raw OCR text
            language: Detected language

        Returns:
            Segments with parsed exercises, or None when this strategy does not apply
        """
        ...


class ExerciseStrategy(ABC):
    """A single way of reading the numbers of one exercise line."""

    name: str = "exercise"

    @abstractmethod
    def attempt(self, draft: ExerciseDraft, line: str, extractor: "ExerciseExtractor") -> bool:
        """Fill the draft from line; False when the line is not this strategy's shape."""
        ...
