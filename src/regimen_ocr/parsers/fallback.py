"""
Fallback Generator

Builds low-confidence output when no segmentation strategy found structure.
Every exercise it emits is named with FALLBACK_PREFIX so reviewers can spot
it; the fallback never returns an empty list.
"""

import logging
import re
from datetime import date, timedelta
from typing import List, Optional

from ..config import settings
from .exercise_extractor import ExerciseExtractor
from .intensity import detect_intensity_from_text
from .language_patterns import get_language_patterns, resolve_language
from .models import (
    FALLBACK_PREFIX,
    DetectedLanguage,
    Exercise,
    WorkoutDay,
    format_display_date,
)

logger = logging.getLogger(__name__)

FALLBACK_NOTE = (
    "This is an automatically generated exercise because no structured "
    "workout data was detected."
)
SAMPLE_NOTE = (
    "This is a sample exercise automatically added because no exercises "
    "were detected for this day."
)
UNSTRUCTURED_SUFFIX = "(Unstructured Data)"

MIN_SECTION_CHARS = 20
MIN_SECTION_LINES = 2
SHORT_LINE = 25

SECTION_BREAK_PATTERNS = (
    re.compile(r"^(?:day|dag|päivä|jour|tag|día)\s*\d+", re.IGNORECASE),
    re.compile(r"^(?:monday|tuesday|wednesday|thursday|friday|saturday|sunday)\b", re.IGNORECASE),
    re.compile(r"^(?:måndag|tisdag|onsdag|torsdag|fredag|lördag|söndag)\b", re.IGNORECASE),
    re.compile(r"^(?:mandag|tirsdag|lørdag|søndag|maanantai|tiistai|keskiviikko|torstai|perjantai|lauantai|sunnuntai)\b", re.IGNORECASE),
    re.compile(r"^(?:workout|session|pass|träning|träningspass)\b", re.IGNORECASE),
    re.compile(r"^(?:week|vecka|uke|uge|viikko)\s*\d+", re.IGNORECASE),
    re.compile(r"^\s*\d+[.:)].*(?:sets?|reps?|repetitions?|omgångar)", re.IGNORECASE),
)

# Template exercises per language: (name, reps, distance, duration)
MOCK_EXERCISES = {
    DetectedLanguage.ENGLISH: (
        ("Running", 0, "5km", ""),
        ("Squats", 12, "", ""),
        ("Push-ups", 15, "", ""),
        ("Plank", 0, "", "01:00"),
        ("Burpees", 10, "", ""),
    ),
    DetectedLanguage.SWEDISH: (
        ("Löpning", 0, "5km", ""),
        ("Knäböj", 12, "", ""),
        ("Armhävningar", 15, "", ""),
        ("Plankan", 0, "", "01:00"),
        ("Burpees", 10, "", ""),
    ),
    DetectedLanguage.NORWEGIAN: (
        ("Løping", 0, "5km", ""),
        ("Knebøy", 12, "", ""),
        ("Armhevinger", 15, "", ""),
        ("Planken", 0, "", "01:00"),
        ("Burpees", 10, "", ""),
    ),
    DetectedLanguage.DANISH: (
        ("Løb", 0, "5km", ""),
        ("Squats", 12, "", ""),
        ("Armstrækninger", 15, "", ""),
        ("Planke", 0, "", "01:00"),
        ("Burpees", 10, "", ""),
    ),
    DetectedLanguage.FINNISH: (
        ("Juoksu", 0, "5km", ""),
        ("Kyykyt", 12, "", ""),
        ("Punnerrukset", 15, "", ""),
        ("Lankku", 0, "", "01:00"),
        ("Burpees", 10, "", ""),
    ),
}
MOCK_COUNTS = {"rest": 1, "easy": 3, "medium": 4, "hard": 5}


def generate_mock_exercises(language=DetectedLanguage.ENGLISH, intensity: str = "Medium") -> List[Exercise]:
    """
    Template exercises for previews and demos.

    Args:
        language: Language of the template names
        intensity: Intensity label, in english or in the language itself

    Returns:
        1 to 5 exercises, more for harder days; sets cycle 2, 3, 4
    """
    language = resolve_language(language)
    templates = MOCK_EXERCISES.get(language, MOCK_EXERCISES[DetectedLanguage.ENGLISH])
    labels = get_language_patterns(language).intensity_labels

    level = "hard"
    for key in ("rest", "easy", "medium", "hard"):
        if intensity and intensity.lower() in (key, getattr(labels, key).lower()):
            level = key
            break

    return [
        Exercise(
            name=name,
            sets=2 + index % 3,
            reps=reps,
            distance=distance,
            duration=duration,
            rest_interval="00:45",
        )
        for index, (name, reps, distance, duration) in enumerate(templates[:MOCK_COUNTS[level]])
    ]


def placeholder_exercise(name: str) -> Exercise:
    return Exercise(
        name=f"{FALLBACK_PREFIX}{name}",
        sets=1,
        reps=1,
        rest_interval="00:30",
        notes=FALLBACK_NOTE,
    )


def sample_exercise() -> Exercise:
    return Exercise(name="Sample Exercise", sets=3, reps=12, rest_interval="01:00", notes=SAMPLE_NOTE)


def _tag(exercises: List[Exercise], limit: int) -> List[Exercise]:
    return [
        e.model_copy(update={"name": f"{FALLBACK_PREFIX}{e.name}"})
        for e in exercises[:limit]
    ]


def detect_text_sections(lines: List[str]) -> Optional[List[List[str]]]:
    """
    Split lines into sections at day, weekday and week markers, and at short
    lines following a blank line.

    Returns None when no break appears after the first line.
    """
    sections: List[List[str]] = []
    current: List[str] = []
    breaks = 0
    previous_blank = False

    for raw in lines:
        line = raw.strip()
        if not line:
            previous_blank = True
            continue

        is_break = bool(current) and (
            any(p.match(line) for p in SECTION_BREAK_PATTERNS)
            or (previous_blank and len(line) < SHORT_LINE)
        )
        if is_break:
            sections.append(current)
            current = []
            breaks += 1
        current.append(line)
        previous_blank = False

    if current:
        sections.append(current)
    return sections if breaks else None


class FallbackGenerator:
    """Degenerate but valid output for text without recognisable structure"""

    def __init__(self, language=DetectedLanguage.ENGLISH, max_exercises: Optional[int] = None):
        self.language = resolve_language(language)
        self.patterns = get_language_patterns(self.language)
        self.extractor = ExerciseExtractor(self.language)
        self.max_exercises = max_exercises or settings.FALLBACK_MAX_EXERCISES

    def generate(self, text: str, today: date) -> List[WorkoutDay]:
        """Multi-section days when sections are visible, else the single unstructured day."""
        days = self.from_sections(text or "", today)
        if days:
            return days
        return [self.single_day(text or "", today)]

    def from_sections(self, text: str, today: date) -> List[WorkoutDay]:
        sections = detect_text_sections(text.split("\n"))
        if not sections:
            return []

        days = []
        for number, lines in enumerate(sections, start=1):
            content = "\n".join(lines)
            if len(content) < MIN_SECTION_CHARS or len(lines) < MIN_SECTION_LINES:
                logger.debug(f"Skipping short fallback section {number}")
                continue

            day_date = today + timedelta(days=len(days))
            intensity = detect_intensity_from_text(content, self.patterns) or self.patterns.default_intensity
            exercises = self._safe_parse(content)
            exercises = (
                _tag(exercises, self.max_exercises)
                if exercises
                else [placeholder_exercise(f"Exercise from OCR text (section {number})")]
            )
            days.append(WorkoutDay(
                name=format_display_date(day_date),
                date=day_date.isoformat(),
                intensity=intensity,
                original_language=self.language,
                exercises=exercises,
            ))

        logger.info(f"Created {len(days)} fallback days from text sections")
        return days

    def single_day(self, text: str, today: date) -> WorkoutDay:
        exercises = self._safe_parse(text)
        exercises = (
            _tag(exercises, self.max_exercises)
            if exercises
            else [placeholder_exercise("Exercise from unstructured text")]
        )
        return WorkoutDay(
            name=f"{format_display_date(today)} {UNSTRUCTURED_SUFFIX}",
            date=today.isoformat(),
            intensity=self.patterns.intensity_labels.medium,
            original_language=self.language,
            exercises=exercises,
        )

    def _safe_parse(self, content: str) -> List[Exercise]:
        try:
            return self.extractor.parse_content(content)
        except Exception as e:
            logger.warning(f"Fallback exercise parsing failed: {e}")
            return []
