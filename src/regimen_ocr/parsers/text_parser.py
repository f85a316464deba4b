"""
Text Parser

Turns OCR text of a training plan into dated WorkoutDay records:
- Detects the plan's language
- Routes tabular exports to the table parser, prose to the day segmenter
- Classifies intensity and dates each day from an injectable "today"
- Degrades to fallback days instead of raising
"""

import logging
import re
from datetime import date, timedelta
from typing import List, Optional

from .day_segmenter import DaySegmenter
from .fallback import FallbackGenerator, sample_exercise
from .format_classifier import is_tabular, non_empty_lines
from .intensity import classify_by_count, classify_narrative
from .language_detector import detect_language
from .language_patterns import compiled_patterns, get_language_patterns
from .models import DetectedLanguage, WorkoutDay, format_display_date
from .tabular_parser import WEEKDAY_CELL, TabularParser

logger = logging.getLogger(__name__)


# Signals that text describes training even without day markers
EXERCISE_SIGNALS = (
    re.compile(r"\d+\s*(?:set|sets|sett|varv|omgångar)\b", re.IGNORECASE),
    re.compile(r"\d+\s*(?:rep|reps|repetitioner|upprepningar|toisto)\b", re.IGNORECASE),
    re.compile(r"armhävningar|pushups|armhevinger|punnerrukset|armstrækninger", re.IGNORECASE),
    re.compile(r"knäböj|squats|knebøy|kyykyt", re.IGNORECASE),
    re.compile(r"utfall|lunges|utfald", re.IGNORECASE),
    re.compile(r"sit-?ups", re.IGNORECASE),
    re.compile(r"plankan?|lankku", re.IGNORECASE),
    re.compile(r"bänkpress|bench\s*press", re.IGNORECASE),
    re.compile(r"marklyft|deadlift", re.IGNORECASE),
    re.compile(r"axelpress|shoulder\s*press", re.IGNORECASE),
    re.compile(r"\d+\s*(?:km|m|meter|min|minuter|sekunder|sek)\b", re.IGNORECASE),
    re.compile(r"uppvärmning|warm-?up|oppvarming|lämmittely|opvarmning", re.IGNORECASE),
    re.compile(r"styrka|strength|styrke|voima", re.IGNORECASE),
    re.compile(r"kondition|cardio|kondisjon|kestävyys", re.IGNORECASE),
    re.compile(r"\d+\s*x\s*\d+\s*(?:m|meter|metres)\b", re.IGNORECASE),
    re.compile(r"(?:vila|rest|hvile|lepo|pause)\s*\d+\s*(?:s|sek|min)\b", re.IGNORECASE),
)

WEEKDAY_SIGNALS = (
    re.compile(r"måndag|monday|mandag|maanantai", re.IGNORECASE),
    re.compile(r"tisdag|tuesday|tirsdag|tiistai", re.IGNORECASE),
    re.compile(r"onsdag|wednesday|keskiviikko", re.IGNORECASE),
    re.compile(r"torsdag|thursday|torstai", re.IGNORECASE),
    re.compile(r"fredag|friday|perjantai", re.IGNORECASE),
    re.compile(r"lördag|saturday|lørdag|lauantai", re.IGNORECASE),
    re.compile(r"söndag|sunday|søndag|sunnuntai", re.IGNORECASE),
)

NUMERIC_SIGNALS = (
    re.compile(r"\d+\s*x\s*\d+", re.IGNORECASE),
    re.compile(r"\d+\s*-\s*\d+"),
    re.compile(r"\d+\s*min", re.IGNORECASE),
    re.compile(r"\d+\s*(?:sec|sek)", re.IGNORECASE),
)

SECTION_SPLIT = re.compile(r"\n\s*\n+")


def has_training_days(text) -> bool:
    """
    Cheap check for whether text looks like a training plan.

    Tries tabular layout, day markers, exercise vocabulary, several
    exercise sections, weekday names, colon definitions and numeric
    shapes, stopping at the first hit.
    """
    if not isinstance(text, str) or not text.strip():
        return False

    language = detect_language(text)

    if is_tabular(text):
        logger.debug("has_training_days: tabular layout")
        return True

    if compiled_patterns(language).day_regex.search(text):
        logger.debug("has_training_days: day marker")
        return True

    if any(p.search(text) for p in EXERCISE_SIGNALS):
        return True

    sections = [s for s in SECTION_SPLIT.split(text) if s.strip()]
    if len(sections) >= 2:
        with_exercises = sum(1 for s in sections if any(p.search(s) for p in EXERCISE_SIGNALS))
        if with_exercises >= 2:
            return True

    if any(p.search(text) for p in WEEKDAY_SIGNALS):
        return True

    lines = non_empty_lines(text)
    colon_lines = sum(1 for line in lines if ":" in line and not line.rstrip().endswith(":"))
    if colon_lines >= 3 and len(lines) >= 5:
        return True

    return sum(1 for p in NUMERIC_SIGNALS if p.search(text)) >= 3


def ensure_exercises(days: List[WorkoutDay]) -> List[WorkoutDay]:
    """Give every day at least one exercise."""
    return [
        day if day.exercises else day.model_copy(update={"exercises": [sample_exercise()]})
        for day in days
    ]


def tabular_day_name(label: Optional[str], display: str) -> str:
    if not label:
        return display
    if WEEKDAY_CELL.search(label):
        return WEEKDAY_CELL.sub(display, label, count=1)
    return f"{label} ({display})"


class TextParser:
    """
    Parses OCR workout text into dated training days.

    After parse(), language and tabular hold what the last call detected.
    """

    def __init__(self, today: Optional[date] = None, segmenter: Optional[DaySegmenter] = None):
        self.today = today
        self.segmenter = segmenter or DaySegmenter()
        self.language = DetectedLanguage.ENGLISH
        self.tabular = False

    def parse(self, text) -> List[WorkoutDay]:
        """
        Parse OCR text.

        Args:
            text: Raw OCR text

        Returns:
            At least one WorkoutDay, each with at least one exercise
        """
        today = self.today or date.today()
        self.language = DetectedLanguage.ENGLISH
        self.tabular = False
        if not isinstance(text, str) or not text.strip():
            return ensure_exercises([FallbackGenerator().single_day("", today)])

        try:
            self.language = detect_language(text)
            logger.info(f"Detected language: {self.language.value}")

            days: List[WorkoutDay] = []
            self.tabular = is_tabular(text)
            if self.tabular:
                days = self._tabular_days(text, self.language, today)
            if not days:
                days = self._narrative_days(text, self.language, today)
            if not days:
                logger.info("No structured days found, creating fallback days")
                days = FallbackGenerator(self.language).generate(text, today)
        except Exception as e:
            logger.exception(f"Error parsing workout text: {e}")
            days = [FallbackGenerator(self.language).single_day(text, today)]

        total = sum(len(day.exercises) for day in days)
        logger.info(f"Parsed {len(days)} workout days with {total} exercises")
        return ensure_exercises(days)

    def _tabular_days(self, text: str, language: DetectedLanguage, today: date) -> List[WorkoutDay]:
        patterns = get_language_patterns(language)
        days = []
        for index, segment in enumerate(TabularParser(language).parse(text)):
            day_date = today + timedelta(days=index)
            days.append(WorkoutDay(
                name=tabular_day_name(segment.label, format_display_date(day_date)),
                date=day_date.isoformat(),
                intensity=classify_by_count(len(segment.exercises), patterns),
                original_language=language,
                exercises=segment.exercises,
                source_label=segment.label,
            ))
        return days

    def _narrative_days(self, text: str, language: DetectedLanguage, today: date) -> List[WorkoutDay]:
        patterns = get_language_patterns(language)
        strategy, segments = self.segmenter.segment(text, language)
        days = []
        for index, segment in enumerate(segments):
            day_date = today + timedelta(days=index)
            days.append(WorkoutDay(
                name=format_display_date(day_date),
                date=day_date.isoformat(),
                intensity=classify_narrative(
                    f"{segment.label or ''}\n{segment.content}", patterns, segment.type_hint
                ),
                original_language=language,
                exercises=segment.exercises,
                source_label=segment.label,
            ))
        if days:
            logger.debug(f"Narrative days built with {strategy} strategy")
        return days


def parse_workout_text(text, today: Optional[date] = None) -> List[WorkoutDay]:
    """Parse OCR workout text; never raises and never returns an empty list."""
    return TextParser(today=today).parse(text)
