"""Parsers for OCR workout text."""
from .fallback import FallbackGenerator, generate_mock_exercises
from .language_patterns import PATTERN_SETS, get_language_patterns
from .models import FALLBACK_PREFIX, DetectedLanguage, Exercise, WorkoutDay
from .text_parser import TextParser, has_training_days, parse_workout_text

__all__ = [
    "FALLBACK_PREFIX",
    "PATTERN_SETS",
    "DetectedLanguage",
    "Exercise",
    "FallbackGenerator",
    "TextParser",
    "WorkoutDay",
    "generate_mock_exercises",
    "get_language_patterns",
    "has_training_days",
    "parse_workout_text",
]
