"""Regimen OCR: turns OCR text of training plans into dated workout days."""
from .parsers.format_classifier import is_tabular
from .parsers.language_detector import detect_language
from .parsers.models import DetectedLanguage, Exercise, WorkoutDay
from .parsers.text_parser import has_training_days, parse_workout_text

__version__ = "0.1.0"

__all__ = [
    "DetectedLanguage",
    "Exercise",
    "WorkoutDay",
    "detect_language",
    "has_training_days",
    "is_tabular",
    "parse_workout_text",
]
