"""
Language Detector

Scores OCR text against every lexicon and picks one of the supported
languages. Nordic texts get boosted because their day and exercise words
are short and easily outvoted by English loan words.
"""

import logging
import re
from typing import Dict

from .language_patterns import (
    NORDIC_CHARS,
    PATTERN_SETS,
    SWEDISH_SPECIFIC_TERMS,
    compiled_patterns,
)
from .models import NORDIC_LANGUAGES, DetectedLanguage

logger = logging.getLogger(__name__)

NORDIC_MULTIPLIER = 1.5
SECONDARY_THRESHOLD = 4
SWEDISH_SPECIFIC_THRESHOLD = 5
LOW_CONFIDENCE_SCORE = 5

SWEDISH_METER_PATTERN = re.compile(r"\d+\s*(?:meter|m)\b", re.IGNORECASE)
SWEDISH_SECONDS_PATTERN = re.compile(r"\d+\s*(?:sekunder|sek|s)\b", re.IGNORECASE)

_SWEDISH_SPECIFIC_REGEXES = tuple(
    re.compile(rf"\b{re.escape(term)}\b", re.IGNORECASE) for term in SWEDISH_SPECIFIC_TERMS
)


def count_nordic_chars(text: str) -> int:
    lowered = text.lower()
    return sum(lowered.count(ch) for ch in NORDIC_CHARS)


def _count(regexes, text: str) -> int:
    return sum(len(r.findall(text)) for r in regexes)


def _secondary_nordic_scores(text: str) -> Dict[DetectedLanguage, int]:
    # dict order doubles as the tie-break order
    return {
        language: _count(compiled_patterns(language).nordic_term_regexes, text) * 2
        for language in (
            DetectedLanguage.SWEDISH,
            DetectedLanguage.NORWEGIAN,
            DetectedLanguage.DANISH,
            DetectedLanguage.FINNISH,
        )
    }


def score_languages(text: str, swedish_bonus: int = 0) -> Dict[DetectedLanguage, float]:
    """Weighted marker score for every language."""
    scores: Dict[DetectedLanguage, float] = {}
    for language in PATTERN_SETS:
        compiled = compiled_patterns(language)
        score: float = swedish_bonus if language == DetectedLanguage.SWEDISH else 0
        score += _count(compiled.day_marker_regexes, text) * 2
        score += _count(compiled.intensity_marker_regexes, text)
        score += _count(compiled.exercise_marker_regexes, text)

        if language in NORDIC_LANGUAGES:
            score *= NORDIC_MULTIPLIER

        if language == DetectedLanguage.SWEDISH:
            score += len(SWEDISH_METER_PATTERN.findall(text)) * 2
            score += len(SWEDISH_SECONDS_PATTERN.findall(text)) * 2

        scores[language] = score
    return scores


def detect_language(text) -> DetectedLanguage:
    """
    Detect the language of a workout text.

    Args:
        text: Raw OCR text

    Returns:
        DetectedLanguage, english when nothing matches
    """
    if not isinstance(text, str) or not text.strip():
        return DetectedLanguage.ENGLISH

    nordic_char_count = count_nordic_chars(text)
    logger.debug(f"Nordic character count: {nordic_char_count}")

    if nordic_char_count > 3:
        secondary = _secondary_nordic_scores(text)
        logger.debug(f"Nordic secondary scores: {secondary}")
        best = max(secondary.values())
        if best > SECONDARY_THRESHOLD:
            for language, score in secondary.items():
                if score == best:
                    return language

    swedish_specific = _count(_SWEDISH_SPECIFIC_REGEXES, text) * 3
    if swedish_specific > SWEDISH_SPECIFIC_THRESHOLD:
        logger.debug(f"Swedish detected via specific terms ({swedish_specific})")
        return DetectedLanguage.SWEDISH

    scores = score_languages(text, swedish_bonus=swedish_specific)
    logger.debug(f"Language detection scores: {scores}")

    detected = DetectedLanguage.ENGLISH
    best_score: float = 0
    for language, score in scores.items():
        if score > best_score:
            detected, best_score = language, score

    if best_score < LOW_CONFIDENCE_SCORE and nordic_char_count > 1:
        return DetectedLanguage.SWEDISH
    return detected
