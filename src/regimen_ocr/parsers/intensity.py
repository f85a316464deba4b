"""
Intensity Classifier

Maps a day's content, or its exercise count, to an intensity label in the
day's language.
"""

import re
from typing import Optional

from .language_patterns import LanguagePatternSet

FEW_EXERCISES = 2
MANY_EXERCISES = 7

SET_MENTION = re.compile(r"\b(\d+)\s*(?:sets?|omgångar|sarjat|sett)\b", re.IGNORECASE)


def _lexicon_label(text: str, patterns: LanguagePatternSet, include_medium: bool = True) -> Optional[str]:
    lowered = text.lower()
    labels = patterns.intensity_labels
    levels = [
        (patterns.rest_patterns, labels.rest),
        (patterns.easy_patterns, labels.easy),
        (patterns.hard_patterns, labels.hard),
    ]
    if include_medium:
        levels.append((patterns.medium_patterns, labels.medium))

    for words, label in levels:
        if any(word.lower() in lowered for word in words):
            return label
    return None


def classify_type_hint(type_hint: Optional[str], patterns: LanguagePatternSet) -> Optional[str]:
    """Label for a written training type such as "(Styrka)", None if unknown."""
    if not type_hint:
        return None
    lowered = type_hint.lower()
    hints = patterns.training_type_hints
    labels = patterns.intensity_labels
    for level in ("rest", "hard", "easy", "medium"):
        if any(word in lowered for word in hints.get(level, ())):
            return getattr(labels, level)
    return _lexicon_label(type_hint, patterns)


def classify_narrative(content: str, patterns: LanguagePatternSet, type_hint: Optional[str] = None) -> str:
    """
    Classify a narrative day.

    The training type wins when present, then the first lexicon hit in the
    order rest, easy, hard, medium.
    """
    label = classify_type_hint(type_hint, patterns)
    if label:
        return label
    return _lexicon_label(content or "", patterns) or patterns.default_intensity


def classify_by_count(exercise_count: int, patterns: LanguagePatternSet) -> str:
    """Tabular days carry no prose, so their size stands in for intensity."""
    if exercise_count <= FEW_EXERCISES:
        return patterns.intensity_labels.easy
    if exercise_count >= MANY_EXERCISES:
        return patterns.intensity_labels.hard
    return patterns.default_intensity


def detect_intensity_from_text(text: str, patterns: LanguagePatternSet) -> Optional[str]:
    """
    Intensity of an unstructured section.

    Falls back from the lexicon to the amount of work written down: many sets
    read as hard, few as easy.
    """
    if not text:
        return None

    label = _lexicon_label(text, patterns, include_medium=False)
    if label:
        return label

    mentions = SET_MENTION.findall(text)
    total_sets = sum(int(n) for n in mentions)

    if total_sets > 15 or len(mentions) > 5:
        return patterns.intensity_labels.hard
    if total_sets < 8 or len(mentions) < 3:
        return patterns.intensity_labels.easy
    return patterns.intensity_labels.medium
