"""
Day Segmenter

Splits narrative OCR text into day blocks. Strategies run in order and the
first one that yields a day with at least one exercise wins.
"""

import logging
import re
from typing import List, Optional, Sequence, Tuple

from .base import DaySegment, SegmentationStrategy
from .exercise_extractor import ExerciseExtractor
from .language_patterns import compiled_patterns, get_language_patterns
from .models import DetectedLanguage

logger = logging.getLogger(__name__)

MAX_DAY_NUMBER = 100
SECTION_SPLIT = re.compile(r"\n\s*\n+")
SECTION_TITLE_MAX = 50
PARENTHESIZED = re.compile(r"\(([^)]+)\)")
LABEL_SEPARATORS = " \t:-–—.,"


def _has_exercises(segments: Sequence[DaySegment]) -> bool:
    return any(segment.exercises for segment in segments)


class SwedishDayStrategy(SegmentationStrategy):
    """'Dag 1: Måndag (Styrka)' headed days"""

    name = "swedish_day"

    PATTERN = re.compile(
        r"\b(?:träningsdag|dag|pass)\s*(\d+):\s*"
        r"(måndag|tisdag|onsdag|torsdag|fredag|lördag|söndag)\b(?:\s*\(([^)]+)\))?",
        re.IGNORECASE,
    )

    def attempt(self, text, language):
        if language != DetectedLanguage.SWEDISH:
            return None

        matches = list(self.PATTERN.finditer(text))
        if not matches:
            return None

        extractor = ExerciseExtractor(language)
        segments = []
        for i, match in enumerate(matches):
            end = matches[i + 1].start() if i + 1 < len(matches) else len(text)
            content = text[match.end():end].strip(LABEL_SEPARATORS + "\n")
            training_type = match.group(3)
            weekday = match.group(2).capitalize()
            label = f"{weekday} ({training_type})" if training_type else weekday
            segments.append(DaySegment(
                label=label,
                content=content,
                exercises=extractor.parse_content(content),
                type_hint=training_type,
            ))
        return segments


class StandardDayMarkerStrategy(SegmentationStrategy):
    """'Day N: ...' blocks running to the next marker"""

    name = "standard_day_marker"

    def attempt(self, text, language):
        compiled = compiled_patterns(language)
        extractor = ExerciseExtractor(language)
        segments = []
        seen = set()

        for match in compiled.day_regex.finditer(text):
            day_number = int(match.group(1))
            if day_number > MAX_DAY_NUMBER:
                break
            if day_number in seen:
                logger.debug(f"Skipping repeated day {day_number}")
                continue
            seen.add(day_number)

            content = match.group(2).strip()
            label = text[match.start():match.start(2)].strip(LABEL_SEPARATORS + "\n")
            segments.append(DaySegment(
                label=label,
                content=content,
                exercises=extractor.parse_content(content),
            ))
        return segments or None


class WeekdayStrategy(SegmentationStrategy):
    """Days opened by a line naming a weekday"""

    name = "weekday"

    def attempt(self, text, language):
        compiled = compiled_patterns(language)
        blocks: List[Tuple[str, Optional[str], List[str]]] = []

        for raw in text.split("\n"):
            line = raw.strip()
            if not line:
                continue
            weekday = compiled.weekday_for(line)
            if weekday:
                remainder, type_hint = self._strip_weekday(line, compiled)
                blocks.append((weekday, type_hint, [remainder] if remainder else []))
            elif blocks:
                blocks[-1][2].append(line)

        if not blocks:
            return None

        extractor = ExerciseExtractor(language)
        segments = []
        for weekday, type_hint, lines in blocks:
            content = "\n".join(lines)
            exercises = extractor.parse_content(content)
            if exercises:
                segments.append(DaySegment(
                    label=weekday, content=content, exercises=exercises, type_hint=type_hint,
                ))
        return segments or None

    @staticmethod
    def _strip_weekday(line: str, compiled) -> Tuple[str, Optional[str]]:
        remainder = line
        for _, regex in compiled.weekday_regexes:
            remainder = regex.sub("", remainder, count=1)
        type_hint = None
        hint = PARENTHESIZED.search(remainder)
        if hint:
            type_hint = hint.group(1).strip()
            remainder = PARENTHESIZED.sub("", remainder, count=1)
        return remainder.strip(LABEL_SEPARATORS), type_hint


class SectionStrategy(SegmentationStrategy):
    """Blank-line separated paragraphs, one day each"""

    name = "section"

    def attempt(self, text, language):
        sections = [s for s in SECTION_SPLIT.split(text) if s.strip()]
        if len(sections) < 2:
            return None

        patterns = get_language_patterns(language)
        extractor = ExerciseExtractor(language)
        segments = []

        for index, section in enumerate(sections, start=1):
            lines = section.strip().split("\n")
            first = lines[0].strip()
            if len(lines) > 1 and len(first) < SECTION_TITLE_MAX and ":" not in first and not re.search(r"\d", first):
                label, content = first, "\n".join(lines[1:])
            else:
                label = f"{patterns.day_prefix} {index} {patterns.training_suffix}"
                content = section

            exercises = extractor.parse_content(content)
            logger.debug(f"Section {index} yielded {len(exercises)} exercises")
            if exercises:
                segments.append(DaySegment(label=label, content=content, exercises=exercises))

        return segments or None


DEFAULT_STRATEGIES: Tuple[SegmentationStrategy, ...] = (
    SwedishDayStrategy(),
    StandardDayMarkerStrategy(),
    WeekdayStrategy(),
    SectionStrategy(),
)


class DaySegmenter:
    """Runs the narrative segmentation strategies in order"""

    def __init__(self, strategies: Optional[Sequence[SegmentationStrategy]] = None):
        self.strategies = tuple(strategies) if strategies is not None else DEFAULT_STRATEGIES

    def segment(self, text: str, language: DetectedLanguage) -> Tuple[Optional[str], List[DaySegment]]:
        """
        Segment narrative text into days.

        Returns:
            (strategy name, segments), or (None, []) when every strategy misses
        """
        for strategy in self.strategies:
            segments = strategy.attempt(text, language)
            if segments and _has_exercises(segments):
                logger.info(f"Segmented {len(segments)} days with {strategy.name} strategy")
                return strategy.name, segments
            logger.debug(f"Strategy {strategy.name} found no days")
        return None, []
