"""
Format Classifier

Decides whether OCR text is a spreadsheet export (tab or multi-space
aligned columns) or free narrative text.
"""

import logging
import re
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Pattern

logger = logging.getLogger(__name__)

TAB_SEPARATOR = re.compile(r"\t")
MULTI_SPACE_SEPARATOR = re.compile(r"\s{2,}")
COLUMN_SPLIT = re.compile(r"\t|\s{2,}")

SPACING_SAMPLE = 5
COLUMN_SAMPLE_END = 10

EXCEL_HEADER_PATTERN = re.compile(r"exercise|workout|set|rep|weight|duration|rest|notes", re.IGNORECASE)
NUMERIC_CELL = re.compile(r"^\d+$")
SETS_BY_REPS_CELL = re.compile(r"^\d+\s*[xX]\s*\d+$")
UNIT_CELL = re.compile(r"(set|rep|kg|lb)s?$", re.IGNORECASE)

# Shared with the narrative extractor to recognise exercise-like text
FITNESS_TERM_PATTERN = re.compile(
    r"squat|press|lift|push|pull|curl|row|raise|lunge|extend|flex|jump|run|sprint|jog",
    re.IGNORECASE,
)
EQUIPMENT_TERM_PATTERN = re.compile(
    r"dumbbell|barbell|machine|bench|cable|band|kettlebell|weight", re.IGNORECASE
)
NORDIC_EXERCISE_PATTERN = re.compile(
    r"knäböj|bänkpress|marklyft|armhävning|löpning|hopp|träning", re.IGNORECASE
)


@dataclass
class ColumnStructure:
    """Column analysis of a tabular candidate"""
    is_consistent: bool = False
    column_count: Optional[int] = None
    has_exercise_column: bool = False
    cell_types: Dict[str, int] = field(
        default_factory=lambda: {"numeric": 0, "text": 0, "mixed": 0}
    )

    @property
    def has_excel_cell_types(self) -> bool:
        return self.cell_types["numeric"] > 0 and self.cell_types["text"] > 0


def non_empty_lines(text: str) -> List[str]:
    return [line for line in text.split("\n") if line.strip()]


def split_columns(line: str, separator: Pattern[str] = COLUMN_SPLIT) -> List[str]:
    return [col.strip() for col in separator.split(line)]


def get_mode(values: List[int]) -> Optional[int]:
    """Most common value, earliest first-seen value wins ties."""
    if not values:
        return None
    counts = Counter(values)
    best = max(counts.values())
    for value in values:
        if counts[value] == best:
            return value
    return None


def looks_like_exercise_name(cell: str) -> bool:
    text = cell.lower()
    if NUMERIC_CELL.match(text) or UNIT_CELL.search(text) or len(text) <= 3:
        return False
    return bool(
        FITNESS_TERM_PATTERN.search(text)
        or EQUIPMENT_TERM_PATTERN.search(text)
        or NORDIC_EXERCISE_PATTERN.search(text)
    )


def has_consistent_column_spacing(text: str) -> bool:
    """True when most sampled lines carry the same number of multi-space gaps."""
    lines = non_empty_lines(text)
    if len(lines) < 3:
        return False

    space_counts = []
    for line in lines[:SPACING_SAMPLE]:
        gaps = MULTI_SPACE_SEPARATOR.findall(line)
        if gaps:
            space_counts.append(len(gaps))

    if len(space_counts) < 3:
        return False

    mode = get_mode(space_counts)
    matching = sum(1 for count in space_counts if count == mode)
    return matching >= min(3, len(space_counts))


def analyze_column_structure(lines: List[str]) -> ColumnStructure:
    """
    Analyze the column layout of data lines (the first line is treated as header).

    Args:
        lines: Non-empty lines of the candidate table

    Returns:
        ColumnStructure describing consistency and cell content
    """
    structure = ColumnStructure()
    column_counts: List[int] = []
    exercise_rows: List[bool] = []

    for line in lines[1:COLUMN_SAMPLE_END]:
        columns = [col for col in split_columns(line) if col]
        column_counts.append(len(columns))

        for col in columns:
            if NUMERIC_CELL.match(col):
                structure.cell_types["numeric"] += 1
            elif SETS_BY_REPS_CELL.match(col):
                structure.cell_types["mixed"] += 1
            else:
                structure.cell_types["text"] += 1

        exercise_rows.append(any(looks_like_exercise_name(col) for col in columns))

    mode = get_mode(column_counts)
    structure.column_count = mode
    if mode is not None:
        consistent = sum(1 for count in column_counts if abs(count - mode) <= 1)
        structure.is_consistent = consistent >= min(3, len(column_counts))
    structure.has_exercise_column = sum(exercise_rows) >= min(2, len(exercise_rows))
    return structure


def is_tabular(text) -> bool:
    """
    Decide whether text is a tabular (spreadsheet-like) export.

    Args:
        text: Raw OCR text

    Returns:
        True for tab or multi-space aligned column layouts
    """
    if not isinstance(text, str):
        return False

    lines = non_empty_lines(text)
    if len(lines) < 3:
        return False

    has_tabs = "\t" in text
    consistent_spacing = has_consistent_column_spacing(text)
    structure = analyze_column_structure(lines)

    has_excel_headers = bool(EXCEL_HEADER_PATTERN.search(lines[0]))
    has_tabular_structure = all(
        "  " in line or "\t" in line for line in lines[:SPACING_SAMPLE]
    )

    logger.debug(
        f"Tabular detection: tabs={has_tabs} spacing={consistent_spacing} "
        f"consistent={structure.is_consistent} columns={structure.column_count} "
        f"exercise_col={structure.has_exercise_column} headers={has_excel_headers} "
        f"structure={has_tabular_structure}"
    )

    return (
        (has_tabs or consistent_spacing)
        and structure.is_consistent
        and structure.has_exercise_column
    ) or (has_excel_headers and has_tabular_structure)


def detect_separator(text: str) -> Pattern[str]:
    """Tab when the text has any tab, else runs of two or more whitespace."""
    return TAB_SEPARATOR if "\t" in text else MULTI_SPACE_SEPARATOR
