"""
Tabular Parser

Parses spreadsheet-like OCR text: finds the header row, maps columns to
roles by multilingual keywords (or by cell content when the header is
unreadable), groups rows into days and converts each row to an exercise.
"""

import logging
import re
from typing import Dict, List, Optional, Pattern, Tuple

from .base import ColumnRoles, DaySegment
from .exercise_extractor import exercise_from_row
from .format_classifier import detect_separator, get_mode, non_empty_lines, split_columns
from .language_patterns import PATTERN_SETS, word_regex
from .models import DetectedLanguage

logger = logging.getLogger(__name__)


# Header keywords per role, checked in this order for every header cell
ROLE_KEYWORDS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("exercise", ("exercise", "name", "övning", "rörelse", "liike", "øvelse")),
    ("sets", ("set", "sets", "omgångar", "sarjat", "sett")),
    ("reps", ("rep", "reps", "repetition", "toistot", "gentagelser")),
    ("weight", ("weight", "kg", "lb", "vikt", "paino", "vægt")),
    ("rest", ("rest", "vila", "pause", "lepo", "hvile")),
    ("day", ("day", "dag", "päivä")),
    ("notes", ("note", "notes", "anteckningar", "muistiinpanot", "notater")),
)

HEADER_HINT = re.compile(r"exercise|name|set|rep", re.IGNORECASE)
INFERENCE_SAMPLE = 5

NUMERIC_CELL = re.compile(r"^\d{1,3}$")
MEASURE_CELL = re.compile(
    r"^\d+\s*[xX×]\s*\d+$|\d+\s*(?:km|m|meter|s|sec|min)\b", re.IGNORECASE
)
WEIGHT_CELL = re.compile(r"\d+\s*(?:kg|lbs?)\b", re.IGNORECASE)
TEXT_CELL = re.compile(r"[^\W\d_]{4,}")

WEEKDAY_CELL: Pattern[str] = word_regex(
    alias
    for patterns in PATTERN_SETS.values()
    for _, aliases in patterns.weekdays
    for alias in aliases
)


def identify_column_roles(headers: List[str]) -> ColumnRoles:
    """Map header cells to roles; the last cell matching a role wins."""
    roles = ColumnRoles()
    for index, header in enumerate(headers):
        h = header.lower()
        for role, keywords in ROLE_KEYWORDS:
            if any(keyword in h for keyword in keywords):
                setattr(roles, role, index)
                break
    return roles


def _column_kind(cells: List[str]) -> Optional[str]:
    cells = [c for c in cells if c]
    if not cells:
        return None
    half = (len(cells) + 1) // 2

    def count(regex, exclude=None):
        return sum(1 for c in cells if regex.search(c) and not (exclude and exclude.search(c)))

    if count(WEEKDAY_CELL) >= half and all(len(c) < 20 for c in cells):
        return "day"
    if sum(1 for c in cells if NUMERIC_CELL.match(c)) >= half:
        return "numeric"
    if count(WEIGHT_CELL) >= half:
        return "weight"
    if count(MEASURE_CELL) >= half:
        return "measure"
    if count(TEXT_CELL, exclude=NUMERIC_CELL) >= half:
        return "text"
    return None


def infer_column_roles(roles: ColumnRoles, rows: List[List[str]]) -> ColumnRoles:
    """
    Fill unmapped roles from cell content.

    Pure numbers suggest sets, "3x10" or unit-bearing cells suggest reps
    (a second such column suggests rest), long words suggest the exercise
    name. The exercise column falls back to the first column.
    """
    sample = rows[:INFERENCE_SAMPLE]
    width = max((len(r) for r in sample), default=0)
    kinds: Dict[int, Optional[str]] = {
        i: _column_kind([r[i] for r in sample if i < len(r)]) for i in range(width)
    }
    taken = {v for v in vars(roles).values() if v is not None}

    def first(kind: str) -> Optional[int]:
        for i in range(width):
            if kinds[i] == kind and i not in taken:
                taken.add(i)
                return i
        return None

    if roles.day is None:
        roles.day = first("day")
    if roles.exercise is None:
        roles.exercise = first("text")
    if roles.sets is None:
        roles.sets = first("numeric")
    if roles.reps is None:
        roles.reps = first("measure")
    if roles.reps is None:
        roles.reps = first("numeric")
    if roles.weight is None:
        roles.weight = first("weight")
    if roles.rest is None:
        roles.rest = first("measure")

    if roles.exercise is None:
        roles.exercise = 0
    logger.debug(f"Inferred column roles: {roles}")
    return roles


def group_rows_by_day(rows: List[List[str]], roles: ColumnRoles) -> List[Tuple[Optional[str], List[List[str]]]]:
    """Bucket rows by the day column; rows with an empty day cell stay in the current bucket."""
    if roles.day is None:
        return [(None, rows)] if rows else []

    buckets: List[Tuple[Optional[str], List[List[str]]]] = []
    current: Optional[str] = None
    for row in rows:
        value = row[roles.day].strip() if roles.day < len(row) else ""
        if value and value != current:
            current = value
            buckets.append((current, [row]))
        elif buckets:
            buckets[-1][1].append(row)
        else:
            buckets.append((None, [row]))
    return buckets


class TabularParser:
    """Parser for tab or multi-space aligned workout tables"""

    def __init__(self, language=DetectedLanguage.ENGLISH):
        self.language = language

    def find_header(self, lines: List[str]) -> int:
        """Header is line one, or line two when only line two looks like one."""
        if not HEADER_HINT.search(lines[0]) and len(lines) > 1 and HEADER_HINT.search(lines[1]):
            return 1
        return 0

    def split_header(self, header_line: str, separator: Pattern[str], rows: List[List[str]]) -> List[str]:
        headers = [h.lower() for h in split_columns(header_line, separator)]
        row_width = get_mode([len(r) for r in rows])
        if row_width and len(headers) < row_width:
            # Header typed with single spaces while the data is column aligned
            resplit = header_line.strip().lower().split()
            if len(resplit) > len(headers):
                headers = resplit
        return headers

    def parse(self, text: str) -> List[DaySegment]:
        """
        Parse a table into day segments with exercises.

        Args:
            text: Raw OCR text already classified as tabular

        Returns:
            One segment per day bucket that produced exercises
        """
        lines = non_empty_lines(text)
        if len(lines) < 2:
            return []

        separator = detect_separator(text)
        header_index = self.find_header(lines)
        rows = [split_columns(line, separator) for line in lines[header_index + 1:]]
        rows = [r for r in rows if len([c for c in r if c]) > 1]

        headers = self.split_header(lines[header_index], separator, rows)
        roles = identify_column_roles(headers)
        logger.debug(f"Tabular headers {headers} mapped to {roles}")

        if roles.exercise is None:
            infer_column_roles(roles, rows)

        segments = []
        for label, bucket in group_rows_by_day(rows, roles):
            exercises = [
                exercise
                for exercise in (exercise_from_row(row, roles, self.language) for row in bucket)
                if exercise is not None
            ]
            if exercises:
                segments.append(DaySegment(label=label, exercises=exercises))

        logger.info(f"Parsed {len(segments)} tabular days")
        return segments
