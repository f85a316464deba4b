"""
Exercise Extractor

Turns a day's narrative content, or a single tabular row, into Exercise
records. Narrative lines go through OCR clean-up first, then an ordered
list of strategies reads their numbers.
"""

import logging
import re
from typing import Dict, List, Optional, Sequence, Tuple

from ..utils import convert_to_duration_format, convert_to_rest_format, leading_int, pad2
from .base import ColumnRoles, ExerciseDraft, ExerciseStrategy
from .format_classifier import (
    EQUIPMENT_TERM_PATTERN,
    FITNESS_TERM_PATTERN,
    NORDIC_EXERCISE_PATTERN,
)
from .language_patterns import (
    PATTERN_SETS,
    compiled_patterns,
    get_language_patterns,
    resolve_language,
    word_alternation,
)
from .models import DetectedLanguage, Exercise

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Shared vocabularies
# ---------------------------------------------------------------------------

REST_WORDS = (
    "vila", "hvile", "rest", "pause", "lepo", "recovery", "recuperación",
    "récupération", "erholung", "återhämtning", "restitusjon", "restitution",
    "palautuminen",
)
_REST = word_alternation(REST_WORDS)
_SECONDS = "sekuntia|sekunder|seconds|second|sekund|secs|sek|sec|s"
_METERS = r"(?:meters|metres|meter|m)\b"

ALL_SET_REP_WORDS = tuple(sorted({
    word
    for patterns in PATTERN_SETS.values()
    for word in patterns.set_patterns + patterns.rep_patterns
} | {"gånger", "rounds", "ronder", "sarjat"}))
_SET_REP = word_alternation(ALL_SET_REP_WORDS)

GENERIC_NAME_TERMS = (
    "exercise", "workout", "training", "övning", "träning", "pass",
    "øvelse", "trening", "økt", "træning", "session", "harjoitus", "liike",
)

# Curated exercise lexicon, english and swedish spellings side by side
EXERCISE_TERMS = (
    r"armhävningar|push-?ups",
    r"knäböj|squats",
    r"utfall|lunges",
    r"plankan|plank",
    r"situps|sit-?ups",
    r"rygglyft|backraise",
    r"marklyft|deadlift",
    r"chins|pull-?ups",
    r"dips|tricepspress",
    r"benpress|leg press",
    r"axelpress|shoulder press",
    r"bicepscurls|biceps",
    r"triceps|tricepsextensioner",
    r"rodd|row",
    r"bänkpress|bench press",
    r"mountain climbers|bergsklättrare",
    r"burpees",
    r"latsdrag|latpulldown",
    r"sidoplankan|side plank",
    r"ryggextension|back extension",
)
EXERCISE_TERM_REGEXES = tuple(re.compile(term, re.IGNORECASE) for term in EXERCISE_TERMS)

COMPOUND_PREFIXES = ("arm", "ben", "rygg", "mag", "bröst", "axel", "triceps", "biceps")
COMPOUND_SUFFIXES = ("hävningar", "böj", "lyft", "press", "drag", "curl", "extension")
SPLIT_COMPOUND = re.compile(
    rf"\b({'|'.join(COMPOUND_PREFIXES)})\s+({'|'.join(COMPOUND_SUFFIXES)})",
    re.IGNORECASE,
)

SPRINT_NOTE_WORDS: Dict[DetectedLanguage, Tuple[str, str]] = {
    DetectedLanguage.SWEDISH: ("med", "vila"),
    DetectedLanguage.NORWEGIAN: ("med", "hvile"),
    DetectedLanguage.DANISH: ("med", "hvile"),
    DetectedLanguage.FINNISH: ("ja", "lepo"),
    DetectedLanguage.GERMAN: ("mit", "Pause"),
    DetectedLanguage.FRENCH: ("avec", "repos"),
    DetectedLanguage.SPANISH: ("con", "descanso"),
}

CIRCUIT_NOTE = "Part of core training circuit ({rounds} rounds)"


# ---------------------------------------------------------------------------
# Line level regexes
# ---------------------------------------------------------------------------

LINE_SPLIT = re.compile(r"[\n;]")
INLINE_BULLET = re.compile(r"\s+[•*]\s+")
LEADING_BULLET = re.compile(r"^\s*[-•*]+\s*")
DIGIT = re.compile(r"\d")
STARTS_WITH_LETTER = re.compile(r"^[^\W\d_]")

OCR_ONE = re.compile(r"(?<=\d)[lI|](?=\d)")
OCR_ZERO_BETWEEN = re.compile(r"(?<=\d)[oO](?=\d)")
OCR_ZERO_AFTER = re.compile(r"(?<=\d)[oO](?![^\W\d_])")
OCR_ZERO_BEFORE = re.compile(r"(?<![^\W\d_])[oO](?=\d)")
X_SPACING = re.compile(r"(\d)\s*[x×]\s*(\d)", re.IGNORECASE)
COLON_SPACING = re.compile(r"(?<=[^\W\d_]):(?=\S)")
WHITESPACE = re.compile(r"\s+")

SWEDISH_TYPOS = (
    (re.compile(r"\barrnhavningar\b", re.IGNORECASE), "armhävningar"),
    (re.compile(r"\bknaböj\b", re.IGNORECASE), "knäböj"),
    (re.compile(r"\blatt\b", re.IGNORECASE), "lätt"),
    (re.compile(r"\bsvar\b", re.IGNORECASE), "svår"),
    (re.compile(r"\blopning\b", re.IGNORECASE), "löpning"),
)

# Section names that label a block rather than describe an exercise. They
# only count as headers when the line carries no numbers.
TOPICAL_HEADER_PATTERNS = (
    re.compile(r"^(?:uppvärmning|nedvarvning|styrka|kondition|cardio|stretching|återhämtning|vila|stretch)\b", re.IGNORECASE),
    re.compile(r"^(?:dynamisk\s+stretching|statisk\s+stretching|avslappning|rörlighet)\b", re.IGNORECASE),
    re.compile(r"^(?:oppvarming|nedvarming|styrke|kondisjon|restitusjon|hvile|tøying)\b", re.IGNORECASE),
    re.compile(r"^(?:opvarmning|nedkøling|restitution|udstrækning)\b", re.IGNORECASE),
    re.compile(r"^(?:lämmittely|jäähdyttely|voima|kestävyys|venyttely|palautuminen|lepo)\b", re.IGNORECASE),
    re.compile(r"^(?:warm[\s-]?up|cool[\s-]?down|strength|stretching|recovery|rest)\b", re.IGNORECASE),
)

# Plan structure and instructions, always headers
STRUCTURAL_HEADER_PATTERNS = (
    re.compile(r"^(?:del|pass|träningspass|övning|träning|program|vecka)\s*\d+", re.IGNORECASE),
    re.compile(r"^(?:övningar|exercises|øvelser|harjoitukset|träning|workout|trening|træning|harjoitus)\b", re.IGNORECASE),
    re.compile(r"^(?:morgon|dag|kväll|natt|vecka|månad|period|fas)\b", re.IGNORECASE),
    re.compile(r"^(?:morning|day|evening|night|week|month|period|phase)\b", re.IGNORECASE),
    re.compile(r"^(?:instruktioner|anvisningar|notera|notering|obs|viktigt)\b", re.IGNORECASE),
    re.compile(r"^(?:instructions|note|important|tips|guidelines)\b", re.IGNORECASE),
)
BARE_LABEL = re.compile(r"^[^:]+:$")
LABEL_PAYLOAD = re.compile(r"^[^:]{1,40}:\s*(.+)$")

CIRCUIT_HEADER = re.compile(
    r"^\s*[-•*]?\s*(?:core[\s-]?träning|bålträning|core[\s-]?training|core\s+workout|kjernetrening|kjerneøvelser)"
    r"\s*:\s*(\d+)\s*(?:ronder|set|varv|omgångar|rounds|sets|runder|sett)\b\s*(?:av|of)?\s*(.*)$",
    re.IGNORECASE,
)

EMBEDDED_SPLIT = re.compile(r"[,;]")
EMBEDDED_MAX_LENGTH = 30


# ---------------------------------------------------------------------------
# Exercise level regexes
# ---------------------------------------------------------------------------

SPRINT_COUNT_FIRST = re.compile(
    rf"(\d+)\s*[x×]\s*(\d+)\s*{_METERS}(?:\D*?(\d+)\s*(?:{_SECONDS})\b)?",
    re.IGNORECASE,
)
SPRINT_DISTANCE_FIRST = re.compile(
    rf"(\d+)\s*{_METERS}\s*[x×]\s*(\d+)(?:\D*?(\d+)\s*(?:{_SECONDS})\b)?",
    re.IGNORECASE,
)
SWEDISH_SET_REP = re.compile(
    r"(\d+)\s*(?:sets|set)\s*[x×]\s*(\d+)\s*(?:repetitioner|reps|rep)\b",
    re.IGNORECASE,
)
SWEDISH_PER_SIDE = re.compile(
    r"per\s+(?:ben|arm|sida)|varje\s+(?:ben|arm|sida)|per\s+side|each\s+(?:leg|arm|side)",
    re.IGNORECASE,
)

SETS_X_REPS = re.compile(r"(\d+)\s*[x×]\s*(\d+)", re.IGNORECASE)
GENERIC_SETS = re.compile(r"(\d+)\s*(?:sets|set)\b(?:\s+of)?", re.IGNORECASE)
GENERIC_REPS = re.compile(r"(\d+)\s*(?:reps|rep)\b(?:\s+per\s+set)?", re.IGNORECASE)

DISTANCE = re.compile(
    r"(\d+(?:[.,]\d+)?)\s*(?:km|kilometers?|meters?|metres?|meter|m|yards?|miles?|feet|ft)\b",
    re.IGNORECASE,
)
DURATION = re.compile(
    r"\b(\d{1,2}):(\d{2})\b"
    r"|(\d+)\s*(?:minutes?|minuter|mins?|hours?|h|seconds?|secs?|sec|sekunder|sekund|sek|s)\b",
    re.IGNORECASE,
)
REST_CONNECTOR_BEFORE = re.compile(rf"(?:with|med|mit|avec|con|{_REST})\s*$", re.IGNORECASE)
REST_WORD_AFTER = re.compile(rf"^\s*(?:{_REST})\b", re.IGNORECASE)

REST_AFTER_NUMBER = re.compile(
    rf"(\d+)\s*(?:{_SECONDS})\b(\s+(?:{_REST})\b)?", re.IGNORECASE
)
REST_BEFORE_NUMBER = re.compile(
    rf"\b(?:{_REST})\s+(\d+)\s*(?:{_SECONDS})\b", re.IGNORECASE
)
WITH_REST = re.compile(
    rf"\b(?:med|with)\s+(\d+)\s*(?:{_SECONDS})\s+(?:vila|hvile|rest|pause|återhämtning)\b",
    re.IGNORECASE,
)
MAX_IMPLICIT_REST = 90

# Name extraction
NAME_BEFORE_DIGITS = re.compile(r"^([^:0-9]+)(?=[:0-9]|$)")
NAME_BEFORE_SET_WORD = re.compile(rf"^(.*?)(?=\s*[-:]|\s*\d+\s*(?:{_SET_REP})\b|$)", re.IGNORECASE)
NAME_AFTER_SETS_OF = re.compile(
    rf"^\d+\s*(?:{_SET_REP})\s+(?:(?:of|av|med)\s+)?([^:0-9]+)", re.IGNORECASE
)
NAME_AFTER_SETS_X_REPS = re.compile(r"^\d+\s*[x×]\s*\d+\s+([^:0-9]+)", re.IGNORECASE)
NAME_COLON_VALUE_SPLIT = re.compile(r"\s+(?:\d+|set\b|sets\b|reps\b)", re.IGNORECASE)
NAME_TRAILING_COUNT = re.compile(rf"\d+\s*(?:{_SET_REP})\b.*$", re.IGNORECASE)
NAME_TRAILING_WORD_COUNT = re.compile(rf"\b(?:{_SET_REP})\s*\d+.*$", re.IGNORECASE)
NAME_TRAILING_PUNCT = re.compile(r"[\s\-–—:,.(/]+$")
NAME_TRAILING_X = re.compile(r"\s+[x×]$", re.IGNORECASE)
NAME_MAX_LENGTH = 30

# Tabular rows
TABLE_HEADER_NAME = re.compile(r"\b(?:exercises?|name|sets?|reps?)\b", re.IGNORECASE)
TABLE_SETS_BY_REPS = re.compile(r"(\d+)\s*[xX×]\s*\d+")
TABLE_REPS_BY_SETS = re.compile(r"\d+\s*[xX×]\s*(\d+)")
TABLE_DISTANCE = re.compile(r"\d+\s*(?:km|meters?|metres|meter|m)\b", re.IGNORECASE)
TABLE_DURATION = re.compile(
    r"\d+\s*(?:s|secs?|seconds?|sek|min|mins|minutes?|minuter|h|hours?)\b", re.IGNORECASE
)


# ---------------------------------------------------------------------------
# Line classification helpers
# ---------------------------------------------------------------------------

def is_header_line(line: str) -> bool:
    """True when a line labels a block instead of describing an exercise."""
    text = LEADING_BULLET.sub("", line).strip()
    if not text:
        return False
    if CIRCUIT_HEADER.match(text) or BARE_LABEL.match(text):
        return True
    if any(p.match(text) for p in STRUCTURAL_HEADER_PATTERNS):
        return True
    if not DIGIT.search(text) and any(p.match(text) for p in TOPICAL_HEADER_PATTERNS):
        return True
    return False


def header_payload(line: str) -> Optional[str]:
    """
    Exercise text carried by a line, after dropping any header label.

    Returns the line itself for ordinary lines, the text after the label for
    "Day 1: Squats 3x10"-style lines, and None for pure headers.
    """
    if not is_header_line(line):
        return line
    if CIRCUIT_HEADER.match(line):
        return None
    match = LABEL_PAYLOAD.match(line)
    if match:
        payload = match.group(1).strip()
        if STARTS_WITH_LETTER.match(payload) and DIGIT.search(payload):
            return payload
    return None


def is_generic_exercise_name(name: str) -> bool:
    lowered = name.lower()
    return len(lowered) < 3 or any(term in lowered for term in GENERIC_NAME_TERMS)


def looks_like_exercise_fragment(fragment: str) -> bool:
    return bool(
        FITNESS_TERM_PATTERN.search(fragment)
        or EQUIPMENT_TERM_PATTERN.search(fragment)
        or NORDIC_EXERCISE_PATTERN.search(fragment)
        or any(r.search(fragment) for r in EXERCISE_TERM_REGEXES)
    )


def _first_number(line: str, regexes: Sequence[re.Pattern]) -> Optional[int]:
    for regex in regexes:
        match = regex.search(line)
        if match:
            return int(match.group(1))
    return None


def _near_rest_word(line: str, match: re.Match) -> bool:
    return bool(
        REST_CONNECTOR_BEFORE.search(line[:match.start()])
        or REST_WORD_AFTER.match(line[match.end():])
    )


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------

class SprintIntervalStrategy(ExerciseStrategy):
    """'10 x 100m [with 60s rest]' and '100m x 10' interval blocks"""

    name = "sprint_interval"

    def attempt(self, draft, line, extractor):
        match = SPRINT_COUNT_FIRST.search(line)
        if match:
            intervals, distance = match.group(1), match.group(2)
        else:
            match = SPRINT_DISTANCE_FIRST.search(line)
            if not match:
                return False
            distance, intervals = match.group(1), match.group(2)

        rest = match.group(3)
        draft.sets = 1
        draft.is_reps = False
        draft.reps = int(intervals)
        draft.distance = f"{distance}m"
        if rest:
            draft.rest_interval = f"00:{pad2(int(rest))}"

        if not draft.name or is_generic_exercise_name(draft.name):
            draft.name = extractor.patterns.sprint_name

        if not draft.notes:
            connector, rest_word = SPRINT_NOTE_WORDS.get(extractor.language, ("with", "rest"))
            draft.notes = f"{intervals} x {distance}m"
            if rest:
                draft.notes += f" {connector} {rest}s {rest_word}"
        return True


class SwedishSetRepStrategy(ExerciseStrategy):
    """Literal '3 set x 15 reps' as written in swedish plans"""

    name = "swedish_set_rep"

    def attempt(self, draft, line, extractor):
        if extractor.language != DetectedLanguage.SWEDISH:
            return False
        match = SWEDISH_SET_REP.search(line)
        if not match:
            return False
        draft.sets = int(match.group(1)) or 3
        draft.reps = int(match.group(2)) or 10
        draft.is_reps = True
        if SWEDISH_PER_SIDE.search(line):
            draft.per_side = True
        extractor.extract_rest(draft, line)
        return True


class RegularExerciseStrategy(ExerciseStrategy):
    """Independent sets, reps, distance, duration and rest extraction"""

    name = "regular"

    def attempt(self, draft, line, extractor):
        compiled = extractor.compiled

        explicit = SETS_X_REPS.search(line)
        if explicit and 1 <= int(explicit.group(1)) <= 10 and int(explicit.group(2)) >= 1:
            draft.sets = int(explicit.group(1))
            draft.reps = int(explicit.group(2))
            draft.is_reps = True
        else:
            sets = _first_number(line, compiled.set_regexes + (GENERIC_SETS,))
            reps = _first_number(line, compiled.rep_regexes + (GENERIC_REPS,))
            if sets is not None:
                draft.sets = sets
            if reps is not None:
                draft.reps = reps
                draft.is_reps = True

        distance = DISTANCE.search(line)
        if distance:
            draft.distance = WHITESPACE.sub(" ", distance.group(0).strip())
            draft.is_reps = False

        duration_at = None
        if not draft.distance:
            for match in DURATION.finditer(line):
                if _near_rest_word(line, match):
                    continue
                if match.group(1) is not None:
                    draft.duration = f"{pad2(int(match.group(1)))}:{match.group(2)}"
                else:
                    draft.duration = convert_to_duration_format(match.group(0))
                draft.is_reps = False
                duration_at = match.start()
                break

        if extractor.is_per_side(line):
            draft.per_side = True

        extractor.extract_rest(draft, line, skip_at=duration_at)
        return True


DEFAULT_STRATEGIES: Tuple[ExerciseStrategy, ...] = (
    SprintIntervalStrategy(),
    SwedishSetRepStrategy(),
    RegularExerciseStrategy(),
)


# ---------------------------------------------------------------------------
# Extractor
# ---------------------------------------------------------------------------

class ExerciseExtractor:
    """Parses exercise records out of one day's content for a language"""

    def __init__(self, language=DetectedLanguage.ENGLISH, strategies=None):
        self.language = resolve_language(language)
        self.patterns = get_language_patterns(self.language)
        self.compiled = compiled_patterns(self.language)
        self.strategies = tuple(strategies) if strategies is not None else DEFAULT_STRATEGIES

        labels = set(self.patterns.all_intensity_patterns)
        labels.update(get_language_patterns(DetectedLanguage.ENGLISH).all_intensity_patterns)
        self._intensity_words = tuple(sorted(labels))
        self._intensity_label_line = re.compile(
            rf"^(?:{word_alternation(self._intensity_words)}):?$", re.IGNORECASE
        )
        self._intensity_word = re.compile(
            rf"\b(?:{word_alternation(self._intensity_words)})\b", re.IGNORECASE
        )
        self._english_per_side = compiled_patterns(DetectedLanguage.ENGLISH).per_side_regex

    # -- public -----------------------------------------------------------

    def parse_content(self, content: str) -> List[Exercise]:
        """
        Parse a day's narrative content into exercises.

        Args:
            content: Text of one day block

        Returns:
            Exercises in reading order, circuit members included
        """
        return [draft.to_exercise() for draft in self.parse_drafts(content)]

    def parse_drafts(self, content: str) -> List[ExerciseDraft]:
        if not content or not content.strip():
            return []

        lines = self.preprocess(self.split_lines(content))
        drafts: List[ExerciseDraft] = []

        for position, line in enumerate(lines, start=1):
            if not line or self.is_intensity_only_line(line):
                continue
            payload = header_payload(line)
            if payload is None:
                logger.debug(f"Skipping header line: {line}")
                continue
            try:
                embedded = self.find_embedded_exercises(payload)
                if len(embedded) > 1:
                    drafts.extend(embedded)
                    continue
                drafts.append(self.parse_unit(payload, position))
            except Exception as e:
                logger.warning(f"Failed to parse exercise line {line!r}: {e}")
                drafts.append(self.placeholder(line, position))

        self.apply_circuits(drafts, content)
        return drafts

    def parse_unit(self, line: str, position: int, fallback_name: Optional[str] = None) -> ExerciseDraft:
        """Parse a single exercise line with the first matching strategy."""
        clean = LEADING_BULLET.sub("", line).strip()
        draft = ExerciseDraft(name=self.extract_name(clean))

        for strategy in self.strategies:
            if strategy.attempt(draft, clean, self):
                logger.debug(f"Parsed {clean!r} with {strategy.name} strategy")
                break

        if not draft.name:
            draft.name = fallback_name or f"Exercise {position}"
        if draft.distance:
            draft.is_reps = False
        return draft

    def placeholder(self, line: str, position: int) -> ExerciseDraft:
        return ExerciseDraft(
            name=f"Exercise {position}",
            notes=f"Could not parse line: {line.strip()[:80]}",
        )

    # -- line handling ----------------------------------------------------

    @staticmethod
    def split_lines(content: str) -> List[str]:
        lines = []
        for raw in LINE_SPLIT.split(content):
            for piece in INLINE_BULLET.split(raw):
                piece = LEADING_BULLET.sub("", piece).strip()
                if piece:
                    lines.append(piece)
        return lines

    def preprocess(self, lines: List[str]) -> List[str]:
        """Merge lines OCR split apart, then fix character level noise."""
        merged: List[str] = []
        i = 0
        while i < len(lines):
            line = lines[i].strip()
            nxt = lines[i + 1].strip() if i + 1 < len(lines) else None

            if nxt is not None and self._intensity_label_line.match(line):
                merged.append(f"{line.rstrip(':')}: {nxt}")
                i += 2
                continue

            if (
                nxt is not None
                and len(line) < 20
                and not DIGIT.search(line)
                and not is_header_line(line)
                and DIGIT.search(nxt)
                and not is_header_line(nxt)
            ):
                merged.append(f"{line} {nxt}")
                i += 2
                continue

            merged.append(line)
            i += 1

        return [self.correct_line(line) for line in merged]

    def correct_line(self, line: str) -> str:
        fixed = OCR_ONE.sub("1", line)
        fixed = OCR_ZERO_BETWEEN.sub("0", fixed)
        fixed = OCR_ZERO_AFTER.sub("0", fixed)
        fixed = OCR_ZERO_BEFORE.sub("0", fixed)
        fixed = X_SPACING.sub(r"\1 x \2", fixed)
        fixed = COLON_SPACING.sub(": ", fixed)
        fixed = WHITESPACE.sub(" ", fixed)

        if self.language == DetectedLanguage.SWEDISH:
            for typo, correction in SWEDISH_TYPOS:
                fixed = typo.sub(lambda m, c=correction: c.capitalize() if m.group(0)[0].isupper() else c, fixed)
        return fixed.strip()

    def is_intensity_only_line(self, line: str) -> bool:
        lowered = line.lower().strip().rstrip(":")
        if lowered in self._intensity_words:
            return True
        return (
            bool(self._intensity_word.search(lowered))
            and len(lowered.split()) < 4
            and not DIGIT.search(lowered)
        )

    def is_per_side(self, line: str) -> bool:
        return bool(self.compiled.per_side_regex.search(line) or self._english_per_side.search(line))

    def find_embedded_exercises(self, line: str) -> List[ExerciseDraft]:
        """Several short exercises written on one comma separated line."""
        parts = [p.strip() for p in EMBEDDED_SPLIT.split(line) if p.strip()]
        if len(parts) < 2:
            return []
        if not all(len(p) < EMBEDDED_MAX_LENGTH and looks_like_exercise_fragment(p) for p in parts):
            return []
        logger.debug(f"Found {len(parts)} embedded exercises in {line!r}")
        return [self.parse_unit(part, index) for index, part in enumerate(parts, start=1)]

    # -- names ------------------------------------------------------------

    def extract_name(self, line: str) -> str:
        """Pick the exercise name out of a line, trying six readings in order."""
        name = ""

        match = NAME_BEFORE_DIGITS.match(line)
        if match and self._usable_name(match.group(1)):
            name = match.group(1).strip()
            label_followed = line[match.end():].startswith(":")
            if label_followed and self._is_label(name):
                name = self._name_after_label(line) or name

        if not name and not DIGIT.match(line):
            match = NAME_BEFORE_SET_WORD.match(line)
            if match and self._usable_name(match.group(1)):
                name = match.group(1).strip()

        if not name:
            match = NAME_AFTER_SETS_OF.match(line) or NAME_AFTER_SETS_X_REPS.match(line)
            if match and self._usable_name(match.group(1)):
                name = match.group(1).strip()

        if not name and ":" in line:
            name = self._name_after_label(line) or ""

        if not name:
            name = self._name_from_lexicon(line) or ""

        if not name:
            name = re.split(r"[,:;]", line)[0].strip()
            if not self._usable_name(name):
                name = ""

        name = self._clean_name(name)
        if self.language == DetectedLanguage.SWEDISH and name:
            name = self._repair_compound(name, line)
        return name

    @staticmethod
    def _usable_name(candidate: Optional[str]) -> bool:
        return bool(candidate and re.search(r"[^\W\d_]", candidate))

    def _is_label(self, name: str) -> bool:
        return (
            bool(self._intensity_label_line.match(name))
            or is_generic_exercise_name(name)
            or is_header_line(name)
        )

    @staticmethod
    def _name_after_label(line: str) -> Optional[str]:
        label, _, value = line.partition(":")
        if len(label) >= 20:
            return None
        candidate = NAME_COLON_VALUE_SPLIT.split(value.strip())[0].strip()
        if len(candidate) > 2 and STARTS_WITH_LETTER.match(candidate):
            return candidate
        return None

    @staticmethod
    def _name_from_lexicon(line: str) -> Optional[str]:
        for regex in EXERCISE_TERM_REGEXES:
            match = regex.search(line)
            if not match:
                continue
            part = next((p for p in re.split(r"[,;:]", line) if regex.search(p)), match.group(0))
            part = re.split(r"\d", part)[0].strip()
            return part if len(part) >= len(match.group(0)) else match.group(0)
        return None

    @staticmethod
    def _clean_name(name: str) -> str:
        cleaned = NAME_TRAILING_COUNT.sub("", name)
        cleaned = NAME_TRAILING_WORD_COUNT.sub("", cleaned)
        cleaned = NAME_TRAILING_PUNCT.sub("", cleaned.strip())
        cleaned = NAME_TRAILING_X.sub("", cleaned).strip()

        if len(cleaned) > NAME_MAX_LENGTH:
            shortened = " ".join(cleaned[:NAME_MAX_LENGTH].split()[:-1])
            if len(shortened) > 3:
                cleaned = shortened
        return cleaned

    @staticmethod
    def _repair_compound(name: str, line: str) -> str:
        repaired = SPLIT_COMPOUND.sub(lambda m: m.group(1) + m.group(2).lower(), name)
        lowered = repaired.lower()
        if lowered.endswith(COMPOUND_PREFIXES):
            remainder = line[line.find(name) + len(name):] if name in line else ""
            word = re.match(r"\s*([^\W\d_]+)", remainder)
            if word and word.group(1).lower().startswith(COMPOUND_SUFFIXES):
                repaired = f"{repaired}{word.group(1).lower()}"
        return repaired

    # -- rest -------------------------------------------------------------

    def extract_rest(self, draft: ExerciseDraft, line: str, skip_at: Optional[int] = None) -> None:
        """Read the rest interval, expressed as '00:SS' without minute rollover."""
        for match in REST_AFTER_NUMBER.finditer(line):
            has_rest_word = match.group(2) is not None
            if match.start() == skip_at and not has_rest_word:
                continue
            seconds = int(match.group(1))
            if seconds <= MAX_IMPLICIT_REST:
                draft.rest_interval = f"00:{pad2(seconds)}"
            break

        match = REST_BEFORE_NUMBER.search(line)
        if match:
            draft.rest_interval = f"00:{pad2(int(match.group(1)))}"

        match = WITH_REST.search(line)
        if match:
            draft.rest_interval = f"00:{pad2(int(match.group(1)))}"

    # -- circuits ---------------------------------------------------------

    def apply_circuits(self, drafts: List[ExerciseDraft], content: str) -> None:
        """
        Add the members of "Core training: N rounds of ..." blocks.

        Members already parsed line by line are replaced by the circuit copy,
        matched on name, reps, distance and duration.
        """
        for rounds, members in find_circuits(content):
            note = CIRCUIT_NOTE.format(rounds=rounds)
            for index, raw in enumerate(members, start=1):
                line = self.correct_line(LEADING_BULLET.sub("", raw))
                if not line or self.is_intensity_only_line(line) or is_header_line(line):
                    continue
                try:
                    draft = self.parse_unit(line, index, fallback_name=f"Core Exercise {index}")
                except Exception as e:
                    logger.warning(f"Failed to parse circuit line {line!r}: {e}")
                    continue
                draft.sets = rounds
                draft.notes = note

                key = _dedup_key(draft)
                for i, existing in enumerate(drafts):
                    if _dedup_key(existing) == key:
                        drafts[i] = draft
                        break
                else:
                    drafts.append(draft)


def _dedup_key(draft: ExerciseDraft) -> Tuple[str, int, str, str]:
    return (draft.name.casefold(), draft.reps, draft.distance, draft.duration)


def find_circuits(content: str) -> List[Tuple[int, List[str]]]:
    """Circuit blocks as (rounds, member lines); members run to a blank, header or letter-led line."""
    circuits = []
    lines = content.split("\n")
    for i, line in enumerate(lines):
        match = CIRCUIT_HEADER.match(line)
        if not match:
            continue
        rounds = int(match.group(1)) or 3
        members = [part.strip() for part in match.group(2).split(";") if part.strip()]
        for follow in lines[i + 1:]:
            stripped = follow.strip()
            if not stripped or STARTS_WITH_LETTER.match(stripped) or is_header_line(stripped):
                break
            members.append(stripped)
        circuits.append((rounds, members))
    return circuits


def parse_exercises(content: str, language=DetectedLanguage.ENGLISH) -> List[Exercise]:
    return ExerciseExtractor(language).parse_content(content)


def _cell(columns: List[str], index: Optional[int]) -> str:
    if index is None or index >= len(columns):
        return ""
    return columns[index].strip()


def exercise_from_row(columns: List[str], roles: ColumnRoles, language=DetectedLanguage.ENGLISH) -> Optional[Exercise]:
    """
    Build an exercise from one row of a tabular export.

    Args:
        columns: Cells of the row
        roles: Column index per role
        language: Detected language, used for per-side idioms

    Returns:
        Exercise, or None for header-like or empty rows
    """
    if len(columns) <= 1:
        return None

    name = _cell(columns, roles.exercise if roles.exercise is not None else 0)
    if not name or TABLE_HEADER_NAME.search(name):
        return None

    draft = ExerciseDraft(name=name)

    sets_value = _cell(columns, roles.sets)
    if sets_value:
        match = TABLE_SETS_BY_REPS.search(sets_value)
        sets = int(match.group(1)) if match else leading_int(sets_value)
        if sets is not None:
            draft.sets = sets

    reps_value = _cell(columns, roles.reps)
    if reps_value:
        match = TABLE_REPS_BY_SETS.search(reps_value)
        if match:
            draft.reps = int(match.group(1))
        elif TABLE_DISTANCE.search(reps_value):
            draft.is_reps = False
            draft.distance = reps_value
        elif TABLE_DURATION.search(reps_value):
            draft.is_reps = False
            draft.duration = convert_to_duration_format(reps_value)
        else:
            reps = leading_int(reps_value)
            if reps is not None:
                draft.reps = reps

    rest_value = _cell(columns, roles.rest)
    if rest_value:
        draft.rest_interval = convert_to_rest_format(rest_value)

    # weight has no Exercise field
    draft.notes = _cell(columns, roles.notes)

    compiled = compiled_patterns(resolve_language(language))
    english = compiled_patterns(DetectedLanguage.ENGLISH)
    if compiled.per_side_regex.search(name) or english.per_side_regex.search(name):
        draft.per_side = True

    return draft.to_exercise()
