"""Tests for the per-language lexicons."""
import pytest

from regimen_ocr.parsers.language_patterns import (
    PATTERN_SETS,
    compiled_patterns,
    get_language_patterns,
    resolve_language,
    word_alternation,
)
from regimen_ocr.parsers.models import DetectedLanguage


class TestPatternStore:
    def test_every_language_has_a_set(self):
        assert set(PATTERN_SETS) == set(DetectedLanguage)

    def test_every_language_has_seven_weekdays(self):
        for patterns in PATTERN_SETS.values():
            assert len(patterns.weekdays) == 7

    def test_store_is_read_only(self):
        with pytest.raises(TypeError):
            PATTERN_SETS[DetectedLanguage.ENGLISH] = None

    def test_unknown_language_falls_back_to_english(self):
        assert resolve_language("klingon") == DetectedLanguage.ENGLISH
        assert resolve_language("Swedish") == DetectedLanguage.SWEDISH
        assert get_language_patterns(None).language == DetectedLanguage.ENGLISH

    def test_only_nordic_sets_have_secondary_terms(self):
        assert get_language_patterns(DetectedLanguage.FINNISH).nordic_terms
        assert get_language_patterns(DetectedLanguage.GERMAN).nordic_terms == ()


class TestCompiledPatterns:
    def test_compiled_once(self):
        assert compiled_patterns(DetectedLanguage.SWEDISH) is compiled_patterns(DetectedLanguage.SWEDISH)

    def test_weekday_lookup(self):
        compiled = compiled_patterns(DetectedLanguage.ENGLISH)
        assert compiled.weekday_for("Friday (easy)") == "Friday"
        assert compiled.weekday_for("Wed: run") == "Wednesday"
        assert compiled.weekday_for("I sat down") is None

    def test_day_regex(self):
        compiled = compiled_patterns(DetectedLanguage.SWEDISH)
        match = compiled.day_regex.search("Dag 2: Knäböj")
        assert match.group(1) == "2"

    def test_word_alternation_longest_first(self):
        assert word_alternation(["rep", "reps"]) == "reps|rep"
