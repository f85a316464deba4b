"""Tests for fallback day generation."""
from regimen_ocr.parsers.fallback import (
    FallbackGenerator,
    detect_text_sections,
    generate_mock_exercises,
    placeholder_exercise,
    sample_exercise,
)
from regimen_ocr.parsers.models import FALLBACK_PREFIX, DetectedLanguage


class TestSingleDay:
    """The unstructured single day."""

    def test_empty_text_gets_placeholder(self, today):
        day = FallbackGenerator().single_day("", today)
        assert day.name == "Monday, Oct 19 (Unstructured Data)"
        assert day.date == "2026-10-19"
        assert day.intensity == "Medium"
        assert len(day.exercises) == 1
        placeholder = day.exercises[0]
        assert placeholder.name == f"{FALLBACK_PREFIX}Exercise from unstructured text"
        assert (placeholder.sets, placeholder.reps, placeholder.rest_interval) == (1, 1, "00:30")
        assert day.is_fallback is True

    def test_parsed_lines_are_tagged_and_capped(self, today, prose_text):
        day = FallbackGenerator().single_day(prose_text, today)
        assert 1 <= len(day.exercises) <= 2
        assert all(e.name.startswith(FALLBACK_PREFIX) for e in day.exercises)

    def test_cap_is_configurable(self, today):
        day = FallbackGenerator(max_exercises=1).single_day("Squats 3x10\nLunges 3x12", today)
        assert len(day.exercises) == 1

    def test_labels_follow_language(self, today):
        day = FallbackGenerator(DetectedLanguage.SWEDISH).single_day("", today)
        assert day.intensity == "Medel"
        assert day.original_language == "swedish"


class TestSections:
    """Multi-section fallback."""

    def test_no_breaks(self):
        assert detect_text_sections(["one line", "another line"]) is None

    def test_week_markers_break_sections(self):
        sections = detect_text_sections(["Week 1", "some prose here", "Week 2", "more prose here"])
        assert sections == [["Week 1", "some prose here"], ["Week 2", "more prose here"]]

    def test_short_line_after_blank_breaks(self):
        sections = detect_text_sections(["first block line", "", "Short", "tail"])
        assert len(sections) == 2

    def test_days_from_sections(self, today):
        text = "Week 1\nsome prose here\nWeek 2\nmore prose here"
        days = FallbackGenerator().from_sections(text, today)
        assert [d.date for d in days] == ["2026-10-19", "2026-10-20"]
        assert [d.name for d in days] == ["Monday, Oct 19", "Tuesday, Oct 20"]
        assert all(d.is_fallback for d in days)

    def test_short_sections_are_dropped(self, today):
        days = FallbackGenerator().from_sections("Week 1\nab\nWeek 2\ncd", today)
        assert days == []

    def test_generate_falls_back_to_single_day(self, today, prose_text):
        days = FallbackGenerator().generate(prose_text, today)
        assert len(days) == 1
        assert days[0].name.endswith("(Unstructured Data)")


class TestTemplates:
    """Placeholder, sample and template exercises."""

    def test_placeholder(self):
        exercise = placeholder_exercise("Thing")
        assert exercise.name == "[FALLBACK] Thing"
        assert "no structured workout data" in exercise.notes

    def test_sample_exercise(self):
        exercise = sample_exercise()
        assert (exercise.name, exercise.sets, exercise.reps) == ("Sample Exercise", 3, 12)

    def test_mock_count_by_intensity(self):
        assert len(generate_mock_exercises(DetectedLanguage.ENGLISH, "Rest")) == 1
        assert len(generate_mock_exercises(DetectedLanguage.ENGLISH, "Easy")) == 3
        assert len(generate_mock_exercises(DetectedLanguage.ENGLISH, "Medium")) == 4
        assert len(generate_mock_exercises(DetectedLanguage.ENGLISH, "Hard")) == 5

    def test_mock_sets_cycle(self):
        exercises = generate_mock_exercises(DetectedLanguage.ENGLISH, "Hard")
        assert [e.sets for e in exercises] == [2, 3, 4, 2, 3]
        assert exercises[0].distance == "5km"
        assert exercises[0].is_reps is False
        assert exercises[3].duration == "01:00"

    def test_mock_in_language(self):
        exercises = generate_mock_exercises(DetectedLanguage.SWEDISH, "Lätt")
        assert [e.name for e in exercises] == ["Löpning", "Knäböj", "Armhävningar"]

    def test_mock_unknown_language_uses_english(self):
        exercises = generate_mock_exercises(DetectedLanguage.GERMAN, "Leicht")
        assert exercises[0].name == "Running"
        assert len(exercises) == 3
