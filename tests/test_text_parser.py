"""Tests for the OCR text parsing pipeline."""
from datetime import date

from regimen_ocr import is_tabular, parse_workout_text
from regimen_ocr.parsers.day_segmenter import DaySegmenter
from regimen_ocr.parsers.models import FALLBACK_PREFIX, DetectedLanguage, WorkoutDay
from regimen_ocr.parsers.text_parser import (
    TextParser,
    ensure_exercises,
    has_training_days,
    tabular_day_name,
)


class ExplodingSegmenter(DaySegmenter):
    def segment(self, text, language):
        raise RuntimeError("boom")


class TestParseWorkoutText:
    """End to end parsing."""

    def test_day_markers(self, english_day_plan, today):
        days = parse_workout_text(english_day_plan, today=today)
        assert [d.date for d in days] == ["2026-10-19", "2026-10-20", "2026-10-21"]
        assert [d.name for d in days] == ["Monday, Oct 19", "Tuesday, Oct 20", "Wednesday, Oct 21"]
        assert [d.source_label for d in days] == ["Day 1", "Day 2", "Day 3"]
        assert all(d.original_language == "english" for d in days)
        assert days[1].exercises[0].distance == "5km"

    def test_swedish_days_use_training_type(self, swedish_day_plan, today):
        days = parse_workout_text(swedish_day_plan, today=today)
        assert [d.intensity for d in days] == ["Svår", "Medel"]
        assert days[0].original_language == "swedish"
        assert days[0].exercises[0].name == "Knäböj"

    def test_weekday_plan(self, weekday_plan, today):
        days = parse_workout_text(weekday_plan, today=today)
        assert len(days) == 3
        assert [d.intensity for d in days] == ["Medium", "Medium", "Easy"]

    def test_tabular_plan(self, tabular_plan, today):
        days = parse_workout_text(tabular_plan, today=today)
        assert len(days) == 1
        assert days[0].name == "Monday, Oct 19"
        assert days[0].intensity == "Medium"
        assert [e.name for e in days[0].exercises] == ["Squat", "Bench Press", "Deadlift"]

    def test_tabular_plan_with_days(self, tabular_plan_with_days, today):
        days = parse_workout_text(tabular_plan_with_days, today=today)
        assert [d.name for d in days] == ["Monday, Oct 19", "Tuesday, Oct 20"]
        assert [d.source_label for d in days] == ["Monday", "Wednesday"]
        assert [d.intensity for d in days] == ["Easy", "Easy"]

    def test_unstructured_prose_falls_back(self, prose_text, today):
        days = parse_workout_text(prose_text, today=today)
        assert len(days) == 1
        assert days[0].name == "Monday, Oct 19 (Unstructured Data)"
        assert days[0].is_fallback is True
        assert all(e.name.startswith(FALLBACK_PREFIX) for e in days[0].exercises)

    def test_multi_section_fallback(self, today):
        days = parse_workout_text("Week 1\nsome prose here\nWeek 2\nmore prose here", today=today)
        assert [d.date for d in days] == ["2026-10-19", "2026-10-20"]
        assert all(d.is_fallback for d in days)

    def test_empty_input_never_returns_empty(self, today):
        for text in ("", "   ", None):
            days = parse_workout_text(text, today=today)
            assert len(days) == 1
            assert len(days[0].exercises) == 1

    def test_every_day_has_an_exercise(self, english_day_plan, section_plan, prose_text, today):
        for text in (english_day_plan, section_plan, prose_text):
            assert all(day.exercises for day in parse_workout_text(text, today=today))

    def test_defaults_to_current_date(self, english_day_plan):
        days = parse_workout_text(english_day_plan)
        assert days[0].date == date.today().isoformat()

    def test_pipeline_errors_degrade_to_fallback(self, english_day_plan, today):
        days = TextParser(today=today, segmenter=ExplodingSegmenter()).parse(english_day_plan)
        assert len(days) == 1
        assert days[0].name.endswith("(Unstructured Data)")

    def test_two_line_table_reads_as_narrative(self, today):
        """Fewer than three lines is never a table, so default sets and reps apply."""
        text = "Day Exercise Sets Reps\nMonday  Squats  4  12"
        assert is_tabular(text) is False
        days = parse_workout_text(text, today=today)
        exercises = [e for day in days for e in day.exercises]
        assert [(e.name, e.sets, e.reps) for e in exercises] == [("Squats", 3, 10)]

    def test_parser_records_language_and_format(self, tabular_plan, swedish_day_plan, today):
        parser = TextParser(today=today)
        parser.parse(tabular_plan)
        assert parser.language == DetectedLanguage.ENGLISH
        assert parser.tabular is True

        parser.parse(swedish_day_plan)
        assert parser.language == DetectedLanguage.SWEDISH
        assert parser.tabular is False

        parser.parse("   ")
        assert parser.language == DetectedLanguage.ENGLISH
        assert parser.tabular is False


class TestHelpers:
    """Day naming and exercise guarantees."""

    def test_tabular_day_name(self):
        assert tabular_day_name("Monday", "Wednesday, Oct 21") == "Wednesday, Oct 21"
        assert tabular_day_name("Week 1", "Monday, Oct 19") == "Week 1 (Monday, Oct 19)"
        assert tabular_day_name(None, "Monday, Oct 19") == "Monday, Oct 19"

    def test_ensure_exercises_adds_sample(self):
        day = WorkoutDay(name="Monday, Oct 19", date="2026-10-19", intensity="Medium")
        patched = ensure_exercises([day])[0]
        assert patched.exercises[0].name == "Sample Exercise"
        assert day.exercises == []


class TestHasTrainingDays:
    """Cheap training plan check."""

    def test_blank(self):
        assert has_training_days("") is False
        assert has_training_days(None) is False

    def test_day_markers(self):
        assert has_training_days("Day 1: Squats") is True

    def test_exercise_vocabulary(self):
        assert has_training_days("Knäböj och utfall") is True

    def test_tabular(self, tabular_plan):
        assert has_training_days(tabular_plan) is True

    def test_weekdays(self):
        assert has_training_days("Meet on Thursday") is True

    def test_plain_prose(self):
        assert has_training_days("hello world, nice weather") is False
