"""Tests for narrative exercise extraction."""
from regimen_ocr.parsers.exercise_extractor import (
    ExerciseExtractor,
    find_circuits,
    header_payload,
    is_header_line,
    parse_exercises,
)
from regimen_ocr.parsers.models import DetectedLanguage

EN = DetectedLanguage.ENGLISH
SV = DetectedLanguage.SWEDISH


def parse_one(line, language=EN):
    exercises = parse_exercises(line, language)
    assert len(exercises) == 1
    return exercises[0]


class TestSprintIntervals:
    """'N x Dm' interval blocks."""

    def test_count_first_with_rest(self):
        exercise = parse_one("Sprints 10 x 200m with 60s rest")
        assert exercise.name == "Sprints"
        assert exercise.sets == 1
        assert exercise.reps == 10
        assert exercise.distance == "200m"
        assert exercise.rest_interval == "00:60"
        assert exercise.is_reps is False
        assert exercise.notes == "10 x 200m with 60s rest"

    def test_distance_first(self):
        exercise = parse_one("Sprints 100m x 6")
        assert exercise.reps == 6
        assert exercise.distance == "100m"
        assert exercise.rest_interval == "01:00"

    def test_generic_name_becomes_sprint_name(self):
        exercise = parse_one("Exercise 8 x 400m")
        assert exercise.name == "Sprint intervals"

    def test_swedish_note_words(self):
        exercise = parse_one("Löpning 6 x 100m med 45 sek vila", SV)
        assert exercise.notes == "6 x 100m med 45s vila"
        assert exercise.rest_interval == "00:45"


class TestSetsAndReps:
    """Set/rep, distance and duration readings."""

    def test_sets_by_reps(self):
        exercise = parse_one("Push-ups 3x15")
        assert exercise.name == "Push-ups"
        assert (exercise.sets, exercise.reps, exercise.is_reps) == (3, 15, True)

    def test_swedish_set_rep_idiom(self):
        exercise = parse_one("Knäböj 3 set x 10 reps", SV)
        assert exercise.name == "Knäböj"
        assert (exercise.sets, exercise.reps) == (3, 10)
        assert exercise.rest_interval == "01:00"

    def test_swedish_per_side(self):
        exercise = parse_one("Utfall 3 set x 12 reps per ben", SV)
        assert exercise.per_side is True

    def test_duration(self):
        exercise = parse_one("Plank 45 sec")
        assert exercise.duration == "00:45"
        assert exercise.is_reps is False
        assert exercise.rest_interval == "01:00"

    def test_distance(self):
        exercise = parse_one("Run 5km")
        assert exercise.distance == "5km"
        assert exercise.duration == ""
        assert exercise.is_reps is False

    def test_rest_after_rest_word_has_no_rollover(self):
        exercise = parse_one("Squats 3x10 rest 90s")
        assert exercise.rest_interval == "00:90"
        assert exercise.duration == ""
        assert exercise.is_reps is True

    def test_defaults_without_numbers(self):
        exercise = parse_one("Burpees")
        assert (exercise.sets, exercise.reps, exercise.rest_interval) == (3, 10, "01:00")


class TestLineHandling:
    """Headers, merges and multi-exercise lines."""

    def test_headers_are_skipped(self):
        exercises = parse_exercises("Warm-up\nSquats 3x10\nCool down", EN)
        assert [e.name for e in exercises] == ["Squats"]

    def test_intensity_label_merges_with_next_line(self):
        exercise = parse_one("Easy\nJog 20 min")
        assert exercise.name == "Jog"
        assert exercise.duration == "20:00"

    def test_embedded_exercises(self):
        exercises = parse_exercises("Squats, Lunges, Push-ups", EN)
        assert [e.name for e in exercises] == ["Squats", "Lunges", "Push-ups"]

    def test_ocr_digit_fixes(self):
        extractor = ExerciseExtractor(EN)
        assert extractor.correct_line("Squats 3x1O") == "Squats 3 x 10"
        assert extractor.correct_line("Rest:60s") == "Rest: 60s"

    def test_swedish_typo_table(self):
        extractor = ExerciseExtractor(SV)
        assert extractor.correct_line("Knaböj 3 set") == "Knäböj 3 set"

    def test_bullets_and_semicolons_split_lines(self):
        lines = ExerciseExtractor.split_lines("- Squats 3x10; Lunges 3x12\n• Plank 60 sec")
        assert lines == ["Squats 3x10", "Lunges 3x12", "Plank 60 sec"]

    def test_empty_content(self):
        assert parse_exercises("", EN) == []
        assert parse_exercises("   \n", EN) == []


class TestHeaders:
    """Header recognition."""

    def test_header_lines(self):
        assert is_header_line("Warm-up") is True
        assert is_header_line("Instructions") is True
        assert is_header_line("Strength:") is True
        assert is_header_line("Squats 3x10") is False

    def test_topical_words_with_numbers_are_exercises(self):
        assert is_header_line("Stretching 10 min") is False

    def test_header_payload(self):
        assert header_payload("Day 1: Squats 3x10") == "Squats 3x10"
        assert header_payload("Warm-up:") is None
        assert header_payload("Squats 3x10") == "Squats 3x10"


class TestCircuits:
    """'Core training: N rounds of' blocks."""

    CONTENT = (
        "Squats 3x10\n"
        "Core training: 4 rounds of\n"
        "- Plank 30 sec\n"
        "- Sit-ups 15 reps"
    )

    def test_find_circuits(self):
        assert find_circuits(self.CONTENT) == [(4, ["- Plank 30 sec", "- Sit-ups 15 reps"])]

    def test_members_take_rounds_and_note(self):
        exercises = parse_exercises(self.CONTENT, EN)
        assert [e.name for e in exercises] == ["Squats", "Plank", "Sit-ups"]
        plank = exercises[1]
        assert plank.sets == 4
        assert plank.notes == "Part of core training circuit (4 rounds)"
        assert exercises[0].notes == ""

    def test_letter_led_line_ends_block(self):
        """Exercises after the bulleted members keep their own sets."""
        content = (
            "Core training: 3 rounds of\n"
            "- Plank 30 sec\n"
            "- Sit-ups 15 reps\n"
            "Squats 4x8\n"
            "Bench press 5x5"
        )
        assert find_circuits(content) == [(3, ["- Plank 30 sec", "- Sit-ups 15 reps"])]

        by_name = {e.name: e for e in parse_exercises(content, EN)}
        assert by_name["Squats"].sets == 4
        assert by_name["Squats"].notes == ""
        assert by_name["Bench press"].sets == 5
        assert by_name["Bench press"].notes == ""
        assert by_name["Plank"].sets == 3
        assert by_name["Plank"].notes == "Part of core training circuit (3 rounds)"
