"""Tests for the spreadsheet export parser."""
from regimen_ocr.parsers.base import ColumnRoles
from regimen_ocr.parsers.exercise_extractor import exercise_from_row
from regimen_ocr.parsers.tabular_parser import (
    TabularParser,
    group_rows_by_day,
    identify_column_roles,
    infer_column_roles,
)


class TestColumnRoles:
    """Header keyword mapping and content based inference."""

    def test_identify_english_headers(self):
        roles = identify_column_roles(["exercise", "sets", "reps", "weight", "rest"])
        assert (roles.exercise, roles.sets, roles.reps, roles.weight, roles.rest) == (0, 1, 2, 3, 4)
        assert roles.day is None

    def test_identify_swedish_headers(self):
        roles = identify_column_roles(["dag", "övning", "omgångar", "vila"])
        assert roles.day == 0
        assert roles.exercise == 1
        assert roles.sets == 2
        assert roles.rest == 3

    def test_infer_roles_from_cell_content(self):
        """Weekday, text, number, 'NxM' and weight cells each find their role."""
        rows = [
            ["Monday", "Squat", "3", "3x10", "60 kg"],
            ["Tuesday", "Bench Press", "4", "4x8", "40 kg"],
        ]
        roles = infer_column_roles(ColumnRoles(), rows)
        assert roles.day == 0
        assert roles.exercise == 1
        assert roles.sets == 2
        assert roles.reps == 3
        assert roles.weight == 4
        assert roles.rest is None

    def test_infer_defaults_exercise_to_first_column(self):
        roles = infer_column_roles(ColumnRoles(), [["3", "10"], ["4", "8"]])
        assert roles.exercise == 0


class TestGroupRows:
    """Bucketing rows by the day column."""

    def test_without_day_column_one_bucket(self):
        rows = [["Squat", "3"], ["Lunge", "3"]]
        assert group_rows_by_day(rows, ColumnRoles(exercise=0)) == [(None, rows)]

    def test_empty_day_cell_stays_in_current_bucket(self):
        rows = [["Mon", "Squat"], ["", "Lunge"], ["Wed", "Row"]]
        buckets = group_rows_by_day(rows, ColumnRoles(exercise=1, day=0))
        assert [label for label, _ in buckets] == ["Mon", "Wed"]
        assert len(buckets[0][1]) == 2


class TestExerciseFromRow:
    """Row to exercise conversion."""

    def test_sets_reps_and_weight(self):
        roles = ColumnRoles(exercise=1, sets=2, reps=3, weight=4, day=0)
        exercise = exercise_from_row(["Monday", "Squat", "3", "3x10", "60 kg"], roles)
        assert exercise.name == "Squat"
        assert exercise.sets == 3
        assert exercise.reps == 10
        assert exercise.is_reps is True
        assert exercise.notes == ""

    def test_notes_copied_verbatim(self):
        roles = ColumnRoles(exercise=0, sets=1, reps=2, weight=3, notes=4)
        exercise = exercise_from_row(["Squat", "3", "10", "60 kg", "Slow descent; pause at bottom"], roles)
        assert exercise.notes == "Slow descent; pause at bottom"
        assert exercise.reps == 10

    def test_distance_cell(self):
        exercise = exercise_from_row(["Running", "1", "5km"], ColumnRoles(exercise=0, sets=1, reps=2))
        assert exercise.distance == "5km"
        assert exercise.is_reps is False
        assert exercise.sets == 1

    def test_duration_cell(self):
        exercise = exercise_from_row(["Plank", "3", "45 sec"], ColumnRoles(exercise=0, sets=1, reps=2))
        assert exercise.duration == "00:45"
        assert exercise.is_reps is False

    def test_rest_is_normalized(self):
        roles = ColumnRoles(exercise=0, sets=1, reps=2, rest=3)
        exercise = exercise_from_row(["Squat", "3", "10", "90 sec"], roles)
        assert exercise.rest_interval == "01:30"

    def test_header_like_and_short_rows_are_skipped(self):
        roles = ColumnRoles(exercise=0, sets=1)
        assert exercise_from_row(["Exercise", "Sets"], roles) is None
        assert exercise_from_row(["Squat"], roles) is None

    def test_per_side_in_name(self):
        exercise = exercise_from_row(["Lunges each leg", "3", "10"], ColumnRoles(exercise=0, sets=1, reps=2))
        assert exercise.per_side is True


class TestTabularParser:
    """End to end table parsing."""

    def test_parse_single_bucket(self, tabular_plan):
        segments = TabularParser().parse(tabular_plan)
        assert len(segments) == 1
        assert segments[0].label is None
        names = [e.name for e in segments[0].exercises]
        assert names == ["Squat", "Bench Press", "Deadlift"]
        deadlift = segments[0].exercises[2]
        assert (deadlift.sets, deadlift.reps, deadlift.rest_interval) == (3, 5, "02:00")

    def test_parse_groups_by_day(self, tabular_plan_with_days):
        segments = TabularParser().parse(tabular_plan_with_days)
        assert [s.label for s in segments] == ["Monday", "Wednesday"]
        assert [e.name for e in segments[0].exercises] == ["Squat", "Bench Press"]

    def test_header_on_second_line(self):
        """A title line above the header is skipped."""
        text = (
            "Week 1 program\n"
            "Exercise\tSets\tReps\n"
            "Squat\t3\t10\n"
            "Lunge\t3\t12"
        )
        segments = TabularParser().parse(text)
        assert [e.name for e in segments[0].exercises] == ["Squat", "Lunge"]
        assert segments[0].exercises[1].reps == 12

    def test_single_line_yields_nothing(self):
        assert TabularParser().parse("Exercise\tSets") == []

    def test_single_spaced_header_over_aligned_row(self):
        """A header with single spaces is re-split to match the row's columns."""
        segments = TabularParser().parse("Day Exercise Sets Reps\nMonday  Squats  4  12")
        assert len(segments) == 1
        assert segments[0].label == "Monday"
        squats = segments[0].exercises[0]
        assert (squats.name, squats.sets, squats.reps) == ("Squats", 4, 12)
