"""
Test fixtures for regimen-ocr-api.

Provides a fixed clock, sample OCR texts in the layouts the parser
supports, and a FastAPI TestClient.
"""

import sys
from datetime import date
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

# Make src/ importable so tests can do `import regimen_ocr...`
for p in {ROOT, SRC}:
    p_str = str(p)
    if p_str not in sys.path:
        sys.path.insert(0, p_str)

from regimen_ocr.main import app


# ---------------------------------------------------------------------------
# Core Test Client
# ---------------------------------------------------------------------------


@pytest.fixture
def client() -> TestClient:
    """Per-test FastAPI TestClient."""
    return TestClient(app)


# ---------------------------------------------------------------------------
# Clock
# ---------------------------------------------------------------------------


@pytest.fixture
def today() -> date:
    """A Monday, so day names are easy to predict."""
    return date(2026, 10, 19)


# ---------------------------------------------------------------------------
# Sample OCR Texts
# ---------------------------------------------------------------------------


@pytest.fixture
def english_day_plan() -> str:
    return (
        "Day 1: Squats 3x10\n"
        "Push-ups 3x15\n"
        "Day 2: Run 5km\n"
        "Day 3: Plank 60 sec"
    )


@pytest.fixture
def swedish_day_plan() -> str:
    return (
        "Dag 1: Måndag (Styrka)\n"
        "Knäböj 3 set x 10 reps\n"
        "Dag 2: Onsdag (Kondition)\n"
        "Löpning 5 km"
    )


@pytest.fixture
def weekday_plan() -> str:
    return (
        "Monday\n"
        "Squats 3x10\n"
        "Lunges 3x12\n"
        "Wednesday\n"
        "Run 5km\n"
        "Friday (easy)\n"
        "Yoga 30 min"
    )


@pytest.fixture
def section_plan() -> str:
    return (
        "Upper Body\n"
        "Bench press 3x8\n"
        "Rows 3x10\n"
        "\n"
        "Lower Body\n"
        "Squats 3x10\n"
        "Lunges 3x12"
    )


@pytest.fixture
def tabular_plan() -> str:
    return (
        "Exercise\tSets\tReps\tRest\n"
        "Squat\t3\t10\t60 sec\n"
        "Bench Press\t4\t8\t90 sec\n"
        "Deadlift\t3\t5\t2 min"
    )


@pytest.fixture
def tabular_plan_with_days() -> str:
    return (
        "Day\tExercise\tSets\tReps\n"
        "Monday\tSquat\t3\t10\n"
        "\tBench Press\t3\t8\n"
        "Wednesday\tDeadlift\t3\t5"
    )


@pytest.fixture
def prose_text() -> str:
    """Text with no day, weekday or exercise structure at all."""
    return "Just some random thoughts about life\nnothing to see here"
