"""API routes for OCR workout text parsing."""

import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from regimen_ocr import __version__
from regimen_ocr.config import settings
from regimen_ocr.parsers.language_detector import detect_language
from regimen_ocr.parsers.models import DetectedLanguage, WorkoutDay
from regimen_ocr.parsers.text_parser import TextParser, has_training_days

logger = logging.getLogger(__name__)

router = APIRouter()


# ---------------------------------------------------------------------------
# Request/Response Models
# ---------------------------------------------------------------------------

class ParseTextRequest(BaseModel):
    """Request model for POST /parse/text"""
    text: str = Field(..., max_length=settings.MAX_TEXT_LENGTH, description="OCR text of a training plan")
    today: Optional[date] = Field(default=None, description="Date of the first day, defaults to the server date")


class ParseTextResponse(BaseModel):
    """Response model for POST /parse/text"""
    success: bool
    language: DetectedLanguage
    tabular: bool
    has_training_days: bool
    days: List[WorkoutDay]
    fallback: bool = False


class DetectLanguageRequest(BaseModel):
    text: str = Field(..., max_length=settings.MAX_TEXT_LENGTH)


class DetectLanguageResponse(BaseModel):
    language: DetectedLanguage


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------


@router.get("/health")
def health():
    """Health check endpoint."""
    return {"ok": True, "version": __version__, "environment": settings.ENVIRONMENT}


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


@router.post("/parse/text", response_model=ParseTextResponse)
def parse_text(request: ParseTextRequest):
    """
    Parse OCR text into dated training days.

    The parser itself never fails; a plan it cannot read comes back as
    fallback days with `fallback` set.
    """
    if not request.text.strip():
        raise HTTPException(status_code=400, detail="Text is empty")

    parser = TextParser(today=request.today)
    days = parser.parse(request.text)
    fallback = any(day.is_fallback for day in days)
    logger.info(f"Parsed text into {len(days)} days (fallback={fallback})")

    return ParseTextResponse(
        success=not fallback,
        language=parser.language,
        tabular=parser.tabular,
        has_training_days=has_training_days(request.text),
        days=days,
        fallback=fallback,
    )


@router.post("/detect-language", response_model=DetectLanguageResponse)
def detect_text_language(request: DetectLanguageRequest):
    """Detect the language of a workout text."""
    return DetectLanguageResponse(language=detect_language(request.text))
