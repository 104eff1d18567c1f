"""Cover letter module - AI-written cover letters tailored to a job posting."""

from career_coach.modules.cover_letter.interface import CoverLetter, CoverLetterRequest
from career_coach.modules.cover_letter.models import CoverLetterModel
from career_coach.modules.cover_letter.service import (
    CoverLetterService,
    get_cover_letter_service,
)

__all__ = [
    "CoverLetter",
    "CoverLetterModel",
    "CoverLetterRequest",
    "CoverLetterService",
    "get_cover_letter_service",
]
