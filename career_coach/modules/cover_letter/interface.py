"""Cover Letter Module - AI-written cover letters tailored to a job posting."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from career_coach.shared.datetime_utils import utc_now


@dataclass
class CoverLetterRequest:
    """The job a cover letter is being written for."""

    job_title: str
    company_name: str
    job_description: str


@dataclass
class CoverLetter:
    """A generated cover letter."""

    id: UUID
    user_id: UUID
    content: str  # Markdown
    job_title: str
    company_name: str
    job_description: str | None
    status: str
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)
