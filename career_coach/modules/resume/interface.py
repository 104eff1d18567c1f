"""Resume Module - Resume storage, markdown assembly and AI rewrites."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from career_coach.shared.datetime_utils import utc_now


@dataclass
class ResumeEntry:
    """One experience, education or project entry."""

    title: str
    organization: str
    start_date: str
    end_date: str | None = None
    description: str = ""
    current: bool = False  # Still in this role; end date is shown as "Present"


@dataclass
class Resume:
    """A user's resume. Each user has at most one."""

    id: UUID
    user_id: UUID
    content: str  # Markdown
    ats_score: float | None = None
    feedback: str | None = None
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)
