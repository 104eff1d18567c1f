"""Resume module - Resume storage, markdown assembly and AI rewrites."""

from career_coach.modules.resume.interface import Resume, ResumeEntry
from career_coach.modules.resume.markdown import entries_to_markdown
from career_coach.modules.resume.models import ResumeModel
from career_coach.modules.resume.service import ResumeService, get_resume_service

__all__ = [
    "Resume",
    "ResumeEntry",
    "ResumeModel",
    "ResumeService",
    "entries_to_markdown",
    "get_resume_service",
]
