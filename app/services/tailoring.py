"""Public entry points of the tailoring engine."""

from app.matching import calculate_match_score, match_resume
from app.normalize.normalize_resume import parse_resume
from app.services.errors import TailoringError
from app.services.jd_analyzer import analyze_job_description
from app.services.orchestrator import TailoringOrchestrator, tailor_resume, tailor_resume_quick
from app.services.progress import ProgressStream

__all__ = [
    "ProgressStream",
    "TailoringError",
    "TailoringOrchestrator",
    "analyze_job_description",
    "calculate_match_score",
    "match_resume",
    "parse_resume",
    "tailor_resume",
    "tailor_resume_quick",
]
