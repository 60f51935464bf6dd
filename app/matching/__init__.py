from .aggregate import calculate_match_score
from .engine import match_requirement, match_resume
from .strategies import is_technical_requirement

__all__ = [
    "calculate_match_score",
    "is_technical_requirement",
    "match_requirement",
    "match_resume",
]
