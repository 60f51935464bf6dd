from .domain_classifier import (
    detect_domains,
    domains_overlap,
    requirement_set_domains,
    resume_domains,
)

__all__ = [
    "detect_domains",
    "domains_overlap",
    "requirement_set_domains",
    "resume_domains",
]
