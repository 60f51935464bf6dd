from __future__ import annotations

import re

from app.features.lexicons import ACTION_VERBS, JOB_TITLE_KEYWORDS, SKILL_CATEGORIES
from app.schemas.tailoring import (
    Bullet,
    ContactInfo,
    Education,
    Experience,
    Metric,
    ResumeProfile,
    Skill,
    SkillCategory,
)

from .utils import contains_term, is_bullet_like, non_empty_lines, strip_bullet_prefix

_SECTION_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("experience", re.compile(r"^(experience|work\s*experience|professional\s*experience|employment(\s*history)?)\b", re.IGNORECASE)),
    ("education", re.compile(r"^(education|academic(\s*background)?|qualifications)\b", re.IGNORECASE)),
    ("skills", re.compile(r"^(skills|technical\s*skills|core\s*competencies|technologies)\b", re.IGNORECASE)),
    ("summary", re.compile(r"^(summary|professional\s*summary|profile|objective|about(\s*me)?)\b", re.IGNORECASE)),
    ("projects", re.compile(r"^(projects|personal\s*projects|portfolio)\b", re.IGNORECASE)),
)
_HEADER_MAX_WORDS = 4
_INLINE_HEADER_RE = re.compile(r"^([A-Za-z][A-Za-z ]{2,40}):\s*(.+)$")

_SKILL_SPLIT_RE = re.compile(r"[,;|•·●○◦▪▸►]")
_SKILL_LABEL_RE = re.compile(r"^[A-Za-z][A-Za-z /&]{1,30}:\s*")
_LEADING_DASH_RE = re.compile(r"^\s*[-–—]\s*")

_METRIC_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"(\d+(?:\.\d+)?%)(?:\s+(.+))?", re.IGNORECASE),
    re.compile(r"\$(\d+(?:,\d{3})*(?:\.\d+)?[KMB]?)\s+(.+)", re.IGNORECASE),
    re.compile(r"(\d+(?:,\d{3})*)\s+(users?|customers?|clients?|employees?|team\s*members?)", re.IGNORECASE),
    re.compile(r"(\d+(?:\.\d+)?x)\s+(.+)", re.IGNORECASE),
)
_KEYWORD_STRIP_RE = re.compile(r"^[^\w+#]+|[^\w+#]+$")

_DATE_RANGE_RE = re.compile(r"\d{4}\s*[-–]\s*(\d{4}|present|current)", re.IGNORECASE)
_JOB_HEADER_MAX_WORDS = 12
_HEADER_SPLIT_RE = re.compile(r"\s*[|@,]\s*")

_DEGREE_RE = re.compile(
    r"(?<![a-z])(bachelor|master|ph\.?d|mba|b\.?s\.?|b\.?a\.?|m\.?s\.?|m\.?a\.?|associate|doctorate)(?![a-z])",
    re.IGNORECASE,
)
_INSTITUTION_RE = re.compile(r"university|college|institute|school|academy", re.IGNORECASE)
_YEAR_RE = re.compile(r"\b(?:19|20)\d{2}\b")
_GPA_RE = re.compile(r"gpa[:\s]*(\d+\.\d+)", re.IGNORECASE)

_EMAIL_RE = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
_PHONE_RE = re.compile(r"\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}")
_LINKEDIN_RE = re.compile(r"linkedin\.com/in/[\w-]+", re.IGNORECASE)
_LOCATION_RE = re.compile(r"\b([A-Z][a-zA-Z.]+(?:\s[A-Z][a-zA-Z.]+)*),\s*([A-Z]{2})\b")
_THREE_DIGITS_RE = re.compile(r"\d{3}")
_CONTACT_WINDOW = 10


def detect_section_header(line: str) -> str | None:
    cleaned = re.sub(r"[:\-_]", "", line).strip()
    if not cleaned or len(cleaned.split()) > _HEADER_MAX_WORDS:
        return None
    for section, pattern in _SECTION_PATTERNS:
        if pattern.match(cleaned):
            return section
    return None


def _inline_header(line: str) -> tuple[str, str] | None:
    match = _INLINE_HEADER_RE.match(line)
    if not match:
        return None
    section = detect_section_header(match.group(1))
    if section is None:
        return None
    return section, match.group(2).strip()


def split_sections(lines: list[str]) -> dict[str, list[str]]:
    sections: dict[str, list[str]] = {"header": []}
    current = "header"
    for line in lines:
        inline = _inline_header(line)
        if inline is not None:
            current, remainder = inline
            sections.setdefault(current, []).append(remainder)
            continue
        section = detect_section_header(line)
        if section is not None:
            current = section
            sections.setdefault(current, [])
            continue
        sections.setdefault(current, []).append(line)
    return sections


def categorize_skill(name: str) -> SkillCategory:
    lowered = name.lower()
    for category, keywords in SKILL_CATEGORIES:
        if any(contains_term(lowered, keyword) for keyword in keywords):
            return category  # type: ignore[return-value]
    return "other"


def extract_skills(lines: list[str]) -> list[Skill]:
    skills: list[Skill] = []
    seen: set[str] = set()
    for line in lines:
        content = _SKILL_LABEL_RE.sub("", strip_bullet_prefix(line) if is_bullet_like(line) else line)
        for item in _SKILL_SPLIT_RE.split(content):
            name = _LEADING_DASH_RE.sub("", item.strip()).strip()
            if not (1 < len(name) < 50):
                continue
            key = name.lower()
            if key in seen:
                continue
            seen.add(key)
            skills.append(Skill(name=name, category=categorize_skill(name), original_text=name))
    return skills


def extract_metrics(text: str) -> list[Metric]:
    metrics: list[Metric] = []
    for pattern in _METRIC_PATTERNS:
        match = pattern.search(text)
        if match:
            metrics.append(
                Metric(
                    value=match.group(1),
                    context=(match.group(2) or "").strip(),
                    original_text=match.group(0).strip(),
                )
            )
    return metrics


def extract_keywords(text: str) -> list[str]:
    keywords: list[str] = []
    for token in text.lower().split():
        word = _KEYWORD_STRIP_RE.sub("", token)
        if word and (word in ACTION_VERBS or len(word) > 6):
            keywords.append(word)
    return keywords


def parse_bullet(line: str) -> Bullet:
    text = strip_bullet_prefix(line)
    return Bullet(text=text, metrics=extract_metrics(text), keywords=extract_keywords(text))


def is_job_header(line: str) -> bool:
    if is_bullet_like(line) or len(line.split()) > _JOB_HEADER_MAX_WORDS:
        return False
    lowered = line.lower()
    return any(contains_term(lowered, keyword) for keyword in JOB_TITLE_KEYWORDS)


def _parse_job_header(line: str) -> tuple[str, str, str | None]:
    date_match = _DATE_RANGE_RE.search(line)
    date_range = date_match.group(0) if date_match else None
    header = _DATE_RANGE_RE.sub("", line) if date_match else line
    parts = [part.strip(" -–—()") for part in _HEADER_SPLIT_RE.split(header)]
    parts = [part for part in parts if part]
    title = parts[0] if parts else line.strip()
    company = parts[1] if len(parts) > 1 else ""
    return title, company, date_range


def extract_experiences(lines: list[str]) -> list[Experience]:
    experiences: list[Experience] = []
    current: dict[str, object] | None = None

    def flush() -> None:
        if current is None or not current["title"]:
            return
        bullets: list[Bullet] = current["bullets"]  # type: ignore[assignment]
        original = "\n".join(
            part for part in [str(current["title"]), str(current["company"]), *(b.text for b in bullets)] if part
        )
        experiences.append(
            Experience(
                title=str(current["title"]),
                company=str(current["company"]),
                date_range=current["date_range"],  # type: ignore[arg-type]
                bullets=bullets,
                original_text=original,
            )
        )

    for line in lines:
        if is_job_header(line):
            flush()
            title, company, date_range = _parse_job_header(line)
            current = {"title": title, "company": company, "date_range": date_range, "bullets": []}
            continue
        if is_bullet_like(line):
            if current is not None:
                current["bullets"].append(parse_bullet(line))  # type: ignore[union-attr]
            continue
        if current is not None:
            date_match = _DATE_RANGE_RE.search(line)
            if date_match:
                current["date_range"] = date_match.group(0)
            elif not current["company"] and len(line.split()) <= 6:
                current["company"] = line.strip()

    flush()
    return experiences


def extract_education(lines: list[str]) -> list[Education]:
    education: list[Education] = []
    for index, line in enumerate(lines):
        if not _DEGREE_RE.search(line):
            continue
        segments = [segment.strip() for segment in re.split(r"\s*[|,–—]\s*|\s+-\s+", line) if segment.strip()]
        institution = next((segment for segment in segments if _INSTITUTION_RE.search(segment)), "")
        if not institution and index + 1 < len(lines) and not _DEGREE_RE.search(lines[index + 1]):
            institution = lines[index + 1]
        year_match = _YEAR_RE.search(line) or (
            _YEAR_RE.search(lines[index + 1]) if index + 1 < len(lines) and institution == lines[index + 1] else None
        )
        gpa_match = _GPA_RE.search(line)
        education.append(
            Education(
                degree=line,
                institution=institution,
                year=year_match.group(0) if year_match else None,
                gpa=gpa_match.group(1) if gpa_match else None,
                original_text=line,
            )
        )
    return education


def extract_contact(lines: list[str]) -> ContactInfo:
    window = lines[:_CONTACT_WINDOW]
    text = " ".join(window)

    email = _EMAIL_RE.search(text)
    phone = _PHONE_RE.search(text)
    linkedin = _LINKEDIN_RE.search(text)
    location = None
    for line in window:
        if _EMAIL_RE.search(line):
            line = _EMAIL_RE.sub("", line)
        match = _LOCATION_RE.search(line)
        if match:
            location = f"{match.group(1)}, {match.group(2)}"
            break

    name = None
    if window and "@" not in window[0] and not _THREE_DIGITS_RE.search(window[0]):
        name = window[0]

    return ContactInfo(
        name=name,
        email=email.group(0) if email else None,
        phone=phone.group(0) if phone else None,
        linkedin=linkedin.group(0) if linkedin else None,
        location=location,
    )


def parse_resume(text: str) -> ResumeProfile:
    """Segment raw résumé text into a structured profile. Never raises on content."""
    raw = text or ""
    lines = non_empty_lines(raw)
    sections = split_sections(lines)
    summary_lines = sections.get("summary", [])
    return ResumeProfile(
        raw_text=raw,
        skills=extract_skills(sections.get("skills", [])),
        experiences=extract_experiences(sections.get("experience", [])),
        education=extract_education(sections.get("education", [])),
        contact=extract_contact(lines) if lines else None,
        summary=" ".join(summary_lines) if summary_lines else None,
    )
