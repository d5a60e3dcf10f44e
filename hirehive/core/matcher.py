"""
Skill matching for shortlists and talent-pool filters.

One shared skill is a match. There is no scoring or ranking here.
"""

from collections.abc import Iterable, Sequence
from typing import Any

# Category label -> keyword substrings looked for in a seeker's skills
CATEGORY_KEYWORDS: dict[str, list[str]] = {
    "IT & Tech": [
        "python", "java", "javascript", "react", "node", "sql", "developer",
        "software", "cloud", "devops", "data", "aws", "web",
    ],
    "Sales": ["sales", "business development", "crm", "negotiation", "lead generation", "marketing"],
    "Management": ["management", "manager", "leadership", "operations", "strategy", "project"],
    "Finance": ["finance", "accounting", "audit", "tally", "tax", "banking"],
    "Design": ["design", "figma", "photoshop", "ui", "ux", "illustrator"],
}


def normalize_skills(skills: Iterable[str] | None) -> set[str]:
    """Trim and casefold skills, dropping blanks."""
    return {s.strip().casefold() for s in (skills or []) if s and s.strip()}


def dedupe_skills(skills: Iterable[str] | None) -> list[str]:
    """Trim skills and drop case-insensitive duplicates, keeping the first spelling."""
    seen: set[str] = set()
    result = []
    for skill in skills or []:
        cleaned = skill.strip() if skill else ""
        if cleaned and cleaned.casefold() not in seen:
            seen.add(cleaned.casefold())
            result.append(cleaned)
    return result


def shared_skills(seeker_skills: Iterable[str] | None, job_skills: Iterable[str] | None) -> set[str]:
    return normalize_skills(seeker_skills) & normalize_skills(job_skills)


def matches(seeker_skills: Iterable[str] | None, job_skills: Iterable[str] | None) -> bool:
    """True iff the two skill sets share at least one skill."""
    return bool(shared_skills(seeker_skills, job_skills))


def mentions_skill(skills: Iterable[str] | None, fragment: str) -> bool:
    """True iff any skill contains ``fragment``, case-insensitively."""
    wanted = fragment.strip().casefold()
    if not wanted:
        return True
    return any(wanted in skill for skill in normalize_skills(skills))


def matches_category(skills: Iterable[str] | None, category: str) -> bool:
    """True iff any skill contains any keyword configured for ``category``."""
    keywords = _category_keywords(category)
    if not keywords:
        return False
    return any(keyword in skill for skill in normalize_skills(skills) for keyword in keywords)


def _category_keywords(category: str) -> list[str]:
    wanted = category.strip().casefold()
    for label, keywords in CATEGORY_KEYWORDS.items():
        if label.casefold() == wanted:
            return [k.casefold() for k in keywords]
    return []


def shortlist_jobs(
    seeker_skills: Iterable[str] | None,
    jobs: Sequence[Any],
    applied_job_ids: Iterable[str] = (),
) -> list[Any]:
    """Jobs whose required skills match the seeker, minus jobs already applied to."""
    skills = normalize_skills(seeker_skills)
    applied = set(applied_job_ids)
    return [
        job for job in jobs
        if job.id not in applied and matches(skills, job.required_skills)
    ]


def filter_talent(
    seekers: Sequence[Any],
    keyword: str | None = None,
    category: str | None = None,
) -> list[Any]:
    """Employer-side talent pool filter; keyword and category are ANDed."""
    result = []
    for seeker in seekers:
        if keyword and keyword.strip() and not matches(seeker.skills, {keyword}):
            continue
        if category and category.strip() and not matches_category(seeker.skills, category):
            continue
        result.append(seeker)
    return result
