"""
Application lifecycle.

    NONE --(seeker applies)--> APPLIED --(job owner)--> SHORTLISTED | REJECTED | HIRED

APPLIED is final from the seeker's side (no withdraw, no re-apply). The three
employer statuses are terminal. Nothing moves back to NONE.
"""

from collections.abc import Sequence
from enum import Enum

from hirehive.core.errors import CvMissing, DuplicateApplication, Forbidden, InvalidTransition, MissingScreeningAnswers

MANDATORY_SCREENING_ANSWERS = 2
MAX_SCREENING_QUESTIONS = 3


class ApplicationStatus(str, Enum):
    NONE = "none"
    APPLIED = "applied"
    SHORTLISTED = "shortlisted"
    REJECTED = "rejected"
    HIRED = "hired"

    @classmethod
    def parse(cls, value: str) -> "ApplicationStatus | None":
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


EMPLOYER_TRANSITIONS: dict[ApplicationStatus, frozenset[ApplicationStatus]] = {
    ApplicationStatus.APPLIED: frozenset(
        {ApplicationStatus.SHORTLISTED, ApplicationStatus.REJECTED, ApplicationStatus.HIRED}
    ),
}


def missing_answer_positions(questions: Sequence[str], answers: Sequence[str]) -> list[int]:
    """Zero-based positions of mandatory questions left unanswered."""
    mandatory = min(len(questions), MANDATORY_SCREENING_ANSWERS)
    missing = []
    for i in range(mandatory):
        answer = answers[i] if i < len(answers) else None
        if answer is None or not str(answer).strip():
            missing.append(i)
    return missing


def check_can_apply(
    *,
    cv_reference: str | None,
    existing_status: ApplicationStatus,
    questions: Sequence[str],
    answers: Sequence[str],
) -> None:
    """Guards for NONE -> APPLIED. Raises the first failing guard."""
    if not cv_reference or not cv_reference.strip():
        raise CvMissing()
    if existing_status is not ApplicationStatus.NONE:
        raise DuplicateApplication()
    if questions:
        # One answer per question; positions past the supplied answers are missing
        unsupplied = range(len(answers), len(questions))
        missing = sorted(set(missing_answer_positions(questions, answers)) | set(unsupplied))
        if missing or len(answers) > len(questions):
            raise MissingScreeningAnswers(expected=len(questions), missing=missing)


def check_employer_transition(
    *,
    is_owner: bool,
    current: ApplicationStatus,
    target: ApplicationStatus | None,
    target_label: str,
) -> ApplicationStatus:
    """Guards for employer-driven moves out of APPLIED."""
    if not is_owner:
        raise Forbidden()
    allowed = EMPLOYER_TRANSITIONS.get(current, frozenset())
    if target is None or target not in allowed:
        raise InvalidTransition(current.value, target.value if target else target_label)
    return target
