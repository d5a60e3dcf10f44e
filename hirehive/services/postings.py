"""
Posting and application service.

The only component with externally visible side effects. Each public method
owns its transaction: primary writes commit (or roll back) first, then any
notification intent is emitted.
"""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from hirehive.core.applications import (
    ApplicationStatus,
    check_can_apply,
    check_employer_transition,
)
from hirehive.core.errors import (
    DuplicateApplication,
    Forbidden,
    InconsistentState,
    InvalidTransition,
    NotFound,
    QuotaExceeded,
)
from hirehive.core.matcher import dedupe_skills, filter_talent, mentions_skill, shared_skills, shortlist_jobs
from hirehive.core.quota import QuotaLedger
from hirehive.core.repositories import AccountRepository, ApplicationRepository, JobRepository
from hirehive.db.tables import Application, Job, User
from hirehive.services.alerts import page_operator
from hirehive.services.notifications import NEW_APPLICATION, NEW_JOB, NotificationDispatcher, NotificationIntent

logger = logging.getLogger(__name__)

JOB_FIELDS = (
    "title",
    "category",
    "location",
    "experience",
    "salary",
    "description",
    "notice_period",
    "required_skills",
    "screening_questions",
)


@dataclass
class ApplicantSnapshot:
    seeker_id: str
    name: str
    email: str | None
    skills: list[str]
    education: str
    cv_reference: str | None
    status: str
    answers: list[str]
    cover_letter: str | None
    applied_at: datetime


@dataclass
class ApplicantList:
    job: Job
    applicants: list[ApplicantSnapshot]


@dataclass
class ShortlistEntry:
    job: Job
    matched_skills: list[str]


@dataclass
class SeekerDashboard:
    applied: list[tuple[Application, Job]]
    shortlisted: list[ShortlistEntry]


def _job_fields(data: dict[str, Any]) -> dict[str, Any]:
    fields = {k: v for k, v in data.items() if k in JOB_FIELDS and v is not None}
    if "required_skills" in fields:
        fields["required_skills"] = dedupe_skills(fields["required_skills"])
    if "screening_questions" in fields:
        fields["screening_questions"] = [q.strip() for q in fields["screening_questions"] if q and q.strip()]
    return fields


class PostingService:
    """Orchestrates quota, matching and application lifecycle for one session."""

    def __init__(
        self,
        db: Session,
        dispatcher: NotificationDispatcher,
        alert: Callable[..., None] = page_operator,
    ):
        self.db = db
        self.accounts = AccountRepository(db)
        self.jobs = JobRepository(db)
        self.applications = ApplicationRepository(db)
        self.ledger = QuotaLedger(db)
        self.dispatcher = dispatcher
        self.alert = alert

    def _account(self, user_id: str, role: str) -> User:
        user = self.accounts.get(user_id)
        if user is None or user.role != role:
            raise NotFound(f"{role.capitalize()} not found")
        return user

    def _owned_job(self, employer_id: str, job_id: str) -> Job:
        job = self.jobs.get(job_id)
        if job is None:
            raise NotFound("Job not found")
        if job.employer_id != employer_id:
            logger.warning(f"[{employer_id}] Denied access to job {job_id}")
            raise Forbidden()
        return job

    # Employer side

    def post_job(self, employer_id: str, job_data: dict[str, Any]) -> Job:
        """Create a job if the employer's plan has a free slot."""
        employer = self._account(employer_id, "employer")
        if not self.ledger.can_post(employer_id):
            plan = self.ledger.plan_for(employer_id)
            logger.info(f"[{employer_id}] Posting rejected: {plan.id} limit {plan.quota} reached")
            raise QuotaExceeded(limit=plan.quota, plan_name=plan.name)

        job = Job(employer_id=employer_id, **_job_fields(job_data))
        try:
            self.jobs.add(job)
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception(f"[{employer_id}] Job insert failed")
            raise

        try:
            new_count = self.ledger.record_post(employer_id)
        except QuotaExceeded:
            self.db.rollback()
            raise
        except (SQLAlchemyError, NotFound) as e:
            self.db.rollback()
            self.alert(
                "Posting counter update failed after job insert; job rolled back",
                employer_id=employer_id,
                job_id=job.id,
                error=str(e),
            )
            raise InconsistentState("Job could not be counted against your plan") from e

        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception(f"[{employer_id}] Commit failed for new job")
            raise

        logger.info(f"[{employer_id}] Posted job {job.id} ({new_count} slot(s) used)")
        self._emit(
            lambda: NotificationIntent(
                template=NEW_JOB,
                recipients=tuple(self.accounts.emails_by_role("seeker")),
                data={"job_id": job.id, "title": job.title, "company": employer.name},
            )
        )
        return job

    def update_job(self, employer_id: str, job_id: str, changes: dict[str, Any]) -> Job:
        """Edit job fields. Ownership and quota are not affected."""
        job = self._owned_job(employer_id, job_id)
        for key, value in _job_fields(changes).items():
            setattr(job, key, value)
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        self.db.refresh(job)
        return job

    def delete_job(self, employer_id: str, job_id: str) -> int:
        """Delete an owned job with its applications and free its slot.

        Returns the employer's new posting count.
        """
        self._owned_job(employer_id, job_id)
        try:
            removed = self.jobs.delete_owned(job_id, employer_id)
            if removed != 1:
                # Deleted concurrently; the other request released the slot
                self.db.rollback()
                raise NotFound("Job not found")
            new_count = self.ledger.release_slot(employer_id)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception(f"[{employer_id}] Delete failed for job {job_id}")
            raise
        logger.info(f"[{employer_id}] Deleted job {job_id} ({new_count} slot(s) used)")
        return new_count

    def list_employer_jobs(self, employer_id: str) -> list[tuple[Job, int]]:
        self._account(employer_id, "employer")
        return self.jobs.find_by_employer(employer_id)

    def list_applicants_for_job(
        self,
        employer_id: str,
        job_id: str,
        status: str | None = None,
        skill: str | None = None,
    ) -> ApplicantList:
        """Applicants in submission order, optionally narrowed by status and a skill fragment."""
        job = self._owned_job(employer_id, job_id)
        wanted_status = status.strip().lower() if status and status.strip() else None
        applicants = [
            ApplicantSnapshot(
                seeker_id=seeker.id,
                name=seeker.name,
                email=seeker.email,
                skills=list(seeker.skills or []),
                education=seeker.education or "",
                cv_reference=seeker.cv_reference,
                status=application.status,
                answers=list(application.answers or []),
                cover_letter=application.cover_letter,
                applied_at=application.applied_at,
            )
            for application, seeker in self.applications.find_by_job_with_seekers(job_id)
            if (wanted_status is None or application.status == wanted_status)
            and (not skill or mentions_skill(seeker.skills, skill))
        ]
        return ApplicantList(job=job, applicants=applicants)

    def change_application_status(
        self, employer_id: str, job_id: str, seeker_id: str, new_status: str
    ) -> Application:
        job = self.jobs.get(job_id)
        if job is None:
            raise NotFound("Job not found")
        is_owner = job.employer_id == employer_id
        application = self.applications.find(seeker_id, job_id)
        if application is None and is_owner:
            raise NotFound("Application not found")

        current = ApplicationStatus(application.status) if application else ApplicationStatus.NONE
        target = check_employer_transition(
            is_owner=is_owner,
            current=current,
            target=ApplicationStatus.parse(new_status),
            target_label=new_status,
        )
        try:
            if not self.applications.transition(seeker_id, job_id, current.value, target.value):
                # Another reviewer moved it first
                self.db.rollback()
                raise InvalidTransition(current.value, target.value)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        self.db.refresh(application)
        logger.info(f"[{employer_id}] Application {seeker_id}/{job_id}: {current.value} -> {target.value}")
        return application

    def talent_pool(self, keyword: str | None = None, category: str | None = None) -> list[User]:
        return filter_talent(self.accounts.list_by_role("seeker"), keyword=keyword, category=category)

    def get_seeker_profile(self, seeker_id: str) -> User:
        """One candidate's full profile for the talent-pool detail view."""
        return self._account(seeker_id, "seeker")

    # Seeker side

    def submit_application(
        self,
        seeker_id: str,
        job_id: str,
        answers: Sequence[str] = (),
        cover_letter: str | None = None,
    ) -> Application:
        seeker = self._account(seeker_id, "seeker")
        job = self.jobs.get(job_id)
        if job is None:
            raise NotFound("Job not found")

        existing = self.applications.find(seeker_id, job_id)
        questions = list(job.screening_questions or [])
        check_can_apply(
            cv_reference=seeker.cv_reference,
            existing_status=ApplicationStatus(existing.status) if existing else ApplicationStatus.NONE,
            questions=questions,
            answers=list(answers),
        )

        application = Application(
            seeker_id=seeker_id,
            job_id=job_id,
            status=ApplicationStatus.APPLIED.value,
            answers=[a.strip() for a in answers] if questions else [],
            cover_letter=cover_letter.strip() if cover_letter and cover_letter.strip() else None,
        )
        try:
            self.applications.add(application)
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            if self.applications.find(seeker_id, job_id) is not None:
                raise DuplicateApplication()
            raise NotFound("Job not found")
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception(f"[{seeker_id}] Application insert failed for job {job_id}")
            raise

        logger.info(f"[{seeker_id}] Applied to job {job_id}")
        self._emit(
            lambda: NotificationIntent(
                template=NEW_APPLICATION,
                recipients=tuple(e for e in [job.employer.email] if e),
                data={"job_id": job.id, "title": job.title, "applicant_name": seeker.name},
            )
        )
        return application

    def browse_jobs(
        self,
        keywords: str | None = None,
        location: str | None = None,
        category: str | None = None,
    ) -> list[Job]:
        return self.jobs.search(keywords=keywords, location=location, category=category)

    def recent_jobs(self, limit: int) -> list[Job]:
        return self.jobs.recent(limit)

    def seeker_dashboard(self, seeker_id: str) -> SeekerDashboard:
        """Jobs applied to, plus skill-matched jobs not yet applied to."""
        seeker = self._account(seeker_id, "seeker")
        applied = self.applications.find_by_seeker(seeker_id)
        jobs = shortlist_jobs(
            seeker.skills,
            self.jobs.list_all(),
            applied_job_ids={job.id for _, job in applied},
        )
        shortlisted = [
            ShortlistEntry(job=job, matched_skills=sorted(shared_skills(seeker.skills, job.required_skills)))
            for job in jobs
        ]
        return SeekerDashboard(applied=applied, shortlisted=shortlisted)

    def _emit(self, build_intent: Callable[[], NotificationIntent]) -> None:
        """Build and hand off an intent after commit. Failures stop here."""
        try:
            intent = build_intent()
        except SQLAlchemyError as e:
            logger.warning(f"[notify] Could not resolve recipients: {e}")
            return
        self.dispatcher.emit(intent)
