"""
Typed repository methods over the SQLAlchemy tables.

The engine core talks to these classes only; query construction stays here.
None of the methods commit: the calling service owns the transaction.
"""

from sqlalchemy import case, delete, func, or_, select, update
from sqlalchemy.orm import Session

from hirehive.db.tables import Application, Job, User, utcnow


class AccountRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, user_id: str) -> User | None:
        return self.db.get(User, user_id)

    def find_by_email_role(self, email: str, role: str) -> User | None:
        return self.db.scalars(
            select(User).where(func.lower(User.email) == email.strip().lower(), User.role == role)
        ).first()

    def list_by_role(self, role: str) -> list[User]:
        return list(self.db.scalars(select(User).where(User.role == role).order_by(User.name)))

    def emails_by_role(self, role: str) -> list[str]:
        rows = self.db.scalars(select(User.email).where(User.role == role, User.email.is_not(None)))
        return [email for email in rows if email]

    def get_or_create(self, user_id: str, role: str) -> User:
        """Materialize the account row for an authenticated principal."""
        user = self.get(user_id)
        if user is None:
            user = User(id=user_id, role=role)
            self.db.add(user)
            self.db.flush()
        return user

    def count_by_role(self, role: str) -> int:
        return self.db.scalar(select(func.count()).select_from(User).where(User.role == role)) or 0

    def employers_per_plan(self) -> dict[str, int]:
        rows = self.db.execute(
            select(User.plan_id, func.count()).where(User.role == "employer").group_by(User.plan_id)
        )
        return {plan_id: count for plan_id, count in rows}

    # Posting ledger columns

    def plan_id(self, employer_id: str) -> str | None:
        return self.db.scalar(
            select(User.plan_id).where(User.id == employer_id, User.role == "employer")
        )

    def posting_count(self, employer_id: str) -> int | None:
        return self.db.scalar(select(User.posting_count).where(User.id == employer_id))

    def increment_posting_count(self, employer_id: str, ceiling: int | None) -> int | None:
        """Add one to the counter, only while it stays below ``ceiling``.

        Returns the new count, or None when the row was not updated.
        """
        stmt = update(User).where(User.id == employer_id, User.role == "employer")
        if ceiling is not None:
            stmt = stmt.where(User.posting_count < ceiling)
        stmt = stmt.values(posting_count=User.posting_count + 1).execution_options(
            synchronize_session=False
        )
        if self.db.execute(stmt).rowcount != 1:
            return None
        return self.posting_count(employer_id)

    def decrement_posting_count(self, employer_id: str) -> int | None:
        """Subtract one from the counter, never going below zero."""
        stmt = (
            update(User)
            .where(User.id == employer_id, User.role == "employer")
            .values(
                posting_count=case((User.posting_count > 0, User.posting_count - 1), else_=0)
            )
            .execution_options(synchronize_session=False)
        )
        if self.db.execute(stmt).rowcount != 1:
            return None
        return self.posting_count(employer_id)

    def set_plan(self, employer_id: str, plan_id: str) -> bool:
        stmt = (
            update(User)
            .where(User.id == employer_id, User.role == "employer")
            .values(plan_id=plan_id)
            .execution_options(synchronize_session=False)
        )
        return self.db.execute(stmt).rowcount == 1


def _contains(text: str) -> str:
    """ILIKE pattern matching ``text`` literally anywhere in the column."""
    escaped = text.strip().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class JobRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, job_id: str) -> Job | None:
        return self.db.get(Job, job_id)

    def add(self, job: Job) -> Job:
        self.db.add(job)
        self.db.flush()
        return job

    def find_by_employer(self, employer_id: str) -> list[tuple[Job, int]]:
        """Employer's jobs, newest first, with applicant counts."""
        applicant_count = (
            select(func.count(Application.id))
            .where(Application.job_id == Job.id)
            .correlate(Job)
            .scalar_subquery()
        )
        rows = self.db.execute(
            select(Job, applicant_count)
            .where(Job.employer_id == employer_id)
            .order_by(Job.posted_at.desc())
        )
        return [(job, count) for job, count in rows]

    def delete_owned(self, job_id: str, employer_id: str) -> int:
        """Delete a job and its applications. Returns the number of job rows removed."""
        self.db.execute(
            delete(Application)
            .where(
                Application.job_id == job_id,
                Application.job_id.in_(
                    select(Job.id).where(Job.id == job_id, Job.employer_id == employer_id)
                ),
            )
            .execution_options(synchronize_session=False)
        )
        result = self.db.execute(
            delete(Job)
            .where(Job.id == job_id, Job.employer_id == employer_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def search(
        self,
        keywords: str | None = None,
        location: str | None = None,
        category: str | None = None,
    ) -> list[Job]:
        stmt = select(Job).join(User, Job.employer_id == User.id)
        if keywords:
            pattern = _contains(keywords)
            stmt = stmt.where(
                or_(
                    Job.title.ilike(pattern, escape="\\"),
                    Job.description.ilike(pattern, escape="\\"),
                    Job.category.ilike(pattern, escape="\\"),
                    User.name.ilike(pattern, escape="\\"),
                )
            )
        if location:
            stmt = stmt.where(Job.location.ilike(_contains(location), escape="\\"))
        if category:
            stmt = stmt.where(func.lower(Job.category) == category.strip().lower())
        return list(self.db.scalars(stmt.order_by(Job.posted_at.desc())))

    def recent(self, limit: int) -> list[Job]:
        return list(self.db.scalars(select(Job).order_by(Job.posted_at.desc()).limit(limit)))

    def list_all(self) -> list[Job]:
        return list(self.db.scalars(select(Job).order_by(Job.posted_at.desc())))

    def count(self) -> int:
        return self.db.scalar(select(func.count()).select_from(Job)) or 0


class ApplicationRepository:
    def __init__(self, db: Session):
        self.db = db

    def find(self, seeker_id: str, job_id: str) -> Application | None:
        return self.db.scalars(
            select(Application).where(Application.seeker_id == seeker_id, Application.job_id == job_id)
        ).first()

    def add(self, application: Application) -> Application:
        self.db.add(application)
        self.db.flush()
        return application

    def find_by_seeker(self, seeker_id: str) -> list[tuple[Application, Job]]:
        rows = self.db.execute(
            select(Application, Job)
            .join(Job, Application.job_id == Job.id)
            .where(Application.seeker_id == seeker_id)
            .order_by(Application.applied_at.desc())
        )
        return [(application, job) for application, job in rows]

    def find_by_job_with_seekers(self, job_id: str) -> list[tuple[Application, User]]:
        rows = self.db.execute(
            select(Application, User)
            .join(User, Application.seeker_id == User.id)
            .where(Application.job_id == job_id)
            .order_by(Application.applied_at, Application.id)
        )
        return [(application, seeker) for application, seeker in rows]

    def transition(self, seeker_id: str, job_id: str, from_status: str, to_status: str) -> bool:
        """Move one application from ``from_status`` to ``to_status`` atomically."""
        stmt = (
            update(Application)
            .where(
                Application.seeker_id == seeker_id,
                Application.job_id == job_id,
                Application.status == from_status,
            )
            .values(status=to_status, updated_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        return self.db.execute(stmt).rowcount == 1

    def count(self) -> int:
        return self.db.scalar(select(func.count()).select_from(Application)) or 0
