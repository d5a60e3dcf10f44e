"""Database table models."""

import uuid
from datetime import UTC, datetime

from sqlalchemy import JSON, CheckConstraint, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hirehive.db.base import Base


def generate_uuid() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(UTC)


class User(Base):
    """Platform account; employer, seeker or admin."""

    __tablename__ = "users"
    __table_args__ = (CheckConstraint("posting_count >= 0", name="ck_users_posting_count_nonnegative"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    role: Mapped[str] = mapped_column(String(20), index=True)  # employer/seeker/admin
    name: Mapped[str] = mapped_column(String(255), default="")
    email: Mapped[str | None] = mapped_column(String(255), default=None, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)

    # Employer subscription
    plan_id: Mapped[str] = mapped_column(String(32), default="buzz")
    posting_count: Mapped[int] = mapped_column(Integer, default=0)

    # Seeker profile
    skills: Mapped[list] = mapped_column(JSON, default=list)
    education: Mapped[str] = mapped_column(Text, default="")
    cv_reference: Mapped[str | None] = mapped_column(String(512), default=None)

    jobs: Mapped[list["Job"]] = relationship(back_populates="employer")
    applications: Mapped[list["Application"]] = relationship(back_populates="seeker")


class Job(Base):
    """A job posting owned by one employer."""

    __tablename__ = "jobs"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    employer_id: Mapped[str] = mapped_column(ForeignKey("users.id"), index=True)
    title: Mapped[str] = mapped_column(String(255))
    category: Mapped[str] = mapped_column(String(100), default="")
    location: Mapped[str] = mapped_column(String(255), default="")
    experience: Mapped[str] = mapped_column(String(100), default="")
    salary: Mapped[str | None] = mapped_column(String(100), default=None)
    description: Mapped[str] = mapped_column(Text, default="")
    notice_period: Mapped[str] = mapped_column(String(100), default="")
    required_skills: Mapped[list] = mapped_column(JSON, default=list)
    screening_questions: Mapped[list] = mapped_column(JSON, default=list)
    posted_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, index=True)

    employer: Mapped["User"] = relationship(back_populates="jobs")
    applications: Mapped[list["Application"]] = relationship(back_populates="job")


class Application(Base):
    """A seeker's application to a job; one per (seeker, job)."""

    __tablename__ = "applications"
    __table_args__ = (UniqueConstraint("seeker_id", "job_id", name="uq_applications_seeker_job"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    seeker_id: Mapped[str] = mapped_column(ForeignKey("users.id"), index=True)
    job_id: Mapped[str] = mapped_column(ForeignKey("jobs.id"), index=True)
    status: Mapped[str] = mapped_column(String(20), default="applied")  # applied/shortlisted/rejected/hired
    answers: Mapped[list] = mapped_column(JSON, default=list)
    cover_letter: Mapped[str | None] = mapped_column(Text, default=None)
    applied_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)

    seeker: Mapped["User"] = relationship(back_populates="applications")
    job: Mapped["Job"] = relationship(back_populates="applications")
