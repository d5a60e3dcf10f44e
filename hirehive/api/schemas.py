"""API request/response schemas."""

from datetime import datetime

from pydantic import BaseModel, Field

from hirehive.core.applications import MAX_SCREENING_QUESTIONS
from hirehive.core.quota import QuotaUsage


# Plan schemas
class PlanResponse(BaseModel):
    id: str
    name: str
    quota: int
    price: int
    unlimited: bool


class PlanListResponse(BaseModel):
    plans: list[PlanResponse]


class SubscriptionResponse(BaseModel):
    plan_id: str
    plan_name: str
    limit: int
    unlimited: bool
    posting_count: int
    remaining: int | None

    @classmethod
    def from_usage(cls, usage: QuotaUsage) -> "SubscriptionResponse":
        return cls(
            plan_id=usage.plan.id,
            plan_name=usage.plan.name,
            limit=usage.plan.quota,
            unlimited=usage.plan.is_unlimited,
            posting_count=usage.posting_count,
            remaining=usage.remaining,
        )


class PlanAssignRequest(BaseModel):
    plan_id: str


# Profile schemas
class ProfileUpdate(BaseModel):
    name: str | None = None
    email: str | None = None
    skills: list[str] | None = None
    education: str | None = None
    cv_reference: str | None = Field(default=None, description="Pointer to the stored CV file")


class ProfileResponse(BaseModel):
    id: str
    role: str
    name: str
    email: str | None
    skills: list[str]
    education: str
    cv_reference: str | None

    class Config:
        from_attributes = True


class SeekerResponse(BaseModel):
    id: str
    name: str
    email: str | None
    skills: list[str]
    education: str
    has_cv: bool


class SeekerListResponse(BaseModel):
    seekers: list[SeekerResponse]


class CandidateResponse(SeekerResponse):
    cv_reference: str | None


# Job schemas
class JobCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    category: str = ""
    location: str = ""
    experience: str = ""
    salary: str | None = None
    description: str = ""
    notice_period: str = ""
    required_skills: list[str] = Field(default_factory=list)
    screening_questions: list[str] = Field(default_factory=list, max_length=MAX_SCREENING_QUESTIONS)


class JobUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=255)
    category: str | None = None
    location: str | None = None
    experience: str | None = None
    salary: str | None = None
    description: str | None = None
    notice_period: str | None = None
    required_skills: list[str] | None = None
    screening_questions: list[str] | None = Field(default=None, max_length=MAX_SCREENING_QUESTIONS)


class JobResponse(BaseModel):
    id: str
    employer_id: str
    title: str
    category: str
    location: str
    experience: str
    salary: str | None
    description: str
    notice_period: str
    required_skills: list[str]
    screening_questions: list[str]
    posted_at: datetime

    class Config:
        from_attributes = True


class JobListResponse(BaseModel):
    jobs: list[JobResponse]


class EmployerJobResponse(JobResponse):
    applicant_count: int


class EmployerJobListResponse(BaseModel):
    jobs: list[EmployerJobResponse]


class JobPostedResponse(BaseModel):
    message: str
    job: JobResponse


class JobDeletedResponse(BaseModel):
    message: str
    posting_count: int


# Application schemas
class ApplyRequest(BaseModel):
    answers: list[str] = Field(default_factory=list)
    cover_letter: str | None = None


class ApplicationResponse(BaseModel):
    id: str
    seeker_id: str
    job_id: str
    status: str
    answers: list[str]
    cover_letter: str | None
    applied_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ApplicationSubmittedResponse(BaseModel):
    message: str
    application: ApplicationResponse


class StatusUpdateRequest(BaseModel):
    job_id: str
    seeker_id: str
    new_status: str


class ApplicantResponse(BaseModel):
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

    class Config:
        from_attributes = True


class ApplicantListResponse(BaseModel):
    job_id: str
    job_title: str
    screening_questions: list[str]
    applicants: list[ApplicantResponse]


class AppliedJobResponse(BaseModel):
    job: JobResponse
    status: str
    applied_at: datetime


class ShortlistedJobResponse(BaseModel):
    job: JobResponse
    matched_skills: list[str]


class SeekerApplicationsResponse(BaseModel):
    applied: list[AppliedJobResponse]
    shortlisted: list[ShortlistedJobResponse]


# Admin schemas
class StatsResponse(BaseModel):
    total_employers: int
    total_seekers: int
    active_jobs: int
    total_applications: int
    employers_per_plan: dict[str, int]

    class Config:
        from_attributes = True
