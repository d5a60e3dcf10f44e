"""Employer endpoints: jobs, applicants, talent pool, subscription."""

from fastapi import APIRouter, Depends, Request

from hirehive.api.deps import get_account_service, get_posting_service, require_employer
from hirehive.api.limiter import limiter
from hirehive.api.schemas import (
    ApplicantListResponse,
    ApplicantResponse,
    ApplicationResponse,
    CandidateResponse,
    EmployerJobListResponse,
    EmployerJobResponse,
    JobCreate,
    JobDeletedResponse,
    JobPostedResponse,
    JobResponse,
    JobUpdate,
    SeekerListResponse,
    SeekerResponse,
    StatusUpdateRequest,
    SubscriptionResponse,
)
from hirehive.config import settings
from hirehive.db import User
from hirehive.services.accounts import AccountService
from hirehive.services.postings import PostingService

router = APIRouter()


@router.get("/subscription", response_model=SubscriptionResponse)
def get_subscription(
    employer: User = Depends(require_employer),
    accounts: AccountService = Depends(get_account_service),
):
    """Current plan and posting usage."""
    usage = accounts.subscription(employer.id)
    return SubscriptionResponse.from_usage(usage)


@router.post("/jobs", response_model=JobPostedResponse)
@limiter.limit(settings.posting_rate_limit)
def post_job(
    request: Request,
    data: JobCreate,
    employer: User = Depends(require_employer),
    service: PostingService = Depends(get_posting_service),
):
    """Post a job, subject to the employer's plan limit."""
    job = service.post_job(employer.id, data.model_dump())
    return JobPostedResponse(message="Job posted successfully", job=JobResponse.model_validate(job))


@router.get("/jobs", response_model=EmployerJobListResponse)
def list_jobs(
    employer: User = Depends(require_employer),
    service: PostingService = Depends(get_posting_service),
):
    """List the employer's jobs, newest first."""
    rows = service.list_employer_jobs(employer.id)
    return EmployerJobListResponse(
        jobs=[
            EmployerJobResponse(**JobResponse.model_validate(job).model_dump(), applicant_count=count)
            for job, count in rows
        ]
    )


@router.put("/jobs/{job_id}", response_model=JobResponse)
def update_job(
    job_id: str,
    data: JobUpdate,
    employer: User = Depends(require_employer),
    service: PostingService = Depends(get_posting_service),
):
    """Edit an owned job."""
    job = service.update_job(employer.id, job_id, data.model_dump(exclude_unset=True))
    return JobResponse.model_validate(job)


@router.delete("/jobs/{job_id}", response_model=JobDeletedResponse)
def delete_job(
    job_id: str,
    employer: User = Depends(require_employer),
    service: PostingService = Depends(get_posting_service),
):
    """Delete an owned job and its applications."""
    count = service.delete_job(employer.id, job_id)
    return JobDeletedResponse(message="Job deleted successfully and applications removed.", posting_count=count)


@router.get("/applicants/{job_id}", response_model=ApplicantListResponse)
def list_applicants(
    job_id: str,
    status: str | None = None,
    skill: str | None = None,
    employer: User = Depends(require_employer),
    service: PostingService = Depends(get_posting_service),
):
    """Applicants for an owned job with their screening answers, filterable by status and skill."""
    result = service.list_applicants_for_job(employer.id, job_id, status=status, skill=skill)
    return ApplicantListResponse(
        job_id=result.job.id,
        job_title=result.job.title,
        screening_questions=result.job.screening_questions or [],
        applicants=[ApplicantResponse.model_validate(a) for a in result.applicants],
    )


@router.put("/applicants/status", response_model=ApplicationResponse)
def update_applicant_status(
    data: StatusUpdateRequest,
    employer: User = Depends(require_employer),
    service: PostingService = Depends(get_posting_service),
):
    """Shortlist, reject or hire an applicant."""
    application = service.change_application_status(employer.id, data.job_id, data.seeker_id, data.new_status)
    return ApplicationResponse.model_validate(application)


@router.get("/seekers", response_model=SeekerListResponse)
def talent_pool(
    keyword: str | None = None,
    category: str | None = None,
    employer: User = Depends(require_employer),
    service: PostingService = Depends(get_posting_service),
):
    """Seekers filtered by skill keyword and/or category."""
    seekers = service.talent_pool(keyword=keyword, category=category)
    return SeekerListResponse(
        seekers=[
            SeekerResponse(
                id=s.id,
                name=s.name,
                email=s.email,
                skills=s.skills or [],
                education=s.education or "",
                has_cv=bool(s.cv_reference),
            )
            for s in seekers
        ]
    )


@router.get("/seekers/{seeker_id}", response_model=CandidateResponse)
def get_candidate(
    seeker_id: str,
    employer: User = Depends(require_employer),
    service: PostingService = Depends(get_posting_service),
):
    """Full profile of one candidate."""
    seeker = service.get_seeker_profile(seeker_id)
    return CandidateResponse(
        id=seeker.id,
        name=seeker.name,
        email=seeker.email,
        skills=seeker.skills or [],
        education=seeker.education or "",
        has_cv=bool(seeker.cv_reference),
        cv_reference=seeker.cv_reference,
    )
