"""Seeker endpoints: job board, applications."""

from fastapi import APIRouter, Depends, Request

from hirehive.api.deps import get_posting_service, require_seeker
from hirehive.api.limiter import limiter
from hirehive.api.schemas import (
    ApplicationResponse,
    ApplicationSubmittedResponse,
    AppliedJobResponse,
    ApplyRequest,
    JobListResponse,
    JobResponse,
    SeekerApplicationsResponse,
    ShortlistedJobResponse,
)
from hirehive.config import settings
from hirehive.db import User
from hirehive.services.postings import PostingService

router = APIRouter()


@router.get("/jobs", response_model=JobListResponse)
def browse_jobs(
    keywords: str | None = None,
    location: str | None = None,
    category: str | None = None,
    seeker: User = Depends(require_seeker),
    service: PostingService = Depends(get_posting_service),
):
    """Job board with optional filters."""
    jobs = service.browse_jobs(keywords=keywords, location=location, category=category)
    return JobListResponse(jobs=[JobResponse.model_validate(j) for j in jobs])


@router.get("/applications", response_model=SeekerApplicationsResponse)
def my_applications(
    seeker: User = Depends(require_seeker),
    service: PostingService = Depends(get_posting_service),
):
    """Jobs applied to and skill-matched suggestions."""
    dashboard = service.seeker_dashboard(seeker.id)
    return SeekerApplicationsResponse(
        applied=[
            AppliedJobResponse(
                job=JobResponse.model_validate(job),
                status=application.status,
                applied_at=application.applied_at,
            )
            for application, job in dashboard.applied
        ],
        shortlisted=[
            ShortlistedJobResponse(job=JobResponse.model_validate(entry.job), matched_skills=entry.matched_skills)
            for entry in dashboard.shortlisted
        ],
    )


@router.post("/apply/{job_id}", response_model=ApplicationSubmittedResponse)
@limiter.limit(settings.apply_rate_limit)
def apply(
    request: Request,
    job_id: str,
    data: ApplyRequest,
    seeker: User = Depends(require_seeker),
    service: PostingService = Depends(get_posting_service),
):
    """Apply for a job."""
    application = service.submit_application(seeker.id, job_id, data.answers, data.cover_letter)
    return ApplicationSubmittedResponse(
        message="Application submitted successfully",
        application=ApplicationResponse.model_validate(application),
    )
