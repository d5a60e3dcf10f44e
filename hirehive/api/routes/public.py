"""Unauthenticated endpoints for the homepage."""

from fastapi import APIRouter, Depends

from hirehive.api.deps import get_posting_service
from hirehive.api.schemas import JobListResponse, JobResponse, PlanListResponse, PlanResponse
from hirehive.config import settings
from hirehive.core.plans import list_plans
from hirehive.services.postings import PostingService

router = APIRouter()


@router.get("/plans", response_model=PlanListResponse)
def get_plans():
    """Subscription plan catalog."""
    return PlanListResponse(
        plans=[
            PlanResponse(id=p.id, name=p.name, quota=p.quota, price=p.price, unlimited=p.is_unlimited)
            for p in list_plans()
        ]
    )


@router.get("/jobs", response_model=JobListResponse)
def latest_jobs(service: PostingService = Depends(get_posting_service)):
    """Most recent jobs."""
    jobs = service.recent_jobs(settings.recent_jobs_limit)
    return JobListResponse(jobs=[JobResponse.model_validate(j) for j in jobs])
