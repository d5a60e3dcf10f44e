"""Admin endpoints: aggregate stats and billing plan grants."""

from fastapi import APIRouter, Depends

from hirehive.api.deps import get_account_service, require_admin
from hirehive.api.schemas import PlanAssignRequest, StatsResponse, SubscriptionResponse
from hirehive.db import User
from hirehive.services.accounts import AccountService

router = APIRouter()


@router.get("/stats", response_model=StatsResponse)
def get_stats(
    admin: User = Depends(require_admin),
    accounts: AccountService = Depends(get_account_service),
):
    """Platform totals for the dashboard."""
    return StatsResponse.model_validate(accounts.platform_stats())


@router.put("/employers/{employer_id}/plan", response_model=SubscriptionResponse)
def assign_plan(
    employer_id: str,
    data: PlanAssignRequest,
    admin: User = Depends(require_admin),
    accounts: AccountService = Depends(get_account_service),
):
    """Apply a plan granted by the billing flow."""
    usage = accounts.assign_plan(employer_id, data.plan_id)
    return SubscriptionResponse.from_usage(usage)
