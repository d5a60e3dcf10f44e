"""Account profile endpoint."""

from fastapi import APIRouter, Depends

from hirehive.api.deps import current_account, get_account_service
from hirehive.api.schemas import ProfileResponse, ProfileUpdate
from hirehive.db import User
from hirehive.services.accounts import AccountService

router = APIRouter()


@router.get("/profile", response_model=ProfileResponse)
def get_profile(user: User = Depends(current_account)):
    """Get the caller's profile."""
    return ProfileResponse.model_validate(user)


@router.put("/profile", response_model=ProfileResponse)
def update_profile(
    data: ProfileUpdate,
    user: User = Depends(current_account),
    accounts: AccountService = Depends(get_account_service),
):
    """Update name, contact and (for seekers) skills, education and CV reference."""
    user = accounts.update_profile(user, **data.model_dump(exclude_unset=True))
    return ProfileResponse.model_validate(user)
