"""Request-scoped dependencies: principal, role gates, services."""

from dataclasses import dataclass

from fastapi import BackgroundTasks, Depends, Header, HTTPException
from sqlalchemy.orm import Session

from hirehive.core.errors import Forbidden
from hirehive.db import User, get_db
from hirehive.services.accounts import AccountService
from hirehive.services.notifications import NotificationDispatcher, Notifier, build_notifier
from hirehive.services.postings import PostingService

ROLES = ("employer", "seeker", "admin")


@dataclass(frozen=True)
class Principal:
    id: str
    role: str


def get_principal(
    x_user_id: str | None = Header(None, alias="X-User-ID"),
    x_user_role: str | None = Header(None, alias="X-User-Role"),
) -> Principal:
    """Principal supplied by the identity layer in front of this service."""
    if not x_user_id or not x_user_role:
        raise HTTPException(status_code=401, detail="Authentication required")
    role = x_user_role.strip().lower()
    if role not in ROLES:
        raise Forbidden()
    return Principal(id=x_user_id.strip(), role=role)


def get_notifier() -> Notifier:
    return build_notifier()


def get_dispatcher(
    background_tasks: BackgroundTasks,
    notifier: Notifier = Depends(get_notifier),
) -> NotificationDispatcher:
    """Notifications for this request, delivered after the response is sent."""
    return NotificationDispatcher(notifier, background_tasks)


def get_account_service(
    db: Session = Depends(get_db),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
) -> AccountService:
    return AccountService(db, dispatcher)


def get_posting_service(
    db: Session = Depends(get_db),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
) -> PostingService:
    return PostingService(db, dispatcher)


def current_account(
    principal: Principal = Depends(get_principal),
    accounts: AccountService = Depends(get_account_service),
) -> User:
    return accounts.ensure_account(principal.id, principal.role)


def require_role(role: str):
    """Dependency factory: the caller's account, if it has ``role``."""

    def dependency(
        principal: Principal = Depends(get_principal),
        accounts: AccountService = Depends(get_account_service),
    ) -> User:
        if principal.role != role:
            raise Forbidden()
        user = accounts.ensure_account(principal.id, principal.role)
        if user.role != role:
            raise Forbidden()
        return user

    return dependency


require_employer = require_role("employer")
require_seeker = require_role("seeker")
require_admin = require_role("admin")
