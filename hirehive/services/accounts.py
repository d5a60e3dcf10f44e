"""Profile, subscription and admin reporting operations."""

import logging
from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from hirehive.core.matcher import dedupe_skills
from hirehive.core.plans import list_plans
from hirehive.core.quota import QuotaLedger, QuotaUsage
from hirehive.core.repositories import AccountRepository, ApplicationRepository, JobRepository
from hirehive.db.tables import User
from hirehive.services.notifications import WELCOME, NotificationDispatcher, NotificationIntent

logger = logging.getLogger(__name__)


@dataclass
class PlatformStats:
    total_employers: int
    total_seekers: int
    active_jobs: int
    total_applications: int
    employers_per_plan: dict[str, int]


class AccountService:
    def __init__(self, db: Session, dispatcher: NotificationDispatcher | None = None):
        self.db = db
        self.accounts = AccountRepository(db)
        self.ledger = QuotaLedger(db)
        self.dispatcher = dispatcher

    def ensure_account(self, user_id: str, role: str) -> User:
        """Make sure the authenticated principal has an account row."""
        user = self.accounts.get(user_id)
        if user is not None:
            return user
        try:
            user = self.accounts.get_or_create(user_id, role)
            self.db.commit()
        except SQLAlchemyError:
            # Another request created it first
            self.db.rollback()
            user = self.accounts.get(user_id)
            if user is None:
                raise
            return user
        logger.info(f"[{user_id}] Created {role} account")
        self._welcome(user)
        return user

    def update_profile(
        self,
        user: User,
        name: str | None = None,
        email: str | None = None,
        skills: list[str] | None = None,
        education: str | None = None,
        cv_reference: str | None = None,
    ) -> User:
        had_email = bool(user.email)
        if name is not None:
            user.name = name.strip()
        if email is not None:
            user.email = email.strip().lower() or None
        if user.role == "seeker":
            if skills is not None:
                user.skills = dedupe_skills(skills)
            if education is not None:
                user.education = education.strip()
            if cv_reference is not None:
                user.cv_reference = cv_reference.strip() or None
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        self.db.refresh(user)
        if not had_email and user.email:
            # Header-created accounts have no address until the first profile save
            self._welcome(user)
        return user

    def _welcome(self, user: User) -> None:
        if self.dispatcher is None:
            return
        self.dispatcher.emit(
            NotificationIntent(
                template=WELCOME,
                recipients=tuple(e for e in [user.email] if e),
                data={"name": user.name or "there", "role": user.role},
            )
        )

    def subscription(self, employer_id: str) -> QuotaUsage:
        return self.ledger.usage(employer_id)

    def assign_plan(self, employer_id: str, plan_id: str) -> QuotaUsage:
        try:
            self.ledger.assign_plan(employer_id, plan_id)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        return self.ledger.usage(employer_id)

    def platform_stats(self) -> PlatformStats:
        per_plan = {plan.id: 0 for plan in list_plans()}
        per_plan.update(self.accounts.employers_per_plan())
        return PlatformStats(
            total_employers=self.accounts.count_by_role("employer"),
            total_seekers=self.accounts.count_by_role("seeker"),
            active_jobs=JobRepository(self.db).count(),
            total_applications=ApplicationRepository(self.db).count(),
            employers_per_plan=per_plan,
        )
