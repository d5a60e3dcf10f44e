"""
Per-employer posting quota ledger.

The ``posting_count`` column on the employer row is the only source of truth.
Every mutation is a single conditional UPDATE so concurrent posts by the same
employer serialize on that row and never on anyone else's.
"""

import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from hirehive.core.errors import NotFound, QuotaExceeded
from hirehive.core.plans import Plan, get_plan, is_known_plan
from hirehive.core.repositories import AccountRepository

logger = logging.getLogger(__name__)


@dataclass
class QuotaUsage:
    plan: Plan
    posting_count: int

    @property
    def remaining(self) -> int | None:
        if self.plan.is_unlimited:
            return None
        return max(self.plan.quota - self.posting_count, 0)


class QuotaLedger:
    """Answers "may this employer post?" and keeps the counter in step with jobs."""

    def __init__(self, db: Session):
        self.accounts = AccountRepository(db)

    def plan_for(self, employer_id: str) -> Plan:
        plan_id = self.accounts.plan_id(employer_id)
        if plan_id is None:
            raise NotFound("Employer not found")
        return get_plan(plan_id)

    def can_post(self, employer_id: str) -> bool:
        plan = self.plan_for(employer_id)
        if plan.is_unlimited:
            return True
        return (self.accounts.posting_count(employer_id) or 0) < plan.quota

    def record_post(self, employer_id: str) -> int:
        """Count a freshly inserted job against the employer's plan.

        Must run in the same transaction as the job insert. Raises
        QuotaExceeded when a concurrent post took the last slot.
        """
        plan = self.plan_for(employer_id)
        new_count = self.accounts.increment_posting_count(
            employer_id, None if plan.is_unlimited else plan.quota
        )
        if new_count is None:
            logger.info(f"[{employer_id}] Lost race for last posting slot on {plan.id}")
            raise QuotaExceeded(limit=plan.quota, plan_name=plan.name)
        return new_count

    def release_slot(self, employer_id: str) -> int:
        new_count = self.accounts.decrement_posting_count(employer_id)
        if new_count is None:
            raise NotFound("Employer not found")
        return new_count

    def usage(self, employer_id: str) -> QuotaUsage:
        plan = self.plan_for(employer_id)
        return QuotaUsage(plan=plan, posting_count=self.accounts.posting_count(employer_id) or 0)

    def assign_plan(self, employer_id: str, plan_id: str) -> QuotaUsage:
        """Apply a plan granted by billing. The counter is left untouched."""
        if not is_known_plan(plan_id):
            raise NotFound(f"Unknown plan '{plan_id}'")
        if not self.accounts.set_plan(employer_id, plan_id):
            raise NotFound("Employer not found")
        logger.info(f"[{employer_id}] Plan set to {plan_id}")
        return self.usage(employer_id)
