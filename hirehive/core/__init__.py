"""
Posting quota and application lifecycle core.

- plans: subscription plan catalog
- quota: per-employer posting ledger
- matcher: skill matching for shortlists and talent search
- applications: application state machine
- repositories: typed queries over the tables
"""

from hirehive.core.applications import ApplicationStatus
from hirehive.core.plans import PLANS, Plan, get_plan
from hirehive.core.quota import QuotaLedger, QuotaUsage

__all__ = ["ApplicationStatus", "PLANS", "Plan", "get_plan", "QuotaLedger", "QuotaUsage"]
