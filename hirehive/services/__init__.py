"""
Services for the job board.

- postings: job posting, deletion and application orchestration
- accounts: profiles, subscriptions, admin stats
- notifications: fire-and-forget notification intents
- alerts: operator paging for ledger inconsistencies
"""

from hirehive.services.accounts import AccountService
from hirehive.services.notifications import NotificationDispatcher, NotificationIntent
from hirehive.services.postings import PostingService

__all__ = ["AccountService", "NotificationDispatcher", "NotificationIntent", "PostingService"]
