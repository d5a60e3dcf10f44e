"""
HireHive job-board backend.

Core components:
- core: plan catalog, quota ledger, skill matcher, application state machine
- services: posting/application orchestration, notifications, alerts
- db: SQLAlchemy tables and session management
- api: FastAPI routes
"""
