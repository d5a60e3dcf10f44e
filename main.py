"""
HireHive backend - CLI Entry Point.

Usage:
    python main.py serve [port]              Run the API server
    python main.py init-db                   Create tables (use alembic in production)
    python main.py plans                     Show the plan catalog
    python main.py grant <employer> <plan>   Apply a plan granted by billing
"""

import sys

from dotenv import load_dotenv

load_dotenv()

from hirehive.core.errors import HiveError
from hirehive.core.plans import list_plans
from hirehive.db.base import get_session_factory, init_db
from hirehive.logging_config import configure_logging
from hirehive.services.accounts import AccountService


def show_plans():
    print("HireHive Plans")
    print("=" * 40)
    for plan in list_plans():
        quota = "unlimited" if plan.is_unlimited else str(plan.quota)
        print(f"{plan.id:<12} {plan.name:<20} jobs: {quota:<10} INR {plan.price}/month")


def grant(employer_id: str, plan_id: str):
    db = get_session_factory()()
    try:
        usage = AccountService(db).assign_plan(employer_id, plan_id)
        print(f"{employer_id}: {usage.plan.name} ({usage.posting_count}/{usage.plan.quota} used)")
    except HiveError as e:
        print(f"Error: {e.detail}")
    finally:
        db.close()


def main():
    """Run the HireHive CLI."""
    configure_logging()
    args = sys.argv[1:]
    if not args:
        print(__doc__)
        return

    command = args[0]
    try:
        if command == "serve":
            import uvicorn

            port = int(args[1]) if len(args) > 1 else 8000
            uvicorn.run("hirehive.api.app:app", host="0.0.0.0", port=port)
        elif command == "init-db":
            init_db()
            print("Tables created")
        elif command == "plans":
            show_plans()
        elif command == "grant" and len(args) == 3:
            grant(args[1], args[2])
        else:
            print(__doc__)
    except ValueError as e:
        print(f"Error: {e}")


if __name__ == "__main__":
    main()
