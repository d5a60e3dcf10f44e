"""
Subscription plan catalog.

Plans are fixed at deploy time. Upgrades are granted by the external billing
flow; this module only answers "what does plan X allow".
"""

from dataclasses import dataclass

UNLIMITED_QUOTA = 9999
DEFAULT_PLAN_ID = "buzz"


@dataclass(frozen=True)
class Plan:
    id: str
    name: str
    quota: int
    price: int  # INR per month, 0 for the free tier

    @property
    def is_unlimited(self) -> bool:
        return self.quota >= UNLIMITED_QUOTA


PLANS: dict[str, Plan] = {
    plan.id: plan
    for plan in (
        Plan(id="buzz", name="Buzz Plan (Free)", quota=2, price=0),
        Plan(id="worker", name="Worker Plan", quota=5, price=1999),
        Plan(id="colony", name="Colony Plan", quota=15, price=4999),
        Plan(id="queen", name="Queen Plan", quota=30, price=8999),
        Plan(id="hive_master", name="Hive Master Plan", quota=UNLIMITED_QUOTA, price=14999),
    )
}


def get_plan(plan_id: str | None) -> Plan:
    """Resolve a stored plan id, falling back to the free tier."""
    return PLANS.get(plan_id or DEFAULT_PLAN_ID, PLANS[DEFAULT_PLAN_ID])


def is_known_plan(plan_id: str) -> bool:
    return plan_id in PLANS


def list_plans() -> list[Plan]:
    """All plans, cheapest first."""
    return sorted(PLANS.values(), key=lambda p: (p.price, p.quota))
