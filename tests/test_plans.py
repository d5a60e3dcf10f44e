"""Tests for the plan catalog."""

import pytest

from hirehive.core.plans import DEFAULT_PLAN_ID, PLANS, UNLIMITED_QUOTA, get_plan, is_known_plan, list_plans


class TestPlanCatalog:
    @pytest.mark.parametrize(
        "plan_id,name,quota,price",
        [
            ("buzz", "Buzz Plan (Free)", 2, 0),
            ("worker", "Worker Plan", 5, 1999),
            ("colony", "Colony Plan", 15, 4999),
            ("queen", "Queen Plan", 30, 8999),
            ("hive_master", "Hive Master Plan", UNLIMITED_QUOTA, 14999),
        ],
    )
    def test_catalog_entries(self, plan_id, name, quota, price):
        plan = PLANS[plan_id]
        assert (plan.name, plan.quota, plan.price) == (name, quota, price)

    def test_only_hive_master_is_unlimited(self):
        assert [p.id for p in PLANS.values() if p.is_unlimited] == ["hive_master"]

    def test_unknown_or_missing_plan_falls_back_to_free_tier(self):
        assert get_plan("platinum").id == DEFAULT_PLAN_ID
        assert get_plan(None).id == DEFAULT_PLAN_ID
        assert get_plan("").id == DEFAULT_PLAN_ID

    def test_known_plan_lookup(self):
        assert is_known_plan("queen")
        assert not is_known_plan("Queen")

    def test_list_is_cheapest_first(self):
        prices = [p.price for p in list_plans()]
        assert prices == sorted(prices)
        assert list_plans()[0].id == "buzz"
