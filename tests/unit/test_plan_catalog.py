import pytest
from unittest.mock import patch

from app.db import crud
from app.db.models import Plan
from app.models.plan import UNLIMITED, MeteredFeature, PlanKey
from app.services import plan_catalog


class TestGetOrCreate:
    def test_creates_plan_from_catalog(self, db):
        plan = plan_catalog.get_or_create(db, PlanKey.essential)

        assert plan.key == "essential"
        assert plan.name == "Essential"
        assert plan.quota_for(MeteredFeature.ia_search) == 25
        assert plan.quota_for(MeteredFeature.suggestion) == 15
        assert plan.users == 3

    def test_is_idempotent(self, db):
        first = plan_catalog.get_or_create(db, PlanKey.discovery)
        second = plan_catalog.get_or_create(db, "discovery")

        assert first.id == second.id
        assert db.query(Plan).filter(Plan.key == "discovery").count() == 1

    def test_concurrent_creation_refetches_existing_plan(self, db):
        existing = plan_catalog.get_or_create(db, PlanKey.professional)
        existing_id = existing.id
        real_lookup = crud.get_plan_by_key
        calls = []

        def lookup_missing_first(session, key):
            calls.append(key)
            # the first lookup misses, as if another request inserted right after it
            if len(calls) == 1:
                return None
            return real_lookup(session, key)

        with patch("app.services.plan_catalog.crud.get_plan_by_key", side_effect=lookup_missing_first):
            plan = plan_catalog.get_or_create(db, PlanKey.professional)

        assert plan.id == existing_id
        assert len(calls) == 2
        assert db.query(Plan).filter(Plan.key == "professional").count() == 1

    def test_unknown_key_is_rejected(self, db):
        with pytest.raises(ValueError):
            plan_catalog.get_or_create(db, "platinum")


def test_provision_plans_creates_whole_catalog(db):
    plans = plan_catalog.provision_plans(db)

    assert [p.key for p in plans] == [k.value for k in PlanKey]
    assert len(plan_catalog.list_plans(db)) == 4

    enterprise = crud.get_plan_by_key(db, "enterprise")
    assert enterprise.ia_search_quota == UNLIMITED
    assert enterprise.suggestion_quota == UNLIMITED


def test_provision_plans_twice_keeps_one_row_per_plan(db):
    plan_catalog.provision_plans(db)
    plan_catalog.provision_plans(db)

    assert db.query(Plan).count() == len(plan_catalog.PLANS)
