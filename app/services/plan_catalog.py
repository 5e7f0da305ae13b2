"""Subscription tiers and their per-feature quotas.

The table below is the only source of plan definitions. Plans are written to
the store the first time they are needed and never deleted.
"""

import logging
from typing import Dict, List, NamedTuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.db import crud
from app.db.models import Plan
from app.models.plan import UNLIMITED, PlanKey

logger = logging.getLogger("luxboard.plans")


class PlanDefinition(NamedTuple):
    name: str
    ia_search_quota: int
    suggestion_quota: int
    users: int


PLANS: Dict[PlanKey, PlanDefinition] = {
    PlanKey.discovery: PlanDefinition("Discovery", 2, 0, 1),
    PlanKey.essential: PlanDefinition("Essential", 25, 15, 3),
    PlanKey.professional: PlanDefinition("Professional", 100, 50, 10),
    PlanKey.enterprise: PlanDefinition("Enterprise", UNLIMITED, UNLIMITED, UNLIMITED),
}


def get_or_create(db: Session, plan_key: PlanKey) -> Plan:
    """Return the stored plan for ``plan_key``, creating it from the catalog if absent."""
    plan_key = PlanKey(plan_key)
    dbplan = crud.get_plan_by_key(db, plan_key.value)
    if dbplan:
        return dbplan

    definition = PLANS[plan_key]
    try:
        dbplan = crud.create_plan(db, key=plan_key.value, **definition._asdict())
        logger.info(f"Plan '{plan_key.value}' created")
        return dbplan
    except IntegrityError:
        # another request created it between our lookup and insert
        db.rollback()
        logger.debug(f"Plan '{plan_key.value}' created concurrently, re-fetching")
        dbplan = crud.get_plan_by_key(db, plan_key.value)
        if dbplan is None:
            raise
        return dbplan


def provision_plans(db: Session) -> List[Plan]:
    return [get_or_create(db, key) for key in PLANS]


def list_plans(db: Session) -> List[Plan]:
    return crud.get_plans(db)
