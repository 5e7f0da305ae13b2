from typing import List

from fastapi import APIRouter, Depends

from app.db import Session, get_db
from app.models.plan import PlanResponse
from app.services import plan_catalog

router = APIRouter(tags=["Plans"])


@router.get("/plans", response_model=List[PlanResponse])
def get_plans(db: Session = Depends(get_db)):
    """Available subscription plans and their quotas. -1 means unlimited."""
    return plan_catalog.list_plans(db)
