from enum import Enum
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

UNLIMITED = -1


class MeteredFeature(str, Enum):
    ia_search = "iaSearchQuota"
    suggestion = "suggestionQuota"


class PlanKey(str, Enum):
    discovery = "discovery"
    essential = "essential"
    professional = "professional"
    enterprise = "enterprise"


class Plan(BaseModel):
    name: str
    ia_search_quota: int = Field(..., alias="iaSearchQuota")
    suggestion_quota: int = Field(..., alias="suggestionQuota")
    users: int
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    def quota_for(self, feature: MeteredFeature) -> int:
        return getattr(self, PLAN_QUOTA_ATTRIBUTES[MeteredFeature(feature)])


class PlanResponse(Plan):
    key: str

    def snapshot(self) -> Dict[str, object]:
        """Claims-friendly copy of the plan, keyed the way clients read it."""
        return self.model_dump(by_alias=True)


def is_unlimited(quota: Optional[int]) -> bool:
    return quota is None or quota == UNLIMITED


def remaining(quota: int, used: int) -> Optional[int]:
    if is_unlimited(quota):
        return None
    return max(0, quota - used)


PLAN_QUOTA_ATTRIBUTES: Dict[MeteredFeature, str] = {
    MeteredFeature.ia_search: "ia_search_quota",
    MeteredFeature.suggestion: "suggestion_quota",
}
