"""Metered feature admission.

Usage is consumed on admission: a request that passes the check has
already incremented the counter, whatever the handler does afterwards.
"""

import logging
from typing import NamedTuple, Optional

from sqlalchemy.orm import Session

from app.db import crud
from app.exceptions import QuotaExceeded
from app.models.plan import MeteredFeature, is_unlimited, remaining
from app.models.token import SessionClaims
from app.services.credentials import get_live_account

logger = logging.getLogger("luxboard.quota")


class QuotaDecision(NamedTuple):
    feature: MeteredFeature
    quota: int
    used: int

    @property
    def remaining(self) -> Optional[int]:
        return remaining(self.quota, self.used)


def consume(db: Session, claims: SessionClaims, feature: MeteredFeature) -> QuotaDecision:
    """Check the live quota of the caller and take one unit of ``feature``.

    Raises QuotaExceeded without touching the counter when the plan's
    allotment is used up.
    """
    feature = MeteredFeature(feature)
    dbaccount = get_live_account(db, claims)
    account_id = dbaccount.id
    quota = dbaccount.plan.quota_for(feature)
    crud.ensure_usage(db, account_id, feature)

    if is_unlimited(quota):
        # counted even though nothing is enforced
        used = crud.increment_usage(db, account_id, feature)
        if used is None:
            raise RuntimeError(f"No {feature.value} counter for account #{account_id}")
    else:
        used = crud.increment_usage(db, account_id, feature, quota=quota)
        if used is None:
            # counters only grow, so this read is at least the value that refused us
            used = crud.get_usage(db, account_id, feature)
            logger.warning(
                f"Account #{account_id} exceeded {feature.value} quota ({used}/{quota})"
            )
            raise QuotaExceeded(feature=feature.value, quota=quota, used=used)

    logger.info(f"Account #{account_id} consumed {feature.value} ({used}/{quota})")
    return QuotaDecision(feature=feature, quota=quota, used=used)
