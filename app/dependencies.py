"""Request guards: authenticate, authorize by role, consume quota.

Authentication and role checks work from the token alone. Only the quota
guard reads and writes the store.
"""

import logging
from typing import Callable, Optional

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer

from app.db import Session, get_db
from app.exceptions import Forbidden, Unauthenticated
from app.models.account import Role
from app.models.plan import MeteredFeature
from app.models.token import SessionClaims
from app.services import quota
from app.utils.jwt import get_session_payload

logger = logging.getLogger("luxboard")

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)

METERED_ROLES = (Role.admin, Role.editor, Role.concierge)


def get_current_claims(token: Optional[str] = Depends(oauth2_scheme)) -> SessionClaims:
    if not token:
        raise Unauthenticated()

    claims = get_session_payload(token)
    if not claims:
        raise Unauthenticated()
    return claims


def require_role(*roles: Role) -> Callable[..., SessionClaims]:
    """Accept only the listed roles. Membership is exact, there is no hierarchy."""
    allowed = frozenset(Role(role) for role in roles)

    def check_role(claims: SessionClaims = Depends(get_current_claims)) -> SessionClaims:
        if claims.role not in allowed:
            logger.warning(
                f"Account #{claims.account_id} with role {claims.role.value} denied, "
                f"requires one of {sorted(r.value for r in allowed)}"
            )
            raise Forbidden()
        return claims

    return check_role


def require_quota(feature: MeteredFeature, *roles: Role) -> Callable[..., quota.QuotaDecision]:
    feature = MeteredFeature(feature)
    role_guard = require_role(*(roles or METERED_ROLES))

    def consume_quota(
        claims: SessionClaims = Depends(role_guard),
        db: Session = Depends(get_db),
    ) -> quota.QuotaDecision:
        return quota.consume(db, claims, feature)

    return consume_quota


def consume_path_feature(
    feature: MeteredFeature,
    claims: SessionClaims = Depends(require_role(*METERED_ROLES)),
    db: Session = Depends(get_db),
) -> quota.QuotaDecision:
    """Quota guard for routes that take the metered feature from the path."""
    return quota.consume(db, claims, feature)
