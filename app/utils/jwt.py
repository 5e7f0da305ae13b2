import logging
from datetime import datetime, timedelta, timezone
from typing import Optional, Union

import jwt

from app.models.token import SessionClaims
from config import JWT_ACCESS_TOKEN_EXPIRE_MINUTES, JWT_ALGORITHM, JWT_SECRET_KEY

logger = logging.getLogger("luxboard.jwt")

ACCESS = "session"


def get_secret_key() -> str:
    return JWT_SECRET_KEY


def create_session_token(
    account_id: int,
    role: str,
    plan: dict,
    usage: dict,
    now: Optional[datetime] = None,
    expires_delta: Optional[timedelta] = None,
) -> str:
    now = now or datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=JWT_ACCESS_TOKEN_EXPIRE_MINUTES))
    data = {
        "sub": str(account_id),
        "access": ACCESS,
        "role": str(getattr(role, "value", role)),
        "plan": plan,
        "usage": usage,
        "iat": int(now.timestamp()),
        "exp": int(expire.timestamp()),
    }
    return jwt.encode(data, get_secret_key(), algorithm=JWT_ALGORITHM)


def get_session_payload(token: str) -> Union[SessionClaims, None]:
    if not token or not token.strip():
        logger.debug("get_session_payload: empty token")
        return None

    try:
        payload = jwt.decode(
            token,
            get_secret_key(),
            algorithms=[JWT_ALGORITHM],
            options={"require": ["sub", "exp", "iat"]},
        )
    except jwt.exceptions.PyJWTError as e:
        logger.info(f"Rejected session token '{token[:10]}...': {e}")
        return None

    if payload.get("access") != ACCESS:
        logger.info("Rejected session token: wrong access type")
        return None

    try:
        return SessionClaims(
            account_id=int(payload["sub"]),
            role=payload.get("role"),
            plan=payload.get("plan") or {},
            usage=payload.get("usage") or {},
            issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
            expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
        )
    except (ValueError, TypeError) as e:
        logger.info(f"Rejected session token with malformed claims: {e}")
        return None
