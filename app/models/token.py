from datetime import datetime
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict

from app.models.account import Role


class SessionClaims(BaseModel):
    """Decoded session token.

    ``account_id`` and ``role`` are trusted for identity and role checks.
    ``plan`` and ``usage`` are the values observed when the token was minted
    and are only meant for display; quota decisions re-read the store.
    """
    account_id: int
    role: Role
    plan: Dict[str, object]
    usage: Dict[str, int]
    issued_at: datetime
    expires_at: Optional[datetime] = None
    model_config = ConfigDict(frozen=True)
