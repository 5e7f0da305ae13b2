"""Domain errors raised by the credential service and the request guards.

Every error carries the HTTP status it maps to; the application renders
them through a single exception handler.
"""

from typing import Any, Dict, Optional

GENERIC_AUTH_MESSAGE = "Could not validate credentials"


class LuxboardError(Exception):
    status_code = 500
    code = "error"
    message = "Internal error"

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        extra: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        self.message = message or self.message
        self.extra = dict(extra or {})
        self.headers = dict(headers) if headers else None
        super().__init__(self.message)

    def to_content(self) -> Dict[str, Any]:
        content = {"message": self.message, "code": self.code}
        content.update(self.extra)
        return content


class Conflict(LuxboardError):
    status_code = 409
    code = "conflict"
    message = "Email already used"


class Unauthenticated(LuxboardError):
    status_code = 401
    code = "unauthenticated"
    message = GENERIC_AUTH_MESSAGE

    def __init__(self, message: Optional[str] = None, **kwargs):
        kwargs.setdefault("headers", {"WWW-Authenticate": "Bearer"})
        super().__init__(message, **kwargs)


class Forbidden(LuxboardError):
    status_code = 403
    code = "forbidden"
    message = "You're not allowed"


class QuotaExceeded(LuxboardError):
    status_code = 402
    code = "quota_exceeded"
    message = "Quota exceeded"

    def __init__(self, feature: str, quota: int, used: int):
        self.feature = feature
        self.quota = quota
        self.used = used
        super().__init__(extra={"upgrade": True, "feature": feature, "quota": quota, "used": used})


class NotFound(LuxboardError):
    status_code = 404
    code = "not_found"
    message = "Not found"
