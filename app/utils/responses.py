from pydantic import BaseModel


class HTTPException(BaseModel):
    message: str
    code: str


class Unauthorized(HTTPException):
    message: str = "Could not validate credentials"
    code: str = "unauthenticated"


class Forbidden(HTTPException):
    message: str = "You're not allowed"
    code: str = "forbidden"


class Conflict(HTTPException):
    message: str = "Email already used"
    code: str = "conflict"


class NotFound(HTTPException):
    message: str = "Not found"
    code: str = "not_found"


class QuotaExceeded(HTTPException):
    message: str = "Quota exceeded"
    code: str = "quota_exceeded"
    upgrade: bool = True
    feature: str
    quota: int
    used: int


_401 = {"description": "Unauthorized", "model": Unauthorized}
_402 = {"description": "Quota exceeded, an upgrade is required", "model": QuotaExceeded}
_403 = {"description": "Forbidden", "model": Forbidden}
_404 = {"description": "Not found", "model": NotFound}
_409 = {"description": "Conflict", "model": Conflict}
