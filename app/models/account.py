from enum import Enum
from typing import Dict, Optional

from passlib.context import CryptContext
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from app.models.plan import PlanKey, PlanResponse, remaining
from config import BCRYPT_ROUNDS

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=BCRYPT_ROUNDS)

PASSWORD_MIN_LENGTH = 8


class Role(str, Enum):
    admin = "admin"
    editor = "editor"
    concierge = "concierge"


DEFAULT_ROLE = Role.concierge


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


class AccountCreate(BaseModel):
    email: str
    password: str
    first_name: str = Field(..., alias="firstName", min_length=1, max_length=64)
    last_name: str = Field(..., alias="lastName", min_length=1, max_length=64)
    plan: Optional[PlanKey] = None
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "email": "alice@example.com",
                "password": "correct-horse-battery",
                "firstName": "Alice",
                "lastName": "Martin",
                "plan": "essential",
            }
        },
    )

    @field_validator("email")
    @classmethod
    def validate_email(cls, value):
        value = normalize_email(value)
        local, _, domain = value.partition("@")
        if not local or "." not in domain or len(value) > 254:
            raise ValueError("Invalid email address")
        return value

    @field_validator("password")
    @classmethod
    def validate_password(cls, value):
        if len(value) < PASSWORD_MIN_LENGTH:
            raise ValueError(f"Password must be at least {PASSWORD_MIN_LENGTH} characters")
        return value

    @property
    def hashed_password(self):
        return pwd_context.hash(self.password)


class AccountLogin(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def validate_email(cls, value):
        return normalize_email(value)


class AccountRoleModify(BaseModel):
    role: Role


class AccountResponse(BaseModel):
    id: int
    email: str
    first_name: str = Field(..., alias="firstName")
    last_name: str = Field(..., alias="lastName")
    role: Role
    plan: PlanResponse
    usage: Dict[str, int] = Field(default_factory=dict)
    remaining: Dict[str, Optional[int]] = Field(default_factory=dict)
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    @model_validator(mode="after")
    def build_remaining(self) -> 'AccountResponse':
        self.remaining = {
            feature: remaining(self.plan.quota_for(feature), used)
            for feature, used in self.usage.items()
        }
        return self


class AccountInDB(BaseModel):
    id: int
    email: str
    hashed_password: str
    role: Role
    model_config = ConfigDict(from_attributes=True)

    def verify_password(self, plain_password):
        return pwd_context.verify(plain_password, self.hashed_password)


class AuthResponse(BaseModel):
    token: str
    token_type: str = "bearer"
    user: AccountResponse
