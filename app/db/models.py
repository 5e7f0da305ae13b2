from datetime import datetime

from sqlalchemy import (
    BigInteger,
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from app.db.base import Base
from app.models.account import Role
from app.models.plan import PLAN_QUOTA_ATTRIBUTES, MeteredFeature


class Plan(Base):
    __tablename__ = "plans"

    id = Column(Integer, primary_key=True)
    key = Column(String(32), unique=True, index=True, nullable=False)
    name = Column(String(64), unique=True, nullable=False)
    ia_search_quota = Column(Integer, nullable=False)
    suggestion_quota = Column(Integer, nullable=False)
    users = Column(Integer, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    accounts = relationship("Account", back_populates="plan")

    def quota_for(self, feature: MeteredFeature) -> int:
        return getattr(self, PLAN_QUOTA_ATTRIBUTES[MeteredFeature(feature)])


class Account(Base):
    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True)
    email = Column(String(254), unique=True, index=True, nullable=False)
    hashed_password = Column(String(128), nullable=False)
    first_name = Column(String(64), nullable=False)
    last_name = Column(String(64), nullable=False)
    role = Column(Enum(Role), nullable=False, default=Role.concierge)
    plan_id = Column(Integer, ForeignKey("plans.id"), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    plan = relationship("Plan", back_populates="accounts", lazy="joined")
    usages = relationship("AccountUsage", back_populates="account", cascade="all, delete-orphan")

    @property
    def usage(self) -> dict:
        used = {feature.value: 0 for feature in MeteredFeature}
        for row in self.usages:
            used[row.feature] = row.used
        return used


class AccountUsage(Base):
    __tablename__ = "account_usages"
    __table_args__ = (
        UniqueConstraint('account_id', 'feature', name='uq_account_usage_feature'),
    )

    id = Column(Integer, primary_key=True)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False, index=True)
    feature = Column(String(32), nullable=False)
    used = Column(BigInteger, nullable=False, default=0)

    account = relationship("Account", back_populates="usages")
