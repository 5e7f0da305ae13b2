"""
Functions for managing plans, accounts and per-feature usage counters.
"""

import logging
from typing import Dict, List, Optional

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Query, Session, joinedload

from app.db.models import Account, AccountUsage, Plan
from app.models.account import AccountCreate, Role
from app.models.plan import MeteredFeature

logger = logging.getLogger("luxboard.db")


def get_plan_by_key(db: Session, key: str) -> Optional[Plan]:
    return db.query(Plan).filter(Plan.key == key).first()


def get_plans(db: Session) -> List[Plan]:
    return db.query(Plan).order_by(Plan.id).all()


def create_plan(db: Session, key: str, name: str, ia_search_quota: int, suggestion_quota: int, users: int) -> Plan:
    """Insert a plan. Raises IntegrityError when the key or name is already taken."""
    dbplan = Plan(
        key=key,
        name=name,
        ia_search_quota=ia_search_quota,
        suggestion_quota=suggestion_quota,
        users=users,
    )
    db.add(dbplan)
    db.commit()
    db.refresh(dbplan)
    return dbplan


def get_account_queryset(db: Session) -> Query:
    return db.query(Account).options(
        joinedload(Account.plan),
        joinedload(Account.usages),
    )


def get_account(db: Session, account_id: int) -> Optional[Account]:
    return get_account_queryset(db).filter(Account.id == account_id).first()


def get_account_by_email(db: Session, email: str) -> Optional[Account]:
    return get_account_queryset(db).filter(Account.email == email.lower()).first()


def get_accounts(db: Session, offset: Optional[int] = None, limit: Optional[int] = None) -> List[Account]:
    query = get_account_queryset(db).order_by(Account.id)
    if offset:
        query = query.offset(offset)
    if limit:
        query = query.limit(limit)
    return query.all()


def create_account(db: Session, account: AccountCreate, plan: Plan, role: Role = Role.concierge) -> Account:
    """Insert an account with zeroed counters for every metered feature.

    Raises IntegrityError when the email is already registered.
    """
    dbaccount = Account(
        email=account.email,
        hashed_password=account.hashed_password,
        first_name=account.first_name,
        last_name=account.last_name,
        role=role,
        plan_id=plan.id,
        usages=[AccountUsage(feature=feature.value, used=0) for feature in MeteredFeature],
    )
    db.add(dbaccount)
    db.commit()
    db.refresh(dbaccount)
    return dbaccount


def update_account_role(db: Session, dbaccount: Account, role: Role) -> Account:
    dbaccount.role = role
    db.commit()
    db.refresh(dbaccount)
    return dbaccount


def ensure_usage(db: Session, account_id: int, feature: MeteredFeature) -> None:
    """Create a zeroed counter for ``feature`` when the account has none yet."""
    feature = MeteredFeature(feature)
    exists = db.query(AccountUsage.id).filter(
        AccountUsage.account_id == account_id,
        AccountUsage.feature == feature.value,
    ).first()
    if exists:
        return

    db.add(AccountUsage(account_id=account_id, feature=feature.value, used=0))
    try:
        db.commit()
    except IntegrityError:
        # another request created it first
        db.rollback()
    else:
        logger.info(f"Created {feature.value} counter for account #{account_id}")


def increment_usage(db: Session, account_id: int, feature: MeteredFeature, quota: Optional[int] = None) -> Optional[int]:
    """Add one to the usage counter in a single conditional UPDATE.

    When ``quota`` is given the row only matches while ``used < quota``, so
    concurrent callers can never push the counter past it. Returns the
    counter value written by this call, or None when no row was updated.
    """
    stmt = update(AccountUsage).where(
        AccountUsage.account_id == account_id,
        AccountUsage.feature == MeteredFeature(feature).value,
    )
    if quota is not None:
        stmt = stmt.where(AccountUsage.used < quota)

    stmt = stmt.values(used=AccountUsage.used + 1).returning(AccountUsage.used)
    used = db.execute(stmt, execution_options={"synchronize_session": False}).scalar_one_or_none()
    db.commit()
    return used


def get_usage(db: Session, account_id: int, feature: MeteredFeature) -> int:
    used = db.query(AccountUsage.used).filter(
        AccountUsage.account_id == account_id,
        AccountUsage.feature == MeteredFeature(feature).value,
    ).scalar()
    return int(used or 0)


def get_usages(db: Session, account_id: int) -> Dict[str, int]:
    rows = db.query(AccountUsage.feature, AccountUsage.used).filter(
        AccountUsage.account_id == account_id
    ).all()
    usages = {feature.value: 0 for feature in MeteredFeature}
    usages.update({feature: int(used) for feature, used in rows})
    return usages
