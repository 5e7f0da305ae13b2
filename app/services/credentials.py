"""Registration, login and account lookup for session tokens."""

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.db import crud
from app.db.models import Account
from app.exceptions import Conflict, Unauthenticated
from app.models.account import (
    DEFAULT_ROLE,
    AccountCreate,
    AccountInDB,
    AccountLogin,
    AccountResponse,
    AuthResponse,
    pwd_context,
)
from app.models.plan import PlanKey, PlanResponse
from app.models.token import SessionClaims
from app.services import plan_catalog
from app.utils.jwt import create_session_token
from config import DEFAULT_PLAN

logger = logging.getLogger("luxboard.auth")


def issue_token(dbaccount: Account) -> str:
    plan = PlanResponse.model_validate(dbaccount.plan)
    return create_session_token(
        account_id=dbaccount.id,
        role=dbaccount.role,
        plan=plan.snapshot(),
        usage=dbaccount.usage,
    )


def _auth_response(dbaccount: Account) -> AuthResponse:
    return AuthResponse(
        token=issue_token(dbaccount),
        user=AccountResponse.model_validate(dbaccount),
    )


def register(db: Session, new_account: AccountCreate) -> AuthResponse:
    if crud.get_account_by_email(db, new_account.email):
        raise Conflict()

    plan = plan_catalog.get_or_create(db, new_account.plan or PlanKey(DEFAULT_PLAN))
    try:
        dbaccount = crud.create_account(db, new_account, plan, role=DEFAULT_ROLE)
    except IntegrityError:
        db.rollback()
        raise Conflict()

    logger.info(f'Account #{dbaccount.id} registered on plan "{plan.key}"')
    return _auth_response(dbaccount)


def login(db: Session, credentials: AccountLogin) -> AuthResponse:
    dbaccount = crud.get_account_by_email(db, credentials.email)
    if not dbaccount:
        # keep the timing of unknown emails close to that of wrong passwords
        pwd_context.dummy_verify()
        logger.info("Login failed")
        raise Unauthenticated()

    if not AccountInDB.model_validate(dbaccount).verify_password(credentials.password):
        logger.info(f"Login failed for account #{dbaccount.id}")
        raise Unauthenticated()

    logger.info(f"Account #{dbaccount.id} logged in")
    return _auth_response(dbaccount)


def get_live_account(db: Session, claims: SessionClaims) -> Account:
    """Re-read the account behind a token. A vanished account is reported as unauthenticated."""
    dbaccount: Optional[Account] = crud.get_account(db, claims.account_id)
    if not dbaccount:
        logger.warning(f"Token refers to missing account #{claims.account_id}")
        raise Unauthenticated()
    return dbaccount


def who_am_i(db: Session, claims: SessionClaims) -> AccountResponse:
    return AccountResponse.model_validate(get_live_account(db, claims))
