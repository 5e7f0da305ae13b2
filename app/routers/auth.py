from fastapi import APIRouter, Depends

from app.db import Session, get_db
from app.dependencies import get_current_claims
from app.models.account import AccountCreate, AccountLogin, AccountResponse, AuthResponse
from app.models.token import SessionClaims
from app.services import credentials
from app.utils import responses

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/register", response_model=AuthResponse, responses={409: responses._409})
def register(new_account: AccountCreate, db: Session = Depends(get_db)):
    """Create an account on the requested plan and return a session token."""
    return credentials.register(db, new_account)


@router.post("/login", response_model=AuthResponse, responses={401: responses._401})
def login(login_data: AccountLogin, db: Session = Depends(get_db)):
    """Exchange email and password for a session token."""
    return credentials.login(db, login_data)


@router.get("/me", response_model=AccountResponse, responses={401: responses._401})
def get_current_account(
    claims: SessionClaims = Depends(get_current_claims),
    db: Session = Depends(get_db),
):
    """Current account with live usage counters."""
    return credentials.who_am_i(db, claims)
