import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from app.db import Session, crud, get_db
from app.dependencies import require_role
from app.exceptions import NotFound
from app.models.account import AccountResponse, AccountRoleModify, Role
from app.models.token import SessionClaims
from app.utils import responses

logger = logging.getLogger("luxboard")

router = APIRouter(
    prefix="/admin",
    tags=["Admin"],
    responses={401: responses._401, 403: responses._403},
)


@router.get("/accounts", response_model=List[AccountResponse])
def get_accounts(
    offset: Optional[int] = Query(None, ge=0),
    limit: Optional[int] = Query(None, ge=1),
    admin: SessionClaims = Depends(require_role(Role.admin)),
    db: Session = Depends(get_db),
):
    """List accounts with their live usage."""
    return crud.get_accounts(db, offset=offset, limit=limit)


@router.put("/accounts/{account_id}/role", response_model=AccountResponse, responses={404: responses._404})
def modify_account_role(
    account_id: int,
    modified: AccountRoleModify,
    admin: SessionClaims = Depends(require_role(Role.admin)),
    db: Session = Depends(get_db),
):
    """Change the role of an account. Tokens minted before the change keep the old role."""
    dbaccount = crud.get_account(db, account_id)
    if not dbaccount:
        raise NotFound("Account not found")

    dbaccount = crud.update_account_role(db, dbaccount, modified.role)
    logger.info(f'Account #{account_id} role set to "{modified.role.value}" by account #{admin.account_id}')
    return dbaccount


editor_router = APIRouter(
    prefix="/editor",
    tags=["Editor"],
    responses={401: responses._401, 403: responses._403},
)


@editor_router.get("/ping")
def editor_ping(editor: SessionClaims = Depends(require_role(Role.editor))):
    """Stand-in for catalogue editing operations reserved to editors."""
    return {"detail": "pong", "account_id": editor.account_id}
