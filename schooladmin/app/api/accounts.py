"""Account administration endpoints."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from schooladmin.app.core.permissions import Action, Resource, ensure_access
from schooladmin.app.core.security import PasswordHasher
from schooladmin.app.db.session import get_db
from schooladmin.app.dependencies.auth import CurrentUser, get_current_user, get_password_hasher, get_session_manager
from schooladmin.app.models.account import Account
from schooladmin.app.schemas.account import AccountCreate, AccountRead, AccountStatusUpdate, AccountUpdate
from schooladmin.app.services import accounts as account_service
from schooladmin.app.services.sessions import SessionManager

router = APIRouter(prefix="/accounts", tags=["accounts"])


@router.post("", response_model=AccountRead, status_code=status.HTTP_201_CREATED)
def create_account(
    account_in: AccountCreate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
    hasher: PasswordHasher = Depends(get_password_hasher),
):
    ensure_access(current_user.actor, Action.ACCOUNT_CREATE)
    return account_service.create_account(db, hasher, account_in)


@router.get("", response_model=list[AccountRead])
def list_accounts(db: Session = Depends(get_db), current_user: CurrentUser = Depends(get_current_user)):
    ensure_access(current_user.actor, Action.ACCOUNT_LIST)
    return db.query(Account).order_by(Account.id.asc()).all()


@router.get("/{account_id}", response_model=AccountRead)
def get_account(account_id: int, db: Session = Depends(get_db), current_user: CurrentUser = Depends(get_current_user)):
    ensure_access(current_user.actor, Action.PROFILE_READ, Resource(account_id=account_id))
    return account_service.get_account(db, account_id)


@router.patch("/{account_id}", response_model=AccountRead)
def update_account(
    account_id: int,
    update: AccountUpdate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    ensure_access(current_user.actor, Action.PROFILE_UPDATE, Resource(account_id=account_id))
    account = account_service.get_account(db, account_id)
    return account_service.update_account(db, account, update)


@router.patch("/{account_id}/status", response_model=AccountRead)
def update_account_status(
    account_id: int,
    update: AccountStatusUpdate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
    manager: SessionManager = Depends(get_session_manager),
):
    ensure_access(current_user.actor, Action.ACCOUNT_STATUS)
    account = account_service.get_account(db, account_id)
    return account_service.set_account_status(db, manager, account, update.is_active, acting=current_user.account)


@router.delete("/{account_id}")
def delete_account(account_id: int, db: Session = Depends(get_db), current_user: CurrentUser = Depends(get_current_user)):
    ensure_access(current_user.actor, Action.ACCOUNT_DELETE)
    account = account_service.get_account(db, account_id)
    account_service.delete_account(db, account, acting=current_user.account)
    return {"message": "Account deleted successfully"}
