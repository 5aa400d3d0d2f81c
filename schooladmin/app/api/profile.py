"""Own profile endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from schooladmin.app.core.security import PasswordHasher
from schooladmin.app.db.session import get_db
from schooladmin.app.dependencies.auth import CurrentUser, get_current_user, get_password_hasher, get_session_manager
from schooladmin.app.schemas.account import AccountRead, AccountUpdate, PasswordChange
from schooladmin.app.services import accounts as account_service
from schooladmin.app.services.sessions import SessionManager

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("/me", response_model=AccountRead)
def get_my_profile(current_user: CurrentUser = Depends(get_current_user)):
    return current_user.account


@router.put("/me", response_model=AccountRead)
def update_my_profile(
    profile: AccountUpdate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    return account_service.update_account(db, current_user.account, profile)


@router.post("/me/password")
def change_my_password(
    change: PasswordChange,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
    hasher: PasswordHasher = Depends(get_password_hasher),
    manager: SessionManager = Depends(get_session_manager),
):
    # Other devices are signed out; the session making the change stays valid.
    account_service.change_password(
        db,
        hasher,
        manager,
        current_user.account,
        change.current_password,
        change.new_password,
        keep_session_id=current_user.session.id,
    )
    return {"message": "Password updated"}
