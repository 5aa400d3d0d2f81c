"""Login, logout and session status endpoints."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from schooladmin.app.core.security import PasswordHasher
from schooladmin.app.core.time import as_utc
from schooladmin.app.db.session import get_db
from schooladmin.app.dependencies.auth import CurrentUser, get_current_user, get_password_hasher, get_session_manager
from schooladmin.app.schemas.account import AccountRead
from schooladmin.app.schemas.auth import LoginRequest, LoginResponse, LoginUser, LogoutResponse
from schooladmin.app.services.accounts import authenticate
from schooladmin.app.services.sessions import SessionManager

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=LoginResponse)
def login(
    credentials: LoginRequest,
    db: Session = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
    manager: SessionManager = Depends(get_session_manager),
):
    account = authenticate(db, hasher, credentials.email, credentials.password)
    token = manager.issue_token()
    session_obj = manager.create_session(db, token, account.id)
    logger.info("Account %s logged in", account.id)
    return LoginResponse(
        access_token=token,
        expires_at=as_utc(session_obj.expires_at),
        user=LoginUser(id=account.id, name=account.name, role=account.role),
    )


@router.post("/logout", response_model=LogoutResponse)
def logout(
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
    manager: SessionManager = Depends(get_session_manager),
):
    return LogoutResponse(revoked=manager.revoke(db, current_user.session.id))


@router.post("/logout-all", response_model=LogoutResponse)
def logout_all(
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
    manager: SessionManager = Depends(get_session_manager),
):
    return LogoutResponse(revoked=manager.revoke_all(db, current_user.account.id))


@router.get("/me", response_model=AccountRead)
def read_me(current_user: CurrentUser = Depends(get_current_user)):
    return current_user.account
