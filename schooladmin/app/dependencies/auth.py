"""Authentication dependencies for resolving the caller from a bearer token."""

from dataclasses import dataclass

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from schooladmin.app.core.errors import AuthenticationError
from schooladmin.app.core.permissions import Actor
from schooladmin.app.core.security import PasswordHasher
from schooladmin.app.core.settings import get_settings
from schooladmin.app.db.session import get_db
from schooladmin.app.models.account import Account
from schooladmin.app.models.session import Session as SessionModel
from schooladmin.app.services.accounts import actor_for
from schooladmin.app.services.grades import GradeRules
from schooladmin.app.services.sessions import SessionManager

security_scheme = HTTPBearer(auto_error=False)

_session_manager = None
_password_hasher = None


def get_session_manager() -> SessionManager:
    global _session_manager
    if _session_manager is None:
        _session_manager = SessionManager.from_settings(get_settings())
    return _session_manager


def get_password_hasher() -> PasswordHasher:
    global _password_hasher
    if _password_hasher is None:
        _password_hasher = PasswordHasher(rounds=get_settings().password_hash_rounds)
    return _password_hasher


def get_grade_rules() -> GradeRules:
    return GradeRules.from_settings(get_settings())


@dataclass
class CurrentUser:
    account: Account
    session: SessionModel
    actor: Actor


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security_scheme),
    db: Session = Depends(get_db),
    manager: SessionManager = Depends(get_session_manager),
) -> CurrentUser:
    # Expect Authorization: Bearer <token>
    if credentials is None or credentials.scheme.lower() != "bearer" or not credentials.credentials:
        raise AuthenticationError("Not authenticated")
    validation = manager.validate(db, credentials.credentials)
    if validation is None:
        raise AuthenticationError("Invalid or expired session")
    account = validation.account
    if not account.is_active:
        raise AuthenticationError("Account is inactive")
    return CurrentUser(account=account, session=validation.session, actor=actor_for(account))


def get_current_actor(current_user: CurrentUser = Depends(get_current_user)) -> Actor:
    return current_user.actor
