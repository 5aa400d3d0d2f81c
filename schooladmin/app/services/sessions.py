"""Session lifecycle: issue, validate with sliding renewal, and revoke.

A session row is keyed by the SHA-256 digest of the bearer token, so a copy
of the table cannot be replayed as credentials. Expired rows are removed
lazily when a token is presented; nothing sweeps them in the background.
"""

import logging
from datetime import datetime, timedelta
from typing import Callable, NamedTuple, Optional

from sqlalchemy.orm import Session

from schooladmin.app.core.security import generate_session_token, session_id_for_token
from schooladmin.app.core.time import as_utc, utc_now
from schooladmin.app.models.account import Account
from schooladmin.app.models.session import Session as SessionModel

logger = logging.getLogger(__name__)


class SessionValidation(NamedTuple):
    session: SessionModel
    account: Account


class SessionManager:
    def __init__(
        self,
        ttl: timedelta,
        renewal_window: timedelta,
        clock: Callable[[], datetime] = utc_now,
    ):
        if renewal_window > ttl:
            raise ValueError("renewal window cannot be longer than the session TTL")
        self.ttl = ttl
        self.renewal_window = renewal_window
        self.clock = clock

    @classmethod
    def from_settings(cls, settings, clock: Callable[[], datetime] = utc_now) -> "SessionManager":
        return cls(
            ttl=timedelta(days=settings.session_ttl_days),
            renewal_window=timedelta(days=settings.session_renewal_days),
            clock=clock,
        )

    def issue_token(self) -> str:
        return generate_session_token()

    def create_session(self, db: Session, token: str, account_id: int) -> SessionModel:
        now = self.clock()
        session_obj = SessionModel(
            id=session_id_for_token(token),
            account_id=account_id,
            expires_at=now + self.ttl,
            created_at=now,
        )
        db.add(session_obj)
        db.commit()
        db.refresh(session_obj)
        logger.info("Session created for account %s", account_id)
        return session_obj

    def validate(self, db: Session, token: str) -> Optional[SessionValidation]:
        if not token:
            return None
        session_id = session_id_for_token(token)
        row = (
            db.query(SessionModel, Account)
            .join(Account, SessionModel.account_id == Account.id)
            .filter(SessionModel.id == session_id)
            .first()
        )
        if row is None:
            return None

        session_obj, account = row
        now = self.clock()
        expires_at = as_utc(session_obj.expires_at)
        if now >= expires_at:
            db.delete(session_obj)
            db.commit()
            logger.info("Session for account %s expired and was removed", account.id)
            return None

        if now >= expires_at - self.renewal_window:
            session_obj.expires_at = now + self.ttl
            db.commit()
            db.refresh(session_obj)
            logger.debug("Session for account %s renewed", account.id)

        return SessionValidation(session=session_obj, account=account)

    def revoke(self, db: Session, session_id: str) -> int:
        deleted = db.query(SessionModel).filter(SessionModel.id == session_id).delete(synchronize_session=False)
        db.commit()
        return deleted

    def revoke_all(self, db: Session, account_id: int, keep_session_id: Optional[str] = None) -> int:
        query = db.query(SessionModel).filter(SessionModel.account_id == account_id)
        if keep_session_id is not None:
            query = query.filter(SessionModel.id != keep_session_id)
        deleted = query.delete(synchronize_session=False)
        db.commit()
        if deleted:
            logger.info("Revoked %s session(s) for account %s", deleted, account_id)
        return deleted
