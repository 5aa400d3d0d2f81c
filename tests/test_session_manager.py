from datetime import UTC, datetime, timedelta

import pytest

from schooladmin.app.core.security import PasswordHasher, session_id_for_token
from schooladmin.app.core.time import as_utc
from schooladmin.app.db.base import Base
from schooladmin.app.db.session import SessionLocal, engine
from schooladmin.app.models.session import Session as SessionModel
from schooladmin.app.schemas.account import AccountCreate
from schooladmin.app.services.accounts import create_account, delete_account
from schooladmin.app.services.sessions import SessionManager

TTL = timedelta(days=30)
WINDOW = timedelta(days=15)


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now = self.now + delta


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def clock():
    return FakeClock(datetime(2026, 1, 1, 12, 0, tzinfo=UTC))


@pytest.fixture
def manager(clock):
    return SessionManager(ttl=TTL, renewal_window=WINDOW, clock=clock)


def make_account(db, email="student@example.com", role="student"):
    return create_account(
        db,
        PasswordHasher(rounds=1000),
        AccountCreate(email=email, name="Sam", role=role, password="password123"),
    )


def test_validate_returns_account_that_created_session(db, manager):
    account = make_account(db)
    token = manager.issue_token()
    manager.create_session(db, token, account.id)

    result = manager.validate(db, token)
    assert result is not None
    assert result.account.id == account.id
    assert result.session.account_id == account.id


def test_token_is_never_stored(db, manager):
    account = make_account(db)
    token = manager.issue_token()
    session_obj = manager.create_session(db, token, account.id)

    assert session_obj.id == session_id_for_token(token)
    assert session_obj.id != token
    assert db.query(SessionModel).filter(SessionModel.id == token).first() is None


def test_create_session_sets_expiry_to_ttl(db, manager, clock):
    account = make_account(db)
    session_obj = manager.create_session(db, manager.issue_token(), account.id)
    assert as_utc(session_obj.expires_at) == clock.now + TTL


def test_unknown_token_is_invalid(db, manager):
    make_account(db)
    assert manager.validate(db, "not-a-real-token") is None
    assert manager.validate(db, "") is None


def test_expired_session_is_invalid_and_removed(db, manager, clock):
    account = make_account(db)
    token = manager.issue_token()
    manager.create_session(db, token, account.id)

    clock.advance(TTL)
    assert manager.validate(db, token) is None
    assert db.query(SessionModel).count() == 0

    # No resurrection once removed.
    clock.now = clock.now - timedelta(days=29)
    assert manager.validate(db, token) is None


def test_validation_inside_renewal_window_extends_expiry(db, manager, clock):
    account = make_account(db)
    token = manager.issue_token()
    session_obj = manager.create_session(db, token, account.id)
    before = as_utc(session_obj.expires_at)

    clock.advance(timedelta(days=16))
    result = manager.validate(db, token)
    assert result is not None
    after = as_utc(result.session.expires_at)
    assert after > before
    assert after == clock.now + TTL

    db.expire_all()
    stored = db.query(SessionModel).filter(SessionModel.id == session_id_for_token(token)).first()
    assert as_utc(stored.expires_at) == after


def test_validation_outside_renewal_window_keeps_expiry(db, manager, clock):
    account = make_account(db)
    token = manager.issue_token()
    session_obj = manager.create_session(db, token, account.id)
    before = as_utc(session_obj.expires_at)

    clock.advance(timedelta(days=1))
    result = manager.validate(db, token)
    assert result is not None
    assert as_utc(result.session.expires_at) == before


def test_revoke_is_idempotent(db, manager):
    account = make_account(db)
    token = manager.issue_token()
    session_obj = manager.create_session(db, token, account.id)
    session_id = session_obj.id

    assert manager.revoke(db, session_id) == 1
    assert manager.revoke(db, session_id) == 0
    assert manager.validate(db, token) is None


def test_revoke_all_removes_every_session_of_account(db, manager):
    account = make_account(db)
    other = make_account(db, email="other@example.com")
    tokens = [manager.issue_token() for _ in range(3)]
    for token in tokens:
        manager.create_session(db, token, account.id)
    other_token = manager.issue_token()
    manager.create_session(db, other_token, other.id)

    assert manager.revoke_all(db, account.id) == 3
    assert manager.revoke_all(db, account.id) == 0
    assert all(manager.validate(db, token) is None for token in tokens)
    assert manager.validate(db, other_token) is not None


def test_revoke_all_can_keep_current_session(db, manager):
    account = make_account(db)
    keep = manager.issue_token()
    drop = manager.issue_token()
    kept_session = manager.create_session(db, keep, account.id)
    manager.create_session(db, drop, account.id)

    assert manager.revoke_all(db, account.id, keep_session_id=kept_session.id) == 1
    assert manager.validate(db, keep) is not None
    assert manager.validate(db, drop) is None


def test_deleting_account_removes_its_sessions(db, manager):
    admin = make_account(db, email="admin@example.com", role="admin")
    account = make_account(db)
    token = manager.issue_token()
    manager.create_session(db, token, account.id)

    delete_account(db, account, acting=admin)
    assert db.query(SessionModel).count() == 0
    assert manager.validate(db, token) is None


def test_renewal_window_cannot_exceed_ttl():
    with pytest.raises(ValueError):
        SessionManager(ttl=timedelta(days=1), renewal_window=timedelta(days=2))
