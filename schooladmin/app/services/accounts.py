"""Account management: registration with role profile, login checks, edits and deletion."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from schooladmin.app.core.errors import AuthenticationError, ConflictError, NotFoundError, ValidationError
from schooladmin.app.core.permissions import Actor, Role
from schooladmin.app.core.security import PasswordHasher, generate_salt
from schooladmin.app.core.time import utc_now
from schooladmin.app.models.account import Account
from schooladmin.app.models.school_class import SchoolClass
from schooladmin.app.models.student import Student
from schooladmin.app.models.teacher import Teacher
from schooladmin.app.schemas.account import AccountCreate, AccountUpdate
from schooladmin.app.services.sessions import SessionManager

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


def actor_for(account: Account) -> Actor:
    return Actor(
        account_id=account.id,
        role=Role(account.role),
        student_id=account.student_id,
        teacher_id=account.teacher_id,
    )


def get_account(db: Session, account_id: int) -> Account:
    account = db.query(Account).filter(Account.id == account_id).first()
    if not account:
        raise NotFoundError("Account not found")
    return account


def _ensure_email_free(db: Session, email: str, exclude_id: int | None = None) -> None:
    query = db.query(Account).filter(Account.email == email)
    if exclude_id is not None:
        query = query.filter(Account.id != exclude_id)
    if query.first():
        raise ConflictError("Email already registered")


def create_account(db: Session, hasher: PasswordHasher, account_in: AccountCreate) -> Account:
    """Insert the account and its role profile as one unit of work."""
    email = account_in.email.lower()
    _ensure_email_free(db, email)

    salt = generate_salt()
    account = Account(
        email=email,
        name=account_in.name,
        role=account_in.role,
        salt=salt,
        password_hash=hasher.hash(account_in.password, salt),
        is_active=True,
    )
    try:
        db.add(account)
        db.flush()
        if account_in.role == Role.STUDENT.value:
            db.add(Student(account_id=account.id))
        elif account_in.role == Role.TEACHER.value:
            db.add(Teacher(account_id=account.id))
        db.commit()
    except IntegrityError:
        db.rollback()
        # Lost a race with a concurrent registration for the same email.
        raise ConflictError("Email already registered")
    except Exception:
        db.rollback()
        raise

    db.refresh(account)
    logger.info("Created %s account %s", account.role, account.id)
    return account


def authenticate(db: Session, hasher: PasswordHasher, email: str, password: str) -> Account:
    account = db.query(Account).filter(Account.email == email.lower()).first()
    if account is None:
        # Unknown emails cost the same hashing work as a wrong password.
        hasher.dummy_verify(password)
        logger.info("Failed login attempt")
        raise AuthenticationError(INVALID_CREDENTIALS)
    if not hasher.verify(password, account.salt, account.password_hash):
        logger.info("Failed login attempt")
        raise AuthenticationError(INVALID_CREDENTIALS)
    if not account.is_active:
        raise AuthenticationError("Account is inactive")
    account.last_login = utc_now()
    db.commit()
    db.refresh(account)
    return account


def update_account(db: Session, account: Account, update: AccountUpdate) -> Account:
    update_data = update.model_dump(exclude_unset=True, exclude_none=True)
    if "email" in update_data:
        update_data["email"] = update_data["email"].lower()
        _ensure_email_free(db, update_data["email"], exclude_id=account.id)
    for field, value in update_data.items():
        setattr(account, field, value)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("Email already registered")
    db.refresh(account)
    return account


def set_account_status(db: Session, manager: SessionManager, account: Account, is_active: bool, acting: Account) -> Account:
    if account.id == acting.id and not is_active:
        raise ValidationError("Cannot deactivate your own account")
    account.is_active = is_active
    db.commit()
    if not is_active:
        manager.revoke_all(db, account.id)
    db.refresh(account)
    return account


def change_password(
    db: Session,
    hasher: PasswordHasher,
    manager: SessionManager,
    account: Account,
    current_password: str,
    new_password: str,
    keep_session_id: str | None = None,
) -> Account:
    if not hasher.verify(current_password, account.salt, account.password_hash):
        raise ValidationError("Current password is incorrect")
    salt = generate_salt()
    account.salt = salt
    account.password_hash = hasher.hash(new_password, salt)
    db.commit()
    manager.revoke_all(db, account.id, keep_session_id=keep_session_id)
    db.refresh(account)
    logger.info("Password changed for account %s", account.id)
    return account


def delete_account(db: Session, account: Account, acting: Account) -> None:
    """Delete an account; sessions and the role profile go with it.

    Teachers who still own classes are refused: classes are never orphaned or
    silently reassigned.
    """
    if account.id == acting.id:
        raise ValidationError("Cannot delete your own account")
    teacher = account.teacher_profile
    if teacher is not None:
        owned = db.query(SchoolClass).filter(SchoolClass.teacher_id == teacher.id).count()
        if owned:
            raise ConflictError("Teacher still owns classes; delete them first")
    account_id = account.id
    db.delete(account)
    db.commit()
    logger.info("Deleted account %s", account_id)
