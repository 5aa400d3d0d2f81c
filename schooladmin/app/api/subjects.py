"""Subject catalogue endpoints."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from schooladmin.app.core.errors import ConflictError, NotFoundError
from schooladmin.app.core.permissions import Action, ensure_access
from schooladmin.app.db.session import get_db
from schooladmin.app.dependencies.auth import CurrentUser, get_current_user
from schooladmin.app.models.subject import Subject
from schooladmin.app.schemas.subject import SubjectCreate, SubjectRead, SubjectUpdate

router = APIRouter(prefix="/subjects", tags=["subjects"])


def _get_subject(db: Session, subject_id: int) -> Subject:
    subject = db.query(Subject).filter(Subject.id == subject_id).first()
    if not subject:
        raise NotFoundError("Subject not found")
    return subject


def _commit_unique(db: Session) -> None:
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("A subject with this name already exists")


@router.get("", response_model=list[SubjectRead])
def list_subjects(db: Session = Depends(get_db), current_user: CurrentUser = Depends(get_current_user)):
    ensure_access(current_user.actor, Action.SUBJECT_READ)
    return db.query(Subject).order_by(Subject.name.asc()).all()


@router.get("/{subject_id}", response_model=SubjectRead)
def get_subject(subject_id: int, db: Session = Depends(get_db), current_user: CurrentUser = Depends(get_current_user)):
    ensure_access(current_user.actor, Action.SUBJECT_READ)
    return _get_subject(db, subject_id)


@router.post("", response_model=SubjectRead, status_code=status.HTTP_201_CREATED)
def create_subject(subject_in: SubjectCreate, db: Session = Depends(get_db), current_user: CurrentUser = Depends(get_current_user)):
    ensure_access(current_user.actor, Action.SUBJECT_WRITE)
    subject = Subject(name=subject_in.name)
    db.add(subject)
    _commit_unique(db)
    db.refresh(subject)
    return subject


@router.put("/{subject_id}", response_model=SubjectRead)
def update_subject(
    subject_id: int,
    subject_in: SubjectUpdate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    ensure_access(current_user.actor, Action.SUBJECT_WRITE)
    subject = _get_subject(db, subject_id)
    subject.name = subject_in.name
    _commit_unique(db)
    db.refresh(subject)
    return subject


@router.delete("/{subject_id}")
def delete_subject(subject_id: int, db: Session = Depends(get_db), current_user: CurrentUser = Depends(get_current_user)):
    ensure_access(current_user.actor, Action.SUBJECT_WRITE)
    subject = _get_subject(db, subject_id)
    db.delete(subject)
    db.commit()
    return {"message": "Subject deleted successfully"}
