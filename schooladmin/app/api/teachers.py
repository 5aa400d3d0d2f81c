"""Teacher directory endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from schooladmin.app.core.errors import NotFoundError
from schooladmin.app.core.permissions import Action, ensure_access
from schooladmin.app.db.session import get_db
from schooladmin.app.dependencies.auth import CurrentUser, get_current_user
from schooladmin.app.models.school_class import SchoolClass
from schooladmin.app.models.teacher import Teacher
from schooladmin.app.schemas.people import TeacherDetail, TeacherRead

router = APIRouter(prefix="/teachers", tags=["teachers"])


@router.get("", response_model=list[TeacherRead])
def list_teachers(db: Session = Depends(get_db), current_user: CurrentUser = Depends(get_current_user)):
    ensure_access(current_user.actor, Action.TEACHER_LIST)
    return db.query(Teacher).order_by(Teacher.id.asc()).all()


@router.get("/{teacher_id}", response_model=TeacherDetail)
def get_teacher(teacher_id: int, db: Session = Depends(get_db), current_user: CurrentUser = Depends(get_current_user)):
    ensure_access(current_user.actor, Action.TEACHER_READ)
    teacher = db.query(Teacher).filter(Teacher.id == teacher_id).first()
    if not teacher:
        raise NotFoundError("Teacher not found")
    classes = db.query(SchoolClass).filter(SchoolClass.teacher_id == teacher.id).order_by(SchoolClass.id.asc()).all()
    return TeacherDetail(
        id=teacher.id,
        account_id=teacher.account_id,
        name=teacher.name,
        email=teacher.email,
        hire_date=teacher.hire_date,
        classes=classes,
    )
