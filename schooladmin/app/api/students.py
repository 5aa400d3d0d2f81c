"""Student directory endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from schooladmin.app.core.permissions import Action, Resource, ensure_access
from schooladmin.app.db.session import get_db
from schooladmin.app.dependencies.auth import CurrentUser, get_current_user
from schooladmin.app.models.student import Student
from schooladmin.app.schemas.people import StudentDetail, StudentRead
from schooladmin.app.services.enrollments import get_student, list_student_enrollments

router = APIRouter(prefix="/students", tags=["students"])


@router.get("", response_model=list[StudentRead])
def list_students(db: Session = Depends(get_db), current_user: CurrentUser = Depends(get_current_user)):
    ensure_access(current_user.actor, Action.STUDENT_LIST)
    return db.query(Student).order_by(Student.id.asc()).all()


@router.get("/{student_id}", response_model=StudentDetail)
def get_student_detail(student_id: int, db: Session = Depends(get_db), current_user: CurrentUser = Depends(get_current_user)):
    ensure_access(current_user.actor, Action.STUDENT_READ, Resource(student_id=student_id))
    student = get_student(db, student_id)
    enrollments = list_student_enrollments(db, current_user.actor, student_id)
    return StudentDetail(
        id=student.id,
        account_id=student.account_id,
        name=student.name,
        email=student.email,
        enrollment_date=student.enrollment_date,
        enrollments=enrollments,
    )
