"""Enrollment endpoints."""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from schooladmin.app.core.permissions import Action, ensure_access
from schooladmin.app.db.session import get_db
from schooladmin.app.dependencies.auth import CurrentUser, get_current_user
from schooladmin.app.schemas.enrollment import (
    BulkEnrollmentCreate,
    BulkEnrollmentResponse,
    EnrollmentCreate,
    EnrollmentRead,
    EnrollmentResult,
)
from schooladmin.app.services import enrollments as enrollment_service

router = APIRouter(prefix="/enrollments", tags=["enrollments"])


@router.get("", response_model=list[EnrollmentRead])
def list_enrollments(db: Session = Depends(get_db), current_user: CurrentUser = Depends(get_current_user)):
    ensure_access(current_user.actor, Action.ENROLLMENT_LIST_ALL)
    return enrollment_service.list_enrollments(db)


@router.post("", response_model=EnrollmentResult, status_code=status.HTTP_201_CREATED)
def create_enrollment(
    enrollment_in: EnrollmentCreate,
    response: Response,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    ensure_access(current_user.actor, Action.ENROLLMENT_CREATE)
    enrollment, outcome = enrollment_service.enroll_student(db, enrollment_in.student_id, enrollment_in.class_id)
    if outcome == "reactivated":
        response.status_code = status.HTTP_200_OK
    return EnrollmentResult(
        id=enrollment.id,
        student_id=enrollment.student_id,
        class_id=enrollment.class_id,
        enrollment_date=enrollment.enrollment_date,
        is_active=enrollment.is_active,
        outcome=outcome,
    )


@router.post("/bulk", response_model=BulkEnrollmentResponse)
def bulk_enroll(
    bulk_in: BulkEnrollmentCreate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    ensure_access(current_user.actor, Action.ENROLLMENT_BULK)
    return enrollment_service.bulk_enroll(db, bulk_in.class_id, bulk_in.student_ids)


@router.get("/student/{student_id}", response_model=list[EnrollmentRead])
def list_student_enrollments(student_id: int, db: Session = Depends(get_db), current_user: CurrentUser = Depends(get_current_user)):
    return enrollment_service.list_student_enrollments(db, current_user.actor, student_id)


@router.get("/{enrollment_id}", response_model=EnrollmentRead)
def get_enrollment(enrollment_id: int, db: Session = Depends(get_db), current_user: CurrentUser = Depends(get_current_user)):
    enrollment = enrollment_service.get_enrollment(db, enrollment_id)
    ensure_access(current_user.actor, Action.ENROLLMENT_READ, enrollment_service.enrollment_resource(enrollment))
    return enrollment


@router.patch("/{enrollment_id}/deactivate", response_model=EnrollmentRead)
def deactivate_enrollment(enrollment_id: int, db: Session = Depends(get_db), current_user: CurrentUser = Depends(get_current_user)):
    ensure_access(current_user.actor, Action.ENROLLMENT_DELETE)
    return enrollment_service.deactivate_enrollment(db, enrollment_id)


@router.delete("/{enrollment_id}")
def delete_enrollment(enrollment_id: int, db: Session = Depends(get_db), current_user: CurrentUser = Depends(get_current_user)):
    ensure_access(current_user.actor, Action.ENROLLMENT_DELETE)
    enrollment_service.delete_enrollment(db, enrollment_id)
    return {"message": "Enrollment deleted successfully"}
