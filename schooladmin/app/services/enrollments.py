"""Enrollment rules.

A (student, class) pair owns at most one enrollment row. Enrolling again
after a deactivation reactivates that row. The unique constraint on the
table is the final word when two requests race: losing the race reads as
"already enrolled".
"""

import logging
from typing import Iterable, List, Literal, Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from schooladmin.app.core.errors import ConflictError, NotFoundError, ValidationError
from schooladmin.app.core.permissions import Action, Actor, Decision, Resource, Role, can_access, ensure_access
from schooladmin.app.core.time import utc_now
from schooladmin.app.models.enrollment import Enrollment
from schooladmin.app.models.grade import Grade
from schooladmin.app.models.school_class import SchoolClass
from schooladmin.app.models.student import Student
from schooladmin.app.schemas.enrollment import BulkEnrollmentFailure, BulkEnrollmentResponse

logger = logging.getLogger(__name__)

ALREADY_ENROLLED = "Student is already enrolled in this class"
CLASS_INACTIVE = "Class is not active"

EnrollmentOutcome = Literal["created", "reactivated"]


def get_class(db: Session, class_id: int) -> SchoolClass:
    school_class = db.query(SchoolClass).filter(SchoolClass.id == class_id).first()
    if not school_class:
        raise NotFoundError("Class not found")
    return school_class


def get_student(db: Session, student_id: int) -> Student:
    student = db.query(Student).filter(Student.id == student_id).first()
    if not student:
        raise NotFoundError("Student not found")
    return student


def get_enrollment(db: Session, enrollment_id: int) -> Enrollment:
    enrollment = db.query(Enrollment).filter(Enrollment.id == enrollment_id).first()
    if not enrollment:
        raise NotFoundError("Enrollment not found")
    return enrollment


def enrollment_resource(enrollment: Enrollment) -> Resource:
    return Resource(student_id=enrollment.student_id, teacher_id=enrollment.school_class.teacher_id)


def find_enrollment(db: Session, student_id: int, class_id: int) -> Optional[Enrollment]:
    return (
        db.query(Enrollment)
        .filter(Enrollment.student_id == student_id, Enrollment.class_id == class_id)
        .first()
    )


def _enroll(db: Session, student_id: int, school_class: SchoolClass) -> Tuple[Enrollment, EnrollmentOutcome]:
    """Create or reactivate without committing. Must run in its own transaction."""
    if not school_class.is_active:
        raise ValidationError(CLASS_INACTIVE)

    existing = find_enrollment(db, student_id, school_class.id)
    if existing is not None:
        if existing.is_active:
            raise ConflictError(ALREADY_ENROLLED)
        existing.is_active = True
        existing.enrollment_date = utc_now()
        db.flush()
        return existing, "reactivated"

    enrollment = Enrollment(student_id=student_id, class_id=school_class.id, is_active=True)
    try:
        db.add(enrollment)
        db.flush()
    except IntegrityError:
        db.rollback()
        raise ConflictError(ALREADY_ENROLLED)
    return enrollment, "created"


def enroll_student(db: Session, student_id: int, class_id: int) -> Tuple[Enrollment, EnrollmentOutcome]:
    school_class = get_class(db, class_id)
    get_student(db, student_id)
    try:
        enrollment, outcome = _enroll(db, student_id, school_class)
        db.commit()
    except ConflictError:
        db.rollback()
        logger.info("Student %s already enrolled in class %s", student_id, class_id)
        raise
    except Exception:
        db.rollback()
        raise
    db.refresh(enrollment)
    return enrollment, outcome


def bulk_enroll(db: Session, class_id: int, student_ids: Iterable[int]) -> BulkEnrollmentResponse:
    """Enroll many students into one class, classifying each id on its own.

    Repeats of an id already handled in this request are skipped, so each id
    appears in the report once.
    """
    school_class = get_class(db, class_id)
    if not school_class.is_active:
        raise ValidationError(CLASS_INACTIVE)

    result = BulkEnrollmentResponse(class_id=class_id)
    seen: set[int] = set()
    for student_id in student_ids:
        if student_id in seen:
            continue
        seen.add(student_id)

        if db.query(Student.id).filter(Student.id == student_id).first() is None:
            result.failed.append(BulkEnrollmentFailure(student_id=student_id, reason="Student not found"))
            continue
        try:
            _enroll(db, student_id, school_class)
            db.commit()
        except ConflictError:
            db.rollback()
            result.already_enrolled.append(student_id)
        except (ValidationError, IntegrityError) as exc:
            db.rollback()
            result.failed.append(BulkEnrollmentFailure(student_id=student_id, reason=str(exc)))
        else:
            result.successful.append(student_id)

    logger.info(
        "Bulk enrollment into class %s: %s enrolled, %s already enrolled, %s failed",
        class_id,
        len(result.successful),
        len(result.already_enrolled),
        len(result.failed),
    )
    return result


def deactivate_enrollment(db: Session, enrollment_id: int) -> Enrollment:
    enrollment = get_enrollment(db, enrollment_id)
    enrollment.is_active = False
    db.commit()
    db.refresh(enrollment)
    return enrollment


def delete_enrollment(db: Session, enrollment_id: int) -> None:
    """Hard delete, refused while grades still point at the enrollment."""
    enrollment = get_enrollment(db, enrollment_id)
    grade_count = db.query(Grade).filter(Grade.enrollment_id == enrollment.id).count()
    if grade_count:
        raise ConflictError("Enrollment has grades; deactivate it instead")
    db.delete(enrollment)
    db.commit()


def list_enrollments(db: Session) -> List[Enrollment]:
    return db.query(Enrollment).order_by(Enrollment.id.asc()).all()


def list_student_enrollments(db: Session, actor: Actor, student_id: int) -> List[Enrollment]:
    """Admins see everything, teachers the rows in their own classes, students only their own list."""
    if actor.role == Role.STUDENT:
        ensure_access(actor, Action.ENROLLMENT_READ, Resource(student_id=student_id))
    get_student(db, student_id)
    enrollments = (
        db.query(Enrollment)
        .filter(Enrollment.student_id == student_id)
        .order_by(Enrollment.id.asc())
        .all()
    )
    return [
        enrollment
        for enrollment in enrollments
        if can_access(actor, Action.ENROLLMENT_READ, enrollment_resource(enrollment)) is Decision.ALLOW
    ]


def list_class_enrollments(db: Session, actor: Actor, class_id: int) -> List[Enrollment]:
    school_class = get_class(db, class_id)
    ensure_access(actor, Action.ENROLLMENT_READ, Resource(teacher_id=school_class.teacher_id))
    return (
        db.query(Enrollment)
        .filter(Enrollment.class_id == class_id)
        .order_by(Enrollment.id.asc())
        .all()
    )
