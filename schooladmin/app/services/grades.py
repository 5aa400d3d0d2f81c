"""Grade rules: value bounds, class ownership and authorship."""

import logging
from typing import List

from sqlalchemy.orm import Session

from schooladmin.app.core.errors import NotFoundError, ValidationError
from schooladmin.app.core.permissions import Action, Actor, Decision, Resource, Role, can_access, ensure_access
from schooladmin.app.models.enrollment import Enrollment
from schooladmin.app.models.grade import Grade
from schooladmin.app.models.school_class import SchoolClass
from schooladmin.app.schemas.grade import GradeCreate, GradeUpdate, GradeWithClass
from schooladmin.app.services.enrollments import get_class, get_enrollment, get_student

logger = logging.getLogger(__name__)


class GradeRules:
    """Inclusive bounds for grade values."""

    def __init__(self, minimum: int, maximum: int):
        if minimum > maximum:
            raise ValueError("minimum grade cannot exceed maximum grade")
        self.minimum = minimum
        self.maximum = maximum

    @classmethod
    def from_settings(cls, settings) -> "GradeRules":
        return cls(settings.grade_min, settings.grade_max)

    def check(self, value: int) -> int:
        if value < self.minimum or value > self.maximum:
            raise ValidationError(f"Grade value must be between {self.minimum} and {self.maximum}")
        return value


def get_grade(db: Session, grade_id: int) -> Grade:
    grade = db.query(Grade).filter(Grade.id == grade_id).first()
    if not grade:
        raise NotFoundError("Grade not found")
    return grade


def _class_teacher_id(enrollment: Enrollment) -> int:
    return enrollment.school_class.teacher_id


def create_grade(db: Session, rules: GradeRules, actor: Actor, grade_in: GradeCreate) -> Grade:
    rules.check(grade_in.grade_value)
    enrollment = get_enrollment(db, grade_in.enrollment_id)
    teacher_id = _class_teacher_id(enrollment)
    ensure_access(
        actor,
        Action.GRADE_CREATE,
        Resource(student_id=enrollment.student_id, teacher_id=teacher_id),
        detail="You can only grade students in your classes",
    )
    # Admin-entered grades are attributed to the teacher who owns the class.
    graded_by = actor.teacher_id if actor.role == Role.TEACHER else teacher_id
    grade = Grade(
        enrollment_id=enrollment.id,
        assignment_name=grade_in.assignment_name,
        grade_value=grade_in.grade_value,
        weight=grade_in.weight,
        comments=grade_in.comments,
        graded_by=graded_by,
    )
    db.add(grade)
    db.commit()
    db.refresh(grade)
    logger.info("Grade %s recorded for enrollment %s", grade.id, enrollment.id)
    return grade


def update_grade(db: Session, rules: GradeRules, actor: Actor, grade_id: int, update: GradeUpdate) -> Grade:
    grade = get_grade(db, grade_id)
    ensure_access(
        actor,
        Action.GRADE_UPDATE,
        Resource(student_id=grade.enrollment.student_id, teacher_id=_class_teacher_id(grade.enrollment)),
        detail="You can only update grades in your classes",
    )
    update_data = update.model_dump(exclude_unset=True)
    if update_data.get("grade_value") is not None:
        rules.check(update_data["grade_value"])
    for field in ("assignment_name", "grade_value"):
        if field in update_data and update_data[field] is None:
            del update_data[field]
    for field, value in update_data.items():
        setattr(grade, field, value)
    db.commit()
    db.refresh(grade)
    return grade


def delete_grade(db: Session, actor: Actor, grade_id: int) -> None:
    grade = get_grade(db, grade_id)
    ensure_access(
        actor,
        Action.GRADE_DELETE,
        Resource(student_id=grade.enrollment.student_id, teacher_id=_class_teacher_id(grade.enrollment)),
        detail="You can only delete grades in your classes",
    )
    db.delete(grade)
    db.commit()


def _with_class(grade: Grade, enrollment: Enrollment, school_class: SchoolClass) -> GradeWithClass:
    return GradeWithClass(
        id=grade.id,
        enrollment_id=grade.enrollment_id,
        assignment_name=grade.assignment_name,
        grade_value=grade.grade_value,
        weight=grade.weight,
        comments=grade.comments,
        graded_by=grade.graded_by,
        graded_at=grade.graded_at,
        updated_at=grade.updated_at,
        class_id=school_class.id,
        class_name=school_class.name,
        student_id=enrollment.student_id,
    )


def list_student_grades(db: Session, actor: Actor, student_id: int) -> List[GradeWithClass]:
    ensure_access(actor, Action.GRADE_LIST_BY_STUDENT, Resource(student_id=student_id))
    get_student(db, student_id)
    rows = (
        db.query(Grade, Enrollment, SchoolClass)
        .join(Enrollment, Grade.enrollment_id == Enrollment.id)
        .join(SchoolClass, Enrollment.class_id == SchoolClass.id)
        .filter(Enrollment.student_id == student_id)
        .order_by(Grade.graded_at.asc(), Grade.id.asc())
        .all()
    )
    return [
        _with_class(grade, enrollment, school_class)
        for grade, enrollment, school_class in rows
        if can_access(
            actor,
            Action.GRADE_READ,
            Resource(student_id=enrollment.student_id, teacher_id=school_class.teacher_id),
        )
        is Decision.ALLOW
    ]


def list_class_grades(db: Session, actor: Actor, class_id: int) -> List[GradeWithClass]:
    school_class = get_class(db, class_id)
    ensure_access(actor, Action.GRADE_LIST_BY_CLASS, Resource(teacher_id=school_class.teacher_id))
    rows = (
        db.query(Grade, Enrollment)
        .join(Enrollment, Grade.enrollment_id == Enrollment.id)
        .filter(Enrollment.class_id == class_id)
        .order_by(Grade.graded_at.asc(), Grade.id.asc())
        .all()
    )
    return [_with_class(grade, enrollment, school_class) for grade, enrollment in rows]
