"""Class ownership and lifecycle."""

import logging
from typing import List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from schooladmin.app.core.errors import ConflictError, NotFoundError, ValidationError
from schooladmin.app.core.permissions import Action, Actor, Resource, Role, ensure_access
from schooladmin.app.models.enrollment import Enrollment
from schooladmin.app.models.school_class import SchoolClass
from schooladmin.app.models.teacher import Teacher
from schooladmin.app.schemas.school_class import ClassCreate, ClassUpdate
from schooladmin.app.services.enrollments import get_class

logger = logging.getLogger(__name__)

DUPLICATE_NAME = "A class with this name already exists"


def _class_resource(db: Session, actor: Actor, school_class: SchoolClass) -> Resource:
    """Students may read a class only while actively enrolled in it."""
    student_id = None
    if actor.student_id is not None:
        enrolled = (
            db.query(Enrollment.id)
            .filter(
                Enrollment.class_id == school_class.id,
                Enrollment.student_id == actor.student_id,
                Enrollment.is_active.is_(True),
            )
            .first()
        )
        if enrolled is not None:
            student_id = actor.student_id
    return Resource(teacher_id=school_class.teacher_id, student_id=student_id)


def list_classes(db: Session, actor: Actor) -> List[SchoolClass]:
    query = db.query(SchoolClass)
    if actor.role == Role.TEACHER:
        query = query.filter(SchoolClass.teacher_id == actor.teacher_id)
    elif actor.role == Role.STUDENT:
        query = query.join(Enrollment, Enrollment.class_id == SchoolClass.id).filter(
            Enrollment.student_id == actor.student_id,
            Enrollment.is_active.is_(True),
        )
    return query.order_by(SchoolClass.id.asc()).all()


def read_class(db: Session, actor: Actor, class_id: int) -> SchoolClass:
    school_class = get_class(db, class_id)
    ensure_access(actor, Action.CLASS_READ, _class_resource(db, actor, school_class))
    return school_class


def create_class(db: Session, actor: Actor, class_in: ClassCreate) -> SchoolClass:
    teacher_id = class_in.teacher_id
    if actor.role == Role.TEACHER and teacher_id is None:
        teacher_id = actor.teacher_id
    ensure_access(actor, Action.CLASS_CREATE, Resource(teacher_id=teacher_id), detail="Teachers can only create their own classes")
    if teacher_id is None:
        raise ValidationError("teacher_id is required")
    if db.query(Teacher.id).filter(Teacher.id == teacher_id).first() is None:
        raise NotFoundError("Teacher not found")
    if db.query(SchoolClass.id).filter(SchoolClass.name == class_in.name).first() is not None:
        raise ConflictError(DUPLICATE_NAME)

    school_class = SchoolClass(name=class_in.name, teacher_id=teacher_id, is_active=class_in.is_active)
    db.add(school_class)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(DUPLICATE_NAME)
    db.refresh(school_class)
    logger.info("Class %s created for teacher %s", school_class.id, teacher_id)
    return school_class


def update_class(db: Session, actor: Actor, class_id: int, update: ClassUpdate) -> SchoolClass:
    school_class = get_class(db, class_id)
    ensure_access(actor, Action.CLASS_UPDATE, Resource(teacher_id=school_class.teacher_id))
    update_data = update.model_dump(exclude_unset=True, exclude_none=True)
    if "name" in update_data and update_data["name"] != school_class.name:
        clash = db.query(SchoolClass.id).filter(SchoolClass.name == update_data["name"]).first()
        if clash is not None:
            raise ConflictError(DUPLICATE_NAME)
    for field, value in update_data.items():
        setattr(school_class, field, value)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(DUPLICATE_NAME)
    db.refresh(school_class)
    return school_class


def delete_class(db: Session, actor: Actor, class_id: int) -> None:
    """Delete a class; its enrollments and their grades cascade with it."""
    school_class = get_class(db, class_id)
    ensure_access(actor, Action.CLASS_DELETE, Resource(teacher_id=school_class.teacher_id))
    db.delete(school_class)
    db.commit()
    logger.info("Class %s deleted", class_id)
