"""Class endpoints."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from schooladmin.app.db.session import get_db
from schooladmin.app.dependencies.auth import CurrentUser, get_current_user
from schooladmin.app.schemas.enrollment import EnrollmentRead
from schooladmin.app.schemas.grade import GradeWithClass
from schooladmin.app.schemas.school_class import ClassCreate, ClassRead, ClassUpdate
from schooladmin.app.services import classes as class_service
from schooladmin.app.services.enrollments import list_class_enrollments
from schooladmin.app.services.grades import list_class_grades

router = APIRouter(prefix="/classes", tags=["classes"])


@router.get("", response_model=list[ClassRead])
def list_classes(db: Session = Depends(get_db), current_user: CurrentUser = Depends(get_current_user)):
    return class_service.list_classes(db, current_user.actor)


@router.post("", response_model=ClassRead, status_code=status.HTTP_201_CREATED)
def create_class(class_in: ClassCreate, db: Session = Depends(get_db), current_user: CurrentUser = Depends(get_current_user)):
    return class_service.create_class(db, current_user.actor, class_in)


@router.get("/{class_id}", response_model=ClassRead)
def get_class(class_id: int, db: Session = Depends(get_db), current_user: CurrentUser = Depends(get_current_user)):
    return class_service.read_class(db, current_user.actor, class_id)


@router.put("/{class_id}", response_model=ClassRead)
def update_class(
    class_id: int,
    update: ClassUpdate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    return class_service.update_class(db, current_user.actor, class_id, update)


@router.delete("/{class_id}")
def delete_class(class_id: int, db: Session = Depends(get_db), current_user: CurrentUser = Depends(get_current_user)):
    class_service.delete_class(db, current_user.actor, class_id)
    return {"message": "Class deleted successfully"}


@router.get("/{class_id}/enrollments", response_model=list[EnrollmentRead])
def get_class_enrollments(class_id: int, db: Session = Depends(get_db), current_user: CurrentUser = Depends(get_current_user)):
    return list_class_enrollments(db, current_user.actor, class_id)


@router.get("/{class_id}/grades", response_model=list[GradeWithClass])
def get_class_grades(class_id: int, db: Session = Depends(get_db), current_user: CurrentUser = Depends(get_current_user)):
    return list_class_grades(db, current_user.actor, class_id)
