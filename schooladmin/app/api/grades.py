"""Grade endpoints."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from schooladmin.app.db.session import get_db
from schooladmin.app.dependencies.auth import CurrentUser, get_current_user, get_grade_rules
from schooladmin.app.schemas.grade import GradeCreate, GradeRead, GradeUpdate, GradeWithClass
from schooladmin.app.services import grades as grade_service
from schooladmin.app.services.grades import GradeRules

router = APIRouter(prefix="/grades", tags=["grades"])


@router.get("/student/{student_id}", response_model=list[GradeWithClass])
def list_student_grades(student_id: int, db: Session = Depends(get_db), current_user: CurrentUser = Depends(get_current_user)):
    return grade_service.list_student_grades(db, current_user.actor, student_id)


@router.get("/class/{class_id}", response_model=list[GradeWithClass])
def list_class_grades(class_id: int, db: Session = Depends(get_db), current_user: CurrentUser = Depends(get_current_user)):
    return grade_service.list_class_grades(db, current_user.actor, class_id)


@router.post("", response_model=GradeRead, status_code=status.HTTP_201_CREATED)
def create_grade(
    grade_in: GradeCreate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
    rules: GradeRules = Depends(get_grade_rules),
):
    return grade_service.create_grade(db, rules, current_user.actor, grade_in)


@router.put("/{grade_id}", response_model=GradeRead)
def update_grade(
    grade_id: int,
    update: GradeUpdate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
    rules: GradeRules = Depends(get_grade_rules),
):
    return grade_service.update_grade(db, rules, current_user.actor, grade_id, update)


@router.delete("/{grade_id}")
def delete_grade(grade_id: int, db: Session = Depends(get_db), current_user: CurrentUser = Depends(get_current_user)):
    grade_service.delete_grade(db, current_user.actor, grade_id)
    return {"message": "Grade deleted successfully"}
