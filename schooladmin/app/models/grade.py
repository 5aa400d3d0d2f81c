"""Grade model. The value range is enforced by a CHECK constraint built from settings."""

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from schooladmin.app.core.settings import get_settings
from schooladmin.app.core.time import utc_now
from schooladmin.app.db.base_class import Base

_settings = get_settings()


class Grade(Base):
    __tablename__ = "grades"
    __table_args__ = (
        CheckConstraint(
            f"grade_value >= {int(_settings.grade_min)} AND grade_value <= {int(_settings.grade_max)}",
            name="ck_grades_value_range",
        ),
        CheckConstraint("weight IS NULL OR weight >= 0", name="ck_grades_weight"),
    )

    id = Column(Integer, primary_key=True, index=True)
    enrollment_id = Column(Integer, ForeignKey("enrollments.id", ondelete="CASCADE"), nullable=False, index=True)
    assignment_name = Column(String(200), nullable=False)
    grade_value = Column(Integer, nullable=False)
    weight = Column(Integer, nullable=True, default=1)
    comments = Column(Text, nullable=True)
    graded_by = Column(Integer, ForeignKey("teachers.id"), nullable=False, index=True)
    graded_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now)

    enrollment = relationship("Enrollment", back_populates="grades")
    teacher = relationship("Teacher")
