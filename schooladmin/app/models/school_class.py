"""Class model. Named SchoolClass to stay clear of the keyword."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from schooladmin.app.core.time import utc_now
from schooladmin.app.db.base_class import Base


class SchoolClass(Base):
    __tablename__ = "classes"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), unique=True, nullable=False)
    teacher_id = Column(Integer, ForeignKey("teachers.id"), nullable=False, index=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now)

    teacher = relationship("Teacher", back_populates="classes")
    enrollments = relationship("Enrollment", back_populates="school_class", cascade="all, delete-orphan", passive_deletes=True)
