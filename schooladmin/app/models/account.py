"""Account model: one login identity with a fixed role."""

from sqlalchemy import Boolean, CheckConstraint, Column, DateTime, Integer, String
from sqlalchemy.orm import relationship

from schooladmin.app.core.time import utc_now
from schooladmin.app.db.base_class import Base


class Account(Base):
    __tablename__ = "accounts"
    __table_args__ = (
        CheckConstraint("role IN ('student', 'teacher', 'admin')", name="ck_accounts_role"),
    )

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    name = Column(String(200), nullable=False)
    role = Column(String(20), nullable=False)
    salt = Column(String(64), nullable=False)
    password_hash = Column(String(255), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    last_login = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now)

    sessions = relationship("Session", back_populates="account", cascade="all, delete-orphan", passive_deletes=True)
    student_profile = relationship(
        "Student", back_populates="account", cascade="all, delete-orphan", uselist=False, passive_deletes=True
    )
    teacher_profile = relationship(
        "Teacher", back_populates="account", cascade="all, delete-orphan", uselist=False, passive_deletes=True
    )

    @property
    def student_id(self):
        return self.student_profile.id if self.student_profile else None

    @property
    def teacher_id(self):
        return self.teacher_profile.id if self.teacher_profile else None
