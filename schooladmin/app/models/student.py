"""Student profile, the role extension of a student account."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer
from sqlalchemy.orm import relationship

from schooladmin.app.core.time import utc_now
from schooladmin.app.db.base_class import Base


class Student(Base):
    __tablename__ = "students"

    id = Column(Integer, primary_key=True, index=True)
    account_id = Column(Integer, ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False, unique=True, index=True)
    enrollment_date = Column(DateTime(timezone=True), nullable=False, default=utc_now)

    account = relationship("Account", back_populates="student_profile")
    enrollments = relationship("Enrollment", back_populates="student", cascade="all, delete-orphan", passive_deletes=True)

    @property
    def name(self):
        return self.account.name

    @property
    def email(self):
        return self.account.email
