"""Teacher profile, the role extension of a teacher account."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer
from sqlalchemy.orm import relationship

from schooladmin.app.core.time import utc_now
from schooladmin.app.db.base_class import Base


class Teacher(Base):
    __tablename__ = "teachers"

    id = Column(Integer, primary_key=True, index=True)
    account_id = Column(Integer, ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False, unique=True, index=True)
    hire_date = Column(DateTime(timezone=True), nullable=False, default=utc_now)

    account = relationship("Account", back_populates="teacher_profile")
    classes = relationship("SchoolClass", back_populates="teacher", passive_deletes="all")

    @property
    def name(self):
        return self.account.name

    @property
    def email(self):
        return self.account.email
