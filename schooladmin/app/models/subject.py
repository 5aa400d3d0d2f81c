from sqlalchemy import Column, DateTime, Integer, String

from schooladmin.app.core.time import utc_now
from schooladmin.app.db.base_class import Base


class Subject(Base):
    __tablename__ = "subjects"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), unique=True, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
