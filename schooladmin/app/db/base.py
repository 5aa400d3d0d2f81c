from schooladmin.app.db.base_class import Base

# Import models to register metadata for Base.metadata.create_all in tests
from schooladmin.app.models.account import Account  # noqa: F401
from schooladmin.app.models.student import Student  # noqa: F401
from schooladmin.app.models.teacher import Teacher  # noqa: F401
from schooladmin.app.models.session import Session  # noqa: F401
from schooladmin.app.models.school_class import SchoolClass  # noqa: F401
from schooladmin.app.models.subject import Subject  # noqa: F401
from schooladmin.app.models.enrollment import Enrollment  # noqa: F401
from schooladmin.app.models.grade import Grade  # noqa: F401
