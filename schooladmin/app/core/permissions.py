"""Role-based authorization policy.

Every route describes what it wants to do as an ``Action`` and the target's
ownership as a ``Resource``; ``can_access`` answers ALLOW or DENY. Anything
not matched by a rule below is denied. Ownership is compared by exact id
equality only.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from schooladmin.app.core.errors import AuthorizationError


class Role(str, Enum):
    STUDENT = "student"
    TEACHER = "teacher"
    ADMIN = "admin"


class Decision(str, Enum):
    ALLOW = "allow"
    DENY = "deny"


class Action(str, Enum):
    ACCOUNT_CREATE = "account:create"
    ACCOUNT_DELETE = "account:delete"
    ACCOUNT_LIST = "account:list"
    ACCOUNT_STATUS = "account:status"
    PROFILE_READ = "profile:read"
    PROFILE_UPDATE = "profile:update"

    STUDENT_LIST = "student:list"
    STUDENT_READ = "student:read"
    TEACHER_LIST = "teacher:list"
    TEACHER_READ = "teacher:read"

    CLASS_CREATE = "class:create"
    CLASS_UPDATE = "class:update"
    CLASS_DELETE = "class:delete"
    CLASS_READ = "class:read"

    SUBJECT_READ = "subject:read"
    SUBJECT_WRITE = "subject:write"

    ENROLLMENT_CREATE = "enrollment:create"
    ENROLLMENT_BULK = "enrollment:bulk"
    ENROLLMENT_DELETE = "enrollment:delete"
    ENROLLMENT_LIST_ALL = "enrollment:list_all"
    ENROLLMENT_READ = "enrollment:read"

    GRADE_CREATE = "grade:create"
    GRADE_UPDATE = "grade:update"
    GRADE_DELETE = "grade:delete"
    GRADE_READ = "grade:read"
    GRADE_LIST_BY_STUDENT = "grade:list_by_student"
    GRADE_LIST_BY_CLASS = "grade:list_by_class"


@dataclass(frozen=True)
class Actor:
    account_id: int
    role: Role
    student_id: Optional[int] = None
    teacher_id: Optional[int] = None


@dataclass(frozen=True)
class Resource:
    """Ownership attributes of the target. ``teacher_id`` is the owning
    teacher of the class involved, ``student_id`` the student involved and
    ``account_id`` the account involved."""

    account_id: Optional[int] = None
    student_id: Optional[int] = None
    teacher_id: Optional[int] = None


NO_RESOURCE = Resource()


def _same(actor_value: Optional[int], resource_value: Optional[int]) -> bool:
    return actor_value is not None and resource_value is not None and actor_value == resource_value


def _always(actor: Actor, resource: Resource) -> bool:
    return True


def _owns_class(actor: Actor, resource: Resource) -> bool:
    return _same(actor.teacher_id, resource.teacher_id)


def _is_student(actor: Actor, resource: Resource) -> bool:
    return _same(actor.student_id, resource.student_id)


def _is_account(actor: Actor, resource: Resource) -> bool:
    return _same(actor.account_id, resource.account_id)


Rule = Callable[[Actor, Resource], bool]

# Admin is allowed every action listed here; roles missing from a row are denied.
_RULES: dict[Action, dict[Role, Rule]] = {
    Action.ACCOUNT_CREATE: {},
    Action.ACCOUNT_DELETE: {},
    Action.ACCOUNT_LIST: {},
    Action.ACCOUNT_STATUS: {},
    Action.PROFILE_READ: {Role.TEACHER: _is_account, Role.STUDENT: _is_account},
    Action.PROFILE_UPDATE: {Role.TEACHER: _is_account, Role.STUDENT: _is_account},
    Action.STUDENT_LIST: {Role.TEACHER: _always},
    Action.STUDENT_READ: {Role.TEACHER: _always, Role.STUDENT: _is_student},
    Action.TEACHER_LIST: {Role.TEACHER: _always},
    Action.TEACHER_READ: {Role.TEACHER: _always},
    Action.CLASS_CREATE: {Role.TEACHER: _owns_class},
    Action.CLASS_UPDATE: {Role.TEACHER: _owns_class},
    Action.CLASS_DELETE: {Role.TEACHER: _owns_class},
    Action.CLASS_READ: {Role.TEACHER: _owns_class, Role.STUDENT: _is_student},
    Action.SUBJECT_READ: {Role.TEACHER: _always, Role.STUDENT: _always},
    Action.SUBJECT_WRITE: {},
    Action.ENROLLMENT_CREATE: {},
    Action.ENROLLMENT_BULK: {},
    Action.ENROLLMENT_DELETE: {},
    Action.ENROLLMENT_LIST_ALL: {},
    Action.ENROLLMENT_READ: {Role.TEACHER: _owns_class, Role.STUDENT: _is_student},
    Action.GRADE_CREATE: {Role.TEACHER: _owns_class},
    Action.GRADE_UPDATE: {Role.TEACHER: _owns_class},
    Action.GRADE_DELETE: {Role.TEACHER: _owns_class},
    Action.GRADE_READ: {Role.TEACHER: _owns_class, Role.STUDENT: _is_student},
    # Teachers may ask for any student's grades; rows outside their classes are filtered by GRADE_READ.
    Action.GRADE_LIST_BY_STUDENT: {Role.TEACHER: _always, Role.STUDENT: _is_student},
    Action.GRADE_LIST_BY_CLASS: {Role.TEACHER: _owns_class},
}


def can_access(actor: Actor, action: Action, resource: Resource = NO_RESOURCE) -> Decision:
    rules = _RULES.get(action)
    if rules is None:
        return Decision.DENY
    if actor.role == Role.ADMIN:
        return Decision.ALLOW
    rule = rules.get(actor.role)
    if rule is not None and rule(actor, resource):
        return Decision.ALLOW
    return Decision.DENY


def ensure_access(actor: Actor, action: Action, resource: Resource = NO_RESOURCE, detail: str | None = None) -> None:
    if can_access(actor, action, resource) is not Decision.ALLOW:
        raise AuthorizationError(detail)
