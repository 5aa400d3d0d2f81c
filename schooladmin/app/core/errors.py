"""Domain errors raised by services and translated to HTTP responses in main."""

from fastapi import status


class SchoolAdminError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Unexpected error"

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class ValidationError(SchoolAdminError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid request"


class AuthenticationError(SchoolAdminError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Not authenticated"


class AuthorizationError(SchoolAdminError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Insufficient permissions"


class NotFoundError(SchoolAdminError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"


class ConflictError(SchoolAdminError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Conflict"


class DependencyError(SchoolAdminError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Storage failure"
