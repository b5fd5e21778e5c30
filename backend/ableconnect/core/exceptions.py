from typing import Any, Dict, Optional

from fastapi import HTTPException, status


# Base class for every error the API raises on purpose
class AbleConnectException(HTTPException):
    def __init__(
        self,
        status_code: int,
        detail: str,
        code: str,
        headers: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.code = code


class ValidationFailed(AbleConnectException):
    def __init__(self, detail: str = "Validation error", code: str = "VALIDATION_ERROR"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail, code=code)


class InvalidStatus(ValidationFailed):
    def __init__(self, detail: str = "Invalid status value", code: str = "INVALID_STATUS"):
        super().__init__(detail=detail, code=code)


class InvalidJob(ValidationFailed):
    def __init__(self, detail: str = "Invalid job ID", code: str = "INVALID_JOB"):
        super().__init__(detail=detail, code=code)


class DuplicateError(AbleConnectException):
    def __init__(self, detail: str = "Duplicate record", code: str = "DUPLICATE"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail, code=code)


class DuplicateApplication(DuplicateError):
    def __init__(self, detail: str = "Already applied.", code: str = "DUPLICATE_APPLICATION"):
        super().__init__(detail=detail, code=code)


class NotAuthenticated(AbleConnectException):
    def __init__(self, detail: str = "Missing or invalid token", code: str = "NOT_AUTHENTICATED"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            code=code,
            headers={"WWW-Authenticate": "Bearer"},
        )


class Forbidden(AbleConnectException):
    def __init__(self, detail: str = "Unauthorized", code: str = "FORBIDDEN"):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail, code=code)


class NotFound(AbleConnectException):
    def __init__(self, detail: str = "Not found", code: str = "NOT_FOUND"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail, code=code)


class ServerError(AbleConnectException):
    def __init__(self, detail: str = "Server error", code: str = "SERVER_ERROR"):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail, code=code
        )
