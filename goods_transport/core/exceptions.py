from typing import Any, Dict, List, Optional
from fastapi import HTTPException, status

class BaseAppException(HTTPException):
    def __init__(self, status_code: int, detail: str, errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(status_code=status_code, detail=detail)
        self.errors = errors

class ValidationError(BaseAppException):
    def __init__(self, detail: str = "Validation error", errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail, errors=errors)

class AuthenticationError(BaseAppException):
    def __init__(self, detail: str = "Authentication required"):
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)

class AuthorizationError(BaseAppException):
    def __init__(self, detail: str = "Authorization required: Insufficient permissions."):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)

class NotFoundError(BaseAppException):
    def __init__(self, detail: str = "Resource not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)

class ConflictError(BaseAppException):
    def __init__(self, detail: str = "Resource already exists"):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)

class FailedPreconditionError(BaseAppException):
    """Illegal state transition for the current record state."""
    def __init__(self, detail: str = "Operation not allowed in current state"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)

class InternalError(BaseAppException):
    def __init__(self, detail: str = "Internal Server Error"):
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)
