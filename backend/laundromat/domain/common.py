"""
Uniform result shape returned by the service layer
"""
from pydantic import BaseModel
from typing import Any, Optional


class ApiResponse(BaseModel):
    """
    Result of a service call

    Errors are caught per call and reported here instead of raised:
    success is False and error carries a human-readable message.
    """
    success: bool
    data: Optional[Any] = None
    message: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, data: Any = None, message: Optional[str] = None) -> "ApiResponse":
        return cls(success=True, data=data, message=message)

    @classmethod
    def fail(cls, error: str) -> "ApiResponse":
        return cls(success=False, error=error)
