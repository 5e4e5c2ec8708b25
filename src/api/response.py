"""
Success envelope shared by every endpoint: {success, data, message?}
"""

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    success: bool = True
    data: Optional[T] = None
    message: Optional[str] = None


def ok(data=None, message: Optional[str] = None) -> ApiResponse:
    return ApiResponse(data=data, message=message)
