from typing import Any, Dict, Mapping, Optional, TypeVar

from fastapi import status

from src.libs.result import Error, Result

T = TypeVar("T")


class ClientError(Exception):
    def __init__(
        self,
        base_error: Error,
        status_code: int = status.HTTP_400_BAD_REQUEST,
        extra: Optional[Dict[str, Any]] = None,
    ):
        self.base_error = base_error
        self.status_code = status_code
        self.extra = extra or {}
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)


def unwrap(result: Result[T], statuses: Mapping[str, int]) -> T:
    """
    Value of an ok result; otherwise raise the error.

    Codes listed in statuses become a ClientError with that status, any
    other code is a ServerError.
    """
    if result.is_ok():
        return result.value

    error = result.error
    if error.code in statuses:
        raise ClientError(error, status_code=statuses[error.code])
    raise ServerError(error)
