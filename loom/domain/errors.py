# loom/domain/errors.py
from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(Enum):
    """Failure kinds reported to clients, named after the callable-RPC codes."""

    UNAUTHENTICATED = "UNAUTHENTICATED"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    NOT_FOUND = "NOT_FOUND"
    FAILED_PRECONDITION = "FAILED_PRECONDITION"
    OUT_OF_RANGE = "OUT_OF_RANGE"
    INTERNAL = "INTERNAL"


HTTP_STATUS = {
    ErrorCode.UNAUTHENTICATED: 401,
    ErrorCode.PERMISSION_DENIED: 403,
    ErrorCode.INVALID_ARGUMENT: 400,
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.FAILED_PRECONDITION: 400,
    ErrorCode.OUT_OF_RANGE: 400,
    ErrorCode.INTERNAL: 500,
}


class LoomError(Exception):
    """Base exception for every failure surfaced to an API caller."""

    code = ErrorCode.INTERNAL

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        self.message = message
        self.context = context or {}
        super().__init__(message)

    @property
    def status_code(self) -> int:
        return HTTP_STATUS[self.code]

    def to_response(self) -> Dict[str, Any]:
        return {
            "error": {
                "status": self.code.value,
                "message": self.message,
                "details": self.context,
            }
        }


class Unauthenticated(LoomError):
    code = ErrorCode.UNAUTHENTICATED


class PermissionDenied(LoomError):
    code = ErrorCode.PERMISSION_DENIED


class InvalidArgument(LoomError):
    code = ErrorCode.INVALID_ARGUMENT


class NotFound(LoomError):
    code = ErrorCode.NOT_FOUND


class FailedPrecondition(LoomError):
    code = ErrorCode.FAILED_PRECONDITION


class OutOfRange(LoomError):
    code = ErrorCode.OUT_OF_RANGE


class TransactionConflict(LoomError):
    """A row read inside a transaction was changed by a concurrent commit."""

    code = ErrorCode.INTERNAL

    def __init__(self, table: str, key: str):
        super().__init__(
            "The request conflicted with a concurrent update, please retry",
            context={"table": table, "key": key},
        )
