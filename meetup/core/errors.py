"""Service error kinds.

Every failure a participation or meeting operation can report is one of a
closed set of kinds. Services raise ``ServiceError`` carrying the kind; the
HTTP layer turns the kind into a status code with ``HTTP_STATUS_BY_KIND``.
"""
from enum import Enum


class ErrorKind(str, Enum):
    NOT_FOUND = "NOT_FOUND"
    GONE = "GONE"
    FORBIDDEN = "FORBIDDEN"
    CONFLICT = "CONFLICT"
    CAPACITY_EXCEEDED = "CAPACITY_EXCEEDED"
    EXPIRED = "EXPIRED"
    BAD_REQUEST = "BAD_REQUEST"
    INTERNAL = "INTERNAL"


HTTP_STATUS_BY_KIND = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.GONE: 410,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.CONFLICT: 409,
    ErrorKind.CAPACITY_EXCEEDED: 400,
    ErrorKind.EXPIRED: 400,
    ErrorKind.BAD_REQUEST: 400,
    ErrorKind.INTERNAL: 500,
}


class ServiceError(Exception):
    """A failed operation, tagged with the kind of failure."""

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    @property
    def status_code(self) -> int:
        return HTTP_STATUS_BY_KIND[self.kind]

    def __repr__(self) -> str:
        return f"ServiceError({self.kind.value}, {self.message!r})"
