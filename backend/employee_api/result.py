"""
Employee API — Result Values
=============================

What:  Typed success/failure values returned by every handler.
How:   A handler returns `Result.success(value)` or `Result.failure(error)`;
       the HTTP layer turns failures into problem-details responses.

Business-rule failures (not found, duplicate email, invalid supervisor, bad
credentials) travel as values. Exceptions are reserved for conditions no
caller can handle: missing configuration, broken handler registration,
database failures.

    ErrorDefinition    HTTP
    ───────────────    ────
    Validation         400
    NotFound           404
    Conflict           409
    Concurrency        409
    Unauthorized       401
    Error              400
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Generic, Optional, TypeVar

T = TypeVar("T")


class ErrorDefinition(str, Enum):
    NONE = "None"
    ERROR = "Error"
    NOT_FOUND = "NotFound"
    CONCURRENCY = "Concurrency"
    VALIDATION = "Validation"
    CONFLICT = "Conflict"
    UNAUTHORIZED = "Unauthorized"


@dataclass(frozen=True)
class ErrorResult:
    """
    Structured description of a failure.

    Attributes:
        code:        Stable machine-readable code (surfaced as `errorCode`)
        definition:  Error category, drives the HTTP status
        description: Human-readable message (surfaced as `detail`)
        properties:  Field → message map, populated for validation failures
    """

    code: str
    definition: ErrorDefinition
    description: str
    properties: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def error(cls, description: str, code: str = ErrorDefinition.ERROR.value) -> "ErrorResult":
        return cls(code, ErrorDefinition.ERROR, description)

    @classmethod
    def conflict(cls, description: str) -> "ErrorResult":
        return cls(ErrorDefinition.CONFLICT.value, ErrorDefinition.CONFLICT, description)

    @classmethod
    def unauthorized(cls, description: str) -> "ErrorResult":
        return cls(ErrorDefinition.UNAUTHORIZED.value, ErrorDefinition.UNAUTHORIZED, description)

    @classmethod
    def not_found(cls, resource: str, resource_id: str) -> "ErrorResult":
        return cls(
            ErrorDefinition.NOT_FOUND.value,
            ErrorDefinition.NOT_FOUND,
            f"Resource '{resource}' with identifier '{resource_id}' was not found.",
        )

    @classmethod
    def validation(cls, resource: str, properties: Dict[str, str]) -> "ErrorResult":
        return cls(
            ErrorDefinition.VALIDATION.value,
            ErrorDefinition.VALIDATION,
            f"Resource '{resource}' has {len(properties)} validation(s) error(s).",
            dict(properties),
        )


NO_ERROR = ErrorResult(ErrorDefinition.NONE.value, ErrorDefinition.NONE, "")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of a handler call: either a value or an ErrorResult."""

    error: ErrorResult = NO_ERROR
    value: Optional[T] = None

    @property
    def is_success(self) -> bool:
        return self.error.definition is ErrorDefinition.NONE

    @property
    def is_failure(self) -> bool:
        return not self.is_success

    @classmethod
    def success(cls, value: Optional[T] = None) -> "Result[T]":
        return cls(NO_ERROR, value)

    @classmethod
    def failure(cls, error: ErrorResult) -> "Result[T]":
        if error.definition is ErrorDefinition.NONE:
            raise ValueError("A failed result needs an error definition")
        return cls(error, None)

    def unwrap(self) -> T:
        """Returns the value of a successful result carrying one."""
        if self.is_failure or self.value is None:
            raise ValueError(f"Result has no value: {self.error.description or 'empty'}")
        return self.value
