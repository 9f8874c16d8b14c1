"""
Employee API — Exception Hierarchy
====================================

What:  Exceptions for conditions that abort a request.
How:   Each exception carries a message and optional context dict.
       Global exception handlers (registered in main.py) turn them into
       problem-details responses.

Business-rule failures are NOT exceptions; they are `Result` values
(see result.py). Only the following propagate:

    EmployeeApiError (base)
    ├── ConfigurationError        → 500 (required setting missing)
    ├── HandlerRegistrationError  → 500 (mediator wiring broken)
    ├── UnauthorizedError         → 401 (missing/invalid bearer token)
    └── DatabaseError             → 500 (store failure)
"""

from typing import Any, Dict, Optional


class EmployeeApiError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ConfigurationError(EmployeeApiError):
    """
    Raised when a required setting is missing or unusable.

    When:  Issuing a token without JWT_SECRET_KEY.
    HTTP:  500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "The application is not configured correctly",
        setting: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if setting:
            ctx["setting"] = setting
        super().__init__(message=message, context=ctx)
        self.setting = setting


class HandlerRegistrationError(EmployeeApiError):
    """
    Raised when a message type has zero or more than one handler.

    Checked at startup by HandlerRegistry.verify(); seeing this during a
    request means the registry was built without verification.
    """

    def __init__(self, message_type: type, reason: str):
        super().__init__(
            message=f"{reason}: {message_type.__name__}",
            context={"message_type": message_type.__name__},
        )
        self.message_type = message_type


class UnauthorizedError(EmployeeApiError):
    """
    Raised by the bearer-token dependency.

    HTTP:  401 Unauthorized, with a `WWW-Authenticate: Bearer` header
    """

    def __init__(
        self,
        message: str = "Invalid or missing bearer token.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(EmployeeApiError):
    """
    Raised by UnitOfWork.save_changes() when the commit fails for any reason
    other than a constraint violation (IntegrityError keeps its 409 path).

    The message returned to the client is always generic; the context
    (operation, driver message) is logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
