"""
Employee API — Message Validators
===================================

What:  Field rules checked by ValidationBehavior before a handler runs.
How:   validate(message) returns {field: message}; an empty dict is valid.
       Field names use the camelCase spelling of the JSON contract so the
       `errors` map of a problem response points at request fields.

    LoginCommand                   username, password required
    EmployeeCreate/Update/Patch    names + email required, ≤ 100 chars,
                                   email shape
    EmployeeGetAllQuery            page ≥ 1, 1 ≤ pageSize ≤ 1000
"""

from typing import Dict, List, Mapping, Type

from pydantic import EmailStr, TypeAdapter, ValidationError

from employee_api.commands import (
    EmployeeCreateCommand,
    EmployeePatchCommand,
    EmployeeUpdateCommand,
    LoginCommand,
)
from employee_api.mediator.behaviors import Validator
from employee_api.mediator.messages import Message
from employee_api.models.employee import EMAIL_MAX_LENGTH, NAME_MAX_LENGTH
from employee_api.queries import EmployeeGetAllQuery

MAX_PAGE_SIZE = 1000

email_adapter = TypeAdapter(EmailStr)


def _required(errors: Dict[str, str], field: str, label: str, value: str, max_length: int) -> None:
    if not value or not value.strip():
        errors[field] = f"{label} is required."
    elif len(value) > max_length:
        errors[field] = f"{label} must not exceed {max_length} characters."


def _is_email(value: str) -> bool:
    """
    Address shape only, no deliverability lookup. EmailStr also accepts the
    "Name <address>" form; only a bare address is a valid value here.
    """
    try:
        address = email_adapter.validate_python(value)
    except ValidationError:
        return False
    return address.lower() == value.lower()


class LoginCommandValidator:
    def validate(self, message: LoginCommand) -> Dict[str, str]:
        errors: Dict[str, str] = {}
        if not message.payload.username.strip():
            errors["username"] = "Username is required."
        if not message.payload.password:
            errors["password"] = "Password is required."
        return errors


class EmployeeCommandValidator:
    """Shared by create, update and patch: all three carry the same payload."""

    def validate(self, message: EmployeeCreateCommand) -> Dict[str, str]:
        payload = message.payload
        errors: Dict[str, str] = {}
        _required(errors, "firstName", "First name", payload.first_name, NAME_MAX_LENGTH)
        _required(errors, "lastName", "Last name", payload.last_name, NAME_MAX_LENGTH)
        _required(errors, "email", "Email", payload.email, EMAIL_MAX_LENGTH)
        if "email" not in errors and not _is_email(payload.email):
            errors["email"] = "Email is not a valid email address."
        return errors


class PaginationValidator:
    def validate(self, message: EmployeeGetAllQuery) -> Dict[str, str]:
        errors: Dict[str, str] = {}
        if message.payload.page < 1:
            errors["page"] = "Page must be greater than or equal to 1."
        if not 1 <= message.payload.page_size <= MAX_PAGE_SIZE:
            errors["pageSize"] = f"Page size must be between 1 and {MAX_PAGE_SIZE}."
        return errors


def build_validators() -> Mapping[Type[Message], List[Validator]]:
    employee_validator = EmployeeCommandValidator()
    return {
        LoginCommand: [LoginCommandValidator()],
        EmployeeCreateCommand: [employee_validator],
        EmployeeUpdateCommand: [employee_validator],
        EmployeePatchCommand: [employee_validator],
        EmployeeGetAllQuery: [PaginationValidator()],
    }
