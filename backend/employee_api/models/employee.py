"""
Employee API — Employee SQLAlchemy Model
==========================================

What:  ORM model for the `employees` table.
Who:   EmployeeRepository and the employee handlers.

Table Design:
    - email: unique index (one employee per address)
    - supervisor_id: self-referencing FK, ON DELETE RESTRICT; an employee
      with direct reports cannot be removed
    - no ORM relationship to the supervisor; the repository joins on demand
      and fills the plain `supervisor` attribute

Query Patterns:
    - Direct reports:  WHERE supervisor_id = :id   → idx_employees_supervisor_id
    - Report frontier: WHERE supervisor_id IN (…)  → idx_employees_supervisor_id
"""

import uuid
from typing import Optional

from sqlalchemy import Boolean, ForeignKey, Index, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from employee_api.models.base import Entity

NAME_MAX_LENGTH = 100
EMAIL_MAX_LENGTH = 100


class Employee(Entity):
    """
    An employee, optionally reporting to another employee.

    `supervisor` is not a mapped attribute: it holds the supervisor row only
    when a supervisor-join query loaded it, and None otherwise.
    """

    __tablename__ = "employees"

    first_name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH), nullable=False)
    last_name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH), nullable=False)
    email: Mapped[str] = mapped_column(
        String(EMAIL_MAX_LENGTH), nullable=False, unique=True
    )
    is_supervisor: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    supervisor_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid,
        ForeignKey("employees.id", ondelete="RESTRICT"),
        nullable=True,
    )

    __table_args__ = (
        Index("idx_employees_supervisor_id", "supervisor_id"),
    )

    # In-memory backreference, populated by the repository's supervisor joins
    supervisor = None

    def update(
        self,
        first_name: str,
        last_name: str,
        email: str,
        is_supervisor: bool,
        supervisor_id: Optional[uuid.UUID],
    ) -> None:
        """Replaces every mutable field."""
        self.first_name = first_name
        self.last_name = last_name
        self.email = email
        self.is_supervisor = is_supervisor
        self.supervisor_id = supervisor_id

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def __repr__(self) -> str:
        return (
            f"<Employee(id={self.id}, email='{self.email}', "
            f"supervisor_id={self.supervisor_id})>"
        )
