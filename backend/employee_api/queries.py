"""
Employee API — Queries
=======================

Read-only messages; the unit-of-work behavior never commits for these.
"""

import uuid
from dataclasses import dataclass

from employee_api.mediator.messages import Query
from employee_api.schemas.employee import PaginationParams


@dataclass(frozen=True)
class EmployeeGetQuery(Query):
    id: uuid.UUID


@dataclass(frozen=True)
class EmployeeGetAllQuery(Query):
    payload: PaginationParams
