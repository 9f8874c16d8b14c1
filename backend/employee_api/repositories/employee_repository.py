"""
Employee API — Employee Repository (Hierarchy Queries)
=========================================================

What:  Employee persistence plus the supervisor/report queries.
Who:   Employee command and query handlers.

Supervisor joins:
    SELECT e.*, s.* FROM employees e
    LEFT OUTER JOIN employees s ON e.supervisor_id = s.id
    The supervisor row is attached to `employee.supervisor`.

Total reports (transitive) traversal:
    level 0   frontier = {root}
    level n   SELECT id, is_supervisor FROM employees
              WHERE supervisor_id IN (frontier)
              → every unseen id is a report
              → unseen reports flagged is_supervisor form the next frontier

    One query per hierarchy level, serialized on the request session (an
    AsyncSession must not run concurrent statements). The seen-set makes the
    count independent of sibling order and terminates on cycles of any
    length; the root is never counted as its own report.
"""

import logging
import uuid
from typing import List, Optional, Set

from sqlalchemy import Select, select
from sqlalchemy.orm import aliased

from employee_api.models.employee import Employee
from employee_api.repositories.base import Repository

logger = logging.getLogger(__name__)


class EmployeeRepository(Repository[Employee]):
    model = Employee

    def _with_supervisor(self) -> Select:
        supervisor = aliased(Employee, name="supervisor")
        return select(Employee, supervisor).outerjoin(
            supervisor, Employee.supervisor_id == supervisor.id
        )

    async def _load_with_supervisor(self, statement: Select, tracking: bool) -> List[Employee]:
        snapshot = None if tracking else self._identity_snapshot()
        result = await self.session.execute(statement)

        employees: List[Employee] = []
        loaded = []
        for employee, supervisor in result.all():
            employee.supervisor = supervisor
            employees.append(employee)
            loaded.append(employee)
            if supervisor is not None:
                loaded.append(supervisor)

        if snapshot is not None:
            self._detach_new(loaded, snapshot)
        return employees

    async def get_by_id_with_supervisor(self, employee_id: uuid.UUID) -> Optional[Employee]:
        """Employee with its direct supervisor loaded by one extra join, or None."""
        employees = await self._load_with_supervisor(
            self._with_supervisor().where(Employee.id == employee_id), tracking=True
        )
        return employees[0] if employees else None

    async def get_paginated_with_supervisor(self, page: int, page_size: int) -> List[Employee]:
        """At most `page_size` employees of 1-based `page`, supervisors loaded, untracked."""
        skip = (page - 1) * page_size
        statement = (
            self._with_supervisor()
            .order_by(Employee.created_at, Employee.id)
            .offset(skip)
            .limit(page_size)
        )
        return await self._load_with_supervisor(statement, tracking=False)

    async def get_direct_reports(self, supervisor_id: uuid.UUID) -> List[Employee]:
        """One level only: employees whose supervisor_id equals `supervisor_id`."""
        return await self.find(Employee.supervisor_id == supervisor_id)

    async def get_total_reports_count(self, supervisor_id: uuid.UUID) -> int:
        """Number of distinct employees below `supervisor_id`, at any depth."""
        reports: Set[uuid.UUID] = set()
        seen: Set[uuid.UUID] = {supervisor_id}
        frontier: Set[uuid.UUID] = {supervisor_id}
        depth = 0

        while frontier:
            result = await self.session.execute(
                select(Employee.id, Employee.is_supervisor).where(
                    Employee.supervisor_id.in_(frontier)
                )
            )
            next_frontier: Set[uuid.UUID] = set()
            for report_id, is_supervisor in result.all():
                if report_id in seen:
                    continue
                seen.add(report_id)
                reports.add(report_id)
                if is_supervisor:
                    next_frontier.add(report_id)
            frontier = next_frontier
            depth += 1

        logger.debug(
            "Counted %d reports under %s across %d levels", len(reports), supervisor_id, depth
        )
        return len(reports)
