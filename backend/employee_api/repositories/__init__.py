# Repositories package init
"""
Employee API — Repository Layer
=================================

What:  Data access between handlers and the database session.
How:   Each repository is bound to the request's UnitOfWork; reads execute
       immediately, writes are staged until the unit of work commits.

Repository Inventory:
    - Repository (generic):  get_by_id, find, any, add, remove, update,
                             execute_update, paginated_statement
    - EmployeeRepository:    supervisor joins, pagination, direct reports,
                             transitive report count
    - UserRepository:        lookup by username / email
"""

from employee_api.repositories.base import Repository
from employee_api.repositories.employee_repository import EmployeeRepository
from employee_api.repositories.user_repository import UserRepository

__all__ = ["Repository", "EmployeeRepository", "UserRepository"]
