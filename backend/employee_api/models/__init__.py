"""
Employee API — ORM Models
===========================

Importing this package registers every table on Base.metadata.
"""

from employee_api.models.base import Entity
from employee_api.models.employee import Employee
from employee_api.models.user import User

__all__ = ["Entity", "Employee", "User"]
