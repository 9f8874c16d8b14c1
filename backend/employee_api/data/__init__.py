"""Persistence scope shared by every repository of a request."""

from employee_api.data.unit_of_work import UnitOfWork

__all__ = ["UnitOfWork"]
