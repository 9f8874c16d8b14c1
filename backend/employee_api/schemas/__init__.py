"""
Employee API — Pydantic Schemas
=================================

API contract models, separate from the SQLAlchemy models:
    - employee.py: employee payloads, pagination params, EmployeeResponse
    - auth.py:     login payload and token response
    - common.py:   problem details and health check bodies
"""
