"""
Employee API — API Routes Package
===================================

Route Inventory:
    - employees.py:  /api/v1/employees       CRUD (bearer token required)
    - auth.py:       POST /api/v1/auth/login
    - health.py:     GET  /health

Routes are THIN: they build a command or query, send it through the
Dispatcher and translate the Result into an HTTP response.
"""
