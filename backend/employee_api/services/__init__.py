"""
Employee API — Services Layer
===============================

Service Inventory:
    - AuthService: Argon2 password hashing and JWT issuance/decoding
    - seed_database: startup seeding of users and a sample hierarchy

Business rules for employees live in handlers/, not here; services hold
the pieces shared by handlers, routes and startup code.
"""
