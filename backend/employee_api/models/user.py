"""
Employee API — User SQLAlchemy Model
======================================

What:  ORM model for the `users` table (API login accounts).
Who:   UserRepository, LoginCommandHandler, the seeder.

Users are created by seeding only; there is no user management endpoint.
`password_hash` holds the Argon2 encoded string produced by AuthService.
"""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from employee_api.models.base import Entity


class User(Entity):
    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    email: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username='{self.username}')>"
