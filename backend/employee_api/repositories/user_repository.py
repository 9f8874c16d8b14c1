"""
Employee API — User Repository
================================

Username lookup for the login flow.
"""

from typing import Optional

from employee_api.models.user import User
from employee_api.repositories.base import Repository


class UserRepository(Repository[User]):
    model = User

    async def get_by_username(self, username: str) -> Optional[User]:
        return await self.first_or_default(User.username == username)
