"""
Employee API — Login Handler
==============================

    LoginCommand → lookup user → verify password → issue token → AuthResponse

Unknown usernames and wrong passwords fail with the same message so the
response does not reveal which usernames exist.
"""

import logging

from employee_api.commands import LoginCommand
from employee_api.repositories.user_repository import UserRepository
from employee_api.result import ErrorResult, Result
from employee_api.schemas.auth import AuthResponse
from employee_api.services.auth_service import AuthService

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid username or password"


class LoginCommandHandler:
    def __init__(self, users: UserRepository, auth: AuthService):
        self.users = users
        self.auth = auth

    async def handle(self, command: LoginCommand) -> Result[AuthResponse]:
        credentials = command.payload
        user = await self.users.get_by_username(credentials.username)
        if user is None or not self.auth.verify_password(credentials.password, user.password_hash):
            logger.info("Failed login attempt for username '%s'", credentials.username)
            return Result.failure(ErrorResult.unauthorized(INVALID_CREDENTIALS))

        token = self.auth.generate_jwt_token(user)
        return Result.success(AuthResponse(token=token, username=user.username, email=user.email))
