"""
Employee API — Bearer Token Dependency
========================================

What:  FastAPI dependency guarding the /api/v1/employees routes.
How:   HTTPBearer extracts `Authorization: Bearer <jwt>`; AuthService
       validates signature, expiry, issuer and audience. Any failure raises
       UnauthorizedError, answered as a 401 problem by main.py.
"""

from typing import Any, Dict, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from employee_api.exceptions import UnauthorizedError
from employee_api.services.auth_service import AuthService, auth_service

bearer_scheme = HTTPBearer(auto_error=False)


def get_auth_service() -> AuthService:
    return auth_service


async def require_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth: AuthService = Depends(get_auth_service),
) -> Dict[str, Any]:
    """Returns the token claims of the authenticated caller."""
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError()
    return auth.decode_jwt_token(credentials.credentials)
