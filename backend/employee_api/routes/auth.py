"""
Employee API — Authentication Route
=====================================

    POST /api/v1/auth/login   {username, password} → {token, username, email}

The only unauthenticated API route besides /health.
"""

from typing import Union

from fastapi import APIRouter, Depends, Response

from employee_api.commands import LoginCommand
from employee_api.dependencies import get_dispatcher
from employee_api.mediator import Dispatcher
from employee_api.problem_details import error_result_response
from employee_api.schemas.auth import AuthResponse, LoginPayload
from employee_api.schemas.common import ProblemDetails

router = APIRouter(prefix="/api/v1/auth", tags=["Auth"])


@router.post(
    "/login",
    response_model=AuthResponse,
    responses={
        400: {"description": "Username or password missing", "model": ProblemDetails},
        401: {"description": "Invalid username or password", "model": ProblemDetails},
    },
    summary="Exchange credentials for a bearer token",
)
async def login(
    payload: LoginPayload,
    dispatcher: Dispatcher = Depends(get_dispatcher),
) -> Union[AuthResponse, Response]:
    result = await dispatcher.send(LoginCommand(payload))
    if result.is_failure:
        return error_result_response(result.error)
    return result.unwrap()
