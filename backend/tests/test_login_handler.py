"""
Employee API — Login Handler Tests
====================================

What we test:
    ✅ Valid credentials return a decodable token for the user
    ✅ Unknown username and wrong password fail with the same message
    ✅ Missing fields are rejected by validation before lookup
"""

import pytest

from employee_api.commands import LoginCommand
from employee_api.handlers.auth import INVALID_CREDENTIALS
from employee_api.result import ErrorDefinition
from employee_api.schemas.auth import LoginPayload
from factories import TEST_PASSWORD


class TestLogin:
    @pytest.mark.asyncio
    async def test_valid_credentials(self, dispatcher, test_user, auth_service):
        result = await dispatcher.send(
            LoginCommand(LoginPayload(username="tester", password=TEST_PASSWORD))
        )

        assert result.is_success
        assert result.value.username == "tester"
        assert result.value.email == "tester@example.com"
        claims = auth_service.decode_jwt_token(result.value.token)
        assert claims["sub"] == str(test_user.id)

    @pytest.mark.asyncio
    async def test_unknown_user_and_wrong_password_look_the_same(self, dispatcher, test_user):
        unknown = await dispatcher.send(
            LoginCommand(LoginPayload(username="ghost", password=TEST_PASSWORD))
        )
        wrong = await dispatcher.send(
            LoginCommand(LoginPayload(username="tester", password="wrong-password"))
        )

        for result in (unknown, wrong):
            assert result.error.definition is ErrorDefinition.UNAUTHORIZED
            assert result.error.description == INVALID_CREDENTIALS
        assert unknown.error == wrong.error

    @pytest.mark.asyncio
    async def test_password_is_case_sensitive(self, dispatcher, test_user):
        result = await dispatcher.send(
            LoginCommand(LoginPayload(username="tester", password=TEST_PASSWORD.swapcase()))
        )
        assert result.error.definition is ErrorDefinition.UNAUTHORIZED

    @pytest.mark.asyncio
    async def test_missing_fields_fail_validation(self, dispatcher):
        result = await dispatcher.send(LoginCommand(LoginPayload(username=" ", password="")))

        assert result.error.definition is ErrorDefinition.VALIDATION
        assert set(result.error.properties) == {"username", "password"}
