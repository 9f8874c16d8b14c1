"""
Employee API — Authentication Service
=======================================

What:  Password hashing/verification and JWT issuance/decoding.
How:   Argon2id (argon2-cffi) for passwords, HS256 (PyJWT) for tokens.
Who:   LoginCommandHandler (verify + issue), the bearer dependency in
       security.py (decode), the seeder (hash).

Password Hashing:
    hash_password() runs Argon2id with the cost parameters of the configured
    PasswordHasher and a salt taken from PASSWORD_SALT. Equal passwords hash
    to equal strings, which is what lets the seeder compare stored hashes.
    verify_password() reads the parameters back from the encoded string, so
    hashes produced with other parameters still verify.

    $argon2id$v=19$m=65536,t=3,p=4$<salt b64>$<hash b64>

Token Contract:
    sub          user id
    unique_name  username
    email        user email
    jti          random UUID per token
    iss / aud    JWT_ISSUER / JWT_AUDIENCE
    exp          clock.utc_now + JWT_EXPIRATION_MINUTES
"""

import logging
import uuid
from datetime import timedelta
from typing import Any, Dict, Optional

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError
from argon2.low_level import hash_secret

from employee_api.clock import Clock, system_clock
from employee_api.config import Settings, settings
from employee_api.exceptions import ConfigurationError, UnauthorizedError
from employee_api.models.user import User

logger = logging.getLogger(__name__)

JWT_ALGORITHM = "HS256"


class AuthService:
    """
    Stateless apart from its collaborators; one instance serves every request.

    Args:
        clock:           Time source for `exp` (tests pin it)
        config:          Settings carrying the JWT and salt options
        password_hasher: Argon2 parameters; tests pass a cheap one
    """

    def __init__(
        self,
        clock: Clock = system_clock,
        config: Optional[Settings] = None,
        password_hasher: Optional[PasswordHasher] = None,
    ):
        self.clock = clock
        self.config = config or settings
        self.password_hasher = password_hasher or PasswordHasher()

    # ── Passwords ─────────────────────────────────────────────────────────

    def hash_password(self, password: str) -> str:
        hasher = self.password_hasher
        encoded = hash_secret(
            password.encode("utf-8"),
            self.config.password_salt.encode("utf-8"),
            time_cost=hasher.time_cost,
            memory_cost=hasher.memory_cost,
            parallelism=hasher.parallelism,
            hash_len=hasher.hash_len,
            type=hasher.type,
        )
        return encoded.decode("ascii")

    def verify_password(self, password: str, password_hash: str) -> bool:
        """True only when `password` matches exactly (case-sensitive)."""
        try:
            return self.password_hasher.verify(password_hash, password)
        except (VerificationError, InvalidHashError):
            return False

    # ── Tokens ────────────────────────────────────────────────────────────

    def _secret(self) -> str:
        secret = self.config.jwt_secret_key
        if not secret:
            raise ConfigurationError(
                message="JWT secret key is not configured",
                setting="JWT_SECRET_KEY",
            )
        return secret

    def generate_jwt_token(self, user: User) -> str:
        """
        Issues a signed access token for `user`.

        Raises:
            ConfigurationError: JWT_SECRET_KEY is unset
        """
        expires_at = self.clock.utc_now + timedelta(minutes=self.config.jwt_expiration_minutes)
        claims = {
            "sub": str(user.id),
            "unique_name": user.username,
            "email": user.email,
            "jti": str(uuid.uuid4()),
            "iss": self.config.jwt_issuer,
            "aud": self.config.jwt_audience,
            "exp": expires_at,
        }
        token = jwt.encode(claims, self._secret(), algorithm=JWT_ALGORITHM)
        logger.debug("Issued token for user %s, expires %s", user.username, expires_at)
        return token

    def decode_jwt_token(self, token: str) -> Dict[str, Any]:
        """
        Validates signature, expiry, issuer and audience.

        Raises:
            UnauthorizedError: the token is rejected for any reason
            ConfigurationError: JWT_SECRET_KEY is unset
        """
        try:
            return jwt.decode(
                token,
                self._secret(),
                algorithms=[JWT_ALGORITHM],
                audience=self.config.jwt_audience,
                issuer=self.config.jwt_issuer,
                options={"require": ["exp", "sub"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise UnauthorizedError("Token has expired.") from e
        except jwt.InvalidTokenError as e:
            logger.info("Rejected bearer token: %s", e)
            raise UnauthorizedError("Invalid bearer token.") from e


# Singleton instance
auth_service = AuthService()
