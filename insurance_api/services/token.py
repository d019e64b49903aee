"""
JWT signing and verification
"""

import time
from functools import lru_cache
from typing import Any, Dict, Optional

import jwt

from insurance_api.core.config import config
from insurance_api.models.claims import TokenClaims


class TokenService:
    """Signs and verifies HMAC bearer tokens"""

    def __init__(self, secret: str, algorithm: str = "HS256", expires_in: int = 86400):
        self.secret = secret
        self.algorithm = algorithm
        self.expires_in = expires_in

    def sign(self, claims: Dict[str, Any], expires_in: Optional[int] = None) -> str:
        """
        Sign a claims payload

        Args:
            claims: Claims to embed, e.g. {"username": ..., "role": ..., "sub": ...}
            expires_in: Lifetime in seconds, defaults to the configured expiration

        Returns:
            Encoded JWT string
        """
        now = int(time.time())
        payload = dict(claims)
        payload["iat"] = now
        payload["exp"] = now + (expires_in if expires_in is not None else self.expires_in)
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def issue(self, username: str, role: str, sub: str, expires_in: Optional[int] = None) -> str:
        """Sign a standard {username, role, sub} token"""
        return self.sign({"username": username, "role": role, "sub": sub}, expires_in)

    def verify(self, token: str) -> TokenClaims:
        """
        Decode and validate a JWT token

        Raises:
            jwt.InvalidTokenError: signature, expiry or format is invalid
            pydantic.ValidationError: payload does not match TokenClaims
        """
        payload = jwt.decode(
            token,
            self.secret,
            algorithms=[self.algorithm],
            options={"require": ["exp"]},
        )
        return TokenClaims.model_validate(payload)


@lru_cache()
def get_token_service() -> TokenService:
    """Get the token service configured from the environment"""
    return TokenService(
        secret=config.jwt_secret,
        algorithm=config.jwt_algorithm,
        expires_in=config.jwt_expiration,
    )
