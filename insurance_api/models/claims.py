"""
Token claims model for authorization
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, StrictStr


class TokenClaims(BaseModel):
    """Claims decoded from a verified bearer token"""

    model_config = ConfigDict(extra="ignore")

    username: Optional[StrictStr] = None
    role: Optional[StrictStr] = None
    sub: Optional[StrictStr] = None
    exp: Optional[int] = None
    iat: Optional[int] = None

    def has_role(self, role: str) -> bool:
        """Check if the token carries the given role"""
        return self.role is not None and self.role == role
