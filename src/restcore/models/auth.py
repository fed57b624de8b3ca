"""Module defining the TokenData model for authentication tokens."""

from typing import Optional

from pydantic import BaseModel, ConfigDict


class TokenData(BaseModel):
    """Pydantic model for a token endpoint response."""

    model_config = ConfigDict(extra="allow")

    access_token: str
    refresh_token: Optional[str] = None
    expires_in: Optional[int] = None
    expiration: Optional[int] = None
    token_type: Optional[str] = None
    scope: Optional[str] = None
