"""
Domain models for the persisted credential pair.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class CredentialPair(BaseModel):
    """Access token plus the refresh token used to renew it."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    access_token: str = Field(..., alias="accessToken")
    refresh_token: str = Field(..., alias="refreshToken")

    def to_json(self) -> str:
        """Serialize using the storage field names."""
        return self.model_dump_json(by_alias=True)


__all__ = ["CredentialPair"]
