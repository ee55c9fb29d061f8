"""
Response shapes for the cloud authentication endpoints.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class AuthToken(BaseModel):
    """The ``authToken`` object returned by login and authorization calls."""
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    token: str = Field(..., min_length=1)
    valid_seconds: Optional[int] = Field(default=None, alias="validSeconds")


class AuthTokenEnvelope(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    auth_token: AuthToken = Field(..., alias="authToken")


@dataclass
class DirectorToken:
    """Bearer credential scoped to one controller. Never cached here."""
    token: str
    valid_seconds: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "directorToken": self.token,
            "validSeconds": self.valid_seconds,
        }
