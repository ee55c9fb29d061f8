"""
Basic-auth gate for the whole relay.
"""

import secrets
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from ..config import get_config

_basic = HTTPBasic(auto_error=False)


def require_basic_auth(
    credentials: Optional[HTTPBasicCredentials] = Depends(_basic),
) -> None:
    """Reject the request unless basic credentials match. No-op when no password is set."""
    config = get_config()
    if not config.auth_enabled:
        return

    if credentials is not None:
        user_ok = secrets.compare_digest(
            credentials.username.encode("utf-8"), config.auth_username.encode("utf-8")
        )
        pass_ok = secrets.compare_digest(
            credentials.password.encode("utf-8"), config.auth_password.encode("utf-8")
        )
        if user_ok and pass_ok:
            return

    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Authentication required",
        headers={"WWW-Authenticate": 'Basic realm="Director Relay"'},
    )
