"""HTTP Basic authentication for write endpoints."""

import logging
import secrets
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from .config import Settings, get_settings

logger = logging.getLogger(__name__)

basic_auth = HTTPBasic(auto_error=False)


def require_credentials(
    credentials: Optional[HTTPBasicCredentials] = Depends(basic_auth),
    settings: Settings = Depends(get_settings),
) -> Optional[str]:
    """Check Basic credentials against the configured user.

    Authentication is skipped when no user is configured.

    Returns:
        The authenticated username, or None when auth is disabled.
    """
    if not settings.auth_enabled:
        return None

    if credentials is not None:
        user_ok = secrets.compare_digest(
            credentials.username.encode(), settings.auth_username.encode()
        )
        password_ok = secrets.compare_digest(
            credentials.password.encode(), settings.auth_password.encode()
        )
        if user_ok and password_ok:
            return credentials.username

    logger.warning("Rejected request with missing or invalid credentials")
    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid credentials",
        headers={"WWW-Authenticate": "Basic"},
    )
