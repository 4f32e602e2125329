"""HTTP Basic authentication for the admin routes.

The check itself is an injected predicate stored on ``app.state`` at
startup; this module only extracts credentials and answers 401.
"""

from __future__ import annotations

import logging
import secrets
from typing import Callable

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from mdcms.utils.logging import log_event

Authorizer = Callable[[str, str], bool]

REALM = "Restricted"

logger = logging.getLogger("mdcms.web.auth")
security = HTTPBasic(realm=REALM, auto_error=False)


def credentials_checker(username: str, password: str | None) -> Authorizer:
    """Build a predicate comparing against fixed credentials.

    With no password configured the predicate refuses everyone.
    """

    def is_authorized(candidate_user: str, candidate_password: str) -> bool:
        if password is None:
            return False
        user_ok = secrets.compare_digest(candidate_user.encode("utf-8"), username.encode("utf-8"))
        password_ok = secrets.compare_digest(
            candidate_password.encode("utf-8"), password.encode("utf-8")
        )
        return user_ok and password_ok

    return is_authorized


def require_admin(
    request: Request,
    credentials: HTTPBasicCredentials | None = Depends(security),
) -> str:
    """FastAPI dependency guarding the admin router.

    Returns:
        The authenticated username
    """
    is_authorized: Authorizer = request.app.state.is_authorized
    if credentials is None or not is_authorized(credentials.username, credentials.password):
        log_event(logger, "admin_auth_failed", level=logging.WARNING, path=request.url.path)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": f'Basic realm="{REALM}"'},
        )
    log_event(logger, "admin_authenticated", user=credentials.username, path=request.url.path)
    return credentials.username
