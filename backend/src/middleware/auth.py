"""HTTP Basic auth gate: every non-exempt request must carry ADMIN_USER / ADMIN_PASSWORD."""
import base64
import binascii
import logging
import secrets

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

logger = logging.getLogger(__name__)

AUTH_EXEMPT_PATHS = {"/health", "/metrics", "/favicon.ico"}
BASIC_REALM = "Application"


def extract_basic_credentials(request: Request) -> tuple[str, str] | None:
    """Return (username, password) from an Authorization: Basic header, or None if absent/malformed."""
    auth = request.headers.get("Authorization")
    if not auth:
        return None
    scheme, _, encoded = auth.partition(" ")
    if scheme.lower() != "basic" or not encoded:
        return None
    try:
        decoded = base64.b64decode(encoded.strip(), validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return None
    username, sep, password = decoded.partition(":")
    if not sep:
        return None
    return username, password


def credentials_match(username: str, password: str, admin_user: str, admin_password: str) -> bool:
    # Both fields are always compared
    user_ok = secrets.compare_digest(username.encode("utf-8"), admin_user.encode("utf-8"))
    password_ok = secrets.compare_digest(password.encode("utf-8"), admin_password.encode("utf-8"))
    return user_ok & password_ok


def _unauthorized() -> JSONResponse:
    return JSONResponse(
        status_code=401,
        content={"detail": "HTTP Basic: Access denied."},
        headers={"WWW-Authenticate": f'Basic realm="{BASIC_REALM}"'},
    )


class BasicAuthMiddleware(BaseHTTPMiddleware):
    """Reject requests without valid Basic credentials (except exempt paths).

    When either credential is unset every protected request is rejected.
    """

    def __init__(self, app, admin_user: str, admin_password: str):
        super().__init__(app)
        self.admin_user = admin_user or ""
        self.admin_password = admin_password or ""

    async def dispatch(self, request: Request, call_next):
        if request.url.path in AUTH_EXEMPT_PATHS:
            return await call_next(request)
        if not self.admin_user or not self.admin_password:
            logger.error("ADMIN_USER or ADMIN_PASSWORD environment variables are not set")
            return _unauthorized()
        credentials = extract_basic_credentials(request)
        if credentials is None or not credentials_match(*credentials, self.admin_user, self.admin_password):
            logger.warning("telemetry auth_failed path=%s", request.url.path)
            return _unauthorized()
        return await call_next(request)
