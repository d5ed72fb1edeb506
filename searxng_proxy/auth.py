import enum
import hmac
import logging
from functools import wraps
from typing import Optional

from flask import current_app, request

from searxng_proxy.errors import AuthError

logger = logging.getLogger("searxng-proxy.auth")

BEARER_PREFIX = "Bearer "


class AuthDecision(enum.Enum):
    AUTHORIZED = "authorized"
    UNAUTHORIZED = "unauthorized"


def check_authorization(header_value: Optional[str], secret: Optional[str]) -> AuthDecision:
    """Accept only an exact `Bearer <secret>` header.

    With no secret configured nothing is authorized.
    """
    if not secret or not header_value:
        return AuthDecision.UNAUTHORIZED

    expected = f"{BEARER_PREFIX}{secret}"
    if hmac.compare_digest(header_value.encode("utf-8"), expected.encode("utf-8")):
        return AuthDecision.AUTHORIZED
    return AuthDecision.UNAUTHORIZED


def require_bearer_token(view):
    """Reject the request with 401 unless it carries the configured bearer token."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        config = current_app.config["PROXY_CONFIG"]
        decision = check_authorization(request.headers.get("Authorization"), config.api_key)
        if decision is not AuthDecision.AUTHORIZED:
            logger.debug("Rejected unauthorized request to %s", request.path)
            raise AuthError()
        return view(*args, **kwargs)

    return wrapper
