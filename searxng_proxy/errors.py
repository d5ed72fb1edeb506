"""Error taxonomy. Each error renders as a JSON envelope at the Flask boundary."""

from typing import Optional


class ProxyError(Exception):
    status_code = 500

    def __init__(self, error: str, details: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(error)
        self.error = error
        self.details = details
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> dict:
        body = {"error": self.error}
        if self.details is not None:
            body["details"] = self.details
        return body


class ClientError(ProxyError):
    """Malformed or missing input. Never reaches upstream."""

    status_code = 400


class AuthError(ProxyError):
    status_code = 401

    def __init__(self):
        super().__init__("Unauthorized")


class UpstreamError(ProxyError):
    """Upstream answered with a non-2xx status; the status is passed through."""

    def __init__(self, status_code: int, reason: str):
        super().__init__(f"SearXNG returned status {status_code}", details=reason, status_code=status_code)


class InternalError(ProxyError):
    status_code = 500

    def __init__(self, details: str):
        super().__init__("Internal server error", details=details)
