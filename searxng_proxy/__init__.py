from searxng_proxy.app import SERVICE_NAME, create_app
from searxng_proxy.config import ProxyConfig

__all__ = ["SERVICE_NAME", "ProxyConfig", "create_app"]
