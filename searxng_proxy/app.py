import logging

from flask import Blueprint, Flask, current_app, jsonify, request
from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from werkzeug.exceptions import HTTPException

from searxng_proxy.auth import require_bearer_token
from searxng_proxy.config import ProxyConfig
from searxng_proxy.errors import ProxyError
from searxng_proxy.forwarder import forward_search, parse_search_request

SERVICE_NAME = "searxng-proxy"

logger = logging.getLogger(SERVICE_NAME)

api = Blueprint("api", __name__)
probes = Blueprint("probes", __name__)


# ----------------------
# Rate Limiter
# ----------------------
def client_key_func():
    """Rate limit by the Cloudflare client IP if present, otherwise by remote address."""
    return request.headers.get("CF-Connecting-IP") or get_remote_address()


# ----------------------
# Endpoints
# ----------------------
def _status_body():
    return jsonify({"status": "ok", "service": SERVICE_NAME})


@api.route("/health", methods=["GET"])
@require_bearer_token
def health_check():
    return _status_body(), 200


@probes.route("/healthz", methods=["GET"])
def liveness_check():
    # Probes (e.g. Cloudflare Tunnel) can't send credentials
    return _status_body(), 200


@api.route("/search", methods=["GET"])
@require_bearer_token
def search_proxy():
    search = parse_search_request(request.args)
    return forward_search(current_app.config["PROXY_CONFIG"], search)


# ----------------------
# Error handlers
# ----------------------
def handle_proxy_error(e: ProxyError):
    return jsonify(e.to_dict()), e.status_code


def handle_http_exception(e: HTTPException):
    return jsonify({"error": e.name}), e.code


# ----------------------
# App Setup
# ----------------------
def create_app(config: ProxyConfig) -> Flask:
    app = Flask(__name__)
    app.config["PROXY_CONFIG"] = config
    # relayed JSON keeps the upstream key order
    app.json.sort_keys = False

    CORS(app, origins=list(config.allowed_origins))

    limiter = Limiter(
        key_func=client_key_func,
        app=app,
        default_limits=[config.rate_limit] if config.rate_limit else [],
        storage_uri="memory://",
        enabled=bool(config.rate_limit),
    )
    limiter.exempt(probes)
    app.extensions["searxng_proxy.limiter"] = limiter

    app.register_blueprint(api)
    app.register_blueprint(probes)

    app.register_error_handler(ProxyError, handle_proxy_error)
    app.register_error_handler(HTTPException, handle_http_exception)

    return app
