"""Search forwarding: validate the inbound query, rebuild the SearXNG URL,
make one upstream GET and relay what comes back."""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple
from urllib.parse import quote

import requests
from flask import Response, jsonify
from werkzeug.datastructures import MultiDict

from searxng_proxy.config import ProxyConfig
from searxng_proxy.errors import ClientError, InternalError, ProxyError, UpstreamError

logger = logging.getLogger("searxng-proxy.forwarder")

RESERVED_PARAMS = frozenset({"q", "format", "engines"})
DEFAULT_FORMAT = "json"
DEFAULT_TEXT_CONTENT_TYPE = "text/html; charset=utf-8"

# Characters encodeURIComponent leaves alone besides alphanumerics and "-_.~"
_URI_COMPONENT_SAFE = "!*'()"


@dataclass(frozen=True)
class SearchRequest:
    query: str
    format: str = DEFAULT_FORMAT
    engines: Optional[str] = None
    extra_params: List[Tuple[str, str]] = field(default_factory=list)


# ----------------------
# Helpers
# ----------------------
def encode_component(value: str) -> str:
    """Percent-encode a query component the way browsers' encodeURIComponent does."""
    return quote(value, safe=_URI_COMPONENT_SAFE)


def parse_search_request(args: MultiDict) -> SearchRequest:
    query = args.get("q")
    if not query or not query.strip():
        raise ClientError("Missing required parameter: q")

    extras = [
        (key, value)
        for key, value in args.items(multi=True)
        if key not in RESERVED_PARAMS and value
    ]
    return SearchRequest(
        query=query,
        format=args.get("format") or DEFAULT_FORMAT,
        engines=args.get("engines") or None,
        extra_params=extras,
    )


def build_upstream_url(base_url: str, search: SearchRequest) -> str:
    """Build `<base>/search?q=..&format=..`, then engines (raw), then the extras in order."""
    # format and engines go out as-is; q and the extras are encoded
    target_url = f"{base_url.rstrip('/')}/search?q={encode_component(search.query)}&format={search.format}"

    if search.engines:
        target_url += f"&{search.engines}"

    for key, value in search.extra_params:
        target_url += f"&{encode_component(key)}={encode_component(value)}"
    return target_url


# ----------------------
# Forwarding
# ----------------------
def forward_search(config: ProxyConfig, search: SearchRequest) -> Response:
    """Make the upstream call and relay its result.

    Non-2xx upstream statuses become an UpstreamError carrying the same
    status. Anything unexpected (connection failures, timeouts, bad JSON)
    becomes an InternalError.
    """
    try:
        target_url = build_upstream_url(config.searxng_url, search)
        logger.info("Proxying search request: %s", target_url)

        resp = requests.get(
            target_url,
            headers={"Accept": "application/json"},
            timeout=config.upstream_timeout,
        )

        if not 200 <= resp.status_code < 300:
            logger.warning("SearXNG returned status %s for %s", resp.status_code, target_url)
            raise UpstreamError(resp.status_code, resp.reason or "")

        if search.format == "json":
            return jsonify(resp.json())

        return Response(
            resp.content,
            status=200,
            content_type=resp.headers.get("Content-Type") or DEFAULT_TEXT_CONTENT_TYPE,
        )
    except ProxyError:
        raise
    except Exception as e:
        logger.exception("Proxy error: %s", e)
        raise InternalError(str(e))
