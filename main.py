import logging

from dotenv import load_dotenv

from searxng_proxy import ProxyConfig, create_app

# ----------------------
# Configuration
# ----------------------
load_dotenv()
config = ProxyConfig.from_env()

# Logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("searxng-proxy")

# ----------------------
# App Setup
# ----------------------
app = create_app(config)


def log_startup(config: ProxyConfig) -> None:
    logger.info("SearXNG Proxy listening on port %s", config.port)
    logger.info("SearXNG instance: %s", config.searxng_url)
    if config.auth_enabled:
        logger.info("Authentication: ENABLED")
    else:
        logger.warning("Authentication: DISABLED (WARNING!) - every authenticated route will return 401")
    if config.rate_limit:
        logger.info("Rate limit: %s", config.rate_limit)


if __name__ == "__main__":
    log_startup(config)
    app.run(host="0.0.0.0", port=config.port)
