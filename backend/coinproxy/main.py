"""coinproxy: API-key shielding proxy for blockchain and price data."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from coinproxy import config
from coinproxy.cache import FreshnessCache
from coinproxy.cors import ALLOW_ORIGIN_HEADERS
from coinproxy.env_utils import get_env, get_first_env
from coinproxy.errors import ProxyError
from coinproxy.log_redact import install_log_redaction
from coinproxy.routers.proxy import router as proxy_router
from coinproxy.routers.top_coins import router as top_coins_router
from coinproxy.upstream import UpstreamClient

# --- Logging ---
logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%S",
)
install_log_redaction()
logger = logging.getLogger("coinproxy.api")


def _log_startup_env_warnings() -> None:
    if not get_env(config.COVALENT_API_KEY_ENV):
        logger.warning("%s is not set; balance and transaction lookups will fail.", config.COVALENT_API_KEY_ENV)
    if not get_env(config.BSCSCAN_API_KEY_ENV):
        logger.warning("%s is not set; transaction history lookups will fail.", config.BSCSCAN_API_KEY_ENV)
    if not get_first_env(*config.LIVECOINWATCH_API_KEY_ENVS):
        logger.warning(
            "%s is not set; top coins and price lookups will fail.",
            config.LIVECOINWATCH_API_KEY_ENVS[0],
        )


@asynccontextmanager
async def _lifespan(_: FastAPI):
    _log_startup_env_warnings()
    logger.info(
        "coinproxy started top_coins_freshness_s=%.0f request_timeout_s=%.1f",
        config.TOP_COINS_FRESHNESS_SECONDS,
        config.REQUEST_TIMEOUT_SECONDS,
    )
    yield


# --- App ---
app = FastAPI(
    title="coinproxy",
    version="1.0.0",
    docs_url=None,
    redoc_url=None,
    openapi_url=None,
    lifespan=_lifespan,
)
app.state.top_coins_cache = FreshnessCache(config.TOP_COINS_FRESHNESS_SECONDS)
app.state.upstream_client = UpstreamClient(timeout=config.REQUEST_TIMEOUT_SECONDS)

app.include_router(top_coins_router)
app.include_router(proxy_router)


@app.exception_handler(ProxyError)
async def _proxy_error_handler(request: Request, exc: ProxyError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed kind=%s: %s", request.method, request.url.path, exc.kind.value, exc.detail)
    else:
        logger.warning("%s %s rejected kind=%s: %s", request.method, request.url.path, exc.kind.value, exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message},
        headers=ALLOW_ORIGIN_HEADERS,
    )


@app.get("/healthz")
async def healthz():
    return {"status": "ok"}
