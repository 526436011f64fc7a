"""Cricket data routes.

Cache-backed:   /api/home, /api/live, /api/upcoming, /api/series, /api/news
                (all projected from one cached homeList fetch)
Pass-through:   one route per row of services.endpoints.PROXY_ENDPOINTS
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from services.cache import LIVE_MATCHES, NEWS, SERIES_LIST, UPCOMING_MATCHES, AggregateCache
from services.endpoints import ProxyEndpoint
from services.proxy import PassThroughProxy

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


def get_cache(request: Request) -> AggregateCache:
    return request.app.state.cache


def get_proxy(request: Request) -> PassThroughProxy:
    return request.app.state.proxy


# ---------------------------------------------------------------------------
# Aggregate-backed resources
# ---------------------------------------------------------------------------

@router.get("/home")
async def home(cache: AggregateCache = Depends(get_cache)) -> dict:
    """Full aggregate document (cached)."""
    return await cache.get_aggregate()


@router.get("/live")
async def live_matches(cache: AggregateCache = Depends(get_cache)) -> dict:
    return {"data": await cache.project(LIVE_MATCHES)}


@router.get("/upcoming")
async def upcoming_matches(cache: AggregateCache = Depends(get_cache)) -> dict:
    return {"data": await cache.project(UPCOMING_MATCHES)}


@router.get("/series")
async def series_list(cache: AggregateCache = Depends(get_cache)) -> dict:
    return {"data": await cache.project(SERIES_LIST)}


@router.get("/news")
async def news(cache: AggregateCache = Depends(get_cache)) -> dict:
    return {"data": await cache.project(NEWS)}


# ---------------------------------------------------------------------------
# Pass-through resources
# ---------------------------------------------------------------------------

def _make_handler(endpoint: ProxyEndpoint):
    async def handler(request: Request, proxy: PassThroughProxy = Depends(get_proxy)):
        status_code, body = await proxy.forward(
            endpoint, request.path_params, request.query_params
        )
        return JSONResponse(body, status_code=status_code)

    handler.__name__ = f"proxy_{endpoint.name}"
    return handler


def build_proxy_router(endpoints: tuple[ProxyEndpoint, ...]) -> APIRouter:
    """One GET route per inbound path in the endpoint table."""
    proxy_router = APIRouter()
    for endpoint in endpoints:
        handler = _make_handler(endpoint)
        for path in endpoint.routes:
            proxy_router.add_api_route(
                path,
                handler,
                methods=["GET"],
                summary=endpoint.summary or None,
                name=f"{endpoint.name}:{path}",
            )
    return proxy_router
