"""The order tracking links service."""

import logging
from typing import Any, Dict, Optional

import aiohttp
import voluptuous as vol
from aiohttp import web

from .app.api import OrderLookupAPI, email_payload, links_payload, lookup_payload
from .config import TrackerConfig
from .const import (
    ATTR_EMAIL,
    ATTR_ERROR,
    ATTR_ORDER_NAME,
    ATTR_ORDERS,
    ROUTE_HEALTH,
    ROUTE_LINKS,
    ROUTE_LOOKUP,
)
from .exceptions import InvalidInput, ProviderError
from .shopify.adapter import ShopifyAdapter, ShopifyBackend
from .shopify.client import ShopifyClient

_LOGGER = logging.getLogger(__name__)

API_KEY = web.AppKey("api", OrderLookupAPI)
CONFIG_KEY = web.AppKey("config", TrackerConfig)
SESSION_KEY = web.AppKey("session", aiohttp.ClientSession)

_OPTIONAL_STRING = vol.Any(None, str)

LINKS_REQUEST_SCHEMA = vol.Schema(
    {
        vol.Optional(ATTR_ORDER_NAME): _OPTIONAL_STRING,
        vol.Optional(ATTR_EMAIL): _OPTIONAL_STRING,
    },
    extra=vol.ALLOW_EXTRA,
)

LOOKUP_REQUEST_SCHEMA = vol.Schema(
    {vol.Optional(ATTR_EMAIL): _OPTIONAL_STRING},
    extra=vol.ALLOW_EXTRA,
)


def _json_error(message: str, status: int, **extra: Any) -> web.Response:
    return web.json_response({ATTR_ERROR: message, **extra}, status=status)


async def _read_body(request: web.Request, schema: vol.Schema) -> Dict[str, Any]:
    """Parse and validate a JSON request body."""
    try:
        payload = await request.json()
    except ValueError as err:
        raise InvalidInput("Request body must be JSON") from err
    if not isinstance(payload, dict):
        raise InvalidInput("Request body must be a JSON object")
    try:
        return schema(payload)
    except vol.Invalid as err:
        raise InvalidInput(f"Invalid request: {err}") from err


async def async_handle_links(request: web.Request) -> web.Response:
    """Resolve tracking links by order name, or list orders by email."""
    api = request.app[API_KEY]
    try:
        body = await _read_body(request, LINKS_REQUEST_SCHEMA)
        email = body.get(ATTR_EMAIL)
        order_name = body.get(ATTR_ORDER_NAME)

        if email and email.strip():
            summaries = await api.lookup_by_email(email)
            if not summaries:
                return _json_error("No orders found", 404, **{ATTR_ORDERS: []})
            return web.json_response(email_payload(email, summaries))

        if not order_name or not order_name.strip():
            return _json_error("orderName or email required", 400)

        summary = await api.lookup_by_order_name(order_name)
        if summary is None:
            return _json_error("Order not found", 404)
        return web.json_response(links_payload(summary))
    except InvalidInput as err:
        return _json_error(str(err), 400)
    except ProviderError as err:
        _LOGGER.error("Order lookup failed: %s", err)
        return _json_error(str(err), 500)


async def async_handle_lookup(request: web.Request) -> web.Response:
    """List a customer's orders with full tracking details."""
    api = request.app[API_KEY]
    try:
        body = await _read_body(request, LOOKUP_REQUEST_SCHEMA)
        email = body.get(ATTR_EMAIL)
        if not email or not email.strip():
            return _json_error("Email required", 400)

        summaries = await api.lookup_by_email(email)
        if not summaries:
            return _json_error("No orders found", 404, **{ATTR_ORDERS: []})
        return web.json_response(lookup_payload(email, summaries))
    except InvalidInput as err:
        return _json_error(str(err), 400)
    except ProviderError as err:
        _LOGGER.error("Email lookup failed: %s", err)
        return _json_error(str(err), 500)


async def async_handle_health(request: web.Request) -> web.Response:
    """Report liveness."""
    return web.json_response({"status": "ok", "mode": "Shopify-only"})


def _origin_allowed(origin: str, allowed: Any) -> bool:
    return bool(origin) and any(fragment in origin for fragment in allowed)


@web.middleware
async def cors_middleware(request: web.Request, handler) -> web.StreamResponse:
    """Echo allowed origins and answer preflight requests."""
    origin = request.headers.get("Origin", "")
    allowed = request.app[CONFIG_KEY].cors_allowed_origins

    if request.method == "OPTIONS":
        response: web.StreamResponse = web.Response(status=200)
    else:
        try:
            response = await handler(request)
        except web.HTTPException as err:
            # 404/405 raised by the router
            _add_cors_headers(err, origin, allowed)
            raise

    _add_cors_headers(response, origin, allowed)
    return response


def _add_cors_headers(response: web.StreamResponse, origin: str, allowed: Any) -> None:
    if _origin_allowed(origin, allowed):
        response.headers["Access-Control-Allow-Origin"] = origin
        response.headers["Access-Control-Allow-Headers"] = "Content-Type"
        response.headers["Access-Control-Allow-Methods"] = "POST, GET, OPTIONS"


async def _async_open_session(app: web.Application) -> None:
    """Create the shared outbound session and wire the lookup layers."""
    config = app[CONFIG_KEY]
    session = aiohttp.ClientSession()
    app[SESSION_KEY] = session

    # Initialize Shopify layers
    client = ShopifyClient(
        config.store_domain,
        config.access_token,
        session=session,
        api_version=config.api_version,
        request_timeout=config.request_timeout,
    )
    app[API_KEY] = OrderLookupAPI(ShopifyBackend(client, ShopifyAdapter()))
    _LOGGER.info("Order lookups use Shopify store %s", config.store_domain or "<unset>")


async def _async_close_session(app: web.Application) -> None:
    await app[SESSION_KEY].close()


def create_app(
    config: TrackerConfig, api: Optional[OrderLookupAPI] = None
) -> web.Application:
    """Build the web application.

    Args:
        config: Validated service settings
        api: Optional pre-built lookup API; when omitted a Shopify-backed one
            is created on startup

    Returns:
        aiohttp application serving the lookup routes
    """
    app = web.Application(middlewares=[cors_middleware])
    app[CONFIG_KEY] = config
    if api is not None:
        app[API_KEY] = api
    else:
        app.on_startup.append(_async_open_session)
        app.on_cleanup.append(_async_close_session)

    app.router.add_post(ROUTE_LINKS, async_handle_links)
    app.router.add_post(ROUTE_LOOKUP, async_handle_lookup)
    app.router.add_get(ROUTE_HEALTH, async_handle_health)
    return app
