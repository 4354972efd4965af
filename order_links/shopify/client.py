"""Shopify client - Direct GraphQL communication with the Shopify Admin API."""

import asyncio
import logging
from typing import Any, Dict, List, Optional

import aiohttp

from ..const import (
    DEFAULT_REQUEST_TIMEOUT,
    SHOPIFY_ACCESS_TOKEN_HEADER,
    SHOPIFY_DEFAULT_API_VERSION,
    SHOPIFY_GRAPHQL_ENDPOINT,
)
from ..exceptions import ProviderError

_LOGGER = logging.getLogger(__name__)

ORDER_FIELDS = """
            id
            name
            createdAt
            displayFulfillmentStatus
            fulfillments {
              trackingInfo { number company url }
            }
"""

ORDER_BY_NAME_QUERY = """
    query($search: String!) {
      orders(first: 1, query: $search) {
        edges {
          node {%s          }
        }
      }
    }
""" % ORDER_FIELDS

ORDERS_BY_EMAIL_QUERY = """
    query($search: String!, $first: Int!, $reverse: Boolean!) {
      orders(first: $first, query: $search, sortKey: CREATED_AT, reverse: $reverse) {
        edges {
          node {%s          }
        }
      }
    }
""" % ORDER_FIELDS


class ShopifyClient:
    """Client for the Shopify Admin GraphQL API."""

    def __init__(
        self,
        store_domain: Optional[str],
        access_token: Optional[str],
        session: Optional[aiohttp.ClientSession] = None,
        api_version: str = SHOPIFY_DEFAULT_API_VERSION,
        request_timeout: float = DEFAULT_REQUEST_TIMEOUT,
        base_url: Optional[str] = None,
    ):
        """Initialize Shopify client.

        Args:
            store_domain: Shop domain, e.g. ``example.myshopify.com``
            access_token: Admin API access token
            session: Optional aiohttp session (a temporary one is used per request otherwise)
            api_version: Admin API version segment
            request_timeout: Total timeout for one request, in seconds
            base_url: Override for ``https://{store_domain}``
        """
        self._store_domain = store_domain
        self._access_token = access_token
        self._session = session
        self._api_version = api_version
        self._base_url = base_url or (f"https://{store_domain}" if store_domain else None)
        self._timeout = aiohttp.ClientTimeout(total=request_timeout)

    @property
    def graphql_url(self) -> str:
        """Full URL of the GraphQL endpoint."""
        return f"{self._base_url}{SHOPIFY_GRAPHQL_ENDPOINT.format(api_version=self._api_version)}"

    async def _request(self, query: str, variables: Dict[str, Any]) -> Dict[str, Any]:
        """Run a GraphQL query and return its ``data`` object.

        Raises:
            ProviderError: On missing credentials, HTTP or transport errors,
                timeouts, or errors reported by the API
        """
        if not self._store_domain or not self._access_token:
            raise ProviderError("Missing Shopify credentials")

        headers = {
            SHOPIFY_ACCESS_TOKEN_HEADER: self._access_token,
            "Content-Type": "application/json",
        }
        payload = {"query": query, "variables": variables}

        # Use provided session or create a temporary one
        use_temporary_session = self._session is None
        session = self._session or aiohttp.ClientSession()

        try:
            async with session.post(
                self.graphql_url,
                headers=headers,
                json=payload,
                timeout=self._timeout,
            ) as response:
                if response.status >= 400:
                    body = await response.text()
                    _LOGGER.error(
                        "Shopify request failed with HTTP %d: %s", response.status, body
                    )
                    raise ProviderError(
                        f"Shopify request failed with HTTP {response.status}",
                        status=response.status,
                    )
                result = await response.json(content_type=None)
        except asyncio.TimeoutError as err:
            _LOGGER.error("Shopify request timed out after %s seconds", self._timeout.total)
            raise ProviderError("Shopify request timed out") from err
        except aiohttp.ClientError as err:
            _LOGGER.error("Shopify request failed: %s", err)
            raise ProviderError(f"Shopify request failed: {err}") from err
        except ValueError as err:
            _LOGGER.error("Shopify returned an undecodable response: %s", err)
            raise ProviderError("Shopify returned an invalid response") from err
        finally:
            # Only close session if we created it (not if it was provided)
            if use_temporary_session:
                await session.close()

        if not isinstance(result, dict):
            raise ProviderError("Shopify returned an invalid response")
        if result.get("errors"):
            _LOGGER.error("Shopify query error: %s", result["errors"])
            raise ProviderError("Shopify error", errors=result["errors"])

        return result.get("data") or {}

    @staticmethod
    def _order_nodes(data: Dict[str, Any]) -> List[Dict[str, Any]]:
        edges = (data.get("orders") or {}).get("edges") or []
        return [edge["node"] for edge in edges if edge and edge.get("node")]

    async def find_order_by_name(self, order_name: str) -> Optional[Dict[str, Any]]:
        """Find an order by its display name.

        Args:
            order_name: Order name including the leading ``#``

        Returns:
            Raw order node if found, None otherwise
        """
        data = await self._request(ORDER_BY_NAME_QUERY, {"search": f"name:{order_name}"})
        nodes = self._order_nodes(data)
        return nodes[0] if nodes else None

    async def find_orders_by_email(
        self, email: str, limit: int, newest_first: bool = True
    ) -> List[Dict[str, Any]]:
        """Find a customer's orders sorted by creation date.

        Args:
            email: Customer email address
            limit: Maximum number of orders to return
            newest_first: Sort newest orders first

        Returns:
            List of raw order nodes (may be empty)
        """
        data = await self._request(
            ORDERS_BY_EMAIL_QUERY,
            {"search": f"email:{email}", "first": limit, "reverse": newest_first},
        )
        return self._order_nodes(data)
