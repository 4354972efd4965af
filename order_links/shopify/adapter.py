"""Shopify response adapter - Converts GraphQL order nodes to RawOrder models."""

import logging
from datetime import datetime
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from ..app.models import RawFulfillment, RawOrder, RawTrackingInfo

if TYPE_CHECKING:
    from .client import ShopifyClient

_LOGGER = logging.getLogger(__name__)


class ShopifyAdapter:
    """Adapter for converting Shopify order nodes to RawOrder models."""

    @staticmethod
    def _parse_datetime(date_str: Optional[str]) -> Optional[datetime]:
        """Parse an ISO 8601 timestamp as sent by Shopify."""
        if not date_str:
            return None
        try:
            return datetime.fromisoformat(date_str.replace("Z", "+00:00"))
        except (ValueError, AttributeError):
            _LOGGER.warning("Failed to parse datetime: %s", date_str)
            return None

    @staticmethod
    def _parse_tracking_info(entries: Optional[List[Dict[str, Any]]]) -> List[RawTrackingInfo]:
        return [
            RawTrackingInfo(
                number=entry.get("number") or None,
                company=entry.get("company") or None,
                url=entry.get("url") or None,
            )
            for entry in entries or []
            if isinstance(entry, dict)
        ]

    @staticmethod
    def _parse_fulfillments(fulfillments: Optional[List[Dict[str, Any]]]) -> List[RawFulfillment]:
        return [
            RawFulfillment(
                tracking_info=ShopifyAdapter._parse_tracking_info(fulfillment.get("trackingInfo"))
            )
            for fulfillment in fulfillments or []
            if isinstance(fulfillment, dict)
        ]

    @staticmethod
    def to_raw_order(node: Dict[str, Any]) -> RawOrder:
        """Convert a Shopify order node to a RawOrder.

        Args:
            node: ``orders.edges[].node`` from the Admin GraphQL API

        Returns:
            RawOrder model
        """
        return RawOrder(
            id=node.get("id"),
            name=node.get("name"),
            created_at=ShopifyAdapter._parse_datetime(node.get("createdAt")),
            fulfillment_status=node.get("displayFulfillmentStatus"),
            fulfillments=ShopifyAdapter._parse_fulfillments(node.get("fulfillments")),
            raw_data=node,
        )


class ShopifyBackend:
    """Order-data provider that the lookup API uses."""

    def __init__(self, client: "ShopifyClient", adapter: ShopifyAdapter):
        """Initialize backend with client and adapter.

        Args:
            client: ShopifyClient instance
            adapter: ShopifyAdapter instance
        """
        self._client = client
        self._adapter = adapter

    async def find_order_by_name(self, order_name: str) -> Optional[RawOrder]:
        """Find one order by name."""
        node = await self._client.find_order_by_name(order_name)
        if node is None:
            return None
        return self._adapter.to_raw_order(node)

    async def find_orders_by_email(
        self, email: str, limit: int, newest_first: bool = True
    ) -> List[RawOrder]:
        """Find a customer's orders, keeping Shopify's ordering."""
        nodes = await self._client.find_orders_by_email(email, limit, newest_first)
        return [self._adapter.to_raw_order(node) for node in nodes]
