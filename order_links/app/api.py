"""Platform-agnostic API for order tracking lookups."""

import logging
from typing import Any, Dict, List, Optional, Sequence

from ..const import (
    ATTR_CARRIER_URL,
    ATTR_CREATED_AT,
    ATTR_EMAIL,
    ATTR_LATEST_ORDER,
    ATTR_ORDER_COUNT,
    ATTR_ORDER_NAME,
    ATTR_ORDER_NUMERIC_ID,
    ATTR_ORDERS,
    ATTR_TRACKING_NUMBER,
    ATTR_UNIVERSAL_URL,
    EMAIL_LOOKUP_LIMIT,
    ORDER_NAME_MARKER,
    STATUS_UNFULFILLED,
)
from ..exceptions import InvalidInput
from .models import OrderSummary, RawOrder
from .resolver import resolve_fulfillments

_LOGGER = logging.getLogger(__name__)


def normalize_order_name(order_name: Optional[str]) -> str:
    """Return the order name with exactly one leading ``#``.

    Raises:
        InvalidInput: If nothing is left after trimming
    """
    name = (order_name or "").strip().lstrip(ORDER_NAME_MARKER).strip()
    if not name:
        raise InvalidInput("orderName is required")
    return f"{ORDER_NAME_MARKER}{name}"


def normalize_email(email: Optional[str]) -> str:
    """Return the email trimmed and lower-cased.

    Raises:
        InvalidInput: If the email is blank
    """
    normalized = (email or "").strip().lower()
    if not normalized:
        raise InvalidInput("email is required")
    return normalized


def numeric_id(composite_id: Optional[str]) -> Optional[str]:
    """Extract the trailing segment of a ``gid://shopify/Order/123`` style id."""
    if not composite_id:
        return None
    return composite_id.rstrip("/").split("/")[-1] or None


def summarize_order(order: RawOrder) -> OrderSummary:
    """Reduce a raw provider order to an OrderSummary."""
    return OrderSummary(
        order_name=order.name,
        order_numeric_id=numeric_id(order.id),
        status=order.fulfillment_status or STATUS_UNFULFILLED,
        created_at=order.created_at,
        tracking=resolve_fulfillments(order.fulfillments),
    )


class OrderLookupAPI:
    """Platform-agnostic API for looking up order tracking links."""

    def __init__(self, backend):
        """Initialize with a backend implementation.

        Args:
            backend: Order-data provider exposing find_order_by_name and
                find_orders_by_email coroutines
        """
        self._backend = backend

    async def lookup_by_order_name(self, order_name: str) -> Optional[OrderSummary]:
        """Look up a single order by its display name.

        Args:
            order_name: Order name with or without the leading ``#``

        Returns:
            OrderSummary, or None if the provider has no such order

        Raises:
            InvalidInput: If the order name is blank
            ProviderError: If the provider query fails
        """
        name = normalize_order_name(order_name)
        order = await self._backend.find_order_by_name(name)
        if order is None:
            _LOGGER.info("Order %s not found", name)
            return None
        return summarize_order(order)

    async def lookup_by_email(self, email: str) -> List[OrderSummary]:
        """Look up a customer's most recent orders, newest first.

        Args:
            email: Customer email address

        Returns:
            Up to EMAIL_LOOKUP_LIMIT summaries in provider order; empty if none

        Raises:
            InvalidInput: If the email is blank
            ProviderError: If the provider query fails
        """
        normalized = normalize_email(email)
        orders = await self._backend.find_orders_by_email(
            normalized, limit=EMAIL_LOOKUP_LIMIT, newest_first=True
        )
        _LOGGER.info("Found %d orders for %s", len(orders), normalized)
        return [summarize_order(order) for order in orders]


def links_payload(summary: OrderSummary) -> Dict[str, Any]:
    """Shape a single order for the links endpoint."""
    return {
        ATTR_ORDER_NUMERIC_ID: summary.order_numeric_id,
        ATTR_TRACKING_NUMBER: summary.tracking.number,
        ATTR_CARRIER_URL: summary.tracking.carrier_url,
        ATTR_UNIVERSAL_URL: summary.tracking.universal_url,
    }


def _order_entry(summary: OrderSummary) -> Dict[str, Any]:
    return {
        ATTR_ORDER_NAME: summary.order_name,
        ATTR_ORDER_NUMERIC_ID: summary.order_numeric_id,
        ATTR_TRACKING_NUMBER: summary.tracking.number,
        ATTR_CREATED_AT: summary.display_date,
    }


def email_payload(email: str, summaries: Sequence[OrderSummary]) -> Dict[str, Any]:
    """Shape an email lookup for the links endpoint."""
    orders = [_order_entry(summary) for summary in summaries]
    return {
        ATTR_EMAIL: normalize_email(email),
        ATTR_ORDERS: orders,
        ATTR_LATEST_ORDER: orders[0] if orders else None,
    }


def lookup_payload(email: str, summaries: Sequence[OrderSummary]) -> Dict[str, Any]:
    """Shape an email lookup with full tracking details per order."""
    return {
        ATTR_EMAIL: normalize_email(email),
        ATTR_ORDER_COUNT: len(summaries),
        ATTR_ORDERS: [summary.to_dict() for summary in summaries],
    }
