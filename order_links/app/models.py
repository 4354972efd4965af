"""Data models for order tracking lookups - platform-agnostic."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


@dataclass(frozen=True)
class RawTrackingInfo:
    """A single tracking entry as reported by the order-data provider."""

    number: Optional[str] = None
    company: Optional[str] = None
    url: Optional[str] = None


@dataclass(frozen=True)
class RawFulfillment:
    """A shipped portion of an order."""

    tracking_info: List[RawTrackingInfo] = field(default_factory=list)


@dataclass(frozen=True)
class RawOrder:
    """Order record returned by an order-data provider."""

    id: Optional[str]
    name: Optional[str]
    created_at: Optional[datetime] = None
    fulfillment_status: Optional[str] = None
    fulfillments: List[RawFulfillment] = field(default_factory=list)
    raw_data: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)


@dataclass(frozen=True)
class TrackingResult:
    """Resolved tracking links for one shipment.

    ``carrier`` is the label exactly as the provider sent it. Both URLs are
    only set when ``number`` is set.
    """

    number: Optional[str] = None
    carrier: Optional[str] = None
    carrier_url: Optional[str] = None
    universal_url: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON responses."""
        return {
            "number": self.number,
            "carrier": self.carrier,
            "carrierUrl": self.carrier_url,
            "universalUrl": self.universal_url,
        }


@dataclass(frozen=True)
class OrderSummary:
    """One order reduced to its first shipment's tracking links."""

    order_name: Optional[str]
    order_numeric_id: Optional[str]
    status: str
    created_at: Optional[datetime]
    tracking: TrackingResult

    @property
    def display_date(self) -> Optional[str]:
        """Creation date formatted like ``Mar 4, 2025``."""
        if not self.created_at:
            return None
        month = MONTH_ABBREVIATIONS[self.created_at.month - 1]
        return f"{month} {self.created_at.day}, {self.created_at.year}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON responses."""
        return {
            "orderName": self.order_name,
            "orderNumericId": self.order_numeric_id,
            "status": self.status,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "date": self.display_date,
            "tracking": self.tracking.to_dict(),
        }
