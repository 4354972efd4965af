"""Turn a fulfillment's tracking entry into tracking links."""

import logging
from typing import Optional, Sequence

from .carriers import (
    build_carrier_url,
    build_universal_url,
    identify_by_label,
    identify_by_tracking_number_shape,
)
from .models import RawFulfillment, TrackingResult

_LOGGER = logging.getLogger(__name__)


def resolve_tracking(
    tracking_number: Optional[str], carrier_label: Optional[str]
) -> TrackingResult:
    """Resolve a tracking number and carrier label into a TrackingResult.

    The label is tried first; the tracking number's shape is only consulted
    when the label is missing, unrecognised or has no URL template.

    Args:
        tracking_number: Tracking number from the fulfillment, if any
        carrier_label: Carrier name as the provider reported it, if any

    Returns:
        TrackingResult carrying the label unmodified
    """
    if not tracking_number:
        return TrackingResult(carrier=carrier_label)

    carrier_url = build_carrier_url(identify_by_label(carrier_label), tracking_number)
    if carrier_url is None:
        guessed = identify_by_tracking_number_shape(tracking_number)
        carrier_url = build_carrier_url(guessed, tracking_number)
        _LOGGER.debug(
            "Carrier label %r unresolved for %s, shape guess: %s",
            carrier_label,
            tracking_number,
            guessed.value,
        )

    return TrackingResult(
        number=tracking_number,
        carrier=carrier_label,
        carrier_url=carrier_url,
        universal_url=build_universal_url(tracking_number),
    )


def resolve_fulfillments(fulfillments: Sequence[RawFulfillment]) -> TrackingResult:
    """Resolve the first tracking entry of the first fulfillment.

    Orders with several fulfillments or several tracking entries are reduced
    to that single entry.
    """
    if not fulfillments or not fulfillments[0].tracking_info:
        return TrackingResult()
    info = fulfillments[0].tracking_info[0]
    return resolve_tracking(info.number, info.company)
