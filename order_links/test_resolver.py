"""Tests for tracking resolution."""

from order_links.app.models import RawFulfillment, RawTrackingInfo, TrackingResult
from order_links.app.resolver import resolve_fulfillments, resolve_tracking


class TestResolveTracking:
    """Tests for resolve_tracking"""

    def test_label_takes_priority(self):
        # Label says FedEx even though the number looks like UPS
        result = resolve_tracking("1Z999AA10123456784", "FedEx")
        assert result.carrier_url == "https://www.fedex.com/fedextrack/?trknbr=1Z999AA10123456784"

    def test_shape_fallback_without_label(self):
        result = resolve_tracking("1Z999AA10123456784", None)
        assert result.carrier_url == "https://www.ups.com/track?loc=en_US&tracknum=1Z999AA10123456784"
        assert result.carrier is None

    def test_shape_fallback_for_unrecognised_label(self):
        result = resolve_tracking("9400111899223817476923", "Some Local Courier")
        assert result.carrier_url.startswith("https://tools.usps.com/")
        assert result.carrier == "Some Local Courier"

    def test_no_carrier_match_keeps_universal_url(self):
        result = resolve_tracking("XYZ-123", "Local Courier")
        assert result.carrier_url is None
        assert result.universal_url == "https://parcelsapp.com/en/tracking/XYZ-123"
        assert result.number == "XYZ-123"

    def test_absent_number_builds_no_urls(self):
        result = resolve_tracking(None, "UPS")
        assert result == TrackingResult(carrier="UPS")
        assert result.carrier_url is None
        assert result.universal_url is None

    def test_empty_number_treated_as_absent(self):
        assert resolve_tracking("", None) == TrackingResult()

    def test_carrier_is_raw_label(self):
        result = resolve_tracking("1Z999AA10123456784", "UPS Ground")
        assert result.carrier == "UPS Ground"

    def test_to_dict(self):
        result = resolve_tracking("EZ123456789US", None)
        assert result.to_dict() == {
            "number": "EZ123456789US",
            "carrier": None,
            "carrierUrl": "https://tools.usps.com/go/TrackConfirmAction?qtc_tLabels1=EZ123456789US",
            "universalUrl": "https://parcelsapp.com/en/tracking/EZ123456789US",
        }


class TestResolveFulfillments:
    """Tests for the first-fulfillment reduction"""

    def test_uses_first_entry_of_first_fulfillment(self):
        fulfillments = [
            RawFulfillment(
                tracking_info=[
                    RawTrackingInfo(number="1Z999AA10123456784", company="UPS"),
                    RawTrackingInfo(number="123456789012", company="FedEx"),
                ]
            ),
            RawFulfillment(tracking_info=[RawTrackingInfo(number="EZ123456789US", company="USPS")]),
        ]
        result = resolve_fulfillments(fulfillments)
        assert result.number == "1Z999AA10123456784"
        assert result.carrier == "UPS"

    def test_no_fulfillments(self):
        assert resolve_fulfillments([]) == TrackingResult()

    def test_fulfillment_without_tracking(self):
        assert resolve_fulfillments([RawFulfillment()]) == TrackingResult()
