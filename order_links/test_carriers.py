"""Tests for carrier identification and tracking URL building."""

import pytest

from order_links.app.carriers import (
    CARRIER_URL_TEMPLATES,
    LABEL_RULES,
    CarrierKey,
    build_carrier_url,
    build_universal_url,
    identify_by_label,
    identify_by_tracking_number_shape,
    normalize,
)


class TestNormalize:
    """Tests for label normalization"""

    def test_strips_and_lowercases(self):
        assert normalize("UPS Ground") == "upsground"
        assert normalize("DHL e-Commerce (US)") == "dhlecommerceus"

    def test_absent_label(self):
        assert normalize(None) == ""
        assert normalize("") == ""
        assert normalize("  --  ") == ""


class TestIdentifyByLabel:
    """Tests for label-based carrier identification"""

    @pytest.mark.parametrize(
        "label, expected",
        [
            ("USPS", CarrierKey.USPS),
            ("United States Postal Service", CarrierKey.USPS),
            ("UPS", CarrierKey.UPS),
            ("UPS Ground", CarrierKey.UPS),
            ("FedEx", CarrierKey.FEDEX),
            ("FedEx Home Delivery", CarrierKey.FEDEX),
            ("DHL", CarrierKey.DHL),
            ("DHL Express", CarrierKey.DHL),
            ("DHL eCommerce", CarrierKey.DHL_ECOMMERCE),
            ("DHL Global Mail", CarrierKey.DHL_ECOMMERCE),
            ("DHL Parcel", CarrierKey.DHL_GLOBAL),
            ("Canada Post", CarrierKey.CANADA_POST),
            ("Postes Canada", CarrierKey.CANADA_POST),
            ("Royal Mail", CarrierKey.ROYAL_MAIL),
            ("Australia Post", CarrierKey.AUSPOST),
            ("YunExpress", CarrierKey.YUN_EXPRESS),
            ("4PX", CarrierKey.FOUR_PX),
            ("Yanwen", CarrierKey.YANWEN),
            ("PostNL", CarrierKey.POSTNL),
            ("Deutsche Post", CarrierKey.DEUTSCHE_POST),
            ("Hermes", CarrierKey.HERMES_EVRI),
            ("Evri", CarrierKey.HERMES_EVRI),
            ("GLS", CarrierKey.GLS),
            ("TNT", CarrierKey.TNT),
            ("China Post", CarrierKey.CHINA_POST),
            ("ePacket", CarrierKey.CHINA_POST),
            ("SF Express", CarrierKey.SF_EXPRESS),
            ("Cainiao", CarrierKey.CAINIAO),
            ("LaserShip", CarrierKey.LASERSHIP_ONTRAC),
            ("OnTrac", CarrierKey.LASERSHIP_ONTRAC),
            ("Amazon Logistics", CarrierKey.AMAZON),
            ("AMZL_US", CarrierKey.AMAZON),
        ],
    )
    def test_known_labels(self, label, expected):
        assert identify_by_label(label) == expected

    def test_usps_never_matches_ups(self):
        assert identify_by_label("USPS Priority Mail") == CarrierKey.USPS
        assert identify_by_label("usps") != CarrierKey.UPS

    def test_usps_spellings_share_a_key(self):
        assert identify_by_label("USPS") == identify_by_label("United States Postal Service")

    def test_dhl_ecommerce_not_shadowed_by_generic_dhl(self):
        assert identify_by_label("DHL eCommerce") == CarrierKey.DHL_ECOMMERCE
        assert build_carrier_url(identify_by_label("DHL eCommerce"), "GM123").startswith(
            "https://www.dhl.com/us-en/home/tracking/tracking-ecommerce.html"
        )

    @pytest.mark.parametrize("label", [None, "", "Local Courier", "Other"])
    def test_unknown_labels(self, label):
        assert identify_by_label(label) == CarrierKey.UNKNOWN

    def test_every_rule_key_has_a_template(self):
        for _, key in LABEL_RULES:
            assert key in CARRIER_URL_TEMPLATES


class TestIdentifyByTrackingNumberShape:
    """Tests for tracking-number-shape identification"""

    @pytest.mark.parametrize(
        "number, expected",
        [
            ("9400111899223817476923", CarrierKey.USPS),
            ("92612999897543581234", CarrierKey.USPS),
            ("EZ123456789US", CarrierKey.USPS),
            ("ez123456789us", CarrierKey.USPS),
            ("1Z999AA10123456784", CarrierKey.UPS),
            ("1z999aa10123456784", CarrierKey.UPS),
            ("123456789012", CarrierKey.FEDEX),
            ("123456789012345", CarrierKey.FEDEX),
            ("RR123456789AU", CarrierKey.AUSPOST),
            ("RR123456789GB", CarrierKey.ROYAL_MAIL),
            ("1234567890123456", CarrierKey.CANADA_POST),
            ("  1Z999AA10123456784  ", CarrierKey.UPS),
        ],
    )
    def test_shapes(self, number, expected):
        assert identify_by_tracking_number_shape(number) == expected

    def test_usps_prefix_wins_over_fedex_length(self):
        # 22 digits also fits FedEx; the USPS prefix rule comes first
        assert identify_by_tracking_number_shape("9400111899223817476923") == CarrierKey.USPS

    def test_non_usps_twenty_digits_is_fedex(self):
        assert identify_by_tracking_number_shape("61299998820821171811") == CarrierKey.FEDEX

    @pytest.mark.parametrize("number", [None, "", "   ", "ABC", "LX123456789CN", "12345"])
    def test_unknown_shapes(self, number):
        assert identify_by_tracking_number_shape(number) == CarrierKey.UNKNOWN


class TestBuildCarrierUrl:
    """Tests for carrier URL templates"""

    def test_usps_template(self):
        assert (
            build_carrier_url(CarrierKey.USPS, "9400111899223817476923")
            == "https://tools.usps.com/go/TrackConfirmAction?qtc_tLabels1=9400111899223817476923"
        )

    def test_ups_template(self):
        assert (
            build_carrier_url(CarrierKey.UPS, "1Z999AA10123456784")
            == "https://www.ups.com/track?loc=en_US&tracknum=1Z999AA10123456784"
        )

    def test_encodes_tracking_number(self):
        url = build_carrier_url(CarrierKey.ROYAL_MAIL, "AB 12/3&x")
        assert url == "https://www.royalmail.com/track-your-item#/tracking-results/AB%2012%2F3%26x"

    def test_unknown_key_has_no_url(self):
        assert build_carrier_url(CarrierKey.UNKNOWN, "123") is None

    def test_missing_number_has_no_url(self):
        assert build_carrier_url(CarrierKey.USPS, None) is None
        assert build_carrier_url(CarrierKey.USPS, "") is None

    def test_deterministic(self):
        first = build_carrier_url(CarrierKey.FEDEX, "1234 5678")
        second = build_carrier_url(CarrierKey.FEDEX, "1234 5678")
        assert first == second

    def test_every_known_key_has_a_template(self):
        for key in CarrierKey:
            if key is not CarrierKey.UNKNOWN:
                assert build_carrier_url(key, "X1") is not None


class TestBuildUniversalUrl:
    """Tests for the carrier-agnostic URL"""

    def test_builds_for_any_number(self):
        assert build_universal_url("ABC123") == "https://parcelsapp.com/en/tracking/ABC123"

    def test_encodes_number(self):
        assert build_universal_url("A B") == "https://parcelsapp.com/en/tracking/A%20B"

    def test_absent_number(self):
        assert build_universal_url(None) is None
        assert build_universal_url("") is None
