"""Carrier identification and tracking URL construction.

Carriers are identified either from the free-text label the order platform
stores on a fulfillment, or, failing that, from the shape of the tracking
number. Both lookups are ordered rule tables evaluated first-match-wins, and
the URL templates are a plain mapping keyed by the same ``CarrierKey``.
"""

import re
from enum import Enum
from typing import Callable, Dict, Optional, Tuple
from urllib.parse import quote


class CarrierKey(str, Enum):
    """Canonical carrier identifiers."""

    USPS = "usps"
    UPS = "ups"
    FEDEX = "fedex"
    DHL = "dhl"
    DHL_ECOMMERCE = "dhl-ecommerce"
    DHL_GLOBAL = "dhl-global"
    CANADA_POST = "canada-post"
    ROYAL_MAIL = "royal-mail"
    AUSPOST = "auspost"
    YUN_EXPRESS = "yun-express"
    FOUR_PX = "4px"
    YANWEN = "yanwen"
    POSTNL = "postnl"
    DEUTSCHE_POST = "deutsche-post"
    HERMES_EVRI = "hermes-evri"
    GLS = "gls"
    TNT = "tnt"
    CHINA_POST = "china-post"
    SF_EXPRESS = "sf-express"
    CAINIAO = "cainiao"
    LASERSHIP_ONTRAC = "lasership-ontrac"
    AMAZON = "amazon"
    UNKNOWN = "unknown"


UNIVERSAL_TRACKING_TEMPLATE = "https://parcelsapp.com/en/tracking/{tn}"

CARRIER_URL_TEMPLATES: Dict[CarrierKey, str] = {
    CarrierKey.USPS: "https://tools.usps.com/go/TrackConfirmAction?qtc_tLabels1={tn}",
    CarrierKey.UPS: "https://www.ups.com/track?loc=en_US&tracknum={tn}",
    CarrierKey.FEDEX: "https://www.fedex.com/fedextrack/?trknbr={tn}",
    CarrierKey.DHL: "https://www.dhl.com/global-en/home/tracking/tracking-express.html?submit=1&tracking-id={tn}",
    CarrierKey.DHL_ECOMMERCE: "https://www.dhl.com/us-en/home/tracking/tracking-ecommerce.html?tracking-id={tn}",
    CarrierKey.DHL_GLOBAL: "https://www.dhl.com/global-en/home/tracking.html?tracking-id={tn}",
    CarrierKey.CANADA_POST: "https://www.canadapost-postescanada.ca/track-reperage/en#/search?searchFor={tn}",
    CarrierKey.ROYAL_MAIL: "https://www.royalmail.com/track-your-item#/tracking-results/{tn}",
    CarrierKey.AUSPOST: "https://auspost.com.au/mypost/track/#/details/{tn}",
    CarrierKey.YUN_EXPRESS: "https://www.yuntrack.com/Track/Detail/{tn}",
    CarrierKey.FOUR_PX: "https://track.4px.com/#/result/0/{tn}",
    CarrierKey.YANWEN: "https://track.yw56.com.cn/en/querydel?nums={tn}",
    CarrierKey.POSTNL: "https://postnl.nl/tracktrace/?B={tn}",
    CarrierKey.DEUTSCHE_POST: "https://www.deutschepost.de/de/s/sendungsverfolgung.html?piececode={tn}",
    CarrierKey.HERMES_EVRI: "https://www.evri.com/track-a-parcel/{tn}",
    CarrierKey.GLS: "https://gls-group.com/track/{tn}",
    CarrierKey.TNT: "https://www.tnt.com/express/en_us/site/tracking.html?searchType=con&cons={tn}",
    CarrierKey.CHINA_POST: "https://parcelsapp.com/en/tracking/{tn}",
    CarrierKey.SF_EXPRESS: "https://www.sf-express.com/us/en/dynamic_function/waybill/#search/bill-number/{tn}",
    CarrierKey.CAINIAO: "https://global.cainiao.com/detail.htm?mailNoList={tn}",
    CarrierKey.LASERSHIP_ONTRAC: "https://www.ontrac.com/tracking?number={tn}",
    CarrierKey.AMAZON: "https://track.amazon.com/tracking/{tn}",
}


def _contains(*tokens: str) -> Callable[[str], bool]:
    return lambda label: any(token in label for token in tokens)


def _is_ups(label: str) -> bool:
    # "usps" contains "ups"
    return label == "ups" or ("ups" in label and "usps" not in label)


def _is_dhl_express(label: str) -> bool:
    return label in ("dhl", "dhlexpress") or "dhlexpress" in label


# Evaluated in order against the normalized label; first match wins.
LABEL_RULES: Tuple[Tuple[Callable[[str], bool], CarrierKey], ...] = (
    (_contains("usps", "unitedstatespostalservice"), CarrierKey.USPS),
    (_is_ups, CarrierKey.UPS),
    (_contains("fedex"), CarrierKey.FEDEX),
    (_is_dhl_express, CarrierKey.DHL),
    (_contains("dhlecommerce", "dhlglobalmail"), CarrierKey.DHL_ECOMMERCE),
    (_contains("dhl"), CarrierKey.DHL_GLOBAL),
    (_contains("canadapost", "postescanada"), CarrierKey.CANADA_POST),
    (_contains("royalmail"), CarrierKey.ROYAL_MAIL),
    (_contains("auspost", "australiapost"), CarrierKey.AUSPOST),
    (_contains("yunexpress"), CarrierKey.YUN_EXPRESS),
    (_contains("4px"), CarrierKey.FOUR_PX),
    (_contains("yanwen"), CarrierKey.YANWEN),
    (_contains("postnl"), CarrierKey.POSTNL),
    (_contains("deutschepost"), CarrierKey.DEUTSCHE_POST),
    (_contains("hermes", "evri"), CarrierKey.HERMES_EVRI),
    (_contains("gls"), CarrierKey.GLS),
    (_contains("tnt"), CarrierKey.TNT),
    (_contains("chinapost", "epacket", "ems"), CarrierKey.CHINA_POST),
    (_contains("sfexpress", "shunfeng"), CarrierKey.SF_EXPRESS),
    (_contains("cainiao"), CarrierKey.CAINIAO),
    (_contains("lasership", "ontrac"), CarrierKey.LASERSHIP_ONTRAC),
    (_contains("amazon", "amzl"), CarrierKey.AMAZON),
)

# Evaluated in order against the trimmed, upper-cased tracking number.
SHAPE_RULES: Tuple[Tuple["re.Pattern[str]", CarrierKey], ...] = (
    (re.compile(r"^(92|93|94|95)\d{18,20}$"), CarrierKey.USPS),
    (re.compile(r"^[A-Z]{2}\d{9}US$"), CarrierKey.USPS),
    (re.compile(r"^1Z[A-Z0-9]{16,18}$"), CarrierKey.UPS),
    (re.compile(r"^(\d{12}|\d{15}|\d{20}|\d{22})$"), CarrierKey.FEDEX),
    (re.compile(r"^[A-Z]{2}\d{9}AU$"), CarrierKey.AUSPOST),
    (re.compile(r"^[A-Z]{2}\d{9}GB$"), CarrierKey.ROYAL_MAIL),
    (re.compile(r"^\d{16}$"), CarrierKey.CANADA_POST),
)

_NON_ALNUM = re.compile(r"[^a-z0-9]")


def normalize(label: Optional[str]) -> str:
    """Lower-case a carrier label and drop everything outside ``[a-z0-9]``."""
    return _NON_ALNUM.sub("", str(label or "").lower())


def identify_by_label(label: Optional[str]) -> CarrierKey:
    """Map a free-text carrier label to a carrier key.

    Args:
        label: Carrier name as stored by the order platform, e.g. "UPS Ground"

    Returns:
        The first matching CarrierKey, or CarrierKey.UNKNOWN
    """
    normalized = normalize(label)
    if not normalized:
        return CarrierKey.UNKNOWN
    for matches, key in LABEL_RULES:
        if matches(normalized):
            return key
    return CarrierKey.UNKNOWN


def identify_by_tracking_number_shape(tracking_number: Optional[str]) -> CarrierKey:
    """Guess the carrier from the format of a tracking number.

    Args:
        tracking_number: The tracking number to analyze

    Returns:
        The first matching CarrierKey, or CarrierKey.UNKNOWN
    """
    candidate = str(tracking_number or "").strip().upper()
    if not candidate:
        return CarrierKey.UNKNOWN
    for pattern, key in SHAPE_RULES:
        if pattern.match(candidate):
            return key
    return CarrierKey.UNKNOWN


def encode_tracking_number(tracking_number: str) -> str:
    """Percent-encode a tracking number for use inside a URL."""
    return quote(tracking_number, safe="!~*'()")


def build_carrier_url(carrier: CarrierKey, tracking_number: Optional[str]) -> Optional[str]:
    """Build the carrier's own tracking page URL.

    Returns None for CarrierKey.UNKNOWN, a key without a template, or a
    missing tracking number.
    """
    template = CARRIER_URL_TEMPLATES.get(carrier)
    if template is None or not tracking_number:
        return None
    return template.format(tn=encode_tracking_number(tracking_number))


def build_universal_url(tracking_number: Optional[str]) -> Optional[str]:
    """Build the carrier-agnostic tracking URL."""
    if not tracking_number:
        return None
    return UNIVERSAL_TRACKING_TEMPLATE.format(tn=encode_tracking_number(tracking_number))
