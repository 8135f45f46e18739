"""Canonical DHL XML-PI constants.

Single source of truth for endpoint hosts, schema namespaces, unit codes,
field limits and option code tables. All payload-building modules import
from here instead of using inline magic values.

Follows the Enum + parallel lookup pattern used for service codes.
"""

from enum import Enum


# ---------------------------------------------------------------------------
# Carrier identity / endpoints
# ---------------------------------------------------------------------------

DEFAULT_USER_AGENT = "dhl-shipping"


class Mode(str, Enum):
    """Target environment for the XML-PI endpoint."""

    STAGING = "staging"
    LIVE = "live"


DHL_HOSTS: dict[Mode, str] = {
    Mode.STAGING: "xmlpitest-ea.dhl.com",
    Mode.LIVE: "xmlpi-ea.dhl.com",
}
DHL_REQUEST_PATH = "/XMLShippingServlet"


# ---------------------------------------------------------------------------
# Schema envelopes
# ---------------------------------------------------------------------------

# Literal attribute values expected by the endpoint, including the trailing
# space in the DCT schema location.
RATE_QUOTE_ROOT = "p:DCTRequest"
RATE_QUOTE_NAMESPACES: dict[str, str] = {
    "@xmlns:p": "http://www.dhl.com",
    "@xmlns:p1": "http://www.dhl.com/datatypes",
    "@xmlns:p2": "http://www.dhl.com/DCTRequestdatatypes",
    "@xmlns:xsi": "http://www.w3.org/2001/XMLSchema-instance",
    "@xsi:schemaLocation": "http://www.dhl.com DCT-req.xsd ",
}

SHIPMENT_ROOT = "req:ShipmentValidateRequest"
SHIPMENT_NAMESPACES: dict[str, str] = {
    "@xmlns:req": "http://www.dhl.com",
    "@xmlns:dhl": "http://www.dhl.com/datatypes_global.xsd",
    "@xmlns:xsi": "http://www.w3.org/2001/XMLSchema-instance",
    "@xsi:schemaLocation": "http://www.dhl.com ship-val-global-req.xsd",
}

RATE_QUOTE_RESPONSE_ROOT = "res:DCTResponse"
RATE_QUOTE_RESPONSE_BODY = "GetQuoteResponse"

XML_DATE_FORMAT = "%Y-%m-%d"
XML_DATETIME_FORMAT = "%Y-%m-%dT%H:%M:%S"


# ---------------------------------------------------------------------------
# Field limits
# ---------------------------------------------------------------------------

MESSAGE_REFERENCE_MIN_LEN = 28
MESSAGE_REFERENCE_MAX_LEN = 32
COMMODITY_NAME_MAX_LEN = 35


# ---------------------------------------------------------------------------
# Units
# ---------------------------------------------------------------------------


class UnitSystem(str, Enum):
    """Measurement system used for parcel dimensions and weights."""

    METRIC = "metric"
    IMPERIAL = "imperial"


# (dimension unit, weight unit) per request type
RATE_QUOTE_UNITS: dict[UnitSystem, tuple[str, str]] = {
    UnitSystem.METRIC: ("CM", "KG"),
    UnitSystem.IMPERIAL: ("IN", "LB"),
}
SHIPMENT_UNITS: dict[UnitSystem, tuple[str, str]] = {
    UnitSystem.METRIC: ("C", "K"),
    UnitSystem.IMPERIAL: ("I", "L"),
}

# http://www.dhl.com/en/tools/volumetric_weight_express.html
VOLUMETRIC_DIVISOR = 5000


# ---------------------------------------------------------------------------
# Shipment options
# ---------------------------------------------------------------------------


class SignatureCode(str, Enum):
    """DHL SpecialServiceType codes for delivery signatures."""

    ADULT = "SD"
    ANY = "SA"
    NONE = "SX"


SIGNATURE_ALIASES: dict[str, SignatureCode] = {
    "adult": SignatureCode.ADULT,
    "yes": SignatureCode.ANY,
    "none": SignatureCode.NONE,
}
DEFAULT_SIGNATURE_CODE = SignatureCode.NONE


class LabelFormat(str, Enum):
    """DHL LabelImageFormat values."""

    PDF = "PDF"
    ZPL = "ZPL2"
    EPL = "EPL2"


LABEL_FORMAT_ALIASES: dict[str, LabelFormat] = {
    "pdf": LabelFormat.PDF,
    "zpl": LabelFormat.ZPL,
    "epl": LabelFormat.EPL,
}
DEFAULT_LABEL_FORMAT = LabelFormat.PDF


# ---------------------------------------------------------------------------
# Fixed request values
# ---------------------------------------------------------------------------

DEFAULT_READY_TIME = "PT3H"
DEFAULT_PACKAGE_TYPE = "CP"  # customer packaging; EE = express envelope, OD = other DHL
DEFAULT_DOOR_TO = "DD"
DEFAULT_LANGUAGE_CODE = "en"
SHIPPER_PAYMENT_TYPE = "S"
EXPORT_REASON = "S"
EXPORT_REASON_CODE = "P"  # P - permanent, T - temporary, R - re-export
EXPORT_QUANTITY_UNIT = "Piece"
