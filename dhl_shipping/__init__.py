"""Client library for DHL's XML Services (XML-PI) rate and shipment API."""

from dhl_shipping.errors import (
    CallContractError,
    ConfigurationError,
    DHLClientError,
    ResponseParseError,
    TransportError,
)
from dhl_shipping.services import (
    Address,
    CarrierResult,
    ClientConfig,
    Commodity,
    DHLClient,
    Parcel,
    RateQuoteRequest,
    ServiceCodes,
    ShipmentOptions,
    ShipmentRequest,
    configure,
)

__all__ = [
    "DHLClient",
    "CarrierResult",
    "ClientConfig",
    "configure",
    "Address",
    "Commodity",
    "Parcel",
    "RateQuoteRequest",
    "ServiceCodes",
    "ShipmentOptions",
    "ShipmentRequest",
    "DHLClientError",
    "ConfigurationError",
    "CallContractError",
    "TransportError",
    "ResponseParseError",
]
