"""Service layer for the DHL XML-PI client.

Provides configuration, request building, HTTPS transport and response
unwrapping for rate quotes and shipment creation.
"""

from dhl_shipping.services.client_config import ClientConfig, configure
from dhl_shipping.services.dhl_client import CarrierResult, DHLClient
from dhl_shipping.services.dhl_models import (
    Address,
    Commodity,
    Parcel,
    RateQuoteRequest,
    ServiceCodes,
    ShipmentOptions,
    ShipmentRequest,
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
]
