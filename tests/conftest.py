"""Root-level pytest fixtures for all tests.

Provides shared fixtures:
- Client configuration in both unit systems
- Sample addresses, parcels and commodities
- Canned carrier response documents
"""

import pytest

from dhl_shipping.services.client_config import ClientConfig, configure
from dhl_shipping.services.dhl_models import (
    Address,
    Commodity,
    Parcel,
    RateQuoteRequest,
    ServiceCodes,
    ShipmentOptions,
    ShipmentRequest,
)


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def client_options() -> dict:
    """Minimal valid constructor options."""
    return {"siteId": "test-site", "password": "test-pass", "accountNumber": "123456789"}


@pytest.fixture
def metric_config(client_options) -> ClientConfig:
    return configure(client_options)


@pytest.fixture
def imperial_config(client_options) -> ClientConfig:
    return configure({**client_options, "unitSystem": "imperial"})


# ============================================================================
# Request Fixtures
# ============================================================================


@pytest.fixture
def sender() -> Address:
    return Address(
        country_code="US",
        postal_code="90210",
        city="Beverly Hills",
        province="California",
        province_code="CA",
        address=["123 Main St", "", "Suite 4"],
        name="Alice Johnson",
        phone="5551234567",
        company_name="Acme Corp",
    )


@pytest.fixture
def receiver() -> Address:
    return Address(
        country_code="GB",
        postal_code="SW1A 1AA",
        city="London",
        address="10 Downing St",
        name="Bob Smith",
        phone="442071234567",
    )


@pytest.fixture
def parcels() -> list[Parcel]:
    return [
        Parcel(width=10, height=20, depth=30, weight=1.5),
        Parcel(width="20", height="50", depth="50", weight="2"),
    ]


@pytest.fixture
def commodities() -> list[Commodity]:
    return [
        Commodity(
            description="Hand-knitted wool scarf with tassels, navy blue",
            hs_code="6117100000",
            unit_price=10.005,
            quantity=2,
            weight=0.3,
        ),
        Commodity(
            description="Greeting card",
            hs_code="4909000000",
            unit_price="1.004",
            quantity="1",
            weight=0.05,
        ),
    ]


@pytest.fixture
def rate_request(sender, receiver, parcels, commodities) -> RateQuoteRequest:
    return RateQuoteRequest(
        sender=sender,
        receiver=receiver,
        parcels=parcels,
        commodities=commodities,
        currency_code="USD",
    )


@pytest.fixture
def shipment_request(sender, receiver, parcels, commodities) -> ShipmentRequest:
    return ShipmentRequest(
        sender=sender,
        receiver=receiver,
        parcels=parcels,
        commodities=commodities,
        currency_code="USD",
        terms_of_trade="DAP",
        reference="ORDER-1001",
        description="Knitwear",
        service=ServiceCodes(global_product_code="P", local_product_code="P"),
        options=ShipmentOptions(signature="adult", label_format="zpl"),
    )


# ============================================================================
# Carrier Response Fixtures
# ============================================================================


RATE_RESPONSE_XML = """<?xml version="1.0" encoding="UTF-8"?>
<res:DCTResponse xmlns:res="http://www.dhl.com">
  <GetQuoteResponse>
    <Response>
      <ServiceHeader>
        <MessageReference>1234567890123456789012345678</MessageReference>
        <SiteID>test-site</SiteID>
      </ServiceHeader>
    </Response>
    <BkgDetails>
      <QtdShp>
        <GlobalProductCode>P</GlobalProductCode>
        <ShippingCharge>123.45</ShippingCharge>
        <CurrencyCode>USD</CurrencyCode>
      </QtdShp>
    </BkgDetails>
  </GetQuoteResponse>
</res:DCTResponse>
"""

SHIPMENT_RESPONSE_XML = """<?xml version="1.0" encoding="UTF-8"?>
<res:ShipmentValidateResponse xmlns:res="http://www.dhl.com">
  <Note>
    <ActionNote>Success</ActionNote>
  </Note>
  <AirwayBillNumber>1234567890</AirwayBillNumber>
  <LabelImage>
    <OutputFormat>PDF</OutputFormat>
    <OutputImage>JVBERi0xLjQK</OutputImage>
  </LabelImage>
</res:ShipmentValidateResponse>
"""

ERROR_RESPONSE_XML = """<?xml version="1.0" encoding="UTF-8"?>
<res:ErrorResponse xmlns:res="http://www.dhl.com">
  <Response>
    <Status>
      <ActionStatus>Error</ActionStatus>
      <Condition>
        <ConditionCode>111</ConditionCode>
        <ConditionData>Error in parsing request XML</ConditionData>
      </Condition>
    </Status>
  </Response>
</res:ErrorResponse>
"""


@pytest.fixture
def rate_response_xml() -> str:
    return RATE_RESPONSE_XML


@pytest.fixture
def shipment_response_xml() -> str:
    return SHIPMENT_RESPONSE_XML


@pytest.fixture
def error_response_xml() -> str:
    return ERROR_RESPONSE_XML
