"""Request models for the DHL XML-PI client.

Field names are snake_case; every model also accepts the camelCase keys
callers usually hold (``countryCode``, ``unitPrice``, ...), so plain dicts
can be validated straight into these models.

Numeric parcel and commodity fields keep whatever type the caller gave
(int, float or numeric string). The payload builder coerces them only
where it does arithmetic.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Number = int | float | str


class _RequestModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class Address(_RequestModel):
    """Sender or receiver address."""

    country_code: str = Field(..., description="ISO 3166-1 alpha-2 code")
    postal_code: str | None = Field(None, description="Postal code")
    city: str | None = Field(None, description="City")
    province: str | None = Field(None, description="State/province name")
    province_code: str | None = Field(None, description="State/province code")
    address: str | list[str] = Field(
        default="", description="Street address as one string or a list of lines"
    )
    name: str | None = Field(None, description="Contact person")
    phone: str | None = Field(None, description="Contact phone")
    company_name: str | None = Field(None, description="Company name")


class Parcel(_RequestModel):
    """A single piece; dimensions and weight in the client's unit system."""

    width: Number
    height: Number
    depth: Number
    weight: Number


class Commodity(_RequestModel):
    """A customs line item."""

    description: str = ""
    hs_code: str | None = Field(None, description="HS / tariff code")
    unit_price: Number = 0
    quantity: int | str = 1
    weight: Number | None = None


class ServiceCodes(_RequestModel):
    """DHL product codes for the shipment."""

    global_product_code: str | None = None
    local_product_code: str | None = None


class ShipmentOptions(_RequestModel):
    """Delivery signature and label format choices."""

    signature: str = "none"
    label_format: str = "pdf"


class RateQuoteRequest(_RequestModel):
    """Input to a GetQuote request."""

    sender: Address
    receiver: Address
    parcels: list[Parcel]
    commodities: list[Commodity] = Field(default_factory=list)
    currency_code: str | None = None


class ShipmentRequest(_RequestModel):
    """Input to a ShipmentValidateRequest."""

    sender: Address
    receiver: Address
    parcels: list[Parcel]
    commodities: list[Commodity] = Field(default_factory=list)
    currency_code: str | None = None
    terms_of_trade: str | None = None
    reference: str | None = None
    description: str | None = Field(None, description="Shipment contents text")
    service: ServiceCodes = Field(default_factory=ServiceCodes)
    options: ShipmentOptions | None = None
