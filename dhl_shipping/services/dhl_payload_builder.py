"""DHL XML-PI payload builder for rate quotes and shipments.

Transforms typed request models into the ordered dict structure of the
carrier schema, then serializes it with ``xmltodict.unparse``. One builder
per operation:

    build_rate_quote_body(request, config)  -> DCTRequest / GetQuote XML
    build_shipment_body(request, config)    -> ShipmentValidateRequest XML

Example:
    from dhl_shipping.services.dhl_payload_builder import build_shipment_body

    body = build_shipment_body(shipment_request, config)
    parsed = await transport.send(body)

Builders never mutate the request they are given.
"""

import re
from collections.abc import Iterable
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

import xmltodict

from dhl_shipping.services.client_config import ClientConfig
from dhl_shipping.services.country_codes import country_name
from dhl_shipping.services.dhl_constants import (
    COMMODITY_NAME_MAX_LEN,
    DEFAULT_DOOR_TO,
    DEFAULT_LABEL_FORMAT,
    DEFAULT_LANGUAGE_CODE,
    DEFAULT_PACKAGE_TYPE,
    DEFAULT_READY_TIME,
    DEFAULT_SIGNATURE_CODE,
    EXPORT_QUANTITY_UNIT,
    EXPORT_REASON,
    EXPORT_REASON_CODE,
    LABEL_FORMAT_ALIASES,
    RATE_QUOTE_NAMESPACES,
    RATE_QUOTE_ROOT,
    RATE_QUOTE_UNITS,
    SHIPMENT_NAMESPACES,
    SHIPMENT_ROOT,
    SHIPMENT_UNITS,
    SHIPPER_PAYMENT_TYPE,
    SIGNATURE_ALIASES,
    VOLUMETRIC_DIVISOR,
    XML_DATE_FORMAT,
    XML_DATETIME_FORMAT,
)
from dhl_shipping.services.dhl_models import (
    Address,
    Commodity,
    Parcel,
    RateQuoteRequest,
    ShipmentOptions,
    ShipmentRequest,
)
from dhl_shipping.services.message_reference import generate_message_reference

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")

_ONE_DECIMAL = Decimal("0.1")
_TWO_DECIMALS = Decimal("0.01")


# ---------------------------------------------------------------------------
# Numeric coercion
# ---------------------------------------------------------------------------


def parse_int(value: Any) -> int | float:
    """Coerce a dimension or quantity the way the carrier integration always has.

    Numbers pass through untouched. Strings are read as a base-10 integer
    prefix, so ``"10.7"`` becomes ``10`` (fraction truncated).

    Raises:
        ValueError: If a string has no leading integer.
    """
    if isinstance(value, (int, float)):
        return value
    match = _LEADING_INT.match(str(value))
    if not match:
        raise ValueError(f"Cannot read an integer from {value!r}")
    return int(match.group(1))


def to_decimal(value: Any) -> Decimal:
    """Convert a price or weight (number or numeric string) to Decimal."""
    try:
        return Decimal(str(value).strip())
    except InvalidOperation:
        raise ValueError(f"Cannot read a number from {value!r}") from None


def dimensional_weight(parcel: Parcel) -> Decimal:
    """Volumetric weight ``width * height * depth / 5000`` to one decimal.

    DHL rejects more than one decimal place in DimWeight.
    """
    volume = (
        to_decimal(parse_int(parcel.width))
        * to_decimal(parse_int(parcel.height))
        * to_decimal(parse_int(parcel.depth))
    )
    return (volume / VOLUMETRIC_DIVISOR).quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP)


def line_value(commodity: Commodity) -> Decimal:
    """``unit_price * quantity`` rounded half-up to cents."""
    amount = to_decimal(commodity.unit_price) * int(parse_int(commodity.quantity))
    return amount.quantize(_TWO_DECIMALS, rounding=ROUND_HALF_UP)


def declared_value(commodities: Iterable[Commodity]) -> Decimal:
    """Total customs value; each line is rounded before summing."""
    total = Decimal("0.00")
    for commodity in commodities:
        total += line_value(commodity)
    return total


def total_weight(parcels: Iterable[Parcel]) -> Decimal:
    """Sum of parcel weights."""
    return sum((to_decimal(p.weight) for p in parcels), Decimal(0))


# ---------------------------------------------------------------------------
# Field mappings
# ---------------------------------------------------------------------------


def resolve_signature_code(signature: str | None) -> str:
    """Map ``adult``/``yes``/``none`` to SD/SA/SX; anything else is SX."""
    code = SIGNATURE_ALIASES.get((signature or "").strip().lower(), DEFAULT_SIGNATURE_CODE)
    return code.value


def resolve_label_format(label_format: str | None) -> str:
    """Map ``zpl``/``epl``/``pdf`` to ZPL2/EPL2/PDF; anything else is PDF."""
    fmt = LABEL_FORMAT_ALIASES.get((label_format or "").strip().lower(), DEFAULT_LABEL_FORMAT)
    return fmt.value


def build_address_lines(address: str | list[str] | None) -> list[str]:
    """Return address lines, dropping empty entries from a list."""
    if isinstance(address, list):
        return [line for line in address if line != ""]
    if address is None:
        return []
    return [address]


def _prune_none(value: Any) -> Any:
    """Drop None-valued keys so xmltodict does not emit empty elements."""
    if isinstance(value, dict):
        return {k: _prune_none(v) for k, v in value.items() if v is not None}
    if isinstance(value, list):
        return [_prune_none(v) for v in value]
    return value


def build_service_header(config: ClientConfig, now: datetime | None = None) -> dict[str, Any]:
    """Authentication block placed first in every request."""
    now = now or datetime.now()
    return {
        "ServiceHeader": {
            "MessageTime": now.strftime(XML_DATETIME_FORMAT),
            "MessageReference": generate_message_reference(),
            "SiteID": config.site_id,
            "Password": config.password,
        }
    }


def _address_line_fields(address: Address) -> dict[str, Any]:
    """Repeated AddressLine elements; omitted when there are no lines."""
    fields: dict[str, Any] = {}
    lines = build_address_lines(address.address)
    if lines:
        fields["AddressLine"] = lines
    return fields


def _contact(address: Address) -> dict[str, Any]:
    return {
        "PersonName": address.name,
        "PhoneNumber": address.phone,
    }


# ---------------------------------------------------------------------------
# Rate quote
# ---------------------------------------------------------------------------


def build_rate_quote_payload(
    request: RateQuoteRequest,
    config: ClientConfig,
    now: datetime | None = None,
) -> dict[str, Any]:
    """Build the ``p:DCTRequest`` document as an ordered dict.

    Args:
        request: Sender, receiver, parcels and optional commodities.
        config: Client configuration (credentials, unit system, account).
        now: Clock override for MessageTime and booking Date.

    Returns:
        Dict ready for ``xmltodict.unparse``.
    """
    now = now or datetime.now()
    dimension_unit, weight_unit = RATE_QUOTE_UNITS[config.unit_system]

    get_quote: dict[str, Any] = {
        "Request": build_service_header(config, now),
        "From": {
            "CountryCode": request.sender.country_code,
            "Postalcode": request.sender.postal_code,
            "City": request.sender.city,
        },
        "BkgDetails": {
            "PaymentCountryCode": request.sender.country_code,
            "Date": now.strftime(XML_DATE_FORMAT),
            # TODO: take ReadyTime from the caller once pickup scheduling is modelled
            "ReadyTime": DEFAULT_READY_TIME,
            "DimensionUnit": dimension_unit,
            "WeightUnit": weight_unit,
            "NumberOfPieces": len(request.parcels),
            "Pieces": {
                "Piece": [
                    {
                        "PieceID": index,
                        "Height": parcel.height,
                        "Depth": parcel.depth,
                        "Width": parcel.width,
                        "Weight": parcel.weight,
                    }
                    for index, parcel in enumerate(request.parcels, start=1)
                ]
            },
            "PaymentAccountNumber": config.account_number,
            "IsDutiable": "Y",
        },
        "To": {
            "CountryCode": request.receiver.country_code,
            "Postalcode": request.receiver.postal_code,
            "City": request.receiver.city,
        },
        "Dutiable": {
            "DeclaredCurrency": request.currency_code,
            "DeclaredValue": declared_value(request.commodities),
        },
    }

    return _prune_none({
        RATE_QUOTE_ROOT: {
            **RATE_QUOTE_NAMESPACES,
            "GetQuote": get_quote,
        }
    })


# ---------------------------------------------------------------------------
# Shipment
# ---------------------------------------------------------------------------


def build_consignee(receiver: Address) -> dict[str, Any]:
    """Receiver block of a shipment request."""
    return {
        "CompanyName": receiver.company_name or receiver.name,
        **_address_line_fields(receiver),
        "City": receiver.city,
        "PostalCode": receiver.postal_code,
        "CountryCode": receiver.country_code,
        "CountryName": country_name(receiver.country_code),
        "Contact": _contact(receiver),
    }


def build_shipper(sender: Address, account_number: str) -> dict[str, Any]:
    """Sender block of a shipment request."""
    return {
        "ShipperID": account_number,
        "CompanyName": sender.company_name,
        "RegisteredAccount": account_number,
        **_address_line_fields(sender),
        "City": sender.city,
        "Division": sender.province,
        "DivisionCode": sender.province_code,
        "PostalCode": sender.postal_code,
        "CountryCode": sender.country_code,
        "CountryName": country_name(sender.country_code),
        "Contact": _contact(sender),
    }


def build_export_declaration(
    request: ShipmentRequest,
    config: ClientConfig,
) -> dict[str, Any]:
    """ExportDeclaration with one ExportLineItem per commodity."""
    _, weight_unit = SHIPMENT_UNITS[config.unit_system]
    # Y for same-country shipments; older XML-PI integrations sent this inverted
    is_domestic = request.receiver.country_code == request.sender.country_code
    return {
        "SignatureName": request.sender.name,
        "ExportReason": EXPORT_REASON,
        "ExportReasonCode": EXPORT_REASON_CODE,
        "ExportLineItem": [
            {
                "LineNumber": index,
                "Quantity": commodity.quantity,
                "QuantityUnit": EXPORT_QUANTITY_UNIT,
                "Description": commodity.description,
                "Value": commodity.unit_price,
                "IsDomestic": "Y" if is_domestic else "N",
                "Weight": {
                    "Weight": commodity.weight,
                    "WeightUnit": weight_unit,
                },
            }
            for index, commodity in enumerate(request.commodities, start=1)
        ],
    }


def build_shipment_details(
    request: ShipmentRequest,
    config: ClientConfig,
    now: datetime,
) -> dict[str, Any]:
    """Pieces, weights, units and product codes of a shipment."""
    dimension_unit, weight_unit = SHIPMENT_UNITS[config.unit_system]
    return {
        "NumberOfPieces": len(request.parcels),
        "Pieces": {
            "Piece": [
                {
                    "PieceID": index,
                    "PackageType": DEFAULT_PACKAGE_TYPE,
                    "Weight": parcel.weight,
                    "DimWeight": dimensional_weight(parcel),
                    "Width": parcel.width,
                    "Height": parcel.height,
                    "Depth": parcel.depth,
                }
                for index, parcel in enumerate(request.parcels, start=1)
            ]
        },
        "Weight": total_weight(request.parcels),
        "WeightUnit": weight_unit,
        "GlobalProductCode": request.service.global_product_code,
        "LocalProductCode": request.service.local_product_code,
        "Date": now.strftime(XML_DATE_FORMAT),
        "Contents": request.description,
        "DoorTo": DEFAULT_DOOR_TO,
        "DimensionUnit": dimension_unit,
        "PackageType": DEFAULT_PACKAGE_TYPE,
        "IsDutiable": "Y",
        "CurrencyCode": request.currency_code,
    }


def build_shipment_payload(
    request: ShipmentRequest,
    config: ClientConfig,
    now: datetime | None = None,
) -> dict[str, Any]:
    """Build the ``req:ShipmentValidateRequest`` document as an ordered dict.

    Args:
        request: Full shipment description. ``options`` defaults to no
            signature and a PDF label when omitted.
        config: Client configuration (credentials, unit system, account).
        now: Clock override for MessageTime and shipment Date.

    Returns:
        Dict ready for ``xmltodict.unparse``.
    """
    now = now or datetime.now()
    options = request.options or ShipmentOptions()
    account = config.account_number

    body: dict[str, Any] = {
        "Request": build_service_header(config, now),
        "RequestedPickupTime": "N",
        "NewShipper": "Y",
        "LanguageCode": DEFAULT_LANGUAGE_CODE,
        "PiecesEnabled": "Y",
        "Billing": {
            "ShipperAccountNumber": account,
            "ShippingPaymentType": SHIPPER_PAYMENT_TYPE,
            "BillingAccountNumber": account,
            "DutyPaymentType": SHIPPER_PAYMENT_TYPE,
            "DutyAccountNumber": account,
        },
        "Consignee": build_consignee(request.receiver),
    }

    if request.commodities:
        body["Commodity"] = [
            {
                "CommodityCode": commodity.hs_code,
                "CommodityName": commodity.description[:COMMODITY_NAME_MAX_LEN],
            }
            for commodity in request.commodities
        ]
    body["Dutiable"] = {
        "DeclaredValue": declared_value(request.commodities),
        "DeclaredCurrency": request.currency_code,
        "TermsOfTrade": request.terms_of_trade,
    }
    if request.commodities:
        body["ExportDeclaration"] = build_export_declaration(request, config)

    body["Reference"] = {"ReferenceID": request.reference}
    body["ShipmentDetails"] = build_shipment_details(request, config, now)
    body["Shipper"] = build_shipper(request.sender, account)
    body["SpecialService"] = {
        "SpecialServiceType": resolve_signature_code(options.signature),
    }
    body["EProcShip"] = "N"
    body["LabelImageFormat"] = resolve_label_format(options.label_format)

    return _prune_none({
        SHIPMENT_ROOT: {
            **SHIPMENT_NAMESPACES,
            **body,
        }
    })


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------


def render_xml(payload: dict[str, Any], pretty: bool = False) -> str:
    """Serialize a payload dict to an XML document string."""
    return xmltodict.unparse(payload, pretty=pretty)


def build_rate_quote_body(
    request: RateQuoteRequest,
    config: ClientConfig,
    now: datetime | None = None,
) -> str:
    """Serialized GetQuote request."""
    return render_xml(build_rate_quote_payload(request, config, now))


def build_shipment_body(
    request: ShipmentRequest,
    config: ClientConfig,
    now: datetime | None = None,
) -> str:
    """Serialized ShipmentValidateRequest."""
    return render_xml(build_shipment_payload(request, config, now))
