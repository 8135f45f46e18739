"""Tests for the DHL XML-PI client facade."""

import logging
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest
import xmltodict

from dhl_shipping.errors import (
    CallContractError,
    ConfigurationError,
    DHLClientError,
    ResponseParseError,
)
from dhl_shipping.errors import TransportError as DHLTransportError
from dhl_shipping.services.client_config import ClientConfig
from dhl_shipping.services.dhl_client import CarrierResult, DHLClient
from dhl_shipping.services.dhl_models import ShipmentRequest


def _client(client_options, text: str = "", status_code: int = 200, seen: list | None = None) -> DHLClient:
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        return httpx.Response(status_code, text=text)

    return DHLClient(client_options, transport=httpx.MockTransport(handler))


def _failing_client(client_options) -> DHLClient:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Name or service not known", request=request)

    return DHLClient(client_options, transport=httpx.MockTransport(handler))


def _sent_document(request: httpx.Request) -> dict:
    return xmltodict.parse(request.content.decode("utf-8"))


class TestClientConstruction:

    def test_missing_options(self):
        with pytest.raises(ConfigurationError, match="missing options"):
            DHLClient(None)

    def test_missing_password(self):
        with pytest.raises(ConfigurationError, match="missing password"):
            DHLClient({"siteId": "site"})

    def test_accepts_prebuilt_config(self):
        config = ClientConfig(site_id="site", password="pw")
        assert DHLClient(config).config is config

    def test_rejects_prebuilt_config_without_credentials(self):
        with pytest.raises(ConfigurationError, match="missing siteId"):
            DHLClient(ClientConfig(site_id="", password=""))

    def test_logged_config_hides_password(self, client_options, caplog):
        with caplog.at_level(logging.DEBUG, logger="dhl_shipping.services.dhl_client"):
            DHLClient(client_options)
        assert "test-site" in caplog.text
        assert "test-pass" not in caplog.text


class TestCallContract:
    """Test argument checks that raise before any I/O."""

    @pytest.mark.asyncio
    async def test_rates_without_callback(self, client_options, rate_request):
        seen: list = []
        client = _client(client_options, seen=seen)
        with pytest.raises(CallContractError, match="no callback specified"):
            client.rates(rate_request)
        assert seen == []

    @pytest.mark.asyncio
    async def test_ship_without_callback(self, client_options, shipment_request):
        client = _client(client_options)
        with pytest.raises(CallContractError) as exc_info:
            client.ship(shipment_request, None)
        assert exc_info.value.code == "E-2001"

    @pytest.mark.asyncio
    async def test_non_callable_callback(self, client_options, rate_request):
        client = _client(client_options)
        with pytest.raises(CallContractError, match="no callback specified"):
            client.rates(rate_request, "not-callable")

    @pytest.mark.asyncio
    async def test_missing_request_data(self, client_options):
        callback = MagicMock()
        client = _client(client_options)
        with pytest.raises(CallContractError, match="no data provided"):
            client.rates(None, callback)
        callback.assert_not_called()

    @pytest.mark.asyncio
    async def test_callback_checked_before_data(self, client_options):
        client = _client(client_options)
        with pytest.raises(CallContractError, match="no callback specified"):
            client.ship(None, None)


class TestRatesCallback:
    """Test callback-style rate quotes."""

    @pytest.mark.asyncio
    async def test_success_invokes_callback_once(self, client_options, rate_request, rate_response_xml):
        callback = MagicMock()
        client = _client(client_options, rate_response_xml)

        result = await client.rates(rate_request, callback)

        callback.assert_called_once()
        error, value = callback.call_args.args
        assert error is None
        assert value["BkgDetails"]["QtdShp"]["ShippingCharge"] == "123.45"
        assert isinstance(result, CarrierResult)
        assert result.ok
        assert result.value is value

    @pytest.mark.asyncio
    async def test_transport_failure(self, client_options, rate_request):
        callback = MagicMock()
        client = _failing_client(client_options)

        result = await client.rates(rate_request, callback)

        callback.assert_called_once()
        error, value = callback.call_args.args
        assert isinstance(error, DHLTransportError)
        assert value is None
        assert not result.ok
        assert result.error is error

    @pytest.mark.asyncio
    async def test_unparseable_response(self, client_options, rate_request):
        callback = MagicMock()
        client = _client(client_options, "<html>gateway timeout")

        await client.rates(rate_request, callback)

        error, value = callback.call_args.args
        assert isinstance(error, ResponseParseError)
        assert value is None

    @pytest.mark.asyncio
    async def test_entity_declaration_reported_as_parse_error(self, client_options, rate_request):
        """Test a body xmltodict refuses still reaches the callback exactly once."""
        callback = MagicMock()
        client = _client(client_options, '<!DOCTYPE r [<!ENTITY a "x">]><r>&a;</r>')

        result = await client.rates(rate_request, callback)

        callback.assert_called_once()
        error, value = callback.call_args.args
        assert isinstance(error, ResponseParseError)
        assert error.code == "E-3002"
        assert value is None
        assert result.error is error

    @pytest.mark.asyncio
    async def test_unexpected_exception_reaches_callback(self, client_options, rate_request):
        callback = MagicMock()
        client = _client(client_options)

        with patch.object(client._transport, "send", AsyncMock(side_effect=RuntimeError("boom"))):
            result = await client.rates(rate_request, callback)

        callback.assert_called_once()
        error, value = callback.call_args.args
        assert isinstance(error, DHLClientError)
        assert error.code == "E-3003"
        assert "boom" in str(error)
        assert isinstance(error.__cause__, RuntimeError)
        assert value is None
        assert not result.ok

    @pytest.mark.asyncio
    async def test_carrier_error_document_delivered_as_value(self, client_options, rate_request, error_response_xml):
        callback = MagicMock()
        client = _client(client_options, error_response_xml, status_code=500)

        await client.rates(rate_request, callback)

        error, value = callback.call_args.args
        assert error is None
        assert "res:ErrorResponse" in value

    @pytest.mark.asyncio
    async def test_accepts_camel_case_dict(self, client_options, rate_response_xml):
        seen: list = []
        callback = MagicMock()
        client = _client(client_options, rate_response_xml, seen=seen)
        data = {
            "sender": {"countryCode": "US", "postalCode": "10001", "city": "New York"},
            "receiver": {"countryCode": "DE", "postalCode": "10115", "city": "Berlin"},
            "parcels": [{"width": 10, "height": 10, "depth": 10, "weight": 1}],
            "currencyCode": "USD",
        }

        await client.rates(data, callback)

        get_quote = _sent_document(seen[0])["p:DCTRequest"]["GetQuote"]
        assert get_quote["From"]["Postalcode"] == "10001"
        assert get_quote["To"]["City"] == "Berlin"
        assert get_quote["Dutiable"]["DeclaredCurrency"] == "USD"
        assert callback.call_args.args[0] is None


class TestShipCallback:
    """Test callback-style shipment creation."""

    @pytest.mark.asyncio
    async def test_success_returns_full_tree(self, client_options, shipment_request, shipment_response_xml):
        callback = MagicMock()
        client = _client(client_options, shipment_response_xml)

        await client.ship(shipment_request, callback)

        error, value = callback.call_args.args
        assert error is None
        assert value["res:ShipmentValidateResponse"]["AirwayBillNumber"] == "1234567890"

    @pytest.mark.asyncio
    async def test_default_options(self, client_options, sender, receiver, parcels, shipment_response_xml):
        seen: list = []
        callback = MagicMock()
        request = ShipmentRequest(sender=sender, receiver=receiver, parcels=parcels)
        client = _client(client_options, shipment_response_xml, seen=seen)

        await client.ship(request, callback)

        sent = _sent_document(seen[0])["req:ShipmentValidateRequest"]
        assert sent["SpecialService"]["SpecialServiceType"] == "SX"
        assert sent["LabelImageFormat"] == "PDF"
        assert request.options is None

    @pytest.mark.asyncio
    async def test_transport_failure(self, client_options, shipment_request):
        callback = MagicMock()
        client = _failing_client(client_options)

        result = await client.ship(shipment_request, callback)

        error, value = callback.call_args.args
        assert isinstance(error, DHLTransportError)
        assert "Name or service not known" in str(error)
        assert value is None
        assert result.error is error

    @pytest.mark.asyncio
    async def test_concurrent_calls_are_independent(self, client_options, shipment_request, shipment_response_xml):
        seen: list = []
        first, second = MagicMock(), MagicMock()
        client = _client(client_options, shipment_response_xml, seen=seen)

        task_one = client.ship(shipment_request, first)
        task_two = client.ship(shipment_request, second)
        await task_one
        await task_two

        first.assert_called_once()
        second.assert_called_once()
        refs = {
            _sent_document(r)["req:ShipmentValidateRequest"]["Request"]["ServiceHeader"]["MessageReference"]
            for r in seen
        }
        assert len(refs) == 2


class TestCoroutineApi:
    """Test the awaitable get_quote/create_shipment methods."""

    @pytest.mark.asyncio
    async def test_get_quote(self, client_options, rate_request, rate_response_xml):
        client = _client(client_options, rate_response_xml)
        quote = await client.get_quote(rate_request)
        assert quote["BkgDetails"]["QtdShp"]["ShippingCharge"] == "123.45"

    @pytest.mark.asyncio
    async def test_create_shipment(self, client_options, shipment_request, shipment_response_xml):
        client = _client(client_options, shipment_response_xml)
        result = await client.create_shipment(shipment_request)
        assert result["res:ShipmentValidateResponse"]["LabelImage"]["OutputFormat"] == "PDF"

    @pytest.mark.asyncio
    async def test_get_quote_raises_transport_error(self, client_options, rate_request):
        client = _failing_client(client_options)
        with pytest.raises(DHLTransportError) as exc_info:
            await client.get_quote(rate_request)
        assert exc_info.value.code == "E-3001"

    @pytest.mark.asyncio
    async def test_create_shipment_requires_data(self, client_options):
        client = _client(client_options)
        with pytest.raises(CallContractError, match="no data provided"):
            await client.create_shipment(None)


class TestBuildHelpers:

    def test_build_rate_quote_uses_config_credentials(self, client_options, rate_request):
        client = DHLClient(client_options)
        parsed = xmltodict.parse(client.build_rate_quote(rate_request))
        header = parsed["p:DCTRequest"]["GetQuote"]["Request"]["ServiceHeader"]
        assert header["SiteID"] == "test-site"
        assert header["Password"] == "test-pass"

    def test_build_shipment_from_dict(self, client_options):
        client = DHLClient({**client_options, "unitSystem": "imperial"})
        body = client.build_shipment({
            "sender": {"countryCode": "US", "city": "Reno", "address": "1 Main St"},
            "receiver": {"countryCode": "CA", "city": "Toronto", "address": ["9 King St"]},
            "parcels": [{"width": 12, "height": 12, "depth": 12, "weight": 3}],
        })
        details = xmltodict.parse(body)["req:ShipmentValidateRequest"]["ShipmentDetails"]
        assert details["WeightUnit"] == "L"
        assert details["DimensionUnit"] == "I"
        assert details["Pieces"]["Piece"]["DimWeight"] == "0.3"
