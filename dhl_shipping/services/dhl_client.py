"""DHL XML-PI client.

Composes configuration, payload building, transport and response
unwrapping. Two calling styles are offered:

- Coroutines that return the unwrapped response or raise::

      client = DHLClient({"siteId": "...", "password": "..."})
      quote = await client.get_quote(rate_request)

- Callback style, mirroring the carrier SDK convention of
  ``callback(error, result)``. The call returns an ``asyncio.Task`` that
  invokes the callback exactly once and resolves to a ``CarrierResult``::

      task = client.rates(rate_request, on_quote)
      result = await task

The client keeps no per-call state; concurrent calls on one instance are
independent. Requests are never retried or cancelled by the client.
"""

import asyncio
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel

from dhl_shipping.errors import CallContractError, DHLClientError
from dhl_shipping.services.client_config import ClientConfig, configure
from dhl_shipping.services.dhl_models import RateQuoteRequest, ShipmentRequest
from dhl_shipping.services.dhl_payload_builder import (
    build_rate_quote_body,
    build_shipment_body,
)
from dhl_shipping.services.dhl_response import unwrap_rate_quote, unwrap_shipment
from dhl_shipping.services.dhl_transport import DHLTransport
from dhl_shipping.utils.redaction import redact_for_logging

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)
Callback = Callable[[DHLClientError | None, Any], Any]


@dataclass(frozen=True)
class CarrierResult:
    """Outcome of one carrier call: exactly one of error/value is set."""

    error: DHLClientError | None = None
    value: Any = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _coerce_request(model_cls: type[ModelT], request: Any) -> ModelT:
    """Accept a model instance or a mapping of request fields.

    Raises:
        CallContractError: If no request data was given.
        pydantic.ValidationError: If the mapping does not fit the model.
    """
    if request is None:
        raise CallContractError.from_code("E-2002")
    if isinstance(request, model_cls):
        return request
    if isinstance(request, Mapping):
        return model_cls.model_validate(request)
    return model_cls.model_validate(request, from_attributes=True)


def _require_callback(callback: Callback | None) -> None:
    if callback is None or not callable(callback):
        raise CallContractError.from_code("E-2001")


class DHLClient:
    """Client for DHL XML-PI rate quotes and shipment creation."""

    def __init__(
        self,
        options: Mapping[str, Any] | ClientConfig | None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize client.

        Args:
            options: Client options (``siteId`` and ``password`` required)
                or a prebuilt ClientConfig.
            transport: Optional httpx transport override (tests, proxies).

        Raises:
            ConfigurationError: If options are missing or invalid.
        """
        self.config = options if isinstance(options, ClientConfig) else configure(options)
        self._transport = DHLTransport(self.config, transport=transport)
        logger.debug("DHL client configured: %s", redact_for_logging(self.config))

    # -- coroutine API -----------------------------------------------------

    async def get_quote(self, request: RateQuoteRequest | Mapping[str, Any]) -> Any:
        """Request a rate quote.

        Returns:
            The ``GetQuoteResponse`` subtree of the carrier reply.

        Raises:
            TransportError: If the carrier could not be reached.
            ResponseParseError: If the reply is not well-formed XML.
        """
        body = self.build_rate_quote(request)
        parsed = await self._transport.send(body)
        return unwrap_rate_quote(parsed)

    async def create_shipment(self, request: ShipmentRequest | Mapping[str, Any]) -> dict[str, Any]:
        """Create a shipment.

        Returns:
            The full parsed ``ShipmentValidateResponse`` (or error) document.

        Raises:
            TransportError: If the carrier could not be reached.
            ResponseParseError: If the reply is not well-formed XML.
        """
        body = self.build_shipment(request)
        parsed = await self._transport.send(body)
        return unwrap_shipment(parsed)

    # -- callback API ------------------------------------------------------

    def rates(
        self,
        request: RateQuoteRequest | Mapping[str, Any],
        callback: Callback | None = None,
    ) -> "asyncio.Task[CarrierResult]":
        """Request a rate quote and report it through ``callback(error, result)``.

        Must be called from a running event loop. Argument problems raise
        immediately; everything after the request is built goes to the
        callback.

        Raises:
            CallContractError: If ``callback`` or ``request`` is missing.
        """
        _require_callback(callback)
        body = self.build_rate_quote(request)
        return self._dispatch(body, unwrap_rate_quote, callback)

    def ship(
        self,
        request: ShipmentRequest | Mapping[str, Any],
        callback: Callback | None = None,
    ) -> "asyncio.Task[CarrierResult]":
        """Create a shipment and report it through ``callback(error, result)``.

        When ``request.options`` is omitted the shipment is built with no
        signature and a PDF label.

        Raises:
            CallContractError: If ``callback`` or ``request`` is missing.
        """
        _require_callback(callback)
        body = self.build_shipment(request)
        return self._dispatch(body, unwrap_shipment, callback)

    # -- helpers -----------------------------------------------------------

    def build_rate_quote(self, request: RateQuoteRequest | Mapping[str, Any]) -> str:
        """Serialize a rate quote request without sending it."""
        return build_rate_quote_body(_coerce_request(RateQuoteRequest, request), self.config)

    def build_shipment(self, request: ShipmentRequest | Mapping[str, Any]) -> str:
        """Serialize a shipment request without sending it."""
        return build_shipment_body(_coerce_request(ShipmentRequest, request), self.config)

    def _dispatch(
        self,
        body: str,
        unwrap: Callable[[dict[str, Any]], Any],
        callback: Callback,
    ) -> "asyncio.Task[CarrierResult]":
        async def _run() -> CarrierResult:
            try:
                parsed = await self._transport.send(body)
                result = CarrierResult(value=unwrap(parsed))
            except DHLClientError as e:
                result = CarrierResult(error=e)
            except Exception as e:
                logger.exception("Unexpected failure during DHL request")
                error = DHLClientError.from_code(
                    "E-3003",
                    error=str(e) or type(e).__name__,
                    details={"cause": repr(e)},
                )
                error.__cause__ = e
                result = CarrierResult(error=error)
            callback(result.error, result.value)
            return result

        return asyncio.get_running_loop().create_task(_run())
