"""HTTPS transport for DHL XML-PI requests.

One POST per call, no retries and no redirect following. The response
body is buffered in full and converted to a dict with ``xmltodict``.
Network failures and malformed XML are reported as distinct errors so
callers can tell "carrier unreachable" from "carrier returned garbage".

Example:
    transport = DHLTransport(config)
    parsed = await transport.send(xml_body)
"""

import logging
from typing import Any
from xml.parsers.expat import ExpatError

import httpx
import xmltodict

from dhl_shipping.errors import ResponseParseError, TransportError
from dhl_shipping.services.client_config import ClientConfig
from dhl_shipping.services.dhl_constants import DHL_REQUEST_PATH

logger = logging.getLogger(__name__)


class DHLTransport:
    """Posts XML bodies to the host selected by the client's mode."""

    def __init__(
        self,
        config: ClientConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize transport.

        Args:
            config: Client configuration (mode, user agent, debug flag).
            transport: Optional httpx transport, e.g. ``httpx.MockTransport``
                in tests. Defaults to httpx's network transport.
        """
        self._config = config
        self._transport = transport

    @property
    def url(self) -> str:
        return f"https://{self._config.host}{DHL_REQUEST_PATH}"

    def build_headers(self, xml_body: str) -> dict[str, str]:
        """Request headers; Content-Length is the UTF-8 byte length of the body."""
        return {
            "Content-Type": "text/xml",
            "Content-Length": str(len(xml_body.encode("utf-8"))),
            "User-Agent": self._config.user_agent,
        }

    async def send(self, xml_body: str) -> dict[str, Any]:
        """POST an XML document and return the parsed response.

        Args:
            xml_body: Serialized request document.

        Returns:
            Response tree as produced by ``xmltodict.parse``.

        Raises:
            TransportError: On connection, TLS or protocol failure.
            ResponseParseError: If the response body is not well-formed XML.
        """
        if self._config.debug_logging:
            logger.info(
                "Sending request to %s server at %s",
                self._config.mode.value, self._config.host,
            )
            logger.debug("Request XML:\n%s", xml_body)

        try:
            async with httpx.AsyncClient(
                transport=self._transport,
                follow_redirects=False,
            ) as client:
                response = await client.post(
                    self.url,
                    content=xml_body.encode("utf-8"),
                    headers=self.build_headers(xml_body),
                )
        except httpx.HTTPError as e:
            logger.error("DHL request to %s failed: %s", self._config.host, e)
            raise TransportError.from_code(
                "E-3001",
                host=self._config.host,
                error=str(e) or type(e).__name__,
                details={"cause": repr(e)},
            ) from e

        if self._config.debug_logging:
            logger.debug("Response XML:\n%s", response.text)

        if response.is_error:
            logger.warning(
                "DHL responded with HTTP %d; parsing body anyway",
                response.status_code,
            )

        return self._parse(response.content)

    def _parse(self, body: bytes) -> dict[str, Any]:
        """Parse raw response bytes; the XML declaration picks the encoding.

        Malformed XML raises ExpatError; entity declarations are refused by
        xmltodict with ValueError. Both mean the body is unusable.
        """
        try:
            return xmltodict.parse(body)
        except (ExpatError, ValueError) as e:
            if self._config.debug_logging:
                logger.debug("Unparseable response: %s", e)
            raise ResponseParseError.from_code(
                "E-3002",
                details={"cause": str(e)},
            ) from e
