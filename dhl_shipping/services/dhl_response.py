"""Response unwrapping for DHL XML-PI replies.

The transport hands back the xmltodict tree of the whole response
document. These helpers strip the operation envelope. No schema
validation happens here; callers read carrier fields by path.
"""

import logging
from typing import Any

from dhl_shipping.services.dhl_constants import (
    RATE_QUOTE_RESPONSE_BODY,
    RATE_QUOTE_RESPONSE_ROOT,
)

logger = logging.getLogger(__name__)


def unwrap_rate_quote(parsed: dict[str, Any]) -> Any:
    """Return the ``res:DCTResponse/GetQuoteResponse`` subtree.

    When the envelope is absent, e.g. DHL answered with an
    ``ErrorResponse`` document, the whole tree is returned unchanged so
    the caller still sees the carrier's fault (see ``extract_conditions``).
    """
    envelope = parsed.get(RATE_QUOTE_RESPONSE_ROOT) if isinstance(parsed, dict) else None
    if not isinstance(envelope, dict) or RATE_QUOTE_RESPONSE_BODY not in envelope:
        logger.warning(
            "Rate response has no %s/%s envelope; top-level keys: %s",
            RATE_QUOTE_RESPONSE_ROOT, RATE_QUOTE_RESPONSE_BODY,
            list(parsed) if isinstance(parsed, dict) else type(parsed).__name__,
        )
        return parsed
    return envelope[RATE_QUOTE_RESPONSE_BODY]


def unwrap_shipment(parsed: dict[str, Any]) -> dict[str, Any]:
    """Shipment responses are returned as parsed, envelope included."""
    return parsed


def extract_conditions(parsed: Any) -> list[dict[str, str | None]]:
    """Collect every ``Condition`` (ConditionCode/ConditionData) in the tree.

    DHL reports faults and notes as ``Status/Condition`` or
    ``Note/Condition`` nodes at varying depths depending on the operation.

    Args:
        parsed: Response tree from the transport.

    Returns:
        List of {"code", "data"} dicts in document order.
    """
    conditions: list[dict[str, str | None]] = []

    def _walk(node: Any) -> None:
        if isinstance(node, list):
            for item in node:
                _walk(item)
            return
        if not isinstance(node, dict):
            return
        for key, value in node.items():
            if key == "Condition":
                items = value if isinstance(value, list) else [value]
                for item in items:
                    if isinstance(item, dict):
                        conditions.append({
                            "code": item.get("ConditionCode"),
                            "data": item.get("ConditionData"),
                        })
            else:
                _walk(value)

    _walk(parsed)
    return conditions
