"""Error handling framework for the DHL client.

This package provides:
- Error code registry with E-XXXX format codes
- Typed client errors and formatting utilities

Error categories:
- E-1xxx: Configuration errors
- E-2xxx: Call contract errors
- E-3xxx: Carrier / transport errors
"""

from dhl_shipping.errors.registry import (
    ErrorCategory,
    ErrorCode,
    ERROR_REGISTRY,
    get_error,
    get_errors_by_category,
)
from dhl_shipping.errors.formatter import (
    CallContractError,
    ConfigurationError,
    DHLClientError,
    ResponseParseError,
    TransportError,
    format_error,
)

__all__ = [
    # Registry
    "ErrorCode",
    "ErrorCategory",
    "ERROR_REGISTRY",
    "get_error",
    "get_errors_by_category",
    # Client errors
    "DHLClientError",
    "ConfigurationError",
    "CallContractError",
    "TransportError",
    "ResponseParseError",
    "format_error",
]
