"""Error code registry with E-XXXX format codes.

This module defines the error code system for the DHL client, organizing
errors into categories:
- E-1xxx: Configuration errors
- E-2xxx: Call contract errors
- E-3xxx: Carrier / transport errors

Each error includes a code, title, message template, and remediation steps.
"""

from dataclasses import dataclass
from enum import Enum


class ErrorCategory(str, Enum):
    """Categories for error codes."""

    CONFIGURATION = "configuration"  # E-1xxx
    CALL_CONTRACT = "call_contract"  # E-2xxx
    CARRIER = "carrier"  # E-3xxx


@dataclass
class ErrorCode:
    """Definition of an error code with metadata.

    Attributes:
        code: Error code in E-XXXX format.
        category: Error category for grouping.
        title: Short title for display.
        message_template: Message with {placeholders} for context.
        remediation: Action user should take to resolve.
        is_retryable: Whether the operation can be retried without user action.
    """

    code: str  # E-XXXX format
    category: ErrorCategory
    title: str  # Short title for display
    message_template: str  # Message with {placeholders}
    remediation: str  # Action user should take
    is_retryable: bool = False  # Can be retried without user action


# Error registry - all defined error codes
ERROR_REGISTRY: dict[str, ErrorCode] = {
    # Configuration errors (E-1xxx)
    "E-1001": ErrorCode(
        code="E-1001",
        category=ErrorCategory.CONFIGURATION,
        title="Missing Options",
        message_template="missing options",
        remediation="Pass a mapping with at least siteId and password to the client.",
    ),
    "E-1002": ErrorCode(
        code="E-1002",
        category=ErrorCategory.CONFIGURATION,
        title="Missing Required Option",
        message_template="missing {field}",
        remediation="Supply the DHL XML-PI credential '{field}' issued for your account.",
    ),
    "E-1003": ErrorCode(
        code="E-1003",
        category=ErrorCategory.CONFIGURATION,
        title="Invalid Option Value",
        message_template="invalid {field}",
        remediation="Use one of: {allowed}.",
    ),
    # Call contract errors (E-2xxx)
    "E-2001": ErrorCode(
        code="E-2001",
        category=ErrorCategory.CALL_CONTRACT,
        title="Missing Callback",
        message_template="no callback specified",
        remediation="Pass a callable taking (error, result), or await the coroutine API.",
    ),
    "E-2002": ErrorCode(
        code="E-2002",
        category=ErrorCategory.CALL_CONTRACT,
        title="Missing Request Data",
        message_template="no data provided",
        remediation="Pass a request model or mapping describing the shipment.",
    ),
    # Carrier errors (E-3xxx)
    "E-3001": ErrorCode(
        code="E-3001",
        category=ErrorCategory.CARRIER,
        title="Carrier Unreachable",
        message_template="request to {host} failed: {error}",
        remediation="Check network connectivity to the DHL endpoint and retry.",
        is_retryable=True,
    ),
    "E-3002": ErrorCode(
        code="E-3002",
        category=ErrorCategory.CARRIER,
        title="Unparseable Carrier Response",
        message_template="unable to parse response into json",
        remediation="The carrier returned malformed XML. Enable debug logging to inspect the raw body.",
    ),
    "E-3003": ErrorCode(
        code="E-3003",
        category=ErrorCategory.CARRIER,
        title="Unexpected Client Failure",
        message_template="unexpected error: {error}",
        remediation="Enable debug logging and report the traceback.",
    ),
}


def get_error(code: str) -> ErrorCode | None:
    """Get error definition by code.

    Args:
        code: Error code in E-XXXX format.

    Returns:
        ErrorCode if found, None otherwise.
    """
    return ERROR_REGISTRY.get(code)


def get_errors_by_category(category: ErrorCategory) -> list[ErrorCode]:
    """Get all errors in a category."""
    return [e for e in ERROR_REGISTRY.values() if e.category == category]
