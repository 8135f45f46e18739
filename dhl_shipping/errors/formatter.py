"""Client error types and formatting.

This module provides:
- DHLClientError base exception built from registry codes
- One subclass per failure kind the client reports
- Error formatting for display
"""

from dataclasses import dataclass, field

from dhl_shipping.errors.registry import get_error


@dataclass
class DHLClientError(Exception):
    """Client error with code, message, and context.

    Attributes:
        code: Error code in E-XXXX format.
        message: Human-readable error message.
        remediation: Action user should take to resolve.
        is_retryable: Whether the operation can be retried without user action.
        details: Additional context dictionary.
    """

    code: str
    message: str
    remediation: str = ""
    is_retryable: bool = False
    details: dict = field(default_factory=dict)

    def __str__(self) -> str:
        """Return string representation of the error."""
        return self.message

    @classmethod
    def from_code(cls, code: str, **kwargs: object) -> "DHLClientError":
        """Create error from registry code with context substitution.

        Args:
            code: Error code in E-XXXX format.
            **kwargs: Context values for message and remediation templates.
                The special key 'details' is stored on the error instead.

        Returns:
            Instance of ``cls`` with formatted message.
        """
        details = kwargs.pop("details", None)
        if not isinstance(details, dict):
            details = {}

        error_def = get_error(code)
        if not error_def:
            return cls(
                code=code,
                message=f"Unknown error: {code}",
                details=details,
            )

        message = error_def.message_template
        remediation = error_def.remediation
        try:
            message = message.format(**kwargs)
            remediation = remediation.format(**kwargs)
        except KeyError:
            # Keep template if some placeholders are missing
            pass

        return cls(
            code=error_def.code,
            message=message,
            remediation=remediation,
            is_retryable=error_def.is_retryable,
            details=details,
        )


class ConfigurationError(DHLClientError):
    """Constructor options are missing or invalid. Never retried."""


class CallContractError(DHLClientError):
    """A public method was called without its required arguments."""


class TransportError(DHLClientError):
    """The HTTPS request to the carrier failed before a response arrived.

    The underlying exception is chained as ``__cause__``.
    """


class ResponseParseError(DHLClientError):
    """The carrier answered with a body that is not well-formed XML."""


def format_error(error: DHLClientError, include_remediation: bool = True) -> str:
    """Format error for display to user.

    Args:
        error: The DHLClientError to format.
        include_remediation: Whether to include remediation steps.

    Returns:
        Multi-line formatted string suitable for user display.
    """
    lines = [f"{error.code}: {error.message}"]
    if include_remediation and error.remediation:
        lines.append(f"  Action: {error.remediation}")
    return "\n".join(lines)
