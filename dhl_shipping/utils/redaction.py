"""Secret redaction utility for safe logging.

Keeps the XML-PI password (and anything else that looks like a
credential) out of diagnostic logs. Keys are matched by case-insensitive
substring. Nested dicts, lists of dicts and dataclass instances such as
``ClientConfig`` are walked recursively.
"""

from dataclasses import asdict, is_dataclass
from enum import Enum
from typing import Any

# Substring patterns matched case-insensitively against dict keys
_DEFAULT_SENSITIVE_PATTERNS = frozenset({
    "password", "secret", "token", "authorization", "credential",
})

_REDACTED = "***REDACTED***"


def _is_sensitive_key(key: str, sensitive_patterns: frozenset[str]) -> bool:
    key_lower = key.lower()
    return any(pattern in key_lower for pattern in sensitive_patterns)


def _redact_value(value: Any, sensitive_patterns: frozenset[str]) -> Any:
    if isinstance(value, dict):
        return redact_for_logging(value, sensitive_patterns)
    if isinstance(value, list):
        return [_redact_value(item, sensitive_patterns) for item in value]
    if isinstance(value, Enum):
        return value.value
    return value


def redact_for_logging(
    obj: Any,
    sensitive_patterns: frozenset[str] = _DEFAULT_SENSITIVE_PATTERNS,
) -> dict:
    """Redact sensitive values from a dict or dataclass for safe logging.

    Args:
        obj: Dict or dataclass instance to redact. Not mutated.
        sensitive_patterns: Substring patterns whose matching keys' values
            should be replaced. Matching is case-insensitive.

    Returns:
        New dict with sensitive values replaced by '***REDACTED***' and
        enum members rendered as their values.
    """
    if is_dataclass(obj) and not isinstance(obj, type):
        obj = asdict(obj)
    result = {}
    for key, value in obj.items():
        if _is_sensitive_key(str(key), sensitive_patterns):
            result[key] = _REDACTED
        else:
            result[key] = _redact_value(value, sensitive_patterns)
    return result
