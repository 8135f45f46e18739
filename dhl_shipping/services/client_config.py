"""Client configuration for the DHL XML-PI client.

Validates caller-supplied options, merges them over the documented
defaults and produces an immutable ``ClientConfig``. Credentials are
passed programmatically; nothing here reads the environment.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from dhl_shipping.errors import ConfigurationError
from dhl_shipping.services.dhl_constants import (
    DEFAULT_USER_AGENT,
    DHL_HOSTS,
    Mode,
    UnitSystem,
)

REQUIRED_OPTIONS: tuple[str, ...] = ("siteId", "password")

# camelCase option name -> ClientConfig field
_OPTION_FIELDS: dict[str, str] = {
    "mode": "mode",
    "unitSystem": "unit_system",
    "userAgent": "user_agent",
    "debugLogging": "debug_logging",
    "accountNumber": "account_number",
    "siteId": "site_id",
    "password": "password",
}

DEFAULT_OPTIONS: dict[str, Any] = {
    "mode": Mode.STAGING.value,
    "unitSystem": UnitSystem.METRIC.value,
    "userAgent": DEFAULT_USER_AGENT,
    "debugLogging": True,
    "accountNumber": "",
}


@dataclass(frozen=True)
class ClientConfig:
    """Immutable settings for one client instance."""

    site_id: str
    password: str = field(repr=False)
    mode: Mode = Mode.STAGING
    unit_system: UnitSystem = UnitSystem.METRIC
    user_agent: str = DEFAULT_USER_AGENT
    debug_logging: bool = True
    account_number: str = ""

    def __post_init__(self) -> None:
        if not self.site_id:
            raise ConfigurationError.from_code("E-1002", field="siteId")
        if not self.password:
            raise ConfigurationError.from_code("E-1002", field="password")

    @property
    def host(self) -> str:
        """Endpoint host selected by ``mode``."""
        return DHL_HOSTS[self.mode]


def _normalize_keys(options: Mapping[str, Any]) -> dict[str, Any]:
    """Map snake_case option names onto their camelCase spelling."""
    snake_to_camel = {v: k for k, v in _OPTION_FIELDS.items()}
    return {snake_to_camel.get(key, key): value for key, value in options.items()}


def _coerce_enum(enum_cls: type, field_name: str, value: Any):
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ConfigurationError.from_code(
            "E-1003", field=field_name, allowed=allowed,
        ) from None


def configure(options: Mapping[str, Any] | None) -> ClientConfig:
    """Validate options and merge them over the defaults.

    Args:
        options: Mapping with camelCase (``siteId``) or snake_case
            (``site_id``) keys. Not mutated.

    Returns:
        Frozen ClientConfig.

    Raises:
        ConfigurationError: If options are absent, a required credential is
            missing or empty, or ``mode``/``unitSystem`` is not recognised.
    """
    if options is None:
        raise ConfigurationError.from_code("E-1001")

    supplied = _normalize_keys(options)
    for name in REQUIRED_OPTIONS:
        if not supplied.get(name):
            raise ConfigurationError.from_code("E-1002", field=name)

    merged = {**DEFAULT_OPTIONS, **supplied}

    return ClientConfig(
        site_id=str(merged["siteId"]),
        password=str(merged["password"]),
        mode=_coerce_enum(Mode, "mode", merged["mode"]),
        unit_system=_coerce_enum(UnitSystem, "unitSystem", merged["unitSystem"]),
        user_agent=str(merged["userAgent"]),
        debug_logging=bool(merged["debugLogging"]),
        account_number=str(merged["accountNumber"] or ""),
    )
