"""ISO country code to display name lookup.

The table is read once from ``dhl_shipping/data/country_codes.json`` at
import time and exposed as a read-only mapping. The request builder uses
it to fill ``CountryName`` next to every ``CountryCode``.
"""

import json
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType

_COUNTRY_CODES_PATH = Path(__file__).resolve().parent.parent / "data" / "country_codes.json"


def load_country_codes(path: Path = _COUNTRY_CODES_PATH) -> Mapping[str, str]:
    """Load a ``[{"Code": ..., "Name": ...}]`` file into an immutable mapping."""
    with open(path, encoding="utf-8") as f:
        entries = json.load(f)
    return MappingProxyType({entry["Code"]: entry["Name"] for entry in entries})


COUNTRY_CODES: Mapping[str, str] = load_country_codes()


def country_name(code: str | None, table: Mapping[str, str] = COUNTRY_CODES) -> str | None:
    """Return the display name for ``code``, or None when it is unknown."""
    if not code:
        return None
    return table.get(code.upper())
