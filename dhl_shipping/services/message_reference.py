"""Message reference generation for the XML-PI ServiceHeader.

DHL asks for "a string, preferably number, to uniquely identify individual
messages" between 28 and 32 characters long. A fresh value is drawn for
every request.
"""

import random
import string

from dhl_shipping.services.dhl_constants import (
    MESSAGE_REFERENCE_MAX_LEN,
    MESSAGE_REFERENCE_MIN_LEN,
)


def generate_message_reference() -> str:
    """Return a random digit string of length 28-32 inclusive."""
    length = random.randint(MESSAGE_REFERENCE_MIN_LEN, MESSAGE_REFERENCE_MAX_LEN)
    return "".join(random.choices(string.digits, k=length))
