"""HTTP Basic credential extraction.

Parses `Authorization: Basic base64(email:password)`. Anything that isn't a
well-formed Basic header yields None; this module never raises on bad input.
"""

import base64
import binascii
import re
from dataclasses import dataclass
from typing import Optional

# scheme is case-insensitive; token is standard base64 with optional padding
_BASIC_RE = re.compile(r"^ *[Bb][Aa][Ss][Ii][Cc] +([A-Za-z0-9+/]+=*) *$")


@dataclass(frozen=True)
class BasicCredentials:
    username: str
    password: str

    def __repr__(self) -> str:
        return f"BasicCredentials(username={self.username!r}, password='***')"


def parse_basic_authorization(header: Optional[str]) -> Optional[BasicCredentials]:
    """Return the (username, password) pair from a Basic header, or None."""
    if not header:
        return None

    match = _BASIC_RE.match(header)
    if not match:
        return None

    try:
        decoded = base64.b64decode(match.group(1), validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return None

    username, sep, password = decoded.partition(":")
    if not sep:
        return None

    return BasicCredentials(username=username, password=password)
