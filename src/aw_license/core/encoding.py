"""Base64url helpers shared by the issuer and the verifier."""

import base64
import binascii
import re

from beartype import beartype

from .exceptions import MalformedKeyError

_B64URL_RE = re.compile(r"[A-Za-z0-9_-]*")


@beartype
def b64url_encode(data: bytes) -> str:
    """Encode bytes as unpadded base64url text."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


@beartype
def b64url_decode(text: str) -> bytes:
    """Decode unpadded base64url text.

    Only the canonical encoding is accepted: the alphabet is strict and the
    input must re-encode to exactly the same string. Anything else raises
    ``MalformedKeyError``.
    """
    if not _B64URL_RE.fullmatch(text):
        raise MalformedKeyError("Invalid base64url alphabet")

    padded = text + "=" * (-len(text) % 4)
    try:
        data = base64.urlsafe_b64decode(padded)
    except (binascii.Error, ValueError) as e:
        raise MalformedKeyError(f"Invalid base64url data: {e}") from e

    if b64url_encode(data) != text:
        raise MalformedKeyError("Non-canonical base64url data")
    return data
