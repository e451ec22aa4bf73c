# AW License - Domain-Locked License Keys
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""License payload and license key models.

Wire format::

    AW-<base64url(JSON({d, e, t, i}))>.<base64url(r || s)>

The signature covers the ASCII bytes of the payload segment exactly as it
appears in the key, never a re-serialization of the JSON.
"""

import json
import re
from datetime import date, datetime, time, timezone
from typing import Any, Final

from attrs import field, frozen
from beartype import beartype
from pydantic import Field, ValidationError

from ..core.encoding import b64url_decode, b64url_encode
from ..core.exceptions import LicenseExpiredError, MalformedKeyError
from .base import BaseModelConfig

KEY_PREFIX: Final = "AW-"
SEGMENT_SEPARATOR: Final = "."

_ISO_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
# Expiry is inclusive: the license runs to the last second of its UTC day.
_END_OF_DAY = time(23, 59, 59, tzinfo=timezone.utc)


class LicensePayload(BaseModelConfig):
    """The signed claim carried by a license key."""

    d: str = Field(..., min_length=1, description="Licensed domain, lowercase")
    e: str = Field(..., min_length=1, description="Inclusive expiry date YYYY-MM-DD")
    t: str = Field(..., min_length=1, description="Tier label")
    i: str = Field(..., min_length=1, description="Unique license identifier")

    @property
    def expiry_date(self) -> date:
        """Parse ``e`` as a calendar date."""
        if not _ISO_DATE_RE.fullmatch(self.e):
            raise LicenseExpiredError(f"Unparsable expiry date: {self.e!r}")
        try:
            return date.fromisoformat(self.e)
        except ValueError as e:
            raise LicenseExpiredError(f"Unparsable expiry date: {self.e!r}") from e

    @property
    def expires_at(self) -> datetime:
        """End of the expiry day in UTC."""
        return datetime.combine(self.expiry_date, _END_OF_DAY)

    @beartype
    def is_expired(self, now: datetime) -> bool:
        """Check whether the license has run out at ``now``."""
        return self.expires_at < now

    @beartype
    def to_json(self) -> str:
        """Serialize to single-line JSON in ``d, e, t, i`` order."""
        return json.dumps(
            {"d": self.d, "e": self.e, "t": self.t, "i": self.i},
            separators=(",", ":"),
            ensure_ascii=False,
        )

    @classmethod
    def from_json(cls, text: str) -> "LicensePayload":
        """Parse payload JSON. Any shape problem is a ``MalformedKeyError``."""
        try:
            data: Any = json.loads(text)
        except json.JSONDecodeError as e:
            raise MalformedKeyError("Payload is not valid JSON") from e
        if not isinstance(data, dict):
            raise MalformedKeyError("Payload JSON is not an object")
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            missing = sorted({str(err["loc"][0]) for err in e.errors() if err["loc"]})
            raise MalformedKeyError(
                f"Payload fields missing or invalid: {', '.join(missing)}"
            ) from e


@frozen
class LicenseKey:
    """A license key split into its two base64url segments."""

    payload_segment: str = field()
    signature_segment: str = field()

    @classmethod
    def parse(cls, text: str) -> "LicenseKey":
        """Split ``AW-<payload>.<signature>`` on the last dot."""
        if not isinstance(text, str) or not text.startswith(KEY_PREFIX):
            raise MalformedKeyError("Missing license key prefix")
        body = text[len(KEY_PREFIX) :]
        payload_segment, sep, signature_segment = body.rpartition(SEGMENT_SEPARATOR)
        if not sep:
            raise MalformedKeyError("License key has no signature separator")
        if not payload_segment or not signature_segment:
            raise MalformedKeyError("License key has an empty segment")
        return cls(payload_segment=payload_segment, signature_segment=signature_segment)

    @classmethod
    @beartype
    def encode_payload(cls, payload: LicensePayload) -> str:
        """Produce the payload segment for ``payload``."""
        return b64url_encode(payload.to_json().encode("utf-8"))

    @property
    def signed_bytes(self) -> bytes:
        """The exact bytes the signature covers."""
        try:
            return self.payload_segment.encode("ascii")
        except UnicodeEncodeError as e:
            raise MalformedKeyError("Payload segment is not ASCII") from e

    def decode_payload(self) -> LicensePayload:
        """Decode the payload segment into a ``LicensePayload``."""
        raw = b64url_decode(self.payload_segment)
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedKeyError("Payload is not valid UTF-8") from e
        return LicensePayload.from_json(text)

    def decode_signature(self) -> bytes:
        return b64url_decode(self.signature_segment)

    def __str__(self) -> str:
        return f"{KEY_PREFIX}{self.payload_segment}{SEGMENT_SEPARATOR}{self.signature_segment}"


@frozen
class IssuedLicense:
    """Result of one issuer run: the key and the claim it carries."""

    key: LicenseKey = field()
    payload: LicensePayload = field()

    @property
    def license_key(self) -> str:
        return str(self.key)
