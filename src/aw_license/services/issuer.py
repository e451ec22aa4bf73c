# AW License - Domain-Locked License Keys
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""License issuer: build, sign and assemble license keys.

Runs only on the operator's machine. It is the sole holder of the private
key; nothing produced here is persisted.
"""

import secrets
from collections.abc import Callable
from datetime import date, datetime, timedelta, timezone
from typing import Final

from beartype import beartype
from cryptography.hazmat.primitives.asymmetric import ec

from ..core.encoding import b64url_encode
from ..core.exceptions import IssuerArgumentError
from ..core.keys import load_signing_key, sign_p1363
from ..core.logging_utils import get_logger
from ..models.license import IssuedLicense, LicenseKey, LicensePayload

LICENSE_ID_PREFIX: Final = "aw_"
DEFAULT_MONTHS: Final = 12
DEFAULT_TIER: Final = "pro"

_FORBIDDEN_DOMAIN_CHARS: Final = frozenset("/:?#@ \t\r\n")

logger = get_logger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@beartype
def add_months(start: date, months: int) -> date:
    """Add calendar months.

    A day that does not exist in the target month rolls over into the next
    one: 2025-01-31 plus one month is 2025-03-03.
    """
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    return date(year, month, 1) + timedelta(days=start.day - 1)


@beartype
def normalize_domain(domain: str | None) -> str:
    """Lowercase a bare host name; reject schemes, ports and paths."""
    if domain is None or not domain.strip():
        raise IssuerArgumentError("--domain is required")
    normalized = domain.strip().lower()
    if any(ch in _FORBIDDEN_DOMAIN_CHARS for ch in normalized):
        raise IssuerArgumentError(
            f"--domain must be a bare host name without scheme, port or path: {domain!r}"
        )
    return normalized


def generate_license_id() -> str:
    """Fresh license id: fixed tag plus 64 random bits as hex."""
    return f"{LICENSE_ID_PREFIX}{secrets.token_hex(8)}"


class LicenseIssuer:
    """Issue signed license keys with an ECDSA P-256 private key."""

    def __init__(
        self,
        signing_key: ec.EllipticCurvePrivateKey,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize the issuer.

        Args:
            signing_key: P-256 private key
            clock: Returns the current time; defaults to UTC wall clock
        """
        if not isinstance(signing_key.curve, ec.SECP256R1):
            raise IssuerArgumentError("Signing key must be on curve P-256")
        self._signing_key = signing_key
        self._clock = clock or _utc_now

    @classmethod
    def from_jwk_json(
        cls, raw: str | None, clock: Callable[[], datetime] | None = None
    ) -> "LicenseIssuer":
        """Build an issuer from a JWK JSON string. Raises ``KeyLoadError``."""
        return cls(load_signing_key(raw), clock=clock)

    @beartype
    def build_payload(
        self, domain: str, months: int = DEFAULT_MONTHS, tier: str = DEFAULT_TIER
    ) -> LicensePayload:
        """Validate issuer input and build the claim to sign."""
        normalized = normalize_domain(domain)
        if isinstance(months, bool) or months < 1:
            raise IssuerArgumentError("--months must be a positive integer")
        if not tier or not tier.strip():
            raise IssuerArgumentError("--tier must not be empty")

        today = self._clock().astimezone(timezone.utc).date()
        expiry = add_months(today, months)
        return LicensePayload(
            d=normalized,
            e=expiry.isoformat(),
            t=tier.strip(),
            i=generate_license_id(),
        )

    @beartype
    def sign(self, payload: LicensePayload) -> IssuedLicense:
        """Encode and sign ``payload`` into a license key."""
        payload_segment = LicenseKey.encode_payload(payload)
        signature = sign_p1363(self._signing_key, payload_segment.encode("ascii"))
        key = LicenseKey(
            payload_segment=payload_segment,
            signature_segment=b64url_encode(signature),
        )
        return IssuedLicense(key=key, payload=payload)

    @beartype
    def issue(
        self, domain: str, months: int = DEFAULT_MONTHS, tier: str = DEFAULT_TIER
    ) -> IssuedLicense:
        """Issue one license key for ``domain``."""
        issued = self.sign(self.build_payload(domain, months=months, tier=tier))
        logger.info(
            "Issued license %s for %s (tier=%s, expires=%s)",
            issued.payload.i,
            issued.payload.d,
            issued.payload.t,
            issued.payload.e,
        )
        return issued
