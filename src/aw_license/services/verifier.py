# AW License - Domain-Locked License Keys
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""License verification.

``validate_license`` is the whole public surface embedders rely on: it takes
a key string and a host name and answers with a boolean. Every failure,
whatever its cause, collapses to ``False`` so callers cannot tell which check
rejected a key. The reason is only written to the local debug log.
"""

import asyncio
from collections.abc import Callable, Mapping
from datetime import datetime, timezone
from functools import lru_cache
from types import MappingProxyType
from typing import Any

from beartype import beartype

from ..core.exceptions import (
    CryptoUnavailableError,
    DomainMismatchError,
    LicenseError,
    LicenseExpiredError,
    SignatureInvalidError,
)
from ..core.keys import (
    EMBEDDED_PUBLIC_KEY,
    ecdsa_p256_supported,
    load_public_key,
    verify_p1363,
)
from ..core.logging_utils import get_logger
from ..core.result_types import Err, Ok, Result
from ..models.license import LicenseKey, LicensePayload

LOCALHOST_NAMES = ("localhost", "127.0.0.1")
WWW_PREFIX = "www."

logger = get_logger(__name__)


@beartype
def domain_matches(license_domain: str, hostname: str) -> bool:
    """Check whether a licensed domain covers ``hostname``.

    Case-insensitive. Besides exact equality only two aliases are honoured:
    ``localhost`` licenses also cover ``127.0.0.1``, and a domain and its
    ``www.`` form cover each other. Other subdomains never match.
    """
    ld = license_domain.lower()
    hn = hostname.lower()

    if ld == hn:
        return True
    if ld == "localhost" and hn in LOCALHOST_NAMES:
        return True
    if hn == f"{WWW_PREFIX}{ld}":
        return True
    if ld == f"{WWW_PREFIX}{hn}":
        return True
    return False


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class LicenseVerifier:
    """Offline verifier bound to one public key."""

    def __init__(
        self,
        public_jwk: Mapping[str, Any] = EMBEDDED_PUBLIC_KEY,
        clock: Callable[[], datetime] | None = None,
        crypto_check: Callable[[], bool] | None = None,
    ) -> None:
        """Initialize the verifier.

        Args:
            public_jwk: P-256 public key as a JWK; imported once here
            clock: Returns the current time; defaults to UTC wall clock
            crypto_check: Reports whether ECDSA P-256 verification is available

        Raises:
            KeyLoadError: If ``public_jwk`` is not a usable P-256 key
        """
        self._public_jwk = MappingProxyType(dict(public_jwk))
        self._public_key = load_public_key(self._public_jwk)
        self._clock = clock or _utc_now
        self._crypto_check = crypto_check or ecdsa_p256_supported

    @property
    def public_jwk(self) -> Mapping[str, Any]:
        return self._public_jwk

    def check(self, license_key: str, hostname: str) -> Result[LicensePayload, LicenseError]:
        """Run every verification step in order, stopping at the first failure.

        For operator tooling only; embedders call ``validate``.
        """
        try:
            return Ok(self._verify(license_key, hostname))
        except LicenseError as e:
            return Err(e)

    def _verify(self, license_key: str, hostname: str) -> LicensePayload:
        if not self._crypto_check():
            logger.warning(
                "ECDSA P-256 verification is not available; license validation "
                "cannot run in this environment."
            )
            raise CryptoUnavailableError("ECDSA P-256 unavailable")

        key = LicenseKey.parse(license_key)
        payload = key.decode_payload()

        signature = key.decode_signature()
        if not verify_p1363(self._public_key, signature, key.signed_bytes):
            raise SignatureInvalidError("Signature does not verify")

        if not isinstance(hostname, str) or not domain_matches(payload.d, hostname):
            raise DomainMismatchError(f"License for {payload.d!r} does not cover host")

        if payload.is_expired(self._clock()):
            raise LicenseExpiredError(f"License expired on {payload.e}")

        return payload

    def validate(self, license_key: str, hostname: str) -> bool:
        """Return ``True`` only for a genuine, unexpired key covering ``hostname``.

        Never raises.
        """
        try:
            result = self.check(license_key, hostname)
        except Exception:  # noqa: BLE001
            logger.debug("License rejected: unexpected verification error", exc_info=True)
            return False

        if result.is_err():
            error = result.unwrap_err()
            logger.debug("License rejected: %s (%s)", type(error).__name__, error)
            return False
        return True

    async def validate_async(self, license_key: str, hostname: str) -> bool:
        """Async form of ``validate``; the check runs in a worker thread."""
        try:
            return await asyncio.to_thread(self.validate, license_key, hostname)
        except Exception:  # noqa: BLE001
            return False


@lru_cache(maxsize=1)
def get_default_verifier() -> LicenseVerifier:
    """Verifier for the public key embedded in this build."""
    return LicenseVerifier(EMBEDDED_PUBLIC_KEY)


def validate_license(license_key: str, hostname: str) -> bool:
    """Validate ``license_key`` for ``hostname`` against the embedded key."""
    try:
        verifier = get_default_verifier()
    except Exception:  # noqa: BLE001
        logger.warning("Embedded license public key could not be loaded", exc_info=True)
        return False
    return verifier.validate(license_key, hostname)


async def validate_license_async(license_key: str, hostname: str) -> bool:
    """Async entry point for embedders running inside an event loop."""
    try:
        verifier = get_default_verifier()
    except Exception:  # noqa: BLE001
        logger.warning("Embedded license public key could not be loaded", exc_info=True)
        return False
    return await verifier.validate_async(license_key, hostname)
