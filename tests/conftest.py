"""Test configuration and fixtures for the license issuer and verifier.

Every test run signs with a freshly generated P-256 key pair; the embedded
production public key is never able to verify these keys.
"""

from collections.abc import Callable, Generator
from datetime import datetime, timezone

import pytest
from cryptography.hazmat.primitives.asymmetric import ec

from aw_license.core.config import clear_settings_cache
from aw_license.core.keys import private_key_to_jwk, public_key_to_jwk
from aw_license.services.issuer import LicenseIssuer
from aw_license.services.verifier import LicenseVerifier

REFERENCE_NOW = datetime(2025, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture(scope="session")
def signing_key() -> ec.EllipticCurvePrivateKey:
    """P-256 private key used to sign test licenses."""
    return ec.generate_private_key(ec.SECP256R1())


@pytest.fixture(scope="session")
def private_jwk(signing_key: ec.EllipticCurvePrivateKey) -> dict[str, str]:
    """Signing key as a private JWK."""
    return private_key_to_jwk(signing_key)


@pytest.fixture(scope="session")
def public_jwk(signing_key: ec.EllipticCurvePrivateKey) -> dict[str, str]:
    """Matching public JWK for verifiers."""
    return public_key_to_jwk(signing_key.public_key())


@pytest.fixture
def reference_now() -> datetime:
    """Fixed issuing time: 2025-01-15 12:00 UTC."""
    return REFERENCE_NOW


@pytest.fixture
def issuer(
    signing_key: ec.EllipticCurvePrivateKey, reference_now: datetime
) -> LicenseIssuer:
    """Issuer pinned to the reference date."""
    return LicenseIssuer(signing_key, clock=lambda: reference_now)


@pytest.fixture
def verifier_at(
    public_jwk: dict[str, str],
) -> Callable[[datetime], LicenseVerifier]:
    """Factory for verifiers whose clock is frozen at a given instant."""

    def _make(now: datetime) -> LicenseVerifier:
        return LicenseVerifier(public_jwk, clock=lambda: now)

    return _make


@pytest.fixture
def verifier(
    verifier_at: Callable[[datetime], LicenseVerifier], reference_now: datetime
) -> LicenseVerifier:
    """Verifier frozen at the reference date."""
    return verifier_at(reference_now)


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Isolate tests from the caller's A11Y_* environment."""
    for name in (
        "A11Y_PRIVATE_KEY",
        "A11Y_LICENSE_MONTHS",
        "A11Y_LICENSE_TIER",
        "A11Y_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    clear_settings_cache()
    yield
    clear_settings_cache()
