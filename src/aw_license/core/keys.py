# AW License - Domain-Locked License Keys
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""ECDSA P-256 key handling.

Keys travel as JSON Web Keys (RFC 7517). Signatures use the fixed-length
IEEE P1363 form (``r || s``, 32 bytes each) that browser Web Crypto expects,
so the DER output of ``cryptography`` is converted on the way in and out.
"""

import json
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Final

from beartype import beartype
from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.backends import default_backend
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric.utils import (
    decode_dss_signature,
    encode_dss_signature,
)

from .encoding import b64url_decode, b64url_encode
from .exceptions import KeyLoadError, MalformedKeyError

COORDINATE_SIZE: Final = 32
SIGNATURE_SIZE: Final = 2 * COORDINATE_SIZE

# Verify-only public key shipped with every verifier build.
EMBEDDED_PUBLIC_KEY: Final[Mapping[str, str]] = MappingProxyType(
    {
        "kty": "EC",
        "crv": "P-256",
        "x": "0CNLE3swwGnDQmKrtufPJUwv4uydQivRVAN9mwR3ayI",
        "y": "HlZaMI_Y-FtE_5PquSM9CDeHxxpW-HiK3YzxS-YkGsA",
    }
)


def _signature_algorithm() -> ec.ECDSA:
    return ec.ECDSA(hashes.SHA256())


@beartype
def ecdsa_p256_supported() -> bool:
    """Check that the crypto backend can verify ECDSA P-256/SHA-256."""
    try:
        return bool(
            default_backend().elliptic_curve_signature_algorithm_supported(
                _signature_algorithm(), ec.SECP256R1()
            )
        )
    except UnsupportedAlgorithm:
        return False


def _coordinate(jwk: Mapping[str, Any], name: str) -> int:
    value = jwk.get(name)
    if not isinstance(value, str) or not value:
        raise KeyLoadError(f"JWK is missing the '{name}' member")
    try:
        raw = b64url_decode(value)
    except MalformedKeyError as e:
        raise KeyLoadError(f"JWK member '{name}' is not valid base64url") from e
    if len(raw) != COORDINATE_SIZE:
        raise KeyLoadError(
            f"JWK member '{name}' must be {COORDINATE_SIZE} bytes, got {len(raw)}"
        )
    return int.from_bytes(raw, "big")


def _check_curve(jwk: Mapping[str, Any]) -> None:
    if jwk.get("kty") != "EC":
        raise KeyLoadError(f"Unsupported JWK key type: {jwk.get('kty')!r}")
    if jwk.get("crv") != "P-256":
        raise KeyLoadError(f"Unsupported JWK curve: {jwk.get('crv')!r}")


@beartype
def load_public_key(jwk: Mapping[str, Any]) -> ec.EllipticCurvePublicKey:
    """Import a P-256 public JWK as a verify-only key."""
    _check_curve(jwk)
    numbers = ec.EllipticCurvePublicNumbers(
        _coordinate(jwk, "x"), _coordinate(jwk, "y"), ec.SECP256R1()
    )
    try:
        return numbers.public_key()
    except ValueError as e:
        raise KeyLoadError(f"Invalid P-256 public key: {e}") from e


@beartype
def load_private_key(jwk: Mapping[str, Any]) -> ec.EllipticCurvePrivateKey:
    """Import a P-256 private JWK.

    The private scalar ``d`` is authoritative; ``x``/``y`` must match the
    point it derives.
    """
    _check_curve(jwk)
    d = _coordinate(jwk, "d")
    x = _coordinate(jwk, "x")
    y = _coordinate(jwk, "y")
    try:
        private_key = ec.derive_private_key(d, ec.SECP256R1())
    except ValueError as e:
        raise KeyLoadError(f"Invalid P-256 private key: {e}") from e

    public_numbers = private_key.public_key().public_numbers()
    if (public_numbers.x, public_numbers.y) != (x, y):
        raise KeyLoadError("JWK public coordinates do not match the private key")
    return private_key


@beartype
def load_signing_key(raw: str | None) -> ec.EllipticCurvePrivateKey:
    """Parse the issuer's signing key from a JWK JSON string."""
    if raw is None or not raw.strip():
        raise KeyLoadError(
            "A11Y_PRIVATE_KEY environment variable is not set. "
            "Set it to the JWK JSON string of your ECDSA P-256 private key."
        )
    try:
        jwk = json.loads(raw)
    except json.JSONDecodeError as e:
        raise KeyLoadError("A11Y_PRIVATE_KEY is not valid JSON") from e
    if not isinstance(jwk, dict):
        raise KeyLoadError("A11Y_PRIVATE_KEY must be a JSON object")
    return load_private_key(jwk)


@beartype
def public_key_to_jwk(public_key: ec.EllipticCurvePublicKey) -> dict[str, str]:
    """Export a P-256 public key as a JWK."""
    numbers = public_key.public_numbers()
    return {
        "kty": "EC",
        "crv": "P-256",
        "x": b64url_encode(numbers.x.to_bytes(COORDINATE_SIZE, "big")),
        "y": b64url_encode(numbers.y.to_bytes(COORDINATE_SIZE, "big")),
    }


@beartype
def private_key_to_jwk(private_key: ec.EllipticCurvePrivateKey) -> dict[str, str]:
    """Export a P-256 private key as a JWK, public coordinates included."""
    jwk = public_key_to_jwk(private_key.public_key())
    d = private_key.private_numbers().private_value
    jwk["d"] = b64url_encode(d.to_bytes(COORDINATE_SIZE, "big"))
    return jwk


@beartype
def sign_p1363(private_key: ec.EllipticCurvePrivateKey, data: bytes) -> bytes:
    """Sign ``data`` with ECDSA P-256/SHA-256 and return raw ``r || s``."""
    der = private_key.sign(data, _signature_algorithm())
    r, s = decode_dss_signature(der)
    return r.to_bytes(COORDINATE_SIZE, "big") + s.to_bytes(COORDINATE_SIZE, "big")


@beartype
def verify_p1363(
    public_key: ec.EllipticCurvePublicKey, signature: bytes, data: bytes
) -> bool:
    """Verify a raw ``r || s`` signature. Wrong-length signatures fail."""
    if len(signature) != SIGNATURE_SIZE:
        return False
    r = int.from_bytes(signature[:COORDINATE_SIZE], "big")
    s = int.from_bytes(signature[COORDINATE_SIZE:], "big")
    try:
        public_key.verify(encode_dss_signature(r, s), data, _signature_algorithm())
    except InvalidSignature:
        return False
    return True
