# AW License - Domain-Locked License Keys
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Domain-locked, time-limited license keys signed with ECDSA P-256."""

from .models.license import IssuedLicense, LicenseKey, LicensePayload
from .services.issuer import LicenseIssuer
from .services.verifier import (
    LicenseVerifier,
    domain_matches,
    validate_license,
    validate_license_async,
)

__version__ = "1.0.0"

__all__ = [
    "IssuedLicense",
    "LicenseKey",
    "LicensePayload",
    "LicenseIssuer",
    "LicenseVerifier",
    "domain_matches",
    "validate_license",
    "validate_license_async",
]
