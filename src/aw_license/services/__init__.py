# AW License - Domain-Locked License Keys
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""License issuing and verification services."""

from .issuer import LicenseIssuer, add_months
from .verifier import (
    LicenseVerifier,
    domain_matches,
    validate_license,
    validate_license_async,
)

__all__ = [
    "LicenseIssuer",
    "add_months",
    "LicenseVerifier",
    "domain_matches",
    "validate_license",
    "validate_license_async",
]
