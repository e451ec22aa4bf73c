# AW License - Domain-Locked License Keys
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Core infrastructure: settings, logging, errors, encoding and keys."""

from .config import Settings, get_settings
from .exceptions import (
    CryptoUnavailableError,
    DomainMismatchError,
    IssuerArgumentError,
    KeyLoadError,
    LicenseError,
    LicenseExpiredError,
    MalformedKeyError,
    SignatureInvalidError,
)
from .logging_utils import configure_logging, get_logger

__all__ = [
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    "LicenseError",
    "MalformedKeyError",
    "CryptoUnavailableError",
    "SignatureInvalidError",
    "DomainMismatchError",
    "LicenseExpiredError",
    "IssuerArgumentError",
    "KeyLoadError",
]
