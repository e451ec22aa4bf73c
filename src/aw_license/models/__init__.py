# AW License - Domain-Locked License Keys
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""License models."""

from .base import BaseModelConfig
from .license import KEY_PREFIX, IssuedLicense, LicenseKey, LicensePayload

__all__ = [
    "BaseModelConfig",
    "KEY_PREFIX",
    "IssuedLicense",
    "LicenseKey",
    "LicensePayload",
]
