# AW License - Domain-Locked License Keys
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""``generate-license``: issue a domain-locked license key.

Usage::

    generate-license --domain example.com --months 12
    generate-license --domain example.com --months 12 --tier enterprise

The private key must be set in the ``A11Y_PRIVATE_KEY`` environment variable
as the JSON string of an ECDSA P-256 JWK.
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from typing import NoReturn

from pydantic import ValidationError

from .core.config import Settings, get_settings
from .core.exceptions import IssuerArgumentError, KeyLoadError
from .core.logging_utils import configure_logging
from .models.license import IssuedLicense
from .services.issuer import LicenseIssuer, normalize_domain


class _ArgumentParser(argparse.ArgumentParser):
    """Argument parser that exits with status 1 on bad input."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(1, f"Error: {message}\n")


def _positive_int(value: str) -> int:
    try:
        months = int(value, 10)
    except ValueError:
        raise argparse.ArgumentTypeError("--months must be a positive integer") from None
    if months < 1:
        raise argparse.ArgumentTypeError("--months must be a positive integer")
    return months


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="generate-license",
        description="Generate an ECDSA P-256 signed license key bound to a domain.",
        epilog="The signing key is read from the A11Y_PRIVATE_KEY environment variable.",
    )
    parser.add_argument(
        "--domain", "-d", required=True, help="Licensed domain (required)"
    )
    parser.add_argument(
        "--months",
        "-m",
        type=_positive_int,
        default=settings.license_months,
        help=f"License duration in months (default: {settings.license_months})",
    )
    parser.add_argument(
        "--tier",
        "-t",
        default=settings.license_tier,
        help=f"License tier: pro, enterprise (default: {settings.license_tier})",
    )
    return parser


def render_license(issued: IssuedLicense) -> str:
    """Operator-facing summary of an issued key with usage examples."""
    payload = issued.payload
    key = issued.license_key
    lines = [
        "",
        "=== Accessibility Widget - License Key ===",
        "",
        f"Domain:   {payload.d}",
        f"Expiry:   {payload.e}",
        f"Tier:     {payload.t}",
        f"ID:       {payload.i}",
        "",
        "License Key:",
        key,
        "",
        "--- Usage ---",
        "",
        "HTML:",
        f'<script src="...standalone.global.js" data-license-key="{key}"></script>',
        "",
        "WordPress: Enter the license key in Settings -> Accessibility Widget",
        "",
    ]
    return "\n".join(lines)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the issuer CLI and return the process exit status."""
    try:
        settings = get_settings()
    except ValidationError as e:
        print(f"Error: invalid configuration: {e}", file=sys.stderr)
        return 1

    configure_logging(level=settings.log_level, force=True)
    args = build_parser(settings).parse_args(argv)
    try:
        normalize_domain(args.domain)
    except IssuerArgumentError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    raw_key = (
        settings.private_key.get_secret_value()
        if settings.has_private_key and settings.private_key is not None
        else None
    )
    try:
        issuer = LicenseIssuer.from_jwk_json(raw_key)
        issued = issuer.issue(args.domain, months=args.months, tier=args.tier)
    except (KeyLoadError, IssuerArgumentError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(render_license(issued))
    return 0


if __name__ == "__main__":
    sys.exit(main())
