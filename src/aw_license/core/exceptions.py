"""License error taxonomy.

Verifier errors never leave ``LicenseVerifier.validate``; they are collapsed
to ``False`` there. Issuer errors are operator-facing and propagate.
"""


class LicenseError(Exception):
    """Base class for all license errors."""


# Verifier side


class MalformedKeyError(LicenseError):
    """Bad prefix, bad split, bad base64, bad JSON or missing payload fields."""


class CryptoUnavailableError(LicenseError):
    """The crypto backend cannot verify ECDSA P-256 signatures."""


class SignatureInvalidError(LicenseError):
    """The signature does not verify against the public key."""


class DomainMismatchError(LicenseError):
    """The licensed domain does not cover the requesting host."""


class LicenseExpiredError(LicenseError):
    """The expiry date is unparsable or already in the past."""


# Issuer side


class IssuerArgumentError(LicenseError, ValueError):
    """Invalid issuer input (domain, months or tier)."""


class KeyLoadError(LicenseError):
    """Missing or invalid key material."""
