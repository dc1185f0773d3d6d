# pathsign/__init__.py
"""
pathsign — tamper-evident, expiring URLs with signature and expiry carried in the path.

    /<base64url signature>.<expiry seconds>/original/path
"""

from pathsign.core.errors import (
    Expired,
    InvalidEnvelope,
    InvalidExpiry,
    InvalidSignature,
    InvalidSignatureEncoding,
    SignedURLError,
)
from pathsign.core.types import URL
from pathsign.crypto.keys import Ed25519KeyPair, HMACKey, SigningKey
from pathsign.format import Formatter, PathFormatter
from pathsign.sign.signer import Signer

__version__ = "0.1.0-dev"

__all__ = [
    "URL",
    "Signer",
    "Formatter",
    "PathFormatter",
    "SigningKey",
    "HMACKey",
    "Ed25519KeyPair",
    "SignedURLError",
    "InvalidEnvelope",
    "InvalidSignatureEncoding",
    "InvalidExpiry",
    "InvalidSignature",
    "Expired",
]
