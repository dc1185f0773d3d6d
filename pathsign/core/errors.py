# pathsign/core/errors.py
"""
Error taxonomy for signed URLs.

Every error is a ``ValueError`` carrying a ``kind`` tag, so callers can tell
a malformed URL (400) from a bad signature or an expired one (403).
"""

from datetime import datetime
from typing import Optional


class SignedURLError(ValueError):
    kind = "signed_url"


class InvalidEnvelope(SignedURLError):
    """A structural separator ('.' or '/') is missing from the signed path."""
    kind = "invalid_envelope"

    def __init__(self, detail: str = "invalid signed URL"):
        super().__init__(detail)


class InvalidSignatureEncoding(SignedURLError):
    kind = "invalid_signature_encoding"

    def __init__(self, encoded: str):
        self.encoded = encoded
        super().__init__(f"invalid signature: invalid base64: {encoded}")


class InvalidExpiry(SignedURLError):
    """Expiry segment is not a signed 64-bit decimal. The parse error is chained as __cause__."""
    kind = "invalid_expiry"

    def __init__(self, text: str, reason: Optional[str] = None):
        self.text = text
        msg = f"invalid expiry: {text!r}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg)


class InvalidSignature(SignedURLError):
    kind = "invalid_signature"

    def __init__(self, detail: str = "signature does not match"):
        super().__init__(f"invalid signature: {detail}")


class Expired(SignedURLError):
    kind = "expired"

    def __init__(self, expiry: datetime):
        self.expiry = expiry
        super().__init__(f"URL expired at {expiry.isoformat()}")


__all__ = [
    "SignedURLError",
    "InvalidEnvelope",
    "InvalidSignatureEncoding",
    "InvalidExpiry",
    "InvalidSignature",
    "Expired",
]
