# pathsign/sign/signer.py
import logging
from datetime import datetime, timezone
from typing import Callable, Optional, Tuple

from pathsign.core.canon import canonical_url
from pathsign.core.errors import Expired, InvalidSignature, SignedURLError
from pathsign.core.types import URL
from pathsign.crypto.keys import SigningKey
from pathsign.format import Formatter, PathFormatter

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Signer:
    """
    Produces and verifies signed, expiring URLs.

    Sequences the formatter calls (expiry then signature when signing,
    signature then expiry when verifying) around the signing key.
    """

    def __init__(
        self,
        key: SigningKey,
        skip_query: bool = False,
        clock: Optional[Callable[[], datetime]] = None,
        formatter: Optional[Formatter] = None,
    ):
        if key is None:
            raise ValueError("A signing key is required")
        self.key = key
        self.skip_query = skip_query
        self.clock = clock or utc_now
        self.formatter = formatter or PathFormatter()
        # skip_query is owned by the signer
        self.formatter.skip_query = skip_query

    def sign(self, unsigned: str, expiry: datetime) -> str:
        """
        Sign a URL so that it is valid until `expiry`.
        The URL path must begin with '/' (a bare "https://host" is rejected).
        """
        u = URL.parse(unsigned)
        if not u.path.startswith("/"):
            raise ValueError(f"URL path must begin with '/': {unsigned!r}")

        self.formatter.add_expiry(u, expiry)
        sig = self.key.sign(canonical_url(u, self.skip_query))
        self.formatter.add_signature(u, sig)
        return str(u)

    def verify(self, signed: str) -> URL:
        """
        Verify a signed URL and return it with signature and expiry removed.
        Raises a SignedURLError subclass on any failure.
        """
        u, _ = self.verify_with_expiry(signed)
        return u

    def verify_with_expiry(self, signed: str) -> Tuple[URL, datetime]:
        """Same as verify, also returning the expiry the URL carried."""
        u = URL.parse(signed)
        try:
            u, sig = self.formatter.extract_signature(u)
            if not self.key.verify(sig, canonical_url(u, self.skip_query)):
                raise InvalidSignature()
            u, expiry = self.formatter.extract_expiry(u)
        except SignedURLError as e:
            logger.debug("Signed URL rejected (%s): %s", e.kind, e)
            raise

        if self.clock() > expiry:
            logger.debug("Signed URL expired at %s", expiry.isoformat())
            raise Expired(expiry)
        return u, expiry
