# pathsign/format/path.py
import logging
from datetime import datetime
from typing import Tuple

from pathsign.core.encoding import b64url_decode, b64url_encode, format_expiry, parse_expiry
from pathsign.core.errors import InvalidEnvelope, InvalidExpiry, InvalidSignatureEncoding
from pathsign.core.types import URL
from . import Formatter

logger = logging.getLogger(__name__)


class PathFormatter(Formatter):
    """
    Carries signature and expiry in the URL path:

        /<base64url sig>.<decimal expiry>/<original path>

    Suitable where query parameters are awkward or already meaningful.
    """

    def __init__(self, skip_query: bool = False):
        self.skip_query = skip_query

    def add_expiry(self, url: URL, expiry: datetime) -> URL:
        """/foo/bar -> 390830893/foo/bar"""
        url.path = format_expiry(expiry) + url.path
        return url

    def add_signature(self, url: URL, sig: bytes) -> URL:
        """390830893/foo/bar -> /qrvM.390830893/foo/bar"""
        url.path = "/" + b64url_encode(sig) + "." + url.path
        return url

    def extract_signature(self, url: URL) -> Tuple[URL, bytes]:
        """Split the signature off the signed path, leaving the payload (expiry + path)."""
        encoded, found, payload = url.path.partition(".")
        if not found:
            raise InvalidEnvelope("invalid signed URL: missing signature separator '.'")
        # remove leading /
        encoded = encoded[1:]

        try:
            sig = b64url_decode(encoded)
        except ValueError as e:
            logger.debug("Rejecting signature segment %r: %s", encoded, e)
            raise InvalidSignatureEncoding(encoded) from e

        url.path = payload

        if self.skip_query:
            # query params are not part of the signed canonical form
            url.query = ""

        return url, sig

    def extract_expiry(self, url: URL) -> Tuple[URL, datetime]:
        """Split the expiry off the payload and restore the original path."""
        expiry, found, path = url.path.partition("/")
        if not found:
            raise InvalidEnvelope("invalid signed URL: missing separator after expiry")
        # add leading slash back to path
        url.path = "/" + path

        try:
            t = parse_expiry(expiry)
        except (ValueError, OverflowError) as e:
            raise InvalidExpiry(expiry, str(e)) from e

        return url, t
