import base64
import binascii
import re
from datetime import datetime, timedelta, timezone

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

_B64URL_RE = re.compile(r"[A-Za-z0-9_-]*")
_DECIMAL_RE = re.compile(r"[+-]?[0-9]+")


def b64url_encode(data: bytes) -> str:
    """Encode bytes to base64url (no padding, URL-safe)."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def b64url_decode(s: str) -> bytes:
    """
    Decode unpadded base64url text back to bytes.
    Strict: padding, characters outside the URL-safe alphabet and impossible
    lengths raise ValueError instead of being silently skipped.
    """
    if not _B64URL_RE.fullmatch(s):
        raise ValueError(f"illegal base64url data: {s!r}")
    if len(s) % 4 == 1:
        raise ValueError(f"illegal base64url length {len(s)}")
    # Restore padding
    padding = len(s) % 4
    if padding:
        s += "=" * (4 - padding)
    try:
        return base64.b64decode(s, altchars=b"-_", validate=True)
    except binascii.Error as e:
        raise ValueError(str(e)) from e


def epoch_seconds(dt: datetime) -> int:
    """Whole seconds since the Unix epoch, floored. Naive datetimes are taken as UTC."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return (dt - EPOCH) // timedelta(seconds=1)


def format_expiry(dt: datetime) -> str:
    return str(epoch_seconds(dt))


def parse_expiry(text: str) -> datetime:
    """
    Parse a signed base-10 int64 of epoch seconds into a UTC datetime.
    Raises ValueError on bad syntax or int64 overflow, OverflowError when the
    value is outside what datetime can represent.
    """
    if not _DECIMAL_RE.fullmatch(text):
        raise ValueError(f"invalid syntax: {text!r}")
    value = int(text)
    if not INT64_MIN <= value <= INT64_MAX:
        raise ValueError(f"value out of range: {text!r}")
    return EPOCH + timedelta(seconds=value)
