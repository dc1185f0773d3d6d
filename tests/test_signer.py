import pytest
from datetime import datetime, timedelta, timezone

from pathsign.core.errors import Expired, InvalidEnvelope, InvalidSignature, InvalidSignatureEncoding
from pathsign.core.types import URL
from pathsign.crypto.keys import Ed25519KeyPair, HMACKey
from pathsign.format import PathFormatter
from pathsign.sign.signer import Signer

NOW = datetime(2026, 1, 31, 14, 0, 0, tzinfo=timezone.utc)


def fixed_clock():
    return NOW


@pytest.fixture
def signer():
    return Signer(HMACKey("test-secret"), clock=fixed_clock)


def test_sign_embeds_expiry_in_path(signer):
    signed = signer.sign("https://example.com/foo/bar", NOW + timedelta(hours=1))
    u = URL.parse(signed)
    assert u.scheme == "https"
    assert u.netloc == "example.com"
    assert u.path.startswith("/")
    assert f".{int(NOW.timestamp()) + 3600}/foo/bar" in u.path


def test_sign_and_verify(signer):
    signed = signer.sign("https://example.com/foo/bar?x=1", NOW + timedelta(minutes=5))
    unsigned = signer.verify(signed)
    assert str(unsigned) == "https://example.com/foo/bar?x=1"


def test_sign_is_deterministic(signer):
    expiry = NOW + timedelta(minutes=5)
    assert signer.sign("/a/b", expiry) == signer.sign("/a/b", expiry)


def test_sign_requires_leading_slash(signer):
    with pytest.raises(ValueError):
        signer.sign("https://example.com", NOW)


def test_expired(signer):
    signed = signer.sign("/foo", NOW - timedelta(seconds=1))
    with pytest.raises(Expired) as excinfo:
        signer.verify(signed)
    assert excinfo.value.expiry == NOW - timedelta(seconds=1)


def test_valid_until_expiry_instant(signer):
    signed = signer.sign("/foo", NOW)
    assert signer.verify(signed).path == "/foo"


def test_tamper_path(signer):
    signed = signer.sign("/files/report.pdf", NOW + timedelta(minutes=5))
    with pytest.raises(InvalidSignature):
        signer.verify(signed.replace("report", "secret"))


def test_tamper_expiry(signer):
    signed = signer.sign("/foo", NOW + timedelta(minutes=5))
    exp = str(int(NOW.timestamp()) + 300)
    with pytest.raises(InvalidSignature):
        signer.verify(signed.replace(exp, str(int(exp) + 100000)))


def test_tamper_query(signer):
    signed = signer.sign("/foo?page=1", NOW + timedelta(minutes=5))
    with pytest.raises(InvalidSignature):
        signer.verify(signed.replace("page=1", "page=2"))


def test_skip_query_ignores_query_params():
    signer = Signer(HMACKey("test-secret"), skip_query=True, clock=fixed_clock)
    signed = signer.sign("/foo?page=1", NOW + timedelta(minutes=5))
    assert "page=1" in signed  # still carried on the signed URL

    unsigned = signer.verify(signed.replace("page=1", "page=2"))
    assert unsigned.path == "/foo"
    assert unsigned.query == ""


def test_wrong_key():
    a = Signer(HMACKey("secret-a"), clock=fixed_clock)
    b = Signer(HMACKey("secret-b"), clock=fixed_clock)
    signed = a.sign("/foo", NOW + timedelta(minutes=5))
    with pytest.raises(InvalidSignature):
        b.verify(signed)


def test_malformed_urls_surface_formatter_errors(signer):
    with pytest.raises(InvalidEnvelope):
        signer.verify("https://example.com/nodot")
    with pytest.raises(InvalidSignatureEncoding):
        signer.verify("/not valid base64!.1700000000/foo")


def test_ed25519_public_key_verifies():
    issuer = Ed25519KeyPair.generate()
    gateway = Signer(Ed25519KeyPair.from_public_b64url(issuer.public_key_b64url()), clock=fixed_clock)

    signed = Signer(issuer, clock=fixed_clock).sign("/media/video.mp4", NOW + timedelta(hours=1))
    assert gateway.verify(signed).path == "/media/video.mp4"

    other = Ed25519KeyPair.generate()
    forged = Signer(other, clock=fixed_clock).sign("/media/video.mp4", NOW + timedelta(hours=1))
    with pytest.raises(InvalidSignature):
        gateway.verify(forged)


def test_signer_requires_key():
    with pytest.raises(ValueError):
        Signer(None)


def test_verify_with_expiry(signer):
    expiry = NOW + timedelta(minutes=5)
    unsigned, got = signer.verify_with_expiry(signer.sign("/foo?x=1", expiry))
    assert str(unsigned) == "/foo?x=1"
    assert got == expiry


def test_signer_flag_overrides_supplied_formatter():
    signer = Signer(HMACKey("k"), clock=fixed_clock, formatter=PathFormatter(skip_query=True))
    assert signer.formatter.skip_query is False
    signed = signer.sign("/foo?x=1", NOW + timedelta(hours=1))
    assert str(signer.verify(signed)) == "/foo?x=1"


def test_skip_query_pushed_onto_supplied_formatter():
    signer = Signer(HMACKey("k"), skip_query=True, clock=fixed_clock, formatter=PathFormatter())
    assert signer.formatter.skip_query is True
    signed = signer.sign("/foo?x=1", NOW + timedelta(hours=1))
    assert signer.verify(signed.replace("x=1", "x=2")).path == "/foo"
