# examples/signed_download_demo.py
# Run with: poetry run python examples/signed_download_demo.py

from datetime import datetime, timedelta, timezone

from pathsign import Ed25519KeyPair, HMACKey, Signer, SignedURLError


def utc_now():
    return datetime.now(timezone.utc)


# =============================================================================
# Shared secret
# =============================================================================

if __name__ == "__main__":
    signer = Signer(HMACKey("demo-secret-do-not-use"), skip_query=True)

    print("\n[Signing]")
    signed = signer.sign("https://files.example.com/reports/q3.pdf?page=1", utc_now() + timedelta(minutes=5))
    print(f"  {signed}")

    print("\n[Verification]")
    print(f"  Unsigned: {signer.verify(signed)}")

    # Query params do not participate in skip-query mode
    paged = signed.replace("page=1", "page=7")
    print(f"  Different page still valid: {signer.verify(paged)}")

    print("\n[Tamper detection]")
    tampered = signed.replace("q3.pdf", "q4.pdf")
    try:
        signer.verify(tampered)
    except SignedURLError as e:
        print(f"  Rejected ({e.kind}): {e}")

    # =========================================================================
    # Public-key signing: the verifying side only holds the public key
    # =========================================================================

    print("\n[Ed25519]")
    issuer = Ed25519KeyPair.generate()
    gateway = Signer(Ed25519KeyPair.from_public_b64url(issuer.public_key_b64url()))

    signed = Signer(issuer).sign("/media/video.mp4", utc_now() + timedelta(hours=1))
    print(f"  {signed}")
    print(f"  Gateway verified: {gateway.verify(signed)}")

    print("\n[Expiry]")
    stale = Signer(issuer).sign("/media/video.mp4", utc_now() - timedelta(seconds=1))
    try:
        gateway.verify(stale)
    except SignedURLError as e:
        print(f"  Rejected ({e.kind}): {e}")

    print("\n" + "=" * 60)
