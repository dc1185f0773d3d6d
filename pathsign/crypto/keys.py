# pathsign/crypto/keys.py
import hashlib
import hmac
from abc import ABC, abstractmethod
from typing import Optional, Union

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey, Ed25519PublicKey

from pathsign.core.encoding import b64url_decode, b64url_encode


class SigningKey(ABC):
    """Anything that can produce and check signature bytes over canonical bytes."""

    @abstractmethod
    def sign(self, data: bytes) -> bytes:
        pass

    @abstractmethod
    def verify(self, signature: bytes, data: bytes) -> bool:
        pass


class HMACKey(SigningKey):
    """Shared-secret HMAC-SHA256 key."""

    def __init__(self, secret: Union[str, bytes]):
        if not secret:
            raise ValueError("Secret key cannot be empty")
        self.secret = secret.encode("utf-8") if isinstance(secret, str) else secret

    def sign(self, data: bytes) -> bytes:
        return hmac.new(self.secret, data, hashlib.sha256).digest()

    def verify(self, signature: bytes, data: bytes) -> bool:
        return hmac.compare_digest(self.sign(data), signature)


class Ed25519KeyPair(SigningKey):
    """
    Ed25519 key pair. Built from a public key only, it can verify but not sign,
    which is what a verifying service holding a trust anchor needs.
    """

    def __init__(self, private_key: Optional[Ed25519PrivateKey] = None,
                 public_key: Optional[Ed25519PublicKey] = None):
        if private_key is None and public_key is None:
            raise ValueError("A private or public key is required")
        self._private = private_key
        self._public = public_key or private_key.public_key()

    @classmethod
    def generate(cls) -> "Ed25519KeyPair":
        return cls(private_key=Ed25519PrivateKey.generate())

    @classmethod
    def from_private_b64url(cls, value: str) -> "Ed25519KeyPair":
        return cls(private_key=Ed25519PrivateKey.from_private_bytes(b64url_decode(value)))

    @classmethod
    def from_public_b64url(cls, value: str) -> "Ed25519KeyPair":
        return cls(public_key=Ed25519PublicKey.from_public_bytes(b64url_decode(value)))

    @property
    def can_sign(self) -> bool:
        return self._private is not None

    def public_key_b64url(self) -> str:
        raw = self._public.public_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PublicFormat.Raw,
        )
        return b64url_encode(raw)

    def private_key_b64url(self) -> str:
        if self._private is None:
            raise RuntimeError("Verify-only key pair has no private key")
        raw = self._private.private_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PrivateFormat.Raw,
            encryption_algorithm=serialization.NoEncryption(),
        )
        return b64url_encode(raw)

    def sign(self, data: bytes) -> bytes:
        if self._private is None:
            raise RuntimeError("Verify-only key pair cannot sign")
        return self._private.sign(data)

    def verify(self, signature: bytes, data: bytes) -> bool:
        try:
            self._public.verify(signature, data)
        except InvalidSignature:
            return False
        return True
