"""
CSRF token codec

Implements the double-submit token primitives:
- Random companion value generation
- AES-256-ECB encryption with PKCS7 padding, keyed by SHA-256 of a secret
- Stateless verification by decrypt-then-compare
"""

import hashlib
import secrets
import string
from base64 import b64encode, b64decode

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from ..config import ConfigurationError
from .errors import CodecError, DecryptionError
from .models import IssuedToken, TokenValidationResult

RAW_VALUE_ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits
RAW_VALUE_LENGTH = 32


def derive_key(secret: str) -> bytes:
    """
    Derive the AES key from a configured secret.

    Args:
        secret: Secret string of any length

    Returns:
        32-byte SHA-256 digest, used as an AES-256 key
    """
    return hashlib.sha256(secret.encode("utf-8")).digest()


class CsrfTokenCodec:
    """
    Encrypts random companion values into tokens and verifies them.

    The key is fixed for the lifetime of the codec. Cipher contexts are
    created per call, so one codec may be shared by concurrent requests.

    Tokens are byte-compatible with CryptoJS
    ``AES.encrypt(data, SHA256(secret), {mode: ECB, padding: Pkcs7}).toString()``.
    """

    BLOCK_SIZE = algorithms.AES.block_size  # bits

    def __init__(self, key: bytes):
        """
        Initialize the codec.

        Args:
            key: AES key (16, 24 or 32 bytes), normally from derive_key()

        Raises:
            CodecError: If the key has an invalid length
        """
        if not isinstance(key, bytes) or len(key) not in (16, 24, 32):
            raise CodecError("Key must be 16, 24 or 32 bytes")
        self._key = key

    @classmethod
    def from_secret(cls, secret: str) -> "CsrfTokenCodec":
        """
        Build a codec from the configured encryption secret.

        Raises:
            ConfigurationError: If the secret is empty or missing
        """
        if not secret:
            raise ConfigurationError("CSRF encryption secret is not configured")
        return cls(derive_key(secret))

    def _cipher(self) -> Cipher:
        return Cipher(algorithms.AES(self._key), modes.ECB())

    def generate_raw_value(self, length: int = RAW_VALUE_LENGTH) -> str:
        """
        Generate a random companion value over A-Z, a-z, 0-9.

        Raises:
            ValueError: If length is not positive
        """
        if length <= 0:
            raise ValueError("Raw value length must be positive")
        return "".join(secrets.choice(RAW_VALUE_ALPHABET) for _ in range(length))

    def encrypt(self, plaintext: str) -> str:
        """
        Encrypt a string and return the base64 ciphertext.
        """
        padder = padding.PKCS7(self.BLOCK_SIZE).padder()
        padded = padder.update(plaintext.encode("utf-8")) + padder.finalize()
        encryptor = self._cipher().encryptor()
        ciphertext = encryptor.update(padded) + encryptor.finalize()
        return b64encode(ciphertext).decode("ascii")

    def decrypt(self, token: str) -> str:
        """
        Decrypt a base64 token back to its plaintext.

        Raises:
            DecryptionError: If the token is not valid base64, is not a whole
                number of blocks, has bad padding (typically a wrong key or a
                tampered token), or does not decode as UTF-8
        """
        try:
            ciphertext = b64decode(token, validate=True)
            if not ciphertext:
                raise ValueError("empty ciphertext")
            decryptor = self._cipher().decryptor()
            padded = decryptor.update(ciphertext) + decryptor.finalize()
            unpadder = padding.PKCS7(self.BLOCK_SIZE).unpadder()
            plaintext = unpadder.update(padded) + unpadder.finalize()
            return plaintext.decode("utf-8")
        except (TypeError, ValueError) as e:
            raise DecryptionError(f"Decryption failed: {e}")

    def generate(self) -> IssuedToken:
        """
        Mint a new token pair.

        Returns:
            IssuedToken with the encrypted token and its raw value
        """
        raw = self.generate_raw_value()
        return IssuedToken(token=self.encrypt(raw), raw=raw)

    def validate(self, token: str, expected_raw: str) -> TokenValidationResult:
        """
        Decrypt a submitted token and compare it with the submitted raw value.

        Never raises for bad input: decryption faults are reported as
        ``valid=False, reason="malformed"``.
        """
        try:
            decrypted = self.decrypt(token)
        except DecryptionError:
            return TokenValidationResult(valid=False, reason="malformed")

        if not secrets.compare_digest(decrypted.encode("utf-8"), expected_raw.encode("utf-8")):
            return TokenValidationResult(valid=False, reason="mismatch")
        return TokenValidationResult(valid=True)

    def verify(self, token: str, expected_raw: str) -> bool:
        """Return True only if token decrypts exactly to expected_raw."""
        return self.validate(token, expected_raw).valid
