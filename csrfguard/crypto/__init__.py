"""
csrfguard cryptographic primitives

- Companion value generation
- Keyed symmetric encryption of companion values into tokens
- Stateless decrypt-and-compare verification
"""

from .codec import CsrfTokenCodec, derive_key, RAW_VALUE_ALPHABET, RAW_VALUE_LENGTH
from .errors import CodecError, DecryptionError
from .models import IssuedToken, TokenValidationResult

__all__ = [
    "CsrfTokenCodec",
    "derive_key",
    "RAW_VALUE_ALPHABET",
    "RAW_VALUE_LENGTH",
    "CodecError",
    "DecryptionError",
    "IssuedToken",
    "TokenValidationResult",
]
