"""
Exceptions raised by the token codec
"""


class CodecError(Exception):
    """Base exception for token codec operations"""
    pass


class DecryptionError(CodecError):
    """Raised when a token cannot be decrypted"""
    pass
