"""
Models for issued CSRF tokens and their validation results
"""

from typing import Literal, Optional
from pydantic import BaseModel, Field


class IssuedToken(BaseModel):
    """
    A freshly minted token pair.

    The client keeps both halves and resends them on protected requests.
    """
    token: str = Field(..., description="Base64 ciphertext of the raw value")
    raw: str = Field(..., description="Random companion value")


class TokenValidationResult(BaseModel):
    """
    Outcome of decrypting a submitted token and comparing it
    """
    valid: bool
    reason: Optional[Literal["malformed", "mismatch"]] = None
