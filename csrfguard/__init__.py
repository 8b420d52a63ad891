"""csrfguard - double-submit CSRF token issuance and validation."""

from .app import create_app
from .config import Settings

__version__ = "0.1.0"

__all__ = ["create_app", "Settings"]
