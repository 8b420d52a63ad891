from .issuer import extract_credential, require_issuer

__all__ = ["extract_credential", "require_issuer"]
