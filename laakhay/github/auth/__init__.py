"""Authentication."""

from .credentials import ANONYMOUS, Authenticator, Credential

__all__ = ["ANONYMOUS", "Authenticator", "Credential"]
