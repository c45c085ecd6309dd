"""Credential resolution.

Resolution order for a call: explicit token, then the process-wide default
token, then anonymous access. Anonymous access is a valid state (subject to
the stricter public rate limit), never an error.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ..core.config import DefaultsProvider, get_process_defaults


@dataclass(frozen=True)
class Credential:
    """Resolved credential for one logical call."""

    token: str | None = field(default=None, repr=False)
    source: str = "anonymous"  # "explicit" | "default" | "anonymous"

    @property
    def is_anonymous(self) -> bool:
        return not self.token

    def authorization_header(self) -> str | None:
        """Return the ``Authorization`` header value, or None when anonymous."""
        if self.is_anonymous:
            return None
        return f"token {self.token}"


ANONYMOUS = Credential()


class Authenticator:
    """Resolves the credential to use for a call."""

    def __init__(self, defaults: DefaultsProvider | None = None) -> None:
        self._defaults = defaults or get_process_defaults()

    def resolve(self, explicit_token: str | None = None) -> Credential:
        if explicit_token and explicit_token.strip():
            return Credential(token=explicit_token.strip(), source="explicit")

        default_token = self._defaults.default_access_token()
        if default_token:
            return Credential(token=default_token, source="default")

        return ANONYMOUS
