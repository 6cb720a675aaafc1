"""Read-only access to the bearer token held in an external key-value store"""

from typing import Mapping, Optional
from riskscore_gateway.config import settings


class CredentialStore:
    """Looks up a single string token; a missing or blank entry means logged out"""

    def __init__(self, store: Mapping[str, str], key: str | None = None):
        self.store = store
        self.key = key or settings.credential_key

    def get_token(self) -> Optional[str]:
        token = self.store.get(self.key)
        if not token:
            return None
        return token

    @classmethod
    def from_authorization_header(cls, header: str | None) -> "CredentialStore":
        """Build a store from an inbound `Authorization: Bearer <token>` header"""
        store = {}
        if header:
            scheme, _, token = header.partition(" ")
            if scheme.lower() == "bearer" and token.strip():
                store[settings.credential_key] = token.strip()
        return cls(store)
