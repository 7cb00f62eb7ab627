"""Reference cipher profiles and metadata."""

from cipher_identifier.services.profiles.metadata import CipherCatalog
from cipher_identifier.services.profiles.store import CipherProfile, ProfileStore

__all__ = [
    "CipherCatalog",
    "CipherProfile",
    "ProfileStore",
]
