"""
Identification pipeline.

Encodes a ciphertext, fingerprints it and ranks the cipher profiles.
"""

from cipher_identifier.services.pipeline.identifier import (
    CipherIdentifier,
    Identification,
    basic_stats,
    fingerprint_many,
    normalize,
)

__all__ = [
    "CipherIdentifier",
    "Identification",
    "basic_stats",
    "fingerprint_many",
    "normalize",
]
