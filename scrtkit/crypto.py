"""Hashing, constant-time comparison and a seeded ChaCha20 random generator."""

from __future__ import annotations

import hashlib
import hmac

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms


def sha_256(data: bytes) -> bytes:
    """The SHA-256 digest of ``data``."""
    return hashlib.sha256(data).digest()


def compare_slice_ct_time(s1: bytes, s2: bytes) -> bool:
    """Compare two byte strings in constant time."""
    return hmac.compare_digest(bytes(s1), bytes(s2))


class Prng:
    """A ChaCha20 generator keyed with ``sha256(seed || entropy)``."""

    def __init__(self, seed: bytes, entropy: bytes) -> None:
        key = sha_256(bytes(seed) + bytes(entropy))
        cipher = Cipher(algorithms.ChaCha20(key, bytes(16)), mode=None)
        self._keystream = cipher.encryptor()

    def rand_bytes(self) -> bytes:
        """The next 32 bytes of the stream."""
        return self._keystream.update(bytes(32))