"""
Blake2b helpers at the digest widths CodeChain uses.
"""

import hashlib


def blake256(data: bytes) -> bytes:
    """32-byte blake2b digest."""
    return hashlib.blake2b(data, digest_size=32).digest()


def blake160(data: bytes) -> bytes:
    """20-byte blake2b digest (account ids, script hashes)."""
    return hashlib.blake2b(data, digest_size=20).digest()


def blake128(data: bytes) -> bytes:
    """16-byte blake2b digest."""
    return hashlib.blake2b(data, digest_size=16).digest()
