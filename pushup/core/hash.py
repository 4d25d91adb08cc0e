"""Digest helpers.

Every object is addressed by the SHA-1 of its raw bytes, written as 40
lowercase hex characters.
"""

import hashlib

DIGEST_LENGTH = 40
HEX_DIGITS = frozenset('0123456789abcdef')


def hash_object(data: bytes) -> str:
    """Digest of raw content; no type or length header is mixed in."""
    return hashlib.sha1(data).hexdigest()


def is_hex(value: str) -> bool:
    """True for a non-empty string of lowercase hex digits."""
    return bool(value) and all(c in HEX_DIGITS for c in value)


def is_digest(value: str) -> bool:
    return len(value) == DIGEST_LENGTH and is_hex(value)
