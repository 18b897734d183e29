"""
Bech32 checksum encoding as used by CodeChain addresses.

CodeChain addresses carry a three-character prefix (two-character network id
plus an address kind letter) directly followed by the data characters; there
is no ``1`` separator between prefix and data. The checksum is the standard
BIP-173 polymod over the expanded prefix.
"""

from typing import List, Tuple

from bech32 import CHARSET, bech32_hrp_expand, bech32_polymod, convertbits


def _create_checksum(prefix: str, words: List[int]) -> List[int]:
    polymod = bech32_polymod(bech32_hrp_expand(prefix) + words + [0] * 6) ^ 1
    return [(polymod >> 5 * (5 - i)) & 31 for i in range(6)]


def to_words(data: bytes) -> List[int]:
    """Regroup 8-bit bytes into 5-bit words, padding the tail."""
    return convertbits(list(data), 8, 5, True)


def from_words(words: List[int]) -> bytes:
    """Regroup 5-bit words into bytes; non-zero padding is rejected."""
    data = convertbits(words, 5, 8, False)
    if data is None:
        raise ValueError("Invalid bech32 padding")
    return bytes(data)


def encode(prefix: str, words: List[int]) -> str:
    checksum = _create_checksum(prefix, words)
    return prefix + "".join(CHARSET[w] for w in words + checksum)


def decode(text: str, prefix_length: int = 3) -> Tuple[str, List[int]]:
    """
    Split ``text`` into its prefix and data words, verifying the checksum.

    Raises:
        ValueError: mixed case, unknown characters or a bad checksum
    """
    if text.lower() != text and text.upper() != text:
        raise ValueError("Mixed-case bech32 string")
    text = text.lower()
    if len(text) < prefix_length + 6:
        raise ValueError("Bech32 string too short")
    prefix, data = text[:prefix_length], text[prefix_length:]
    if any(c not in CHARSET for c in data):
        raise ValueError(f"Invalid bech32 character in {text!r}")
    words = [CHARSET.find(c) for c in data]
    if bech32_polymod(bech32_hrp_expand(prefix) + words) != 1:
        raise ValueError(f"Invalid bech32 checksum in {text!r}")
    return prefix, words[:-6]
