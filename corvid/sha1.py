"""Incremental SHA-1 digest computation."""

from __future__ import annotations

import struct

_MASK32 = 0xFFFFFFFF
_INITIAL_STATE = (0x67452301, 0xEFCDAB89, 0x98BADCFE, 0x10325476, 0xC3D2E1F0)
_BLOCK_SIZE = 64


def left_rotate(value: int, count: int) -> int:
    """Rotate a 32-bit value left by ``count`` bits."""
    value &= _MASK32
    count %= 32
    return ((value << count) | (value >> (32 - count))) & _MASK32


def _round_constants(index: int, b: int, c: int, d: int) -> tuple[int, int]:
    if index < 20:
        return (b & c) | (~b & d), 0x5A827999
    if index < 40:
        return b ^ c ^ d, 0x6ED9EBA1
    if index < 60:
        return (b & c) | (b & d) | (c & d), 0x8F1BBCDC
    return b ^ c ^ d, 0xCA62C1D6


def _compress(state: tuple[int, ...], block: bytes) -> tuple[int, ...]:
    words = list(struct.unpack(">16I", block))
    for i in range(16, 80):
        words.append(left_rotate(words[i - 3] ^ words[i - 8] ^ words[i - 14] ^ words[i - 16], 1))

    a, b, c, d, e = state
    for index, word in enumerate(words):
        f, k = _round_constants(index, b, c, d)
        temp = (left_rotate(a, 5) + (f & _MASK32) + e + k + word) & _MASK32
        a, b, c, d, e = temp, a, left_rotate(b, 30), c, d

    return tuple((x + y) & _MASK32 for x, y in zip(state, (a, b, c, d, e)))


class SHA1:
    """A SHA-1 hasher that accepts data in pieces."""

    digest_size = 20
    block_size = _BLOCK_SIZE

    def __init__(self, data: bytes = b"") -> None:
        self.reset()
        if data:
            self.update(data)

    def reset(self) -> "SHA1":
        """Discard all input and return to the initial state."""
        self._state: tuple[int, ...] = _INITIAL_STATE
        self._buffer = bytearray()
        self._byte_count = 0
        return self

    def update(self, data: bytes) -> "SHA1":
        """Feed more bytes into the hash."""
        if isinstance(data, str):
            raise TypeError("SHA1.update() expects bytes, not str")
        chunk = bytes(data)
        self._byte_count += len(chunk)
        self._buffer.extend(chunk)
        full = len(self._buffer) - len(self._buffer) % _BLOCK_SIZE
        for start in range(0, full, _BLOCK_SIZE):
            self._state = _compress(self._state, bytes(self._buffer[start:start + _BLOCK_SIZE]))
        del self._buffer[:full]
        return self

    def digest(self) -> bytes:
        """Return the 20-byte digest of everything fed so far."""
        # Only the low 32 bits of the bit length are recorded in the trailer.
        bit_count = (self._byte_count * 8) & _MASK32
        tail = bytearray(self._buffer)
        tail.append(0x80)
        tail.extend(b"\x00" * ((56 - len(tail)) % _BLOCK_SIZE))
        tail.extend(b"\x00\x00\x00\x00")
        tail.extend(struct.pack(">I", bit_count))

        state = self._state
        for start in range(0, len(tail), _BLOCK_SIZE):
            state = _compress(state, bytes(tail[start:start + _BLOCK_SIZE]))
        return struct.pack(">5I", *state)

    def hexdigest(self) -> str:
        """Return the digest as lower-case hexadecimal text."""
        return self.digest().hex()