"""Base64 encoding with custom alphabets and lenient decoding."""

from __future__ import annotations

import base64

STANDARD_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
URLSAFE_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_"


def _as_bytes(data: bytes | str) -> bytes:
    return data.encode("utf-8") if isinstance(data, str) else bytes(data)


def base64encode(data: bytes | str, key: str = STANDARD_ALPHABET) -> str:
    """Encode data as padded base64 using the 64-character alphabet ``key``."""
    if len(key) != 64:
        raise ValueError("base64 alphabet must have exactly 64 characters")
    encoded = base64.b64encode(_as_bytes(data)).decode("ascii")
    if key == STANDARD_ALPHABET:
        return encoded
    return encoded.translate(str.maketrans(STANDARD_ALPHABET, key))


def base64encode_urlsafe(data: bytes | str) -> str:
    """Encode data as padded base64 with the URL-safe alphabet."""
    return base64encode(data, URLSAFE_ALPHABET)


def _sextet(char: str) -> int:
    if "A" <= char <= "Z":
        return ord(char) - ord("A")
    if "a" <= char <= "z":
        return ord(char) - ord("a") + 26
    if "0" <= char <= "9":
        return ord(char) - ord("0") + 52
    if char in "+-":
        return 62
    if char in "/_":
        return 63
    return 0


def _decoded_length(text: str) -> int:
    size = len(text)
    if size % 4 == 2:
        return size // 4 * 3 + 1
    if size % 4 == 3:
        return size // 4 * 3 + 2
    if text[-2] == "=":
        return size // 4 * 3 - 2
    if text[-1] == "=":
        return size // 4 * 3 - 1
    return size // 4 * 3


def base64decode(data: bytes | str) -> bytes:
    """Decode base64 text, padded or not, in either the standard or URL-safe alphabet.

    Characters outside both alphabets count as zero bits.
    """
    text = data.decode("latin-1") if isinstance(data, (bytes, bytearray)) else data
    if len(text) < 2:
        return b""
    remaining = max(_decoded_length(text), 0)
    sextets = map(_sextet, text)

    def take() -> int:
        return next(sextets, 0)

    out = bytearray()
    while remaining >= 3:
        a, b, c, d = take(), take(), take(), take()
        out.append(((a << 2) | ((b & 0x30) >> 4)) & 0xFF)
        out.append((((b & 0x0F) << 4) | ((c & 0x3C) >> 2)) & 0xFF)
        out.append((((c & 0x03) << 6) | d) & 0xFF)
        remaining -= 3
    if remaining == 2:
        a, b, c = take(), take(), take()
        out.append(((a << 2) | ((b & 0x30) >> 4)) & 0xFF)
        out.append((((b & 0x0F) << 4) | ((c & 0x3C) >> 2)) & 0xFF)
    elif remaining == 1:
        a, b = take(), take()
        out.append(((a << 2) | ((b & 0x30) >> 4)) & 0xFF)
    return bytes(out)