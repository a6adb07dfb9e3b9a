"""Encoding and decoding of the shareable secret codes."""

from __future__ import annotations

from .consts import CIPHER_KEY


class CodeError(ValueError):
    """Raised when a code cannot be decoded."""


def checksum(text: str) -> str:
    """Return the one-letter checksum of ``text`` (an uppercase ASCII letter)."""
    crc = 0
    for char in text:
        crc = (crc + (ord(char) & 0xFF)) & 0xFF
        crc = (crc << 1) & 0xFF
    return chr(ord("A") + crc % 26)


def _key_shifts(key: str) -> list[int]:
    if not key or not key.isascii() or not key.isalpha():
        raise CodeError("cipher key must be a non-empty run of ASCII letters")
    return [ord(k) - ord("A") for k in key.upper()]


def _shift_letters(text: str, key: str, sign: int) -> str:
    shifts = _key_shifts(key)
    out = []
    position = 0
    for char in text:
        if char.isascii() and char.isalpha():
            base = ord("A") if char.isupper() else ord("a")
            shift = shifts[position % len(shifts)]
            out.append(chr(base + (ord(char) - base + sign * shift) % 26))
            position += 1
        else:
            out.append(char)
    return "".join(out)


def vigenere_encipher(text: str, key: str) -> str:
    """Vigenère-encipher the ASCII letters of ``text``; other characters pass through."""
    return _shift_letters(text, key, 1)


def vigenere_decipher(text: str, key: str) -> str:
    """Undo :func:`vigenere_encipher` with the same key."""
    return _shift_letters(text, key, -1)


def _rotated_key(check: str) -> str:
    rotation = ord(check) % len(CIPHER_KEY)
    return CIPHER_KEY[rotation:] + CIPHER_KEY[:rotation]


def encode(text: str) -> str:
    """Encipher ``text`` and append its checksum letter."""
    check = checksum(text)
    return vigenere_encipher(text, _rotated_key(check)) + check


def decode(code: str) -> str:
    """Decipher a code made by :func:`encode`, verifying its checksum."""
    if not code:
        raise CodeError("Attempting to decode empty string")
    expected = code[-1]
    decoded = vigenere_decipher(code[:-1], _rotated_key(expected))
    if checksum(decoded) != expected:
        raise CodeError("CRC Failed")
    return decoded