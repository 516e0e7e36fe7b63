"""Secretbox codec producing self-contained ``nonce || ciphertext`` blobs.

Layout of a sealed blob:
- NONCE_SIZE bytes: nonce
- remaining bytes: XSalsa20-Poly1305 box (authentication tag followed by ciphertext)

Sizes are taken from :class:`nacl.secret.SecretBox`.
"""
from nacl.exceptions import CryptoError
from nacl.secret import SecretBox
from nacl.utils import random

from encdoc.core.exceptions import (
    DecryptionFailed,
    InvalidKeyLength,
    InvalidNonceLength,
    MalformedCiphertext,
)


KEY_SIZE = SecretBox.KEY_SIZE
NONCE_SIZE = SecretBox.NONCE_SIZE


def new_nonce() -> bytes:
    return random(NONCE_SIZE)


def check_nonce(nonce: bytes) -> None:
    if not isinstance(nonce, (bytes, bytearray)) or len(nonce) != NONCE_SIZE:
        raise InvalidNonceLength(f"Invalid nonce, must be bytes of length {NONCE_SIZE}")


def check_key(key: bytes) -> None:
    if len(key) != KEY_SIZE:
        raise InvalidKeyLength(f"Invalid key, must be {KEY_SIZE} bytes long (got {len(key)})")


def seal(plaintext: bytes, nonce: bytes, key: bytes) -> bytes:
    """Encrypt ``plaintext`` and return ``nonce || box``."""
    check_nonce(nonce)
    check_key(key)
    nonce = bytes(nonce)
    box = SecretBox(bytes(key))
    return nonce + box.encrypt(plaintext, nonce).ciphertext


def open_box(blob: bytes, key: bytes) -> bytes:
    """
    Verify and decrypt a blob produced by :func:`seal`.

    A wrong key and a modified blob raise the same ``DecryptionFailed``.
    """
    if len(blob) < NONCE_SIZE:
        raise MalformedCiphertext("Ciphertext too short to contain nonce")
    check_key(key)

    nonce, ct = blob[:NONCE_SIZE], blob[NONCE_SIZE:]
    if len(ct) < SecretBox.MACBYTES:
        # no room for a tag, so nothing can authenticate
        raise DecryptionFailed("Could not decrypt message")
    box = SecretBox(bytes(key))
    try:
        return box.decrypt(ct, nonce)
    except CryptoError as exc:
        raise DecryptionFailed("Could not decrypt message") from exc
