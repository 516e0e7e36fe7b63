"""Security helpers for encdoc: key resolution, the secretbox codec and transport encoding.

- scrypt (or argon2id) key derivation from password and salt
- XSalsa20-Poly1305 secretbox sealing into ``nonce || ciphertext`` blobs
- base64 / UTF-8 / JSON conversions shared by both
"""

from .kdf import DEFAULT_KDF_PARAMS, generate_salt, generate_key, resolve_key
from .crypto import KEY_SIZE, NONCE_SIZE, new_nonce, seal, open_box
from .encoding import b64_encode, b64_decode, utf8_encode, utf8_decode

__all__ = [
    "DEFAULT_KDF_PARAMS",
    "generate_salt",
    "generate_key",
    "resolve_key",
    "KEY_SIZE",
    "NONCE_SIZE",
    "new_nonce",
    "seal",
    "open_box",
    "b64_encode",
    "b64_decode",
    "utf8_encode",
    "utf8_decode",
]
