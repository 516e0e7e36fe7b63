"""Key resolution: turn SecretOptions into the raw key the cipher needs.

A raw ``key`` always wins. Without one, the key is derived from ``password`` and
``salt`` with scrypt (or argon2id when the parameters ask for it). Nothing is
cached: every call derives again, trading repeated KDF cost for not keeping
derived keys in memory between operations.
"""
import logging
from typing import Optional

from argon2.exceptions import HashingError
from argon2.low_level import Type, hash_secret_raw
from cryptography.hazmat.primitives.kdf.scrypt import Scrypt
from nacl.secret import SecretBox
from nacl.utils import random

from encdoc.core.exceptions import InvalidDocument, MissingKeyMaterial
from encdoc.core.models import ARGON2ID, KdfParams, SecretOptions
from encdoc.security.encoding import b64_encode, utf8_encode

logger = logging.getLogger(__name__)


# Written into every new secretbox envelope unless the caller passes their own.
# Changing these only affects new envelopes, old ones carry their own copy.
DEFAULT_KDF_PARAMS = KdfParams(
    n=16384,
    r=8,
    p=1,
    dk_len=SecretBox.KEY_SIZE,
    extra={"interruptStep": 0},
)


def generate_salt(length: int = SecretBox.NONCE_SIZE) -> str:
    """Return a fresh random salt as base64 text."""
    return b64_encode(random(length))


def generate_key(password: str | bytes, salt: str, params: Optional[KdfParams] = None) -> bytes:
    """
    Derive key bytes from a password and salt.

    The salt is used as UTF-8 text exactly as stored in the envelope; it is
    not base64 decoded first.
    """
    params = params or DEFAULT_KDF_PARAMS
    if isinstance(password, str):
        password = utf8_encode(password)
    salt_bytes = utf8_encode(salt)

    logger.debug("deriving %d-byte key with %s", params.dk_len, params.algo)
    try:
        return _derive(password, salt_bytes, params)
    except (ValueError, TypeError, OverflowError, HashingError) as exc:
        # parameters read from an envelope are untrusted input
        raise InvalidDocument(f"Unusable KDF parameters: {exc}") from exc


def _derive(password: bytes, salt_bytes: bytes, params: KdfParams) -> bytes:
    if params.algo == ARGON2ID:
        return hash_secret_raw(
            secret=password,
            salt=salt_bytes,
            time_cost=params.time_cost,
            memory_cost=params.memory_cost,
            parallelism=params.p,
            hash_len=params.dk_len,
            type=Type.ID,
        )

    kdf = Scrypt(salt=salt_bytes, length=params.dk_len, n=params.n, r=params.r, p=params.p)
    return kdf.derive(password)


def resolve_key(opts: SecretOptions) -> bytes:
    """Return the key for ``opts`` or raise ``MissingKeyMaterial``."""
    key = opts.key
    if not key and opts.password and opts.salt:
        return generate_key(opts.password, opts.salt, opts.kdf_params)
    if not key:
        raise MissingKeyMaterial("A key, or a password/salt to generate a key from, is required!")
    if isinstance(key, str):
        # raw UTF-8 bytes of the string, unlike salt and nonce which are base64
        return utf8_encode(key)
    return bytes(key)
