"""Build and open encrypted documents.

``encrypted`` decides per document whether data is stored as is (``plaintext``)
or sealed with secretbox, and records salt, nonce and KDF parameters so that
``decrypted`` can rebuild the key from nothing but the envelope and the
caller's password or key.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Optional, Union

from encdoc.core.exceptions import (
    DeserializationFailed,
    MalformedCiphertext,
    SerializationFailed,
    UnsupportedScheme,
)
from encdoc.core.models import (
    PLAINTEXT,
    SECRETBOX,
    EncryptedDocument,
    EncryptedOptions,
    EncryptionResult,
    PlaintextEncryption,
    SecretboxEncryption,
    SecretOptions,
)
from encdoc.security.crypto import check_nonce, new_nonce, open_box, seal
from encdoc.security.encoding import b64_decode, b64_encode, dumps_canonical, loads_canonical
from encdoc.security.kdf import DEFAULT_KDF_PARAMS, generate_salt, resolve_key

logger = logging.getLogger(__name__)


# ----------------------------------------------------------------------
# Blob level
# ----------------------------------------------------------------------

def encrypt(data: Any, opts: SecretOptions) -> str:
    """
    Seal ``data`` and return base64 of ``nonce || ciphertext``.

    Uses ``opts.nonce`` when given (only its length is checked, never reuse),
    otherwise a fresh random nonce.
    """
    nonce = opts.nonce if opts.nonce is not None else new_nonce()
    check_nonce(nonce)
    key = resolve_key(opts)
    try:
        message = dumps_canonical(data)
    except (TypeError, ValueError) as exc:
        raise SerializationFailed(f"Data is not JSON compatible: {exc}") from exc
    return b64_encode(seal(message, nonce, key))


def decrypt(message: str, opts: SecretOptions) -> Any:
    """Inverse of :func:`encrypt`."""
    key = resolve_key(opts)
    try:
        blob = b64_decode(message)
    except (TypeError, ValueError) as exc:
        raise MalformedCiphertext("Ciphertext is not valid base64") from exc

    plaintext = open_box(blob, key)
    try:
        return loads_canonical(plaintext)
    except ValueError as exc:
        # authenticated, yet not JSON: corruption on the writing side
        raise DeserializationFailed("Decrypted payload is not valid JSON") from exc


# ----------------------------------------------------------------------
# Envelope level
# ----------------------------------------------------------------------

def encrypted(data: Any, opts: Optional[EncryptedOptions] = None) -> EncryptionResult:
    """
    Wrap ``data`` in an envelope.

    ``opts`` is left untouched. When it carries no string salt a random one is
    generated; either way the salt used is returned next to the document so it
    can be stored or shown to the user.
    """
    opts = opts or EncryptedOptions()
    salt = opts.salt if isinstance(opts.salt, str) else generate_salt()

    if opts.type == PLAINTEXT:
        logger.debug("storing document as plaintext")
        return EncryptionResult(EncryptedDocument(PlaintextEncryption(), data), salt)
    if opts.type not in (SECRETBOX, None):
        raise UnsupportedScheme(f"Unsupported encryption type: {opts.type!r}")

    nonce = new_nonce()
    kdf_params = opts.kdf_params or DEFAULT_KDF_PARAMS
    secret = SecretOptions(
        password=opts.password,
        salt=salt,
        key=opts.key,
        nonce=nonce,
        kdf_params=kdf_params,
    )
    payload = encrypt(data, secret)
    logger.debug("sealed document with secretbox (kdf=%s)", kdf_params.algo)

    encryption = SecretboxEncryption(salt=salt, nonce=b64_encode(nonce), kdf_params=kdf_params)
    return EncryptionResult(EncryptedDocument(encryption, payload), salt)


def decrypted(
    document: Union[EncryptedDocument, Dict[str, Any]],
    opts: Optional[SecretOptions] = None,
) -> Any:
    """
    Recover the data held by ``document`` (an envelope or its wire dict).

    Plaintext documents need no key material. For secretbox the salt and KDF
    parameters come from the envelope; only ``password`` or ``key`` are taken
    from ``opts``.
    """
    if isinstance(document, dict):
        document = EncryptedDocument.from_dict(document)

    encryption = document.encryption
    if isinstance(encryption, PlaintextEncryption):
        return document.data
    if isinstance(encryption, SecretboxEncryption):
        opts = opts or SecretOptions()
        secret = SecretOptions(
            password=opts.password,
            salt=encryption.salt,
            key=opts.key,
            kdf_params=encryption.kdf_params,
        )
        return decrypt(document.data, secret)
    raise UnsupportedScheme(f"Unsupported encryption type: {getattr(encryption, 'type', None)!r}")


# ----------------------------------------------------------------------
# Async wrappers
# ----------------------------------------------------------------------

async def encrypted_async(data: Any, opts: Optional[EncryptedOptions] = None) -> EncryptionResult:
    """:func:`encrypted` in a worker thread, keeping the KDF off the event loop."""
    return await asyncio.to_thread(encrypted, data, opts)


async def decrypted_async(
    document: Union[EncryptedDocument, Dict[str, Any]],
    opts: Optional[SecretOptions] = None,
) -> Any:
    return await asyncio.to_thread(decrypted, document, opts)
