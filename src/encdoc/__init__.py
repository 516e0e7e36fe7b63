"""encdoc: self-describing encrypted JSON documents."""

from encdoc.core.exceptions import (
    EncDocError,
    MissingKeyMaterial,
    InvalidNonceLength,
    InvalidKeyLength,
    DecryptionFailed,
    MalformedCiphertext,
    SerializationFailed,
    DeserializationFailed,
    UnsupportedScheme,
    InvalidDocument,
)
from encdoc.core.models import (
    KdfParams,
    SecretOptions,
    EncryptedOptions,
    SecretboxEncryption,
    PlaintextEncryption,
    EncryptedDocument,
    EncryptionResult,
)
from encdoc.envelope import (
    encrypt,
    decrypt,
    encrypted,
    decrypted,
    encrypted_async,
    decrypted_async,
)
from encdoc.security import (
    generate_key,
    generate_salt,
    b64_encode,
    b64_decode,
    utf8_encode,
    utf8_decode,
)

__version__ = "0.1.0"

__all__ = [
    "EncDocError",
    "MissingKeyMaterial",
    "InvalidNonceLength",
    "InvalidKeyLength",
    "DecryptionFailed",
    "MalformedCiphertext",
    "SerializationFailed",
    "DeserializationFailed",
    "UnsupportedScheme",
    "InvalidDocument",
    "KdfParams",
    "SecretOptions",
    "EncryptedOptions",
    "SecretboxEncryption",
    "PlaintextEncryption",
    "EncryptedDocument",
    "EncryptionResult",
    "encrypt",
    "decrypt",
    "encrypted",
    "decrypted",
    "encrypted_async",
    "decrypted_async",
    "generate_key",
    "generate_salt",
    "b64_encode",
    "b64_decode",
    "utf8_encode",
    "utf8_decode",
]
