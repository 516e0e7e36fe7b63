"""
Exceptions for encdoc
Everything derives from EncDocError so callers have a single thing to catch
"""


class EncDocError(Exception):
    # general container for errors
    pass


class MissingKeyMaterial(EncDocError):
    # raised when neither a key nor a password/salt pair is available
    pass


class InvalidNonceLength(EncDocError):
    # raised when a caller supplied nonce has the wrong size for the cipher
    pass


class InvalidKeyLength(EncDocError):
    # raised when a resolved key has the wrong size for the cipher
    pass


class DecryptionFailed(EncDocError):
    # raised on a failed authentication tag check (wrong key OR tampered data)
    pass


class MalformedCiphertext(DecryptionFailed):
    # raised when the stored blob cannot hold a nonce or is not valid base64
    pass


class SerializationFailed(EncDocError):
    # raised when the data to encrypt is not JSON compatible
    pass


class DeserializationFailed(EncDocError):
    # raised when decrypted bytes are not valid JSON (corruption after auth)
    pass


class UnsupportedScheme(EncDocError):
    # raised for an unknown encryption.type
    pass


class InvalidDocument(EncDocError):
    # raised when a wire record is missing required fields
    pass
