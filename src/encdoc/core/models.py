"""
Data models for envelopes, their encryption schemes and the options used to build them
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Optional, Union

from encdoc.core.exceptions import InvalidDocument, UnsupportedScheme


SECRETBOX = "secretbox"
PLAINTEXT = "plaintext"

SCRYPT = "scrypt"
ARGON2ID = "argon2id"


@dataclass(frozen=True)
class KdfParams:
    """
    Cost parameters for deriving a key from a password and salt.

    For scrypt the wire form is ``{"N", "r", "p", "dkLen", ...}`` (or ``logN`` in
    place of ``N``, remembered in ``log_n``), for argon2id it is
    ``{"algo", "time", "memory", "parallelism", "dkLen", ...}``. Keys that are not
    understood (engine tuning such as ``interruptStep``, an explicit
    ``"algo": "scrypt"``) are kept in ``extra`` and written back unchanged so an
    envelope always carries its parameters verbatim.
    """

    algo: str = SCRYPT
    n: int = 16384
    r: int = 8
    p: int = 1
    dk_len: int = 32
    time_cost: int = 3
    memory_cost: int = 65536
    log_n: Optional[int] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.log_n is not None:
            object.__setattr__(self, "n", 2 ** self.log_n)

    def to_dict(self) -> Dict[str, Any]:
        if self.algo == ARGON2ID:
            out = {
                "algo": ARGON2ID,
                "time": self.time_cost,
                "memory": self.memory_cost,
                "parallelism": self.p,
                "dkLen": self.dk_len,
            }
        elif self.log_n is not None:
            out = {"logN": self.log_n, "r": self.r, "p": self.p, "dkLen": self.dk_len}
        else:
            out = {"N": self.n, "r": self.r, "p": self.p, "dkLen": self.dk_len}
        out.update(self.extra)
        return out

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "KdfParams":
        if not isinstance(data, dict):
            raise InvalidDocument("KDF parameters must be an object")
        rest = dict(data)
        # an explicit "algo": "scrypt" stays in extra
        algo = rest.get("algo", SCRYPT)
        try:
            if algo == SCRYPT:
                n, log_n = 16384, None
                if "N" in rest:
                    # a redundant logN next to N stays in extra
                    n = int(rest.pop("N"))
                elif "logN" in rest:
                    log_n = int(rest.pop("logN"))
                    if log_n < 1:
                        raise ValueError(f"logN must be positive, got {log_n}")
                return cls(
                    algo=SCRYPT,
                    n=n,
                    log_n=log_n,
                    r=int(rest.pop("r", 8)),
                    p=int(rest.pop("p", 1)),
                    dk_len=int(rest.pop("dkLen", 32)),
                    extra=rest,
                )
            if algo == ARGON2ID:
                rest.pop("algo")
                return cls(
                    algo=ARGON2ID,
                    time_cost=int(rest.pop("time", 3)),
                    memory_cost=int(rest.pop("memory", 65536)),
                    p=int(rest.pop("parallelism", 1)),
                    dk_len=int(rest.pop("dkLen", 32)),
                    extra=rest,
                )
        except (TypeError, ValueError) as exc:
            raise InvalidDocument(f"Invalid KDF parameters: {exc}") from exc
        raise InvalidDocument(f"Unsupported KDF algorithm: {algo!r}")


@dataclass
class SecretOptions:
    """Key material for a single encrypt/decrypt call."""

    password: Optional[str] = None
    salt: Optional[str] = None
    # A str key is used as its raw UTF-8 bytes, it is NOT base64 decoded.
    key: Optional[Union[str, bytes]] = None
    nonce: Optional[bytes] = None
    kdf_params: Optional[KdfParams] = None

    def __repr__(self) -> str:
        # never show secrets in tracebacks or logs
        return (
            f"{type(self).__name__}(password={'***' if self.password else None}, "
            f"salt={self.salt!r}, key={'***' if self.key else None})"
        )


@dataclass(repr=False)
class EncryptedOptions(SecretOptions):
    type: str = SECRETBOX


@dataclass(frozen=True)
class SecretboxEncryption:
    salt: str
    nonce: str
    kdf_params: Optional[KdfParams] = None

    type: ClassVar[str] = SECRETBOX

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"type": SECRETBOX, "salt": self.salt, "nonce": self.nonce}
        if self.kdf_params is not None:
            out["kdfParams"] = self.kdf_params.to_dict()
        return out


@dataclass(frozen=True)
class PlaintextEncryption:
    type: ClassVar[str] = PLAINTEXT

    def to_dict(self) -> Dict[str, Any]:
        return {"type": PLAINTEXT}


EncryptionScheme = Union[SecretboxEncryption, PlaintextEncryption]


@dataclass(frozen=True)
class EncryptedDocument:
    """
    The envelope: encryption metadata plus data.

    ``data`` is the original value for plaintext documents and a base64 string of
    ``nonce || ciphertext`` for secretbox documents.
    """

    encryption: EncryptionScheme
    data: Any

    @property
    def is_encrypted(self) -> bool:
        return isinstance(self.encryption, SecretboxEncryption)

    def to_dict(self) -> Dict[str, Any]:
        return {"encryption": self.encryption.to_dict(), "data": self.data}

    @classmethod
    def from_dict(cls, record: Dict[str, Any]) -> "EncryptedDocument":
        if not isinstance(record, dict):
            raise InvalidDocument("Envelope must be an object")
        encryption = record.get("encryption")
        if not isinstance(encryption, dict) or "data" not in record:
            raise InvalidDocument("Envelope requires 'encryption' and 'data' fields")

        scheme = encryption.get("type")
        if scheme == PLAINTEXT:
            return cls(encryption=PlaintextEncryption(), data=record["data"])
        if scheme == SECRETBOX:
            salt = encryption.get("salt")
            nonce = encryption.get("nonce")
            data = record["data"]
            if not isinstance(salt, str) or not isinstance(nonce, str) or not isinstance(data, str):
                raise InvalidDocument("Secretbox envelope requires string 'salt', 'nonce' and 'data'")
            # envelopes written before the field was renamed carry "scrypt"
            raw_params = encryption.get("kdfParams", encryption.get("scrypt"))
            params = KdfParams.from_dict(raw_params) if raw_params is not None else None
            return cls(
                encryption=SecretboxEncryption(salt=salt, nonce=nonce, kdf_params=params),
                data=data,
            )
        raise UnsupportedScheme(f"Unsupported encryption type: {scheme!r}")


@dataclass(frozen=True)
class EncryptionResult:
    """What ``encrypted`` hands back: the envelope and the salt it used."""

    document: EncryptedDocument
    salt: str
