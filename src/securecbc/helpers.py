# -*- coding: utf-8 -*-
"""
RU: Удобные функции для конкретного семейства (Blowfish, TripleDES).

EN: Per-family convenience API.

Each helper accepts either a CipherKey of the right family or raw key bytes.
``*_encrypt``/``*_decrypt`` switch on the plaintext type: ``str`` goes through
the text API (base64 ciphertext and IV), bytes through the byte API.

    >>> key = make_blowfish_key()
    >>> ct, iv = blowfish_encrypt("hello world", key)
    >>> blowfish_decrypt(ct, key, iv)
    'hello world'
"""

from __future__ import annotations

from typing import BinaryIO, Union, overload

from securecbc.config import CipherFamily
from securecbc.exceptions import InvalidInputError
from securecbc.keys import CipherKey, KeyMaterial, coerce_key, generate_key, key_from_bytes
from securecbc.streams import (
    CipherStream,
    StreamEncryptionResult,
    decrypt_stream,
    encrypt_stream,
)
from securecbc.symmetric import (
    EncryptionResult,
    TextEncryptionResult,
    decrypt_bytes,
    decrypt_text,
    encrypt_bytes,
    encrypt_text,
)
from securecbc.utils import BytesLike

AnyKey = Union[CipherKey, KeyMaterial]


def _encrypt(
    plaintext: Union[str, BytesLike], key: AnyKey, family: CipherFamily
) -> Union[TextEncryptionResult, EncryptionResult]:
    resolved = coerce_key(key, family)
    if isinstance(plaintext, str):
        return encrypt_text(plaintext, resolved)
    return encrypt_bytes(plaintext, resolved)


def _decrypt(
    ciphertext: Union[str, BytesLike],
    key: AnyKey,
    iv: Union[str, BytesLike],
    family: CipherFamily,
) -> Union[str, bytes]:
    resolved = coerce_key(key, family)
    if isinstance(ciphertext, str):
        if not isinstance(iv, str):
            raise InvalidInputError("text ciphertext requires a base64 text IV")
        return decrypt_text(ciphertext, resolved, iv)
    if isinstance(iv, str):
        raise InvalidInputError("byte ciphertext requires a bytes IV")
    return decrypt_bytes(ciphertext, resolved, iv)


# ==============================================================================
# BLOWFISH
# ==============================================================================


def make_blowfish_key() -> bytes:
    """Generate a random 128-bit Blowfish key as raw bytes."""
    return generate_key(CipherFamily.BLOWFISH).material


def blowfish_key_from_bytes(key: KeyMaterial) -> CipherKey:
    return key_from_bytes(key, CipherFamily.BLOWFISH)


@overload
def blowfish_encrypt(plaintext: str, key: AnyKey) -> TextEncryptionResult: ...


@overload
def blowfish_encrypt(plaintext: BytesLike, key: AnyKey) -> EncryptionResult: ...


def blowfish_encrypt(
    plaintext: Union[str, BytesLike], key: AnyKey
) -> Union[TextEncryptionResult, EncryptionResult]:
    return _encrypt(plaintext, key, CipherFamily.BLOWFISH)


@overload
def blowfish_decrypt(ciphertext: str, key: AnyKey, iv: str) -> str: ...


@overload
def blowfish_decrypt(ciphertext: BytesLike, key: AnyKey, iv: BytesLike) -> bytes: ...


def blowfish_decrypt(
    ciphertext: Union[str, BytesLike], key: AnyKey, iv: Union[str, BytesLike]
) -> Union[str, bytes]:
    return _decrypt(ciphertext, key, iv, CipherFamily.BLOWFISH)


def blowfish_encrypt_stream(source: BinaryIO, key: AnyKey) -> StreamEncryptionResult:
    return encrypt_stream(source, coerce_key(key, CipherFamily.BLOWFISH))


def blowfish_decrypt_stream(
    source: BinaryIO, key: AnyKey, iv: BytesLike
) -> CipherStream:
    return decrypt_stream(source, coerce_key(key, CipherFamily.BLOWFISH), iv)


# ==============================================================================
# TRIPLE DES
# ==============================================================================


def make_triple_des_key() -> bytes:
    """Generate a random 192-bit TripleDES key as raw bytes."""
    return generate_key(CipherFamily.TRIPLE_DES).material


def triple_des_key_from_bytes(key: KeyMaterial) -> CipherKey:
    return key_from_bytes(key, CipherFamily.TRIPLE_DES)


@overload
def triple_des_encrypt(plaintext: str, key: AnyKey) -> TextEncryptionResult: ...


@overload
def triple_des_encrypt(plaintext: BytesLike, key: AnyKey) -> EncryptionResult: ...


def triple_des_encrypt(
    plaintext: Union[str, BytesLike], key: AnyKey
) -> Union[TextEncryptionResult, EncryptionResult]:
    return _encrypt(plaintext, key, CipherFamily.TRIPLE_DES)


@overload
def triple_des_decrypt(ciphertext: str, key: AnyKey, iv: str) -> str: ...


@overload
def triple_des_decrypt(ciphertext: BytesLike, key: AnyKey, iv: BytesLike) -> bytes: ...


def triple_des_decrypt(
    ciphertext: Union[str, BytesLike], key: AnyKey, iv: Union[str, BytesLike]
) -> Union[str, bytes]:
    return _decrypt(ciphertext, key, iv, CipherFamily.TRIPLE_DES)


def triple_des_encrypt_stream(source: BinaryIO, key: AnyKey) -> StreamEncryptionResult:
    return encrypt_stream(source, coerce_key(key, CipherFamily.TRIPLE_DES))


def triple_des_decrypt_stream(
    source: BinaryIO, key: AnyKey, iv: BytesLike
) -> CipherStream:
    return decrypt_stream(source, coerce_key(key, CipherFamily.TRIPLE_DES), iv)


__all__ = [
    "make_blowfish_key",
    "blowfish_key_from_bytes",
    "blowfish_encrypt",
    "blowfish_decrypt",
    "blowfish_encrypt_stream",
    "blowfish_decrypt_stream",
    "make_triple_des_key",
    "triple_des_key_from_bytes",
    "triple_des_encrypt",
    "triple_des_decrypt",
    "triple_des_encrypt_stream",
    "triple_des_decrypt_stream",
]
