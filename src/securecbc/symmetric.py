# -*- coding: utf-8 -*-
"""
RU: Симметричное шифрование Blowfish/TripleDES в режиме CBC с PKCS#7 и
случайным IV для каждого вызова.

EN: CBC encryption for Blowfish and TripleDES with a fresh random IV per call.

⚠️ SECURITY NOTE: IV handling (breaking change from the fixed-IV helpers).
- Old: a constant, predictable IV for every message.
- New: an 8-byte IV from the shared secure random source for every encryption.
  The IV is returned next to the ciphertext and must be passed back to decrypt.

It is safe to transmit the IV in clear: without the key an attacker cannot
tell what was XORed into the first plaintext block.

This module provides:
- CbcCipher: stateless service object (DI-friendly).
- encrypt_bytes/decrypt_bytes: in-memory byte API.
- encrypt_text/decrypt_text: UTF-8 text in, base64 ciphertext and IV out.

⚠️ NO AUTHENTICATION:
- Decrypting with a wrong key or a wrong IV usually does NOT raise. It returns
  wrong bytes (a wrong IV garbles only the first block).
- PaddingOrLengthError is raised only when the ciphertext length is not a
  multiple of 8 or the final padding is structurally invalid. It is not an
  integrity check. Use securecbc.authenticated when tampering matters.

Thread-safety:
- No shared state apart from the random source, which is internally locked.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Final, Iterator

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, CipherContext, modes

from securecbc.config import BLOCK_SIZE, TEXT_ENCODING
from securecbc.exceptions import (
    EncryptionFailedError,
    InvalidInputError,
    PaddingOrLengthError,
)
from securecbc.keys import CipherKey
from securecbc.random_source import generate_iv
from securecbc.utils import (
    BytesLike,
    b64_decode,
    b64_encode,
    ensure_bytes,
    validate_iv_length,
)

_LOGGER: Final = logging.getLogger(__name__)

_BLOCK_BITS: Final[int] = BLOCK_SIZE * 8


@dataclass(frozen=True)
class EncryptionResult:
    """
    Ciphertext together with the IV it was produced with.

    The IV is not secret but is required for decryption; store or send it
    alongside the ciphertext. Unpacks like a pair: ``ct, iv = result``.
    """

    ciphertext: bytes
    iv: bytes

    def __iter__(self) -> Iterator[bytes]:
        return iter((self.ciphertext, self.iv))


@dataclass(frozen=True)
class TextEncryptionResult:
    """Base64 ciphertext and base64 IV. Unpacks like a pair."""

    ciphertext: str
    iv: str

    def __iter__(self) -> Iterator[str]:
        return iter((self.ciphertext, self.iv))


def new_padder() -> padding.PaddingContext:
    return padding.PKCS7(_BLOCK_BITS).padder()


def new_unpadder() -> padding.PaddingContext:
    return padding.PKCS7(_BLOCK_BITS).unpadder()


def new_encryptor(key: CipherKey, iv: bytes) -> CipherContext:
    """Initialise a CBC encryptor for ``key`` and ``iv``."""
    validate_iv_length(iv, key.config.algorithm_name)
    return Cipher(key.algorithm(), modes.CBC(iv)).encryptor()


def new_decryptor(key: CipherKey, iv: bytes) -> CipherContext:
    """Initialise a CBC decryptor for ``key`` and ``iv``."""
    validate_iv_length(iv, key.config.algorithm_name)
    return Cipher(key.algorithm(), modes.CBC(iv)).decryptor()


class CbcCipher:
    """
    CBC/PKCS#7 encryption with a fresh random IV per call.

    Methods:
        encrypt_bytes(plaintext, key) -> EncryptionResult
        decrypt_bytes(ciphertext, key, iv) -> bytes
        encrypt_text(plaintext, key) -> TextEncryptionResult
        decrypt_text(ciphertext, key, iv) -> str

    The algorithm (Blowfish or TripleDES) is taken from the key's family.

    Examples:
        >>> cipher = CbcCipher()
        >>> key = generate_key(CipherFamily.BLOWFISH)
        >>> result = cipher.encrypt_bytes(b"hello", key)
        >>> cipher.decrypt_bytes(result.ciphertext, key, result.iv)
        b'hello'
    """

    __slots__ = ()

    @staticmethod
    def _validate_key(key: CipherKey) -> None:
        if not isinstance(key, CipherKey):
            raise InvalidInputError(
                f"key must be a CipherKey, got {type(key).__name__}"
            )

    def encrypt_bytes(self, plaintext: BytesLike, key: CipherKey) -> EncryptionResult:
        """
        Encrypt bytes under a fresh IV.

        Args:
            plaintext: message of any length (padding absorbs alignment).
            key: Blowfish or TripleDES key.

        Returns:
            EncryptionResult(ciphertext, iv).

        Raises:
            EncryptionFailedError: on provider failure.
            EntropySourceError: if no IV can be drawn (fatal).
        """
        self._validate_key(key)
        pt = ensure_bytes(plaintext, "plaintext")
        iv = generate_iv()

        try:
            padder = new_padder()
            padded = padder.update(pt) + padder.finalize()
            encryptor = new_encryptor(key, iv)
            ciphertext = encryptor.update(padded) + encryptor.finalize()
        except Exception as exc:
            _LOGGER.error(
                "%s encryption failed: %s",
                key.config.algorithm_name,
                exc.__class__.__name__,
            )
            raise EncryptionFailedError(
                "CBC encryption failed", algorithm=key.config.algorithm_name
            ) from exc

        return EncryptionResult(ciphertext=ciphertext, iv=iv)

    def decrypt_bytes(
        self, ciphertext: BytesLike, key: CipherKey, iv: BytesLike
    ) -> bytes:
        """
        Decrypt bytes produced by :meth:`encrypt_bytes`.

        Args:
            ciphertext: CBC ciphertext (multiple of 8 bytes).
            key: the key used for encryption.
            iv: the 8-byte IV returned by encryption.

        Returns:
            Plaintext bytes. Wrong key/IV usually yields wrong bytes, not an error.

        Raises:
            InvalidIVLengthError: if ``iv`` is not 8 bytes.
            PaddingOrLengthError: on misaligned ciphertext or invalid padding.
        """
        self._validate_key(key)
        ct = ensure_bytes(ciphertext, "ciphertext")
        iv_bytes = ensure_bytes(iv, "iv")
        algorithm = key.config.algorithm_name

        decryptor = new_decryptor(key, iv_bytes)
        try:
            padded = decryptor.update(ct) + decryptor.finalize()
        except ValueError as exc:
            _LOGGER.warning("%s ciphertext length is not block aligned", algorithm)
            raise PaddingOrLengthError(
                f"Ciphertext length must be a multiple of {BLOCK_SIZE} bytes",
                algorithm=algorithm,
                context={"ciphertext_size": len(ct)},
            ) from exc

        try:
            unpadder = new_unpadder()
            return unpadder.update(padded) + unpadder.finalize()
        except ValueError as exc:
            _LOGGER.warning("%s padding check failed", algorithm)
            raise PaddingOrLengthError(
                "Invalid padding after decryption", algorithm=algorithm
            ) from exc

    def encrypt_text(self, plaintext: str, key: CipherKey) -> TextEncryptionResult:
        """
        Encrypt a string.

        The text is UTF-8 encoded; ciphertext and IV are returned as base64.
        """
        if not isinstance(plaintext, str):
            raise InvalidInputError(
                f"plaintext must be str, got {type(plaintext).__name__}"
            )
        result = self.encrypt_bytes(plaintext.encode(TEXT_ENCODING), key)
        return TextEncryptionResult(
            ciphertext=b64_encode(result.ciphertext), iv=b64_encode(result.iv)
        )

    def decrypt_text(self, ciphertext: str, key: CipherKey, iv: str) -> str:
        """
        Decrypt base64 ciphertext with a base64 IV back to a string.

        Malformed UTF-8 in the recovered bytes is replaced with U+FFFD, so a
        wrong IV or key gives garbled text rather than a decoding error.

        Raises:
            InvalidInputError: if ``ciphertext`` or ``iv`` is not valid base64.
            InvalidIVLengthError: if the decoded IV is not 8 bytes.
            PaddingOrLengthError: on misaligned ciphertext or invalid padding.
        """
        ct = b64_decode(ciphertext, "ciphertext")
        iv_bytes = b64_decode(iv, "iv")
        plain = self.decrypt_bytes(ct, key, iv_bytes)
        return plain.decode(TEXT_ENCODING, errors="replace")


_DEFAULT_CIPHER: Final[CbcCipher] = CbcCipher()


def encrypt_bytes(plaintext: BytesLike, key: CipherKey) -> EncryptionResult:
    """
    Functional helper returning EncryptionResult(ciphertext, iv).

    Example:
        >>> key = generate_key(CipherFamily.TRIPLE_DES)
        >>> ct, iv = encrypt_bytes(b"hi", key)
        >>> decrypt_bytes(ct, key, iv)
        b'hi'
    """
    return _DEFAULT_CIPHER.encrypt_bytes(plaintext, key)


def decrypt_bytes(ciphertext: BytesLike, key: CipherKey, iv: BytesLike) -> bytes:
    """Functional helper for :meth:`CbcCipher.decrypt_bytes`."""
    return _DEFAULT_CIPHER.decrypt_bytes(ciphertext, key, iv)


def encrypt_text(plaintext: str, key: CipherKey) -> TextEncryptionResult:
    return _DEFAULT_CIPHER.encrypt_text(plaintext, key)


def decrypt_text(ciphertext: str, key: CipherKey, iv: str) -> str:
    return _DEFAULT_CIPHER.decrypt_text(ciphertext, key, iv)


__all__ = [
    "EncryptionResult",
    "TextEncryptionResult",
    "CbcCipher",
    "new_padder",
    "new_unpadder",
    "new_encryptor",
    "new_decryptor",
    "encrypt_bytes",
    "decrypt_bytes",
    "encrypt_text",
    "decrypt_text",
]
