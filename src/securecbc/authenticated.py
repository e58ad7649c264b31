# -*- coding: utf-8 -*-
"""
RU: Необязательный режим с аутентификацией (encrypt-then-MAC, HMAC-SHA256).

EN: Optional authenticated mode on top of the CBC pipeline.

This is a separate API; encrypt_bytes/decrypt_bytes stay unauthenticated.

seal() encrypts with a fresh IV and appends an HMAC-SHA256 tag computed over
the family identifier, the IV and the ciphertext. open_sealed() verifies the
tag in constant time before any decryption happens, so wrong keys, wrong IVs
and tampered ciphertexts raise IntegrityError instead of yielding garbage.

Use a MAC key independent of the cipher key (at least 16 bytes).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Final

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes, hmac

from securecbc.config import MIN_MAC_KEY_SIZE
from securecbc.exceptions import IntegrityError, InvalidKeyLengthError
from securecbc.keys import CipherKey
from securecbc.symmetric import decrypt_bytes, encrypt_bytes
from securecbc.utils import BytesLike, ensure_bytes

_LOGGER: Final = logging.getLogger(__name__)

TAG_LEN: Final[int] = 32


@dataclass(frozen=True)
class SealedMessage:
    """Ciphertext, IV and HMAC-SHA256 tag; all three travel together."""

    ciphertext: bytes
    iv: bytes
    tag: bytes


def _validate_mac_key(mac_key: BytesLike) -> bytes:
    data = ensure_bytes(mac_key, "mac_key")
    if len(data) < MIN_MAC_KEY_SIZE:
        raise InvalidKeyLengthError("HMAC-SHA256", f">={MIN_MAC_KEY_SIZE}", len(data))
    return data


def _mac(mac_key: bytes, key: CipherKey, iv: bytes, ciphertext: bytes) -> hmac.HMAC:
    h = hmac.HMAC(mac_key, hashes.SHA256())
    h.update(key.family.value.encode("ascii") + b"\x00")
    h.update(iv)
    h.update(ciphertext)
    return h


def seal(plaintext: BytesLike, key: CipherKey, mac_key: BytesLike) -> SealedMessage:
    """
    Encrypt then authenticate.

    Args:
        plaintext: message bytes.
        key: Blowfish or TripleDES key.
        mac_key: HMAC key, at least 16 bytes.

    Returns:
        SealedMessage(ciphertext, iv, tag).
    """
    mk = _validate_mac_key(mac_key)
    result = encrypt_bytes(plaintext, key)
    tag = _mac(mk, key, result.iv, result.ciphertext).finalize()
    return SealedMessage(ciphertext=result.ciphertext, iv=result.iv, tag=tag)


def open_sealed(message: SealedMessage, key: CipherKey, mac_key: BytesLike) -> bytes:
    """
    Verify the tag, then decrypt.

    Raises:
        IntegrityError: if the tag is not TAG_LEN bytes or does not match.
        InvalidKeyLengthError: if ``mac_key`` is too short.
    """
    mk = _validate_mac_key(mac_key)
    iv = ensure_bytes(message.iv, "iv")
    ciphertext = ensure_bytes(message.ciphertext, "ciphertext")
    tag = ensure_bytes(message.tag, "tag")
    if len(tag) != TAG_LEN:
        _LOGGER.warning("HMAC tag has wrong length: %d", len(tag))
        raise IntegrityError(
            f"Tag must be {TAG_LEN} bytes",
            algorithm=key.config.algorithm_name,
            context={"expected_tag_size": TAG_LEN, "actual_tag_size": len(tag)},
        )
    try:
        _mac(mk, key, iv, ciphertext).verify(tag)
    except InvalidSignature as exc:
        _LOGGER.warning("HMAC verification failed")
        raise IntegrityError(
            "Message authentication failed", algorithm=key.config.algorithm_name
        ) from exc
    return decrypt_bytes(ciphertext, key, iv)


__all__ = [
    "TAG_LEN",
    "SealedMessage",
    "seal",
    "open_sealed",
]
